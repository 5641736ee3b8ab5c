"""Application layer: use cases orchestrating the catalog client."""
