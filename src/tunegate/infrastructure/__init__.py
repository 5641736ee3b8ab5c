"""Infrastructure layer: catalog integration, HTTP pool, observability, lifecycle."""
