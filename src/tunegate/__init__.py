"""tunegate - typed HTTP facade over a paginated music catalog API."""

__version__ = "0.1.0"
