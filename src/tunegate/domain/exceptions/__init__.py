"""Domain exceptions."""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    # Hey future me, message is stored as an attribute so handlers can read it without
    # parsing str(exception). Never raise this directly - pick a subclass so callers can
    # catch precisely.
    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class ValidationError(DomainException):
    """Input validation failed.

    Raised when a domain object is built from invalid values (empty artist id,
    page number below 1, etc).

    HTTP Status: 422
    """

    pass


class EntityNotFoundException(DomainException):
    """Raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(f"{entity_type} with id {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class ResourceNotFound(EntityNotFoundException):
    """The catalog explicitly says the requested resource does not exist.

    Raised by the catalog client on a 404 or on the empty-body convention the
    catalog uses for unknown artists. A valid payload that merely has zero items
    is NOT this - that's an empty result.

    HTTP Status: 404
    """

    def __init__(self, resource_kind: str, resource_id: str) -> None:
        super().__init__(f"artist {resource_kind}", resource_id)
        self.message = f"artist {resource_kind} not found"
        self.resource_kind = resource_kind
        self.resource_id = resource_id


class ExternalServiceError(DomainException):
    """External service (the music catalog) failed.

    HTTP Status: 502 (Bad Gateway)
    """

    pass


class UpstreamUnavailable(ExternalServiceError):
    """Transport failure or non-success HTTP status from the catalog API.

    Covers connection errors, timeouts and any non-2xx answer except 404.
    Never retried here - the whole aggregation is aborted.

    HTTP Status: 503
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamShapeMismatch(ExternalServiceError):
    """Catalog response could not be decoded into the expected page shape.

    Also raised when pages of one logical query disagree with each other
    (total changes mid-sequence, page size drifts) because continuing would
    silently corrupt the collection.

    HTTP Status: 502
    """

    pass


__all__ = [
    "DomainException",
    "ValidationError",
    "EntityNotFoundException",
    "ResourceNotFound",
    "ExternalServiceError",
    "UpstreamUnavailable",
    "UpstreamShapeMismatch",
]
