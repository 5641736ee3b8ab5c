"""Domain layer: exceptions, value objects, DTOs and ports."""
