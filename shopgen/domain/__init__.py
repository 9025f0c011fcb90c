"""Domain Layer: value objects, errors, events and ports."""
