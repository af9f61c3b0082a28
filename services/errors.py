"""Domain errors raised by the service layer and mapped to HTTP by middlewares/error_handler.py."""

from typing import List, Optional


class DomainError(Exception):
    """Base class for expected, caller-facing failures."""

    code = "DOMAIN_ERROR"

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = list(errors) if errors else [message]


class ValidationFailed(DomainError):
    """One or more field rules were violated; nothing was written."""

    code = "VALIDATION_ERROR"

    def __init__(self, errors: List[str]):
        super().__init__("Validation failed", errors)


class NotFoundError(DomainError):
    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConstraintViolation(DomainError):
    """A write would break uniqueness or a restrict-delete rule."""

    code = "CONSTRAINT_VIOLATION"

    def __init__(self, errors: List[str]):
        super().__init__("Constraint violation", errors)
