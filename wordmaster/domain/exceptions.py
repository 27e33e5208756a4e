"""Domain-layer exceptions.

Engines and *Operations classes raise these instead of HTTPException.
main.py maps each one to a status code: not found 404, validation 400,
storage 503.
"""


class DomainError(Exception):
    """Base for failures a batch caller can record per item and move past."""


class EntityNotFoundError(DomainError):
    """Missing, or owned by another user (never distinguished). Maps to HTTP 404."""

    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found" if entity_id else f"{entity} not found")


class DomainValidationError(DomainError):
    """Out-of-range memory level, unknown filter or counter. Maps to HTTP 400."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class StorageError(DomainError):
    """Database unavailable or write rejected. Maps to HTTP 503."""

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        msg = f"Storage failure during {operation}"
        super().__init__(f"{msg}: {detail}" if detail else msg)
