"""
Errors raised while building the star schema.

All builder errors derive from StarSchemaError so callers can catch
the whole family. A raised error means the build is aborted; no
partially built frame should be loaded.
"""

from typing import Any, Optional


class StarSchemaError(Exception):
    """Base class for star schema build errors."""
    pass


class ReferentialIntegrityViolation(StarSchemaError):
    """A record references an id with no matching record."""

    def __init__(self, entity: str, missing_id: Any, referenced_by: Optional[str] = None):
        self.entity = entity
        self.missing_id = missing_id
        self.referenced_by = referenced_by
        message = f"{entity} id={missing_id!r} not found"
        if referenced_by:
            message += f" (referenced by {referenced_by})"
        super().__init__(message)


class ArithmeticViolation(StarSchemaError, ArithmeticError):
    """A measure could not be computed, e.g. division by a zero price."""
    pass


class PreconditionViolation(StarSchemaError):
    """Malformed input: missing field, wrong type or broken data contract."""

    def __init__(self, entity: str, key: Any, detail: str, field: Optional[str] = None):
        self.entity = entity
        self.key = key
        self.field = field
        location = f"{entity} id={key!r}"
        if field:
            location += f" field={field!r}"
        super().__init__(f"{location}: {detail}")


def require_text(value: Any, entity: str, key: Any, field: str) -> str:
    """Return value if it is a str, raise PreconditionViolation otherwise."""
    if not isinstance(value, str):
        raise PreconditionViolation(
            entity, key, f"expected str, got {type(value).__name__}", field=field
        )
    return value
