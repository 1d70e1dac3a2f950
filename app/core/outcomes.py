"""
Tagged results returned by item service operations.

The HTTP layer maps ``Outcome.kind`` to a status code; nothing below the
router raises for expected failures.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

VALIDATION_MESSAGE = "Validation failed"
CONFLICT_MESSAGE = "Duplicate SKU"
DUPLICATE_SKU_MESSAGE = "This SKU already exists"
NOT_FOUND_MESSAGE = "Item not found"
INTERNAL_MESSAGE = "Internal server error"
INVALID_BODY_MESSAGE = "Invalid request body"


class OutcomeKind(str, Enum):
    OK = "ok"
    CREATED = "created"
    DELETED = "deleted"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    value: Any = None
    message: Optional[str] = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.kind in (OutcomeKind.OK, OutcomeKind.CREATED, OutcomeKind.DELETED)

    @classmethod
    def success(cls, value: Any = None) -> "Outcome":
        return cls(OutcomeKind.OK, value=value)

    @classmethod
    def created(cls, value: Any) -> "Outcome":
        return cls(OutcomeKind.CREATED, value=value)

    @classmethod
    def deleted(cls) -> "Outcome":
        return cls(OutcomeKind.DELETED)

    @classmethod
    def invalid(cls, errors: dict[str, str]) -> "Outcome":
        return cls(OutcomeKind.VALIDATION, message=VALIDATION_MESSAGE, errors=dict(errors))

    @classmethod
    def conflict(cls) -> "Outcome":
        return cls(
            OutcomeKind.CONFLICT,
            message=CONFLICT_MESSAGE,
            errors={"sku": DUPLICATE_SKU_MESSAGE},
        )

    @classmethod
    def not_found(cls) -> "Outcome":
        return cls(OutcomeKind.NOT_FOUND, message=NOT_FOUND_MESSAGE)

    @classmethod
    def internal(cls) -> "Outcome":
        return cls(OutcomeKind.INTERNAL, message=INTERNAL_MESSAGE)


__all__ = [
    "CONFLICT_MESSAGE",
    "DUPLICATE_SKU_MESSAGE",
    "INTERNAL_MESSAGE",
    "INVALID_BODY_MESSAGE",
    "NOT_FOUND_MESSAGE",
    "Outcome",
    "OutcomeKind",
    "VALIDATION_MESSAGE",
]
