"""Error Types

Typed error codes and an immutable error record for reporting failures
outside the validation result tree (malformed requirement trees, merge
conflicts, boundary conversion of failed results).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ErrorCode(Enum):
    """Hierarchical error code taxonomy.

    E20xx: Failed validation results
    E21xx: Malformed or conflicting requirement trees
    """
    # Validation (E20xx)
    E2000_VALIDATION_GENERIC = 2000

    # Requirement trees (E21xx)
    E2100_INVALID_REQUIREMENT_TREE = 2100
    E2101_INVALID_REQUIREMENT = 2101
    E2102_MERGE_CONFLICT = 2102

    @property
    def category(self) -> str:
        """Human-readable error category."""
        return "validation" if self.value < 2100 else "schema"


@dataclass(frozen=True, slots=True)
class AppError:
    """Error record with code, message and structured metadata."""
    code: ErrorCode
    message: str
    metadata: dict = field(default_factory=dict)
    cause: Exception | None = None

    def with_metadata(self, **kwargs) -> AppError:
        """Create new error with additional metadata."""
        return AppError(
            code=self.code,
            message=self.message,
            metadata={**self.metadata, **kwargs},
            cause=self.cause,
        )

    def to_dict(self) -> dict:
        """Serialize error for API responses."""
        return {
            "error": {
                "code": self.code.name,
                "code_num": self.code.value,
                "message": self.message,
                "category": self.code.category,
                "metadata": self.metadata,
            }
        }

    def __str__(self) -> str:
        return f"[{self.code.name}] {self.message}"
