"""Validation Error System

Failed requirements are data inside a result tree, never exceptions. The
types here exist for two other situations:

- RequirementTreeError: a requirement tree cannot be parsed or merged
  (a caller programming error).
- ValidationError: a failed NodeResult converted at a boundary, for callers
  that prefer raising over inspecting results.

Error Format (ValidationError.to_dict):
{
    "error": {
        "type": "validation_error",
        "message": "Validation failed",
        "error_count": 2,
        "errors": [
            {"field": "age", "message": "You are underage"},
            {"field": "address.city", "message": "Required"}
        ]
    }
}
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from formcheck.errors import AppError, ErrorCode


@dataclass(frozen=True, slots=True)
class ValidationErrorDetail:
    """A single failed requirement.

    - field_path: dotted path to the offending field (e.g., "address.city")
    - message: the requirement's failure message (may be empty)
    """
    field_path: str
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for API responses."""
        return {"field": self.field_path, "message": self.message}


@dataclass
class ValidationError(Exception):
    """Validation error with one detail per failed requirement."""
    message: str
    details: list[ValidationErrorDetail] = field(default_factory=list)

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        if not self.details: return self.message
        if len(self.details) == 1: return f"{(d := self.details[0]).field_path}: {d.message}"
        return f"{self.message} ({len(self.details)} errors)"

    @property
    def field_errors(self) -> dict[str, list[str]]:
        """Group messages by field path."""
        result: dict[str, list[str]] = {}
        for detail in self.details: result.setdefault(detail.field_path, []).append(detail.message)
        return result

    @property
    def first_error(self) -> ValidationErrorDetail | None: return self.details[0] if self.details else None

    def to_app_error(self) -> AppError:
        """Convert to AppError for error handling system."""
        if len(self.details) == 1:
            d = self.details[0]
            return AppError(code=ErrorCode.E2000_VALIDATION_GENERIC, message=f"{d.field_path}: {d.message}",
                metadata={"field": d.field_path})

        return AppError(code=ErrorCode.E2000_VALIDATION_GENERIC, message=f"Validation failed: {len(self.details)} errors",
            metadata={"error_count": len(self.details), "errors": [d.to_dict() for d in self.details]})

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for API responses."""
        return {"error": {"type": "validation_error", "message": self.message,
            "error_count": len(self.details), "errors": [d.to_dict() for d in self.details]}}


@dataclass
class RequirementTreeError(Exception):
    """A requirement tree could not be parsed or merged.

    path is the dotted location of the offending entry ("" for the root).
    """
    message: str
    path: str = ""
    code: ErrorCode = ErrorCode.E2100_INVALID_REQUIREMENT_TREE

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        location = self.path or "<root>"
        return f"[{self.code.name}] {location}: {self.message}"

    def to_app_error(self) -> AppError:
        return AppError(code=self.code, message=self.message, metadata={"path": self.path})
