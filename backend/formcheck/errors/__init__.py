"""Error Handling

- AppError: immutable error record with code, message and metadata
- ErrorCode: hierarchical error code taxonomy

Usage:
    from formcheck.errors import AppError, ErrorCode

    error = AppError(ErrorCode.E2102_MERGE_CONFLICT, "address: leaf vs group")
    payload = error.to_dict()
"""
from .types import AppError, ErrorCode

__all__ = [
    "AppError",
    "ErrorCode",
]
