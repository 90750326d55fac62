"""Shared validation helpers."""

from __future__ import annotations

from .errors import ContractViolationError


def validate_call_count(value: object, *, name: str = "count") -> int:
    """Ensure *value* is usable as an invocation count and return it."""
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{name} must be an integer, got {type(value).__name__}"
        raise ContractViolationError(msg)

    if value < 0:
        msg = f"{name} must be >= 0, got {value}"
        raise ContractViolationError(msg)
    return value
