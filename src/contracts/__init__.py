"""Call contracts: argument validation, error taxonomy and schemas."""

from __future__ import annotations

from .errors import (
    ArgumentConsistencyError,
    ArgumentCountError,
    ArgumentRangeError,
    ArgumentTypeError,
    CallAbortedError,
    ValidationIssue,
)
from .validator import ValidatedCall, validate_call

__all__ = [
    "ArgumentConsistencyError",
    "ArgumentCountError",
    "ArgumentRangeError",
    "ArgumentTypeError",
    "CallAbortedError",
    "ValidatedCall",
    "ValidationIssue",
    "validate_call",
]
