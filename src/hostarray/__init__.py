"""Host array descriptors and result marshaling."""

from __future__ import annotations

from .descriptor import (
    CLASS_CHAR,
    CLASS_DOUBLE,
    CLASS_INT32,
    CLASS_INT64,
    ArrayDescriptor,
    describe,
)
from .marshaler import to_host_column

__all__ = [
    "ArrayDescriptor",
    "CLASS_CHAR",
    "CLASS_DOUBLE",
    "CLASS_INT32",
    "CLASS_INT64",
    "describe",
    "to_host_column",
]
