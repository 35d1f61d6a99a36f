"""Argument checks for the PageRank call boundary.

Checks run in a fixed order and the first failing rule aborts the call, so
the reported message depends only on the earliest invalid argument.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

import numpy as np

from hostarray.descriptor import (
    CLASS_CHAR,
    CLASS_DOUBLE,
    CLASS_INT32,
    CLASS_INT64,
    ArrayDescriptor,
    describe,
)

from .errors import make_error

EXPECTED_NARGIN = 8
MAX_NARGOUT = 1

_INT_CLASSES = frozenset({CLASS_INT32, CLASS_INT64})


def is_int_scalar(a: ArrayDescriptor) -> bool:
    return a.class_id in _INT_CLASSES and a.numel == 1


def is_real_scalar(a: ArrayDescriptor) -> bool:
    return a.class_id == CLASS_DOUBLE and not a.is_complex and a.numel == 1


def is_vector(a: ArrayDescriptor) -> bool:
    return a.ndim == 2 and min(a.dims) <= 1


def is_int_vector(a: ArrayDescriptor) -> bool:
    return a.class_id in _INT_CLASSES and is_vector(a)


def is_real_vector(a: ArrayDescriptor) -> bool:
    return a.class_id == CLASS_DOUBLE and not a.is_complex and is_vector(a)


def is_string(a: ArrayDescriptor) -> bool:
    return a.class_id == CLASS_CHAR and is_vector(a)


@dataclass(frozen=True)
class ValidatedCall:
    """Arguments that passed every check, already extracted from the host."""

    num_vs: int
    heads: np.ndarray
    tails: np.ndarray
    alpha: float
    tol: float
    u: Optional[np.ndarray]
    v: Optional[np.ndarray]
    method: str


def _optional_vector(a: ArrayDescriptor) -> Optional[np.ndarray]:
    return None if a.numel == 0 else a.view()


def validate_call(args: Sequence[Any], nargout: int = 1) -> ValidatedCall:
    """Check the positional call arguments and extract their values.

    Raises a :class:`~contracts.errors.CallAbortedError` subclass on the first
    violated rule.
    """

    if len(args) != EXPECTED_NARGIN:
        raise make_error("nargin.count")
    if nargout > MAX_NARGOUT:
        raise make_error("nargout.count")

    raw_num_vs, raw_heads, raw_tails, raw_alpha, raw_tol, raw_u, raw_v, raw_method = (
        describe(arg) for arg in args
    )

    if not is_int_scalar(raw_num_vs):
        raise make_error("num_vs.type")
    num_vs = int(raw_num_vs.scalar())
    if num_vs <= 0:
        raise make_error("num_vs.range")

    if not is_int_vector(raw_heads) or not is_int_vector(raw_tails):
        raise make_error("edges.type")
    if raw_heads.numel != raw_tails.numel:
        raise make_error("edges.size")

    if not is_real_scalar(raw_alpha) or not is_real_scalar(raw_tol):
        raise make_error("alpha_tol.type")
    alpha = float(raw_alpha.scalar())
    tol = float(raw_tol.scalar())
    if not 0 < alpha < 1:
        raise make_error("alpha.range")
    if not tol > 0:
        raise make_error("tol.range")

    if not is_real_vector(raw_u) or not is_real_vector(raw_v):
        raise make_error("uv.type")
    u_size = raw_u.numel
    v_size = raw_v.numel
    if (u_size != 0 and u_size != num_vs) or (v_size != 0 and v_size != num_vs):
        raise make_error("uv.size")

    if not is_string(raw_method):
        raise make_error("method.type")
    method = raw_method.text()
    if not method:
        raise make_error("method.type")

    return ValidatedCall(
        num_vs=num_vs,
        heads=raw_heads.view(),
        tails=raw_tails.view(),
        alpha=alpha,
        tol=tol,
        u=_optional_vector(raw_u),
        v=_optional_vector(raw_v),
        method=method,
    )


__all__ = [
    "EXPECTED_NARGIN",
    "MAX_NARGOUT",
    "ValidatedCall",
    "is_int_scalar",
    "is_int_vector",
    "is_real_scalar",
    "is_real_vector",
    "is_string",
    "is_vector",
    "validate_call",
]
