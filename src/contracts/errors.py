"""Error taxonomy for aborted adapter calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple, Type

KIND_ARGUMENT_COUNT = "argument_count"
KIND_TYPE = "type"
KIND_RANGE = "range"
KIND_CONSISTENCY = "consistency"


@dataclass(frozen=True)
class ValidationIssue:
    """Single failed check: which rule, which argument(s), what the host sees."""

    code: str
    msg: str
    path: str
    kind: str


class CallAbortedError(RuntimeError):
    """Raised when a call is rejected before the engine is invoked.

    ``str(exc)`` is the message surfaced to the host, verbatim.
    """

    kind = ""

    def __init__(self, issue: ValidationIssue) -> None:
        self.issue = issue
        super().__init__(issue.msg)

    @property
    def code(self) -> str:
        return self.issue.code


class ArgumentCountError(CallAbortedError):
    kind = KIND_ARGUMENT_COUNT


class ArgumentTypeError(CallAbortedError):
    kind = KIND_TYPE


class ArgumentRangeError(CallAbortedError):
    kind = KIND_RANGE


class ArgumentConsistencyError(CallAbortedError):
    kind = KIND_CONSISTENCY


_ERROR_TYPES: Dict[str, Type[CallAbortedError]] = {
    KIND_ARGUMENT_COUNT: ArgumentCountError,
    KIND_TYPE: ArgumentTypeError,
    KIND_RANGE: ArgumentRangeError,
    KIND_CONSISTENCY: ArgumentConsistencyError,
}

# code -> (host message, argument path, kind)
ISSUES: Dict[str, Tuple[str, str, str]] = {
    "nargin.count": ("Not enough input arguments.", "nargin", KIND_ARGUMENT_COUNT),
    "nargout.count": ("Too many output arguments.", "nargout", KIND_ARGUMENT_COUNT),
    "num_vs.type": ("num_vs must be an int.", "num_vs", KIND_TYPE),
    "num_vs.range": ("num_vs must be > 0.", "num_vs", KIND_RANGE),
    "edges.type": ("heads and tails must be int vectors.", "heads,tails", KIND_TYPE),
    "edges.size": ("heads and tails must be of the same size.", "heads,tails", KIND_CONSISTENCY),
    "alpha_tol.type": ("alpha and tol must be real scalars.", "alpha,tol", KIND_TYPE),
    "alpha.range": ("alpha must be in (0, 1).", "alpha", KIND_RANGE),
    "tol.range": ("tol must be > 0.", "tol", KIND_RANGE),
    "uv.type": ("u and v must be real vectors.", "u,v", KIND_TYPE),
    "uv.size": ("u and v must be the same size as the matrix, or empty.", "u,v", KIND_CONSISTENCY),
    "method.type": ("method must be a string", "method", KIND_TYPE),
}


def make_issue(code: str) -> ValidationIssue:
    """Construct the :class:`ValidationIssue` registered under ``code``."""

    msg, path, kind = ISSUES[code]
    return ValidationIssue(code=code, msg=msg, path=path, kind=kind)


def make_error(code: str) -> CallAbortedError:
    """Return the exception instance matching ``code``'s kind."""

    issue = make_issue(code)
    return _ERROR_TYPES[issue.kind](issue)


__all__ = [
    "ArgumentConsistencyError",
    "ArgumentCountError",
    "ArgumentRangeError",
    "ArgumentTypeError",
    "CallAbortedError",
    "ISSUES",
    "KIND_ARGUMENT_COUNT",
    "KIND_CONSISTENCY",
    "KIND_RANGE",
    "KIND_TYPE",
    "ValidationIssue",
    "make_error",
    "make_issue",
]
