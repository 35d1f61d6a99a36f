"""Call orchestration: engine routing, the host entrypoint and the call log.

The entrypoint lives in :mod:`orchestrator.entrypoint`; it is not re-exported
here because the port layer imports :mod:`orchestrator.router`.
"""

from . import log
from .router import ResolvedEngine, RouterError, resolve

__all__ = ["ResolvedEngine", "RouterError", "log", "resolve"]
