"""Port facades towards external collaborators."""

from __future__ import annotations

from .solver_port import EngineContractError, SolverGateway, SolverResult

__all__ = [
    "EngineContractError",
    "SolverGateway",
    "SolverResult",
]
