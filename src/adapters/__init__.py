"""Adapters between validated host arguments and engine inputs."""

from __future__ import annotations

from .graph import Graph, SolverParams, adapt, build_graph, build_params

__all__ = ["Graph", "SolverParams", "adapt", "build_graph", "build_params"]
