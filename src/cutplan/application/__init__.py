"""Application layer - configuration and commands."""

from .commands import (
    BatchOptimizeCommand,
    OptimizeCutsCommand,
    OptimizeResult,
    load_settings,
)

__all__ = [
    "BatchOptimizeCommand",
    "OptimizeCutsCommand",
    "OptimizeResult",
    "load_settings",
]
