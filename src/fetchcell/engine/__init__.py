"""Fetch-cell evaluation engine.

Public API:
- FetchOrchestrator: evaluates a cell (entry point)
- FetchExecutor: executes one directive
- BindingApplier, plan_binding: binding modes
- ProgressView: index-stable progress snapshot
"""

from fetchcell.engine.binding import (
    BindingApplier,
    BindingCommand,
    BindVariable,
    ExecuteScript,
    InstallStylesheet,
    plan_binding,
)
from fetchcell.engine.executor import FetchExecutor
from fetchcell.engine.orchestrator import FetchOrchestrator
from fetchcell.engine.progress import ProgressView

__all__ = [
    "BindVariable",
    "BindingApplier",
    "BindingCommand",
    "ExecuteScript",
    "FetchExecutor",
    "FetchOrchestrator",
    "InstallStylesheet",
    "ProgressView",
    "plan_binding",
]
