"""Pipeline layer - Detection cycles and display sinks."""

from .driver import PipelineDriver, CycleResult, format_status
from .display import ConsoleDisplay, LogDisplay

__all__ = [
    "PipelineDriver",
    "CycleResult",
    "format_status",
    "ConsoleDisplay",
    "LogDisplay",
]
