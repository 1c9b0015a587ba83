"""
SJF CLI package.

Simulates non-preemptive Shortest-Job-First CPU scheduling and renders the
resulting timeline and metrics in the terminal.
"""

from .engine import simulate
from .errors import ComputationError, InvalidInputError, SchedulerError
from .models import IDLE, ProcessInput, ProcessResult, SimulationResult, TimelineSlot

__all__ = [
    "IDLE",
    "ComputationError",
    "InvalidInputError",
    "ProcessInput",
    "ProcessResult",
    "SchedulerError",
    "SimulationResult",
    "TimelineSlot",
    "simulate",
]
