from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error raised by the scheduler."""


class InvalidInputError(SchedulerError, ValueError):
    """
    The process list was rejected before scheduling started.

    ``reason`` is a short machine-readable code (``empty``, ``duplicate_id``,
    ``non_positive_burst``, ``negative_arrival``, ``invalid_id``,
    ``invalid_number``, ``invalid_entry``).
    """

    def __init__(self, message: str, reason: str = "invalid_input") -> None:
        super().__init__(message)
        self.reason = reason


class ComputationError(SchedulerError, RuntimeError):
    """An internal invariant of the scheduling loop did not hold."""

    reason = "computation_error"
