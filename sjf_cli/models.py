from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple, Union

Number = Union[int, float]

IDLE = "IDLE"


@dataclass(frozen=True)
class ProcessInput:
    pid: str
    arrival_time: Number
    burst_time: Number


@dataclass(frozen=True)
class TimelineSlot:
    """
    One contiguous slice of the timeline, either a process run or an idle gap.
    """

    pid: str
    start: Number
    end: Number

    @property
    def is_idle(self) -> bool:
        return self.pid == IDLE

    @property
    def duration(self) -> Number:
        return self.end - self.start


@dataclass(frozen=True)
class ProcessResult:
    pid: str
    arrival_time: Number
    burst_time: Number
    start_time: Number
    completion_time: Number
    waiting_time: Number
    turnaround_time: Number


@dataclass(frozen=True)
class SimulationResult:
    timeline: Tuple[TimelineSlot, ...] = field(default_factory=tuple)
    details: Tuple[ProcessResult, ...] = field(default_factory=tuple)
    avg_waiting_time: float = 0.0
    avg_turnaround_time: float = 0.0
    cpu_utilization: float = 0.0
    cpu_busy_time: Number = 0
    makespan: Number = 0

    def details_by_pid(self) -> Tuple[ProcessResult, ...]:
        """Details re-sorted by process id, the order tables display them in."""
        return tuple(sorted(self.details, key=lambda d: d.pid))
