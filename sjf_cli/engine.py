from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Tuple

from .errors import ComputationError, InvalidInputError
from .metrics import compute_aggregates
from .models import IDLE, ProcessInput, ProcessResult, SimulationResult, TimelineSlot

logger = logging.getLogger(__name__)


def _check_number(pid: str, name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidInputError(f"Process {pid!r}: {name} must be a finite number, got {value!r}", reason="invalid_number")


def validate_processes(processes: Iterable[ProcessInput]) -> Tuple[ProcessInput, ...]:
    """
    Check a process list and return it as a tuple.

    Raises InvalidInputError on the first problem found; nothing is scheduled
    for a rejected list.
    """
    procs = tuple(processes)
    if not procs:
        raise InvalidInputError("At least one process is required", reason="empty")

    seen: set[str] = set()
    for p in procs:
        if not isinstance(p.pid, str) or not p.pid:
            raise InvalidInputError(f"Process id must be a non-empty string, got {p.pid!r}", reason="invalid_id")
        if p.pid == IDLE:
            raise InvalidInputError(f"Process id {IDLE!r} is reserved for idle time", reason="invalid_id")
        if p.pid in seen:
            raise InvalidInputError(f"Duplicate process id: {p.pid}", reason="duplicate_id")
        seen.add(p.pid)

        _check_number(p.pid, "arrival time", p.arrival_time)
        _check_number(p.pid, "burst time", p.burst_time)

        if p.burst_time <= 0:
            raise InvalidInputError(
                f"Process {p.pid}: burst time must be positive, got {p.burst_time}",
                reason="non_positive_burst",
            )
        if p.arrival_time < 0:
            raise InvalidInputError(
                f"Process {p.pid}: arrival time must be non-negative, got {p.arrival_time}",
                reason="negative_arrival",
            )

    return procs


def simulate(processes: Iterable[ProcessInput]) -> SimulationResult:
    """
    Shortest Job First (non-preemptive).

    Time starts at the earliest arrival. At each decision point, among
    processes that have arrived and are not yet completed, the one with the
    smallest burst time runs to completion (ties: earlier arrival, then
    smaller id). When nothing is ready an IDLE slot covers the gap up to the
    next arrival.
    """
    procs = validate_processes(processes)

    time = min(p.arrival_time for p in procs)
    timeline: List[TimelineSlot] = []
    details: List[ProcessResult] = []
    completed: Dict[str, ProcessResult] = {}

    # Each process contributes one run slot and at most one idle slot before it.
    max_iterations = 2 * len(procs)
    iterations = 0

    while len(completed) < len(procs):
        iterations += 1
        if iterations > max_iterations:
            raise ComputationError(
                f"Scheduling loop did not finish after {max_iterations} steps "
                f"({len(completed)}/{len(procs)} processes completed)"
            )

        pending = [p for p in procs if p.pid not in completed]
        ready = [p for p in pending if p.arrival_time <= time]

        if not ready:
            if not pending:
                raise ComputationError(f"No pending process left to wait for at time {time}")
            next_arrival = min(p.arrival_time for p in pending)
            logger.debug("CPU idle from %s to %s", time, next_arrival)
            timeline.append(TimelineSlot(pid=IDLE, start=time, end=next_arrival))
            time = next_arrival
            continue

        p = min(ready, key=lambda x: (x.burst_time, x.arrival_time, x.pid))

        start_time = time
        end_time = start_time + p.burst_time
        logger.debug("t=%s: run %s (burst %s, %d ready)", start_time, p.pid, p.burst_time, len(ready))

        timeline.append(TimelineSlot(pid=p.pid, start=start_time, end=end_time))

        result = ProcessResult(
            pid=p.pid,
            arrival_time=p.arrival_time,
            burst_time=p.burst_time,
            start_time=start_time,
            completion_time=end_time,
            waiting_time=start_time - p.arrival_time,
            turnaround_time=end_time - p.arrival_time,
        )
        details.append(result)
        completed[p.pid] = result
        time = end_time

    result = compute_aggregates(timeline, details)
    logger.info(
        "Simulated %d processes: makespan %s, avg waiting %.2f, utilization %.2f%%",
        len(procs),
        result.makespan,
        result.avg_waiting_time,
        result.cpu_utilization,
    )
    return result
