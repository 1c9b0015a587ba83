from __future__ import annotations

from typing import Sequence

from .models import ProcessResult, SimulationResult, TimelineSlot


def summarize_process_metrics(details: Sequence[ProcessResult]) -> dict:
    """
    Return averages of the per-process waiting and turnaround times.
    """
    if not details:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0}

    n = len(details)
    return {
        "avg_waiting": sum(d.waiting_time for d in details) / n,
        "avg_turnaround": sum(d.turnaround_time for d in details) / n,
    }


def compute_aggregates(timeline: Sequence[TimelineSlot], details: Sequence[ProcessResult]) -> SimulationResult:
    """
    Build the final result from a finished timeline and its per-process details.

    CPU utilization is the busy share of the timeline, as a percentage, and
    is exactly 100 when the timeline has no idle slot. The makespan runs from
    the first slot's start to the last slot's end.
    """
    if not timeline:
        return SimulationResult(details=tuple(details))

    cpu_busy_time = sum(d.burst_time for d in details)
    makespan = timeline[-1].end - timeline[0].start

    idle_time = sum(s.duration for s in timeline if s.is_idle)
    if not idle_time:
        cpu_utilization = 100.0
    else:
        # Both shares come from the same slots so float times stay consistent.
        run_time = sum(s.duration for s in timeline if not s.is_idle)
        cpu_utilization = 100.0 * run_time / ((run_time + idle_time) or 1)

    summary = summarize_process_metrics(details)
    return SimulationResult(
        timeline=tuple(timeline),
        details=tuple(details),
        avg_waiting_time=summary["avg_waiting"],
        avg_turnaround_time=summary["avg_turnaround"],
        cpu_utilization=cpu_utilization,
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
    )
