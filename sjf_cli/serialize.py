from __future__ import annotations

import json
from typing import Any, Dict

from .models import SimulationResult


def result_to_dict(result: SimulationResult) -> Dict[str, Any]:
    """
    Convert a result into the plain-dict shape consumed by front ends.

    Numbers are kept at full precision; rounding is left to whoever displays
    them.
    """
    return {
        "timeline": [{"id": s.pid, "start": s.start, "end": s.end} for s in result.timeline],
        "details": [
            {
                "id": d.pid,
                "startTime": d.start_time,
                "completionTime": d.completion_time,
                "waitingTime": d.waiting_time,
                "turnaroundTime": d.turnaround_time,
                "arrivalTime": d.arrival_time,
                "burstTime": d.burst_time,
            }
            for d in result.details
        ],
        "avgWaitingTime": result.avg_waiting_time,
        "avgTurnaroundTime": result.avg_turnaround_time,
        "cpuUtilization": result.cpu_utilization,
    }


def error_to_dict(exc: Exception) -> Dict[str, Any]:
    return {"error": str(exc), "reason": getattr(exc, "reason", "invalid_input")}


def dumps(obj: Dict[str, Any], indent: int | None = 2) -> str:
    return json.dumps(obj, indent=indent, ensure_ascii=False)
