from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List, Mapping

from .errors import InvalidInputError
from .models import Number, ProcessInput

_PID_KEYS = ("pid", "id")
_ARRIVAL_KEYS = ("arrival_time", "arrivalTime", "arrival")
_BURST_KEYS = ("burst_time", "burstTime", "burst")


def load_workload(path: str | Path) -> List[ProcessInput]:
    """
    Load a workload from a JSON or CSV file into a list of ProcessInput objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def load_workload_text(text: str) -> List[ProcessInput]:
    """
    Parse a JSON workload document, either a list of process objects or an
    object with a ``processes`` list.
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidInputError(f"Workload is not valid JSON: {exc}", reason="invalid_entry") from exc
    return _processes_from_json(raw)


def _load_json(path: Path) -> List[ProcessInput]:
    with path.open("r", encoding="utf-8") as f:
        return load_workload_text(f.read())


def _load_csv(path: Path) -> List[ProcessInput]:
    processes: List[ProcessInput] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for idx, row in enumerate(reader, start=1):
            processes.append(_process_from_mapping(row, idx))
    return processes


def _processes_from_json(raw) -> List[ProcessInput]:
    if isinstance(raw, dict) and "processes" in raw:
        raw = raw["processes"]

    if not isinstance(raw, list):
        raise InvalidInputError("JSON workload must be a list of process objects", reason="invalid_entry")

    return [_process_from_mapping(entry, idx) for idx, entry in enumerate(raw, start=1)]


def _first(mapping: Mapping, keys) -> object:
    for key in keys:
        value = mapping.get(key)
        if value not in (None, ""):
            return value
    raise KeyError(keys[0])


def _to_number(value) -> Number:
    if isinstance(value, bool):
        raise TypeError(f"boolean is not a time value: {value!r}")
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


def _process_from_mapping(mapping, position: int) -> ProcessInput:
    if not isinstance(mapping, Mapping):
        raise InvalidInputError(f"Invalid process entry: {mapping!r}", reason="invalid_entry")

    present = [mapping[key] for key in _PID_KEYS if key in mapping]
    if present:
        # A blank id is kept blank for the engine to reject.
        pid_val = next((v for v in present if v not in (None, "")), "")
    else:
        # Unlabelled entries are numbered by position.
        pid_val = f"P{position}"

    try:
        arrival_time = _to_number(_first(mapping, _ARRIVAL_KEYS))
        burst_time = _to_number(_first(mapping, _BURST_KEYS))
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidInputError(f"Invalid process entry: {mapping!r}", reason="invalid_entry") from exc

    return ProcessInput(pid=str(pid_val).strip(), arrival_time=arrival_time, burst_time=burst_time)
