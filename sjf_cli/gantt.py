from __future__ import annotations

import re
from typing import Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import IDLE, Number, TimelineSlot

PALETTE = ["red", "green", "yellow", "blue", "magenta", "cyan", "bright_red", "bright_green"]
IDLE_STYLE = "grey50"
DEFAULT_WIDTH = 72

_DIGITS = re.compile(r"\d+")


def pid_color(pid: str) -> str:
    """
    Display color for a process id.

    The digits in the id select the palette entry (P1 -> first, P2 ->
    second, ...), so a process keeps its color across runs.
    """
    if pid == IDLE:
        return IDLE_STYLE
    digits = "".join(_DIGITS.findall(pid))
    index = int(digits) if digits else 0
    return PALETTE[(index - 1) % len(PALETTE)] if index > 0 else PALETTE[0]


def format_time(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render_gantt(slices: Sequence[TimelineSlot]) -> str:
    """
    Plain-text Gantt chart, one ``| PID (start -> end) `` cell per slot.
    """
    if not slices:
        return "(no execution)"

    cells = "".join(f"| {sl.pid} ({format_time(sl.start)} -> {format_time(sl.end)}) " for sl in slices)
    return "\n".join(["Gantt Chart:", cells + "|"])


def _cell_width(sl: TimelineSlot, scale: float) -> int:
    return max(1, round(sl.duration * scale))


def build_rich_gantt(slices: Sequence[TimelineSlot], width: int = DEFAULT_WIDTH) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.

    One cell per time unit while the schedule fits in ``width`` cells;
    longer schedules are scaled down to fit, every slot keeping at least one
    cell.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    span = slices[-1].end - slices[0].start
    scale = 1.0 if span <= width else width / span

    timeline = Text()
    labels = Text()
    first = format_time(slices[0].start)
    time_marks = first
    used = len(first)
    position = 0

    for sl in slices:
        cells = _cell_width(sl, scale)

        if sl.pid == IDLE:
            timeline.append("." * cells, style=IDLE_STYLE)
            labels.append(IDLE[:cells].ljust(cells), style="dim")
        else:
            timeline.append(" " * cells, style=f"on {pid_color(sl.pid)}")
            labels.append(sl.pid[:cells].ljust(cells), style="bold")

        position += cells
        mark = format_time(sl.end)
        # Right-align each mark under the end of its slot, keeping a space between marks.
        pad = max(1, position - used - len(mark) + 1)
        time_marks += " " * pad + mark
        used += pad + len(mark)

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
