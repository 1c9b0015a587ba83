from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .engine import simulate
from .errors import ComputationError
from .gantt import build_rich_gantt, format_time, render_gantt
from .models import ProcessInput, SimulationResult
from .serialize import dumps, error_to_dict, result_to_dict
from .workload_io import load_workload, load_workload_text

logger = logging.getLogger("sjf_cli")

EXIT_INVALID_INPUT = 2
EXIT_COMPUTATION_ERROR = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sjf-cli",
        description="Non-preemptive Shortest-Job-First CPU scheduling simulator.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase log output (-v for info, -vv for every scheduling decision).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Simulate SJF scheduling on a workload.")
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file, or '-' to read JSON from stdin.",
    )
    run_parser.add_argument(
        "--format",
        "-f",
        choices=["table", "text", "json"],
        default="table",
        help="Output format (default: table).",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Show a simple time-stepped simulation in the terminal.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=0.3,
        help="Seconds to wait between steps when --step is used (default: 0.3).",
    )

    return parser


def configure_logging(verbosity: int) -> None:
    """
    Send log records to stderr through rich. SJF_CLI_LOG_LEVEL, when set,
    wins over the -v flags.
    """
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    env_level = os.environ.get("SJF_CLI_LOG_LEVEL")
    if env_level:
        level = logging.getLevelName(env_level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger("sjf_cli")
    root.handlers[:] = [handler]
    root.setLevel(level)


def _read_processes(workload: str) -> List[ProcessInput]:
    if workload == "-":
        return load_workload_text(sys.stdin.read())
    return load_workload(Path(workload))


def _print_result(result: SimulationResult) -> None:
    console = Console()

    panel, time_marks = build_rich_gantt(result.timeline, width=max(20, console.width - 4))
    console.print(panel)
    if time_marks:
        console.print(" " + time_marks)

    console.print()

    headers = ["PID", "Arrive", "Burst", "Start", "Complete", "Wait", "Turnaround"]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h == "PID" else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.details_by_pid():
        proc_table.add_row(
            escape(p.pid),
            format_time(p.arrival_time),
            format_time(p.burst_time),
            format_time(p.start_time),
            format_time(p.completion_time),
            format_time(p.waiting_time),
            format_time(p.turnaround_time),
        )

    console.print(proc_table)
    console.print()

    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{result.avg_waiting_time:.2f}")
    sys_table.add_row("Avg turnaround", f"{result.avg_turnaround_time:.2f}")
    sys_table.add_row("CPU busy time", format_time(result.cpu_busy_time))
    sys_table.add_row("Makespan", format_time(result.makespan))
    sys_table.add_row("CPU utilization", f"{result.cpu_utilization:.2f}%")

    console.print(sys_table)


def _print_text(result: SimulationResult) -> None:
    lines = [render_gantt(result.timeline), "", "Process Details:", "PID\tArr\tBurst\tStart\tComp\tWait\tTurn"]
    for p in result.details_by_pid():
        values = [
            p.arrival_time,
            p.burst_time,
            p.start_time,
            p.completion_time,
            p.waiting_time,
            p.turnaround_time,
        ]
        lines.append("\t".join([p.pid] + [format_time(v) for v in values]))

    lines.extend(
        [
            "",
            f"Average Waiting Time: {result.avg_waiting_time:.2f}",
            f"Average Turnaround Time: {result.avg_turnaround_time:.2f}",
            f"CPU Utilization: {result.cpu_utilization:.2f}%",
        ]
    )
    print("\n".join(lines))


def _animate_result(result: SimulationResult, delay: float) -> None:
    """
    Simple time-stepped textual simulation using the computed schedule.
    """
    console = Console()
    timeline = result.timeline
    if not timeline:
        console.print("[red]No execution to animate.[/red]")
        return

    start = int(timeline[0].start)
    end = int(timeline[-1].end)
    console.print(f"[bold]Simulating SJF[/bold] (duration {format_time(result.makespan)} time units)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    for t in range(start, end + 1):
        bar = ""
        running = None
        for sl in timeline:
            if sl.start <= t < sl.end:
                running = sl.pid
                if not sl.is_idle:
                    bar = f"[green]{'█' * int(t - sl.start + 1)}[/green]"
                break
        msg = f"t={t:2d}: " + escape(running or "done")
        console.print(msg + (" " + bar if bar else ""), markup=True, highlight=False)
        time.sleep(delay)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console(stderr=True)

    if args.command == "run":
        try:
            processes = _read_processes(args.workload)
            logger.info("Loaded %d processes from %s", len(processes), args.workload)
            result = simulate(processes)
        except ComputationError as exc:
            logger.error("Simulation failed: %s", exc)
            if args.format == "json":
                print(dumps(error_to_dict(exc)))
            return EXIT_COMPUTATION_ERROR
        except (ValueError, OSError) as exc:
            if args.format == "json":
                print(dumps(error_to_dict(exc)))
            else:
                console.print(f"Error: {exc}", style="red", markup=False, highlight=False)
            return EXIT_INVALID_INPUT

        if args.format == "json":
            print(dumps(result_to_dict(result)))
            return 0

        if args.step:
            try:
                _animate_result(result, delay=args.step_delay)
            except KeyboardInterrupt:
                console.print("[yellow]Animation skipped.[/yellow]")

        if args.format == "text":
            _print_text(result)
        else:
            _print_result(result)
        return 0

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
