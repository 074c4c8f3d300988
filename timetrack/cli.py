"""
timetrack command line.

Usage:
    timetrack                         Launch the interactive view (TTY only)
    timetrack interactive | i         Launch the interactive view
    timetrack create <name> [--url U] Create a new task
    timetrack start <id|name>         Start tracking a task
    timetrack pause <id|name>         Pause a running task
    timetrack stop <id|name>          Stop a task (pauses it first if running)
    timetrack unstop <id|name>        Return a stopped task to paused
    timetrack list [--running|--paused|--stopped|--all]
    timetrack status                  Show running and paused tasks
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import Settings, load_settings
from .errors import NotFoundError, TimetrackError
from .lifecycle import Tracker
from .logging_setup import setup_logging
from .models import PAUSED, RUNNING, STOPPED, Task
from .queries import TaskQueries, TaskSummary
from .store import RecordStore

logger = logging.getLogger(__name__)

RULE = "─" * 60


def _find(queries: TaskQueries, ref: str, include_stopped: bool = False) -> Task:
    """Resolve ref, preferring active tasks over stopped ones when both match."""
    task = queries.resolve(ref)
    if task is None and include_stopped:
        task = queries.resolve(ref, include_stopped=True)
    if task is None:
        raise NotFoundError(f"Task not found: {ref}")
    return task


def _print_task(summary: TaskSummary) -> None:
    print(f"ID: {summary.id} | {summary.name}")
    print(f"Status: {summary.status} | Time: {summary.elapsed}")
    if summary.url:
        print(f"URL: {summary.url}")
    created = summary.created_at.astimezone().date().isoformat() if summary.created_at else "unknown"
    print(f"Sessions: {summary.session_count} | Created: {created}")
    print(RULE)


def cmd_create(args: argparse.Namespace, tracker: Tracker, queries: TaskQueries) -> int:
    task = tracker.create_task(args.name, args.url or "")
    print("✓ Task created successfully!")
    print(f"ID: {task.id}")
    print(f"Name: {task.name}")
    if task.url:
        print(f"URL: {task.url}")
    print(f"Status: {task.status}")
    return 0


def cmd_start(args: argparse.Namespace, tracker: Tracker, queries: TaskQueries) -> int:
    task = tracker.start(_find(queries, args.ref, include_stopped=True).id)
    print(f"✓ Started tracking time for task: {task.name}")
    return 0


def cmd_pause(args: argparse.Namespace, tracker: Tracker, queries: TaskQueries) -> int:
    task = tracker.pause(_find(queries, args.ref).id)
    print(f"⏸ Paused tracking time for task: {task.name}")
    print(f"Total time: {queries.summarize(task).total_time}")
    return 0


def cmd_stop(args: argparse.Namespace, tracker: Tracker, queries: TaskQueries) -> int:
    task = tracker.stop(_find(queries, args.ref, include_stopped=True).id)
    print(f"⏹ Stopped tracking time for task: {task.name}")
    print(f"Total time: {queries.summarize(task).total_time}")
    return 0


def cmd_unstop(args: argparse.Namespace, tracker: Tracker, queries: TaskQueries) -> int:
    task = tracker.unstop(_find(queries, args.ref, include_stopped=True).id)
    print(f"✓ Unstopped task: {task.name}")
    print(f"Status: {task.status}")
    return 0


def cmd_list(args: argparse.Namespace, tracker: Tracker, queries: TaskQueries) -> int:
    if args.running:
        tasks, title = queries.by_status(RUNNING), "Running Tasks"
    elif args.paused:
        tasks, title = queries.by_status(PAUSED), "Paused Tasks"
    elif args.stopped:
        tasks, title = queries.by_status(STOPPED), "Stopped Tasks"
    else:
        tasks, title = queries.all(), "All Tasks"

    if not tasks:
        print("No tasks found.")
        return 0

    print(f"\n{title}:")
    print(RULE)
    for task in tasks:
        _print_task(queries.summarize(task))
    return 0


def cmd_status(args: argparse.Namespace, tracker: Tracker, queries: TaskQueries) -> int:
    running = queries.by_status(RUNNING)
    paused = queries.by_status(PAUSED)

    print("\n📊 Current Status:")
    print("═" * 50)

    if running:
        print("\n🟢 Currently Running:")
        for task in running:
            summary = queries.summarize(task)
            print(f"  {summary.id}: {summary.name} ({summary.elapsed})")

    if paused:
        print("\n⏸ Paused:")
        for task in paused:
            summary = queries.summarize(task)
            print(f"  {summary.id}: {summary.name} ({summary.elapsed})")

    if not running and not paused:
        print('\nNo active tasks. Use "timetrack create <name>" to get started!')
    return 0


def cmd_interactive(settings: Settings) -> int:
    from .tui.app import run

    return run(settings)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timetrack",
        description="CLI tool for tracking time on tasks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--data-file",
        type=Path,
        help="Path to the data file (default: ~/.timetracker-data.json)",
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("interactive", aliases=["i"], help="Start interactive mode")

    p = sub.add_parser("create", help="Create a new task")
    p.add_argument("name", help="task name")
    p.add_argument("-u", "--url", help="task URL")

    for name, help_text in (
        ("start", "Start time tracking for a task"),
        ("pause", "Pause time tracking for a task"),
        ("stop", "Stop time tracking for a task"),
        ("unstop", "Unstop a task and return it to paused state"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("ref", help="task ID or name")

    p = sub.add_parser("list", help="List tasks")
    group = p.add_mutually_exclusive_group()
    group.add_argument("-r", "--running", action="store_true", help="show only running tasks")
    group.add_argument("-p", "--paused", action="store_true", help="show only paused tasks")
    group.add_argument("-s", "--stopped", action="store_true", help="show only stopped tasks")
    group.add_argument("-a", "--all", action="store_true", help="show all tasks")

    sub.add_parser("status", help="Show current status of all active tasks")
    return parser


COMMANDS = {
    "create": cmd_create,
    "start": cmd_start,
    "pause": cmd_pause,
    "stop": cmd_stop,
    "unstop": cmd_unstop,
    "list": cmd_list,
    "status": cmd_status,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings(args.data_file)

    interactive = args.command in ("interactive", "i") or args.command is None
    setup_logging(
        log_dir=settings.log_dir,
        console=not interactive,
        file_level=settings.log_level,
    )

    if interactive:
        if not sys.stdin.isatty():
            print(
                "Time tracker requires an interactive terminal. Use specific commands instead.",
                file=sys.stderr,
            )
            print('Example: timetrack create "task name" or timetrack start 1', file=sys.stderr)
            return 1
        return cmd_interactive(settings)

    store = RecordStore(settings.data_file)
    tracker = Tracker(store)
    queries = TaskQueries(store)

    try:
        return COMMANDS[args.command](args, tracker, queries)
    except TimetrackError as e:
        logger.debug("Command %s failed: %s", args.command, e)
        print(f"✗ Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
