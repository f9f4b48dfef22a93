# src/timekeep/cli/commands.py

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from ..core.state import AppState
from ..errors import ValidationError
from ..tasks.task_models import ClosedTask, OpenTask
from ..tasks.windows import ViewShortcut
from .parsing import format_local, human_duration, parse_local_datetime

CommandHandler = Callable[[AppState, argparse.Namespace], str]
ArgumentsBuilder = Callable[[argparse.ArgumentParser], None]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Command:
    name: str
    handler: CommandHandler
    help_text: str
    configure: ArgumentsBuilder


class CommandRegistry:
    """Subcommand registry: builds the argparse tree and dispatches to handlers."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        configure: ArgumentsBuilder,
    ) -> None:
        self._commands[name.lower()] = Command(name.lower(), handler, help_text, configure)

    def names(self) -> list[str]:
        return list(self._commands)

    def add_subparsers(self, parser: argparse.ArgumentParser) -> None:
        sub = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)
        for cmd in self._commands.values():
            p = sub.add_parser(cmd.name, help=cmd.help_text, description=cmd.help_text)
            cmd.configure(p)

    def handle(self, state: AppState, args: argparse.Namespace) -> str:
        cmd = self._commands.get(str(getattr(args, "command", "")).lower())
        if cmd is None:
            raise ValidationError(f"unknown command: {getattr(args, 'command', None)!r}")
        logger.debug("Dispatching command=%s", cmd.name)
        return cmd.handler(state, args)


registry = CommandRegistry()


# ---- rendering ----


def describe_open(state: AppState, task: OpenTask) -> str:
    text = (
        f"project: {task.project_name}, "
        f"started at: {format_local(task.start_time, state.clock)}, "
        f"duration {human_duration(task.duration(state.clock.now()))}"
    )
    if task.description:
        text += f", description: {task.description}"
    return text


def describe_closed(state: AppState, task: ClosedTask) -> str:
    text = (
        f"project: {task.project_name}, "
        f"started at: {format_local(task.start_time, state.clock)}, "
        f"ended at: {format_local(task.end_time, state.clock)}, "
        f"duration {human_duration(task.duration())}"
    )
    if task.description:
        text += f", description: {task.description}"
    return text


def render_tasks(state: AppState, title: str, tasks: Sequence[ClosedTask]) -> str:
    if not tasks:
        return f"{title}: no tasks"
    lines = [f"{title}:"]
    for i, t in enumerate(tasks, start=1):
        lines.append(f"{i}. {describe_closed(state, t)}")

    total = sum((t.duration() for t in tasks), start=timedelta())
    lines.append(f"Total: {human_duration(total)} across {len(tasks)} task(s)")
    return "\n".join(lines)


def _parse_optional(state: AppState, raw: str | None) -> datetime | None:
    return parse_local_datetime(raw, state.clock) if raw is not None else None


# ---- handlers ----


def cmd_start(state: AppState, args: argparse.Namespace) -> str:
    start_time = _parse_optional(state, args.start_time)
    lines: list[str] = []

    if args.overwrite:
        task = state.lifecycle.start(args.project_name, start_time, args.description)
    else:
        ended, task = state.lifecycle.switch(args.project_name, start_time, args.description)
        if ended is not None:
            lines.append(f"Ended task: {describe_closed(state, ended)}")

    lines.append(f"Started task: {describe_open(state, task)}")
    return "\n".join(lines)


def cmd_end(state: AppState, args: argparse.Namespace) -> str:
    end_time = _parse_optional(state, args.end_time)
    task = state.lifecycle.end(end_time, discard=args.discard)
    if task is None:
        return "No current task to end"
    verb = "Discarded" if args.discard else "Ended"
    return f"{verb} task: {describe_closed(state, task)}"


def cmd_add(state: AppState, args: argparse.Namespace) -> str:
    task = state.lifecycle.add(
        args.project_name,
        parse_local_datetime(args.start_time, state.clock),
        parse_local_datetime(args.end_time, state.clock),
        args.description,
    )
    return f"Added to database: {describe_closed(state, task)}"


def cmd_view(state: AppState, args: argparse.Namespace) -> str:
    if args.range_from is not None or args.range_to is not None:
        if args.range_from is None or args.range_to is None:
            raise ValidationError("--from and --to must be given together")
        start = parse_local_datetime(args.range_from, state.clock)
        end = parse_local_datetime(args.range_to, state.clock)
        return render_tasks(
            state,
            f"Tasks from {format_local(start, state.clock)} to {format_local(end, state.clock)}",
            state.lifecycle.view_range(start, end),
        )

    shortcut = ViewShortcut.parse(args.shortcut or ViewShortcut.CURRENT)
    result = state.lifecycle.view_filtered(shortcut)
    if isinstance(result, OpenTask):
        return f"Current task: {describe_open(state, result)}"
    return render_tasks(state, f"Tasks ({shortcut.value})", result)


# ---- argument definitions ----


def _start_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("project_name", help="Project name for the task")
    p.add_argument(
        "-s",
        "--start-time",
        help="Optional start time, if not given then current time is used",
    )
    p.add_argument("-d", "--description", help="Optional task description")
    p.add_argument(
        "-o",
        "--overwrite",
        action="store_true",
        help="Overwrite current task instead of ending it and starting a new one",
    )


def _end_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("end_time", nargs="?", help="Optional end time, if not given current time is used")
    p.add_argument(
        "--discard",
        action="store_true",
        help="End the current task and discard it (do not save it)",
    )


def _add_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("project_name", help="Project name for the task")
    p.add_argument("start_time", help="Date and time task started")
    p.add_argument("end_time", help="Date and time task ended")
    p.add_argument("-d", "--description", help="Optional task description")


def _view_args(p: argparse.ArgumentParser) -> None:
    group = p.add_mutually_exclusive_group()
    for shortcut in ViewShortcut:
        group.add_argument(
            f"--{shortcut.value}",
            dest="shortcut",
            action="store_const",
            const=shortcut.value,
            help=f"Show {'the running task' if shortcut is ViewShortcut.CURRENT else shortcut.value + ' tasks'}",
        )
    p.add_argument("--from", dest="range_from", metavar="WHEN", help="Start of a custom range (inclusive)")
    p.add_argument("--to", dest="range_to", metavar="WHEN", help="End of a custom range (exclusive)")


registry.register(
    "start",
    cmd_start,
    help_text="Start a new task now, ending and saving any currently running task",
    configure=_start_args,
)
registry.register("end", cmd_end, help_text="Save and end the current task", configure=_end_args)
registry.register(
    "add", cmd_add, help_text="Add a task with given start and end time", configure=_add_args
)
registry.register(
    "view",
    cmd_view,
    help_text="View the current task or a group of tasks",
    configure=_view_args,
)
