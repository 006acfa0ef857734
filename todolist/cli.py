from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, NoReturn, Optional, TextIO

from . import db
from .config import default_database, default_log_level, default_mongo_uri, default_timeout_ms
from .errors import EmptyResultError, StoreConnectionError, TodoError, UsageError
from .logging_setup import setup_logging
from .models import Task
from .theme import DONE_COLOR, PENDING_COLOR, color, color_enabled

logger = logging.getLogger(__name__)

GREETING = "boom! I say!"
EMPTY_MESSAGE = "Nothing to see here."


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message, usage=self.format_usage())


def _positive_int(s: str) -> int:
    try:
        value = int(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid number '{s}'.") from e
    if value <= 0:
        raise argparse.ArgumentTypeError(f"Expected a positive number, got {value}.")
    return value


def _log_level_from_args(ns: argparse.Namespace) -> int:
    verbose = getattr(ns, "verbose", 0) or 0
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return getattr(logging, default_log_level(), logging.WARNING)


def print_tasks(tasks: Iterable[Task], out: Optional[TextIO] = None) -> None:
    out = out or sys.stdout
    enabled = color_enabled(out)
    for i, t in enumerate(tasks, start=1):
        style = DONE_COLOR if t.completed else PENDING_COLOR
        print(color(f"{i}: {t.name}", style, enabled), file=out)


def cmd_add(ns: argparse.Namespace, repo: db.TaskRepository) -> int:
    task = repo.create(ns.name, ns.description or "")
    print(f"Added task: {task.name}")
    return 0


def cmd_list(ns: argparse.Namespace, repo: db.TaskRepository) -> int:
    try:
        tasks = repo.list_all()
    except EmptyResultError:
        print(EMPTY_MESSAGE)
        return 0
    print_tasks(tasks)
    return 0


def cmd_complete(ns: argparse.Namespace, repo: db.TaskRepository) -> int:
    task = repo.complete_by_name(ns.name)
    print(f"Completed task: {task.name}")
    return 0


def cmd_delete(ns: argparse.Namespace, repo: db.TaskRepository) -> int:
    repo.delete_by_name(ns.name)
    print(f"Deleted task: {ns.name}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = _Parser(
        prog="todo",
        description="A simple cli programme, to manage your tasks (Python + MongoDB).",
    )
    p.add_argument(
        "--uri",
        help="MongoDB connection string (default: mongodb://localhost:27017 or TODO_MONGO_URI env var)",
    )
    p.add_argument("--database", help="Database name (default: todo or TODO_DATABASE env var)")
    p.add_argument(
        "--timeout-ms",
        type=_positive_int,
        help="Server selection timeout in milliseconds (default: 5000 or TODO_TIMEOUT_MS env var)",
    )
    p.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug).")
    sub = p.add_subparsers(dest="cmd")

    s = sub.add_parser("add", aliases=["a"], help="Add a task to the list.")
    s.add_argument("name", help="Short task name.")
    s.add_argument("description", nargs="?", default="", help="Longer description.")
    s.set_defaults(func=cmd_add)

    s = sub.add_parser("delete", aliases=["d"], help="Remove a task from the list by name.")
    s.add_argument("name", help="Task name.")
    s.set_defaults(func=cmd_delete)

    s = sub.add_parser("list", help="View the tasks in the list.")
    s.set_defaults(func=cmd_list)

    s = sub.add_parser("complete", aliases=["c"], help="Complete a task in the list by name.")
    s.add_argument("name", help="Task name.")
    s.set_defaults(func=cmd_complete)

    return p


def _open_store(ns: argparse.Namespace) -> db.Store:
    return db.connect(
        ns.uri or default_mongo_uri(),
        ns.database or default_database(),
        timeout_ms=ns.timeout_ms or default_timeout_ms(),
    )


def main(argv: Optional[list[str]] = None, repo: Optional[db.TaskRepository] = None) -> int:
    parser = build_parser()
    try:
        ns = parser.parse_args(argv)
    except UsageError as e:
        print(e.usage, end="", file=sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 2

    setup_logging(_log_level_from_args(ns))

    func = getattr(ns, "func", None)
    if func is None:
        print(GREETING)
        return 0

    store: Optional[db.Store] = None
    if repo is None:
        try:
            store = _open_store(ns)
        except StoreConnectionError as e:
            logger.debug("Startup connection failed", exc_info=True)
            print(f"error: {e}", file=sys.stderr)
            return 1
        repo = db.TaskRepository(store.tasks)

    try:
        return int(func(ns, repo))
    except TodoError as e:
        logger.debug("Command %s failed", ns.cmd, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        if store is not None:
            store.close()
