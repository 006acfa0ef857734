from __future__ import annotations


class TodoError(Exception):
    """Base class for every error the todo CLI reports to the user."""


class UsageError(TodoError):
    """Bad command-line arguments; `usage` holds the usage line of the offending parser."""

    def __init__(self, message: str, usage: str = "") -> None:
        super().__init__(message)
        self.usage = usage


class StoreConnectionError(TodoError):
    """The document store could not be reached at startup."""


class StoreWriteError(TodoError):
    """A driver write (insert/update/delete) failed."""


class StoreReadError(TodoError):
    """A query or document decode failed."""


class EmptyResultError(TodoError):
    """A listing matched zero tasks. Callers print an empty-state message."""


class NotFoundError(TodoError):
    """A name-keyed update or delete affected zero tasks."""
