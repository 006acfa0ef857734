from __future__ import annotations

from typing import Any

import mongomock
from pymongo.errors import AutoReconnect, PyMongoError, ServerSelectionTimeoutError


class FailingCollection:
    """Collection whose every driver call raises, as if the server went away mid-command."""

    def __init__(self, error: PyMongoError | None = None) -> None:
        self.error = error or AutoReconnect("connection reset")

    def insert_one(self, *args: Any, **kwargs: Any) -> Any:
        raise self.error

    def find(self, *args: Any, **kwargs: Any) -> Any:
        raise self.error

    def find_one_and_update(self, *args: Any, **kwargs: Any) -> Any:
        raise self.error

    def delete_one(self, *args: Any, **kwargs: Any) -> Any:
        raise self.error


class FailingCursorCollection:
    """find() succeeds but iterating the cursor fails after the first document."""

    def __init__(self, first_doc: dict) -> None:
        self.first_doc = first_doc

    def find(self, *args: Any, **kwargs: Any) -> Any:
        yield self.first_doc
        raise AutoReconnect("cursor died")


class CountingCollection:
    """Wraps a real (mongomock) collection and counts driver round trips."""

    def __init__(self, inner: Any) -> None:
        self.inner = inner
        self.calls: list[str] = []

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self.inner, name)
        if not callable(attr):
            return attr

        def _counted(*args: Any, **kwargs: Any) -> Any:
            self.calls.append(name)
            return attr(*args, **kwargs)

        return _counted


class _FakeAdmin:
    def __init__(self, error: PyMongoError | None) -> None:
        self.error = error
        self.commands: list[str] = []

    def command(self, name: str) -> dict:
        self.commands.append(name)
        if self.error is not None:
            raise self.error
        return {"ok": 1.0}


class FakeMongoClient:
    """
    Stand-in for pymongo.MongoClient used as connect()'s client_factory.

    Databases come from mongomock; `admin.command("ping")` succeeds unless
    ping_error is set.
    """

    ping_error: PyMongoError | None = None

    def __init__(self, uri: str, **kwargs: Any) -> None:
        self.uri = uri
        self.kwargs = kwargs
        self.admin = _FakeAdmin(self.ping_error)
        self.closed = False
        self._inner = mongomock.MongoClient()

    def __getitem__(self, name: str) -> Any:
        return self._inner[name]

    def close(self) -> None:
        self.closed = True


class UnreachableMongoClient(FakeMongoClient):
    ping_error = ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")
