from __future__ import annotations

import mongomock
import pytest

from todolist.db import TaskRepository
from todolist.models import TASK_COLLECTION


@pytest.fixture()
def collection():
    """Fresh in-memory `task` collection per test."""
    return mongomock.MongoClient()["todo"][TASK_COLLECTION]


@pytest.fixture()
def repo(collection) -> TaskRepository:
    return TaskRepository(collection)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TODO_MONGO_URI", "TODO_DATABASE", "TODO_TIMEOUT_MS", "TODO_LOG_LEVEL", "NO_COLOR", "FORCE_COLOR"):
        monkeypatch.delenv(name, raising=False)
