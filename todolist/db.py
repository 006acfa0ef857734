from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from pymongo import MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from .errors import (
    EmptyResultError,
    NotFoundError,
    StoreConnectionError,
    StoreReadError,
    StoreWriteError,
)
from .models import TASK_COLLECTION, USER_COLLECTION, Task

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    # BSON dates carry milliseconds; truncate so the stored value equals the returned one.
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _as_utc(value: Any) -> datetime:
    if not isinstance(value, datetime):
        raise TypeError(f"created_at is {type(value).__name__}, expected datetime")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _doc_to_task(doc: Mapping[str, Any]) -> Task:
    name = doc["name"]
    if not isinstance(name, str):
        raise TypeError(f"name is {type(name).__name__}, expected str")
    description = doc.get("description", "")
    if description is None:
        description = ""
    if not isinstance(description, str):
        raise TypeError(f"description is {type(description).__name__}, expected str")
    completed = doc.get("completed", False)
    if not isinstance(completed, bool):
        raise TypeError(f"completed is {type(completed).__name__}, expected bool")
    return Task(
        id=doc["_id"],
        created_at=_as_utc(doc["created_at"]),
        name=name,
        description=description,
        completed=completed,
        user_id=doc.get("user_id"),
    )


def _decode(doc: Mapping[str, Any]) -> Task:
    try:
        return _doc_to_task(doc)
    except (KeyError, TypeError, ValueError) as e:
        raise StoreReadError(f"Malformed task document {doc.get('_id')!r}: {e}") from e


@dataclass
class Store:
    client: Any
    database: Database
    tasks: Collection
    users: Collection  # reserved; no operation reads or writes users

    def close(self) -> None:
        self.client.close()


def connect(
    uri: str,
    database: str,
    *,
    timeout_ms: int = 5000,
    client_factory: Callable[..., Any] = MongoClient,
) -> Store:
    """
    Open a client and verify the server answers a ping.

    Raises StoreConnectionError when the URI is invalid or the server cannot
    be reached within timeout_ms.
    """
    logger.info("Connecting to %s (database %r)", uri, database)
    try:
        client = client_factory(uri, serverSelectionTimeoutMS=timeout_ms, tz_aware=True)
        client.admin.command("ping")
    except (PyMongoError, ValueError) as e:
        # A malformed host:port surfaces as a plain ValueError from the URI parser.
        raise StoreConnectionError(f"Cannot connect to {uri}: {e}") from e

    db = client[database]
    return Store(
        client=client,
        database=db,
        tasks=db[TASK_COLLECTION],
        users=db[USER_COLLECTION],
    )


class TaskRepository:
    """
    Task persistence over a single collection.

    Lookups are keyed by name, which is not unique: complete_by_name and
    delete_by_name act on whichever matching document the store returns
    first.
    """

    def __init__(self, collection: Collection) -> None:
        self.collection = collection

    def create(self, name: str, description: str = "") -> Task:
        doc = {
            "created_at": _utc_now(),
            "name": name,
            "description": description,
            "completed": False,
            "user_id": None,
        }
        try:
            result = self.collection.insert_one(doc)
        except PyMongoError as e:
            raise StoreWriteError(f"Could not add task {name!r}: {e}") from e

        logger.debug("Inserted task %s (%r)", result.inserted_id, name)
        return Task(
            id=result.inserted_id,
            created_at=doc["created_at"],
            name=name,
            description=description,
        )

    def list_all(self) -> list[Task]:
        tasks: list[Task] = []
        try:
            for doc in self.collection.find({}):
                tasks.append(_decode(doc))
        except PyMongoError as e:
            raise StoreReadError(f"Could not list tasks: {e}") from e

        logger.debug("Listed %d tasks", len(tasks))
        if not tasks:
            raise EmptyResultError("No tasks found.")
        return tasks

    def complete_by_name(self, name: str) -> Task:
        """Mark the first task named `name` completed; returns it as it was before the update."""
        try:
            doc = self.collection.find_one_and_update(
                {"name": name},
                {"$set": {"completed": True}},
                return_document=ReturnDocument.BEFORE,
            )
        except PyMongoError as e:
            raise StoreWriteError(f"Could not complete task {name!r}: {e}") from e

        if doc is None:
            raise NotFoundError(f"No task named {name!r}.")
        logger.debug("Completed task %s (%r)", doc.get("_id"), name)
        return _decode(doc)

    def delete_by_name(self, name: str) -> None:
        try:
            result = self.collection.delete_one({"name": name})
        except PyMongoError as e:
            raise StoreWriteError(f"Could not delete task {name!r}: {e}") from e

        if result.deleted_count == 0:
            raise NotFoundError(f"No tasks were deleted: no task named {name!r}.")
        logger.debug("Deleted task %r", name)
