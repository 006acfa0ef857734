from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from bson import ObjectId

TASK_COLLECTION = "task"
USER_COLLECTION = "user"


@dataclass(frozen=True)
class Task:
    id: ObjectId
    created_at: datetime  # UTC, millisecond precision
    name: str
    description: str = ""
    completed: bool = False
    user_id: Optional[ObjectId] = None  # owner reference, unused by any command


@dataclass(frozen=True)
class User:
    """Account record. Stored in its own collection; no command reads or writes it yet."""

    id: ObjectId
    name: str
    password: str
