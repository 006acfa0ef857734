from __future__ import annotations

import os

DEFAULT_MONGO_URI = "mongodb://localhost:27017"
DEFAULT_DATABASE = "todo"
DEFAULT_TIMEOUT_MS = 5000
DEFAULT_LOG_LEVEL = "WARNING"


def default_mongo_uri() -> str:
    """
    MongoDB connection string:
      mongodb://localhost:27017

    Override with TODO_MONGO_URI env var or --uri CLI option.
    """
    return os.getenv("TODO_MONGO_URI") or DEFAULT_MONGO_URI


def default_database() -> str:
    return os.getenv("TODO_DATABASE") or DEFAULT_DATABASE


def default_timeout_ms() -> int:
    raw = os.getenv("TODO_TIMEOUT_MS")
    if raw is None or raw.strip() == "":
        return DEFAULT_TIMEOUT_MS
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_TIMEOUT_MS
    return value if value > 0 else DEFAULT_TIMEOUT_MS


def default_log_level() -> str:
    return (os.getenv("TODO_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
