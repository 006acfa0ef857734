from __future__ import annotations

import logging
import sys
from typing import TextIO, Union

_HANDLER_NAME = "todolist-stderr"


def setup_logging(level: Union[int, str] = logging.WARNING, stream: TextIO | None = None) -> None:
    """
    Configure the `todolist` logger with a single stderr handler.

    Safe to call more than once: the handler installed by a previous call is
    replaced, handlers owned by anyone else are left alone.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger("todolist")
    logger.setLevel(level)

    for h in list(logger.handlers):
        if h.get_name() == _HANDLER_NAME:
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)

    # Driver heartbeat/topology messages are noise for a one-shot CLI.
    logging.getLogger("pymongo").setLevel(max(level, logging.WARNING))
