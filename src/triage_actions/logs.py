"""
Structured one-line JSON logging shared by the handlers.

Every module logs under the `triage_actions` package logger; the level comes
from LOG_LEVEL and is applied once per invocation.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

PACKAGE_LOGGER = "triage_actions"


def level_from_env(default: int = logging.INFO) -> int:
    name = (os.getenv("LOG_LEVEL") or "").upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def configure_logging() -> None:
    level = level_from_env()
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
    root = logging.getLogger()
    if root.level and root.level > level:
        root.setLevel(level)


def log_event(logger: logging.Logger, msg: str, **fields: Any) -> None:
    # default=str keeps enums and other non-JSON values on one line
    logger.info(json.dumps({"msg": msg, **fields}, ensure_ascii=False, default=str))
