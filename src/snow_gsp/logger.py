# src/snow_gsp/logger.py
"""loguru setup: the library only binds, the CLI installs the console sink."""

from __future__ import annotations
import os
import sys
from typing import Optional

from loguru import logger as _root_logger

LOG_LEVEL_ENV = "SNOW_GSP_LOG_LEVEL"
_HANDLER_ID: Optional[int] = None


def _console_sink(msg) -> None:
    r = msg.record
    module = r["extra"].get("module", r.get("name", "unknown"))
    sys.stderr.write(f"{r['time']:%H:%M:%S} | {r['level'].name: <7} | {module} | {r['message']}\n")


def configure(level: Optional[str] = None) -> int:
    """Install (or replace) the snow_gsp console sink; other sinks are left alone."""
    global _HANDLER_ID
    if _HANDLER_ID is None:
        # loguru's stock stderr handler would print every record twice
        try:
            _root_logger.remove(0)
        except ValueError:
            pass
    else:
        _root_logger.remove(_HANDLER_ID)
    _HANDLER_ID = _root_logger.add(
        _console_sink, level=(level or os.environ.get(LOG_LEVEL_ENV, "INFO")).upper(), catch=True
    )
    return _HANDLER_ID


def get_logger(name: str):
    return _root_logger.bind(module=name)


__all__ = ["get_logger", "configure", "LOG_LEVEL_ENV"]
