"""
wsdeps Logging
==============

Thin structured wrapper over the standard ``logging`` module.

Log calls accept keyword context which is attached to the record and rendered
by the configured formatter:

    logger = get_logger(__name__)
    logger.debug("Evaluating dependency", dependency="foo", protocol="file")
"""

import json
import logging
import sys
from typing import Any, Dict, Optional

from .constants import DEFAULT_LOG_LEVEL

ROOT_LOGGER_NAME = "wsdeps"

_CONTEXT_ATTR = "wsdeps_context"


class WsdepsLogger:
    """Logger accepting structured keyword context on every call."""

    def __init__(self, name: str):
        if not name.startswith(ROOT_LOGGER_NAME):
            name = f"{ROOT_LOGGER_NAME}.{name}"
        self._logger = logging.getLogger(name)

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(self, level: int, msg: str, exc_info: bool = False, **context: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        self._logger.log(level, msg, exc_info=exc_info, extra={_CONTEXT_ATTR: context})

    def debug(self, msg: str, **context: Any) -> None:
        self._log(logging.DEBUG, msg, **context)

    def info(self, msg: str, **context: Any) -> None:
        self._log(logging.INFO, msg, **context)

    def warning(self, msg: str, **context: Any) -> None:
        self._log(logging.WARNING, msg, **context)

    def error(self, msg: str, exc_info: bool = False, **context: Any) -> None:
        self._log(logging.ERROR, msg, exc_info=exc_info, **context)


class TextFormatter(logging.Formatter):
    """Renders ``level name: message key=value ...``."""

    def format(self, record: logging.LogRecord) -> str:
        base = f"{record.levelname:<7} {record.name}: {record.getMessage()}"
        context: Dict[str, Any] = getattr(record, _CONTEXT_ATTR, {})
        if context:
            base += " " + " ".join(f"{k}={v}" for k, v in context.items())
        if record.exc_info:
            base += "\n" + self.formatException(record.exc_info)
        return base


class JsonFormatter(logging.Formatter):
    """Renders one JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(getattr(record, _CONTEXT_ATTR, {}))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def get_logger(name: str) -> WsdepsLogger:
    """
    Get a structured logger.

    Args:
        name: Module or component name; prefixed with ``wsdeps.`` if needed

    Returns:
        WsdepsLogger instance
    """
    return WsdepsLogger(name)


def configure_logging(level: Optional[str] = None, fmt: str = "text") -> None:
    """
    Configure the ``wsdeps`` logger hierarchy.

    Replaces any handler installed by a previous call, so it is safe to call
    once per CLI invocation.

    Args:
        level: Log level name (defaults to WARNING)
        fmt: "text" or "json"
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if fmt == "json" else TextFormatter())
    root.addHandler(handler)
    root.setLevel((level or DEFAULT_LOG_LEVEL).upper())
    root.propagate = False
