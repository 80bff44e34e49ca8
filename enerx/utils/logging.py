"""
Logging setup for the EnerX dashboard core.

``configure_logging(config.logging, debug=config.debug)`` is called by every
CLI command right after the config is loaded. Library modules only ever ask
for ``logging.getLogger(__name__)``.

Console records go to stderr: ``show-dashboard --json`` and
``recommend --json`` write their payload to stdout, and a log line there
would break the JSON.

The controller logs each state change with ``extra=`` fields (``intent``,
``logged_in``, ``tab``, ``recommendations``, ``request_seq``). The plain text
format drops them; with ``json_format = true`` they become top-level keys::

    {"ts": "2026-10-19T15:00:00Z", "level": "INFO",
     "logger": "enerx.session.controller", "msg": "Dashboard transition ...",
     "intent": "select_tab(recommendations)", "logged_in": true,
     "tab": "recommendations", "recommendations": "loading", "request_seq": 1}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from enerx.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_STANDARD_RECORD_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


class _JsonLineFormatter(logging.Formatter):
    """One JSON object per record, with ``extra=`` fields merged in."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict = {
            "ts": created.strftime(LOG_DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(
            (key, val)
            for key, val in vars(record).items()
            if key not in _STANDARD_RECORD_KEYS and not key.startswith("_")
        )
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _resolve_level(config: "LoggingConfig", debug: bool) -> int:
    if debug:
        return logging.DEBUG
    return logging.getLevelName(config.level.upper())


def configure_logging(config: "LoggingConfig", debug: bool = False) -> None:
    """Install the stderr handler (and optional log file) on the root logger.

    Args:
        config: ``[logging]`` section of ``AppConfig``.
        debug:  ``AppConfig.debug``. Forces DEBUG level and keeps asyncio's
                own debug records, which are otherwise held at WARNING.
    """
    level = _resolve_level(config, debug)
    formatter = (
        _JsonLineFormatter()
        if config.json_format
        else logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    logging.getLogger("asyncio").setLevel(logging.DEBUG if debug else logging.WARNING)
