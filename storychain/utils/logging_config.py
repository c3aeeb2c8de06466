"""
Structured JSON logging configuration for StoryChain.

All log records are emitted as single-line JSON objects to the configured
log file, and records at WARNING or above are mirrored to stderr.

Usage::

    from storychain.utils.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("story completed", extra={"guild_id": gid, "channel_id": cid})

For code paths that work on behalf of a single guild::

    from storychain.utils.logging_config import get_logger, GuildAdapter

    raw = get_logger("storychain.engine")
    logger = GuildAdapter(raw, guild_id=1234)
    logger.info("word accepted")        # automatically includes guild_id
"""
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, MutableMapping, Optional


# ---------------------------------------------------------------------------
# JSON formatter
# ---------------------------------------------------------------------------

class JSONFormatter(logging.Formatter):
    """Emits each record as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Merge extra fields (guild_id, command, etc.)
        for key in ("guild_id", "channel_id", "user_id", "command",
                     "event_type", "duration_ms", "metadata"):
            val = getattr(record, key, None)
            if val is not None:
                entry[key] = val

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


# ---------------------------------------------------------------------------
# GuildAdapter — attaches guild_id to every log call
# ---------------------------------------------------------------------------

class GuildAdapter(logging.LoggerAdapter):
    """Logger adapter that injects ``guild_id`` into every record."""

    def __init__(self, logger: logging.Logger, guild_id: int):
        super().__init__(logger, {"guild_id": guild_id})

    def process(
        self,
        msg: str,
        kwargs: MutableMapping[str, Any],
    ) -> tuple[str, MutableMapping[str, Any]]:
        extra = kwargs.setdefault("extra", {})
        extra.update(self.extra)
        return msg, kwargs


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

_CONFIGURED = False


def setup_logging(log_file: Optional[str] = None, level: Optional[str | int] = None) -> None:
    """Configure the root ``storychain`` logger with JSON handlers.

    Missing arguments are taken from the application settings. An empty
    ``log_file`` disables the file handler.

    Safe to call multiple times — only the first call has effect.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return
    _CONFIGURED = True

    if log_file is None or level is None:
        from storychain.config import get_settings
        settings = get_settings()
        log_file = settings.log_file if log_file is None else log_file
        level = settings.log_level if level is None else level

    root = logging.getLogger("storychain")
    root.setLevel(level.upper() if isinstance(level, str) else level)
    root.propagate = False

    formatter = JSONFormatter()

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(formatter)
        root.addHandler(fh)

    # Stderr handler — for docker / systemd journal visibility
    sh = logging.StreamHandler(sys.stderr)
    sh.setFormatter(formatter)
    sh.setLevel(logging.WARNING)
    root.addHandler(sh)


def get_logger(name: str = "storychain") -> logging.Logger:
    """Return a child logger under the ``storychain`` namespace.

    Automatically calls :func:`setup_logging` on first use.
    """
    setup_logging()
    if name.startswith("storychain"):
        return logging.getLogger(name)
    return logging.getLogger(f"storychain.{name}")
