# filewriter/logger.py
"""
Logging setup shared by FileWriter, the plan runner and the CLI.

Console output is human-readable; the optional rotating file receives one
JSON object per record so failure details passed via ``extra=`` (path,
operation, failure kind) stay machine-readable.
"""
import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional, Union

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LEVEL = logging.INFO

# Attributes every LogRecord carries; anything else came in through extra=
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
}


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON line, extras included."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, value) for key, value in vars(record).items() if key not in _RESERVED_ATTRS
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _json_file_handler(log_dir: str, log_file: str, max_bytes: int, backup_count: int) -> logging.Handler:
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        directory / log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(JsonFormatter())
    return handler


class BasicLogger:
    """
    Named logger with a console handler and an optional JSON log file.

    Handlers are attached on first use of a name only. ``level`` is applied
    whenever it is passed; when omitted, an already configured logger keeps
    whatever level its owner gave it, and a fresh one starts at INFO.
    """

    def __init__(
        self,
        name: str,
        level: Optional[Union[int, str]] = None,
        log_to_file: bool = False,
        log_dir: str = "logs",
        log_file: str = "filewriter.jsonl",
        max_bytes: int = 5_000_000,  # 5 MB
        backup_count: int = 5,
    ):
        self.logger = logging.getLogger(name)
        first_use = not self.logger.handlers

        if level is not None:
            self.logger.setLevel(_coerce_level(level))
        elif first_use:
            self.logger.setLevel(DEFAULT_LEVEL)

        if not first_use:
            return

        self.logger.addHandler(_console_handler())
        if log_to_file:
            self.logger.addHandler(_json_file_handler(log_dir, log_file, max_bytes, backup_count))

    def get_logger(self) -> logging.Logger:
        return self.logger
