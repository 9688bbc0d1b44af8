# filewriter/config/write_plan.py
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from filewriter.errors import PlanError
from filewriter.files.file_writer import DEFAULT_DIR_MODE, DEFAULT_ENCODING

CONTENT_ACTIONS = ("overwrite", "append", "prepend")
PATH_ACTIONS = ("delete", "read")

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class LogSettings:
    enabled: bool = False
    level: str = "INFO"
    log_dir: str = "logs"
    log_file: str = "filewriter.jsonl"

    @staticmethod
    def from_dict(data: Optional[Dict[str, Any]]) -> "LogSettings":
        if not data:
            return LogSettings()
        if not isinstance(data, dict):
            raise PlanError("'log' must be an object.")

        return LogSettings(
            enabled=_parse_flag(data, "enabled", False, "log.enabled"),
            level=_parse_level(data.get("level", "INFO")),
            log_dir=str(data.get("log_dir", "logs")),
            log_file=str(data.get("log_file", "filewriter.jsonl")),
        )

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> "LogSettings":
        """
        Build settings from FILEWRITER_LOG_* variables.

        Call load_dotenv() beforehand if a .env file should be honoured.
        """
        env = os.environ if environ is None else environ
        return LogSettings(
            enabled=env.get("FILEWRITER_LOG_TO_FILE", "").strip().lower() in _TRUE_VALUES,
            level=_parse_level(env.get("FILEWRITER_LOG_LEVEL", "").strip() or "INFO"),
            log_dir=env.get("FILEWRITER_LOG_DIR", "logs").strip() or "logs",
        )


def _parse_flag(data: Dict[str, Any], key: str, default: bool, label: str) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise PlanError(f"{label} must be true or false (got {value!r}).")
    return value


def _parse_level(value: Any) -> str:
    level = str(value).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise PlanError(f"log.level is not a logging level: {value!r}")
    return level


@dataclass
class WriterSettings:
    encoding: str = DEFAULT_ENCODING
    dir_mode: int = DEFAULT_DIR_MODE

    @staticmethod
    def from_dict(data: Optional[Dict[str, Any]]) -> "WriterSettings":
        if not data:
            return WriterSettings()
        if not isinstance(data, dict):
            raise PlanError("'writer' must be an object.")

        encoding = data.get("encoding", DEFAULT_ENCODING)
        if not isinstance(encoding, str) or not encoding.strip():
            raise PlanError("writer.encoding must be a non-empty string.")

        return WriterSettings(
            encoding=encoding.strip(),
            dir_mode=_parse_mode(data.get("dir_mode", DEFAULT_DIR_MODE)),
        )


def _parse_mode(value: Any) -> int:
    # JSON has no octal literals, so "0755" / "0o755" strings are accepted too.
    if isinstance(value, bool):
        raise PlanError("writer.dir_mode must be an integer or octal string.")
    if isinstance(value, int):
        mode = value
    elif isinstance(value, str):
        text = value.strip().lower()
        if text.startswith("0o"):
            text = text[2:]
        try:
            mode = int(text, 8)
        except ValueError:
            raise PlanError(f"writer.dir_mode is not an octal mode: {value!r}") from None
    else:
        raise PlanError("writer.dir_mode must be an integer or octal string.")

    if not 0 <= mode <= 0o7777:
        raise PlanError(f"writer.dir_mode out of range: {oct(mode)}")
    return mode


@dataclass
class WriteStep:
    action: str
    target: str
    name: str = ""
    content: Optional[str] = None
    content_file: Optional[str] = None

    @property
    def label(self) -> str:
        return self.name or f"{self.action}:{self.target}"


@dataclass
class WritePlan:
    steps: List[WriteStep] = field(default_factory=list)
    writer: WriterSettings = field(default_factory=WriterSettings)
    log: LogSettings = field(default_factory=LogSettings)
    stop_on_failure: bool = True

    @staticmethod
    def from_file(path: str | Path) -> "WritePlan":
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise PlanError(f"Write plan {path} is not valid JSON: {e}") from e
        except UnicodeDecodeError as e:
            raise PlanError(f"Write plan {path} is not UTF-8 text: {e}") from e

        return WritePlan.from_dict(data)

    @staticmethod
    def from_dict(data: Any) -> "WritePlan":
        if not isinstance(data, dict):
            raise PlanError("Write plan root must be a JSON object.")

        steps_raw = data.get("steps", [])
        if steps_raw is None:
            steps_raw = []
        if not isinstance(steps_raw, list):
            raise PlanError("'steps' must be a list.")

        steps: List[WriteStep] = []
        for idx, obj in enumerate(steps_raw):
            steps.append(_parse_step(idx, obj))

        return WritePlan(
            steps=steps,
            writer=WriterSettings.from_dict(data.get("writer")),
            log=LogSettings.from_dict(data.get("log")),
            stop_on_failure=_parse_flag(data, "stop_on_failure", True, "stop_on_failure"),
        )


def _parse_step(idx: int, obj: Any) -> WriteStep:
    if not isinstance(obj, dict):
        raise PlanError(f"steps[{idx}] must be an object.")

    action = obj.get("action")
    if action not in CONTENT_ACTIONS + PATH_ACTIONS:
        allowed = ", ".join(CONTENT_ACTIONS + PATH_ACTIONS)
        raise PlanError(f"steps[{idx}].action must be one of: {allowed} (got {action!r}).")

    target = obj.get("target")
    if not isinstance(target, str) or not target.strip():
        raise PlanError(f"steps[{idx}].target must be a non-empty string.")

    content = obj.get("content")
    content_file = obj.get("content_file")

    if action in CONTENT_ACTIONS:
        if content is not None and content_file is not None:
            raise PlanError(f"steps[{idx}] must not specify both 'content' and 'content_file'.")
        if content is None and content_file is None:
            raise PlanError(f"steps[{idx}] ({action}) requires 'content' or 'content_file'.")
        if content is not None and not isinstance(content, str):
            raise PlanError(f"steps[{idx}].content must be a string.")
        if content_file is not None and (not isinstance(content_file, str) or not content_file.strip()):
            raise PlanError(f"steps[{idx}].content_file must be a non-empty string.")
    else:
        forbidden = [k for k in ("content", "content_file") if k in obj]
        if forbidden:
            raise PlanError(f"steps[{idx}] ({action}) must not include: {forbidden}.")

    return WriteStep(
        action=action,
        target=target.strip(),
        name=str(obj.get("name") or ""),
        content=content,
        content_file=content_file.strip() if isinstance(content_file, str) else None,
    )
