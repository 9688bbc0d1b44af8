# filewriter/actions/base_action.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from filewriter.config.write_plan import WriterSettings
from filewriter.files.file_writer import FileWriter


@dataclass
class ActionContext:

    project_root: str
    target_file: Optional[str]
    step_name: str
    logger: Any
    writer_settings: WriterSettings = field(default_factory=WriterSettings)

    # Outcome of the last execute()
    succeeded: bool = False
    results: List[Any] = field(default_factory=list)

    def add_result(self, value: Any) -> None:
        self.results.append(value)


class BaseAction:
    """
    Base class for all actions run against a single target file.
    Subclasses implement `execute(self, ctx, params)`.
    """

    action_type: str = ""

    def execute(self, ctx: ActionContext, params: Dict[str, Any]) -> None:
        raise NotImplementedError(
            f"{self.__class__.__name__}.execute() not implemented"
        )

    def resolve_target(self, ctx: ActionContext, params: Dict[str, Any]) -> Optional[Path]:
        """
        Resolve the target path under the project root.

        ctx.target_file wins; params['target_path'] is the fallback. Returns
        None (after logging) when there is no target or it escapes the root.
        """
        effective_path = ctx.target_file or params.get("target_path")
        if not effective_path:
            ctx.logger.error(
                "[%s] No target path: ctx.target_file and params.target_path are both empty.",
                self.action_type,
            )
            return None

        root = Path(ctx.project_root).resolve()
        full_path = (root / effective_path).resolve()
        if not full_path.is_relative_to(root):
            ctx.logger.error(
                "[%s] Refusing to touch a file outside the project root: %s",
                self.action_type,
                full_path,
            )
            return None
        return full_path

    def open_writer(self, ctx: ActionContext, full_path: Path) -> FileWriter:
        return FileWriter(
            full_path,
            encoding=ctx.writer_settings.encoding,
            dir_mode=ctx.writer_settings.dir_mode,
            logger=ctx.logger,
        )
