# filewriter/actions/write_actions.py
from __future__ import annotations

from typing import Any, Dict

from filewriter.actions.base_action import ActionContext, BaseAction
from filewriter.files.file_writer import FileWriter


class _ContentAction(BaseAction):
    """
    Shared flow for 'overwrite', 'append' and 'prepend'.

    Expected params:
        - content: str
        - target_path: str  (only used when ctx.target_file is empty)
    """

    def apply(self, writer: FileWriter, content: str) -> bool:
        raise NotImplementedError

    def execute(self, ctx: ActionContext, params: Dict[str, Any]) -> None:
        ctx.succeeded = False

        content = params.get("content")
        if not isinstance(content, str):
            ctx.logger.error("[%s] Missing or invalid 'content' param.", self.action_type)
            return

        full_path = self.resolve_target(ctx, params)
        if full_path is None:
            return

        writer = self.open_writer(ctx, full_path)
        ctx.succeeded = self.apply(writer, content)
        if ctx.succeeded:
            ctx.logger.info("[%s] %s (%d chars)", self.action_type, full_path, len(content))


class OverwriteAction(_ContentAction):
    action_type = "overwrite"

    def apply(self, writer: FileWriter, content: str) -> bool:
        return writer.overwrite(content)


class AppendAction(_ContentAction):
    action_type = "append"

    def apply(self, writer: FileWriter, content: str) -> bool:
        return writer.append(content)


class PrependAction(_ContentAction):
    action_type = "prepend"

    def apply(self, writer: FileWriter, content: str) -> bool:
        return writer.prepend(content)


class DeleteAction(BaseAction):
    """
    Action type: 'delete'

    Checks for the file before building a FileWriter, since construction
    would otherwise recreate it and the delete could never report "missing".
    """

    action_type = "delete"

    def execute(self, ctx: ActionContext, params: Dict[str, Any]) -> None:
        ctx.succeeded = False

        full_path = self.resolve_target(ctx, params)
        if full_path is None:
            return

        if not full_path.exists():
            ctx.logger.warning("[delete] File not found: %s", full_path)
            return

        ctx.succeeded = self.open_writer(ctx, full_path).delete()
        if ctx.succeeded:
            ctx.logger.info("[delete] %s", full_path)


class ReadAction(BaseAction):
    """
    Action type: 'read'

    Pushes the file content into ctx.results. A missing file is a failure,
    not an empty read.
    """

    action_type = "read"

    def execute(self, ctx: ActionContext, params: Dict[str, Any]) -> None:
        ctx.succeeded = False

        full_path = self.resolve_target(ctx, params)
        if full_path is None:
            return

        if not full_path.exists():
            ctx.logger.warning("[read] File not found: %s", full_path)
            return

        content = self.open_writer(ctx, full_path).read()
        if content is None:
            return

        ctx.add_result(content)
        ctx.succeeded = True
        ctx.logger.info("[read] %s (%d chars)", full_path, len(content))
