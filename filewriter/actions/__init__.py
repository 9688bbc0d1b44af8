# filewriter/actions/__init__.py
from filewriter.actions.base_action import ActionContext, BaseAction
from filewriter.actions.registry import ActionRegistry
from filewriter.actions.write_actions import (
    AppendAction,
    DeleteAction,
    OverwriteAction,
    PrependAction,
    ReadAction,
)

ActionRegistry.register_defaults()

__all__ = [
    "ActionContext",
    "ActionRegistry",
    "AppendAction",
    "BaseAction",
    "DeleteAction",
    "OverwriteAction",
    "PrependAction",
    "ReadAction",
]
