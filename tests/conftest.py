# tests/conftest.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import pytest

from filewriter.actions.base_action import ActionContext
from filewriter.config.write_plan import WriterSettings
from filewriter.logger import BasicLogger


@pytest.fixture
def tmp_project_root(tmp_path: Path) -> Path:
    """
    Temporary project root used for tests.
    """
    return tmp_path


@pytest.fixture
def test_logger() -> logging.Logger:
    """
    Basic logger for tests, console only so nothing lands in ./logs.
    """
    return BasicLogger("test-logger", level=logging.DEBUG, log_to_file=False).get_logger()


requires_non_root = pytest.mark.skipif(
    hasattr(os, "geteuid") and os.geteuid() == 0,
    reason="root bypasses file permission bits",
)


def make_action_context(
    project_root: Path,
    logger: logging.Logger,
    target_file: Optional[str] = None,
    step_name: str = "test_step",
    writer_settings: Optional[WriterSettings] = None,
) -> ActionContext:
    """
    Helper to construct a minimal ActionContext for action tests.
    """
    return ActionContext(
        project_root=str(project_root),
        target_file=target_file,
        step_name=step_name,
        logger=logger,
        writer_settings=writer_settings or WriterSettings(),
    )
