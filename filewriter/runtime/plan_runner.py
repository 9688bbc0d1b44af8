# filewriter/runtime/plan_runner.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from filewriter.actions import ActionContext, ActionRegistry
from filewriter.config.write_plan import WritePlan, WriteStep
from filewriter.logger import BasicLogger

STATUS_OK = "ok"
STATUS_FAILED = "failed"
STATUS_SKIPPED = "skipped"


@dataclass(frozen=True)
class StepResult:
    index: int
    name: str
    action: str
    target: str
    status: str
    output: Optional[str] = None


@dataclass
class PlanResult:
    steps: List[StepResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(s.status != STATUS_FAILED for s in self.steps)

    def count(self, status: str) -> int:
        return sum(1 for s in self.steps if s.status == status)


class PlanRunner:
    """
    Executes the steps of a WritePlan against files under project_root.

    - Steps before start_from are skipped.
    - Each step is dispatched through ActionRegistry.
    - With stop_on_failure, the first failed step marks the rest as skipped.
    """

    def __init__(
        self,
        project_root: Path,
        plan: WritePlan,
        start_from: Optional[int] = 0,
        logger: Optional[logging.Logger] = None,
    ):
        self.project_root = Path(project_root)
        self.plan = plan
        self.start_from = start_from or 0
        self.logger = logger or BasicLogger(
            "PlanRunner",
            level=plan.log.level,
            log_to_file=plan.log.enabled,
            log_dir=plan.log.log_dir,
            log_file=plan.log.log_file,
        ).get_logger()

        ActionRegistry.register_defaults()

    # ----------------------------------------------------------------------
    # Main loop
    # ----------------------------------------------------------------------
    def run(self) -> PlanResult:
        result = PlanResult()
        steps = list(self.plan.steps)

        if self.start_from >= len(steps) and steps:
            self.logger.warning(
                "start_from=%s is beyond total steps (%s). Nothing to execute.",
                self.start_from,
                len(steps),
            )

        self.logger.info("Plan started (%s steps)", len(steps))
        halted = False

        for index, step in enumerate(steps):
            if index < self.start_from:
                self.logger.info("[STEP SKIPPED] index=%s < start_from=%s", index, self.start_from)
                result.steps.append(self._result(index, step, STATUS_SKIPPED))
                continue

            if halted:
                result.steps.append(self._result(index, step, STATUS_SKIPPED))
                continue

            step_result = self._execute_step(index, step)
            result.steps.append(step_result)

            if step_result.status == STATUS_FAILED and self.plan.stop_on_failure:
                self.logger.error("[STEP FAILED] %s; stopping plan.", step.label)
                halted = True

        self.logger.info(
            "Plan completed: %s ok, %s failed, %s skipped.",
            result.count(STATUS_OK),
            result.count(STATUS_FAILED),
            result.count(STATUS_SKIPPED),
        )
        return result

    # ----------------------------------------------------------------------
    # Helpers
    # ----------------------------------------------------------------------
    def _execute_step(self, index: int, step: WriteStep) -> StepResult:
        params: Dict[str, Any] = {}
        if step.content is not None:
            params["content"] = step.content
        elif step.content_file is not None:
            content = self._load_content_file(step.content_file)
            if content is None:
                return self._result(index, step, STATUS_FAILED)
            params["content"] = content

        ctx = ActionContext(
            project_root=str(self.project_root),
            target_file=step.target,
            step_name=step.label,
            logger=self.logger,
            writer_settings=self.plan.writer,
        )

        self.logger.info("[STEP %s] %s", index, step.label)
        action = ActionRegistry.create(step.action)
        action.execute(ctx, params)

        status = STATUS_OK if ctx.succeeded else STATUS_FAILED
        output = ctx.results[-1] if ctx.results else None
        return self._result(index, step, status, output)

    def _load_content_file(self, rel: str) -> Optional[str]:
        root = self.project_root.resolve()
        path = (root / rel).resolve()
        if not path.is_relative_to(root):
            self.logger.error("Refusing to read content outside project root: %s", path)
            return None

        try:
            with path.open("r", encoding=self.plan.writer.encoding, newline="") as f:
                return f.read()
        except (OSError, UnicodeError, LookupError) as e:
            self.logger.error("Cannot load content file %s: %s", path, e)
            return None

    @staticmethod
    def _result(index: int, step: WriteStep, status: str, output: Optional[str] = None) -> StepResult:
        return StepResult(
            index=index,
            name=step.label,
            action=step.action,
            target=step.target,
            status=status,
            output=output,
        )
