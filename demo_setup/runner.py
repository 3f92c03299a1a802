"""
Run an ordered list of steps.

Each step goes PENDING -> RUNNING -> SUCCEEDED/FAILED. The first failure
aborts the run. A step declaring ``skips_group`` that reports
AlreadyInstalled marks every pending step of that group SKIPPED, and the
run continues with the next step outside it.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

from demo_setup.errors import MissingScriptsError, StepFailedError
from demo_setup.steps import OutcomeKind, Step, StepOutcome, StepState, run_script
from shared.utils import logger

if TYPE_CHECKING:
    from demo_setup.context import SetupContext

Executor = Callable[[Step, "SetupContext"], StepOutcome]


def check_scripts(steps: list[Step], scripts_dir: Path) -> None:
    """Raise MissingScriptsError listing every script-backed step with no file."""
    missing = []
    for step in steps:
        if step.state is StepState.SKIPPED:
            continue
        path = step.script_path(scripts_dir)
        if path is not None and not path.is_file():
            missing.append(step.name)
    if missing:
        raise MissingScriptsError(missing)
    logger.info(f"Found all {len(steps)} required scripts")


def execute_step(step: Step, ctx: SetupContext) -> StepOutcome:
    if step.action is not None:
        return step.action(ctx)
    cfg = ctx.config
    return run_script(step.script_path(cfg.scripts_dir), cwd=cfg.scripts_dir, timeout=cfg.script_timeout)


def skip_group(steps: list[Step], group: str, reason: str) -> list[Step]:
    skipped = []
    for step in steps:
        if step.group == group and step.state is StepState.PENDING:
            step.skip(reason)
            skipped.append(step)
    return skipped


def run_steps(
    steps: list[Step],
    ctx: SetupContext,
    executor: Optional[Executor] = None,
) -> None:
    """Run every step in order; raise StepFailedError on the first failure."""
    executor = executor or execute_step
    ctx.report.steps = steps
    total = len(steps)
    for index, step in enumerate(steps, 1):
        if step.state is StepState.SKIPPED:
            logger.info(f"Skipping script {index}/{total}: {step.name} ({step.skip_reason})")
            continue

        print("=" * 60)
        print(f"Executing script {index}/{total}: {step.name}")
        print("=" * 60)
        step.state = StepState.RUNNING
        outcome = executor(step, ctx)
        step.exit_code = outcome.exit_code

        if outcome.kind is OutcomeKind.SUCCESS:
            step.state = StepState.SUCCEEDED
            logger.info(f"Successfully completed: {step.name}")
            continue

        if outcome.kind is OutcomeKind.ALREADY_INSTALLED and step.skips_group:
            step.state = StepState.SUCCEEDED
            skipped = skip_group(steps, step.skips_group, "already installed")
            logger.info(
                f"{step.name} reports an existing installation - skipping "
                f"{len(skipped)} '{step.skips_group}' step(s)"
            )
            continue

        step.state = StepState.FAILED
        raise StepFailedError(step.name, outcome.reason or outcome.kind.value)
