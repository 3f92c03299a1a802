"""
Step model for setup pipelines.

A step is either an external sub-script (run with bash) or a built-in
action implemented in this package. Every step invocation yields a
StepOutcome instead of a bare exit code.
"""

from __future__ import annotations

import enum
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

from demo_setup.constants import ALREADY_INSTALLED_EXIT_CODE

if TYPE_CHECKING:
    from demo_setup.context import SetupContext


class StepState(enum.Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


class OutcomeKind(enum.Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    ALREADY_INSTALLED = "already-installed"


@dataclass(frozen=True)
class StepOutcome:
    """Tagged result of running one step."""

    kind: OutcomeKind
    reason: str = ""
    exit_code: Optional[int] = None

    @classmethod
    def success(cls) -> StepOutcome:
        return cls(OutcomeKind.SUCCESS)

    @classmethod
    def failure(cls, reason: str) -> StepOutcome:
        return cls(OutcomeKind.FAILURE, reason)

    @classmethod
    def from_exit_code(cls, code: int) -> StepOutcome:
        if code == 0:
            return cls(OutcomeKind.SUCCESS, exit_code=code)
        if code == ALREADY_INSTALLED_EXIT_CODE:
            return cls(OutcomeKind.ALREADY_INSTALLED, "already installed", code)
        return cls(OutcomeKind.FAILURE, f"exit code: {code}", code)


Action = Callable[["SetupContext"], StepOutcome]


@dataclass
class Step:
    """One entry of a pipeline.

    ``group`` names the skip group the step belongs to. ``skips_group`` is
    set on the step whose AlreadyInstalled outcome skips that group.
    """

    name: str
    script: Optional[str] = None
    action: Optional[Action] = None
    group: Optional[str] = None
    skips_group: Optional[str] = None
    state: StepState = StepState.PENDING
    exit_code: Optional[int] = None
    skip_reason: str = ""

    def script_path(self, scripts_dir: Path) -> Path | None:
        if self.action is not None:
            return None
        return scripts_dir / (self.script or self.name)

    def skip(self, reason: str) -> None:
        self.state = StepState.SKIPPED
        self.skip_reason = reason


def run_script(path: Path, cwd: Path, timeout: int | None = None) -> StepOutcome:
    """Run a sub-script with bash, streaming its output to the console."""
    try:
        r = subprocess.run(["bash", str(path)], cwd=str(cwd), timeout=timeout)
    except subprocess.TimeoutExpired:
        return StepOutcome.failure(f"timed out after {timeout}s")
    return StepOutcome.from_exit_code(r.returncode)
