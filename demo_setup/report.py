"""
End-of-run report: step results plus recoverable warnings collected
during the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from demo_setup.steps import Step, StepState
from shared.utils import logger


@dataclass(frozen=True)
class SetupWarning:
    source: str
    message: str


@dataclass
class RunReport:
    title: str = "Setup"
    steps: list[Step] = field(default_factory=list)
    warnings: list[SetupWarning] = field(default_factory=list)

    def warn(self, source: str, message: str) -> None:
        logger.warning(f"[{source}] {message}")
        self.warnings.append(SetupWarning(source, message))

    def _with_state(self, state: StepState) -> list[Step]:
        return [s for s in self.steps if s.state is state]

    @property
    def succeeded(self) -> list[Step]:
        return self._with_state(StepState.SUCCEEDED)

    @property
    def failed(self) -> list[Step]:
        return self._with_state(StepState.FAILED)

    @property
    def skipped(self) -> list[Step]:
        return self._with_state(StepState.SKIPPED)

    @property
    def ok(self) -> bool:
        return not self.failed


def print_summary(report: RunReport) -> None:
    """Print the step tally and any warnings gathered during the run."""
    print("\n" + "=" * 60)
    print(f"{report.title} Summary")
    print("=" * 60)
    print(f"Total scripts: {len(report.steps)}")
    print(f"  Executed: {len(report.succeeded) + len(report.failed)}")
    print(f"  Skipped:  {len(report.skipped)}")
    print(f"  Failed:   {len(report.failed)}")
    for step in report.skipped:
        print(f"  - skipped {step.name}: {step.skip_reason}")
    if report.warnings:
        print(f"Warnings ({len(report.warnings)}):")
        for w in report.warnings:
            print(f"  [{w.source}] {w.message}")
    if report.ok:
        print("All scripts completed successfully!")
    else:
        print(f"Failed scripts: {' '.join(s.name for s in report.failed)}")
    print("=" * 60)
