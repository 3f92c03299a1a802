"""
Best-effort apply of manifest directories.

A missing directory or a failed ``oc apply`` is recorded as a warning in the
run report; neither stops the run.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from shared.utils import logger

if TYPE_CHECKING:
    from demo_setup.report import RunReport
    from shared.oc_runner import OcRunner


@dataclass(frozen=True)
class DeploymentTarget:
    path: Path
    recursive: bool = True

    @property
    def name(self) -> str:
        return self.path.name


def apply_targets(oc: OcRunner, targets: Iterable[DeploymentTarget], report: RunReport) -> int:
    """Apply each target directory. Returns the number applied without error."""
    applied = 0
    for target in targets:
        if not target.path.is_dir():
            report.warn("apply", f"{target.name} directory not found at: {target.path}")
            continue
        logger.info(f"Deploying {target.name}...")
        r = oc.apply_dir(target.path, recursive=target.recursive)
        if r.returncode != 0:
            detail = (r.stderr or r.stdout or "").strip().splitlines()
            report.warn(
                "apply",
                f"Some resources in {target.name} may have failed to apply"
                + (f": {detail[-1]}" if detail else ""),
            )
        else:
            applied += 1
        logger.info(f"{target.name} deployment attempted")
    return applied


def delete_targets(oc: OcRunner, targets: Iterable[DeploymentTarget], report: RunReport) -> int:
    """Delete what each target directory declares, ignoring resources already gone."""
    deleted = 0
    for target in targets:
        if not target.path.is_dir():
            report.warn("delete", f"{target.name} directory not found at: {target.path}")
            continue
        r = oc.delete_dir(target.path, recursive=target.recursive)
        if r.returncode != 0 and "not found" not in (r.stderr or "").lower():
            report.warn("delete", f"oc delete {target.name}: {(r.stderr or r.stdout or '').strip()}")
        else:
            deleted += 1
    return deleted
