"""
Setup context and the cluster context guard.

Every pipeline starts by confirming the oc session is authenticated and by
forcing the required kubeconfig context. Failures here are fatal.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Mapping

from demo_setup.errors import ContextError, NotLoggedInError
from demo_setup.profile import ShellProfile
from demo_setup.report import RunReport
from shared.utils import logger

if TYPE_CHECKING:
    from demo_setup.config import PipelineConfig
    from shared.oc_runner import OcRunner


@dataclass
class SetupContext:
    """State handed to every step instead of process-wide globals.

    ``exports`` collects the variables to persist; nothing touches the
    shell profile until :meth:`write_configuration` is called.
    """

    oc: OcRunner
    config: PipelineConfig
    profile: ShellProfile
    env: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))
    home: Path = field(default_factory=Path.home)
    report: RunReport = field(default_factory=RunReport)
    # header comment -> {name: value}; None holds exports written without a header
    exports: dict[str | None, dict[str, str]] = field(default_factory=dict)

    def set_export(self, name: str, value: str, header: str | None = None) -> None:
        self.exports.setdefault(header, {})[name] = value

    def write_configuration(self) -> None:
        if not self.exports:
            return
        names = []
        for header, block in self.exports.items():
            self.profile.upsert_exports(block, header=header)
            names += block
        logger.info(f"Updated {self.profile.path}: {', '.join(sorted(names))}")


def ensure_logged_in(oc: OcRunner) -> str:
    """Return the current user; raise if the CLI session is not authenticated."""
    logger.info("Checking OpenShift CLI connection...")
    user = oc.whoami()
    if not user:
        raise NotLoggedInError("OpenShift CLI not connected. Please login first with: oc login")
    logger.info(f"OpenShift CLI connected as: {user}")
    return user


def ensure_context(oc: OcRunner, required: str | None) -> str:
    """Switch to ``required`` if needed. Returns the context that was active before."""
    current = oc.current_context()
    if not required:
        return current
    if current == required:
        logger.info(f"Already in '{required}' context")
        return current
    logger.info(f"Current context is '{current}'. Switching to '{required}'...")
    if required not in oc.context_names():
        raise ContextError(f"Context '{required}' not found in kubeconfig. Please ensure the context exists.")
    if not oc.use_context(required):
        raise ContextError(f"Failed to switch to '{required}' context.")
    logger.info(f"Switched to '{required}' context")
    return current


def restore_context(oc: OcRunner, previous: str, report: RunReport) -> None:
    if not previous or previous == oc.current_context():
        return
    logger.info(f"Restoring original context: {previous}")
    if not oc.use_context(previous):
        report.warn("context", f"Could not restore context '{previous}'")


def guard(oc: OcRunner, required: str | None) -> str:
    """Run the full context guard: login check, then context switch."""
    ensure_logged_in(oc)
    return ensure_context(oc, required)
