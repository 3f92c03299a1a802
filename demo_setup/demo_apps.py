"""
Demo applications: fetch the manifest repository once and apply its
manifest trees to the cluster.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from demo_setup.apply import DeploymentTarget, apply_targets, delete_targets
from demo_setup.constants import DEMO_LABEL, TUTORIAL_HOME_ENV
from demo_setup.errors import DemoAppsError
from demo_setup.steps import StepOutcome
from shared.utils import CommandError, logger, run

if TYPE_CHECKING:
    from demo_setup.config import DemoAppsConfig
    from demo_setup.context import SetupContext


def find_existing_checkout(cfg: DemoAppsConfig, home: Path) -> Path | None:
    for candidate in [home / cfg.directory] + [Path(p) for p in cfg.search_paths]:
        if candidate.is_dir():
            return candidate.resolve()
    return None


def ensure_demo_repo(cfg: DemoAppsConfig, home: Path) -> Path:
    """Return the demo repository checkout, cloning it if no copy exists."""
    existing = find_existing_checkout(cfg, home)
    if existing:
        logger.info(f"Demo apps repository already exists at {existing}, skipping clone")
        return existing

    target = home / cfg.directory
    cmd = ["git", "clone"]
    if cfg.branch:
        cmd += ["-b", cfg.branch]
    cmd += [cfg.repo_url, str(target)]
    logger.info(f"Cloning {cfg.repo_url} into {target}...")
    try:
        run(cmd, capture_output=True)
    except CommandError as exc:
        raise DemoAppsError(
            "Failed to clone demo apps repository. Check network connectivity and repository access.\n"
            f"{exc}"
        ) from exc
    logger.info("Demo apps repository cloned successfully")
    return target


def manifest_targets(cfg: DemoAppsConfig, tutorial_home: Path) -> list[DeploymentTarget]:
    return [DeploymentTarget(tutorial_home / d) for d in cfg.manifest_dirs]


def deploy_applications(ctx: SetupContext) -> StepOutcome:
    """Built-in step: clone the demo repo, record TUTORIAL_HOME, apply manifests."""
    cfg = ctx.config.demo_apps
    try:
        tutorial_home = ensure_demo_repo(cfg, ctx.home)
    except DemoAppsError as exc:
        return StepOutcome.failure(str(exc))

    ctx.set_export(TUTORIAL_HOME_ENV, str(tutorial_home))
    logger.info(f"TUTORIAL_HOME set to: {tutorial_home}")

    logger.info(f"Deploying applications from {tutorial_home}...")
    targets = manifest_targets(cfg, tutorial_home)
    applied = apply_targets(ctx.oc, targets, ctx.report)
    logger.info(f"Application deployment completed ({applied}/{len(targets)} manifest trees applied cleanly)")
    logger.info(f"Applications start in the background; check them with: oc get pods -A -l {DEMO_LABEL}")
    return StepOutcome.success()


def remove_applications(ctx: SetupContext) -> int:
    """Delete everything the demo manifest trees declare. Returns trees deleted."""
    cfg = ctx.config.demo_apps
    checkout = find_existing_checkout(cfg, ctx.home)
    if checkout is None:
        ctx.report.warn("cleanup", f"No demo apps checkout found (looked for {ctx.home / cfg.directory})")
        return 0
    logger.info(f"Removing demo applications declared in {checkout}...")
    return delete_targets(ctx.oc, manifest_targets(cfg, checkout), ctx.report)
