"""
Orchestrate a setup pipeline end to end.

Steps (in order):
1. Context guard: oc login check, force the required context
2. Mark steps disabled on the command line as skipped
3. Verify every step script exists
4. Run the steps (a step reporting "already installed" skips its group)
5. Print the run summary with collected warnings
6. Discover and print access information (route URL, admin credential)
7. Persist exports (TUTORIAL_HOME, RHACS variables) to the shell profile
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Mapping

from demo_setup.access import (
    AI_ACCESS,
    RHACS_ACCESS,
    AccessInfo,
    discover_access,
    htpasswd_has_user,
    print_access_info,
)
from demo_setup.constants import (
    ACS_PASSWORD_ENV,
    ACS_USERNAME_ENV,
    ADMIN_USERNAME,
    GRPC_ALPN_ENV,
    ROX_CENTRAL_ADDRESS_ENV,
)
from demo_setup.context import SetupContext, guard, restore_context
from demo_setup.demo_apps import deploy_applications, remove_applications
from demo_setup.errors import StepFailedError
from demo_setup.pipelines import AI_CLUSTER_STEP, AI_OPERATOR_STEP, load_pipeline
from demo_setup.profile import ShellProfile
from demo_setup.report import RunReport, print_summary
from demo_setup.runner import Executor, check_scripts, run_steps
from demo_setup.steps import OutcomeKind
from shared.utils import logger

if TYPE_CHECKING:
    from demo_setup.config import PipelineConfig
    from shared.oc_runner import OcRunner

RHACS_EXPORT_HEADER = "RHACS Environment Variables"
ACCESS_TARGETS = {"rhacs": RHACS_ACCESS, "ai": AI_ACCESS}


def make_context(
    oc: OcRunner,
    cfg: PipelineConfig,
    env: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> SetupContext:
    return SetupContext(
        oc=oc,
        config=cfg,
        profile=ShellProfile(cfg.profile_path),
        env=dict(os.environ) if env is None else env,
        home=home or Path.home(),
        report=RunReport(title=cfg.title),
    )


def report_access(ctx: SetupContext) -> AccessInfo | None:
    """Print access information for the pipeline's product, once."""
    target = ACCESS_TARGETS.get(ctx.config.access or "")
    if target is None:
        return None
    logger.info("Retrieving access information...")
    info = discover_access(ctx.oc, target, ctx.env, ctx.profile)

    if target is RHACS_ACCESS and info.url:
        ctx.set_export(ROX_CENTRAL_ADDRESS_ENV, info.url, header=RHACS_EXPORT_HEADER)
        ctx.set_export(ACS_USERNAME_ENV, ADMIN_USERNAME, header=RHACS_EXPORT_HEADER)
        if info.password:
            ctx.set_export(ACS_PASSWORD_ENV, info.password, header=RHACS_EXPORT_HEADER)
        ctx.set_export(GRPC_ALPN_ENV, "false", header=RHACS_EXPORT_HEADER)
    if target is AI_ACCESS and not info.password:
        if htpasswd_has_user(ctx.oc):
            info.notes.append("admin is an htpasswd user: the password is hashed, use your configured admin password.")
        elif ctx.oc.whoami() == "kubeadmin":
            info.notes.append("You are logged in as kubeadmin: use the kubeadmin password from cluster installation.")

    print_access_info(info, target)
    return info


def run_pipeline(
    oc: OcRunner,
    cfg: PipelineConfig,
    skip: Iterable[str] = (),
    env: Mapping[str, str] | None = None,
    home: Path | None = None,
    executor: Executor | None = None,
) -> RunReport:
    """Run ``cfg`` against the cluster. Raises SetupError on any fatal error."""
    ctx = make_context(oc, cfg, env=env, home=home)
    print("\n" + "=" * 60)
    print(f"Starting {cfg.title}")
    print("=" * 60)
    logger.info(f"Script directory: {cfg.scripts_dir}")

    guard(oc, cfg.required_context)

    skip = set(skip)
    for step in cfg.steps:
        if step.name in skip:
            step.skip("disabled on the command line")
            ctx.report.warn("setup", f"Skipping {step.name} (disabled on the command line)")

    check_scripts(cfg.steps, cfg.scripts_dir)

    try:
        run_steps(cfg.steps, ctx, executor=executor)
    except StepFailedError:
        print_summary(ctx.report)
        raise

    print_summary(ctx.report)
    report_access(ctx)
    ctx.write_configuration()
    return ctx.report


def run_all_setup(
    oc: OcRunner,
    pipeline: str = "acs",
    config_file: str | Path | None = None,
    scripts_dir: Path | None = None,
    **kwargs,
) -> RunReport:
    cfg = load_pipeline(pipeline, config_file=config_file, scripts_dir=scripts_dir)
    return run_pipeline(oc, cfg, **kwargs)


def run_ai_setup(
    oc: OcRunner,
    scripts_dir: Path | None = None,
    skip_operator: bool = False,
    skip_cluster: bool = False,
    **kwargs,
) -> RunReport:
    """Install the OpenShift AI operator and DataScienceCluster.

    Access information is only printed when the cluster step is not skipped.
    """
    cfg = load_pipeline("ai", scripts_dir=scripts_dir)
    skip = []
    if skip_operator:
        skip.append(AI_OPERATOR_STEP)
    if skip_cluster:
        skip.append(AI_CLUSTER_STEP)
        cfg.access = None
    return run_pipeline(oc, cfg, skip=skip, **kwargs)


def run_deploy_applications(
    oc: OcRunner,
    cfg: PipelineConfig,
    env: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> RunReport:
    """Deploy the demo applications only, then restore the original context."""
    ctx = make_context(oc, cfg, env=env, home=home)
    previous = guard(oc, cfg.required_context)
    try:
        outcome = deploy_applications(ctx)
    finally:
        restore_context(oc, previous, ctx.report)
    if outcome.kind is not OutcomeKind.SUCCESS:
        raise StepFailedError("deploy-applications", outcome.reason)
    ctx.write_configuration()
    for w in ctx.report.warnings:
        print(f"  Warning: [{w.source}] {w.message}")
    return ctx.report


def run_cleanup(
    oc: OcRunner,
    cfg: PipelineConfig,
    env: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> RunReport:
    """Remove the demo applications (reverse of the deploy step)."""
    ctx = make_context(oc, cfg, env=env, home=home)
    guard(oc, cfg.required_context)
    deleted = remove_applications(ctx)
    print(f"Demo applications cleanup: {deleted}/{len(cfg.demo_apps.manifest_dirs)} manifest trees removed.")
    return ctx.report


def show_access(
    oc: OcRunner,
    cfg: PipelineConfig,
    env: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> AccessInfo | None:
    """Print access information without running any step."""
    ctx = make_context(oc, cfg, env=env, home=home)
    guard(oc, None)
    return report_access(ctx)
