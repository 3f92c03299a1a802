"""
Built-in setup pipelines.

acs: full RHACS install with compliance, demo apps and monitoring.
lab: lab variant for clusters where Central is already provisioned.
ai:  OpenShift AI operator and DataScienceCluster.
"""

from __future__ import annotations

from pathlib import Path

from demo_setup.config import PipelineConfig, load_config_file, parse_pipeline_config
from demo_setup.constants import RHACS_INSTALL_GROUP
from demo_setup.demo_apps import deploy_applications
from demo_setup.steps import Action, Step

ACTIONS: dict[str, Action] = {
    "deploy-applications": deploy_applications,
}

AI_OPERATOR_STEP = "01-operator.sh"
AI_CLUSTER_STEP = "02-cluster.sh"


def acs_steps() -> list[Step]:
    return [
        Step("01-rhacs-delete.sh", skips_group=RHACS_INSTALL_GROUP),
        Step("02-install-cert-manager.sh", group=RHACS_INSTALL_GROUP),
        Step("03-setup-rhacs-route-tls.sh", group=RHACS_INSTALL_GROUP),
        Step("04-rhacs-subscription-install.sh", group=RHACS_INSTALL_GROUP),
        Step("05-central-install.sh", group=RHACS_INSTALL_GROUP),
        Step("06-scs-setup.sh", group=RHACS_INSTALL_GROUP),
        Step("07-compliance-operator-install.sh"),
        Step("08-deploy-applications", action=deploy_applications),
        Step("09-setup-co-scan-schedule.sh"),
        Step("10-trigger-compliance-scan.sh"),
        Step("11-configure-rhacs-settings.sh"),
        Step("12-setup-perses-monitoring.sh"),
    ]


def lab_steps() -> list[Step]:
    return [
        Step("00-install-roxctl.sh"),
        Step("02-compliance-operator-install.sh"),
        Step("03-deploy-applications", action=deploy_applications),
        Step("04-configure-rhacs-settings.sh"),
        Step("05-setup-perses-monitoring.sh"),
    ]


def ai_steps() -> list[Step]:
    return [Step(AI_OPERATOR_STEP), Step(AI_CLUSTER_STEP)]


def builtin_pipeline(name: str) -> PipelineConfig:
    if name == "acs":
        cfg = PipelineConfig(name="acs", title="RHACS Demo Setup", steps=acs_steps(), access="rhacs")
    elif name == "lab":
        cfg = PipelineConfig(name="lab", title="RHACS Lab Setup", steps=lab_steps(), access="rhacs")
    elif name == "ai":
        cfg = PipelineConfig(
            name="ai", title="Red Hat OpenShift AI Setup", steps=ai_steps(), access="ai",
            required_context=None,
        )
    else:
        raise ValueError(f"Unknown pipeline: {name}. Use one of: {', '.join(PIPELINES)}")
    return cfg


PIPELINES = ("acs", "lab", "ai")


def load_pipeline(
    name: str = "acs",
    config_file: str | Path | None = None,
    scripts_dir: Path | None = None,
) -> PipelineConfig:
    """Built-in pipeline ``name``, overridden by ``config_file`` when given.

    An explicit ``scripts_dir`` wins over both.
    """
    cfg = builtin_pipeline(name)
    if config_file:
        cfg = parse_pipeline_config(load_config_file(config_file), ACTIONS, base=cfg)
    if scripts_dir is not None:
        cfg.scripts_dir = scripts_dir
    return cfg
