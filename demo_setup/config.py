"""
Pipeline configuration.

Configuration dataclasses and YAML config file loading. Built-in pipelines
are declared in ``demo_setup.pipelines``; a YAML file may replace any of
their settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from demo_setup.constants import (
    DEFAULT_PROFILE,
    DEFAULT_REQUIRED_CONTEXT,
    DEMO_APPS_BRANCH,
    DEMO_APPS_DIRECTORY,
    DEMO_APPS_REPO_URL,
    DEMO_MANIFEST_DIRS,
)
from demo_setup.errors import ConfigError
from demo_setup.steps import Action, Step

ACCESS_KINDS = ("rhacs", "ai")


@dataclass
class DemoAppsConfig:
    """Demo applications repository and the manifest trees applied from it."""

    repo_url: str = DEMO_APPS_REPO_URL
    branch: str | None = DEMO_APPS_BRANCH
    directory: str = DEMO_APPS_DIRECTORY
    # Extra places an existing checkout may live (checked before cloning)
    search_paths: list[str] = field(default_factory=list)
    manifest_dirs: list[str] = field(default_factory=lambda: list(DEMO_MANIFEST_DIRS))


@dataclass
class PipelineConfig:
    name: str
    title: str
    steps: list[Step]
    required_context: str | None = DEFAULT_REQUIRED_CONTEXT
    scripts_dir: Path = field(default_factory=Path.cwd)
    profile_path: str = DEFAULT_PROFILE
    # Which access report to print at the end: "rhacs", "ai" or None
    access: str | None = None
    demo_apps: DemoAppsConfig = field(default_factory=DemoAppsConfig)
    script_timeout: int | None = None


def _expand_path(path: str | None) -> str | None:
    """Expand ~ and environment variables in a path."""
    if path is None:
        return None
    return os.path.expanduser(os.path.expandvars(path))


def load_config_file(config_path: str | Path) -> dict[str, Any]:
    """
    Load configuration from a YAML file.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ConfigError: If the file is not a YAML mapping
    """
    config_path = Path(config_path).expanduser()

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if not isinstance(config, dict):
        raise ConfigError(f"Configuration file must contain a mapping: {config_path}")
    return config


def _string_list(value: Any, key: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings")
    return list(value)


def _optional_str(value: Any, key: str) -> str | None:
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string")
    return value


def _timeout(value: Any) -> int | None:
    if not value:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"'script_timeout' must be a positive number of seconds, got {value!r}")
    return value


def parse_steps(raw_steps: Any, actions: Mapping[str, Action]) -> list[Step]:
    if not isinstance(raw_steps, list) or not raw_steps:
        raise ConfigError("'steps' must be a non-empty list")
    steps = []
    for entry in raw_steps:
        if isinstance(entry, str):
            entry = {"name": entry}
        if not isinstance(entry, dict) or "name" not in entry:
            raise ConfigError(f"Invalid step entry: {entry!r}")
        action = None
        if entry.get("action"):
            try:
                action = actions[entry["action"]]
            except KeyError:
                raise ConfigError(
                    f"Unknown action '{entry['action']}' for step {entry['name']}. "
                    f"Available: {', '.join(sorted(actions))}"
                ) from None
        steps.append(
            Step(
                name=str(entry["name"]),
                script=_optional_str(entry.get("script"), "script"),
                action=action,
                group=_optional_str(entry.get("group"), "group"),
                skips_group=_optional_str(entry.get("skips_group"), "skips_group"),
            )
        )
    return steps


def parse_pipeline_config(
    raw: dict[str, Any],
    actions: Mapping[str, Action],
    base: PipelineConfig | None = None,
) -> PipelineConfig:
    """Build a PipelineConfig from a parsed YAML mapping, on top of ``base``."""
    if base is None and "steps" not in raw:
        raise ConfigError("Missing required key: steps")
    steps = parse_steps(raw["steps"], actions) if "steps" in raw else base.steps
    name = _optional_str(raw.get("name"), "name") or (base.name if base else "custom")
    cfg = PipelineConfig(
        name=name,
        title=_optional_str(raw.get("title"), "title") or (base.title if base else name),
        steps=steps,
    )
    if base:
        cfg.required_context = base.required_context
        cfg.scripts_dir = base.scripts_dir
        cfg.profile_path = base.profile_path
        cfg.access = base.access
        cfg.demo_apps = base.demo_apps
        cfg.script_timeout = base.script_timeout

    if "required_context" in raw:
        cfg.required_context = _optional_str(raw["required_context"], "required_context") or None
    if raw.get("scripts_dir"):
        cfg.scripts_dir = Path(_expand_path(_optional_str(raw["scripts_dir"], "scripts_dir")))
    if raw.get("profile"):
        cfg.profile_path = _optional_str(raw["profile"], "profile")
    if "access" in raw:
        if raw["access"] not in ACCESS_KINDS + (None,):
            raise ConfigError(f"'access' must be one of {ACCESS_KINDS} or null")
        cfg.access = raw["access"]
    if "script_timeout" in raw:
        cfg.script_timeout = _timeout(raw["script_timeout"])

    demo = raw.get("demo_apps")
    if demo is not None:
        if not isinstance(demo, dict):
            raise ConfigError("'demo_apps' must be a mapping")
        search_paths = _string_list(demo.get("search_paths", cfg.demo_apps.search_paths), "demo_apps.search_paths")
        cfg.demo_apps = DemoAppsConfig(
            repo_url=_optional_str(demo.get("repo_url"), "demo_apps.repo_url") or cfg.demo_apps.repo_url,
            branch=_optional_str(demo.get("branch", cfg.demo_apps.branch), "demo_apps.branch"),
            directory=_optional_str(demo.get("directory"), "demo_apps.directory") or cfg.demo_apps.directory,
            search_paths=[_expand_path(p) for p in search_paths],
            manifest_dirs=_string_list(
                demo.get("manifest_dirs", list(cfg.demo_apps.manifest_dirs)), "demo_apps.manifest_dirs"
            ),
        )
    return cfg

