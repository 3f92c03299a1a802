"""
Logger and subprocess helpers shared by the setup pipelines and tests.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from typing import Dict

LOG_LEVEL_ENV = "DEMO_SETUP_LOG_LEVEL"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(message)s"


def get_logger(name: str = "demo_setup") -> logging.Logger:
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        log.addHandler(handler)
        log.setLevel(os.getenv(LOG_LEVEL_ENV, "INFO").upper())
        log.propagate = False
    return log


logger = get_logger()


class CommandError(RuntimeError):
    """Raised when an external command exits nonzero under check=True."""


def run(
    cmd: list[str],
    *,
    check: bool = True,
    capture_output: bool = False,
    env: Dict[str, str] | None = None,
    cwd: str | None = None,
    timeout: int | None = None,
) -> subprocess.CompletedProcess:
    """Thin wrapper around subprocess.run with nicer error messages."""
    try:
        return subprocess.run(
            cmd,
            check=check,
            capture_output=capture_output,
            text=True,
            env=env,
            cwd=cwd,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise CommandError(f"Command not found: {cmd[0]}") from exc
    except subprocess.CalledProcessError as exc:
        msg = f"Command failed: {' '.join(cmd)}"
        if exc.stdout:
            msg += f"\nSTDOUT:\n{exc.stdout}"
        if exc.stderr:
            msg += f"\nSTDERR:\n{exc.stderr}"
        raise CommandError(msg) from exc
