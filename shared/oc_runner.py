"""
Abstraction for running oc/kubectl against the cluster.

LocalOcRunner runs oc locally, either with the caller's current kubeconfig
or with an explicit KUBECONFIG path.
"""

from __future__ import annotations

import base64
import binascii
import os
import subprocess
from pathlib import Path
from typing import Optional


class OcRunner:
    """
    Runs oc commands against the cluster.
    Implementations: LocalOcRunner (local binary).
    """

    def oc(
        self,
        *args: str,
        timeout: Optional[int] = None,
        stdin: Optional[str] = None,
    ) -> subprocess.CompletedProcess:
        """Run oc with given args. Optional stdin for apply -f -."""
        raise NotImplementedError

    def whoami(self) -> str | None:
        """Return the logged-in user name, or None when not authenticated."""
        r = self.oc("whoami", timeout=30)
        if r.returncode != 0:
            return None
        return (r.stdout or "").strip() or None

    def current_context(self) -> str:
        r = self.oc("config", "current-context", timeout=10)
        if r.returncode != 0:
            return ""
        return (r.stdout or "").strip()

    def context_names(self) -> list[str]:
        r = self.oc("config", "get-contexts", "-o", "name", timeout=10)
        if r.returncode != 0:
            return []
        return [line.strip() for line in (r.stdout or "").splitlines() if line.strip()]

    def use_context(self, name: str) -> bool:
        r = self.oc("config", "use-context", name, timeout=10)
        return r.returncode == 0

    def get_jsonpath(
        self,
        kind: str,
        name: str | None,
        namespace: str,
        jsonpath: str,
        selector: str | None = None,
    ) -> str:
        """Return a jsonpath field of a resource, or "" if it cannot be read."""
        args = ["get", kind]
        if name:
            args.append(name)
        args += ["-n", namespace]
        if selector:
            args += ["-l", selector]
        args += ["-o", f"jsonpath={jsonpath}"]
        r = self.oc(*args, timeout=30)
        if r.returncode != 0:
            return ""
        return (r.stdout or "").strip()

    def get_secret_field(self, name: str, namespace: str, field: str) -> str | None:
        """Return a base64-decoded secret field; None if missing or undecodable."""
        raw = self.get_jsonpath("secret", name, namespace, f"{{.data.{field}}}")
        if not raw:
            return None
        try:
            decoded = base64.b64decode(raw, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            return None
        return decoded.strip() or None

    def apply_dir(self, path: str | Path, recursive: bool = True, timeout: int = 300) -> subprocess.CompletedProcess:
        """Apply every manifest under a directory. Caller inspects returncode."""
        args = ["apply", "-f", f"{str(path).rstrip('/')}/"]
        if recursive:
            args.append("--recursive")
        return self.oc(*args, timeout=timeout)

    def delete_dir(self, path: str | Path, recursive: bool = True, timeout: int = 300) -> subprocess.CompletedProcess:
        args = ["delete", "-f", f"{str(path).rstrip('/')}/", "--ignore-not-found"]
        if recursive:
            args.append("--recursive")
        return self.oc(*args, timeout=timeout)


class LocalOcRunner(OcRunner):
    """Run oc locally, optionally pinned to a KUBECONFIG file."""

    def __init__(self, kubeconfig_path: str | Path | None = None, binary: str = "oc") -> None:
        self.binary = binary
        self.kubeconfig: Path | None = None
        if kubeconfig_path:
            self.kubeconfig = Path(kubeconfig_path).expanduser().resolve()
            if not self.kubeconfig.exists():
                raise RuntimeError(f"Kubeconfig not found: {self.kubeconfig}")

    def oc(
        self,
        *args: str,
        timeout: Optional[int] = None,
        stdin: Optional[str] = None,
    ) -> subprocess.CompletedProcess:
        env = dict(os.environ)
        if self.kubeconfig:
            env["KUBECONFIG"] = str(self.kubeconfig)
        try:
            return subprocess.run(
                [self.binary] + list(args),
                env=env,
                capture_output=True,
                text=True,
                timeout=timeout,
                input=stdin,
            )
        except FileNotFoundError:
            return subprocess.CompletedProcess(
                args=[self.binary] + list(args),
                returncode=127,
                stdout="",
                stderr=f"{self.binary}: command not found",
            )
