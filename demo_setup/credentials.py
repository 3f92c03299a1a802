"""
Resolve an admin credential through an ordered chain of sources.

The first source yielding a non-empty value wins. Lookup errors and
undecodable secrets count as misses and never stop resolution.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Mapping, Optional

from demo_setup.constants import (
    ACS_PASSWORD_ALTERNATE_ENVS,
    ACS_PASSWORD_ENV,
    CENTRAL_HTPASSWD_SECRET,
    CENTRAL_PASSWORD_FIELDS,
    KUBEADMIN_NAMESPACE,
    KUBEADMIN_PASSWORD_ENV,
    KUBEADMIN_SECRET,
    RHACS_OPERATOR_NAMESPACE,
)
from shared.utils import logger

if TYPE_CHECKING:
    from demo_setup.profile import ShellProfile
    from shared.oc_runner import OcRunner


class LookupMethod(enum.Enum):
    ENV_VAR = "env"
    FILE_GREP = "profile"
    CLUSTER_SECRET = "secret"


@dataclass
class CredentialSource:
    """One place a credential may live.

    ``key`` is the variable name for ENV_VAR / FILE_GREP and the secret
    field for CLUSTER_SECRET.
    """

    priority: int
    method: LookupMethod
    key: str
    secret_name: Optional[str] = None
    namespace: Optional[str] = None
    value: Optional[str] = None

    def describe(self) -> str:
        if self.method is LookupMethod.CLUSTER_SECRET:
            return f"secret {self.namespace}/{self.secret_name}[{self.key}]"
        return f"{self.method.value} {self.key}"


def lookup(
    source: CredentialSource,
    env: Mapping[str, str],
    profile: ShellProfile | None,
    oc: OcRunner | None,
) -> str | None:
    if source.method is LookupMethod.ENV_VAR:
        value = env.get(source.key)
    elif source.method is LookupMethod.FILE_GREP:
        value = profile.get_export(source.key) if profile else None
    else:
        if oc is None or not source.secret_name or not source.namespace:
            return None
        value = oc.get_secret_field(source.secret_name, source.namespace, source.key)
    value = (value or "").strip()
    return value or None


def resolve_credential(
    sources: Iterable[CredentialSource],
    env: Mapping[str, str],
    profile: ShellProfile | None = None,
    oc: OcRunner | None = None,
) -> str | None:
    """Return the value of the highest-priority source that has one."""
    for source in sorted(sources, key=lambda s: s.priority):
        source.value = lookup(source, env, profile, oc)
        if source.value:
            logger.debug(f"Credential resolved from {source.describe()}")
            return source.value
        logger.debug(f"No credential in {source.describe()}")
    return None


def rhacs_password_sources(namespace: str = RHACS_OPERATOR_NAMESPACE) -> list[CredentialSource]:
    """Environment, then ~/.bashrc, then the Central htpasswd secret, then alternates."""
    sources = [
        CredentialSource(0, LookupMethod.ENV_VAR, ACS_PASSWORD_ENV),
        CredentialSource(1, LookupMethod.FILE_GREP, ACS_PASSWORD_ENV),
    ]
    priority = 2
    for secret_field in CENTRAL_PASSWORD_FIELDS:
        sources.append(
            CredentialSource(
                priority,
                LookupMethod.CLUSTER_SECRET,
                secret_field,
                secret_name=CENTRAL_HTPASSWD_SECRET,
                namespace=namespace,
            )
        )
        priority += 1
    for name in ACS_PASSWORD_ALTERNATE_ENVS:
        sources.append(CredentialSource(priority, LookupMethod.ENV_VAR, name))
        priority += 1
    return sources


def kubeadmin_password_sources() -> list[CredentialSource]:
    return [
        CredentialSource(0, LookupMethod.ENV_VAR, KUBEADMIN_PASSWORD_ENV),
        CredentialSource(
            1,
            LookupMethod.CLUSTER_SECRET,
            "password",
            secret_name=KUBEADMIN_SECRET,
            namespace=KUBEADMIN_NAMESPACE,
        ),
    ]
