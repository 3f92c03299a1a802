"""
Discover and print connection details (route URL and admin credential)
once a pipeline has finished.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Mapping, Optional

from demo_setup.constants import (
    ADMIN_USERNAME,
    CENTRAL_HTPASSWD_SECRET,
    CENTRAL_ROUTE_NAME,
    DASHBOARD_FALLBACK_SELECTOR,
    DASHBOARD_ROUTE_NAME,
    DSC_NAMESPACE,
    HTPASSWD_NAMESPACE,
    HTPASSWD_SECRET,
    KUBEADMIN_NAMESPACE,
    KUBEADMIN_SECRET,
    RHACS_FALLBACK_NAMESPACE,
    RHACS_OPERATOR_NAMESPACE,
)
from demo_setup.credentials import (
    CredentialSource,
    kubeadmin_password_sources,
    resolve_credential,
    rhacs_password_sources,
)

if TYPE_CHECKING:
    from demo_setup.profile import ShellProfile
    from shared.oc_runner import OcRunner


@dataclass
class AccessTarget:
    """Where to look for a product's route and admin credential."""

    title: str
    url_label: str
    route_name: str
    namespaces: list[str]
    credential_sources: Callable[[str], list[CredentialSource]]
    password_hint: str
    fallback_selector: Optional[str] = None
    # None: pick the scheme from the route's TLS settings
    scheme: Optional[str] = None


@dataclass
class AccessInfo:
    namespace: str
    url: Optional[str] = None
    username: str = ADMIN_USERNAME
    password: Optional[str] = None
    notes: list[str] = field(default_factory=list)


RHACS_ACCESS = AccessTarget(
    title="RHACS Access Information",
    url_label="RHACS Central URL",
    route_name=CENTRAL_ROUTE_NAME,
    namespaces=[RHACS_OPERATOR_NAMESPACE, RHACS_FALLBACK_NAMESPACE],
    credential_sources=rhacs_password_sources,
    password_hint=(
        f"oc get secret {CENTRAL_HTPASSWD_SECRET} -n {{namespace}} "
        "-o jsonpath='{{.data.password}}' | base64 -d"
    ),
)

AI_ACCESS = AccessTarget(
    title="OpenShift AI Access Information",
    url_label="Dashboard URL",
    route_name=DASHBOARD_ROUTE_NAME,
    namespaces=[DSC_NAMESPACE],
    credential_sources=lambda _namespace: kubeadmin_password_sources(),
    password_hint=(
        f"oc get secret {KUBEADMIN_SECRET} -n {KUBEADMIN_NAMESPACE} "
        "-o jsonpath='{{.data.password}}' | base64 -d"
    ),
    fallback_selector=DASHBOARD_FALLBACK_SELECTOR,
    scheme="https",
)


def find_route_host(oc: OcRunner, target: AccessTarget) -> tuple[str, str]:
    """Return (namespace, host) of the first namespace exposing the route."""
    for namespace in target.namespaces:
        host = oc.get_jsonpath("route", target.route_name, namespace, "{.spec.host}")
        if host:
            return namespace, host
        if target.fallback_selector:
            host = oc.get_jsonpath(
                "route", None, namespace, "{.items[0].spec.host}",
                selector=target.fallback_selector,
            )
            if host:
                return namespace, host
    return target.namespaces[0], ""


def route_scheme(oc: OcRunner, target: AccessTarget, namespace: str) -> str:
    if target.scheme:
        return target.scheme
    tls = oc.get_jsonpath("route", target.route_name, namespace, "{.spec.tls}")
    return "https" if tls and tls != "null" else "http"


def discover_access(
    oc: OcRunner,
    target: AccessTarget,
    env: Mapping[str, str],
    profile: ShellProfile | None = None,
) -> AccessInfo:
    namespace, host = find_route_host(oc, target)
    info = AccessInfo(namespace=namespace)
    if host:
        info.url = f"{route_scheme(oc, target, namespace)}://{host}"
    info.password = resolve_credential(target.credential_sources(namespace), env, profile, oc)
    return info


def htpasswd_has_user(oc: OcRunner, user: str = ADMIN_USERNAME) -> bool:
    """True when the cluster htpasswd identity provider defines ``user``."""
    content = oc.get_secret_field(HTPASSWD_SECRET, HTPASSWD_NAMESPACE, "htpasswd") or ""
    return any(line.startswith(f"{user}:") for line in content.splitlines())


def print_access_info(info: AccessInfo, target: AccessTarget) -> None:
    print("\n" + "=" * 60)
    print(target.title)
    print("=" * 60)
    if info.url:
        print(f"{target.url_label}: {info.url}")
    else:
        print(f"{target.url_label}: Not found (route '{target.route_name}' not found in namespace '{info.namespace}')")
        print("  The route is created once the product is fully ready. Check it with:")
        print(f"    oc get route {target.route_name} -n {info.namespace}")
    print(f"Admin Username: {info.username}")
    if info.password:
        print(f"Admin Password: {info.password}")
    else:
        print("Admin Password: Not found (use your cluster admin credentials)")
        print(f"  To retrieve it manually: {target.password_hint.format(namespace=info.namespace)}")
    for note in info.notes:
        print(f"  {note}")
    print("=" * 60)
