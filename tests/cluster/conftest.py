"""Pytest fixtures for demo deployment verification tests."""

from __future__ import annotations

import logging
import os

import pytest
from kubernetes import client, config
from kubernetes.client.rest import ApiException

from tests.cluster.constants import (
    CENTRAL_ROUTE_NAME,
    RHACS_NAMESPACES,
    ROUTE_GROUP,
    ROUTE_PLURAL,
    ROUTE_VERSION,
)

logger = logging.getLogger(__name__)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "cluster: live verification tests against a cluster")


# ---------------------------------------------------------------------------
# Kubernetes client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def load_kubeconfig():
    """Load Kubernetes configuration once per session.

    Skips the live suite when no cluster configuration is available, so a
    plain unit-test run never needs a cluster.
    """
    kubeconfig_env = os.environ.get("KUBECONFIG")
    if kubeconfig_env:
        try:
            config.load_kube_config(config_file=kubeconfig_env)
            return
        except config.ConfigException as exc:
            pytest.fail(
                f"KUBECONFIG is set ({kubeconfig_env}) but could not be loaded: {exc}"
            )
    try:
        config.load_incluster_config()
        return
    except config.ConfigException:
        pass
    try:
        config.load_kube_config()
    except (config.ConfigException, OSError) as exc:
        pytest.skip(f"No Kubernetes config available: {exc}")


@pytest.fixture(scope="session")
def k8s_core_api(load_kubeconfig) -> client.CoreV1Api:
    """Return a CoreV1Api client."""
    return client.CoreV1Api()


@pytest.fixture(scope="session")
def k8s_custom_api(load_kubeconfig) -> client.CustomObjectsApi:
    """Return a CustomObjectsApi client."""
    return client.CustomObjectsApi()


# ---------------------------------------------------------------------------
# RHACS fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def central_route(k8s_custom_api: client.CustomObjectsApi) -> dict:
    """Return the Central route from the first RHACS namespace that has one.

    Skips the RHACS checks if Central is not installed.
    """
    for namespace in RHACS_NAMESPACES:
        try:
            route = k8s_custom_api.get_namespaced_custom_object(
                ROUTE_GROUP, ROUTE_VERSION, namespace, ROUTE_PLURAL, CENTRAL_ROUTE_NAME,
            )
        except ApiException as exc:
            if exc.status == 404:
                continue
            raise
        logger.info("Found Central route in %s", namespace)
        return route
    pytest.skip(f"Route '{CENTRAL_ROUTE_NAME}' not found in {RHACS_NAMESPACES}")
