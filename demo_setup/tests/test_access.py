#!/usr/bin/env python

import base64
import io
import unittest
from contextlib import redirect_stdout

from demo_setup.access import AI_ACCESS, RHACS_ACCESS, AccessInfo, discover_access, print_access_info
from demo_setup.tests.fakes import FakeOcRunner


def route_host(namespace, name="central"):
    return ("get", "route", name, "-n", namespace, "-o", "jsonpath={.spec.host}")


def route_tls(namespace, name="central"):
    return ("get", "route", name, "-n", namespace, "-o", "jsonpath={.spec.tls}")


class TestDiscoverRhacsAccess(unittest.TestCase):
    """Test cases for RHACS Central access discovery."""

    def test_tls_route_uses_https(self):
        oc = FakeOcRunner({
            route_host("rhacs-operator"): (0, "central-rhacs.apps.example.com"),
            route_tls("rhacs-operator"): (0, '{"termination":"passthrough"}'),
            ("get", "secret", "central-htpasswd", "-n", "rhacs-operator"): (
                0, base64.b64encode(b"s3cret").decode()),
        })
        info = discover_access(oc, RHACS_ACCESS, {})

        self.assertEqual(info.url, "https://central-rhacs.apps.example.com")
        self.assertEqual(info.password, "s3cret")
        self.assertEqual(info.namespace, "rhacs-operator")

    def test_plain_route_uses_http(self):
        oc = FakeOcRunner({route_host("rhacs-operator"): (0, "central.example.com")})
        info = discover_access(oc, RHACS_ACCESS, {"ACS_PORTAL_PASSWORD": "pw"})
        self.assertEqual(info.url, "http://central.example.com")
        self.assertEqual(info.password, "pw")

    def test_fallback_namespace(self):
        """Verify the stackrox namespace is used when rhacs-operator has no route."""
        oc = FakeOcRunner({
            route_host("stackrox"): (0, "central-stackrox.example.com"),
            route_tls("stackrox"): (0, "null"),
        })
        info = discover_access(oc, RHACS_ACCESS, {})
        self.assertEqual(info.namespace, "stackrox")
        self.assertEqual(info.url, "http://central-stackrox.example.com")

    def test_route_missing(self):
        info = discover_access(FakeOcRunner(), RHACS_ACCESS, {})
        self.assertIsNone(info.url)
        self.assertIsNone(info.password)
        self.assertEqual(info.namespace, "rhacs-operator")


class TestDiscoverAiAccess(unittest.TestCase):
    """Test cases for OpenShift AI dashboard discovery."""

    def test_dashboard_label_fallback(self):
        oc = FakeOcRunner({
            ("get", "route", "-n", "redhat-ods-applications", "-l", "app=odh-dashboard"): (
                0, "odh-dashboard.apps.example.com"),
        })
        info = discover_access(oc, AI_ACCESS, {"KUBEADMIN_PASSWORD": "kp"})
        self.assertEqual(info.url, "https://odh-dashboard.apps.example.com")
        self.assertEqual(info.password, "kp")


class TestPrintAccessInfo(unittest.TestCase):
    """Test cases for print_access_info."""

    def render(self, info, target=RHACS_ACCESS):
        buf = io.StringIO()
        with redirect_stdout(buf):
            print_access_info(info, target)
        return buf.getvalue()

    def test_complete_info(self):
        out = self.render(AccessInfo("rhacs-operator", url="https://c.example.com", password="pw"))
        self.assertIn("RHACS Central URL: https://c.example.com", out)
        self.assertIn("Admin Username: admin", out)
        self.assertIn("Admin Password: pw", out)

    def test_missing_route_and_password_print_instructions(self):
        out = self.render(AccessInfo("rhacs-operator"))
        self.assertIn("Not found (route 'central' not found in namespace 'rhacs-operator')", out)
        self.assertIn("oc get route central -n rhacs-operator", out)
        self.assertIn(
            "oc get secret central-htpasswd -n rhacs-operator -o jsonpath='{.data.password}' | base64 -d",
            out,
        )


if __name__ == '__main__':
    unittest.main()
