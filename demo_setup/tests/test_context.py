#!/usr/bin/env python

import unittest

from demo_setup.context import ensure_context, ensure_logged_in, guard, restore_context
from demo_setup.errors import ContextError, NotLoggedInError
from demo_setup.report import RunReport
from demo_setup.tests.fakes import FakeOcRunner, logged_in


class TestContextGuard(unittest.TestCase):
    """Test cases for the login and context checks."""

    def test_not_logged_in_is_fatal(self):
        oc = FakeOcRunner({("whoami",): (1, "")})
        with self.assertRaises(NotLoggedInError):
            ensure_logged_in(oc)

    def test_logged_in_returns_user(self):
        self.assertEqual(ensure_logged_in(FakeOcRunner(logged_in("kubeadmin"))), "kubeadmin")

    def test_already_on_required_context(self):
        oc = FakeOcRunner(logged_in(context="local-cluster"))
        self.assertEqual(ensure_context(oc, "local-cluster"), "local-cluster")
        self.assertFalse(oc.called("config", "use-context"))

    def test_switches_to_required_context(self):
        """Verify the guard switches when the required context is registered."""
        responses = logged_in(context="admin/api-cluster")
        responses[("config", "get-contexts", "-o", "name")] = (0, "admin/api-cluster\nlocal-cluster\n")
        responses[("config", "use-context", "local-cluster")] = (0, "")
        oc = FakeOcRunner(responses)

        previous = ensure_context(oc, "local-cluster")

        self.assertEqual(previous, "admin/api-cluster")
        self.assertTrue(oc.called("config", "use-context", "local-cluster"))

    def test_unknown_context_is_fatal(self):
        responses = logged_in(context="other")
        responses[("config", "get-contexts", "-o", "name")] = (0, "other\n")
        oc = FakeOcRunner(responses)
        with self.assertRaises(ContextError):
            ensure_context(oc, "local-cluster")
        self.assertFalse(oc.called("config", "use-context"))

    def test_switch_failure_is_fatal(self):
        responses = logged_in(context="other")
        responses[("config", "get-contexts", "-o", "name")] = (0, "other\nlocal-cluster\n")
        responses[("config", "use-context")] = (1, "")
        with self.assertRaises(ContextError):
            ensure_context(FakeOcRunner(responses), "local-cluster")

    def test_no_required_context(self):
        oc = FakeOcRunner(logged_in(context="anything"))
        self.assertEqual(guard(oc, None), "anything")
        self.assertFalse(oc.called("config", "get-contexts"))

    def test_restore_context_failure_is_warning(self):
        responses = logged_in(context="local-cluster")
        responses[("config", "use-context")] = (1, "")
        report = RunReport()
        restore_context(FakeOcRunner(responses), "previous", report)
        self.assertEqual(len(report.warnings), 1)


if __name__ == '__main__':
    unittest.main()
