"""
RHACS and OpenShift AI demo environment setup for OpenShift.

This package drives the cluster CLI through ordered setup pipelines:
- Context guard (oc login check, required kubeconfig context)
- Setup steps (sub-scripts and built-in actions, with an
  "already installed" shortcut that skips the RHACS install group)
- Demo application deployment from the demo-apps repository
- Access information (route URL and admin credential)
"""

from demo_setup.main import run_ai_setup, run_all_setup, run_pipeline

__all__ = ["run_pipeline", "run_all_setup", "run_ai_setup"]
