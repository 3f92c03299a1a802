#!/usr/bin/env python3
"""
Prepare an OpenShift cluster for the RHACS / OpenShift AI demos.

Each command is responsible for a single task and does NOT trigger the next one.

Usage:
  demo-setup run-all [--pipeline acs|lab] [--config FILE] [--scripts-dir DIR]
  demo-setup ai-setup [--skip-operator] [--skip-cluster] [--scripts-dir DIR]
  demo-setup deploy-apps      # clone demo apps and apply their manifests
  demo-setup credentials      # print route URL and admin credential
  demo-setup cleanup          # delete the demo applications
  demo-setup verify           # run live verification tests against the cluster
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from demo_setup.errors import SetupError
from demo_setup.pipelines import PIPELINES


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that exits with 1 (not 2) on usage errors."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}. Use --help for usage information.\n")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = ArgumentParser(
        prog="demo-setup",
        description="Prepare an OpenShift cluster for the RHACS and OpenShift AI demos.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s run-all --scripts-dir ./setup
  %(prog)s run-all --pipeline lab --config pipelines/lab-setup.yaml
  %(prog)s ai-setup --skip-operator
""",
    )
    parser.add_argument("--kubeconfig", help="Kubeconfig to use instead of the current one.")

    def add_pipeline_args(p: argparse.ArgumentParser, default_pipeline: str = "acs") -> None:
        p.add_argument("-p", "--pipeline", choices=PIPELINES, default=default_pipeline,
                       help="Built-in pipeline to use (default: %(default)s).")
        p.add_argument("-c", "--config", dest="config_file", help="YAML file overriding the pipeline.")
        p.add_argument("--scripts-dir", type=Path, help="Directory holding the step scripts.")

    subparsers = parser.add_subparsers(dest="command", parser_class=ArgumentParser, help="Action to perform")

    run_all = subparsers.add_parser("run-all", help="Run every setup step in order")
    add_pipeline_args(run_all)

    ai = subparsers.add_parser(
        "ai-setup",
        help="Install the OpenShift AI Operator and deploy the DataScienceCluster",
        description="Installs Red Hat OpenShift AI: 1. operator installation, 2. DataScienceCluster deployment.",
    )
    ai.add_argument("--skip-operator", action="store_true", help="Skip OpenShift AI Operator installation")
    ai.add_argument("--skip-cluster", action="store_true", help="Skip DataScienceCluster deployment")
    ai.add_argument("--scripts-dir", type=Path, help="Directory holding 01-operator.sh and 02-cluster.sh.")

    for name, help_text in (
        ("deploy-apps", "Clone the demo applications and apply their manifests"),
        ("credentials", "Print the access URL and admin credential"),
        ("cleanup", "Delete the demo applications from the cluster"),
    ):
        add_pipeline_args(subparsers.add_parser(name, help=help_text))

    subparsers.add_parser("verify", help="Run live verification tests against the cluster")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    command = args.command
    if not command:
        print(
            "Error: no command specified. Use one of: run-all, ai-setup, deploy-apps, credentials, cleanup, verify",
            file=sys.stderr,
        )
        return 1

    if command == "verify":
        from demo_setup.verify import run_cluster_tests

        return run_cluster_tests(args.kubeconfig)

    from demo_setup import main as setup
    from demo_setup.pipelines import load_pipeline
    from shared.oc_runner import LocalOcRunner

    try:
        oc = LocalOcRunner(args.kubeconfig)
        if command == "ai-setup":
            setup.run_ai_setup(
                oc,
                scripts_dir=args.scripts_dir,
                skip_operator=args.skip_operator,
                skip_cluster=args.skip_cluster,
            )
            return 0

        cfg = load_pipeline(args.pipeline, config_file=args.config_file, scripts_dir=args.scripts_dir)
        if command == "run-all":
            setup.run_pipeline(oc, cfg)
        elif command == "deploy-apps":
            setup.run_deploy_applications(oc, cfg)
        elif command == "credentials":
            setup.show_access(oc, cfg)
        elif command == "cleanup":
            setup.run_cleanup(oc, cfg)
    except (SetupError, FileNotFoundError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
