"""CLI entrypoint for network report generation."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from ...builder import DUPLICATE_POLICIES
from ...sources import Ec2Source, SnapshotSource
from ..common import Generator, GeneratorCLI, ReportConfig, run_cli
from .generator import NetworkReportGenerator


class NetworkReportCLI(GeneratorCLI):
    """CLI for the network report with AWS session and snapshot options."""

    description = "Export VPCs, route tables and subnets as a paginated PDF report"
    banner = "Network Report Generator (VPC / Route Tables / Subnets)"
    default_output = "network.pdf"
    success_message = "Network report generated successfully!"

    def add_extra_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add source selection and report options."""
        parser.add_argument(
            "--profile",
            default=None,
            help="AWS shared-credentials profile to use",
        )
        parser.add_argument(
            "--region",
            default=None,
            help="AWS region to inventory (defaults to the profile/environment region)",
        )
        parser.add_argument(
            "--snapshot",
            default=None,
            help="Read raw records from a snapshot YAML instead of calling AWS",
        )
        parser.add_argument(
            "--save-snapshot",
            default=None,
            dest="save_snapshot",
            help="Write every fetched raw record to a snapshot YAML for later offline runs",
        )
        parser.add_argument(
            "--markdown",
            default=None,
            help="Also write a Markdown version of the report to this path",
        )
        parser.add_argument(
            "--duplicate-policy",
            choices=DUPLICATE_POLICIES,
            default=None,
            dest="duplicate_policy",
            help="How to resolve a subnet claimed by several route tables (default: last-wins)",
        )
        parser.add_argument(
            "--no-checks",
            action="store_false",
            dest="checks",
            default=None,
            help="Skip post-build topology consistency checks",
        )

    def create_generator(self, args: argparse.Namespace) -> Generator:
        """Create NetworkReportGenerator with the selected source and config."""
        config = ReportConfig.load(args.config)
        config.override('output', 'pdf', args.output)
        config.override('output', 'markdown', args.markdown)
        config.override('association', 'duplicate_policy', args.duplicate_policy)
        config.override('checks', 'enabled', args.checks)

        if args.snapshot:
            source = SnapshotSource.from_file(args.snapshot)
            print(f"OK Loaded snapshot: {args.snapshot}")
        else:
            source = Ec2Source(profile=args.profile, region=args.region)

        return NetworkReportGenerator(source, config, snapshot_output=args.save_snapshot)


def build_parser() -> argparse.ArgumentParser:
    return NetworkReportCLI(NetworkReportGenerator).build_parser()


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    return run_cli(NetworkReportCLI(NetworkReportGenerator), argv)


if __name__ == "__main__":
    sys.exit(main())
