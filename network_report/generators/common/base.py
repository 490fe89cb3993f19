"""Base classes and protocols for report generators."""

from __future__ import annotations

import argparse
from typing import Optional, Protocol, Sequence, runtime_checkable

import yaml

from ...errors import CombinedError, ConfigError
from ...model import Topology


@runtime_checkable
class Generator(Protocol):
    """Protocol defining the interface for all report generators.

    All generators must implement these methods to ensure consistent
    behavior across the generation pipeline.
    """

    topology: Topology

    def load_topology(self) -> bool:
        """Fetch and resolve the topology.

        Returns:
            True if networks could be listed, False otherwise.
        """
        ...

    def generate_all(self) -> bool:
        """Generate all output files.

        Returns:
            True if all files were written, False otherwise.
        """
        ...

    def print_summary(self) -> None:
        """Print a summary of the generation results."""
        ...

    def combined_error(self) -> Optional[CombinedError]:
        """Return every error recorded during the run as one error, or None."""
        ...


class GeneratorCLI:
    """Base class for generator CLI entrypoints.

    Provides common argument parsing and execution flow for all generators.
    Subclasses should override class attributes and optionally add_extra_arguments().
    """

    # Override in subclasses
    description: str = "Generate a report from cloud network topology"
    banner: str = "Network Report Generator"
    default_output: str = "network.pdf"
    success_message: str = "Generation completed successfully!"

    def __init__(self, generator_class: type) -> None:
        """Initialize CLI with the generator class to use.

        Args:
            generator_class: The generator class that will be instantiated.
        """
        self.generator_class = generator_class

    def build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser with standard arguments.

        Returns:
            Configured ArgumentParser instance.
        """
        parser = argparse.ArgumentParser(description=self.description)
        parser.add_argument(
            "--config",
            default=None,
            help="Path to report config YAML (defaults are built in)",
        )
        parser.add_argument(
            "--output",
            default=None,
            help=f"Output file (default: {self.default_output})",
        )
        parser.add_argument(
            "--fail-on-errors",
            action="store_true",
            help="Exit with status 1 when any error was recorded, even if the report was written",
        )
        self.add_extra_arguments(parser)
        return parser

    def add_extra_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Override to add generator-specific arguments.

        Args:
            parser: The ArgumentParser to add arguments to.
        """
        pass

    def create_generator(self, args: argparse.Namespace) -> Generator:
        """Create generator instance from parsed arguments.

        Override this method if your generator needs special initialization.
        """
        return self.generator_class(args)

    def report_errors(self, generator: Generator, prefix: str) -> bool:
        """Print the combined error, if any. Returns True when errors were present."""
        combined = generator.combined_error()
        if combined is None:
            return False
        print(f"\n{prefix} {len(combined.errors)} error(s) recorded:")
        for line in str(combined).splitlines():
            print(f"  - {line}")
        return True

    def run_generator(self, generator: Generator, fail_on_errors: bool = False) -> bool:
        """Execute the generator workflow.

        Returns:
            True if generation succeeded, False otherwise.
        """
        if not generator.load_topology():
            self.report_errors(generator, "ERROR")
            return False

        print("\nGEN Generating output files...\n")

        if not generator.generate_all():
            print("\nERROR Generation failed with errors")
            self.report_errors(generator, "ERROR")
            return False

        generator.print_summary()
        had_errors = self.report_errors(generator, "WARN ")
        return not (fail_on_errors and had_errors)

    def main(self, argv: Sequence[str] | None = None) -> int:
        """Main entry point for the CLI.

        Returns:
            Exit code: 0 for success, 1 for failure.
        """
        args = self.build_parser().parse_args(argv)

        print("=" * 70)
        print(self.banner)
        print("=" * 70)
        print()

        try:
            generator = self.create_generator(args)
        except (OSError, ConfigError, yaml.YAMLError, ValueError) as e:
            print(f"ERROR {e}")
            return 1

        if not self.run_generator(generator, fail_on_errors=args.fail_on_errors):
            return 1

        print(f"\nOK {self.success_message}\n")
        return 0


def run_cli(cli: GeneratorCLI, argv: Sequence[str] | None = None) -> int:
    """Convenience function to run a GeneratorCLI."""
    return cli.main(argv)
