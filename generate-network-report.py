#!/usr/bin/env python3
"""Backward-compatible CLI wrapper for network report generation."""

from network_report.generators.docs.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
