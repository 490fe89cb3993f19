"""Shared helpers for report generators."""

from .base import Generator, GeneratorCLI, run_cli
from .config import DEFAULT_PDF_OUTPUT, PageSettings, ReportConfig, default_report_config

__all__ = [
    "DEFAULT_PDF_OUTPUT",
    "default_report_config",
    "Generator",
    "GeneratorCLI",
    "PageSettings",
    "ReportConfig",
    "run_cli",
]
