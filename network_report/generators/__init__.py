"""Generator domains for network report outputs.

- docs: page layout, PDF/Markdown writers and the report CLI
- common: shared base classes and report configuration

Usage:
    from network_report.generators.docs import NetworkReportGenerator
    from network_report.generators.common import GeneratorCLI, ReportConfig
"""

from .common import Generator, GeneratorCLI, PageSettings, ReportConfig
from .docs import NetworkReportGenerator

__all__ = [
    "Generator",
    "GeneratorCLI",
    "NetworkReportGenerator",
    "PageSettings",
    "ReportConfig",
]
