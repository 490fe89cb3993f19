"""Inventory cloud network topology and render it as a paginated report.

- model: Network, RouteTable, Route, Subnet, Topology
- builder: staged fetch, normalization and association
- sources: EC2 (boto3) and offline snapshot resource sources
- validators: post-build topology checks
- generators.docs: page layout, PDF/Markdown writers and CLI

Usage:
    from network_report import TopologyBuilder, SnapshotSource, render_document
"""

from .builder import TopologyBuilder
from .errors import CombinedError, ConfigError, ErrorAccumulator, ReportError, SourceError
from .generators.docs.layout import render_document
from .model import Network, Route, RouteTable, Subnet, Topology
from .sources import Ec2Source, NetworkSource, SnapshotSource

__all__ = [
    "CombinedError",
    "ConfigError",
    "Ec2Source",
    "ErrorAccumulator",
    "Network",
    "NetworkSource",
    "ReportError",
    "Route",
    "RouteTable",
    "SnapshotSource",
    "SourceError",
    "Subnet",
    "Topology",
    "TopologyBuilder",
    "render_document",
]

__version__ = "0.1.0"
