"""Resource sources feeding the topology builder.

- ec2: live EC2 describe calls through boto3
- snapshot: raw records captured in a YAML file
"""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, runtime_checkable


@runtime_checkable
class NetworkSource(Protocol):
    """Protocol for anything that can list networks and fetch their resources.

    Records are raw EC2-shaped dicts. Every method raises SourceError on
    failure; a failure is scoped to the one call that raised it.
    """

    def list_networks(self) -> List[Dict[str, Any]]:
        ...

    def fetch_route_tables(self, network_id: str) -> List[Dict[str, Any]]:
        ...

    def fetch_subnets(self, network_id: str) -> List[Dict[str, Any]]:
        ...


from .ec2 import Ec2Source  # noqa: E402
from .snapshot import RecordingSource, SnapshotSource, load_snapshot, write_snapshot  # noqa: E402

__all__ = [
    "Ec2Source",
    "NetworkSource",
    "RecordingSource",
    "SnapshotSource",
    "load_snapshot",
    "write_snapshot",
]
