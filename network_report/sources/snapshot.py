"""
Offline resource source backed by a YAML snapshot of raw EC2 records.

Snapshot layout:

    networks: [<describe_vpcs Vpcs entries>]
    route_tables:
      vpc-...: [<describe_route_tables RouteTables entries>]
    subnets:
      vpc-...: [<describe_subnets Subnets entries>]

A network without an entry under route_tables or subnets fails that one
fetch, the same way a denied describe call does against the live API.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import yaml

from ..errors import ConfigError, SourceError
from ..loader import load_yaml_document
from ..validators.schema import load_schema, validate_document

SNAPSHOT_SCHEMA = "snapshot-schema.json"


def load_snapshot(path: Path | str) -> Dict[str, Any]:
    """
    Load and validate a snapshot file.

    Raises:
        FileNotFoundError: snapshot file not found.
        OSError: snapshot or an included path cannot be read.
        yaml.YAMLError: invalid YAML.
        ConfigError: document does not match the snapshot schema.
    """
    try:
        snapshot = load_yaml_document(str(path))
    except ValueError as e:
        raise ConfigError(str(e)) from e

    problems = validate_document(snapshot, load_schema(SNAPSHOT_SCHEMA))
    if problems:
        raise ConfigError(f"Invalid snapshot {path}:\n  " + "\n  ".join(problems))

    snapshot.setdefault('route_tables', {})
    snapshot.setdefault('subnets', {})
    return snapshot


class SnapshotSource:
    """Serve raw records from an in-memory snapshot mapping."""

    def __init__(self, snapshot: Dict[str, Any]):
        self.snapshot = snapshot

    @classmethod
    def from_file(cls, path: Path | str) -> "SnapshotSource":
        return cls(load_snapshot(path))

    def list_networks(self) -> List[Dict[str, Any]]:
        return list(self.snapshot.get('networks', []) or [])

    def _records_for(self, section: str, network_id: str, what: str) -> List[Dict[str, Any]]:
        records = self.snapshot.get(section) or {}
        if network_id not in records:
            raise SourceError(f"Failed to fetch {what} for {network_id}: not present in snapshot")
        return list(records[network_id] or [])

    def fetch_route_tables(self, network_id: str) -> List[Dict[str, Any]]:
        return self._records_for('route_tables', network_id, 'route tables')

    def fetch_subnets(self, network_id: str) -> List[Dict[str, Any]]:
        return self._records_for('subnets', network_id, 'subnets')


class RecordingSource:
    """Wrap a source and keep every successful response as a snapshot mapping.

    Failed calls leave no entry, so replaying the snapshot reproduces the
    same per-network failures.
    """

    def __init__(self, source: Any):
        self.source = source
        self.snapshot: Dict[str, Any] = {'networks': [], 'route_tables': {}, 'subnets': {}}

    def list_networks(self) -> List[Dict[str, Any]]:
        networks = self.source.list_networks()
        self.snapshot['networks'] = list(networks)
        return networks

    def fetch_route_tables(self, network_id: str) -> List[Dict[str, Any]]:
        route_tables = self.source.fetch_route_tables(network_id)
        self.snapshot['route_tables'][network_id] = list(route_tables)
        return route_tables

    def fetch_subnets(self, network_id: str) -> List[Dict[str, Any]]:
        subnets = self.source.fetch_subnets(network_id)
        self.snapshot['subnets'][network_id] = list(subnets)
        return subnets


def write_snapshot(snapshot: Dict[str, Any], path: Path | str) -> Path:
    """Write a snapshot mapping as YAML and return the written path."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        yaml.safe_dump(snapshot, sort_keys=False, default_flow_style=False),
        encoding="utf-8",
    )
    return output_path
