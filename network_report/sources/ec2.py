"""EC2 resource source backed by boto3 describe calls."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import SourceError


class Ec2Source:
    """List VPCs and fetch their route tables and subnets from one region."""

    def __init__(
        self,
        profile: Optional[str] = None,
        region: Optional[str] = None,
        client: Any = None,
    ):
        self.profile = profile
        self.region = region
        self._client = client

    @property
    def client(self):
        """Lazy-load the EC2 client so constructing a source never touches credentials."""
        if self._client is None:
            try:
                session = boto3.Session(profile_name=self.profile, region_name=self.region)
                self._client = session.client("ec2")
            except (BotoCoreError, ClientError) as e:
                raise SourceError(f"Unable to create EC2 client: {e}") from e
        return self._client

    def _paginate(self, operation: str, result_key: str, what: str, **kwargs: Any) -> List[Dict[str, Any]]:
        items: List[Dict[str, Any]] = []
        try:
            paginator = self.client.get_paginator(operation)
            for page in paginator.paginate(**kwargs):
                items.extend(page.get(result_key, []))
        except (BotoCoreError, ClientError) as e:
            raise SourceError(f"Failed to fetch {what}: {e}") from e
        return items

    @staticmethod
    def _vpc_filter(network_id: str) -> List[Dict[str, Any]]:
        return [{"Name": "vpc-id", "Values": [network_id]}]

    def list_networks(self) -> List[Dict[str, Any]]:
        return self._paginate("describe_vpcs", "Vpcs", "VPCs")

    def fetch_route_tables(self, network_id: str) -> List[Dict[str, Any]]:
        return self._paginate(
            "describe_route_tables",
            "RouteTables",
            f"route tables for {network_id}",
            Filters=self._vpc_filter(network_id),
        )

    def fetch_subnets(self, network_id: str) -> List[Dict[str, Any]]:
        return self._paginate(
            "describe_subnets",
            "Subnets",
            f"subnets for {network_id}",
            Filters=self._vpc_filter(network_id),
        )
