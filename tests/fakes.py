"""Raw EC2-shaped records and an in-memory source for builder tests."""

from typing import Any, Dict, List, Optional

from network_report.errors import SourceError


def tags(name: Optional[str]) -> List[Dict[str, str]]:
    return [{"Key": "Name", "Value": name}] if name is not None else []


def raw_vpc(vpc_id: str, cidr: str, name: Optional[str] = None, extra_cidrs=()) -> Dict[str, Any]:
    return {
        "VpcId": vpc_id,
        "CidrBlock": cidr,
        "Tags": tags(name if name is not None else vpc_id),
        "CidrBlockAssociationSet": [{"CidrBlock": cidr}] + [{"CidrBlock": c} for c in extra_cidrs],
    }


def raw_route(destination: Optional[str] = None, **targets: str) -> Dict[str, Any]:
    route: Dict[str, Any] = dict(targets)
    if destination is not None:
        route["DestinationCidrBlock"] = destination
    return route


def raw_route_table(rtb_id: str, routes=(), subnet_ids=(), name: Optional[str] = None, main: bool = False) -> Dict[str, Any]:
    associations: List[Dict[str, Any]] = [{"SubnetId": subnet_id, "Main": False} for subnet_id in subnet_ids]
    if main:
        associations.append({"Main": True})
    return {
        "RouteTableId": rtb_id,
        "Tags": tags(name if name is not None else rtb_id),
        "Routes": list(routes),
        "Associations": associations,
    }


def raw_subnet(subnet_id: str, cidr: str, name: Optional[str] = None) -> Dict[str, Any]:
    return {
        "SubnetId": subnet_id,
        "CidrBlock": cidr,
        "Tags": tags(name if name is not None else subnet_id),
    }


class FakeSource:
    """NetworkSource serving fixed records; selected calls raise SourceError."""

    def __init__(
        self,
        networks: List[Dict[str, Any]],
        route_tables: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        subnets: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        fail_networks: bool = False,
        fail_route_tables=(),
        fail_subnets=(),
    ):
        self.networks = networks
        self.route_tables = route_tables or {}
        self.subnets = subnets or {}
        self.fail_networks = fail_networks
        self.fail_route_tables = set(fail_route_tables)
        self.fail_subnets = set(fail_subnets)
        self.calls: List[tuple] = []

    def list_networks(self):
        self.calls.append(("list_networks",))
        if self.fail_networks:
            raise SourceError("Failed to fetch VPCs: access denied")
        return list(self.networks)

    def fetch_route_tables(self, network_id):
        self.calls.append(("fetch_route_tables", network_id))
        if network_id in self.fail_route_tables:
            raise SourceError(f"Failed to fetch route tables for {network_id}: access denied")
        return list(self.route_tables.get(network_id, []))

    def fetch_subnets(self, network_id):
        self.calls.append(("fetch_subnets", network_id))
        if network_id in self.fail_subnets:
            raise SourceError(f"Failed to fetch subnets for {network_id}: access denied")
        return list(self.subnets.get(network_id, []))


def scenario_source() -> FakeSource:
    """vpc-1 with rtb-a (0.0.0.0/0 -> igw-1) claiming subnet-1; subnet-2 unassociated."""
    return FakeSource(
        networks=[raw_vpc("vpc-1", "10.0.0.0/16")],
        route_tables={
            "vpc-1": [
                raw_route_table(
                    "rtb-a",
                    routes=[raw_route("0.0.0.0/0", GatewayId="igw-1")],
                    subnet_ids=["subnet-1"],
                ),
            ],
        },
        subnets={
            "vpc-1": [
                raw_subnet("subnet-1", "10.0.1.0/24"),
                raw_subnet("subnet-2", "10.0.2.0/24"),
            ],
        },
    )
