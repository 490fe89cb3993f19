"""
Topology builder: fetch networks, route tables and subnets, then associate them.

Stages run in order over the full resource collection:

1. list networks (a failure here ends the build with an empty topology)
2. fetch route tables per network
3. fetch subnets per network
4. resolve subnet -> route table associations

A failure for one network in stage 2 or 3 is recorded and the network keeps
empty route tables / subnets; every other network is still processed.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple

from .errors import (
    KIND_ASSOCIATION,
    KIND_NETWORKS,
    KIND_ROUTE_TABLES,
    KIND_SUBNETS,
    ErrorAccumulator,
    ReportError,
    SourceError,
)
from .model import IMPLICIT_ASSOCIATION, Network, Route, RouteTable, Subnet, Topology
from .sources import NetworkSource

POLICY_LAST_WINS = "last-wins"
POLICY_STRICT = "strict"
DUPLICATE_POLICIES = (POLICY_LAST_WINS, POLICY_STRICT)

# Highest precedence first. Gateway, NAT gateway and peering are the primary
# targets; the rest are consulted only when none of those is present.
ROUTER_ID_FIELDS = (
    'GatewayId',
    'NatGatewayId',
    'VpcPeeringConnectionId',
    'TransitGatewayId',
    'NetworkInterfaceId',
    'InstanceId',
)


def extract_tag_name(tags: Optional[Iterable[Dict[str, Any]]]) -> str:
    for tag in tags or []:
        if isinstance(tag, dict) and tag.get('Key') == 'Name':
            return str(tag.get('Value') or '')
    return ''


def resolve_router(raw_route: Dict[str, Any]) -> str:
    """Return the router id of a raw route by fixed precedence, or '' if none is set."""
    for field_name in ROUTER_ID_FIELDS:
        value = raw_route.get(field_name)
        if value:
            return value
    return ''


def parse_networks(raw_networks: Iterable[Dict[str, Any]]) -> List[Network]:
    networks = []
    for raw in raw_networks:
        networks.append(Network(
            id=raw['VpcId'],
            name=extract_tag_name(raw.get('Tags')),
            cidr_block=raw.get('CidrBlock', ''),
            associated_cidr_blocks=[
                item['CidrBlock']
                for item in raw.get('CidrBlockAssociationSet', []) or []
                if isinstance(item, dict) and item.get('CidrBlock')
            ],
        ))
    return networks


def parse_routes(raw_routes: Iterable[Dict[str, Any]]) -> List[Route]:
    """Normalize routes; entries without an IPv4 destination carry nothing to render and are dropped."""
    routes = []
    for raw in raw_routes or []:
        destination = raw.get('DestinationCidrBlock')
        if not destination:
            continue
        routes.append(Route(destination_cidr_block=destination, router=resolve_router(raw)))
    return routes


def parse_route_tables(raw_route_tables: Iterable[Dict[str, Any]]) -> List[RouteTable]:
    route_tables = []
    for raw in raw_route_tables:
        associations = []
        main = False
        for association in raw.get('Associations', []) or []:
            if not isinstance(association, dict):
                continue
            main = main or association.get('Main') is True
            associations.append(association.get('SubnetId') or IMPLICIT_ASSOCIATION)
        route_tables.append(RouteTable(
            id=raw['RouteTableId'],
            name=extract_tag_name(raw.get('Tags')),
            routes=parse_routes(raw.get('Routes', [])),
            associations=associations,
            main=main,
        ))
    return route_tables


def parse_subnets(raw_subnets: Iterable[Dict[str, Any]]) -> List[Subnet]:
    return [
        Subnet(
            id=raw['SubnetId'],
            name=extract_tag_name(raw.get('Tags')),
            cidr_block=raw.get('CidrBlock', ''),
        )
        for raw in raw_subnets
    ]


def associate_network(
    network: Network,
    *,
    errors: ErrorAccumulator,
    duplicate_policy: str = POLICY_LAST_WINS,
) -> None:
    """Resolve each subnet of one network to the route table that claims it."""
    for subnet in network.subnets:
        claimants = [route_table for route_table in network.route_tables if route_table.claims(subnet.id)]
        if not claimants:
            subnet.route_table_id = None
            continue
        if len(claimants) == 1:
            subnet.route_table_id = claimants[0].id
            continue

        claimant_ids = ", ".join(route_table.id for route_table in claimants)
        if duplicate_policy == POLICY_STRICT:
            subnet.route_table_id = None
            errors.record(ReportError(
                kind=KIND_ASSOCIATION,
                resource_id=subnet.id,
                message=(
                    f"Subnet '{subnet.id}' in network '{network.id}' is associated with "
                    f"multiple route tables: {claimant_ids}"
                ),
            ))
        else:
            subnet.route_table_id = claimants[-1].id
            errors.warn(
                f"Subnet '{subnet.id}' in network '{network.id}' is associated with "
                f"multiple route tables ({claimant_ids}); using '{claimants[-1].id}'"
            )


class TopologyBuilder:
    """Build a resolved Topology from a NetworkSource."""

    def __init__(self, source: NetworkSource, duplicate_policy: str = POLICY_LAST_WINS):
        if duplicate_policy not in DUPLICATE_POLICIES:
            raise ValueError(
                f"Unknown duplicate policy '{duplicate_policy}' (expected one of: {', '.join(DUPLICATE_POLICIES)})"
            )
        self.source = source
        self.duplicate_policy = duplicate_policy
        self.errors = ErrorAccumulator()

    def build(self) -> Tuple[Topology, List[ReportError]]:
        """Run all stages against a fresh accumulator and return the topology and its errors."""
        self.errors = ErrorAccumulator()
        topology = Topology()

        if not self.construct_networks(topology):
            return topology, list(self.errors.errors)

        self.construct_route_tables(topology)
        self.construct_subnets(topology)
        self.associate(topology)
        return topology, list(self.errors.errors)

    def construct_networks(self, topology: Topology) -> bool:
        try:
            raw_networks = self.source.list_networks()
        except SourceError as e:
            self.errors.record_failure(KIND_NETWORKS, '', e)
            return False
        topology.networks = parse_networks(raw_networks)
        return True

    def construct_route_tables(self, topology: Topology) -> None:
        for network in topology:
            try:
                raw_route_tables = self.source.fetch_route_tables(network.id)
            except SourceError as e:
                self.errors.record_failure(KIND_ROUTE_TABLES, network.id, e)
                continue
            network.route_tables = parse_route_tables(raw_route_tables)

    def construct_subnets(self, topology: Topology) -> None:
        for network in topology:
            try:
                raw_subnets = self.source.fetch_subnets(network.id)
            except SourceError as e:
                self.errors.record_failure(KIND_SUBNETS, network.id, e)
                continue
            network.subnets = parse_subnets(raw_subnets)

    def associate(self, topology: Topology) -> None:
        for network in topology:
            associate_network(network, errors=self.errors, duplicate_policy=self.duplicate_policy)

    @property
    def warnings(self) -> List[str]:
        return list(self.errors.warnings)
