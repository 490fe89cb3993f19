"""Resolved network topology: networks, route tables, routes and subnets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

IMPLICIT_ASSOCIATION = "implicit"


@dataclass
class Route:
    destination_cidr_block: str
    router: str = ""


@dataclass
class RouteTable:
    id: str
    name: str = ""
    routes: List[Route] = field(default_factory=list)
    # Subnet ids in association order; IMPLICIT_ASSOCIATION marks an association without a subnet.
    associations: List[str] = field(default_factory=list)
    # Set from an association flagged Main; gateway associations also lack a subnet id.
    main: bool = False

    @property
    def is_main(self) -> bool:
        return self.main

    def claims(self, subnet_id: str) -> bool:
        return subnet_id in self.associations


@dataclass
class Subnet:
    id: str
    name: str = ""
    cidr_block: str = ""
    # Non-owning back-reference, set once during association resolution.
    route_table_id: Optional[str] = None

    @property
    def is_associated(self) -> bool:
        return self.route_table_id is not None


@dataclass
class Network:
    id: str
    name: str = ""
    cidr_block: str = ""
    associated_cidr_blocks: List[str] = field(default_factory=list)
    route_tables: List[RouteTable] = field(default_factory=list)
    subnets: List[Subnet] = field(default_factory=list)

    @property
    def title(self) -> str:
        return f"{self.name}  {self.cidr_block}"

    def route_table(self, route_table_id: Optional[str]) -> Optional[RouteTable]:
        if route_table_id is None:
            return None
        for route_table in self.route_tables:
            if route_table.id == route_table_id:
                return route_table
        return None

    def route_table_for(self, subnet: Subnet) -> Optional[RouteTable]:
        """Return the route table a subnet resolved to, looked up in this network only."""
        return self.route_table(subnet.route_table_id)

    def subnets_for(self, route_table: RouteTable) -> List[Subnet]:
        return [subnet for subnet in self.subnets if subnet.route_table_id == route_table.id]

    def unassociated_subnets(self) -> List[Subnet]:
        return [subnet for subnet in self.subnets if subnet.route_table_id is None]


@dataclass
class Topology:
    """All networks of one run, in the order the source listed them."""

    networks: List[Network] = field(default_factory=list)

    def __iter__(self) -> Iterator[Network]:
        return iter(self.networks)

    def __len__(self) -> int:
        return len(self.networks)

    def network(self, network_id: str) -> Optional[Network]:
        for network in self.networks:
            if network.id == network_id:
                return network
        return None

    def summary(self) -> Dict[str, int]:
        subnets = [subnet for network in self.networks for subnet in network.subnets]
        return {
            'networks': len(self.networks),
            'route_tables': sum(len(network.route_tables) for network in self.networks),
            'routes': sum(
                len(route_table.routes)
                for network in self.networks
                for route_table in network.route_tables
            ),
            'subnets': len(subnets),
            'unassociated_subnets': sum(1 for subnet in subnets if subnet.route_table_id is None),
        }
