"""Consistency checks over a resolved topology."""

import ipaddress
from typing import List

from ..model import IMPLICIT_ASSOCIATION, Topology


def check_association_closure(
    topology: Topology,
    *,
    errors: List[str],
    warnings: List[str],
) -> None:
    """Every resolved subnet back-reference must name a route table of the subnet's own network."""
    for network in topology:
        for subnet in network.subnets:
            if subnet.route_table_id is None:
                continue
            if network.route_table_for(subnet) is None:
                errors.append(
                    f"Subnet '{subnet.id}': route table '{subnet.route_table_id}' "
                    f"does not belong to network '{network.id}'"
                )


def check_dangling_associations(
    topology: Topology,
    *,
    errors: List[str],
    warnings: List[str],
) -> None:
    """Warn about association entries that point at subnets the network does not have."""
    for network in topology:
        if not network.subnets:
            # Subnets were not fetched (or there are none); nothing to compare against.
            continue
        subnet_ids = {subnet.id for subnet in network.subnets}
        for route_table in network.route_tables:
            for subnet_id in route_table.associations:
                if subnet_id == IMPLICIT_ASSOCIATION or subnet_id in subnet_ids:
                    continue
                warnings.append(
                    f"Route table '{route_table.id}': associated subnet '{subnet_id}' "
                    f"not found in network '{network.id}'"
                )


def check_main_route_tables(
    topology: Topology,
    *,
    errors: List[str],
    warnings: List[str],
) -> None:
    for network in topology:
        main_tables = [route_table.id for route_table in network.route_tables if route_table.is_main]
        if len(main_tables) > 1:
            warnings.append(
                f"Network '{network.id}': multiple route tables are marked main: "
                f"{', '.join(main_tables)}"
            )


def check_subnet_cidrs(
    topology: Topology,
    *,
    errors: List[str],
    warnings: List[str],
) -> None:
    """Subnet CIDRs must parse and fall inside one of the network's CIDR blocks."""
    for network in topology:
        network_blocks = []
        for cidr in [network.cidr_block, *network.associated_cidr_blocks]:
            if not cidr:
                continue
            try:
                network_blocks.append(ipaddress.ip_network(cidr, strict=False))
            except ValueError:
                warnings.append(f"Network '{network.id}': invalid CIDR block '{cidr}'")

        for subnet in network.subnets:
            # IPv6-only subnets have no IPv4 block.
            if not subnet.cidr_block:
                continue
            try:
                subnet_block = ipaddress.ip_network(subnet.cidr_block, strict=False)
            except ValueError:
                warnings.append(f"Subnet '{subnet.id}': invalid CIDR block '{subnet.cidr_block}'")
                continue
            if network_blocks and not any(
                subnet_block.version == block.version and subnet_block.subnet_of(block)
                for block in network_blocks
            ):
                warnings.append(
                    f"Subnet '{subnet.id}': {subnet.cidr_block} is outside network "
                    f"'{network.id}' CIDR blocks"
                )


def run_topology_checks(topology: Topology, *, errors: List[str], warnings: List[str]) -> None:
    check_association_closure(topology, errors=errors, warnings=warnings)
    check_dangling_associations(topology, errors=errors, warnings=warnings)
    check_main_route_tables(topology, errors=errors, warnings=warnings)
    check_subnet_cidrs(topology, errors=errors, warnings=warnings)
