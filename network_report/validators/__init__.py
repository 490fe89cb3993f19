"""Validation package for network reports.

- checks: consistency checks over a resolved topology
- schema: JSON Schema loading and error formatting

Usage:
    from network_report.validators import run_topology_checks
"""

from .checks import (
    check_association_closure,
    check_dangling_associations,
    check_main_route_tables,
    check_subnet_cidrs,
    run_topology_checks,
)
from .schema import format_validation_error, load_schema, validate_document

__all__ = [
    "check_association_closure",
    "check_dangling_associations",
    "check_main_route_tables",
    "check_subnet_cidrs",
    "format_validation_error",
    "load_schema",
    "run_topology_checks",
    "validate_document",
]
