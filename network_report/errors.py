"""Typed report errors and the accumulator that collects them across a run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

KIND_NETWORKS = "networks"
KIND_ROUTE_TABLES = "route_tables"
KIND_SUBNETS = "subnets"
KIND_ASSOCIATION = "association"
KIND_OUTPUT = "output"

ERROR_KINDS = (
    KIND_NETWORKS,
    KIND_ROUTE_TABLES,
    KIND_SUBNETS,
    KIND_ASSOCIATION,
    KIND_OUTPUT,
)


class NetworkReportError(Exception):
    """Base class for network report failures."""


class SourceError(NetworkReportError):
    """A resource source could not return the requested records."""


class ConfigError(NetworkReportError):
    """Report configuration or snapshot content is invalid."""


@dataclass(frozen=True)
class ReportError:
    kind: str
    resource_id: str
    message: str
    cause: Optional[BaseException] = None

    def __str__(self) -> str:
        return self.message


class CombinedError(NetworkReportError):
    """All errors of one run, flattened into a single newline-joined message."""

    def __init__(self, errors: List[ReportError]):
        self.errors = list(errors)
        super().__init__("\n".join(error.message for error in self.errors))


class ErrorAccumulator:
    """Collect errors (and warnings) from every stage of a run in recording order."""

    def __init__(self) -> None:
        self.errors: List[ReportError] = []
        self.warnings: List[str] = []

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return bool(self.errors)

    def __iter__(self) -> Iterator[ReportError]:
        return iter(self.errors)

    def record(self, error: ReportError) -> ReportError:
        if error.kind not in ERROR_KINDS:
            raise ValueError(f"Unknown error kind: {error.kind}")
        self.errors.append(error)
        return error

    def record_failure(self, kind: str, resource_id: str, exc: BaseException) -> ReportError:
        return self.record(ReportError(kind=kind, resource_id=resource_id, message=str(exc), cause=exc))

    def extend(self, errors: Iterable[ReportError]) -> None:
        for error in errors:
            self.record(error)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def of_kind(self, kind: str) -> List[ReportError]:
        return [error for error in self.errors if error.kind == kind]

    def flatten(self) -> Optional[CombinedError]:
        if not self.errors:
            return None
        return CombinedError(self.errors)
