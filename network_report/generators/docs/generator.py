"""
Network report generation core.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ...builder import TopologyBuilder
from ...errors import KIND_ASSOCIATION, KIND_NETWORKS, KIND_OUTPUT, CombinedError, ErrorAccumulator, ReportError
from ...model import Topology
from ...sources import NetworkSource, RecordingSource, write_snapshot
from ...validators import run_topology_checks
from ..common.config import ReportConfig
from .layout import Document, render_document
from .pdf import write_pdf

TEMPLATES_DIR = Path(__file__).resolve().parent.parent.parent / "templates"
MARKDOWN_TEMPLATE = "network-report.md.j2"


class NetworkReportGenerator:
    """Generate the paginated network report from a resource source"""

    def __init__(
        self,
        source: NetworkSource,
        config: Optional[ReportConfig] = None,
        snapshot_output: Optional[str] = None,
    ):
        self.config = config or ReportConfig()
        self.snapshot_output = Path(snapshot_output) if snapshot_output else None
        self.source: NetworkSource = RecordingSource(source) if self.snapshot_output else source
        self.output_path = Path(self.config.pdf_output)
        self.markdown_path = Path(self.config.markdown_output) if self.config.markdown_output else None
        self.topology = Topology()
        self.document: Optional[Document] = None
        self.errors = ErrorAccumulator()
        self.generated_files: List[Path] = []
        self.generated_at: str = ""

        self.jinja_env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True
        )
        self.jinja_env.filters['md_cell'] = self._md_cell

    @property
    def warnings(self) -> List[str]:
        return self.errors.warnings

    def combined_error(self) -> Optional[CombinedError]:
        return self.errors.flatten()

    def load_topology(self) -> bool:
        """Fetch networks, route tables and subnets and resolve associations"""
        builder = TopologyBuilder(self.source, duplicate_policy=self.config.duplicate_policy)
        self.topology, build_errors = builder.build()
        self.errors.extend(build_errors)
        for warning in builder.warnings:
            self.errors.warn(warning)

        if self.snapshot_output:
            self._save_snapshot()

        if not self.topology.networks and self.errors.of_kind(KIND_NETWORKS):
            print("ERROR Could not list networks")
            return False

        summary = self.topology.summary()
        print(
            f"OK Loaded {summary['networks']} network(s), {summary['route_tables']} route table(s), "
            f"{summary['subnets']} subnet(s)"
        )
        for error in build_errors:
            print(f"WARN  {error.message}")

        if self.config.checks_enabled:
            self._run_checks()

        for warning in self.warnings:
            print(f"WARN  {warning}")

        return True

    def _run_checks(self) -> None:
        check_errors: List[str] = []
        check_warnings: List[str] = []
        run_topology_checks(self.topology, errors=check_errors, warnings=check_warnings)
        for message in check_errors:
            self.errors.record(ReportError(kind=KIND_ASSOCIATION, resource_id='', message=message))
        for message in check_warnings:
            self.errors.warn(message)

    def _save_snapshot(self) -> None:
        try:
            path = write_snapshot(self.source.snapshot, self.snapshot_output)
            print(f"OK Saved snapshot: {path}")
        except OSError as e:
            self.errors.record(ReportError(
                kind=KIND_OUTPUT,
                resource_id=str(self.snapshot_output),
                message=f"Failed to write snapshot {self.snapshot_output}: {e}",
                cause=e,
            ))

    def generate_all(self) -> bool:
        """Lay out the document and write every configured output"""
        self.generated_files = []
        self.generated_at = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        self.document = render_document(self.topology, self.config.page)

        success = True
        success &= self.generate_pdf()
        if self.markdown_path:
            success &= self.generate_markdown()
        return success

    def _write_output(self, path: Path, content: Any) -> bool:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        except OSError as e:
            self.errors.record(ReportError(
                kind=KIND_OUTPUT,
                resource_id=str(path),
                message=f"Failed to write {path}: {e}",
                cause=e,
            ))
            print(f"ERROR Error writing {path}: {e}")
            return False
        print(f"OK Generated: {path}")
        self.generated_files.append(path)
        return True

    def generate_pdf(self) -> bool:
        return self._write_output(self.output_path, write_pdf(self.document))

    @staticmethod
    def _md_cell(value: Any) -> str:
        """Make a value safe inside a Markdown table cell"""
        return " ".join(str(value).split()).replace("|", "\\|")

    def render_markdown(self) -> str:
        template = self.jinja_env.get_template(MARKDOWN_TEMPLATE)
        return template.render(
            generated_at=self.generated_at,
            topology=self.topology,
            summary=self.topology.summary(),
            errors=list(self.errors),
            warnings=self.warnings,
        )

    def generate_markdown(self) -> bool:
        return self._write_output(self.markdown_path, self.render_markdown())

    def summary(self) -> Dict[str, Any]:
        summary: Dict[str, Any] = dict(self.topology.summary())
        summary['pages'] = self.document.page_count if self.document else 0
        summary['errors'] = len(self.errors)
        summary['warnings'] = len(self.warnings)
        return summary

    def print_summary(self) -> None:
        """Print generation summary"""
        summary = self.summary()
        print("\n" + "="*70)
        print("Network Report Summary")
        print("="*70)

        print(f"\nOK Networks:       {summary['networks']}")
        print(f"   Route tables:   {summary['route_tables']} ({summary['routes']} routes)")
        print(f"   Subnets:        {summary['subnets']} ({summary['unassociated_subnets']} without association)")
        print(f"   Pages:          {summary['pages']}")
        print(f"   Errors:         {summary['errors']}")
        print(f"   Warnings:       {summary['warnings']}")
        print(f"\nFiles created:")
        for path in self.generated_files:
            print(f"  - {path}")
