"""Tests for the report generator and its CLI."""

from network_report.errors import KIND_OUTPUT
from network_report.generators.common import ReportConfig
from network_report.generators.docs import NetworkReportGenerator
from network_report.generators.docs.cli import build_parser, main

from .fakes import FakeSource, raw_route, raw_route_table, raw_vpc


def config_for(tmp_path, **output):
    config = ReportConfig()
    config.override("output", "pdf", str(tmp_path / "network.pdf"))
    for key, value in output.items():
        config.override("output", key, value)
    return config


class TestNetworkReportGenerator:
    """Tests for the run orchestration."""

    def test_full_run(self, scenario, tmp_path) -> None:
        generator = NetworkReportGenerator(scenario, config_for(tmp_path, markdown=str(tmp_path / "network.md")))
        assert generator.load_topology()
        assert generator.generate_all()

        assert (tmp_path / "network.pdf").read_bytes().startswith(b"%PDF")
        markdown = (tmp_path / "network.md").read_text(encoding="utf-8")
        assert "### rtb-a" in markdown
        assert "| 0.0.0.0/0 | igw-1 |" in markdown
        assert "`subnet-2` subnet-2 10.0.2.0/24" in markdown
        assert generator.combined_error() is None
        assert generator.summary()["pages"] == 1

    def test_markdown_escapes_table_cells(self, tmp_path) -> None:
        """Pipes in Name tags do not split Markdown table cells."""
        source = FakeSource(
            [raw_vpc("vpc-1", "10.0.0.0/16", name="core|prod")],
            route_tables={"vpc-1": [raw_route_table(
                "rtb-1", routes=[raw_route("0.0.0.0/0", GatewayId="igw-1")], name="edge|public",
            )]},
        )
        generator = NetworkReportGenerator(source, config_for(tmp_path))
        assert generator.load_topology()
        markdown = generator.render_markdown()
        assert "## core\\|prod" in markdown
        assert "### edge\\|public" in markdown
        assert "| 0.0.0.0/0 | igw-1 |" in markdown

    def test_network_listing_failure(self, tmp_path, capsys) -> None:
        generator = NetworkReportGenerator(FakeSource([], fail_networks=True), config_for(tmp_path))
        assert not generator.load_topology()
        assert "access denied" in str(generator.combined_error())
        assert "ERROR Could not list networks" in capsys.readouterr().out

    def test_no_networks_is_not_a_failure(self, tmp_path) -> None:
        """An account without networks still produces a (blank) report."""
        generator = NetworkReportGenerator(FakeSource([]), config_for(tmp_path))
        assert generator.load_topology()
        assert generator.generate_all()
        assert (tmp_path / "network.pdf").exists()

    def test_unwritable_output_recorded(self, tmp_path) -> None:
        """An output sink failure is recorded with the other errors."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        config = ReportConfig()
        config.override("output", "pdf", str(blocker / "network.pdf"))
        source = FakeSource([raw_vpc("vpc-1", "10.0.0.0/16"), raw_vpc("vpc-2", "10.1.0.0/16")],
                            fail_route_tables={"vpc-2"})

        generator = NetworkReportGenerator(source, config)
        assert generator.load_topology()
        assert not generator.generate_all()

        combined = generator.combined_error()
        assert [error.kind for error in combined.errors] == ["route_tables", KIND_OUTPUT]
        assert len(str(combined).splitlines()) == 2

    def test_snapshot_saved(self, scenario, tmp_path) -> None:
        snapshot_path = tmp_path / "snapshot.yaml"
        generator = NetworkReportGenerator(scenario, config_for(tmp_path), snapshot_output=str(snapshot_path))
        assert generator.load_topology()
        assert "rtb-a" in snapshot_path.read_text(encoding="utf-8")


class TestCli:
    """Tests for the command-line entry point."""

    def test_parser_defaults(self) -> None:
        args = build_parser().parse_args([])
        assert args.output is None
        assert args.snapshot is None
        assert args.duplicate_policy is None
        assert args.checks is None
        assert not args.fail_on_errors

    def test_snapshot_run(self, fixtures_dir, tmp_path, capsys) -> None:
        output = tmp_path / "report.pdf"
        exit_code = main(["--snapshot", str(fixtures_dir / "snapshot.yaml"), "--output", str(output)])
        assert exit_code == 0
        assert output.exists()
        assert "OK Network report generated successfully!" in capsys.readouterr().out

    def test_partial_failure_still_succeeds(self, fixtures_dir, tmp_path, capsys) -> None:
        """Per-network errors are printed as one combined report without failing the run."""
        output = tmp_path / "report.pdf"
        exit_code = main(["--snapshot", str(fixtures_dir / "partial" / "snapshot.yaml"), "--output", str(output)])
        out = capsys.readouterr().out
        assert exit_code == 0
        assert output.exists()
        assert "WARN  1 error(s) recorded:" in out
        assert "route tables for vpc-2" in out

    def test_fail_on_errors(self, fixtures_dir, tmp_path) -> None:
        exit_code = main([
            "--snapshot", str(fixtures_dir / "partial" / "snapshot.yaml"),
            "--output", str(tmp_path / "report.pdf"),
            "--fail-on-errors",
        ])
        assert exit_code == 1

    def test_invalid_snapshot(self, fixtures_dir, tmp_path, capsys) -> None:
        exit_code = main(["--snapshot", str(fixtures_dir / "invalid-snapshot.yaml"), "--output", str(tmp_path / "r.pdf")])
        assert exit_code == 1
        assert "ERROR Invalid snapshot" in capsys.readouterr().out

    def test_config_and_markdown(self, fixtures_dir, tmp_path) -> None:
        markdown = tmp_path / "report.md"
        exit_code = main([
            "--snapshot", str(fixtures_dir / "snapshot.yaml"),
            "--config", str(fixtures_dir / "report-config.yaml"),
            "--output", str(tmp_path / "report.pdf"),
            "--markdown", str(markdown),
        ])
        assert exit_code == 0
        assert markdown.read_text(encoding="utf-8").startswith("# Network Report")

    def test_unreadable_include(self, tmp_path, capsys) -> None:
        """A directory include that names a file is reported instead of crashing."""
        (tmp_path / "nets.yaml").write_text("- VpcId: vpc-1\n  CidrBlock: 10.0.0.0/16\n", encoding="utf-8")
        snapshot = tmp_path / "snapshot.yaml"
        snapshot.write_text("networks: !include_dir_sorted nets.yaml\n", encoding="utf-8")

        exit_code = main(["--snapshot", str(snapshot), "--output", str(tmp_path / "r.pdf")])

        assert exit_code == 1
        assert "ERROR Expected directory for !include_dir_sorted" in capsys.readouterr().out
        assert not (tmp_path / "r.pdf").exists()
