"""Tests for report configuration loading."""

import pytest

from network_report.errors import ConfigError
from network_report.generators.common import PageSettings, ReportConfig


class TestReportConfig:
    """Tests for defaults, overlays and validation."""

    def test_defaults(self) -> None:
        """Without a file the A4 layout and last-wins policy are used."""
        config = ReportConfig.load(None)
        assert config.page == PageSettings()
        assert config.page.column_width == 95.0
        assert config.page.rows_per_page == 27
        assert config.duplicate_policy == "last-wins"
        assert config.pdf_output == "network.pdf"
        assert config.markdown_output is None
        assert config.checks_enabled

    def test_file_overlays_defaults(self, fixtures_dir) -> None:
        """Values from the file replace only the keys they name."""
        config = ReportConfig.load(str(fixtures_dir / "report-config.yaml"))
        assert config.page.row_height == 8
        assert config.page.width == 210.0
        assert config.duplicate_policy == "strict"

    def test_override_ignores_none(self) -> None:
        config = ReportConfig()
        config.override("output", "pdf", None)
        config.override("output", "markdown", "report.md")
        assert config.pdf_output == "network.pdf"
        assert config.markdown_output == "report.md"

    def test_invalid_values(self) -> None:
        with pytest.raises(ConfigError) as excinfo:
            ReportConfig({"association": {"duplicate_policy": "first-wins"}, "page": {"colour": "red"}})
        assert "first-wins" in str(excinfo.value)
        assert "colour" in str(excinfo.value)

    def test_page_too_small(self) -> None:
        with pytest.raises(ConfigError):
            ReportConfig({"page": {"height": 30, "margin": 10, "row_height": 10}})

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            ReportConfig.load(str(tmp_path / "absent.yaml"))

    def test_not_a_mapping(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            ReportConfig.load(str(path))

    def test_unreadable_include(self, tmp_path) -> None:
        (tmp_path / "page.yaml").write_text("width: 200\n", encoding="utf-8")
        path = tmp_path / "config.yaml"
        path.write_text("page: !include_dir_sorted page.yaml\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Could not read config"):
            ReportConfig.load(str(path))
