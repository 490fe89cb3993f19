"""Report configuration: built-in defaults overlaid by an optional YAML file."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ...errors import ConfigError
from ...loader import load_yaml_document
from ...validators.schema import load_schema, validate_document

CONFIG_SCHEMA = "report-config-schema.json"
DEFAULT_PDF_OUTPUT = "network.pdf"


@dataclass(frozen=True)
class PageSettings:
    """Page geometry in millimetres. Defaults reproduce an A4 portrait report."""

    width: float = 210.0
    height: float = 297.0
    margin: float = 10.0
    row_height: float = 10.0
    font_size: float = 10.0
    font_family: str = "DejaVu Sans"

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def column_width(self) -> float:
        return self.content_width / 2

    @property
    def content_bottom(self) -> float:
        return self.height - self.margin

    @property
    def rows_per_page(self) -> int:
        return int((self.height - 2 * self.margin) // self.row_height)


def default_report_config() -> Dict[str, Any]:
    """Built-in config (used as-is when no config file is given)."""
    return {
        'page': {
            'width': 210.0,
            'height': 297.0,
            'margin': 10.0,
            'row_height': 10.0,
            'font_size': 10.0,
            'font_family': 'DejaVu Sans',
        },
        'association': {
            'duplicate_policy': 'last-wins',
        },
        'output': {
            'pdf': DEFAULT_PDF_OUTPUT,
            'markdown': None,
        },
        'checks': {
            'enabled': True,
        },
    }


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ReportConfig:
    """Resolved report settings."""

    def __init__(self, values: Optional[Dict[str, Any]] = None, source_path: Optional[Path] = None):
        self.values = _merge(default_report_config(), values or {})
        self.source_path = source_path

        problems = validate_document(self.values, load_schema(CONFIG_SCHEMA))
        if problems:
            origin = f" in {source_path}" if source_path else ""
            raise ConfigError(f"Invalid report config{origin}:\n  " + "\n  ".join(problems))

        page = self.values['page']
        if 2 * page['margin'] + 2 * page['row_height'] > page['height']:
            raise ConfigError("Page height must fit the margins and at least two rows")
        if 2 * page['margin'] >= page['width']:
            raise ConfigError("Page width must be larger than both margins")

    @classmethod
    def load(cls, path: Optional[str]) -> "ReportConfig":
        """
        Load config from YAML, or return defaults when path is None.

        Raises:
            ConfigError: file missing, unparsable or invalid.
        """
        if not path:
            return cls()
        try:
            values = load_yaml_document(path)
        except FileNotFoundError as e:
            raise ConfigError(f"Config file not found: {path}") from e
        except OSError as e:
            raise ConfigError(f"Could not read config {path}: {e}") from e
        except (yaml.YAMLError, ValueError) as e:
            raise ConfigError(f"Could not parse config {path}: {e}") from e
        return cls(values, source_path=Path(path))

    def override(self, section: str, key: str, value: Any) -> None:
        """Apply a CLI override; None means 'not given' and leaves the value alone."""
        if value is None:
            return
        self.values[section][key] = value

    @property
    def page(self) -> PageSettings:
        return PageSettings(**self.values['page'])

    @property
    def duplicate_policy(self) -> str:
        return self.values['association']['duplicate_policy']

    @property
    def pdf_output(self) -> str:
        return self.values['output']['pdf']

    @property
    def markdown_output(self) -> Optional[str]:
        return self.values['output']['markdown']

    @property
    def checks_enabled(self) -> bool:
        return bool(self.values['checks']['enabled'])
