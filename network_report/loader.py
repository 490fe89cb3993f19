"""
YAML loader with include directives.
Used for report config files and offline network snapshots, so large
snapshots can be split per network:

    networks: !include_dir_sorted networks
    route_tables:
      vpc-0abc: !include route-tables/vpc-0abc.yaml
"""

from pathlib import Path
from typing import Any, Dict, List

import yaml


class IncludeLoader(yaml.SafeLoader):
    """Safe YAML loader resolving includes relative to the including file."""

    def __init__(self, stream):
        self._root = Path(stream.name).parent if hasattr(stream, 'name') else Path.cwd()
        super().__init__(stream)


def _load_yaml(path: Path) -> Any:
    with open(path, 'r', encoding='utf-8') as file_handle:
        return yaml.load(file_handle, IncludeLoader)


def _include_target(loader: IncludeLoader, node: yaml.Node) -> Path:
    target = loader._root / loader.construct_scalar(node)
    if not target.exists():
        raise FileNotFoundError(f"Included path not found: {target}")
    return target


def _yaml_files(directory: Path) -> List[Path]:
    """YAML files under directory, skipping '_'-prefixed ones, in relative-path order."""
    return sorted(
        (
            candidate
            for candidate in directory.rglob('*')
            if candidate.is_file()
            and candidate.suffix.lower() in {'.yaml', '.yml'}
            and not candidate.name.startswith('_')
        ),
        key=lambda item: item.relative_to(directory).as_posix(),
    )


def include_constructor(loader: IncludeLoader, node: yaml.Node) -> Any:
    """!include <file>: the file's document in place."""
    return _load_yaml(_include_target(loader, node))


def include_dir_sorted_constructor(loader: IncludeLoader, node: yaml.Node) -> List[Any]:
    """!include_dir_sorted <dir>: one list of every document in the directory (lists are flattened)."""
    directory = _include_target(loader, node)
    if not directory.is_dir():
        raise NotADirectoryError(f"Expected directory for !include_dir_sorted: {directory}")

    items: List[Any] = []
    for yaml_file in _yaml_files(directory):
        loaded = _load_yaml(yaml_file)
        if isinstance(loaded, list):
            items.extend(loaded)
        elif loaded is not None:
            items.append(loaded)
    return items


yaml.add_constructor('!include', include_constructor, IncludeLoader)
yaml.add_constructor('!include_dir_sorted', include_dir_sorted_constructor, IncludeLoader)


def load_yaml_document(path: str) -> Dict[str, Any]:
    """
    Load a YAML mapping with include support.

    Args:
        path: Path to the YAML file.

    Returns:
        The loaded mapping; an empty file yields an empty dict.

    Raises:
        FileNotFoundError: If the file (or an included file) does not exist.
        yaml.YAMLError: If YAML parsing fails.
        ValueError: If the document is not a mapping.
    """
    document_path = Path(path)

    if not document_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    loaded = _load_yaml(document_path)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Expected a mapping at the top of {path}, got {type(loaded).__name__}")
    return loaded
