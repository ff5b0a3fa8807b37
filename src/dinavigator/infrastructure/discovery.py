"""Source file discovery.

Directory names are excluded by exact name; globs use fnmatch on the
root-relative POSIX path (* matches any characters including /).
"""

from __future__ import annotations

import fnmatch
from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

from dinavigator.domain.exceptions import ProjectRootError
from dinavigator.domain.model.configuration import AnalyzerConfig

PathFilter: TypeAlias = Callable[[str], bool]


def exclude_paths(*patterns: str) -> PathFilter:
    """Create filter that rejects relative paths matching any pattern.

    Args:
        *patterns: Glob patterns to exclude (e.g., "*/Migrations/*", "*.g.cs").

    Returns:
        Filter that returns False for paths matching any pattern.
    """

    def _filter(relative_path: str) -> bool:
        return not any(fnmatch.fnmatch(relative_path, p) for p in patterns)

    return _filter


def find_source_files(root: Path | str, config: AnalyzerConfig | None = None) -> tuple[Path, ...]:
    """Find source files under root.

    Args:
        root: Project directory
        config: Extensions, excluded directories and globs (default: AnalyzerConfig())

    Returns:
        Matching files, sorted

    Raises:
        ProjectRootError: If root is missing or not a directory
    """
    cfg = config if config is not None else AnalyzerConfig()
    base = Path(root)
    if not base.exists():
        raise ProjectRootError(path=str(base), reason="does not exist")
    if not base.is_dir():
        raise ProjectRootError(path=str(base), reason="not a directory")

    keep = exclude_paths(*cfg.exclude_globs)
    extensions = frozenset(cfg.file_extensions)
    found = [
        path
        for path in _walk(base, cfg.excluded_directories)
        if path.suffix in extensions and keep(path.relative_to(base).as_posix())
    ]
    return tuple(sorted(found))


def _walk(directory: Path, excluded: frozenset[str]) -> list[Path]:
    """All files below directory, skipping excluded directory names."""
    result: list[Path] = []

    for item in directory.iterdir():
        if item.is_dir():
            if item.name not in excluded:
                result.extend(_walk(item, excluded))
        elif item.is_file():
            result.append(item)

    return result
