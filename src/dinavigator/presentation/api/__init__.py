"""Public entry points for analyzing a project.

Wires the engine to the file system: discovery when no file list is
given, FileSourceReader for reading.

Public exports:
    analyze_project: Synchronous analysis of one project
    analyze_project_async: Same, as a coroutine
    load_external_result: ProjectDI from an external analyzer's output
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from dinavigator.application.services.engine import AnalysisEngine
from dinavigator.domain.model.configuration import AnalyzerConfig
from dinavigator.infrastructure.adapters import (
    FileSourceReader,
    convert_external_result,
    extract_json_payload,
    parse_external_result,
)
from dinavigator.infrastructure.discovery import find_source_files

if TYPE_CHECKING:
    from collections.abc import Iterable

    from dinavigator.domain.model.project import ProjectDI
    from dinavigator.domain.ports.cancellation import CancellationSignal

__all__ = [
    "analyze_project",
    "analyze_project_async",
    "load_external_result",
]


def _engine(config: AnalyzerConfig | None) -> AnalysisEngine:
    active = config if config is not None else AnalyzerConfig()
    reader = FileSourceReader(encoding=active.encoding, size_limit=active.file_size_limit)
    return AnalysisEngine(reader, active)


def analyze_project(
    project_root: Path | str,
    source_files: Iterable[Path | str] | None = None,
    config: AnalyzerConfig | None = None,
    cancel: CancellationSignal | None = None,
) -> ProjectDI:
    """Analyze a C# project from disk.

    Args:
        project_root: Project directory
        source_files: Files to analyze. None discovers them under project_root.
        config: Analyzer configuration (default: AnalyzerConfig())
        cancel: Optional cancellation signal

    Returns:
        Fresh ProjectDI

    Raises:
        ProjectRootError: If project_root is missing or not a directory
    """
    engine = _engine(config)
    files = _files(project_root, source_files, engine.config)
    return engine.analyze(project_root, files, cancel)


async def analyze_project_async(
    project_root: Path | str,
    source_files: Iterable[Path | str] | None = None,
    config: AnalyzerConfig | None = None,
    cancel: CancellationSignal | None = None,
) -> ProjectDI:
    """Coroutine version of analyze_project."""
    engine = _engine(config)
    files = _files(project_root, source_files, engine.config)
    return await engine.analyze_async(project_root, files, cancel)


def load_external_result(output: str, project_path: Path | str) -> ProjectDI:
    """Convert external analyzer stdout into a ProjectDI.

    Args:
        output: Raw analyzer output; JSON may be surrounded by log lines
        project_path: Solution or project the analyzer ran on

    Raises:
        AdapterInputError: If output holds no valid JSON object
    """
    data = parse_external_result(extract_json_payload(output))
    return convert_external_result(data, str(project_path))


def _files(
    project_root: Path | str,
    source_files: Iterable[Path | str] | None,
    config: AnalyzerConfig,
) -> Iterable[Path | str]:
    if source_files is not None:
        return source_files
    return find_source_files(Path(project_root), config)
