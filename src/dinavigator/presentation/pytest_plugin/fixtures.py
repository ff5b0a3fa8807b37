"""pytest fixtures for DI architecture testing.

User overrides di_config in their conftest.py.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from dinavigator.domain.model.configuration import AnalyzerConfig
from dinavigator.presentation.api import analyze_project

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dinavigator.domain.model.project import ProjectDI


def config_for(containers: Sequence[str]) -> AnalyzerConfig:
    """Default configuration, restricted to the given catalogs if any."""
    if not containers:
        return AnalyzerConfig()
    return AnalyzerConfig(containers=tuple(containers))


def analyze_source_dir(root_dir: Path, source_dir: str, config: AnalyzerConfig) -> ProjectDI:
    """Analyze root_dir / source_dir.

    Raises:
        FileNotFoundError: If the directory does not exist
    """
    source_path = root_dir / source_dir
    if not source_path.is_dir():
        raise FileNotFoundError(
            f"di_source_dir '{source_path}' does not exist. "
            f"Configure di_source_dir in pytest.ini or pyproject.toml."
        )
    return analyze_project(source_path, config=config)


@pytest.fixture(scope="session")
def di_config(request: pytest.FixtureRequest) -> AnalyzerConfig:
    """Analyzer configuration from the di_containers ini option.

    User overrides this fixture in their conftest.py to provide
    custom configuration.
    """
    containers = request.config.getini("di_containers")
    return config_for([str(name) for name in containers])


@pytest.fixture(scope="session")
def di_project(request: pytest.FixtureRequest, di_config: AnalyzerConfig) -> ProjectDI:
    """Analysis of the configured source directory, shared by the session."""
    root_dir = Path(request.config.rootpath)
    source_dir = str(request.config.getini("di_source_dir") or ".")
    return analyze_source_dir(root_dir, source_dir, di_config)
