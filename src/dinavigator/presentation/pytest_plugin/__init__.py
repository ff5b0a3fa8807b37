"""pytest plugin for dinavigator.

Provides fixtures for DI architecture tests:
    di_config: Analyzer configuration (override in conftest.py)
    di_project: ProjectDI of the configured source directory

Configuration (pytest.ini or pyproject.toml):
    di_source_dir: C# project directory to analyze, relative to rootpath (default: ".")
    di_containers: Whitespace-separated container catalog names
        (default: Microsoft.Extensions.DependencyInjection)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

# Register fixtures from fixtures module
from dinavigator.presentation.pytest_plugin.fixtures import di_config, di_project

if TYPE_CHECKING:
    import pytest

# Export fixtures for pytest discovery
__all__ = [
    "di_config",
    "di_project",
]


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register ini options."""
    parser.addini(
        "di_source_dir",
        "C# project directory analyzed by the di_project fixture",
        default=".",
    )
    parser.addini(
        "di_containers",
        "Container catalogs used for registration patterns",
        type="args",
        default=[],
    )


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest plugin with markers."""
    config.addinivalue_line(
        "markers",
        "di: mark test as dependency-injection architecture test",
    )
