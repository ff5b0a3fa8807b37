"""Tests for the public entry points."""

import asyncio
import threading
from pathlib import Path

import pytest

import dinavigator
from dinavigator.domain.exceptions import AdapterInputError, ProjectRootError
from dinavigator.domain.model.configuration import AnalyzerConfig
from dinavigator.domain.model.enums import Lifetime, ParseStatus
from dinavigator.presentation.api import (
    analyze_project,
    analyze_project_async,
    load_external_result,
)

PROGRAM = """\
var builder = WebApplication.CreateBuilder(args);
builder.Services.AddSingleton<IClock, SystemClock>();
builder.Services.AddTransient<IMailer, SmtpMailer>();
"""


def _write_program(root: Path) -> None:
    (root / "Program.cs").write_text(PROGRAM, encoding="utf-8")


class TestAnalyzeProject:
    """Tests for analyze_project and analyze_project_async."""

    def test_discovers_files(self, tmp_path: Path) -> None:
        """Without a file list the project root is searched."""
        _write_program(tmp_path)

        project = analyze_project(tmp_path)

        assert project.parse_status is ParseStatus.SUCCESS
        assert [g.lifetime for g in project.service_groups] == [
            Lifetime.SINGLETON,
            Lifetime.TRANSIENT,
        ]

    def test_explicit_files(self, tmp_path: Path) -> None:
        """An explicit empty file list fails instead of discovering."""
        _write_program(tmp_path)

        project = analyze_project(tmp_path, source_files=[])

        assert project.parse_status is ParseStatus.FAILED
        assert project.error_details == ("No source files found",)

    def test_async_variant(self, tmp_path: Path) -> None:
        """The coroutine gives the same result."""
        _write_program(tmp_path)

        result = asyncio.run(analyze_project_async(tmp_path))

        assert result == analyze_project(tmp_path)

    def test_config_applies(self, tmp_path: Path) -> None:
        """Files outside the configured extensions are not discovered."""
        _write_program(tmp_path)

        project = analyze_project(tmp_path, config=AnalyzerConfig(file_extensions=(".csx",)))

        assert project.parse_status is ParseStatus.FAILED

    def test_cancelled(self, tmp_path: Path) -> None:
        """A set signal fails the run."""
        _write_program(tmp_path)
        cancel = threading.Event()
        cancel.set()

        project = analyze_project(tmp_path, cancel=cancel)

        assert project.error_details == ("Analysis cancelled",)

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        """A missing root is an error, not a failed result."""
        with pytest.raises(ProjectRootError, match="does not exist"):
            analyze_project(tmp_path / "missing")


class TestLoadExternalResult:
    """Tests for load_external_result."""

    def test_converts_stdout(self) -> None:
        """Log lines around the JSON object are ignored."""
        output = (
            "info: starting\n"
            '{"Projects": [{"ServiceRegistrations": [{"ServiceType": "IClock", '
            '"ImplementationType": "SystemClock", "Lifetime": 2, '
            '"FilePath": "Program.cs", "LineNumber": 4}]}]}\n'
            "info: done\n"
        )

        project = load_external_result(output, Path("/src/Shop.sln"))

        assert project.project_path == "/src/Shop.sln"
        assert project.group(Lifetime.SINGLETON) is not None

    def test_garbage_raises(self) -> None:
        """Output without JSON raises AdapterInputError."""
        with pytest.raises(AdapterInputError):
            load_external_result("error: build failed", "/src/Shop.sln")


class TestPackageExports:
    """Tests for the top-level package."""

    def test_exports(self) -> None:
        """Entry points are re-exported from the package root."""
        assert dinavigator.analyze_project is analyze_project
        assert dinavigator.load_external_result is load_external_result
        assert set(dinavigator.__all__) >= {"AnalysisEngine", "AnalyzerConfig", "ProjectDI"}
