"""Tests for infrastructure/discovery.py."""

from pathlib import Path

import pytest

from dinavigator.domain.exceptions import ProjectRootError
from dinavigator.domain.model.configuration import AnalyzerConfig
from dinavigator.infrastructure.discovery import exclude_paths, find_source_files


def _touch(root: Path, *names: str) -> None:
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("// source\n", encoding="utf-8")


class TestFindSourceFiles:
    """Tests for find_source_files."""

    def test_finds_cs_files_sorted(self, tmp_path: Path) -> None:
        """Only .cs files are returned, sorted."""
        _touch(tmp_path, "Program.cs", "Services/OrderService.cs", "README.md", "app.json")

        files = find_source_files(tmp_path)

        assert files == (tmp_path / "Program.cs", tmp_path / "Services/OrderService.cs")

    def test_build_output_excluded(self, tmp_path: Path) -> None:
        """bin/ and obj/ are skipped at any depth."""
        _touch(
            tmp_path,
            "Program.cs",
            "bin/Debug/Generated.cs",
            "obj/Debug/AssemblyInfo.cs",
            "Api/obj/GlobalUsings.g.cs",
        )

        assert find_source_files(tmp_path) == (tmp_path / "Program.cs",)

    def test_exclusion_is_by_exact_name(self, tmp_path: Path) -> None:
        """Directories that only contain an excluded name are kept."""
        _touch(tmp_path, "binary/Reader.cs", "Objects/Order.cs")

        assert find_source_files(tmp_path) == (
            tmp_path / "Objects/Order.cs",
            tmp_path / "binary/Reader.cs",
        )

    def test_exclude_globs(self, tmp_path: Path) -> None:
        """Globs match root-relative POSIX paths."""
        _touch(tmp_path, "Program.cs", "Data/Migrations/Init.cs", "Models/Order.g.cs")
        config = AnalyzerConfig(exclude_globs=("*/Migrations/*", "*.g.cs"))

        assert find_source_files(tmp_path, config) == (tmp_path / "Program.cs",)

    def test_custom_extensions(self, tmp_path: Path) -> None:
        """Configured extensions replace the default."""
        _touch(tmp_path, "Program.cs", "build.csx")
        config = AnalyzerConfig(file_extensions=(".csx",))

        assert find_source_files(tmp_path, config) == (tmp_path / "build.csx",)

    def test_empty_directory(self, tmp_path: Path) -> None:
        """No files gives an empty tuple."""
        assert find_source_files(tmp_path) == ()

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        """Missing root raises ProjectRootError."""
        with pytest.raises(ProjectRootError, match="does not exist"):
            find_source_files(tmp_path / "missing")

    def test_file_root_raises(self, tmp_path: Path) -> None:
        """A file as root raises ProjectRootError."""
        _touch(tmp_path, "Program.cs")
        with pytest.raises(ProjectRootError, match="not a directory"):
            find_source_files(tmp_path / "Program.cs")


class TestExcludePaths:
    """Tests for exclude_paths."""

    def test_rejects_matching(self) -> None:
        """Paths matching any pattern are rejected."""
        keep = exclude_paths("*/Migrations/*", "*.g.cs")
        assert keep("Program.cs")
        assert not keep("Data/Migrations/Init.cs")
        assert not keep("Order.g.cs")

    def test_no_patterns_keeps_all(self) -> None:
        """Without patterns everything is kept."""
        assert exclude_paths()("anything/at/all.cs")
