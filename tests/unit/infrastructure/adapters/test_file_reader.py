"""Tests for FileSourceReader."""

import asyncio
from pathlib import Path

import pytest

from dinavigator.domain.exceptions import SourceReadError
from dinavigator.infrastructure.adapters import FileSourceReader


class TestFileSourceReader:
    """Tests for FileSourceReader.read_text."""

    def test_reads_text(self, tmp_path: Path) -> None:
        """Existing file is decoded with the configured encoding."""
        path = tmp_path / "Program.cs"
        path.write_text("// Grüße\nservices.AddScoped<IFoo, Foo>();\n", encoding="utf-8")

        text = asyncio.run(FileSourceReader().read_text(path))

        assert text.startswith("// Grüße")

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing file raises SourceReadError with the path."""
        path = tmp_path / "Missing.cs"

        with pytest.raises(SourceReadError) as exc_info:
            asyncio.run(FileSourceReader().read_text(path))

        assert exc_info.value.path == str(path)

    def test_oversize_file(self, tmp_path: Path) -> None:
        """Files over the limit are rejected before reading."""
        path = tmp_path / "Big.cs"
        path.write_text("x" * 64, encoding="utf-8")

        with pytest.raises(SourceReadError, match="file size 64 exceeds limit 32"):
            asyncio.run(FileSourceReader(size_limit=32).read_text(path))

    def test_undecodable_file(self, tmp_path: Path) -> None:
        """Bytes invalid for the encoding raise SourceReadError."""
        path = tmp_path / "Latin.cs"
        path.write_bytes(b"// \xff\xfe\xfa\n")

        with pytest.raises(SourceReadError, match="cannot decode as utf-8"):
            asyncio.run(FileSourceReader().read_text(path))

    def test_other_encoding(self, tmp_path: Path) -> None:
        """Configured encoding is used for decoding."""
        path = tmp_path / "Latin.cs"
        path.write_bytes("// café\n".encode("latin-1"))

        text = asyncio.run(FileSourceReader(encoding="latin-1").read_text(path))

        assert text == "// café\n"

    def test_invalid_size_limit(self) -> None:
        """size_limit must be positive."""
        with pytest.raises(ValueError, match="size_limit"):
            FileSourceReader(size_limit=0)
