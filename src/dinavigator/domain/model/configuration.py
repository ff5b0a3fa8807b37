"""Analyzer configuration.

Controls source discovery, file reading and which container catalogs
contribute registration patterns.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Self

DEFAULT_CONTAINER = "Microsoft.Extensions.DependencyInjection"

DEFAULT_EXCLUDED_DIRECTORIES: frozenset[str] = frozenset(
    {
        "bin",
        "obj",
        "Properties",
        ".git",
        ".vs",
        "node_modules",
        "packages",
    }
)

# 10 MiB
DEFAULT_FILE_SIZE_LIMIT = 10 * 1024 * 1024

# Settings key → field name
_SETTINGS_KEYS: Mapping[str, str] = MappingProxyType(
    {
        "supportedFileExtensions": "file_extensions",
        "excludedDirectories": "excluded_directories",
        "excludeGlobs": "exclude_globs",
        "fileSizeLimit": "file_size_limit",
        "maxDegreeOfParallelism": "max_concurrency",
        "encoding": "encoding",
        "containers": "containers",
    }
)


@dataclass(frozen=True, slots=True)
class AnalyzerConfig:
    """Analyzer configuration DTO.

    Immutable configuration object with FAIL-FIRST validation.

    Attributes:
        file_extensions: Source suffixes to analyze (each starts with ".")
        excluded_directories: Directory names skipped during discovery
        exclude_globs: fnmatch globs on root-relative POSIX paths to skip
        file_size_limit: Larger files are reported and skipped (bytes)
        max_concurrency: Maximum files processed at once
        encoding: Source text encoding
        containers: Container catalog names used for registrations
    """

    file_extensions: tuple[str, ...] = (".cs",)
    excluded_directories: frozenset[str] = DEFAULT_EXCLUDED_DIRECTORIES
    exclude_globs: tuple[str, ...] = ()
    file_size_limit: int = DEFAULT_FILE_SIZE_LIMIT
    max_concurrency: int = 16
    encoding: str = "utf-8"
    containers: tuple[str, ...] = (DEFAULT_CONTAINER,)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.file_extensions:
            raise ValueError("file_extensions must not be empty")
        for ext in self.file_extensions:
            if not ext.startswith(".") or len(ext) < 2:
                raise ValueError(f"file extension must look like '.cs', got '{ext}'")
        for glob in self.exclude_globs:
            if not glob:
                raise ValueError("exclude_globs must not contain empty patterns")
        if self.file_size_limit <= 0:
            raise ValueError(f"file_size_limit must be > 0, got {self.file_size_limit}")
        if self.max_concurrency <= 0:
            raise ValueError(f"max_concurrency must be > 0, got {self.max_concurrency}")
        if not self.encoding:
            raise ValueError("encoding must not be empty")
        if not self.containers:
            raise ValueError("containers must not be empty")

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> Self:
        """Build config from a settings mapping.

        Keys: supportedFileExtensions, excludedDirectories, excludeGlobs,
        fileSizeLimit, maxDegreeOfParallelism, encoding, containers.
        Missing keys keep their defaults.

        Raises:
            ValueError: Unknown key or invalid value
        """
        unknown = sorted(set(settings) - set(_SETTINGS_KEYS))
        if unknown:
            raise ValueError(f"unknown settings: {', '.join(unknown)}")

        kwargs: dict[str, Any] = {}
        for key, value in settings.items():
            name = _SETTINGS_KEYS[key]
            match name:
                case "excluded_directories":
                    kwargs[name] = frozenset(value)
                case "file_extensions" | "exclude_globs" | "containers":
                    kwargs[name] = tuple(value)
                case "file_size_limit" | "max_concurrency":
                    kwargs[name] = int(value)
                case _:
                    kwargs[name] = value
        return cls(**kwargs)
