"""Infrastructure adapters."""

from dinavigator.infrastructure.adapters.external_result import (
    convert_external_projects,
    convert_external_result,
    extract_json_payload,
    lifetime_from_external,
    parse_external_result,
)
from dinavigator.infrastructure.adapters.file_reader import FileSourceReader

__all__ = [
    "FileSourceReader",
    "convert_external_projects",
    "convert_external_result",
    "extract_json_payload",
    "lifetime_from_external",
    "parse_external_result",
]
