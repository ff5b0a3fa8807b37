"""File system source reader.

Blocking reads run in a worker thread so the event loop stays free.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from dinavigator.domain.exceptions import SourceReadError
from dinavigator.domain.model.configuration import DEFAULT_FILE_SIZE_LIMIT
from dinavigator.domain.ports.source_reader import SourceReaderPort


class FileSourceReader(SourceReaderPort):
    """Reads source files from disk with a size limit."""

    def __init__(
        self,
        encoding: str = "utf-8",
        size_limit: int = DEFAULT_FILE_SIZE_LIMIT,
    ) -> None:
        """Initialize reader.

        Args:
            encoding: Text encoding
            size_limit: Maximum file size in bytes

        Raises:
            ValueError: If size_limit <= 0
        """
        if size_limit <= 0:
            raise ValueError(f"size_limit must be > 0, got {size_limit}")
        self._encoding = encoding
        self._size_limit = size_limit

    async def read_text(self, path: Path) -> str:
        """Read and decode one file.

        Raises:
            SourceReadError: Missing, unreadable, undecodable or oversize file
        """
        return await asyncio.to_thread(self._read, path)

    def _read(self, path: Path) -> str:
        try:
            size = path.stat().st_size
            if size > self._size_limit:
                raise SourceReadError(
                    path=str(path),
                    reason=f"file size {size} exceeds limit {self._size_limit}",
                )
            return path.read_text(encoding=self._encoding)
        except UnicodeDecodeError as e:
            reason = f"cannot decode as {self._encoding}"
            raise SourceReadError(path=str(path), reason=reason) from e
        except SourceReadError:
            raise
        except OSError as e:
            raise SourceReadError(path=str(path), reason=e.strerror or str(e)) from e
