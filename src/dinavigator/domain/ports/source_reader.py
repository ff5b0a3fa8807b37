"""Source reader port (interface)."""

from abc import ABC, abstractmethod
from pathlib import Path


class SourceReaderPort(ABC):
    """Port for reading source text.

    Infrastructure layer must provide implementation.
    """

    @abstractmethod
    async def read_text(self, path: Path) -> str:
        """Read one source file.

        Args:
            path: Path to source file

        Returns:
            Decoded file text

        Raises:
            SourceReadError: If file cannot be read or decoded
            OSError: Tolerated as well; the engine records it per file
        """
        ...
