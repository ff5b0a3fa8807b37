"""Reporter protocol for output formatting.

Users extend dinavigator by implementing this Protocol.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from dinavigator.domain.model.project import ProjectDI


class ReporterProtocol(Protocol):
    """Contract for ProjectDI reporters.

    Output is str, not print(). Caller decides destination.
    dinavigator provides JsonReporter, ConsoleReporter and PlainTextReporter.
    """

    def report(self, project: ProjectDI) -> str:
        """Format analysis result as string.

        Args:
            project: Analysis result to format

        Returns:
            Formatted string representation
        """
        ...
