"""Domain exceptions: all public errors of dinavigator.

Hexagonal architecture: all exceptions visible to users defined in domain.
Infrastructure/Application use these, not define their own public exceptions.
"""

from __future__ import annotations


class DINavigatorError(Exception):
    """Base for all dinavigator error exceptions.

    Allows: except DINavigatorError to catch all library errors.
    """


# N818: Signals are NOT errors, no "Error" suffix per PEP 8.
class DINavigatorSignal(Exception):  # noqa: N818
    """Base for all dinavigator signal exceptions (flow control, not errors).

    Allows: except DINavigatorSignal to catch all library signals.
    """


class ProjectRootError(DINavigatorError, FileNotFoundError):
    """Project root does not exist or is not a directory.

    Thrown to the caller: the analysis cannot start at all.

    Attributes:
        path: Offending project root.
        reason: Error description.
    """

    def __init__(self, *, path: str, reason: str) -> None:
        """Initialize with project root and error reason."""
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class SourceReadError(DINavigatorError, OSError):
    """Source file could not be read or decoded.

    Recovered per file by the engine and recorded in error details.

    Attributes:
        path: Path to file that failed.
        reason: Error description.
    """

    def __init__(self, *, path: str, reason: str) -> None:
        """Initialize with file path and error reason."""
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class AdapterInputError(DINavigatorError, ValueError):
    """External analyzer output is not a usable JSON object.

    Fatal for the adapter path: no partial ProjectDI is produced.

    Attributes:
        reason: Error description.
    """

    def __init__(self, *, reason: str) -> None:
        """Initialize with error reason."""
        self.reason = reason
        super().__init__(f"Invalid external analyzer result: {reason}")


class UnknownContainerError(DINavigatorError, LookupError):
    """Requested container catalog is not registered.

    Attributes:
        name: Requested catalog name.
        available: Registered catalog names.
    """

    def __init__(self, *, name: str, available: tuple[str, ...]) -> None:
        """Initialize with requested and available catalog names."""
        self.name = name
        self.available = available
        super().__init__(f"Unknown container '{name}', available: {', '.join(available)}")


class AnalysisInProgressError(DINavigatorError, RuntimeError):
    """Engine is already running an analysis."""

    def __init__(self) -> None:
        """Initialize with fixed message."""
        super().__init__("Analysis is already in progress")


class InvalidTransitionError(DINavigatorError, RuntimeError):
    """Analysis state machine driven through an illegal transition.

    Attributes:
        current: State name before the attempted transition.
        target: Requested state name.
    """

    def __init__(self, *, current: str, target: str) -> None:
        """Initialize with current and requested state names."""
        self.current = current
        self.target = target
        super().__init__(f"Cannot transition from {current} to {target}")


class AnalysisCancelled(DINavigatorSignal):
    """Signal that the caller cancelled the analysis.

    Raised between files; the engine converts it into a failed result.
    """
