"""Analysis state machine: NotStarted → Running → Success | Partial | Failed."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from dinavigator.domain.exceptions import InvalidTransitionError
from dinavigator.domain.model.enums import AnalysisState, ParseStatus

if TYPE_CHECKING:
    from collections.abc import Mapping

_TERMINAL_BY_STATUS: Mapping[ParseStatus, AnalysisState] = MappingProxyType(
    {
        ParseStatus.SUCCESS: AnalysisState.SUCCESS,
        ParseStatus.PARTIAL: AnalysisState.PARTIAL,
        ParseStatus.FAILED: AnalysisState.FAILED,
    }
)


def resolve_status(*, has_services: bool, has_errors: bool, aborted: bool = False) -> ParseStatus:
    """Parse status for a finished run.

    Success: services and no errors. Partial: services and errors.
    Failed: no services, or the run was aborted.
    """
    if aborted or not has_services:
        return ParseStatus.FAILED
    if has_errors:
        return ParseStatus.PARTIAL
    return ParseStatus.SUCCESS


class AnalysisRun:
    """One-shot state machine for a single analysis invocation.

    Re-analysis always uses a fresh instance.
    """

    def __init__(self) -> None:
        """Initialize in NotStarted."""
        self._state = AnalysisState.NOT_STARTED

    @property
    def state(self) -> AnalysisState:
        """Current state."""
        return self._state

    def start(self) -> None:
        """NotStarted → Running.

        Raises:
            InvalidTransitionError: If not in NotStarted
        """
        self._move(AnalysisState.RUNNING, allowed_from=AnalysisState.NOT_STARTED)

    def finish(self, status: ParseStatus) -> AnalysisState:
        """Running → terminal state matching status.

        Raises:
            InvalidTransitionError: If not in Running
        """
        target = _TERMINAL_BY_STATUS[status]
        self._move(target, allowed_from=AnalysisState.RUNNING)
        return target

    def _move(self, target: AnalysisState, *, allowed_from: AnalysisState) -> None:
        if self._state is not allowed_from:
            raise InvalidTransitionError(current=self._state.value, target=target.value)
        self._state = target
