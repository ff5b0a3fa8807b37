"""Tests for application/services/analysis_run.py."""

import pytest

from dinavigator.application.services.analysis_run import AnalysisRun, resolve_status
from dinavigator.domain.exceptions import InvalidTransitionError
from dinavigator.domain.model.enums import AnalysisState, ParseStatus


class TestResolveStatus:
    """Tests for resolve_status."""

    @pytest.mark.parametrize(
        ("has_services", "has_errors", "aborted", "expected"),
        [
            (True, False, False, ParseStatus.SUCCESS),
            (True, True, False, ParseStatus.PARTIAL),
            (False, False, False, ParseStatus.FAILED),
            (False, True, False, ParseStatus.FAILED),
            (True, False, True, ParseStatus.FAILED),
        ],
    )
    def test_status(
        self, has_services: bool, has_errors: bool, aborted: bool, expected: ParseStatus
    ) -> None:
        status = resolve_status(has_services=has_services, has_errors=has_errors, aborted=aborted)
        assert status is expected


class TestAnalysisRun:
    """Tests for the AnalysisRun state machine."""

    def test_initial_state(self) -> None:
        assert AnalysisRun().state is AnalysisState.NOT_STARTED

    @pytest.mark.parametrize(
        ("status", "expected"),
        [
            (ParseStatus.SUCCESS, AnalysisState.SUCCESS),
            (ParseStatus.PARTIAL, AnalysisState.PARTIAL),
            (ParseStatus.FAILED, AnalysisState.FAILED),
        ],
    )
    def test_start_then_finish(self, status: ParseStatus, expected: AnalysisState) -> None:
        run = AnalysisRun()
        run.start()
        assert run.state is AnalysisState.RUNNING

        assert run.finish(status) is expected
        assert run.state is expected
        assert run.state.is_terminal

    def test_finish_before_start_raises(self) -> None:
        with pytest.raises(InvalidTransitionError, match="from NotStarted to Success"):
            AnalysisRun().finish(ParseStatus.SUCCESS)

    def test_start_twice_raises(self) -> None:
        run = AnalysisRun()
        run.start()
        with pytest.raises(InvalidTransitionError, match="from Running to Running"):
            run.start()

    def test_terminal_state_is_final(self) -> None:
        run = AnalysisRun()
        run.start()
        run.finish(ParseStatus.PARTIAL)

        with pytest.raises(InvalidTransitionError):
            run.start()
        with pytest.raises(InvalidTransitionError):
            run.finish(ParseStatus.SUCCESS)
        assert run.state is AnalysisState.PARTIAL
