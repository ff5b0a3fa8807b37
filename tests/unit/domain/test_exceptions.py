"""Tests for domain/exceptions.py."""

import pytest

from dinavigator.domain.exceptions import (
    AdapterInputError,
    AnalysisCancelled,
    AnalysisInProgressError,
    DINavigatorError,
    DINavigatorSignal,
    InvalidTransitionError,
    ProjectRootError,
    SourceReadError,
    UnknownContainerError,
)


class TestErrorHierarchy:
    """Each error is catchable as the library base and as the closest built-in."""

    @pytest.mark.parametrize(
        ("error", "builtin"),
        [
            (ProjectRootError(path="/x", reason="does not exist"), FileNotFoundError),
            (SourceReadError(path="/x/A.cs", reason="boom"), OSError),
            (AdapterInputError(reason="bad"), ValueError),
            (UnknownContainerError(name="Ninject", available=("Autofac",)), LookupError),
            (AnalysisInProgressError(), RuntimeError),
            (InvalidTransitionError(current="Running", target="Running"), RuntimeError),
        ],
    )
    def test_bases(self, error: DINavigatorError, builtin: type[Exception]) -> None:
        assert isinstance(error, DINavigatorError)
        assert isinstance(error, builtin)

    def test_signal_is_not_error(self) -> None:
        signal = AnalysisCancelled()
        assert isinstance(signal, DINavigatorSignal)
        assert not isinstance(signal, DINavigatorError)


class TestErrorContext:
    """Errors keep their keyword-only context."""

    def test_source_read_error(self) -> None:
        error = SourceReadError(path="/x/A.cs", reason="cannot decode as utf-8")
        assert error.path == "/x/A.cs"
        assert error.reason == "cannot decode as utf-8"
        assert str(error) == "/x/A.cs: cannot decode as utf-8"

    def test_adapter_input_error(self) -> None:
        error = AdapterInputError(reason="malformed JSON")
        assert str(error) == "Invalid external analyzer result: malformed JSON"

    def test_unknown_container_error(self) -> None:
        error = UnknownContainerError(name="Ninject", available=("A", "B"))
        assert error.name == "Ninject"
        assert "A, B" in str(error)

    def test_in_progress_message(self) -> None:
        assert str(AnalysisInProgressError()) == "Analysis is already in progress"
