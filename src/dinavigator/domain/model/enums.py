"""Domain enumerations.

Enum values that appear in serialized output are part of the external
contract and must not change.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Self


class Lifetime(Enum):
    """Service lifetime of a registration.

    Declaration order is Singleton, Scoped, Transient, Others.
    """

    SINGLETON = "Singleton"  # one instance
    SCOPED = "Scoped"  # one per scope/request
    TRANSIENT = "Transient"  # new instance per resolution
    OTHERS = "Others"  # unclassified

    @classmethod
    def parse(cls, name: str) -> Self:
        """Map a lifetime name to a member, case-insensitive.

        Names that match no member map to OTHERS.
        """
        wanted = name.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return cls.OTHERS


class InjectionKind(Enum):
    """Shape of an injection site."""

    CONSTRUCTOR = "constructor"
    METHOD = "method"
    FIELD = "field"  # fields and properties


class ConflictKind(Enum):
    """Conflict rule tag."""

    MIXED_LIFETIMES = "MixedLifetimes"
    DUPLICATE_IMPLEMENTATION = "DuplicateImplementation"
    MULTIPLE_IMPLEMENTATIONS = "MultipleImplementations"
    UNREGISTERED_INJECTION = "UnregisteredInjection"
    UNUSED_SERVICE = "UnusedService"  # does not set has_conflicts


class ParseStatus(Enum):
    """Outcome of one analysis run."""

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


class AnalysisState(Enum):
    """Analysis state machine.

    NotStarted -> Running -> Success | Partial | Failed.
    """

    NOT_STARTED = "NotStarted"
    RUNNING = "Running"
    SUCCESS = "Success"
    PARTIAL = "Partial"
    FAILED = "Failed"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is allowed."""
        return self in (AnalysisState.SUCCESS, AnalysisState.PARTIAL, AnalysisState.FAILED)


class PatternKind(Enum):
    """Capture-group roles of a registration pattern."""

    TWO_TYPES = auto()  # service + implementation captured
    ONE_TYPE = auto()  # implementation = service
    METHOD_ONLY = auto()  # service from method name, implementation is a fixed label
    FACTORY_LAMBDA = auto()  # implementation = "Factory"


class Severity(Enum):
    """Validation issue severity."""

    ERROR = "Error"  # result is not valid
    WARNING = "Warning"
    INFO = "Info"


class IssueCategory(Enum):
    """Validation issue category."""

    STRUCTURE = "Structure"
    CONSISTENCY = "Consistency"
    LOGIC = "Logic"
