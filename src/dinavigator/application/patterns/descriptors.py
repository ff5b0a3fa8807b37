"""Pattern descriptors for registration calls and injection sites.

Each descriptor pairs a compiled regex with explicit capture-group roles,
so extraction is a total function over a closed set of kinds:

    RegistrationPattern  PatternKind -> (service_type, implementation_type)
    InjectionPattern     InjectionShape -> service types, member, class

Named groups used by the descriptors:
    service, impl   registered types
    method          called extension method
    params          parameter list of a constructor/method
    type            single consumed type
    member          captured member (method or property) name
    cls             captured enclosing class name
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import TYPE_CHECKING

from dinavigator.application.patterns.typenames import (
    UNKNOWN_TYPE,
    normalize_type,
    parameter_types,
)
from dinavigator.domain.model.enums import InjectionKind, Lifetime, PatternKind

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

# Implementation label for registrations built by a lambda
FACTORY_LABEL = "Factory"

_REQUIRED_GROUPS: Mapping[PatternKind, frozenset[str]] = MappingProxyType(
    {
        PatternKind.TWO_TYPES: frozenset({"service", "impl"}),
        PatternKind.ONE_TYPE: frozenset({"service"}),
        PatternKind.METHOD_ONLY: frozenset({"method"}),
        PatternKind.FACTORY_LAMBDA: frozenset({"service"}),
    }
)


class InjectionShape(Enum):
    """What an injection pattern captures."""

    PARAMETERS = auto()  # parameter list, one site per parameter
    SINGLE = auto()  # one type


@dataclass(frozen=True, slots=True)
class RegistrationPattern:
    """Registration call pattern with capture-group roles.

    Attributes:
        regex: Compiled pattern
        kind: Capture-group roles
        label: Fixed implementation label (METHOD_ONLY only)
        lambda_factory: Whether a lambda in the call turns an inferred
            implementation into FACTORY_LABEL
    """

    regex: re.Pattern[str]
    kind: PatternKind
    label: str | None = None
    lambda_factory: bool = True

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        missing = _REQUIRED_GROUPS[self.kind] - set(self.regex.groupindex)
        if missing:
            raise ValueError(
                f"{self.kind.name} pattern requires groups {sorted(missing)}: {self.regex.pattern}"
            )
        if self.kind is PatternKind.METHOD_ONLY and not self.label:
            raise ValueError("METHOD_ONLY pattern requires a label")
        if self.kind is not PatternKind.METHOD_ONLY and self.label is not None:
            raise ValueError(f"label is only allowed for METHOD_ONLY, got {self.kind.name}")

    def extract(self, match: re.Match[str], call_text: str) -> tuple[str, str]:
        """Extract (service_type, implementation_type) from a match.

        Args:
            match: Match of this pattern
            call_text: Full call text (match extended to the closing parenthesis)

        Returns:
            Normalized service and implementation types; service may be
            UNKNOWN_TYPE when the captured text is not a usable type
        """
        match self.kind:
            case PatternKind.TWO_TYPES:
                return normalize_type(match["service"]), normalize_type(match["impl"])
            case PatternKind.ONE_TYPE:
                service = normalize_type(match["service"])
                if self.lambda_factory and "=>" in call_text:
                    return service, FACTORY_LABEL
                return service, service
            case PatternKind.METHOD_ONLY:
                return match["method"].removeprefix("Add"), self.label or UNKNOWN_TYPE
            case PatternKind.FACTORY_LAMBDA:
                return normalize_type(match["service"]), FACTORY_LABEL


@dataclass(frozen=True, slots=True)
class InjectionPattern:
    """Injection site pattern with a fixed site kind.

    Member name resolution: captured "member" group, then member_label,
    then "constructor" for constructor patterns.

    Attributes:
        regex: Compiled pattern
        kind: Site kind reported for every match
        shape: Parameter list or single type
        member_label: Fixed member name
    """

    regex: re.Pattern[str]
    kind: InjectionKind
    shape: InjectionShape
    member_label: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        groups = set(self.regex.groupindex)
        match self.shape:
            case InjectionShape.PARAMETERS:
                if "params" not in groups:
                    raise ValueError(f"PARAMETERS pattern requires 'params': {self.regex.pattern}")
            case InjectionShape.SINGLE:
                if "type" not in groups:
                    raise ValueError(f"SINGLE pattern requires 'type': {self.regex.pattern}")
        if (
            "member" not in groups
            and self.member_label is None
            and self.kind is not InjectionKind.CONSTRUCTOR
        ):
            raise ValueError(
                f"pattern needs a 'member' group or member_label: {self.regex.pattern}"
            )

    def service_types(self, match: re.Match[str]) -> tuple[str, ...]:
        """Normalized consumed types, UNKNOWN_TYPE where unusable."""
        match self.shape:
            case InjectionShape.PARAMETERS:
                return parameter_types(match["params"])
            case InjectionShape.SINGLE:
                return (normalize_type(match["type"]),)

    def member_name(self, match: re.Match[str]) -> str:
        """Member the site belongs to."""
        if "member" in self.regex.groupindex and match["member"]:
            return match["member"]
        if self.member_label is not None:
            return self.member_label
        return "constructor"

    def captured_class(self, match: re.Match[str]) -> str | None:
        """Class name captured by the pattern, None if not captured."""
        if "cls" in self.regex.groupindex:
            return match["cls"] or None
        return None


@dataclass(frozen=True, slots=True)
class ContainerCatalog:
    """Registration and injection patterns of one DI container.

    Attributes:
        name: Container name, e.g. "Autofac"
        registrations: Lifetime → patterns, in declaration order
        injections: Injection patterns, in declaration order
    """

    name: str
    registrations: Mapping[Lifetime, tuple[RegistrationPattern, ...]]
    injections: tuple[InjectionPattern, ...]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        if not any(self.registrations.values()):
            raise ValueError(f"catalog '{self.name}' has no registration patterns")

    def registration_patterns(self) -> Iterator[tuple[Lifetime, RegistrationPattern]]:
        """Iterate (lifetime, pattern) in Lifetime declaration order, then list order."""
        for lifetime in Lifetime:
            for pattern in self.registrations.get(lifetime, ()):
                yield lifetime, pattern

    @property
    def pattern_count(self) -> int:
        """Total number of patterns."""
        return sum(len(p) for p in self.registrations.values()) + len(self.injections)
