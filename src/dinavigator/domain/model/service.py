"""Service aggregate and lifetime groups."""

from __future__ import annotations

from dataclasses import dataclass

from dinavigator.domain.model.conflict import Conflict
from dinavigator.domain.model.enums import Lifetime
from dinavigator.domain.model.injection_site import InjectionSite
from dinavigator.domain.model.registration import Registration

# Presentation order of lifetime groups
GROUP_ORDER: tuple[Lifetime, ...] = (
    Lifetime.SCOPED,
    Lifetime.SINGLETON,
    Lifetime.TRANSIENT,
    Lifetime.OTHERS,
)


@dataclass(frozen=True, slots=True)
class Service:
    """All registrations and injection sites sharing one service type.

    Invariants (FAIL-FIRST):
    - every registration and site has service_type == name
    - has_conflicts == any conflict other than UnusedService

    Attributes:
        name: Service type (unique key)
        registrations: Registrations in discovery order
        injection_sites: Injection sites in discovery order
        conflicts: Detected conflicts in rule order
        has_conflicts: Whether a flagging conflict exists
    """

    name: str
    registrations: tuple[Registration, ...] = ()
    injection_sites: tuple[InjectionSite, ...] = ()
    conflicts: tuple[Conflict, ...] = ()
    has_conflicts: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        for reg in self.registrations:
            if reg.service_type != self.name:
                raise ValueError(
                    f"registration '{reg.id}' has service_type '{reg.service_type}', "
                    f"expected '{self.name}'"
                )
        for site in self.injection_sites:
            if site.service_type != self.name:
                raise ValueError(
                    f"injection site at {site.location} has service_type "
                    f"'{site.service_type}', expected '{self.name}'"
                )
        expected = any(c.flags_service for c in self.conflicts)
        if self.has_conflicts != expected:
            kinds = [c.kind.value for c in self.conflicts]
            raise ValueError(f"has_conflicts must be {expected} for conflicts {kinds}")

    @property
    def lifetimes(self) -> tuple[Lifetime, ...]:
        """Distinct registered lifetimes in first-seen order."""
        return tuple(dict.fromkeys(reg.lifetime for reg in self.registrations))

    @property
    def implementation_types(self) -> tuple[str, ...]:
        """Distinct implementation types in first-seen order."""
        return tuple(dict.fromkeys(reg.implementation_type for reg in self.registrations))

    @property
    def is_registered(self) -> bool:
        """Whether at least one registration exists."""
        return bool(self.registrations)

    @property
    def is_injected(self) -> bool:
        """Whether at least one injection site exists."""
        return bool(self.injection_sites)

    def registrations_at(self, lifetime: Lifetime) -> tuple[Registration, ...]:
        """Registrations with the given lifetime."""
        return tuple(reg for reg in self.registrations if reg.lifetime is lifetime)

    def has_lifetime(self, lifetime: Lifetime) -> bool:
        """Whether any registration has the given lifetime."""
        return any(reg.lifetime is lifetime for reg in self.registrations)


@dataclass(frozen=True, slots=True)
class ServiceGroup:
    """Services having at least one registration at one lifetime.

    A service registered at several lifetimes appears in several groups.

    Invariants (FAIL-FIRST):
    - services non-empty, sorted by name (ordinal), names unique
    - every service has a registration at lifetime

    Attributes:
        lifetime: Group lifetime
        services: Services sorted by name
    """

    lifetime: Lifetime
    services: tuple[Service, ...]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.services:
            raise ValueError(f"{self.lifetime.value} group must not be empty")
        names = [s.name for s in self.services]
        if names != sorted(names):
            raise ValueError(f"{self.lifetime.value} group services must be sorted by name")
        if len(set(names)) != len(names):
            raise ValueError(f"{self.lifetime.value} group has duplicate services")
        for service in self.services:
            if not service.has_lifetime(self.lifetime):
                raise ValueError(
                    f"service '{service.name}' has no {self.lifetime.value} registration"
                )

    @property
    def count(self) -> int:
        """Number of services in the group."""
        return len(self.services)
