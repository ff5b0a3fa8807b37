"""The five conflict rules.

Rules are independent and additive: a service may carry several conflicts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dinavigator.application.conflicts._base import ConflictRule
from dinavigator.domain.model.conflict import Conflict
from dinavigator.domain.model.enums import ConflictKind

if TYPE_CHECKING:
    from dinavigator.domain.model.service import Service


class MixedLifetimesRule(ConflictRule):
    """Registrations disagree on the lifetime."""

    kind = ConflictKind.MIXED_LIFETIMES

    def check(self, service: Service) -> tuple[Conflict, ...]:
        """Flag more than one distinct lifetime."""
        lifetimes = service.lifetimes
        if len(lifetimes) <= 1:
            return ()
        names = ", ".join(lifetime.value for lifetime in lifetimes)
        return (Conflict(self.kind, f"Multiple lifetimes: {names}"),)


class DuplicateImplementationRule(ConflictRule):
    """Same implementation registered more than once at the same lifetime."""

    kind = ConflictKind.DUPLICATE_IMPLEMENTATION

    def check(self, service: Service) -> tuple[Conflict, ...]:
        """One conflict per duplicated (lifetime, implementation) pair."""
        locations: dict[tuple[str, str], list[str]] = {}
        for reg in service.registrations:
            key = (reg.lifetime.value, reg.implementation_type)
            locations.setdefault(key, []).append(reg.location)

        return tuple(
            Conflict(
                self.kind,
                f"{impl} registered {len(found)} times as {lifetime}: {', '.join(found)}",
            )
            for (lifetime, impl), found in locations.items()
            if len(found) > 1
        )


class MultipleImplementationsRule(ConflictRule):
    """Several implementations compete within one lifetime."""

    kind = ConflictKind.MULTIPLE_IMPLEMENTATIONS

    def check(self, service: Service) -> tuple[Conflict, ...]:
        """One conflict per lifetime with more than one distinct implementation."""
        conflicts: list[Conflict] = []
        for lifetime in service.lifetimes:
            at_lifetime = service.registrations_at(lifetime)
            impls = dict.fromkeys(reg.implementation_type for reg in at_lifetime)
            if len(impls) > 1:
                conflicts.append(
                    Conflict(
                        self.kind,
                        f"{len(impls)} different implementations for {lifetime.value}: "
                        f"{', '.join(impls)}",
                    )
                )
        return tuple(conflicts)


class UnregisteredInjectionRule(ConflictRule):
    """Injected but never registered."""

    kind = ConflictKind.UNREGISTERED_INJECTION

    def check(self, service: Service) -> tuple[Conflict, ...]:
        """Flag sites without any registration."""
        if service.registrations or not service.injection_sites:
            return ()
        count = len(service.injection_sites)
        return (Conflict(self.kind, f"{count} injection sites but no registration"),)


class UnusedServiceRule(ConflictRule):
    """Registered but never injected. Reported without setting has_conflicts."""

    kind = ConflictKind.UNUSED_SERVICE

    def check(self, service: Service) -> tuple[Conflict, ...]:
        """Flag registrations without any injection site."""
        if not service.registrations or service.injection_sites:
            return ()
        count = len(service.registrations)
        return (Conflict(self.kind, f"Registered {count} time(s) but never injected"),)
