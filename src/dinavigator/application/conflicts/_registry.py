"""Conflict rule registry and the detector entry point."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from dinavigator.application.conflicts.rules import (
    DuplicateImplementationRule,
    MixedLifetimesRule,
    MultipleImplementationsRule,
    UnregisteredInjectionRule,
    UnusedServiceRule,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from dinavigator.application.conflicts._base import ConflictRule
    from dinavigator.domain.model.conflict import Conflict
    from dinavigator.domain.model.service import Service


# Registry - tuple for immutability
# Order matters: conflicts are reported in this order
_ALL_RULES: tuple[type[ConflictRule], ...] = (
    MixedLifetimesRule,
    DuplicateImplementationRule,
    MultipleImplementationsRule,
    UnregisteredInjectionRule,
    UnusedServiceRule,
)


def default_rules() -> tuple[ConflictRule, ...]:
    """Instantiate all rules in reporting order."""
    return tuple(rule_cls() for rule_cls in _ALL_RULES)


def detect_conflicts(
    service: Service,
    rules: Sequence[ConflictRule] | None = None,
) -> Service:
    """Evaluate every rule and return the service with its conflicts.

    has_conflicts is set by every conflict except UnusedService.

    Args:
        service: Aggregated service (existing conflicts are replaced)
        rules: Rules to apply (default: all)

    Returns:
        New Service with conflicts and has_conflicts filled in
    """
    active = default_rules() if rules is None else rules
    conflicts: list[Conflict] = []
    for rule in active:
        conflicts.extend(rule.check(service))
    return replace(
        service,
        conflicts=tuple(conflicts),
        has_conflicts=any(conflict.flags_service for conflict in conflicts),
    )


def detect_all(
    services: Iterable[Service],
    rules: Sequence[ConflictRule] | None = None,
) -> tuple[Service, ...]:
    """detect_conflicts over many services with one rule set."""
    active = default_rules() if rules is None else rules
    return tuple(detect_conflicts(service, active) for service in services)
