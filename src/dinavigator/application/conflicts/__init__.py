"""Conflict detector: rule set evaluated per service."""

from dinavigator.application.conflicts._base import ConflictRule
from dinavigator.application.conflicts._registry import (
    default_rules,
    detect_all,
    detect_conflicts,
)
from dinavigator.application.conflicts.rules import (
    DuplicateImplementationRule,
    MixedLifetimesRule,
    MultipleImplementationsRule,
    UnregisteredInjectionRule,
    UnusedServiceRule,
)

__all__ = [
    "ConflictRule",
    "DuplicateImplementationRule",
    "MixedLifetimesRule",
    "MultipleImplementationsRule",
    "UnregisteredInjectionRule",
    "UnusedServiceRule",
    "default_rules",
    "detect_all",
    "detect_conflicts",
]
