"""Dependency graph builder and cycle detection over injection sites."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from dinavigator.application.patterns import FACTORY_LABEL
from dinavigator.domain.model.graph import DependencyGraph, find_cycles

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from dinavigator.domain.model.injection_site import InjectionSite
    from dinavigator.domain.model.registration import Registration


def build_dependency_graph(sites: Iterable[InjectionSite]) -> DependencyGraph:
    """Class → distinct injected service types, UnknownClass excluded."""
    return DependencyGraph.from_edges((site.class_name, site.service_type) for site in sites)


def implementation_map(registrations: Iterable[Registration]) -> Mapping[str, tuple[str, ...]]:
    """Service type → registered implementation types (factories excluded)."""
    impls: dict[str, dict[str, None]] = {}
    for reg in registrations:
        if reg.implementation_type != FACTORY_LABEL:
            impls.setdefault(reg.service_type, {})[reg.implementation_type] = None
    return MappingProxyType({k: tuple(v) for k, v in impls.items()})


def detect_cycles(
    graph: DependencyGraph,
    registrations: Iterable[Registration] = (),
) -> tuple[str, ...]:
    """Cycles of the graph, following service types to their implementations."""
    return find_cycles(graph, implementation_map(registrations))
