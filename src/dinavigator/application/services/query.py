"""Read-only queries over a ProjectDI."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dinavigator.domain.model.enums import Lifetime
    from dinavigator.domain.model.project import ProjectDI
    from dinavigator.domain.model.service import Service


def _matcher(query: str) -> re.Pattern[str]:
    """Case-insensitive search pattern; "*" matches any run of characters."""
    return re.compile(".*".join(re.escape(part) for part in query.split("*")), re.IGNORECASE)


def search_services(project: ProjectDI, query: str) -> tuple[Service, ...]:
    """Services whose name or an implementation type matches query.

    Matching is case-insensitive and unanchored; "*" is a wildcard.
    An empty query matches every service.

    Example:
        search_services(project, "I*Repository") → IUserRepository, IOrderRepository
    """
    pattern = _matcher(query.strip())
    return tuple(
        service
        for service in project.services
        if pattern.search(service.name)
        or any(pattern.search(impl) for impl in service.implementation_types)
    )


def services_with_lifetime(project: ProjectDI, lifetime: Lifetime) -> tuple[Service, ...]:
    """Services having a registration at lifetime, sorted by name."""
    group = project.group(lifetime)
    return group.services if group is not None else ()


def conflicting_services(project: ProjectDI) -> tuple[Service, ...]:
    """Services with has_conflicts set."""
    return tuple(service for service in project.services if service.has_conflicts)


def dependents_of(project: ProjectDI, service_type: str) -> tuple[str, ...]:
    """Classes injecting service_type, sorted."""
    return tuple(sorted(project.dependency_graph.dependents(service_type)))
