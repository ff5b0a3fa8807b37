"""Service aggregator and lifetime grouper."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dinavigator.domain.model.service import GROUP_ORDER, Service, ServiceGroup

if TYPE_CHECKING:
    from collections.abc import Iterable

    from dinavigator.domain.model.injection_site import InjectionSite
    from dinavigator.domain.model.registration import Registration


def aggregate_services(
    registrations: Iterable[Registration],
    sites: Iterable[InjectionSite],
) -> tuple[Service, ...]:
    """Merge registrations and sites per service type.

    Services are keyed by registration service types; sites whose type has
    no registration are not attached to any service.

    Returns:
        Services without conflicts, in first-registration order
    """
    regs_by_type: dict[str, list[Registration]] = {}
    for reg in registrations:
        regs_by_type.setdefault(reg.service_type, []).append(reg)

    sites_by_type: dict[str, list[InjectionSite]] = {}
    for site in sites:
        if site.service_type in regs_by_type:
            sites_by_type.setdefault(site.service_type, []).append(site)

    return tuple(
        Service(
            name=name,
            registrations=tuple(regs),
            injection_sites=tuple(sites_by_type.get(name, ())),
        )
        for name, regs in regs_by_type.items()
    )


def group_by_lifetime(services: Iterable[Service]) -> tuple[ServiceGroup, ...]:
    """Bucket services into Scoped, Singleton, Transient, Others groups.

    A service joins every group it has a registration for. Services are
    sorted by name (ordinal). Empty groups are omitted.
    """
    ordered = sorted(services, key=lambda service: service.name)
    groups: list[ServiceGroup] = []
    for lifetime in GROUP_ORDER:
        members = tuple(service for service in ordered if service.has_lifetime(lifetime))
        if members:
            groups.append(ServiceGroup(lifetime=lifetime, services=members))
    return tuple(groups)
