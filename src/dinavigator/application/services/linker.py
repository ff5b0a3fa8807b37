"""Linker: injection sites → registrations of the same service type."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from dinavigator.domain.model.injection_site import InjectionSite
    from dinavigator.domain.model.registration import Registration


def ensure_unique_ids(registrations: Sequence[Registration]) -> tuple[Registration, ...]:
    """Re-suffix ids that collide across files.

    Ids are unique per file; two files with the same basename can still
    produce the same id. Later duplicates get "-2", "-3", ...
    """
    taken: set[str] = set()
    unique: list[Registration] = []
    for reg in registrations:
        candidate = reg.id
        suffix = 1
        while candidate in taken:
            suffix += 1
            candidate = f"{reg.id}-{suffix}"
        taken.add(candidate)
        unique.append(reg if candidate == reg.id else replace(reg, id=candidate))
    return tuple(unique)


def link_sites(
    sites: Iterable[InjectionSite],
    registrations: Iterable[Registration],
) -> tuple[InjectionSite, ...]:
    """Set linked_registration_ids on every site.

    A site links to every registration whose service_type equals its own
    (exact, case-sensitive). Unmatched sites get an empty tuple.

    Time: O(S + R) via a service_type index.
    """
    ids_by_type: dict[str, list[str]] = {}
    for reg in registrations:
        ids_by_type.setdefault(reg.service_type, []).append(reg.id)

    return tuple(
        replace(site, linked_registration_ids=tuple(ids_by_type.get(site.service_type, ())))
        for site in sites
    )
