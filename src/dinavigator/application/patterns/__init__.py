"""Pattern library: per-container catalogs of registration and injection patterns."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from dinavigator.application.patterns.autofac import AUTOFAC
from dinavigator.application.patterns.descriptors import (
    FACTORY_LABEL,
    ContainerCatalog,
    InjectionPattern,
    InjectionShape,
    RegistrationPattern,
)
from dinavigator.application.patterns.microsoft import MICROSOFT_DI
from dinavigator.application.patterns.typenames import UNKNOWN_TYPE
from dinavigator.domain.exceptions import UnknownContainerError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

# Registered catalogs by container name
CATALOGS: Mapping[str, ContainerCatalog] = MappingProxyType(
    {catalog.name: catalog for catalog in (MICROSOFT_DI, AUTOFAC)}
)

DEFAULT_CATALOGS: tuple[ContainerCatalog, ...] = (MICROSOFT_DI,)


def get_catalog(name: str) -> ContainerCatalog:
    """Get a registered catalog by container name.

    Raises:
        UnknownContainerError: If no catalog has that name
    """
    catalog = CATALOGS.get(name)
    if catalog is None:
        raise UnknownContainerError(name=name, available=tuple(CATALOGS))
    return catalog


def resolve_catalogs(names: Iterable[str]) -> tuple[ContainerCatalog, ...]:
    """Catalogs for the given names, in the given order, without repeats."""
    return tuple(get_catalog(name) for name in dict.fromkeys(names))


def injection_patterns(catalogs: Iterable[ContainerCatalog]) -> tuple[InjectionPattern, ...]:
    """Union of injection patterns, first occurrence wins.

    Catalogs share the C# injection table, which must be applied once.
    """
    return tuple(dict.fromkeys(p for catalog in catalogs for p in catalog.injections))


__all__ = [
    "AUTOFAC",
    "CATALOGS",
    "DEFAULT_CATALOGS",
    "FACTORY_LABEL",
    "MICROSOFT_DI",
    "UNKNOWN_TYPE",
    "ContainerCatalog",
    "InjectionPattern",
    "InjectionShape",
    "RegistrationPattern",
    "get_catalog",
    "injection_patterns",
    "resolve_catalogs",
]
