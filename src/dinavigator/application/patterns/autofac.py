"""Autofac registration catalog.

    builder.RegisterType<Foo>().As<IFoo>().SingleInstance();           Singleton
    builder.RegisterType<Foo>().As<IFoo>().InstancePerLifetimeScope();  Scoped
    builder.RegisterType<Foo>().As<IFoo>();                             Transient
    builder.Register(c => new Foo()).As<IFoo>().SingleInstance();       factory

Autofac registers transient (InstancePerDependency) unless told otherwise.
"""

from __future__ import annotations

import re
from types import MappingProxyType

from dinavigator.application.patterns.csharp import CSHARP_INJECTIONS
from dinavigator.application.patterns.descriptors import (
    ContainerCatalog,
    InjectionPattern,
    InjectionShape,
    RegistrationPattern,
)
from dinavigator.application.patterns.typenames import LAMBDA, RECEIVER, TYPE
from dinavigator.domain.model.enums import InjectionKind, Lifetime, PatternKind

NAME = "Autofac"

_REGISTER_AS = (
    rf"{RECEIVER}\.(?P<method>RegisterType)\s*<\s*(?P<impl>{TYPE})\s*>\s*\(\s*\)"
    rf"\s*\.As\s*<\s*(?P<service>{TYPE})\s*>\s*\(\s*\)"
)
_REGISTER_SELF = (
    rf"{RECEIVER}\.(?P<method>RegisterType)\s*<\s*(?P<service>{TYPE})\s*>\s*\(\s*\)"
    r"(?:\s*\.AsSelf\s*\(\s*\))?"
)
_REGISTER_LAMBDA = (
    rf"{RECEIVER}\.(?P<method>Register)\s*\(\s*{LAMBDA}[^;]*?"
    rf"\.As\s*<\s*(?P<service>{TYPE})\s*>\s*\(\s*\)"
)


def _scoped_by(scope: str) -> tuple[RegistrationPattern, ...]:
    """Registration shapes ending in a lifetime call (or a plain statement end)."""
    return (
        RegistrationPattern(re.compile(rf"{_REGISTER_AS}{scope}"), PatternKind.TWO_TYPES),
        RegistrationPattern(re.compile(rf"{_REGISTER_SELF}{scope}"), PatternKind.ONE_TYPE),
        RegistrationPattern(
            re.compile(rf"{_REGISTER_LAMBDA}{scope}"), PatternKind.FACTORY_LAMBDA
        ),
    )


AUTOFAC = ContainerCatalog(
    name=NAME,
    registrations=MappingProxyType(
        {
            Lifetime.SINGLETON: _scoped_by(r"\s*\.SingleInstance\s*\(\s*\)"),
            Lifetime.SCOPED: _scoped_by(
                r"\s*\.InstancePer(?:LifetimeScope|Request|MatchingLifetimeScope)\s*\([^()]*\)"
            ),
            Lifetime.TRANSIENT: _scoped_by(r"(?:\s*\.InstancePerDependency\s*\(\s*\))?\s*;"),
        }
    ),
    injections=(
        *CSHARP_INJECTIONS,
        # context.Resolve<IClock>()
        InjectionPattern(
            regex=re.compile(rf"\bResolve\s*<\s*(?P<type>{TYPE})\s*>"),
            kind=InjectionKind.METHOD,
            shape=InjectionShape.SINGLE,
            member_label="Resolve",
        ),
    ),
)
