"""Microsoft.Extensions.DependencyInjection registration catalog.

Per lifetime, every registration method is covered in six shapes:

    AddScoped<IFoo, Foo>()                     TWO_TYPES
    AddScoped<IFoo>() / AddScoped<Foo>()       ONE_TYPE
    AddScoped<IFoo>(sp => new Foo())           FACTORY_LAMBDA
    AddScoped(typeof(IFoo), typeof(Foo))       TWO_TYPES
    AddScoped(typeof(Foo))                     ONE_TYPE
    AddScoped(typeof(IFoo), sp => new Foo())   FACTORY_LAMBDA

The shapes are mutually exclusive, so a plain call yields one registration.
Framework extensions without type arguments (AddControllers(), ...) are
METHOD_ONLY patterns with a fixed implementation label.
"""

from __future__ import annotations

import re
from types import MappingProxyType

from dinavigator.application.patterns.csharp import CSHARP_INJECTIONS
from dinavigator.application.patterns.descriptors import ContainerCatalog, RegistrationPattern
from dinavigator.application.patterns.typenames import LAMBDA, RECEIVER, TYPE
from dinavigator.domain.model.enums import Lifetime, PatternKind

NAME = "Microsoft.Extensions.DependencyInjection"


def _call(methods: str) -> str:
    return rf"{RECEIVER}\.(?P<method>{methods})\s*"


def _lifetime_patterns(methods: str) -> tuple[RegistrationPattern, ...]:
    """Six registration shapes for one group of lifetime methods."""
    call = _call(methods)
    typeof_service = rf"\(\s*typeof\s*\(\s*(?P<service>{TYPE})\s*\)"
    return (
        RegistrationPattern(
            re.compile(rf"{call}<\s*(?P<service>{TYPE})\s*,\s*(?P<impl>{TYPE})\s*>\s*\("),
            PatternKind.TWO_TYPES,
        ),
        RegistrationPattern(
            re.compile(rf"{call}<\s*(?P<service>{TYPE})\s*>\s*\((?!\s*{LAMBDA})"),
            PatternKind.ONE_TYPE,
        ),
        RegistrationPattern(
            re.compile(rf"{call}<\s*(?P<service>{TYPE})\s*>\s*\(\s*{LAMBDA}"),
            PatternKind.FACTORY_LAMBDA,
        ),
        RegistrationPattern(
            re.compile(
                rf"{call}{typeof_service}\s*,\s*typeof\s*\(\s*(?P<impl>{TYPE})\s*\)"
            ),
            PatternKind.TWO_TYPES,
        ),
        RegistrationPattern(
            re.compile(rf"{call}{typeof_service}\s*\)"),
            PatternKind.ONE_TYPE,
        ),
        RegistrationPattern(
            re.compile(rf"{call}{typeof_service}\s*,\s*{LAMBDA}"),
            PatternKind.FACTORY_LAMBDA,
        ),
    )


def _extension_patterns(methods: str) -> tuple[RegistrationPattern, ...]:
    """Generic framework extensions whose lambdas configure, not construct."""
    call = _call(methods)
    return (
        RegistrationPattern(
            re.compile(rf"{call}<\s*(?P<service>{TYPE})\s*,\s*(?P<impl>{TYPE})\s*>\s*\("),
            PatternKind.TWO_TYPES,
        ),
        RegistrationPattern(
            re.compile(rf"{call}<\s*(?P<service>{TYPE})\s*>\s*\("),
            PatternKind.ONE_TYPE,
            lambda_factory=False,
        ),
    )


def _method_only(method: str, label: str) -> RegistrationPattern:
    """Extension call without type arguments, e.g. services.AddCors(...)."""
    return RegistrationPattern(
        re.compile(rf"{_call(method)}\("),
        PatternKind.METHOD_ONLY,
        label=label,
    )


_SINGLETON: tuple[RegistrationPattern, ...] = (
    *_lifetime_patterns(r"(?:Try)?Add(?:Keyed)?Singleton"),
    *_extension_patterns(r"AddHostedService|Configure"),
)

_SCOPED: tuple[RegistrationPattern, ...] = (
    *_lifetime_patterns(r"(?:Try)?Add(?:Keyed)?Scoped"),
    *_extension_patterns(r"AddDbContext(?:Pool)?"),
)

_TRANSIENT: tuple[RegistrationPattern, ...] = (
    *_lifetime_patterns(r"(?:Try)?Add(?:Keyed)?Transient"),
    *_extension_patterns(r"AddHttpClient"),
    _method_only("AddHttpClient", "HttpClient"),
    _method_only("AddMemoryCache", "MemoryCache"),
)

# Framework feature registrations without a single lifetime
_OTHERS: tuple[RegistrationPattern, ...] = (
    _method_only("AddControllers", "Controller"),
    _method_only("AddControllersWithViews", "ControllersWithViews"),
    _method_only("AddEndpointsApiExplorer", "EndpointsApiExplorer"),
    _method_only("AddOpenApi", "OpenApi"),
    _method_only("AddSwaggerGen", "SwaggerGen"),
    _method_only("AddCors", "Cors"),
    _method_only("AddRazorPages", "RazorPages"),
    _method_only("AddRazorComponents", "RazorComponents"),
    _method_only("AddSignalR", "SignalR"),
    _method_only("AddHealthChecks", "HealthChecks"),
    _method_only("AddAuthentication", "Authentication"),
    _method_only("AddAuthorization", "Authorization"),
    _method_only("AddQuartz", "Quartz"),
    _method_only("AddQuartzHostedService", "QuartzHostedService"),
)

MICROSOFT_DI = ContainerCatalog(
    name=NAME,
    registrations=MappingProxyType(
        {
            Lifetime.SINGLETON: _SINGLETON,
            Lifetime.SCOPED: _SCOPED,
            Lifetime.TRANSIENT: _TRANSIENT,
            Lifetime.OTHERS: _OTHERS,
        }
    ),
    injections=CSHARP_INJECTIONS,
)
