"""Injection shapes shared by all C# container catalogs.

Constructor injection and service-locator calls look the same whichever
container wires the application, so every catalog starts from this table.
"""

from __future__ import annotations

import re

from dinavigator.application.patterns.descriptors import InjectionPattern, InjectionShape
from dinavigator.application.patterns.typenames import PARAMS, TYPE
from dinavigator.domain.model.enums import InjectionKind

_ACCESS = r"(?:public|private|protected|internal)"

# Parameter names conventionally used for the service provider in lambdas
_PROVIDER = r"(?:sp|provider|serviceProvider|services|c|ctx|context)"
_PROVIDER_LAMBDA = rf"(?:\b{_PROVIDER}|\(\s*{_PROVIDER}(?:\s*,\s*\w+)?\s*\))\s*=>"

# Type-declaration keywords that would otherwise parse as a return type
_NOT_DECLARATION = r"(?!(?:class|record|struct|interface|enum|delegate|event)\b)"

CSHARP_INJECTIONS: tuple[InjectionPattern, ...] = (
    # public OrderService(IUserService users, ...)
    InjectionPattern(
        regex=re.compile(
            rf"\b{_ACCESS}\s+(?:static\s+)?(?P<cls>[A-Za-z_]\w*)\s*\({PARAMS}\)"
        ),
        kind=InjectionKind.CONSTRUCTOR,
        shape=InjectionShape.PARAMETERS,
    ),
    # class OrderService(IUserService users) : IOrderService
    InjectionPattern(
        regex=re.compile(
            r"\b(?:class|record)\s+(?P<cls>[A-Za-z_]\w*)(?:\s*<[^<>]*>)?\s*"
            rf"\({PARAMS}\)"
        ),
        kind=InjectionKind.CONSTRUCTOR,
        shape=InjectionShape.PARAMETERS,
    ),
    # public Task Handle(IMediator mediator, ...)
    InjectionPattern(
        regex=re.compile(
            rf"\b{_ACCESS}\s+(?:(?:static|virtual|override|async|sealed|abstract|new|partial)\s+)*"
            rf"{_NOT_DECLARATION}{TYPE}\s+(?P<member>[A-Za-z_]\w*)\s*(?:<[^<>()]*>\s*)?"
            rf"\({PARAMS}\)"
        ),
        kind=InjectionKind.METHOD,
        shape=InjectionShape.PARAMETERS,
    ),
    # private readonly IClock _clock;
    InjectionPattern(
        regex=re.compile(
            rf"\b{_ACCESS}\s+(?:(?:static|readonly|volatile)\s+)*(?P<type>{TYPE})\s+"
            r"[A-Za-z_]\w*\s*;"
        ),
        kind=InjectionKind.FIELD,
        shape=InjectionShape.SINGLE,
        member_label="field",
    ),
    # [Inject] public IClock Clock { get; set; }
    InjectionPattern(
        regex=re.compile(
            rf"\b{_ACCESS}\s+(?:(?:virtual|override|required)\s+)*(?P<type>{TYPE})\s+"
            r"(?P<member>[A-Za-z_]\w*)\s*\{\s*get;\s*(?:\w+\s+)?(?:set|init);\s*\}"
        ),
        kind=InjectionKind.FIELD,
        shape=InjectionShape.SINGLE,
    ),
    # sp => new Clock(...)
    InjectionPattern(
        regex=re.compile(rf"{_PROVIDER_LAMBDA}\s*new\s+(?P<type>{TYPE})\s*\("),
        kind=InjectionKind.METHOD,
        shape=InjectionShape.SINGLE,
        member_label="factory",
    ),
    # provider.GetRequiredService<IClock>()
    InjectionPattern(
        regex=re.compile(rf"\bGetRequired(?:Keyed)?Service\s*<\s*(?P<type>{TYPE})\s*>"),
        kind=InjectionKind.METHOD,
        shape=InjectionShape.SINGLE,
        member_label="GetRequiredService",
    ),
    # provider.GetService<IClock>()
    InjectionPattern(
        regex=re.compile(rf"\bGet(?:Keyed)?Service\s*<\s*(?P<type>{TYPE})\s*>"),
        kind=InjectionKind.METHOD,
        shape=InjectionShape.SINGLE,
        member_label="GetService",
    ),
    # provider.GetRequiredService(typeof(IClock))
    InjectionPattern(
        regex=re.compile(
            rf"\bGetRequiredService\s*\(\s*typeof\s*\(\s*(?P<type>{TYPE})\s*\)"
        ),
        kind=InjectionKind.METHOD,
        shape=InjectionShape.SINGLE,
        member_label="GetRequiredService",
    ),
    # provider.GetService(typeof(IClock))
    InjectionPattern(
        regex=re.compile(rf"\bGetService\s*\(\s*typeof\s*\(\s*(?P<type>{TYPE})\s*\)"),
        kind=InjectionKind.METHOD,
        shape=InjectionShape.SINGLE,
        member_label="GetService",
    ),
)
