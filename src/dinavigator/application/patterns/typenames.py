"""C# type-name fragments and normalization.

Types are compared by exact string equality downstream, so every captured
type goes through normalize_type: whitespace collapsed, "global::" and the
nullable "?" stripped, generic arguments separated by ", ".
"""

from __future__ import annotations

import re

# Sentinel for captures that are not a usable service type
UNKNOWN_TYPE = "Unknown"

# Type reference: Name, Ns.Name, Name<T>, Name<A, B<C>>, Name[], Name?
TYPE = r"(?:global::)?[A-Za-z_][\w.]*(?:\s*<(?:[^<>]|<[^<>]*>)*>)?(?:\[\])?\??"

# Receiver of an extension call: services, builder.Services, ...
RECEIVER = r"(?:[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*)?"

# Lambda head: sp =>, (sp) =>, (sp, key) =>
LAMBDA = r"(?:\([^()]*\)|[A-Za-z_]\w*)\s*=>"

# Parameter list body, up to two levels of nested parentheses:
# [FromKeyedServices("a")] IClock clock, CancellationToken ct = default(CancellationToken)
PARAMS = r"(?P<params>(?:[^()]|\((?:[^()]|\([^()]*\))*\))*)"

# Never DI services
BUILTIN_TYPES: frozenset[str] = frozenset(
    {
        "bool",
        "byte",
        "char",
        "decimal",
        "double",
        "dynamic",
        "float",
        "int",
        "long",
        "nint",
        "nuint",
        "object",
        "sbyte",
        "short",
        "string",
        "uint",
        "ulong",
        "ushort",
        "var",
        "void",
        "Boolean",
        "CancellationToken",
        "DateTime",
        "DateTimeOffset",
        "Guid",
        "Int32",
        "Int64",
        "Object",
        "String",
        "Task",
        "TimeSpan",
        "ValueTask",
    }
)

# Words that can follow an access modifier but never name a class
NON_CLASS_WORDS: frozenset[str] = frozenset(
    {
        "abstract",
        "async",
        "class",
        "const",
        "delegate",
        "enum",
        "event",
        "extern",
        "interface",
        "new",
        "override",
        "partial",
        "readonly",
        "record",
        "return",
        "sealed",
        "static",
        "struct",
        "unsafe",
        "virtual",
        "void",
    }
)

_WHITESPACE = re.compile(r"\s+")
_TYPE_NAME = re.compile(r"[A-Za-z_][\w.]*(?:<[\w.,<>\[\]? ]*>)?(?:\[\])?")
_ATTRIBUTES = re.compile(r"\[[^\[\]]+\]")
_PARAM_MODIFIERS = re.compile(r"^(?:(?:this|ref|out|in|params|scoped|readonly)\s+)+")
_PARAM = re.compile(r"^(?P<type>.+?)\s+@?(?P<name>[A-Za-z_]\w*)$", re.DOTALL)


def normalize_type(raw: str) -> str:
    """Canonical form of a captured type, or UNKNOWN_TYPE.

    Examples:
        "IRepository< User,int >" → "IRepository<User, int>"
        "global::App.IClock?" → "App.IClock"
        "string" → "Unknown"
    """
    text = _WHITESPACE.sub("", raw).removeprefix("global::").removesuffix("?")
    text = text.replace(",", ", ")
    if not text or _TYPE_NAME.fullmatch(text) is None:
        return UNKNOWN_TYPE
    base = text.split("<", 1)[0].removesuffix("[]")
    if base in BUILTIN_TYPES:
        return UNKNOWN_TYPE
    return text


def split_top_level(text: str, separator: str = ",") -> tuple[str, ...]:
    """Split at separators outside <>, () and [].

    Empty pieces are dropped.
    """
    parts: list[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(text):
        if char in "<([":
            depth += 1
        elif char in ">)]":
            depth = max(depth - 1, 0)
        elif char == separator and depth == 0:
            parts.append(text[start:index])
            start = index + 1
    parts.append(text[start:])
    return tuple(part.strip() for part in parts if part.strip())


def parameter_types(params: str) -> tuple[str, ...]:
    """Normalized types of a C# parameter list.

    Attributes, modifiers and default values are stripped. Parameters that
    cannot be parsed yield UNKNOWN_TYPE.

    Example:
        "[FromServices] IClock clock, ILogger<Foo> logger = null"
        → ("IClock", "ILogger<Foo>")
    """
    types: list[str] = []
    for raw in split_top_level(params):
        param = _ATTRIBUTES.sub("", raw).strip()
        param = param.split("=", 1)[0]
        param = _PARAM_MODIFIERS.sub("", param).strip()
        parsed = _PARAM.match(param)
        types.append(normalize_type(parsed["type"]) if parsed else UNKNOWN_TYPE)
    return tuple(types)
