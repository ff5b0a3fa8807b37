"""Positional helpers over raw source text.

No parsing: lines, balanced call text and the enclosing-class scan are
recovered from character offsets.
"""

from __future__ import annotations

import re

from dinavigator.domain.model.injection_site import UNKNOWN_CLASS

# Maximum characters scanned past a match to close its call
CALL_LOOKAHEAD = 500

# [ApiController] [Route("api")] ahead of the modifiers
_ATTRIBUTES = r"(?:\[[^\]]*\]\s*)*"
_MODIFIERS = r"(?:(?:public|private|protected|internal|abstract|sealed|static|partial|file)\s+)*"
# Records carry primary constructors like classes: record Foo, record class Foo
_CLASS_DECL = re.compile(
    rf"^{_ATTRIBUTES}{_MODIFIERS}(?:class|record(?:\s+class)?)\s+"
    r"(?!struct\b)(?P<name>[A-Za-z_]\w*(?:\.\w+)*)"
)
_OTHER_TYPE_DECL = re.compile(
    rf"^{_ATTRIBUTES}{_MODIFIERS}(?:readonly\s+|ref\s+)*"
    r"(?:struct|interface|enum|record\s+struct)\s+"
)
_NAMESPACE_DECL = re.compile(r"^namespace\s+")


def line_number_at(text: str, offset: int) -> int:
    """1-based line containing offset: newlines before offset + 1."""
    return text.count("\n", 0, offset) + 1


def complete_call(text: str, start: int, end: int, limit: int = CALL_LOOKAHEAD) -> str:
    """Extend text[start:end] forward until its parentheses balance.

    Stops after limit characters when the call never closes.

    Example:
        text = "services.AddScoped<IFoo>(sp => new Foo(sp));"
        match covers "services.AddScoped<IFoo>("
        → "services.AddScoped<IFoo>(sp => new Foo(sp))"
    """
    depth = text.count("(", start, end) - text.count(")", start, end)
    pos = end
    stop = min(len(text), end + limit)
    while depth > 0 and pos < stop:
        char = text[pos]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        pos += 1
    return text[start:pos]


def enclosing_class(text: str, offset: int) -> str:
    """Name of the class enclosing offset, by scanning lines upward.

    Starts at the line containing offset (only the part before offset) and
    walks towards the top of the file. Returns the first class or record
    declaration found, attributes on the same line allowed. Stops with
    UNKNOWN_CLASS when a struct, interface, enum or namespace declaration
    comes first, or the top of the file is reached.

    Args:
        text: Whole file text
        offset: Character offset of the match

    Returns:
        Class name or UNKNOWN_CLASS
    """
    end = offset
    while True:
        start = text.rfind("\n", 0, end) + 1
        line = text[start:end].strip()

        found = _CLASS_DECL.match(line)
        if found is not None:
            return found["name"]
        if _OTHER_TYPE_DECL.match(line) or _NAMESPACE_DECL.match(line):
            return UNKNOWN_CLASS

        if start == 0:
            return UNKNOWN_CLASS
        end = start - 1
