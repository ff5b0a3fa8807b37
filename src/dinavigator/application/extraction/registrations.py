"""Registration extractor."""

from __future__ import annotations

import logging
from pathlib import PurePath
from typing import TYPE_CHECKING

from dinavigator.application.extraction.context import complete_call, line_number_at
from dinavigator.application.patterns import DEFAULT_CATALOGS, UNKNOWN_TYPE
from dinavigator.domain.model.registration import Registration

if TYPE_CHECKING:
    import re
    from collections.abc import Iterable

    from dinavigator.application.patterns import ContainerCatalog, RegistrationPattern
    from dinavigator.domain.model.enums import Lifetime

logger = logging.getLogger(__name__)


class _IdAllocator:
    """Per-file registration ids: "<basename>-<line>", then "-2", "-3", ..."""

    def __init__(self, file_path: str) -> None:
        self._basename = PurePath(file_path).name
        self._taken: set[str] = set()

    def next_id(self, line: int) -> str:
        candidate = f"{self._basename}-{line}"
        suffix = 1
        while candidate in self._taken:
            suffix += 1
            candidate = f"{self._basename}-{line}-{suffix}"
        self._taken.add(candidate)
        return candidate


def extract_registrations(
    file_path: str,
    text: str,
    catalogs: Iterable[ContainerCatalog] = DEFAULT_CATALOGS,
) -> tuple[Registration, ...]:
    """Find registration calls in one file.

    Every match of every pattern is kept, in catalog order, then lifetime
    order, then pattern order, then text order. Matches whose service type
    is empty or "Unknown" are discarded, as are matches whose extraction
    fails.

    Args:
        file_path: Path recorded on the registrations
        text: File text
        catalogs: Container catalogs to apply

    Returns:
        Registrations in discovery order
    """
    ids = _IdAllocator(file_path)
    registrations: list[Registration] = []

    for catalog in catalogs:
        for lifetime, pattern in catalog.registration_patterns():
            for match in pattern.regex.finditer(text):
                try:
                    registration = _build(file_path, text, lifetime, pattern, match, ids)
                except (ValueError, IndexError, KeyError) as e:
                    logger.debug("Discarded registration match in %s: %s", file_path, e)
                    continue
                if registration is not None:
                    registrations.append(registration)

    logger.debug("%s: %d registrations", file_path, len(registrations))
    return tuple(registrations)


def _build(
    file_path: str,
    text: str,
    lifetime: Lifetime,
    pattern: RegistrationPattern,
    match: re.Match[str],
    ids: _IdAllocator,
) -> Registration | None:
    call_text = complete_call(text, match.start(), match.end())
    service_type, implementation_type = pattern.extract(match, call_text)
    if not service_type or service_type == UNKNOWN_TYPE:
        return None
    if not implementation_type or implementation_type == UNKNOWN_TYPE:
        implementation_type = service_type

    line = line_number_at(text, match.start())
    return Registration(
        id=ids.next_id(line),
        lifetime=lifetime,
        service_type=service_type,
        implementation_type=implementation_type,
        file_path=file_path,
        line_number=line,
        method_call=call_text.strip(),
    )
