"""Injection-site extractor."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dinavigator.application.extraction.context import enclosing_class, line_number_at
from dinavigator.application.patterns import DEFAULT_CATALOGS, UNKNOWN_TYPE, injection_patterns
from dinavigator.application.patterns.typenames import NON_CLASS_WORDS
from dinavigator.domain.model.injection_site import InjectionSite

if TYPE_CHECKING:
    import re
    from collections.abc import Iterable, Iterator

    from dinavigator.application.patterns import InjectionPattern

logger = logging.getLogger(__name__)

_DEFAULT_PATTERNS = injection_patterns(DEFAULT_CATALOGS)


def extract_injection_sites(
    file_path: str,
    text: str,
    patterns: Iterable[InjectionPattern] = _DEFAULT_PATTERNS,
) -> tuple[InjectionSite, ...]:
    """Find injection sites in one file.

    Class name comes from the pattern's "cls" group, else from the
    backward scan (enclosing_class). Types that are empty or "Unknown"
    are discarded, as are matches whose extraction fails.

    Args:
        file_path: Path recorded on the sites
        text: File text
        patterns: Injection patterns to apply, in order

    Returns:
        Unlinked injection sites in discovery order
    """
    sites: list[InjectionSite] = []

    for pattern in patterns:
        for match in pattern.regex.finditer(text):
            try:
                found = tuple(_sites_for(file_path, text, pattern, match))
            except (ValueError, IndexError, KeyError) as e:
                logger.debug("Discarded injection match in %s: %s", file_path, e)
                continue
            sites.extend(found)

    logger.debug("%s: %d injection sites", file_path, len(sites))
    return tuple(sites)


def _sites_for(
    file_path: str,
    text: str,
    pattern: InjectionPattern,
    match: re.Match[str],
) -> Iterator[InjectionSite]:
    captured = pattern.captured_class(match)
    if captured in NON_CLASS_WORDS:
        return
    service_types = [t for t in pattern.service_types(match) if t and t != UNKNOWN_TYPE]
    if not service_types:
        return

    class_name = captured or enclosing_class(text, match.start())
    member_name = pattern.member_name(match)
    line = line_number_at(text, match.start())
    for service_type in service_types:
        yield InjectionSite(
            file_path=file_path,
            line_number=line,
            class_name=class_name,
            member_name=member_name,
            kind=pattern.kind,
            service_type=service_type,
        )
