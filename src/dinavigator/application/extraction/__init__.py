"""Extraction of registrations and injection sites from source text."""

from dinavigator.application.extraction.context import (
    complete_call,
    enclosing_class,
    line_number_at,
)
from dinavigator.application.extraction.injections import extract_injection_sites
from dinavigator.application.extraction.registrations import extract_registrations

__all__ = [
    "complete_call",
    "enclosing_class",
    "extract_injection_sites",
    "extract_registrations",
    "line_number_at",
]
