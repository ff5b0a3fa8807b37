"""Reporters for analysis results.

Reporters return str; the caller decides the destination.
Users can implement custom reporters via ReporterProtocol.
"""

from dinavigator.application.reporters.console import ConsoleConfig, ConsoleReporter
from dinavigator.application.reporters.export import CsvExporter, XmlExporter
from dinavigator.application.reporters.json_reporter import JsonReporter, project_to_dict
from dinavigator.application.reporters.plain_text import PlainTextReporter

__all__ = [
    "ConsoleConfig",
    "ConsoleReporter",
    "CsvExporter",
    "JsonReporter",
    "PlainTextReporter",
    "XmlExporter",
    "project_to_dict",
]
