"""CSV and XML export of one or more analysis results."""

from __future__ import annotations

import csv
import io
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from dinavigator.domain.model.project import ProjectDI

CSV_HEADER = (
    "Project",
    "Service Name",
    "Lifetime",
    "Registration Count",
    "Injection Count",
    "Has Conflicts",
)


class CsvExporter:
    """One row per (project, group, service); a multi-lifetime service has several rows."""

    def export(self, projects: Iterable[ProjectDI]) -> str:
        """Format projects as CSV text with a header row."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for project in projects:
            for group in project.service_groups:
                for service in group.services:
                    writer.writerow(
                        (
                            project.project_name,
                            service.name,
                            group.lifetime.value,
                            len(service.registrations),
                            len(service.injection_sites),
                            "Yes" if service.has_conflicts else "No",
                        )
                    )
        return buffer.getvalue()


class XmlExporter:
    """XML document of projects, lifetime groups and services."""

    def __init__(self, *, indent: str = "  ") -> None:
        """Initialize exporter.

        Args:
            indent: Indentation unit; empty string for compact output.
        """
        self._indent = indent

    def export(self, projects: Iterable[ProjectDI]) -> str:
        """Format projects as an XML document (with declaration)."""
        root = ET.Element("DependencyInjectionAnalysis")
        for project in projects:
            project_el = ET.SubElement(
                root,
                "Project",
                name=project.project_name,
                path=project.project_path,
                parseStatus=project.parse_status.value,
            )
            for group in project.service_groups:
                group_el = ET.SubElement(
                    project_el,
                    "ServiceGroup",
                    lifetime=group.lifetime.value,
                    count=str(group.count),
                )
                for service in group.services:
                    service_el = ET.SubElement(
                        group_el,
                        "Service",
                        name=service.name,
                        hasConflicts=str(service.has_conflicts).lower(),
                    )
                    ET.SubElement(
                        service_el, "Registrations", count=str(len(service.registrations))
                    )
                    ET.SubElement(
                        service_el, "InjectionSites", count=str(len(service.injection_sites))
                    )
        if self._indent:
            ET.indent(root, space=self._indent)
        body = ET.tostring(root, encoding="unicode")
        return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'
