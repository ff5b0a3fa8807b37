"""Plain text reporter: the service dependency graph view."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dinavigator.domain.model.project import ProjectDI

_RULE = "=" * 50


class PlainTextReporter:
    """Plain text reporter: one block per project, one entry per service.

    Per service, "→ Registered:" lines list registrations and
    "← Injected in:" lines list injection sites.
    """

    def report(self, project: ProjectDI) -> str:
        """Format analysis result as dependency graph text."""
        lines = ["=== Service Dependency Graph ===", ""]
        lines.extend(self._project_lines(project))
        return "\n".join(lines) + "\n"

    def report_workspace(self, projects: tuple[ProjectDI, ...]) -> str:
        """Format several projects into one document."""
        lines = ["=== Service Dependency Graph ===", ""]
        for project in projects:
            lines.extend(self._project_lines(project))
        return "\n".join(lines) + "\n"

    def _project_lines(self, project: ProjectDI) -> list[str]:
        lines = [f"Project: {project.project_name}", _RULE]
        for group in project.service_groups:
            lines.append("")
            lines.append(f"[{group.lifetime.value} Services]")
            for service in group.services:
                lines.append(f"  {service.name}")
                for reg in service.registrations:
                    call = reg.method_call or reg.implementation_type
                    lines.append(f"    → Registered: {call} ({reg.location})")
                for site in service.injection_sites:
                    lines.append(
                        f"    ← Injected in: {site.class_name}.{site.member_name} "
                        f"({site.location})"
                    )
        if project.cycles:
            lines.append("")
            lines.append("[Cycles]")
            lines.extend(f"  {cycle}" for cycle in project.cycles)
        lines.append("")
        lines.append(_RULE)
        return lines
