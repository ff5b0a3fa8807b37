"""JSON reporter: ProjectDI → JSON string.

Field names are camelCase and part of the external contract consumed by
presentation layers. errorDetails and the external-analyzer sections are
only present when they carry data.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dinavigator.domain.model.conflict import Conflict
    from dinavigator.domain.model.external import ExternalLifetimeConflict, ServiceDependencyIssue
    from dinavigator.domain.model.graph import DependencyGraph
    from dinavigator.domain.model.injection_site import InjectionSite
    from dinavigator.domain.model.project import ProjectDI
    from dinavigator.domain.model.registration import Registration
    from dinavigator.domain.model.service import Service, ServiceGroup


class JsonReporter:
    """JSON reporter: outputs the ProjectDI contract."""

    def __init__(self, *, indent: int | None = 2) -> None:
        """Initialize reporter.

        Args:
            indent: JSON indentation. None for compact output.
        """
        self._indent = indent

    def report(self, project: ProjectDI) -> str:
        """Format analysis result as JSON string."""
        return json.dumps(project_to_dict(project), indent=self._indent)


def project_to_dict(project: ProjectDI) -> dict[str, object]:
    """Convert ProjectDI to a JSON-serializable dict."""
    data: dict[str, object] = {
        "projectPath": project.project_path,
        "projectName": project.project_name,
        "serviceGroups": [_group_to_dict(g) for g in project.service_groups],
        "dependencyGraph": _graph_to_dict(project.dependency_graph),
        "cycles": list(project.cycles),
        "parseStatus": project.parse_status.value,
    }
    if project.error_details:
        data["errorDetails"] = list(project.error_details)
    if project.lifetime_conflicts:
        data["lifetimeConflicts"] = [
            _lifetime_conflict_to_dict(c) for c in project.lifetime_conflicts
        ]
    if project.service_dependency_issues:
        data["serviceDependencyIssues"] = [
            _dependency_issue_to_dict(i) for i in project.service_dependency_issues
        ]
    return data


def _group_to_dict(group: ServiceGroup) -> dict[str, object]:
    """Convert ServiceGroup to dict."""
    return {
        "lifetime": group.lifetime.value,
        "services": [_service_to_dict(s) for s in group.services],
        "count": group.count,
    }


def _service_to_dict(service: Service) -> dict[str, object]:
    """Convert Service to dict."""
    return {
        "name": service.name,
        "registrations": [_registration_to_dict(r) for r in service.registrations],
        "injectionSites": [_site_to_dict(s) for s in service.injection_sites],
        "hasConflicts": service.has_conflicts,
        "conflicts": [_conflict_to_dict(c) for c in service.conflicts],
    }


def _registration_to_dict(reg: Registration) -> dict[str, object]:
    """Convert Registration to dict."""
    return {
        "id": reg.id,
        "lifetime": reg.lifetime.value,
        "serviceType": reg.service_type,
        "implementationType": reg.implementation_type,
        "filePath": reg.file_path,
        "lineNumber": reg.line_number,
        "methodCall": reg.method_call,
    }


def _site_to_dict(site: InjectionSite) -> dict[str, object]:
    """Convert InjectionSite to dict."""
    return {
        "filePath": site.file_path,
        "lineNumber": site.line_number,
        "className": site.class_name,
        "memberName": site.member_name,
        "kind": site.kind.value,
        "serviceType": site.service_type,
        "linkedRegistrationIds": list(site.linked_registration_ids),
    }


def _conflict_to_dict(conflict: Conflict) -> dict[str, object]:
    """Convert Conflict to dict."""
    return {"kind": conflict.kind.value, "details": conflict.details}


def _graph_to_dict(graph: DependencyGraph) -> dict[str, list[str]]:
    """Convert DependencyGraph to {class: [service types]}."""
    return {node: list(successors) for node, successors in graph.forward.items()}


def _lifetime_conflict_to_dict(conflict: ExternalLifetimeConflict) -> dict[str, object]:
    return {
        "serviceType": conflict.service_type,
        "implementationType": conflict.implementation_type,
        "conflictType": conflict.conflict_type,
        "description": conflict.description,
        "severity": conflict.severity,
        "recommendation": conflict.recommendation,
    }


def _dependency_issue_to_dict(issue: ServiceDependencyIssue) -> dict[str, object]:
    return {
        "serviceType": issue.service_type,
        "issueType": issue.issue_type,
        "description": issue.description,
        "severity": issue.severity,
        "missingDependencies": list(issue.missing_dependencies),
    }
