"""Adapter for the JSON result of an external (compiler-based) analyzer.

The foreign schema uses PascalCase fields and numeric lifetime codes:

    {"Projects": [{"ProjectName": ..., "ProjectPath": ...,
                   "ServiceRegistrations": [{"ServiceType": ..., "Lifetime": 1,
                                             "InjectionSites": [...]}],
                   "LifetimeConflicts": [...], "ServiceDependencyIssues": [...]}],
     "LifetimeConflicts": [...], "ServiceDependencyIssues": [...]}

Missing or mistyped fields default to empty values; only input that is not
a JSON object at all is rejected.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from dinavigator.application.services.aggregator import aggregate_services, group_by_lifetime
from dinavigator.application.services.analysis_run import resolve_status
from dinavigator.application.services.dependency_graph import (
    build_dependency_graph,
    detect_cycles,
)
from dinavigator.application.services.linker import ensure_unique_ids, link_sites
from dinavigator.domain.exceptions import AdapterInputError
from dinavigator.domain.model.enums import InjectionKind, Lifetime
from dinavigator.domain.model.external import ExternalLifetimeConflict, ServiceDependencyIssue
from dinavigator.domain.model.injection_site import UNKNOWN_CLASS, InjectionSite
from dinavigator.domain.model.project import ProjectDI
from dinavigator.domain.model.registration import Registration

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

NO_SERVICES = "No services found in analysis"

# Foreign lifetime codes. Not the Lifetime declaration order.
_LIFETIME_CODES: Mapping[int, Lifetime] = MappingProxyType(
    {
        0: Lifetime.TRANSIENT,
        1: Lifetime.SCOPED,
        2: Lifetime.SINGLETON,
    }
)

_SITE_KINDS: Mapping[str, InjectionKind] = MappingProxyType(
    {
        "constructor": InjectionKind.CONSTRUCTOR,
        "method": InjectionKind.METHOD,
        "field": InjectionKind.FIELD,
        "property": InjectionKind.FIELD,
    }
)


# =============================================================================
# INPUT PARSING
# =============================================================================


def extract_json_payload(output: str) -> str:
    """Cut the JSON object out of analyzer stdout (first "{" to last "}").

    Raises:
        AdapterInputError: If the output contains no JSON object
    """
    start = output.find("{")
    end = output.rfind("}")
    if start == -1 or end < start:
        raise AdapterInputError(reason="no JSON object in analyzer output")
    return output[start : end + 1]


def parse_external_result(raw: str) -> dict[str, Any]:
    """Decode the analyzer result.

    Raises:
        AdapterInputError: If raw is not valid JSON or not a JSON object
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise AdapterInputError(reason=f"malformed JSON ({e.msg} at line {e.lineno})") from e
    if not isinstance(data, dict):
        raise AdapterInputError(reason=f"expected a JSON object, got {type(data).__name__}")
    return data


def lifetime_from_external(value: object) -> Lifetime:
    """Map a foreign lifetime value.

    Integers follow the foreign code table (0 Transient, 1 Scoped,
    2 Singleton). Strings are matched by name, case-insensitive. Anything
    else, unknown codes included, is Others.
    """
    match value:
        case bool():
            return Lifetime.OTHERS
        case int():
            return _LIFETIME_CODES.get(value, Lifetime.OTHERS)
        case str():
            return Lifetime.parse(value)
        case _:
            return Lifetime.OTHERS


# =============================================================================
# CONVERSION
# =============================================================================


def convert_external_result(data: Mapping[str, Any], project_path: str) -> ProjectDI:
    """Merge every project of the result into one ProjectDI.

    Args:
        data: Decoded analyzer result
        project_path: Path reported on the result (solution or project file)

    Raises:
        AdapterInputError: If data is not a mapping
    """
    _require_mapping(data)
    projects = _records(data, "Projects")
    registrations, sites = _collect(projects)
    conflicts = (
        *_lifetime_conflicts(_records(data, "LifetimeConflicts")),
        *(c for p in projects for c in _lifetime_conflicts(_records(p, "LifetimeConflicts"))),
    )
    issues = (
        *_dependency_issues(_records(data, "ServiceDependencyIssues")),
        *(
            i
            for p in projects
            for i in _dependency_issues(_records(p, "ServiceDependencyIssues"))
        ),
    )
    return _build(
        project_path,
        ProjectDI.name_for(project_path),
        registrations,
        sites,
        conflicts,
        issues,
    )


def convert_external_projects(data: Mapping[str, Any]) -> tuple[ProjectDI, ...]:
    """One ProjectDI per project of the result, in input order.

    Result-level conflict and issue lists are not distributed to projects.

    Raises:
        AdapterInputError: If data is not a mapping
    """
    _require_mapping(data)
    results: list[ProjectDI] = []
    for project in _records(data, "Projects"):
        path = _text(project, "ProjectPath") or _text(project, "ProjectName")
        name = _text(project, "ProjectName") or ProjectDI.name_for(path)
        registrations, sites = _collect((project,))
        results.append(
            _build(
                path,
                name,
                registrations,
                sites,
                _lifetime_conflicts(_records(project, "LifetimeConflicts")),
                _dependency_issues(_records(project, "ServiceDependencyIssues")),
            )
        )
    return tuple(results)


def _build(
    project_path: str,
    project_name: str,
    registrations: list[Registration],
    sites: list[InjectionSite],
    conflicts: tuple[ExternalLifetimeConflict, ...],
    issues: tuple[ServiceDependencyIssue, ...],
) -> ProjectDI:
    unique_regs = ensure_unique_ids(registrations)
    linked_sites = link_sites(sites, unique_regs)
    groups = group_by_lifetime(aggregate_services(unique_regs, linked_sites))
    graph = build_dependency_graph(linked_sites)

    errors = () if groups else (NO_SERVICES,)
    logger.debug(
        "Converted %s: %d registrations, %d sites, %d groups",
        project_path,
        len(unique_regs),
        len(linked_sites),
        len(groups),
    )
    return ProjectDI(
        project_path=project_path,
        project_name=project_name,
        service_groups=groups,
        dependency_graph=graph,
        cycles=detect_cycles(graph, unique_regs),
        parse_status=resolve_status(has_services=bool(groups), has_errors=False),
        error_details=errors or None,
        lifetime_conflicts=conflicts,
        service_dependency_issues=issues,
    )


def _collect(
    projects: Iterable[Mapping[str, Any]],
) -> tuple[list[Registration], list[InjectionSite]]:
    """Registrations and de-duplicated sites of the given projects."""
    registrations: list[Registration] = []
    sites: dict[InjectionSite, None] = {}

    for project in projects:
        for record in _records(project, "ServiceRegistrations"):
            service_type = _text(record, "ServiceType")
            if not service_type:
                logger.debug("Skipped registration without ServiceType: %r", record)
                continue
            file_path = _text(record, "FilePath")
            line = _line(record)
            registrations.append(
                Registration(
                    id=f"{file_path}:{line}",
                    lifetime=lifetime_from_external(record.get("Lifetime")),
                    service_type=service_type,
                    implementation_type=_text(record, "ImplementationType") or service_type,
                    file_path=file_path,
                    line_number=line,
                    method_call=_text(record, "RegistrationMethod"),
                )
            )
            for site_record in _records(record, "InjectionSites"):
                site = _site(site_record, service_type)
                sites.setdefault(site, None)

    return registrations, list(sites)


def _site(record: Mapping[str, Any], service_type: str) -> InjectionSite:
    """Site of a registration; missing ServiceType means the registration's own."""
    kind_name = _text(record, "Type").lower()
    return InjectionSite(
        file_path=_text(record, "FilePath"),
        line_number=_line(record),
        class_name=_text(record, "ClassName") or UNKNOWN_CLASS,
        member_name=_text(record, "MemberName"),
        kind=_SITE_KINDS.get(kind_name, InjectionKind.CONSTRUCTOR),
        service_type=_text(record, "ServiceType") or service_type,
    )


def _lifetime_conflicts(
    records: Iterable[Mapping[str, Any]],
) -> tuple[ExternalLifetimeConflict, ...]:
    return tuple(
        ExternalLifetimeConflict(
            service_type=_text(r, "ServiceType"),
            implementation_type=_text(r, "ImplementationType"),
            conflict_type=_text(r, "ConflictType"),
            description=_text(r, "Description") or _text(r, "ConflictReason"),
            severity=_text(r, "Severity") or "Low",
            recommendation=_text(r, "Recommendation") or _text(r, "RecommendedLifetime"),
        )
        for r in records
    )


def _dependency_issues(
    records: Iterable[Mapping[str, Any]],
) -> tuple[ServiceDependencyIssue, ...]:
    return tuple(
        ServiceDependencyIssue(
            service_type=_text(r, "ServiceType"),
            issue_type=_text(r, "IssueType") or _text(r, "DependencyType"),
            description=_text(r, "Description") or _text(r, "IssueDescription"),
            severity=_text(r, "Severity") or "Info",
            missing_dependencies=tuple(
                str(dep) for dep in _list(r, "MissingDependencies") if dep
            ),
        )
        for r in records
    )


# =============================================================================
# FIELD ACCESS
# =============================================================================


def _require_mapping(data: object) -> None:
    if not isinstance(data, Mapping):
        raise AdapterInputError(reason=f"expected a JSON object, got {type(data).__name__}")


def _list(record: Mapping[str, Any], key: str) -> list[Any]:
    value = record.get(key)
    return value if isinstance(value, list) else []


def _records(record: Mapping[str, Any], key: str) -> list[dict[str, Any]]:
    """Object entries of a list field; other entries are dropped."""
    return [item for item in _list(record, key) if isinstance(item, dict)]


def _text(record: Mapping[str, Any], key: str) -> str:
    value = record.get(key)
    if value is None or isinstance(value, dict | list):
        return ""
    return str(value).strip()


def _line(record: Mapping[str, Any]) -> int:
    value = record.get("LineNumber")
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return 0
    return value
