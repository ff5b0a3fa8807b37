"""ProjectDI data validator.

Checks the serialized form of an analysis result (the camelCase contract
produced by JsonReporter). Results that were cached, exported by another
tool, or assembled by hand arrive in this form and are not guarded by the
domain record invariants.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeAlias

from dinavigator.application.reporters.json_reporter import project_to_dict
from dinavigator.domain.model.enums import (
    ConflictKind,
    IssueCategory,
    Lifetime,
    ParseStatus,
    Severity,
)
from dinavigator.domain.model.project import ProjectDI
from dinavigator.domain.model.service import GROUP_ORDER
from dinavigator.domain.model.validation import ValidationIssue, ValidationResult

if TYPE_CHECKING:
    from collections.abc import Iterable

ProjectData: TypeAlias = ProjectDI | Mapping[str, Any]

_LIFETIMES = frozenset(lifetime.value for lifetime in Lifetime)
_STATUSES = frozenset(status.value for status in ParseStatus)
_GROUP_RANK = {lifetime.value: rank for rank, lifetime in enumerate(GROUP_ORDER)}


def _error(category: IssueCategory, message: str, path: str) -> ValidationIssue:
    return ValidationIssue(category, Severity.ERROR, message, path)


def _warning(category: IssueCategory, message: str, path: str) -> ValidationIssue:
    return ValidationIssue(category, Severity.WARNING, message, path)


def _info(category: IssueCategory, message: str, path: str) -> ValidationIssue:
    return ValidationIssue(category, Severity.INFO, message, path)


class ProjectValidator:
    """Validates analysis results before they are displayed or stored.

    Stateless. Every check runs; nothing stops at the first issue except
    sections whose container has the wrong shape.
    """

    def validate(self, project: ProjectData) -> ValidationResult:
        """Validate one project.

        Args:
            project: ProjectDI or its serialized dict

        Returns:
            All issues found (is_valid when none is an Error)
        """
        return ValidationResult(tuple(self._check_project(_as_dict(project), "")))

    def validate_workspace(self, projects: Iterable[ProjectData]) -> ValidationResult:
        """Validate several projects and flag duplicate project paths.

        Issue paths are prefixed with "projects[i].".
        """
        issues: list[ValidationIssue] = []
        seen: dict[str, int] = {}
        for index, project in enumerate(projects):
            data = _as_dict(project)
            prefix = f"projects[{index}]."
            issues.extend(self._check_project(data, prefix))

            path = data.get("projectPath")
            if isinstance(path, str) and path:
                if path in seen:
                    issues.append(
                        _error(
                            IssueCategory.CONSISTENCY,
                            f"Duplicate project path '{path}' (also projects[{seen[path]}])",
                            f"{prefix}projectPath",
                        )
                    )
                else:
                    seen[path] = index
        return ValidationResult(tuple(issues))

    def _check_project(self, data: Mapping[str, Any], prefix: str) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []

        for key, label in (("projectName", "project name"), ("projectPath", "project path")):
            value = data.get(key)
            if not isinstance(value, str) or not value:
                issues.append(_error(IssueCategory.STRUCTURE, f"Missing {label}", prefix + key))

        status = data.get("parseStatus")
        if status not in _STATUSES:
            issues.append(
                _error(
                    IssueCategory.STRUCTURE,
                    f"Unknown parse status {status!r}",
                    prefix + "parseStatus",
                )
            )

        groups = data.get("serviceGroups")
        if not isinstance(groups, list):
            issues.append(
                _error(IssueCategory.STRUCTURE, "Invalid service groups", prefix + "serviceGroups")
            )
            return issues

        registration_ids = {
            reg.get("id")
            for group in groups
            if isinstance(group, Mapping)
            for service in _list(group, "services")
            for reg in _list(service, "registrations")
        }

        issues.extend(self._check_group_order(groups, prefix))
        for index, group in enumerate(groups):
            path = f"{prefix}serviceGroups[{index}]"
            if not isinstance(group, Mapping):
                issues.append(_error(IssueCategory.STRUCTURE, "Invalid service group", path))
                continue
            issues.extend(self._check_group(group, path, registration_ids))

        issues.extend(self._check_status(data, status, groups, prefix))
        issues.extend(self._check_external(data, prefix))
        return issues

    def _check_group_order(self, groups: list[Any], prefix: str) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        lifetimes = [g.get("lifetime") for g in groups if isinstance(g, Mapping)]
        known = [lt for lt in lifetimes if lt in _LIFETIMES]

        for lifetime in dict.fromkeys(known):
            if known.count(lifetime) > 1:
                issues.append(
                    _error(
                        IssueCategory.STRUCTURE,
                        f"Duplicate {lifetime} group",
                        prefix + "serviceGroups",
                    )
                )
        if known != sorted(known, key=_GROUP_RANK.__getitem__):
            issues.append(
                _warning(
                    IssueCategory.STRUCTURE,
                    "Service groups not in Scoped, Singleton, Transient, Others order",
                    prefix + "serviceGroups",
                )
            )
        return issues

    def _check_group(
        self,
        group: Mapping[str, Any],
        path: str,
        registration_ids: set[Any],
    ) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        lifetime = group.get("lifetime")
        if lifetime not in _LIFETIMES:
            issues.append(
                _error(
                    IssueCategory.STRUCTURE,
                    f"Unknown lifetime {lifetime!r}",
                    f"{path}.lifetime",
                )
            )

        services = group.get("services")
        if not isinstance(services, list):
            issues.append(
                _error(IssueCategory.STRUCTURE, "Invalid services array", f"{path}.services")
            )
            return issues
        if not services:
            issues.append(_warning(IssueCategory.STRUCTURE, "Empty service group", path))

        count = group.get("count")
        if count != len(services):
            issues.append(
                _warning(
                    IssueCategory.CONSISTENCY,
                    f"Service count mismatch: expected {count}, found {len(services)}",
                    f"{path}.count",
                )
            )

        names = [s.get("name") for s in services if isinstance(s, Mapping)]
        text_names = [n for n in names if isinstance(n, str)]
        if text_names != sorted(text_names):
            issues.append(
                _warning(
                    IssueCategory.CONSISTENCY,
                    "Services not sorted by name",
                    f"{path}.services",
                )
            )

        for index, service in enumerate(services):
            service_path = f"{path}.services[{index}]"
            if not isinstance(service, Mapping):
                issues.append(_error(IssueCategory.STRUCTURE, "Invalid service", service_path))
                continue
            issues.extend(self._check_service(service, lifetime, service_path, registration_ids))
        return issues

    def _check_service(
        self,
        service: Mapping[str, Any],
        lifetime: object,
        path: str,
        registration_ids: set[Any],
    ) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        name = service.get("name")
        if not isinstance(name, str) or not name:
            issues.append(_error(IssueCategory.STRUCTURE, "Missing service name", f"{path}.name"))

        registrations = service.get("registrations")
        if not isinstance(registrations, list):
            issues.append(
                _error(
                    IssueCategory.STRUCTURE,
                    f"Service {name}: invalid registrations array",
                    f"{path}.registrations",
                )
            )
            registrations = []

        if lifetime in _LIFETIMES and not any(
            isinstance(r, Mapping) and r.get("lifetime") == lifetime for r in registrations
        ):
            issues.append(
                _error(
                    IssueCategory.CONSISTENCY,
                    f"Service {name} has no {lifetime} registration",
                    path,
                )
            )

        for index, reg in enumerate(registrations):
            reg_path = f"{path}.registrations[{index}]"
            if not isinstance(reg, Mapping):
                issues.append(_error(IssueCategory.STRUCTURE, "Invalid registration", reg_path))
                continue
            issues.extend(_check_location(reg, f"Service {name} registration", reg_path))

        for index, site in enumerate(_list(service, "injectionSites")):
            site_path = f"{path}.injectionSites[{index}]"
            issues.extend(_check_location(site, f"Service {name} injection site", site_path))
            for reg_id in _strings(site, "linkedRegistrationIds"):
                if reg_id not in registration_ids:
                    issues.append(
                        _error(
                            IssueCategory.CONSISTENCY,
                            f"Link to unknown registration id {reg_id!r}",
                            f"{site_path}.linkedRegistrationIds",
                        )
                    )

        conflicts = _list(service, "conflicts")
        flagged = any(c.get("kind") != ConflictKind.UNUSED_SERVICE.value for c in conflicts)
        if service.get("hasConflicts") is not flagged:
            issues.append(
                _warning(
                    IssueCategory.LOGIC,
                    f"Service {name}: hasConflicts does not match its conflicts",
                    f"{path}.hasConflicts",
                )
            )
        return issues

    def _check_status(
        self,
        data: Mapping[str, Any],
        status: object,
        groups: list[Any],
        prefix: str,
    ) -> list[ValidationIssue]:
        errors = data.get("errorDetails")
        path = prefix + "parseStatus"
        match status:
            case "success" if not groups:
                return [_error(IssueCategory.LOGIC, "success without service groups", path)]
            case "success" if errors:
                return [_error(IssueCategory.LOGIC, "success with error details", path)]
            case "partial" if not errors:
                return [_error(IssueCategory.LOGIC, "partial without error details", path)]
            case "failed" if not errors:
                return [_warning(IssueCategory.LOGIC, "failed without error details", path)]
            case _:
                return []

    def _check_external(self, data: Mapping[str, Any], prefix: str) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        for index, conflict in enumerate(_list(data, "lifetimeConflicts")):
            path = f"{prefix}lifetimeConflicts[{index}]"
            if not conflict.get("serviceType"):
                issues.append(
                    _warning(IssueCategory.STRUCTURE, "Conflict without service type", path)
                )
            if not conflict.get("description"):
                issues.append(_info(IssueCategory.STRUCTURE, "Conflict without description", path))
        return issues


def _check_location(record: Mapping[str, Any], label: str, path: str) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    if not record.get("filePath"):
        issues.append(_warning(IssueCategory.STRUCTURE, f"{label}: missing file path", path))
    line = record.get("lineNumber")
    if isinstance(line, bool) or not isinstance(line, int) or line < 1:
        issues.append(
            _warning(
                IssueCategory.CONSISTENCY,
                f"{label}: invalid line number {line!r}",
                f"{path}.lineNumber",
            )
        )
    return issues


def _as_dict(project: ProjectData) -> Mapping[str, Any]:
    if isinstance(project, ProjectDI):
        return project_to_dict(project)
    return project


def _list(record: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    """Mapping entries of a list field."""
    value = record.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _strings(record: Mapping[str, Any], key: str) -> list[str]:
    """String entries of a list field."""
    value = record.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]
