"""Complete analysis result for one project."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING

from dinavigator.domain.model.enums import ParseStatus
from dinavigator.domain.model.external import ExternalLifetimeConflict, ServiceDependencyIssue
from dinavigator.domain.model.graph import DependencyGraph
from dinavigator.domain.model.service import GROUP_ORDER, Service, ServiceGroup

if TYPE_CHECKING:
    from dinavigator.domain.model.enums import Lifetime
    from dinavigator.domain.model.injection_site import InjectionSite
    from dinavigator.domain.model.registration import Registration


@dataclass(frozen=True, slots=True)
class ProjectDI:
    """DI topology of one project, created fresh per analysis run.

    Invariants (FAIL-FIRST):
    - group lifetimes are unique and follow GROUP_ORDER
    - success requires at least one group and no error details
    - partial requires at least one group and error details
    - error_details is None or non-empty

    Attributes:
        project_path: Analyzed project root or project file
        project_name: Display name (path stem)
        service_groups: Lifetime groups in GROUP_ORDER
        dependency_graph: Class → injected service types
        cycles: Cycle descriptions
        parse_status: Confidence of the result
        error_details: Recorded errors, None when there are none
        lifetime_conflicts: Conflicts reported by an external analyzer
        service_dependency_issues: Issues reported by an external analyzer
    """

    project_path: str
    project_name: str
    service_groups: tuple[ServiceGroup, ...]
    dependency_graph: DependencyGraph
    cycles: tuple[str, ...]
    parse_status: ParseStatus
    error_details: tuple[str, ...] | None = None
    lifetime_conflicts: tuple[ExternalLifetimeConflict, ...] = ()
    service_dependency_issues: tuple[ServiceDependencyIssue, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        lifetimes = [group.lifetime for group in self.service_groups]
        if len(set(lifetimes)) != len(lifetimes):
            raise ValueError("service_groups must not repeat a lifetime")
        if lifetimes != sorted(lifetimes, key=GROUP_ORDER.index):
            raise ValueError("service_groups must follow Scoped, Singleton, Transient, Others")
        if self.error_details is not None and not self.error_details:
            raise ValueError("error_details must be None or non-empty")

        match self.parse_status:
            case ParseStatus.SUCCESS:
                if not self.service_groups:
                    raise ValueError("success requires at least one service group")
                if self.error_details:
                    raise ValueError("success must not carry error details")
            case ParseStatus.PARTIAL:
                if not self.service_groups:
                    raise ValueError("partial requires at least one service group")
                if not self.error_details:
                    raise ValueError("partial requires error details")
            case ParseStatus.FAILED:
                pass

    @staticmethod
    def name_for(project_path: str) -> str:
        """Derive the display name from a project path (stem of last component)."""
        return PurePath(project_path).stem

    @classmethod
    def failed(cls, project_path: str, errors: tuple[str, ...]) -> ProjectDI:
        """Create a failed result with no services."""
        return cls(
            project_path=project_path,
            project_name=cls.name_for(project_path),
            service_groups=(),
            dependency_graph=DependencyGraph.empty(),
            cycles=(),
            parse_status=ParseStatus.FAILED,
            error_details=errors or None,
        )

    @property
    def services(self) -> tuple[Service, ...]:
        """Distinct services across all groups, sorted by name."""
        by_name: dict[str, Service] = {}
        for group in self.service_groups:
            for service in group.services:
                by_name.setdefault(service.name, service)
        return tuple(by_name[name] for name in sorted(by_name))

    @property
    def registrations(self) -> tuple[Registration, ...]:
        """All registrations of all services."""
        return tuple(reg for service in self.services for reg in service.registrations)

    @property
    def injection_sites(self) -> tuple[InjectionSite, ...]:
        """All injection sites of all services."""
        return tuple(site for service in self.services for site in service.injection_sites)

    @property
    def service_count(self) -> int:
        """Number of distinct services."""
        return len(self.services)

    @property
    def has_conflicts(self) -> bool:
        """Whether any service carries a flagging conflict."""
        return any(service.has_conflicts for service in self.services)

    def service(self, name: str) -> Service | None:
        """Find a service by exact name."""
        for group in self.service_groups:
            for service in group.services:
                if service.name == name:
                    return service
        return None

    def group(self, lifetime: Lifetime) -> ServiceGroup | None:
        """Find the group for a lifetime."""
        for group in self.service_groups:
            if group.lifetime is lifetime:
                return group
        return None
