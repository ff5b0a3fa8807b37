"""Records carried over from an external analyzer result."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ExternalLifetimeConflict:
    """Lifetime conflict reported by the external analyzer.

    Attributes:
        service_type: Service the conflict is about
        implementation_type: Implementation involved (may be empty)
        conflict_type: Foreign conflict tag
        description: Foreign explanation
        severity: Foreign severity label
        recommendation: Suggested fix (may be empty)
    """

    service_type: str
    implementation_type: str = ""
    conflict_type: str = ""
    description: str = ""
    severity: str = ""
    recommendation: str = ""


@dataclass(frozen=True, slots=True)
class ServiceDependencyIssue:
    """Dependency issue reported by the external analyzer.

    Attributes:
        service_type: Service the issue is about
        issue_type: Foreign issue tag
        description: Foreign explanation
        severity: Foreign severity label
        missing_dependencies: Dependencies that could not be resolved
    """

    service_type: str
    issue_type: str = ""
    description: str = ""
    severity: str = ""
    missing_dependencies: tuple[str, ...] = ()
