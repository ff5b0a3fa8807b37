"""Validation result of a ProjectDI data check."""

from __future__ import annotations

from dataclasses import dataclass

from dinavigator.domain.model.enums import IssueCategory, Severity


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """Single finding of the data validator.

    Attributes:
        category: Structure, Consistency or Logic
        severity: Error, Warning or Info
        message: Human-readable description
        path: Where the issue is, e.g. "serviceGroups[0].services[2]"
    """

    category: IssueCategory
    severity: Severity
    message: str
    path: str = ""

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.message:
            raise ValueError("message must not be empty")


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """All findings for one or more projects."""

    issues: tuple[ValidationIssue, ...] = ()

    @property
    def is_valid(self) -> bool:
        """True if no Error issues."""
        return self.error_count == 0

    @property
    def error_count(self) -> int:
        """Number of Error issues."""
        return self._count(Severity.ERROR)

    @property
    def warning_count(self) -> int:
        """Number of Warning issues."""
        return self._count(Severity.WARNING)

    @property
    def info_count(self) -> int:
        """Number of Info issues."""
        return self._count(Severity.INFO)

    def by_category(self, category: IssueCategory) -> tuple[ValidationIssue, ...]:
        """Issues of one category."""
        return tuple(issue for issue in self.issues if issue.category is category)

    def _count(self, severity: Severity) -> int:
        return sum(1 for issue in self.issues if issue.severity is severity)
