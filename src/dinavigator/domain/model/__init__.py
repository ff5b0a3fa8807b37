"""Domain model entities."""

from dinavigator.domain.model.configuration import AnalyzerConfig
from dinavigator.domain.model.conflict import Conflict
from dinavigator.domain.model.enums import (
    AnalysisState,
    ConflictKind,
    InjectionKind,
    IssueCategory,
    Lifetime,
    ParseStatus,
    PatternKind,
    Severity,
)
from dinavigator.domain.model.external import ExternalLifetimeConflict, ServiceDependencyIssue
from dinavigator.domain.model.graph import DependencyGraph
from dinavigator.domain.model.injection_site import UNKNOWN_CLASS, InjectionSite
from dinavigator.domain.model.project import ProjectDI
from dinavigator.domain.model.registration import Registration
from dinavigator.domain.model.service import GROUP_ORDER, Service, ServiceGroup
from dinavigator.domain.model.validation import ValidationIssue, ValidationResult

__all__ = [
    "GROUP_ORDER",
    "UNKNOWN_CLASS",
    "AnalysisState",
    "AnalyzerConfig",
    "Conflict",
    "ConflictKind",
    "DependencyGraph",
    "ExternalLifetimeConflict",
    "InjectionKind",
    "InjectionSite",
    "IssueCategory",
    "Lifetime",
    "ParseStatus",
    "PatternKind",
    "ProjectDI",
    "Registration",
    "Service",
    "ServiceDependencyIssue",
    "ServiceGroup",
    "Severity",
    "ValidationIssue",
    "ValidationResult",
]
