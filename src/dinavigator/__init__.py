"""dinavigator - static dependency-injection analysis for C# projects."""

__version__ = "0.1.0"

from dinavigator.application.services.engine import AnalysisEngine
from dinavigator.domain.model.configuration import AnalyzerConfig
from dinavigator.domain.model.project import ProjectDI
from dinavigator.presentation.api import (
    analyze_project,
    analyze_project_async,
    load_external_result,
)

__all__ = [
    "AnalysisEngine",
    "AnalyzerConfig",
    "ProjectDI",
    "__version__",
    "analyze_project",
    "analyze_project_async",
    "load_external_result",
]
