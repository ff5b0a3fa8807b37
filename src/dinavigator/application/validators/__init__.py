"""Data validators for analysis results."""

from dinavigator.application.validators.project_validator import ProjectValidator

__all__ = ["ProjectValidator"]
