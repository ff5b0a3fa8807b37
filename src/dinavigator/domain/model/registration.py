"""Service registration value object."""

from __future__ import annotations

from dataclasses import dataclass

from dinavigator.domain.model.enums import Lifetime


@dataclass(frozen=True, slots=True)
class Registration:
    """A discovered call binding a service type to an implementation.

    Attributes:
        id: Identifier unique within the project (derived from file and line)
        lifetime: Registered lifetime
        service_type: Service type name as written in source
        implementation_type: Implementation type name or a fixed label
        file_path: Source file the call was found in
        line_number: Line of the call (1-based; 0 = unknown, adapter input only)
        method_call: Raw call text
    """

    id: str
    lifetime: Lifetime
    service_type: str
    implementation_type: str
    file_path: str
    line_number: int
    method_call: str = ""

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.id:
            raise ValueError("id must not be empty")
        if not self.service_type:
            raise ValueError("service_type must not be empty")
        if not self.implementation_type:
            raise ValueError("implementation_type must not be empty")
        if self.line_number < 0:
            raise ValueError(f"line_number must be >= 0, got {self.line_number}")

    @property
    def location(self) -> str:
        """Format as file:line."""
        return f"{self.file_path}:{self.line_number}"
