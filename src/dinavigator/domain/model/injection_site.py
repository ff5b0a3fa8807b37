"""Injection site value object."""

from __future__ import annotations

from dataclasses import dataclass

from dinavigator.domain.model.enums import InjectionKind

# Class name used when the enclosing class cannot be recovered
UNKNOWN_CLASS = "UnknownClass"


@dataclass(frozen=True, slots=True)
class InjectionSite:
    """A location where a service type is consumed.

    Attributes:
        file_path: Source file
        line_number: Line of the match (1-based; 0 = unknown, adapter input only)
        class_name: Enclosing class, or UNKNOWN_CLASS
        member_name: Constructor/method/property name or a fixed label
        kind: Site shape
        service_type: Consumed service type
        linked_registration_ids: Ids of registrations of service_type (set by the linker)
    """

    file_path: str
    line_number: int
    class_name: str
    member_name: str
    kind: InjectionKind
    service_type: str
    linked_registration_ids: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.service_type:
            raise ValueError("service_type must not be empty")
        if not self.class_name:
            raise ValueError("class_name must not be empty")
        if self.line_number < 0:
            raise ValueError(f"line_number must be >= 0, got {self.line_number}")
        if len(set(self.linked_registration_ids)) != len(self.linked_registration_ids):
            raise ValueError("linked_registration_ids must be unique")

    @property
    def is_linked(self) -> bool:
        """Whether at least one registration matches."""
        return bool(self.linked_registration_ids)

    @property
    def has_known_class(self) -> bool:
        """Whether the enclosing class was recovered."""
        return self.class_name != UNKNOWN_CLASS

    @property
    def location(self) -> str:
        """Format as file:line."""
        return f"{self.file_path}:{self.line_number}"
