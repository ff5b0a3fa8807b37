"""Conflict value object."""

from dataclasses import dataclass

from dinavigator.domain.model.enums import ConflictKind


@dataclass(frozen=True, slots=True)
class Conflict:
    """Detected anomaly in a service's registrations or usage.

    Attributes:
        kind: Rule that fired
        details: Human-readable explanation
    """

    kind: ConflictKind
    details: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.details:
            raise ValueError("details must not be empty")

    @property
    def flags_service(self) -> bool:
        """Whether this conflict sets Service.has_conflicts."""
        return self.kind is not ConflictKind.UNUSED_SERVICE
