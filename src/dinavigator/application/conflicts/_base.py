"""Base class for conflict rules.

Concrete rules inherit from this and are listed in _registry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dinavigator.domain.model.conflict import Conflict
    from dinavigator.domain.model.enums import ConflictKind
    from dinavigator.domain.model.service import Service


class ConflictRule(ABC):
    """One rule of the conflict detector.

    Concrete rules must:
    1. Set `kind` class attribute
    2. Implement `check()`, returning conflicts of that kind only

    Example:
        class SingleRegistrationRule(ConflictRule):
            kind = ConflictKind.DUPLICATE_IMPLEMENTATION

            def check(self, service: Service) -> tuple[Conflict, ...]:
                if len(service.registrations) < 3:
                    return ()
                return (Conflict(self.kind, "registered three times or more"),)
    """

    kind: ConflictKind
    """Tag of every conflict this rule produces."""

    @abstractmethod
    def check(self, service: Service) -> tuple[Conflict, ...]:
        """Evaluate the rule for one service.

        Args:
            service: Aggregated service

        Returns:
            Conflicts found (empty if the rule does not apply)
        """
