"""Tests for the conflict rules and detector."""

from dinavigator.application.conflicts import (
    ConflictRule,
    MixedLifetimesRule,
    UnusedServiceRule,
    default_rules,
    detect_all,
    detect_conflicts,
)
from dinavigator.domain.model.conflict import Conflict
from dinavigator.domain.model.enums import ConflictKind, Lifetime
from dinavigator.domain.model.service import Service
from tests.factories import make_registration, make_service, make_site


def _kinds(service: Service) -> list[ConflictKind]:
    return [conflict.kind for conflict in service.conflicts]


class TestMixedLifetimes:
    """Tests for MixedLifetimesRule."""

    def test_two_lifetimes(self) -> None:
        """Two lifetimes give one MixedLifetimes conflict."""
        service = make_service(
            registrations=[
                make_registration(lifetime=Lifetime.SINGLETON, line=1),
                make_registration(lifetime=Lifetime.SCOPED, line=2),
            ],
            sites=[make_site()],
        )

        result = detect_conflicts(service)

        assert _kinds(result) == [ConflictKind.MIXED_LIFETIMES]
        assert result.conflicts[0].details == "Multiple lifetimes: Singleton, Scoped"
        assert result.has_conflicts


class TestDuplicateImplementation:
    """Tests for DuplicateImplementationRule."""

    def test_same_implementation_twice(self) -> None:
        """Same implementation twice at one lifetime is a duplicate."""
        service = make_service(
            registrations=[make_registration(line=1), make_registration(line=2)],
            sites=[make_site()],
        )

        result = detect_conflicts(service)

        assert _kinds(result) == [ConflictKind.DUPLICATE_IMPLEMENTATION]
        assert result.conflicts[0].details == (
            "Clock registered 2 times as Singleton: Program.cs:1, Program.cs:2"
        )

    def test_same_implementation_different_lifetimes_is_not_duplicate(self) -> None:
        """Duplicates are counted per lifetime."""
        service = make_service(
            registrations=[
                make_registration(lifetime=Lifetime.SINGLETON, line=1),
                make_registration(lifetime=Lifetime.TRANSIENT, line=2),
            ],
            sites=[make_site()],
        )

        assert ConflictKind.DUPLICATE_IMPLEMENTATION not in _kinds(detect_conflicts(service))


class TestMultipleImplementations:
    """Tests for MultipleImplementationsRule."""

    def test_competing_implementations(self) -> None:
        """Different implementations at one lifetime compete."""
        service = make_service(
            registrations=[
                make_registration(impl="SystemClock", line=1),
                make_registration(impl="FakeClock", line=2),
            ],
            sites=[make_site()],
        )

        result = detect_conflicts(service)

        assert _kinds(result) == [ConflictKind.MULTIPLE_IMPLEMENTATIONS]
        assert result.conflicts[0].details == (
            "2 different implementations for Singleton: SystemClock, FakeClock"
        )


class TestUsageRules:
    """Tests for UnregisteredInjectionRule and UnusedServiceRule."""

    def test_unregistered_injection(self) -> None:
        """Sites without registrations are flagged."""
        service = make_service(sites=[make_site(line=3), make_site(line=9)])

        result = detect_conflicts(service)

        assert _kinds(result) == [ConflictKind.UNREGISTERED_INJECTION]
        assert result.conflicts[0].details == "2 injection sites but no registration"
        assert result.has_conflicts

    def test_unused_service_does_not_flag(self) -> None:
        """UnusedService is reported without setting has_conflicts."""
        service = make_service(registrations=[make_registration()])

        result = detect_conflicts(service)

        assert _kinds(result) == [ConflictKind.UNUSED_SERVICE]
        assert result.conflicts[0].details == "Registered 1 time(s) but never injected"
        assert not result.has_conflicts

    def test_unused_with_other_conflict_flags(self) -> None:
        """Any other conflict sets has_conflicts."""
        service = make_service(
            registrations=[
                make_registration(lifetime=Lifetime.SINGLETON, line=1),
                make_registration(lifetime=Lifetime.SCOPED, line=2),
            ]
        )

        result = detect_conflicts(service)

        assert _kinds(result) == [ConflictKind.MIXED_LIFETIMES, ConflictKind.UNUSED_SERVICE]
        assert result.has_conflicts

    def test_clean_service(self) -> None:
        """A registered and injected service has no conflicts."""
        service = make_service(registrations=[make_registration()], sites=[make_site()])

        result = detect_conflicts(service)

        assert result.conflicts == ()
        assert not result.has_conflicts


class TestDetector:
    """Tests for detect_conflicts and detect_all."""

    def test_rules_in_reporting_order(self) -> None:
        """Default rules run in reporting order."""
        kinds = [rule.kind for rule in default_rules()]
        assert kinds == list(ConflictKind)

    def test_existing_conflicts_replaced(self) -> None:
        """Detection replaces conflicts from an earlier pass."""
        stale = Service(
            name="IClock",
            registrations=(make_registration(),),
            injection_sites=(make_site(),),
            conflicts=(Conflict(ConflictKind.MIXED_LIFETIMES, "stale"),),
            has_conflicts=True,
        )

        result = detect_conflicts(stale)

        assert result.conflicts == ()
        assert not result.has_conflicts

    def test_custom_rule_set(self) -> None:
        """Only the given rules run."""
        services = [
            make_service(registrations=[make_registration()]),
            make_service(
                name="IRepo",
                registrations=[
                    make_registration("IRepo", lifetime=Lifetime.SCOPED, line=4),
                    make_registration("IRepo", lifetime=Lifetime.TRANSIENT, line=5),
                ],
            ),
        ]

        results = detect_all(services, (MixedLifetimesRule(),))

        assert [_kinds(s) for s in results] == [[], [ConflictKind.MIXED_LIFETIMES]]

    def test_user_defined_rule(self) -> None:
        """Rules outside the package plug in through ConflictRule."""
        class ThreeOrMoreRule(ConflictRule):
            kind = ConflictKind.DUPLICATE_IMPLEMENTATION

            def check(self, service: Service) -> tuple[Conflict, ...]:
                if len(service.registrations) < 3:
                    return ()
                return (Conflict(self.kind, "registered three times or more"),)

        service = make_service(registrations=[make_registration(line=n) for n in (1, 2, 3)])

        result = detect_conflicts(service, (ThreeOrMoreRule(), UnusedServiceRule()))

        assert _kinds(result) == [
            ConflictKind.DUPLICATE_IMPLEMENTATION,
            ConflictKind.UNUSED_SERVICE,
        ]
        assert result.has_conflicts
