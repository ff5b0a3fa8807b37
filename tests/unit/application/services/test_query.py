"""Tests for application/services/query.py."""

import pytest

from dinavigator.application.services.query import (
    conflicting_services,
    dependents_of,
    search_services,
    services_with_lifetime,
)
from dinavigator.domain.model.enums import Lifetime
from dinavigator.domain.model.project import ProjectDI
from tests.factories import make_project, make_registration, make_site


@pytest.fixture
def project() -> ProjectDI:
    """Project with repositories, a clock and one conflicting service."""
    return make_project(
        registrations=[
            make_registration("IUserRepository", impl="SqlUserRepository", line=1),
            make_registration("IOrderRepository", lifetime=Lifetime.SCOPED, line=2),
            make_registration("IClock", impl="SystemClock", line=3),
            make_registration("IMailer", lifetime=Lifetime.SCOPED, line=4),
            make_registration("IMailer", lifetime=Lifetime.TRANSIENT, line=5),
        ],
        sites=[
            make_site("IUserRepository", class_name="UserController"),
            make_site("IOrderRepository", class_name="OrderController"),
            make_site("IClock", class_name="OrderController", line=4),
            make_site("IClock", class_name="Scheduler"),
            make_site("IMailer", class_name="Notifier"),
        ],
    )


class TestSearchServices:
    """Tests for search_services."""

    def test_wildcard(self, project: ProjectDI) -> None:
        names = [s.name for s in search_services(project, "I*Repository")]
        assert names == ["IOrderRepository", "IUserRepository"]

    def test_case_insensitive_substring(self, project: ProjectDI) -> None:
        assert [s.name for s in search_services(project, "clock")] == ["IClock"]

    def test_matches_implementation(self, project: ProjectDI) -> None:
        assert [s.name for s in search_services(project, "Sql")] == ["IUserRepository"]

    def test_empty_query_matches_all(self, project: ProjectDI) -> None:
        assert len(search_services(project, "")) == project.service_count == 4

    def test_regex_characters_are_literal(self, project: ProjectDI) -> None:
        assert search_services(project, "I.+") == ()


class TestProjectQueries:
    """Tests for lifetime, conflict and dependents queries."""

    def test_services_with_lifetime(self, project: ProjectDI) -> None:
        scoped = services_with_lifetime(project, Lifetime.SCOPED)
        assert [s.name for s in scoped] == ["IMailer", "IOrderRepository"]
        assert services_with_lifetime(project, Lifetime.OTHERS) == ()

    def test_conflicting_services(self, project: ProjectDI) -> None:
        assert [s.name for s in conflicting_services(project)] == ["IMailer"]

    def test_dependents_sorted(self, project: ProjectDI) -> None:
        assert dependents_of(project, "IClock") == ("OrderController", "Scheduler")
        assert dependents_of(project, "IUnknown") == ()
