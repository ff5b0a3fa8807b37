"""Tests for application/services/linker.py."""

from dinavigator.application.services.linker import ensure_unique_ids, link_sites
from dinavigator.domain.model.enums import Lifetime
from tests.factories import make_registration, make_site


class TestLinkSites:
    """Tests for link_sites."""

    def test_links_every_registration_of_the_type(self) -> None:
        """A site links to all registrations of its service type."""
        registrations = [
            make_registration(lifetime=Lifetime.SINGLETON, line=1),
            make_registration(lifetime=Lifetime.SCOPED, line=2),
            make_registration("IRepo", line=3),
        ]

        (site,) = link_sites([make_site()], registrations)

        assert site.linked_registration_ids == ("Program.cs-1", "Program.cs-2")

    def test_unmatched_site_has_no_links(self) -> None:
        """Sites without a registration stay unlinked."""
        (site,) = link_sites([make_site("IMailer")], [make_registration()])
        assert site.linked_registration_ids == ()
        assert not site.is_linked

    def test_match_is_case_sensitive(self) -> None:
        """Service types are compared exactly."""
        (site,) = link_sites([make_site("iclock")], [make_registration()])
        assert not site.is_linked

    def test_previous_links_replaced(self) -> None:
        """Existing links are overwritten, not merged."""
        stale = make_site(linked=("Old.cs-1",))
        (site,) = link_sites([stale], [make_registration()])
        assert site.linked_registration_ids == ("Program.cs-1",)

    def test_order_preserved(self) -> None:
        """Sites keep their input order."""
        sites = [make_site(line=n) for n in (9, 4, 7)]
        assert [s.line_number for s in link_sites(sites, ())] == [9, 4, 7]


class TestEnsureUniqueIds:
    """Tests for ensure_unique_ids."""

    def test_collision_across_files(self) -> None:
        """Same basename in two folders gets a suffix."""
        registrations = [
            make_registration(file="Api/Program.cs", line=5),
            make_registration("IRepo", file="Worker/Program.cs", line=5),
            make_registration("IMailer", file="Jobs/Program.cs", line=5),
        ]

        unique = ensure_unique_ids(registrations)

        assert [r.id for r in unique] == ["Program.cs-5", "Program.cs-5-2", "Program.cs-5-3"]
        assert unique[0] is registrations[0]
        assert unique[1].service_type == "IRepo"

    def test_suffix_skips_taken_ids(self) -> None:
        """Suffixes skip ids that already exist."""
        registrations = [
            make_registration(reg_id="Program.cs-1"),
            make_registration(reg_id="Program.cs-1-2"),
            make_registration(reg_id="Program.cs-1"),
        ]

        assert [r.id for r in ensure_unique_ids(registrations)] == [
            "Program.cs-1",
            "Program.cs-1-2",
            "Program.cs-1-3",
        ]

    def test_unique_ids_unchanged(self) -> None:
        """Unique ids are returned unchanged."""
        registrations = (make_registration(line=1), make_registration(line=2))
        assert ensure_unique_ids(registrations) == registrations
