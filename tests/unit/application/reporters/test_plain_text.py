"""Tests for PlainTextReporter."""

from dataclasses import replace

from dinavigator.application.reporters import PlainTextReporter
from dinavigator.domain.model.project import ProjectDI
from tests.factories import make_project, make_registration, make_site, make_shop_project


class TestPlainTextReporter:
    """Tests for the service dependency graph text."""

    def test_header(self) -> None:
        """Output starts with the title and project block."""
        lines = PlainTextReporter().report(make_shop_project()).splitlines()
        assert lines[:4] == [
            "=== Service Dependency Graph ===",
            "",
            "Project: Shop",
            "=" * 50,
        ]

    def test_group_headings_in_order(self) -> None:
        """Groups appear as [Lifetime Services] in group order."""
        lines = PlainTextReporter().report(make_shop_project()).splitlines()
        headings = [line for line in lines if line.endswith(" Services]")]
        assert headings == ["[Scoped Services]", "[Singleton Services]", "[Transient Services]"]

    def test_service_entries(self) -> None:
        """Registrations use →, injection sites use ←."""
        output = PlainTextReporter().report(make_shop_project())
        assert (
            "  IOrders\n"
            "    → Registered: services.AddScoped<IOrders, Orders>() (Program.cs:2)\n"
            "    ← Injected in: Users.constructor (Users.cs:9)\n"
        ) in output
        assert "    ← Injected in: Orders.Place (Orders.cs:12)" in output

    def test_implementation_when_no_call_text(self) -> None:
        """Without method call text the implementation type is shown."""
        reg = replace(make_registration(), method_call="")
        project = make_project([reg], [make_site()])
        output = PlainTextReporter().report(project)
        assert "    → Registered: Clock (Program.cs:1)" in output

    def test_cycles_section(self) -> None:
        """Cycles are listed after the groups."""
        output = PlainTextReporter().report(make_shop_project())
        assert "[Cycles]\n  Cycle detected involving Orders:" in output
        assert output.endswith("=" * 50 + "\n")

    def test_no_cycles_section_when_acyclic(self) -> None:
        """[Cycles] is omitted for acyclic projects."""
        project = make_project([make_registration()], [make_site()])
        assert "[Cycles]" not in PlainTextReporter().report(project)

    def test_failed_project(self) -> None:
        """Failed results still produce the project block."""
        output = PlainTextReporter().report(ProjectDI.failed("/work/Shop", ("boom",)))
        assert "Project: Shop" in output
        assert "Services]" not in output

    def test_workspace(self) -> None:
        """report_workspace writes one block per project under one title."""
        other = make_project([make_registration()], [make_site()], path="/work/Billing")

        output = PlainTextReporter().report_workspace((make_shop_project(), other))

        assert output.count("=== Service Dependency Graph ===") == 1
        assert output.index("Project: Shop") < output.index("Project: Billing")
