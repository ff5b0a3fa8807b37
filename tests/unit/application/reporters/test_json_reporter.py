"""Tests for JsonReporter and project_to_dict."""

import json

from dinavigator.application.reporters import JsonReporter, project_to_dict
from dinavigator.domain.model.project import ProjectDI
from tests.factories import make_shop_project, with_external_findings


class TestJsonReporter:
    """Tests for JsonReporter.report."""

    def test_report_is_valid_json(self) -> None:
        """report() returns parseable JSON equal to project_to_dict."""
        project = make_shop_project()
        output = JsonReporter().report(project)
        assert json.loads(output) == project_to_dict(project)

    def test_indent_parameter(self) -> None:
        """indent=None gives single-line output."""
        output = JsonReporter(indent=None).report(make_shop_project())
        assert "\n" not in output

    def test_default_indent(self) -> None:
        """Default output is indented by two spaces."""
        output = JsonReporter().report(make_shop_project())
        assert '\n  "projectPath": "/work/Shop"' in output


class TestProjectToDict:
    """Tests for the camelCase contract."""

    def test_top_level_keys(self) -> None:
        """Keys in contract order; optional sections omitted when empty."""
        data = project_to_dict(make_shop_project())
        assert list(data) == [
            "projectPath",
            "projectName",
            "serviceGroups",
            "dependencyGraph",
            "cycles",
            "parseStatus",
        ]
        assert data["projectName"] == "Shop"
        assert data["parseStatus"] == "success"

    def test_service_groups(self) -> None:
        """Groups carry lifetime, services and count."""
        groups = project_to_dict(make_shop_project())["serviceGroups"]
        assert [(g["lifetime"], g["count"]) for g in groups] == [  # type: ignore[attr-defined]
            ("Scoped", 2),
            ("Singleton", 1),
            ("Transient", 1),
        ]

    def test_registration_and_site(self) -> None:
        """Registrations and sites use the documented field names."""
        data = project_to_dict(make_shop_project())
        orders = data["serviceGroups"][0]["services"][0]  # type: ignore[index]

        assert orders["name"] == "IOrders"
        assert orders["registrations"] == [
            {
                "id": "Program.cs-2",
                "lifetime": "Scoped",
                "serviceType": "IOrders",
                "implementationType": "Orders",
                "filePath": "Program.cs",
                "lineNumber": 2,
                "methodCall": "services.AddScoped<IOrders, Orders>()",
            }
        ]
        assert orders["injectionSites"] == [
            {
                "filePath": "Users.cs",
                "lineNumber": 9,
                "className": "Users",
                "memberName": "constructor",
                "kind": "constructor",
                "serviceType": "IOrders",
                "linkedRegistrationIds": ["Program.cs-2"],
            }
        ]
        assert orders["hasConflicts"] is False
        assert orders["conflicts"] == []

    def test_conflicts(self) -> None:
        """Conflicts serialize as kind and details."""
        data = project_to_dict(make_shop_project())
        clock = data["serviceGroups"][1]["services"][0]  # type: ignore[index]

        assert clock["hasConflicts"] is True
        assert clock["conflicts"] == [
            {"kind": "MixedLifetimes", "details": "Multiple lifetimes: Singleton, Transient"}
        ]

    def test_graph_and_cycles(self) -> None:
        """Graph maps classes to injected types; cycles are strings."""
        data = project_to_dict(make_shop_project())
        assert data["dependencyGraph"] == {"Orders": ["IUsers", "IClock"], "Users": ["IOrders"]}
        assert data["cycles"] == [
            "Cycle detected involving Orders: Orders -> IUsers -> Users -> IOrders -> Orders"
        ]

    def test_error_details_present_when_failed(self) -> None:
        """errorDetails appears only when errors exist."""
        data = project_to_dict(ProjectDI.failed("/work/Shop", ("No source files found",)))
        assert data["errorDetails"] == ["No source files found"]
        assert data["serviceGroups"] == []
        assert data["dependencyGraph"] == {}

    def test_external_sections(self) -> None:
        """External analyzer findings are serialized when present."""
        data = project_to_dict(with_external_findings(make_shop_project()))
        assert data["lifetimeConflicts"] == [
            {
                "serviceType": "IOrders",
                "implementationType": "Orders",
                "conflictType": "CaptiveDependency",
                "description": "Scoped service captured by singleton",
                "severity": "High",
                "recommendation": "Scoped",
            }
        ]
        assert data["serviceDependencyIssues"] == [
            {
                "serviceType": "IUsers",
                "issueType": "MissingDependency",
                "description": "IAudit is not registered",
                "severity": "Warning",
                "missingDependencies": ["IAudit"],
            }
        ]
