"""Console reporter: ProjectDI → rich formatted string."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from types import MappingProxyType
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dinavigator.domain.model.enums import Lifetime, ParseStatus

if TYPE_CHECKING:
    from collections.abc import Mapping

    from dinavigator.domain.model.project import ProjectDI
    from dinavigator.domain.model.service import ServiceGroup

LIFETIME_COLORS: Mapping[Lifetime, str] = MappingProxyType(
    {
        Lifetime.SINGLETON: "#FF5722",
        Lifetime.SCOPED: "#2196F3",
        Lifetime.TRANSIENT: "#4CAF50",
        Lifetime.OTHERS: "#808080",
    }
)

_STATUS_STYLES: Mapping[ParseStatus, str] = MappingProxyType(
    {
        ParseStatus.SUCCESS: "bold green",
        ParseStatus.PARTIAL: "bold yellow",
        ParseStatus.FAILED: "bold red",
    }
)


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    Attributes:
        show_sites: List injection sites under each group table.
        show_unused: Include UnusedService findings in the conflicts section.
        width: Console width in characters.
    """

    show_sites: bool = False
    show_unused: bool = True
    width: int = 120

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.width < 40:
            raise ValueError(f"width must be >= 40, got {self.width}")


class ConsoleReporter:
    """Console reporter: outputs rich formatted text.

    Output is str, not print(). Caller decides destination.
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ConsoleConfig()

    def report(self, project: ProjectDI) -> str:
        """Format analysis result as rich formatted string.

        Args:
            project: Analysis result to format.

        Returns:
            Formatted string with colors and tables.
        """
        output = StringIO()
        console = Console(file=output, force_terminal=True, width=self._config.width)

        self._render_header(console, project)
        for group in project.service_groups:
            self._render_group(console, group)
        self._render_conflicts(console, project)
        self._render_cycles(console, project)
        self._render_external(console, project)
        self._render_errors(console, project)
        self._render_summary(console, project)

        return output.getvalue()

    def _render_header(self, console: Console, project: ProjectDI) -> None:
        console.print()
        console.rule(f"[bold]DI ANALYSIS: {escape(project.project_name)}[/bold]")
        console.print()
        style = _STATUS_STYLES[project.parse_status]
        console.print(f"[bold]Path:[/bold] {escape(project.project_path)}")
        console.print(f"[bold]Status:[/bold] [{style}]{project.parse_status.value}[/{style}]")
        console.print()

    def _render_group(self, console: Console, group: ServiceGroup) -> None:
        color = LIFETIME_COLORS[group.lifetime]
        table = Table(
            title=f"[bold {color}]{group.lifetime.value}[/bold {color}] ({group.count})",
            title_justify="left",
            show_lines=False,
        )
        table.add_column("Service", style=color)
        table.add_column("Implementations")
        table.add_column("Registrations", justify="right")
        table.add_column("Injections", justify="right")
        table.add_column("Conflicts", justify="center")

        for service in group.services:
            impls = ", ".join(
                reg.implementation_type for reg in service.registrations_at(group.lifetime)
            )
            table.add_row(
                escape(service.name),
                escape(impls),
                str(len(service.registrations)),
                str(len(service.injection_sites)),
                "[red]yes[/red]" if service.has_conflicts else "-",
            )
        console.print(table)

        if self._config.show_sites:
            for service in group.services:
                for site in service.injection_sites:
                    console.print(
                        f"  [dim]{escape(service.name)} ← "
                        f"{escape(site.class_name)}.{escape(site.member_name)} "
                        f"({escape(site.location)})[/dim]"
                    )
        console.print()

    def _render_conflicts(self, console: Console, project: ProjectDI) -> None:
        findings = [
            (service.name, conflict)
            for service in project.services
            for conflict in service.conflicts
            if self._config.show_unused or conflict.flags_service
        ]
        if not findings:
            return

        console.print(f"[bold red]CONFLICTS[/bold red] ({len(findings)})")
        console.print()
        for name, conflict in findings:
            style = "red" if conflict.flags_service else "dim"
            console.print(
                f"  [{style}]{conflict.kind.value}[/{style}] {escape(name)}: "
                f"{escape(conflict.details)}"
            )
        console.print()

    def _render_cycles(self, console: Console, project: ProjectDI) -> None:
        if not project.cycles:
            return
        console.print(f"[bold red]CYCLES[/bold red] ({len(project.cycles)})")
        console.print()
        for cycle in project.cycles:
            console.print(f"  {escape(cycle)}")
        console.print()

    def _render_external(self, console: Console, project: ProjectDI) -> None:
        if project.lifetime_conflicts:
            console.print(
                f"[bold yellow]LIFETIME CONFLICTS[/bold yellow] ({len(project.lifetime_conflicts)})"
            )
            for conflict in project.lifetime_conflicts:
                console.print(
                    f"  {escape(f'[{conflict.severity}]')} {escape(conflict.service_type)}: "
                    f"{escape(conflict.description)}"
                )
            console.print()

        if project.service_dependency_issues:
            console.print(
                "[bold yellow]DEPENDENCY ISSUES[/bold yellow] "
                f"({len(project.service_dependency_issues)})"
            )
            for issue in project.service_dependency_issues:
                missing = ", ".join(issue.missing_dependencies)
                suffix = f" (missing: {escape(missing)})" if missing else ""
                console.print(
                    f"  {escape(f'[{issue.severity}]')} {escape(issue.service_type)}: "
                    f"{escape(issue.description)}{suffix}"
                )
            console.print()

    def _render_errors(self, console: Console, project: ProjectDI) -> None:
        if not project.error_details:
            return
        console.print(f"[bold red]ERRORS[/bold red] ({len(project.error_details)})")
        console.print()
        for error in project.error_details:
            console.print(f"  {escape(error)}")
        console.print()

    def _render_summary(self, console: Console, project: ProjectDI) -> None:
        conflicted = sum(1 for service in project.services if service.has_conflicts)
        parts = [
            f"[bold]Services:[/bold] {project.service_count}",
            f"[bold]Registrations:[/bold] {len(project.registrations)}",
            f"[bold]Injection sites:[/bold] {len(project.injection_sites)}",
            f"[bold]With conflicts:[/bold] {conflicted}",
            f"[bold]Cycles:[/bold] {len(project.cycles)}",
        ]
        console.rule()
        console.print(" | ".join(parts))
        console.print()
