"""DI analysis engine: extraction per file, then linking and analysis once.

Pipeline:
    1. Read files concurrently (bounded), extract into per-file buffers
    2. Merge buffers in file order
    3. Link sites → registrations
    4. Aggregate services, detect conflicts, group by lifetime
    5. Build dependency graph, detect cycles
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from dinavigator.application.conflicts import detect_all
from dinavigator.application.extraction import extract_injection_sites, extract_registrations
from dinavigator.application.patterns import injection_patterns, resolve_catalogs
from dinavigator.application.services.aggregator import aggregate_services, group_by_lifetime
from dinavigator.application.services.analysis_run import AnalysisRun, resolve_status
from dinavigator.application.services.dependency_graph import (
    build_dependency_graph,
    detect_cycles,
)
from dinavigator.application.services.linker import ensure_unique_ids, link_sites
from dinavigator.domain.exceptions import (
    AnalysisCancelled,
    AnalysisInProgressError,
    ProjectRootError,
    SourceReadError,
)
from dinavigator.domain.model.configuration import AnalyzerConfig
from dinavigator.domain.model.enums import AnalysisState
from dinavigator.domain.model.project import ProjectDI

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from dinavigator.domain.model.injection_site import InjectionSite
    from dinavigator.domain.model.registration import Registration
    from dinavigator.domain.ports.cancellation import CancellationSignal
    from dinavigator.domain.ports.source_reader import SourceReaderPort

logger = logging.getLogger(__name__)

NO_SOURCE_FILES = "No source files found"
NO_SERVICES = "No service registrations found"
CANCELLED = "Analysis cancelled"


@dataclass(frozen=True, slots=True)
class FileExtraction:
    """File-local buffer, merged into the shared collections in one step.

    Attributes:
        file_path: Source file
        registrations: Registrations found in the file
        injection_sites: Unlinked injection sites found in the file
        error: Read/extraction error, None on success
    """

    file_path: str
    registrations: tuple[Registration, ...] = ()
    injection_sites: tuple[InjectionSite, ...] = ()
    error: str | None = None


class AnalysisEngine:
    """Text-pattern DI analyzer for one project at a time.

    No state survives between runs except the in-progress guard and the
    state of the last run.
    """

    def __init__(self, reader: SourceReaderPort, config: AnalyzerConfig | None = None) -> None:
        """Initialize engine.

        Args:
            reader: Source text reader
            config: Analyzer configuration (default: AnalyzerConfig())

        Raises:
            UnknownContainerError: If config names an unregistered catalog
        """
        self._reader = reader
        self._config = config if config is not None else AnalyzerConfig()
        self._catalogs = resolve_catalogs(self._config.containers)
        self._injections = injection_patterns(self._catalogs)
        self._running = False
        self._last_state = AnalysisState.NOT_STARTED

    @property
    def config(self) -> AnalyzerConfig:
        """Active configuration."""
        return self._config

    @property
    def last_state(self) -> AnalysisState:
        """Final state of the most recent run (NotStarted before the first)."""
        return self._last_state

    def analyze(
        self,
        project_root: Path | str,
        source_files: Iterable[Path | str],
        cancel: CancellationSignal | None = None,
    ) -> ProjectDI:
        """Synchronous analyze_async. Must not be called from a running event loop."""
        return asyncio.run(self.analyze_async(project_root, source_files, cancel))

    async def analyze_async(
        self,
        project_root: Path | str,
        source_files: Iterable[Path | str],
        cancel: CancellationSignal | None = None,
    ) -> ProjectDI:
        """Analyze a project.

        Never raises for empty or degraded results; parse_status reports
        confidence instead.

        Args:
            project_root: Project directory
            source_files: Files to analyze; relative paths resolve against project_root
            cancel: Checked before each file is read; when set the run fails

        Returns:
            Fresh ProjectDI

        Raises:
            ProjectRootError: If project_root is missing or not a directory
            AnalysisInProgressError: If this engine is already analyzing
        """
        if self._running:
            raise AnalysisInProgressError()

        root = Path(project_root)
        if not root.exists():
            raise ProjectRootError(path=str(root), reason="does not exist")
        if not root.is_dir():
            raise ProjectRootError(path=str(root), reason="not a directory")

        files = tuple(p if p.is_absolute() else root / p for p in map(Path, source_files))
        run = AnalysisRun()
        run.start()
        self._running = True
        logger.info("Analyzing %s (%d files)", root, len(files))
        try:
            result = await self._run(root, files, cancel)
        finally:
            self._running = False

        self._last_state = run.finish(result.parse_status)
        logger.info(
            "Analysis of %s finished: %s, %d services, %d errors",
            root,
            result.parse_status.value,
            result.service_count,
            len(result.error_details or ()),
        )
        return result

    async def _run(
        self,
        root: Path,
        files: Sequence[Path],
        cancel: CancellationSignal | None,
    ) -> ProjectDI:
        if not files:
            return ProjectDI.failed(str(root), (NO_SOURCE_FILES,))

        semaphore = asyncio.Semaphore(self._config.max_concurrency)
        cancelled = False
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [
                    group.create_task(self._process_file(path, semaphore, cancel)) for path in files
                ]
        except* AnalysisCancelled:
            cancelled = True

        if cancelled:
            logger.warning("Analysis of %s cancelled", root)
            return ProjectDI.failed(str(root), (CANCELLED,))

        return self._analyze_merged(root, [task.result() for task in tasks])

    async def _process_file(
        self,
        path: Path,
        semaphore: asyncio.Semaphore,
        cancel: CancellationSignal | None,
    ) -> FileExtraction:
        async with semaphore:
            if cancel is not None and cancel.is_set():
                raise AnalysisCancelled
            try:
                text = await self._reader.read_text(path)
            except SourceReadError as e:
                logger.warning("Skipping %s: %s", path, e.reason)
                return FileExtraction(file_path=str(path), error=str(e))
            except OSError as e:
                # Readers outside this package may leak raw I/O errors
                reason = e.strerror or str(e)
                logger.warning("Skipping %s: %s", path, reason)
                return FileExtraction(file_path=str(path), error=f"{path}: {reason}")
            return self._extract(str(path), text)

    def _extract(self, file_path: str, text: str) -> FileExtraction:
        try:
            registrations = extract_registrations(file_path, text, self._catalogs)
            sites = extract_injection_sites(file_path, text, self._injections)
        except ValueError as e:
            logger.warning("Extraction failed for %s: %s", file_path, e)
            return FileExtraction(file_path=file_path, error=f"{file_path}: {e}")
        return FileExtraction(
            file_path=file_path,
            registrations=registrations,
            injection_sites=sites,
        )

    def _analyze_merged(self, root: Path, extractions: Sequence[FileExtraction]) -> ProjectDI:
        registrations: list[Registration] = []
        sites: list[InjectionSite] = []
        errors: list[str] = []
        for extraction in extractions:
            registrations.extend(extraction.registrations)
            sites.extend(extraction.injection_sites)
            if extraction.error is not None:
                errors.append(extraction.error)

        unique_regs = ensure_unique_ids(registrations)
        linked_sites = link_sites(sites, unique_regs)
        services = detect_all(aggregate_services(unique_regs, linked_sites))
        groups = group_by_lifetime(services)
        graph = build_dependency_graph(linked_sites)
        cycles = detect_cycles(graph, unique_regs)

        if not groups:
            errors.append(NO_SERVICES)
        status = resolve_status(has_services=bool(groups), has_errors=bool(errors))

        return ProjectDI(
            project_path=str(root),
            project_name=ProjectDI.name_for(str(root)),
            service_groups=groups,
            dependency_graph=graph,
            cycles=cycles,
            parse_status=status,
            error_details=tuple(errors) or None,
        )
