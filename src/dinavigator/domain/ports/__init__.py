"""Domain ports (interfaces/protocols)."""

from dinavigator.domain.ports.cancellation import CancellationSignal
from dinavigator.domain.ports.reporter import ReporterProtocol
from dinavigator.domain.ports.source_reader import SourceReaderPort

__all__ = [
    "CancellationSignal",
    "ReporterProtocol",
    "SourceReaderPort",
]
