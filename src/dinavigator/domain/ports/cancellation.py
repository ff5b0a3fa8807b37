"""Cancellation signal protocol."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CancellationSignal(Protocol):
    """Anything with is_set(): threading.Event, asyncio.Event, custom tokens."""

    def is_set(self) -> bool:
        """Whether cancellation was requested."""
        ...
