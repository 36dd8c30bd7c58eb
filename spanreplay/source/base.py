"""Base classes for span sources in the spanreplay application.

This module defines the abstract base class for all span sources,
providing a common interface for draining captured span records.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from spanreplay.models import SpanRecord


class SpanSource(ABC):
    """Abstract base class for reading captured span records.

    A source is drained once per run. Records are yielded lazily in
    non-decreasing start time order.
    """

    @abstractmethod
    def read(self) -> Iterator[SpanRecord]:
        """Read all currently available span records.

        Returns:
            Iterator[SpanRecord]: Records ordered by start time ascending.
        """

    def close(self) -> None:
        """Release any resource held by the source."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
