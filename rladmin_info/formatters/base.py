"""Base formatter interface for output formats."""

from abc import ABC, abstractmethod
from typing import Any, Sequence

from rladmin_info.rladmin.table import Column


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def format(
        self,
        data: Sequence[Any],
        columns: Sequence[Column],
        skip_headers: bool = False
    ) -> str:
        """Format parsed rladmin records.

        Args:
            data: Records (nodes, databases, shards or endpoints)
            columns: Column mapping of the record type
            skip_headers: Omit the header row where the format has one

        Returns:
            Formatted string output
        """
        pass
