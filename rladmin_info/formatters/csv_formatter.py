"""CSV formatter for rladmin records."""

import csv
import io
from typing import Any, Sequence

from rladmin_info.formatters.base import BaseFormatter
from rladmin_info.rladmin.table import Column


class CSVFormatter(BaseFormatter):
    """CSV output formatter."""

    def format(
        self,
        data: Sequence[Any],
        columns: Sequence[Column],
        skip_headers: bool = False
    ) -> str:
        """Format records as CSV.

        Args:
            data: Records to write, one row each
            columns: Column mapping of the record type
            skip_headers: Omit the header row, for appending to an existing table

        Returns:
            CSV formatted string
        """
        if not data:
            return ""

        output = io.StringIO()
        writer = csv.writer(output)

        if not skip_headers:
            writer.writerow([column.csv_name for column in columns])

        for item in data:
            writer.writerow([self._format_cell(item, column) for column in columns])

        return output.getvalue()

    @staticmethod
    def _format_cell(item: Any, column: Column) -> str:
        """Render one field with the column's text formatter."""
        return column.to_text(getattr(item, column.field))
