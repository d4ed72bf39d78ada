"""Markdown formatter for rladmin records."""

from typing import Any, Sequence

from rladmin_info.formatters.base import BaseFormatter
from rladmin_info.rladmin.table import Column


class MarkdownFormatter(BaseFormatter):
    """Markdown table output formatter."""

    def format(
        self,
        data: Sequence[Any],
        columns: Sequence[Column],
        skip_headers: bool = False
    ) -> str:
        """Format records as a Markdown table.

        Args:
            data: Records to write, one row each
            columns: Column mapping of the record type
            skip_headers: Omit the header and separator rows

        Returns:
            Markdown table formatted string
        """
        if not data:
            return ""

        lines = []

        if not skip_headers:
            header = [column.csv_name for column in columns]
            lines.append("| " + " | ".join(header) + " |")

            # Right-align numeric columns
            separators = ["---:" if column.numeric else "---" for column in columns]
            lines.append("| " + " | ".join(separators) + " |")

        for item in data:
            row = [column.to_text(getattr(item, column.field)) for column in columns]
            lines.append("| " + " | ".join(row) + " |")

        return "\n".join(lines)
