"""JSON formatter for rladmin records."""

import json
from typing import Any, Dict, List, Optional, Sequence

from rladmin_info.formatters.base import BaseFormatter
from rladmin_info.rladmin.table import Column


class JSONFormatter(BaseFormatter):
    """JSON output formatter."""

    def __init__(self, indent: Optional[int] = None):
        """Initialize JSON formatter.

        Args:
            indent: Pretty-print indentation, compact output when None
        """
        self.indent = indent

    def format(
        self,
        data: Sequence[Any],
        columns: Sequence[Column],
        skip_headers: bool = False
    ) -> str:
        """Format records as a JSON array.

        ``skip_headers`` has no meaning for JSON and is ignored.
        """
        return self.dumps(self.to_list(data, columns))

    def dumps(self, value: Any) -> str:
        """Serialize an already converted value."""
        if self.indent is None:
            return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
        return json.dumps(value, ensure_ascii=False, indent=self.indent)

    @staticmethod
    def to_dict(item: Any, columns: Sequence[Column]) -> Dict[str, Any]:
        """Convert one record to a JSON-ready dictionary."""
        return {column.json_name: column.to_json(getattr(item, column.field)) for column in columns}

    @staticmethod
    def to_list(data: Sequence[Any], columns: Sequence[Column]) -> List[Dict[str, Any]]:
        """Convert records to a list of JSON-ready dictionaries."""
        return [JSONFormatter.to_dict(item, columns) for item in data]
