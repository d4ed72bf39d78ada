"""Fixed-width table decoder for rladmin status sections."""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from rladmin_info.rladmin.exceptions import CoercionError, FieldDecodeError

logger = logging.getLogger(__name__)

_LABEL_PATTERN = re.compile(r"\S+")


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class Column:
    """One entry of an entity's column mapping.

    The same mapping drives decoding (``label``, ``parse``), CSV and
    Markdown output (``csv_name``, ``to_text``) and JSON output
    (``json_name``, ``to_json``). ``label`` is None for fields that are not
    read from the report.
    """

    field: str
    label: Optional[str]
    json_name: str
    csv_name: str
    parse: Callable[[str], Any] = str
    to_text: Callable[[Any], str] = str
    to_json: Callable[[Any], Any] = _identity
    type_name: str = "string"
    numeric: bool = False


def header_offsets(header: str) -> List[Tuple[str, int, Optional[int]]]:
    """Derive column boundaries from a header line.

    Args:
        header: Header line with whitespace separated labels

    Returns:
        List of (label, start, end) where end is None for the last column
    """
    matches = list(_LABEL_PATTERN.finditer(header))
    offsets = []
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else None
        offsets.append((match.group(0), match.start(), end))
    return offsets


class FixedWidthDecoder:
    """Decode a header-led, fixed-width text block into field dictionaries.

    Records whose fields are all blank are skipped. Blank text fields are left
    out of the record so the destination keeps its default; blank fields of
    any other type still go through their parser, which decides whether blank
    is valid.
    """

    def __init__(self, columns: Sequence[Column], ignore_empty_records: bool = True):
        self.columns = {col.label: col for col in columns if col.label is not None}
        self.ignore_empty_records = ignore_empty_records

    def decode(self, text: str) -> List[Dict[str, Any]]:
        """Decode a whole section.

        Raises:
            FieldDecodeError: On the first field that fails to convert
        """
        return list(self.iter_records(text))

    def iter_records(self, text: str) -> Iterator[Dict[str, Any]]:
        lines = text.splitlines()

        # Leading blank lines come from separators between report sections
        start = 0
        while start < len(lines) and not lines[start].strip():
            start += 1
        if start == len(lines):
            return

        offsets = header_offsets(lines[start])
        unknown = [label for label, _, _ in offsets if label not in self.columns]
        if unknown:
            logger.debug(f"Ignoring unmapped columns: {unknown}")

        for line_number, line in enumerate(lines[start + 1:], start=start + 2):
            raw = {label: line[begin:end].strip() for label, begin, end in offsets}

            if self.ignore_empty_records and not any(raw.values()):
                continue

            yield self._decode_record(raw, line_number)

    def _decode_record(self, raw: Dict[str, str], line_number: int) -> Dict[str, Any]:
        record = {}
        for label, value in raw.items():
            column = self.columns.get(label)
            if column is None or (not value and column.parse is str):
                continue

            try:
                record[column.field] = column.parse(value)
            except (CoercionError, ValueError) as e:
                raise FieldDecodeError(column.field, value, column.type_name, line_number, e)

        return record
