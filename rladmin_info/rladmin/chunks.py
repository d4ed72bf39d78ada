"""Split raw ``rladmin status`` output into labelled sections."""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, List, Optional

from rladmin_info.rladmin.exceptions import TimestampNotFoundError

logger = logging.getLogger(__name__)

MARKER_PATTERN = re.compile(r"^([A-Z ]+):$")

# Layout of the timestamp line at the top of the report
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f%z"


class Section(Enum):
    """Report sections the splitter tracks."""

    NONE = "NONE"
    CLUSTER = "CLUSTER"
    NODES = "CLUSTER NODES"
    DATABASES = "DATABASES"
    ENDPOINTS = "ENDPOINTS"
    SHARDS = "SHARDS"


SECTION_MARKERS = {
    "CLUSTER": Section.CLUSTER,
    "CLUSTER NODES": Section.NODES,
    "DATABASES": Section.DATABASES,
    "ENDPOINTS": Section.ENDPOINTS,
    "SHARDS": Section.SHARDS,
}


def which_section(line: str) -> Optional[Section]:
    """Return the section a marker line opens, or None for ordinary lines.

    Marker-shaped lines with an unknown label open ``Section.CLUSTER``,
    whose body is discarded.
    """
    match = MARKER_PATTERN.match(line)
    if not match:
        return None
    return SECTION_MARKERS.get(match.group(1), Section.CLUSTER)


@dataclass
class Chunks:
    """Output of the base parser: the intro text and one body per section."""

    intro: str = ""
    nodes: str = ""
    databases: str = ""
    endpoints: str = ""
    shards: str = ""

    def parse(self, lines: Iterable[str]) -> "Chunks":
        """Scan the report line by line and buffer each section.

        Args:
            lines: Text stream or any iterable of lines

        Returns:
            self, for chaining

        Read errors raised by the stream propagate unchanged.
        """
        current: List[str] = []
        where = Section.NONE

        for raw_line in lines:
            line = raw_line.rstrip("\r\n")
            section = which_section(line)
            if section is not None:
                self._put_data("".join(current), where)
                logger.debug(f"Section marker '{line}' -> {section.name}")
                where = section
                current = []
            else:
                current.append(line + "\n")

        self._put_data("".join(current), where)
        return self

    def _put_data(self, data: str, section: Section) -> None:
        # Intro text accumulates; named sections keep the last non-empty body
        if not data:
            return

        if section is Section.NONE:
            self.intro = self.intro + "\n" + data
        elif section is Section.NODES:
            self.nodes = data
        elif section is Section.DATABASES:
            self.databases = data
        elif section is Section.ENDPOINTS:
            self.endpoints = data
        elif section is Section.SHARDS:
            self.shards = data

    def sizes(self) -> Dict[str, int]:
        """Length of each buffered section, for logging."""
        return {
            "intro": len(self.intro),
            "nodes": len(self.nodes),
            "databases": len(self.databases),
            "endpoints": len(self.endpoints),
            "shards": len(self.shards),
        }

    def extract_timestamp(self) -> datetime:
        """Find the timestamp at the start of the output.

        Returns:
            Timezone-aware report generation time

        Raises:
            TimestampNotFoundError: If the intro has fewer than two lines
            ValueError: If the timestamp line does not match the layout
        """
        lines = self.intro.split("\n")
        if len(lines) < 2:
            raise TimestampNotFoundError()
        return datetime.strptime(lines[1].strip(), TIMESTAMP_FORMAT)
