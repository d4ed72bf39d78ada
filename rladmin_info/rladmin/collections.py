"""Typed record collections and the shared serialization interface."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Optional, Tuple

from rladmin_info.formatters.csv_formatter import CSVFormatter
from rladmin_info.formatters.json_formatter import JSONFormatter
from rladmin_info.formatters.markdown_formatter import MarkdownFormatter
from rladmin_info.rladmin.models import (
    DATABASE_COLUMNS,
    DATABASE_WITH_NODES_COLUMNS,
    ENDPOINT_COLUMNS,
    NODE_COLUMNS,
    SHARD_COLUMNS,
)
from rladmin_info.rladmin.table import Column

if TYPE_CHECKING:
    from rladmin_info.rladmin.info import ClusterInfo


class Serializer(ABC):
    """Anything that can be written out as JSON and CSV."""

    @abstractmethod
    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize to JSON."""
        pass

    @abstractmethod
    def to_csv(self, skip_headers: bool = False) -> str:
        """Serialize to CSV, optionally without the header row."""
        pass


class Records(Serializer, tuple):
    """Immutable, ordered collection of one record type."""

    columns: ClassVar[Tuple[Column, ...]] = ()

    def to_json(self, indent: Optional[int] = None) -> str:
        return JSONFormatter(indent).format(self, self.columns)

    def to_csv(self, skip_headers: bool = False) -> str:
        return CSVFormatter().format(self, self.columns, skip_headers)

    def to_markdown(self, skip_headers: bool = False) -> str:
        return MarkdownFormatter().format(self, self.columns, skip_headers)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} records)"


class Nodes(Records):
    columns = NODE_COLUMNS


class Endpoints(Records):
    columns = ENDPOINT_COLUMNS

    def for_db(self, db_id: str) -> "Endpoints":
        """Return the endpoints of one database, in report order."""
        return Endpoints(endpoint for endpoint in self if endpoint.db_id == db_id)


class Shards(Records):
    columns = SHARD_COLUMNS

    def for_db(self, db_id: str) -> "Shards":
        """Return all the shards for a given database, sorted by id.

        The sort is stable, so shards with equal ids keep report order.
        """
        shards = [shard for shard in self if shard.db_id == db_id]
        return Shards(sorted(shards, key=lambda shard: shard.id))


class DatabasesWithNodes(Records):
    columns = DATABASE_WITH_NODES_COLUMNS


class Databases(Records):
    columns = DATABASE_COLUMNS

    def get(self, db_id: str):
        """Return the database with the given id, or None."""
        for database in self:
            if database.id == db_id:
                return database
        return None

    def with_nodes(self, info: "ClusterInfo") -> DatabasesWithNodes:
        """Annotate every database with its node tally, in report order."""
        return DatabasesWithNodes(database.with_nodes(info) for database in self)
