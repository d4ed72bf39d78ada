"""ClusterInfo: one immutable snapshot of an rladmin status report."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, Optional

from rladmin_info.field_formatter import FieldFormatter
from rladmin_info.formatters.json_formatter import JSONFormatter
from rladmin_info.rladmin.chunks import Chunks
from rladmin_info.rladmin.collections import (
    Databases,
    DatabasesWithNodes,
    Endpoints,
    Nodes,
    Shards,
)
from rladmin_info.rladmin.exceptions import RLAdminBaseError
from rladmin_info.rladmin.models import DBShards, Database
from rladmin_info.rladmin.parsers import (
    parse_databases,
    parse_endpoints,
    parse_nodes,
    parse_shards,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClusterInfo:
    """All the data loaded from one ``rladmin status`` output.

    Built once by ``parse`` and read-only afterwards; derived views are
    computed on demand.
    """

    key: str = ""
    time_stamp: Optional[datetime] = None
    nodes: Nodes = field(default_factory=Nodes)
    databases: Databases = field(default_factory=Databases)
    shards: Shards = field(default_factory=Shards)
    endpoints: Endpoints = field(default_factory=Endpoints)

    @classmethod
    def parse(cls, key: str, lines: Iterable[str]) -> "ClusterInfo":
        """Parse a report into a snapshot.

        Args:
            key: Identifier stamped on the snapshot and every record
            lines: Text stream of the report

        Returns:
            ClusterInfo snapshot

        Raises:
            FieldDecodeError: If any field of any section fails to decode
            OSError: If reading the stream fails

        A missing or malformed timestamp is not fatal; ``time_stamp`` is
        left as None.
        """
        chunks = Chunks().parse(lines)
        logger.debug(f"Section sizes: {chunks.sizes()}")

        time_stamp = None
        try:
            time_stamp = chunks.extract_timestamp()
        except (RLAdminBaseError, ValueError) as e:
            logger.warning(f"無法取得報告時間戳記，將保留空值：{e}")

        endpoints = parse_endpoints(chunks.endpoints, key, time_stamp)
        databases = parse_databases(chunks.databases, key, time_stamp)
        shards = parse_shards(chunks.shards, key, time_stamp)
        nodes = parse_nodes(chunks.nodes, key, time_stamp)

        logger.info(
            f"解析完成：{len(nodes)} nodes, {len(databases)} databases, "
            f"{len(shards)} shards, {len(endpoints)} endpoints"
        )

        return cls(
            key=key,
            time_stamp=time_stamp,
            nodes=nodes,
            databases=databases,
            shards=shards,
            endpoints=endpoints,
        )

    def database(self, db_id: str) -> Database:
        """Return the database with the given id.

        Raises:
            KeyError: If the snapshot has no such database
        """
        database = self.databases.get(db_id)
        if database is None:
            raise KeyError(db_id)
        return database

    def shards_for_db(self, db_id: str) -> Shards:
        return self.shards.for_db(db_id)

    def node_tally(self, db_id: str) -> Dict[str, DBShards]:
        return self.database(db_id).node_tally(self)

    def shard_count(self, db_id: str) -> int:
        return self.database(db_id).shard_count(self)

    def on_node(self, db_id: str, node_id: str) -> DBShards:
        return self.database(db_id).on_node(self, node_id)

    def databases_with_nodes(self) -> DatabasesWithNodes:
        return self.databases.with_nodes(self)

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize the whole snapshot to JSON."""
        formatter = JSONFormatter(indent)
        return formatter.dumps({
            "key": self.key,
            "databases": formatter.to_list(self.databases, self.databases.columns),
            "endpoints": formatter.to_list(self.endpoints, self.endpoints.columns),
            "shards": formatter.to_list(self.shards, self.shards.columns),
            "nodes": formatter.to_list(self.nodes, self.nodes.columns),
            "timeStamp": FieldFormatter.format_timestamp(self.time_stamp),
        })

    def to_csv(self, skip_headers: bool = False) -> Dict[str, str]:
        """Serialize every section to CSV.

        Returns:
            Mapping of section name to CSV text
        """
        return {
            "databases": self.databases.to_csv(skip_headers),
            "endpoints": self.endpoints.to_csv(skip_headers),
            "nodes": self.nodes.to_csv(skip_headers),
            "shards": self.shards.to_csv(skip_headers),
        }
