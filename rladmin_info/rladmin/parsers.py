"""Per-section parsers turning buffered report text into typed collections."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from rladmin_info.rladmin.coercers import ShardInfo
from rladmin_info.rladmin.collections import Databases, Endpoints, Nodes, Shards
from rladmin_info.rladmin.models import (
    DATABASE_COLUMNS,
    ENDPOINT_COLUMNS,
    NODE_COLUMNS,
    SHARD_COLUMNS,
    Database,
    Endpoint,
    Node,
    Shard,
)
from rladmin_info.rladmin.table import Column, FixedWidthDecoder

logger = logging.getLogger(__name__)

# rladmin prefixes the node it ran on with "*"
CURRENT_NODE_PREFIX = "*"


def _decode(text: str, columns: Sequence[Column], section: str) -> List[Dict[str, Any]]:
    if not text:
        logger.debug(f"Section {section} is empty")
        return []

    records = FixedWidthDecoder(columns).decode(text)
    logger.debug(f"Decoded {len(records)} {section} records")
    return records


def parse_nodes(text: str, key: str = "", time_stamp: Optional[datetime] = None) -> Nodes:
    """Parse the CLUSTER NODES section.

    Strips the current-node marker from node ids and flags nodes with no
    shard capacity as quorum-only.
    """
    nodes = []
    for values in _decode(text, NODE_COLUMNS, "nodes"):
        node_id = values.get("node_id", "")
        if node_id.startswith(CURRENT_NODE_PREFIX):
            values["node_id"] = node_id[len(CURRENT_NODE_PREFIX):]

        shard_usage = values.get("shard_usage", ShardInfo())
        nodes.append(Node(key=key, time_stamp=time_stamp, quorum=shard_usage.max == 0, **values))

    return Nodes(nodes)


def parse_databases(text: str, key: str = "", time_stamp: Optional[datetime] = None) -> Databases:
    """Parse the DATABASES section."""
    return Databases(
        Database(key=key, time_stamp=time_stamp, **values)
        for values in _decode(text, DATABASE_COLUMNS, "databases")
    )


def parse_shards(text: str, key: str = "", time_stamp: Optional[datetime] = None) -> Shards:
    """Parse the SHARDS section."""
    return Shards(
        Shard(key=key, time_stamp=time_stamp, **values)
        for values in _decode(text, SHARD_COLUMNS, "shards")
    )


def parse_endpoints(text: str, key: str = "", time_stamp: Optional[datetime] = None) -> Endpoints:
    """Parse the ENDPOINTS section."""
    return Endpoints(
        Endpoint(key=key, time_stamp=time_stamp, **values)
        for values in _decode(text, ENDPOINT_COLUMNS, "endpoints")
    )
