"""Data models for rladmin status information."""

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import TYPE_CHECKING, Dict, Optional, Tuple

from rladmin_info.field_formatter import FieldFormatter
from rladmin_info.formatters.json_formatter import JSONFormatter
from rladmin_info.rladmin.coercers import (
    IPAddress,
    MemoryInfo,
    ShardInfo,
    parse_address,
    parse_bool,
    parse_list,
    parse_memory,
    parse_memory_info,
    parse_shard_info,
    parse_uint16,
)
from rladmin_info.rladmin.table import Column

if TYPE_CHECKING:
    from rladmin_info.rladmin.info import ClusterInfo

MASTER_ROLE = "master"


@dataclass(frozen=True)
class Node:
    """A cluster node from the CLUSTER NODES section."""

    key: str = ""
    node_id: str = ""
    role: str = ""
    address: Optional[IPAddress] = None
    external_address: Optional[IPAddress] = None
    host_name: str = ""
    overbooking_depth: float = 0.0
    masters: int = 0
    replicas: int = 0
    shard_usage: ShardInfo = field(default_factory=ShardInfo)
    cores: int = 0
    redis_ram: MemoryInfo = field(default_factory=MemoryInfo)
    provisional_ram: MemoryInfo = field(default_factory=MemoryInfo)
    version: str = ""
    sha: str = ""
    rack_id: str = ""
    status: str = ""
    quorum: bool = False
    time_stamp: Optional[datetime] = None


@dataclass
class DBShards:
    """Master and replica shard counts of one database on one node."""

    masters: int = 0
    replicas: int = 0

    @property
    def total(self) -> int:
        return self.masters + self.replicas


@dataclass(frozen=True)
class Shard:
    """A database shard from the SHARDS section."""

    key: str = ""
    id: str = ""
    db_id: str = ""
    name: str = ""
    node: str = ""
    role: str = ""
    slots: str = ""
    used_memory: float = 0.0
    backup_progress: str = ""
    ram_frag: float = 0.0
    watchdog_status: str = ""
    status: str = ""
    time_stamp: Optional[datetime] = None

    @property
    def is_master(self) -> bool:
        return self.role == MASTER_ROLE


@dataclass(frozen=True)
class Endpoint:
    """A database endpoint from the ENDPOINTS section."""

    key: str = ""
    id: str = ""
    db_id: str = ""
    name: str = ""
    node: str = ""
    role: str = ""
    ssl: bool = False
    watchdog_status: str = ""
    time_stamp: Optional[datetime] = None


@dataclass(frozen=True)
class Database:
    """A database from the DATABASES section.

    Shard and node queries take the owning ``ClusterInfo`` explicitly.
    """

    key: str = ""
    id: str = ""
    name: str = ""
    type: str = ""
    status: str = ""
    master_shards: int = 0
    placement: str = ""
    replication: str = ""
    persistence: str = ""
    endpoints: Tuple[str, ...] = ()
    exec_state: str = ""
    exec_state_machine: str = ""
    backup_progress: str = ""
    missing_backup_time: str = ""
    redis_version: str = ""
    time_stamp: Optional[datetime] = None

    def on_node(self, info: "ClusterInfo", node_id: str) -> DBShards:
        """Return the number of shards this database has on the given node."""
        shards = DBShards()
        for shard in info.shards.for_db(self.id):
            if shard.node == node_id:
                if shard.is_master:
                    shards.masters += 1
                else:
                    shards.replicas += 1
        return shards

    def node_tally(self, info: "ClusterInfo") -> Dict[str, DBShards]:
        """Count this database's master and replica shards on every node.

        Every node of the snapshot gets an entry, in node order. Shards that
        reference a node missing from the node list get an entry too.
        """
        nodes = {node.node_id: DBShards() for node in info.nodes}

        for shard in info.shards:
            if shard.db_id != self.id:
                continue
            counts = nodes.setdefault(shard.node, DBShards())
            if shard.is_master:
                counts.masters += 1
            else:
                counts.replicas += 1

        return nodes

    def shard_count(self, info: "ClusterInfo") -> int:
        """Return the total number of shards by counting them."""
        return sum(counts.total for counts in self.node_tally(info).values())

    def with_nodes(self, info: "ClusterInfo") -> "DatabaseWithNodes":
        """Return a copy of this database annotated with its node tally."""
        values = {f.name: getattr(self, f.name) for f in fields(Database)}
        return DatabaseWithNodes(nodes=self.node_tally(info), **values)

    def to_json(self, indent: Optional[int] = None) -> str:
        """Return the database marshalled to JSON."""
        formatter = JSONFormatter(indent)
        return formatter.dumps(formatter.to_dict(self, DATABASE_COLUMNS))


@dataclass(frozen=True)
class DatabaseWithNodes(Database):
    """A database plus its per-node shard tally. Derived, never parsed."""

    nodes: Dict[str, DBShards] = field(default_factory=dict)

    def to_json(self, indent: Optional[int] = None) -> str:
        formatter = JSONFormatter(indent)
        return formatter.dumps(formatter.to_dict(self, DATABASE_WITH_NODES_COLUMNS))


def _key_column() -> Column:
    return Column("key", None, "key", "key")


def _timestamp_column() -> Column:
    return Column(
        "time_stamp", None, "timeStamp", "timeStamp",
        to_text=FieldFormatter.format_timestamp_text,
        to_json=FieldFormatter.format_timestamp,
        type_name="timestamp",
    )


def _uint16_column(name: str, label: str, json_name: str, csv_name: Optional[str] = None) -> Column:
    return Column(
        name, label, json_name, csv_name or json_name,
        parse=parse_uint16, type_name="uint16", numeric=True,
    )


def _memory_column(name: str, label: str, json_name: str) -> Column:
    return Column(
        name, label, json_name, json_name,
        parse=parse_memory,
        to_text=FieldFormatter.format_memory,
        to_json=FieldFormatter.format_memory,
        type_name="memory size (GiB)",
        numeric=True,
    )


def _memory_info_column(name: str, label: str, json_name: str) -> Column:
    return Column(
        name, label, json_name, json_name,
        parse=parse_memory_info,
        to_text=FieldFormatter.format_memory_info,
        to_json=FieldFormatter.format_memory_info_json,
        type_name="memory info",
    )


def _address_column(name: str, label: str, json_name: str) -> Column:
    return Column(
        name, label, json_name, json_name,
        parse=parse_address,
        to_text=FieldFormatter.format_address,
        to_json=FieldFormatter.format_address_json,
        type_name="IP address",
    )


NODE_COLUMNS: Tuple[Column, ...] = (
    _key_column(),
    Column("node_id", "NODE:ID", "nodeId", "nodeId"),
    Column("role", "ROLE", "role", "role"),
    _address_column("address", "ADDRESS", "address"),
    _address_column("external_address", "EXTERNAL_ADDRESS", "externalAddress"),
    Column("host_name", "HOSTNAME", "hostName", "hostName"),
    _memory_column("overbooking_depth", "OVERBOOKING_DEPTH", "overbookingDepth"),
    _uint16_column("masters", "MASTERS", "masters"),
    _uint16_column("replicas", "SLAVES", "replicas"),
    Column(
        "shard_usage", "SHARDS", "shards", "shards",
        parse=parse_shard_info,
        to_text=FieldFormatter.format_shard_info,
        to_json=FieldFormatter.format_shard_info_json,
        type_name="shard counts",
    ),
    _uint16_column("cores", "CORES", "cores"),
    _memory_info_column("redis_ram", "FREE_RAM", "redisRAM"),
    _memory_info_column("provisional_ram", "PROVISIONAL_RAM", "provisionalRAM"),
    Column("version", "VERSION", "version", "version"),
    Column("sha", "SHA", "sha", "sha"),
    Column("rack_id", "RACK-ID", "rackId", "rackId"),
    Column("status", "STATUS", "status", "status"),
    Column("quorum", None, "quorum", "quorum", to_text=FieldFormatter.format_bool, type_name="bool"),
    _timestamp_column(),
)

DATABASE_COLUMNS: Tuple[Column, ...] = (
    _key_column(),
    Column("id", "DB:ID", "id", "id"),
    Column("name", "NAME", "name", "name"),
    Column("type", "TYPE", "type", "type"),
    Column("status", "STATUS", "status", "status"),
    _uint16_column("master_shards", "SHARDS", "shards"),
    Column("placement", "PLACEMENT", "placement", "placement"),
    Column("replication", "REPLICATION", "replication", "replication"),
    Column("persistence", "PERSISTENCE", "persistence", "persistence"),
    Column(
        "endpoints", "ENDPOINT", "endpoints", "endpoints",
        parse=parse_list,
        to_text=FieldFormatter.format_list,
        to_json=list,
        type_name="endpoint list",
    ),
    Column("exec_state", "EXEC_STATE", "execState", "execState"),
    Column("exec_state_machine", "EXEC_STATE_MACHINE", "execStateMachine", "execStateMachine"),
    Column("backup_progress", "BACKUP_PROGRESS", "backupProgress", "backupProgress"),
    Column("missing_backup_time", "MISSING_BACKUP_TIME", "missingBackupTime", "missingBackupTime"),
    Column("redis_version", "REDIS_VERSION", "redisVersion", "redisVersion"),
    _timestamp_column(),
)

DATABASE_WITH_NODES_COLUMNS: Tuple[Column, ...] = DATABASE_COLUMNS + (
    Column(
        "nodes", None, "nodes", "nodes",
        to_text=FieldFormatter.format_node_tally,
        to_json=FieldFormatter.format_node_tally_json,
        type_name="node tally",
    ),
)

SHARD_COLUMNS: Tuple[Column, ...] = (
    _key_column(),
    Column("id", "ID", "id", "shardid"),
    Column("db_id", "DB:ID", "dbId", "dbid"),
    Column("name", "NAME", "name", "name"),
    Column("node", "NODE", "node", "node"),
    Column("role", "ROLE", "role", "role"),
    Column("slots", "SLOTS", "slots", "slots"),
    _memory_column("used_memory", "USED_MEMORY", "usedMemory"),
    Column("backup_progress", "BACKUP_PROGRESS", "backupProgress", "backupProgress"),
    _memory_column("ram_frag", "RAM_FRAG", "ramFrag"),
    Column("watchdog_status", "WATCHDOG_STATUS", "watchdogStatus", "watchdogStatus"),
    Column("status", "STATUS", "status", "status"),
    _timestamp_column(),
)

ENDPOINT_COLUMNS: Tuple[Column, ...] = (
    _key_column(),
    Column("id", "ID", "id", "endpointId"),
    Column("db_id", "DB:ID", "dbId", "dbid"),
    Column("name", "NAME", "name", "name"),
    Column("node", "NODE", "node", "node"),
    Column("role", "ROLE", "role", "endpointRole"),
    Column(
        "ssl", "SSL", "ssl", "ssl",
        parse=parse_bool,
        to_text=FieldFormatter.format_bool,
        type_name="bool",
    ),
    Column("watchdog_status", "WATCHDOG_STATUS", "watchdogStatus", "watchDogStatus"),
    _timestamp_column(),
)
