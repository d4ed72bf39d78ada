"""Shared fixtures: synthetic rladmin status reports."""

import io
from typing import List, Sequence

import pytest

TIMESTAMP_LINE = "2024-03-14 10:22:33.123456+00:00"

COUNTRIES = [
    "albania", "cambodia", "chile", "denmark", "egypt", "finland", "ghana",
    "iceland", "japan", "kenya", "laos", "mexico", "nepal", "oman", "peru",
    "qatar", "sudan", "togo", "uganda", "yemen",
]

NODE_HEADERS = [
    "NODE:ID", "ROLE", "ADDRESS", "EXTERNAL_ADDRESS", "HOSTNAME",
    "OVERBOOKING_DEPTH", "MASTERS", "SLAVES", "SHARDS", "CORES", "FREE_RAM",
    "PROVISIONAL_RAM", "VERSION", "SHA", "RACK-ID", "STATUS",
]

DATABASE_HEADERS = [
    "DB:ID", "NAME", "TYPE", "STATUS", "SHARDS", "PLACEMENT", "REPLICATION",
    "PERSISTENCE", "ENDPOINT", "EXEC_STATE", "EXEC_STATE_MACHINE",
    "BACKUP_PROGRESS", "MISSING_BACKUP_TIME", "REDIS_VERSION",
]

ENDPOINT_HEADERS = ["DB:ID", "NAME", "ID", "NODE", "ROLE", "SSL", "WATCHDOG_STATUS"]

SHARD_HEADERS = [
    "DB:ID", "NAME", "ID", "NODE", "ROLE", "SLOTS", "USED_MEMORY",
    "BACKUP_PROGRESS", "RAM_FRAG", "WATCHDOG_STATUS", "STATUS",
]

FIRST_DB_ENDPOINTS = [
    "redis-17798.c99999.us-central1-mz.gcp.cloud.rlrcp.com:17798",
    "redis-17798.c99999.us-central1-mz.gcp.redns.redis-cloud.com:17798",
    "redis-17798.internal.c99999.us-central1-mz.gcp.cloud.rlrcp.com:17798",
]

NODE_COUNT = 13
DATABASE_COUNT = 143
DATA_NODES = 12


def render_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Render rows as an rladmin-style table, each column as wide as its widest cell."""
    widths = [
        max([len(header)] + [len(row[i]) for row in rows]) + 2
        for i, header in enumerate(headers)
    ]
    lines = ["".join(header.ljust(width) for header, width in zip(headers, widths)).rstrip()]
    for row in rows:
        lines.append("".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())
    return "\n".join(lines) + "\n"


def db_id(index: int) -> str:
    return f"db:{10567021 + index}"


def db_name(index: int) -> str:
    return f"{COUNTRIES[index % len(COUNTRIES)]}-{index // len(COUNTRIES):02d}"


def node_rows() -> List[List[str]]:
    rows = []
    for i in range(1, NODE_COUNT + 1):
        node_id = "*node:1" if i == 1 else f"node:{i}"
        quorum = i == NODE_COUNT
        if i == 1:
            masters, replicas, shards = "50", "44", "94/200"
        elif quorum:
            masters, replicas, shards = "0", "0", "0/0"
        else:
            masters, replicas, shards = "24", "24", "48/200"
        rows.append([
            node_id,
            "master" if i == 1 else "slave",
            f"10.0.0.{i}",
            "34.120.1.2" if i == 2 else "",
            f"redis-node-{i}.internal",
            "-1.2MB" if quorum else "41.71GB",
            masters,
            replicas,
            shards,
            "4" if quorum else "16",
            "53.24GB/180.5GB" if i == 1 else "60.1GB/180.5GB",
            "40.5GB/150GB",
            "7.4.2-54",
            "a1b2c3d",
            f"zone-{'abc'[i % 3]}",
            "OK",
        ])
    return rows


def database_rows() -> List[List[str]]:
    rows = []
    for i in range(DATABASE_COUNT):
        endpoint = "/".join(FIRST_DB_ENDPOINTS) if i == 0 else f"redis-{10000 + i}.example.com:{10000 + i}"
        rows.append([
            db_id(i), db_name(i), "redis", "active", "3" if i == 0 else "2", "sparse",
            "enabled", "aof", endpoint, "N/A", "N/A", "N/A", "N/A", "7.2.4",
        ])
    return rows


def endpoint_rows() -> List[List[str]]:
    rows = []
    for i in range(DATABASE_COUNT):
        rows.append([
            db_id(i), db_name(i), f"endpoint:{10567021 + i}:1", f"node:{i % DATA_NODES + 1}",
            "single", "Yes" if i % 2 else "No", "OK",
        ])
    rows.append([
        db_id(0), db_name(0), f"endpoint:10567021:2", "node:2",
        "all-nodes", "No", "OK",
    ])
    return rows


def shard_rows() -> List[List[str]]:
    first = COUNTRIES.index("sudan") + 2 * len(COUNTRIES)
    order = list(range(first, DATABASE_COUNT)) + list(range(0, first))

    rows = []
    counter = 1
    for index in order:
        pairs = 3 if index == 0 else 2
        for pair in range(pairs):
            slots = f"{pair * 100}-{pair * 100 + 99}"
            for role in ("master", "slave"):
                node = (counter % DATA_NODES) + 1
                rows.append([
                    db_id(index), db_name(index), f"redis:{counter}", f"node:{node}",
                    role, slots, "2.36MB", "N/A", "340.5KB", "OK", "OK",
                ])
                counter += 1
    return rows


def build_report(**sections: str) -> str:
    """Assemble a report; keyword arguments override a section body."""
    parts = [
        TIMESTAMP_LINE + "\n",
        "CLUSTER:\n",
        "OK. Cluster master: 1 (10.0.0.1)\n",
        "Cluster health: OK, [1, 0.0, 0.0]\n",
        "\n",
        "CLUSTER NODES:\n",
        sections.get("nodes", render_table(NODE_HEADERS, node_rows())),
        "\n",
        "DATABASES:\n",
        sections.get("databases", render_table(DATABASE_HEADERS, database_rows())),
        "\n",
        "ENDPOINTS:\n",
        sections.get("endpoints", render_table(ENDPOINT_HEADERS, endpoint_rows())),
        "\n",
        "SHARDS:\n",
        sections.get("shards", render_table(SHARD_HEADERS, shard_rows())),
    ]
    return "".join(parts)


@pytest.fixture
def table():
    """Table rendering helper."""
    return render_table


@pytest.fixture(scope="session")
def report_text():
    """Full synthetic report: 13 nodes, 143 databases, 574 shards, 144 endpoints."""
    return build_report()


@pytest.fixture
def report_stream(report_text):
    return io.StringIO(report_text)


@pytest.fixture
def report_file(tmp_path, report_text):
    path = tmp_path / "cluster-a.rladmin"
    path.write_text(report_text, encoding="utf-8")
    return path


@pytest.fixture
def report_builder():
    return build_report


@pytest.fixture
def node_headers():
    return NODE_HEADERS


@pytest.fixture
def node_table_rows():
    return node_rows()
