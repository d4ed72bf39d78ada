"""Unit tests for the per-section parsers."""

import ipaddress
from datetime import datetime, timezone

import pytest

from rladmin_info.rladmin.chunks import Chunks
from rladmin_info.rladmin.exceptions import FieldDecodeError
from rladmin_info.rladmin.parsers import (
    parse_databases,
    parse_endpoints,
    parse_nodes,
    parse_shards,
)

TS = datetime(2024, 3, 14, 10, 22, 33, 123456, tzinfo=timezone.utc)


@pytest.fixture
def chunks(report_stream):
    return Chunks().parse(report_stream)


class TestParseNodes:
    """Tests for parse_nodes."""

    def test_count_and_order(self, chunks):
        nodes = parse_nodes(chunks.nodes, "cluster-a", TS)

        assert len(nodes) == 13
        assert [n.node_id for n in nodes[:3]] == ["node:1", "node:2", "node:3"]

    def test_current_node_marker_stripped(self, chunks):
        """Test the '*' marking the node rladmin ran on is removed."""
        nodes = parse_nodes(chunks.nodes)
        assert nodes[0].node_id == "node:1"
        assert not any(n.node_id.startswith("*") for n in nodes)

    def test_first_node_values(self, chunks):
        node = parse_nodes(chunks.nodes, "cluster-a", TS)[0]

        assert node.key == "cluster-a"
        assert node.time_stamp == TS
        assert node.role == "master"
        assert node.address == ipaddress.ip_address("10.0.0.1")
        assert node.external_address is None
        assert node.masters + node.replicas == node.shard_usage.in_use
        assert node.shard_usage.in_use == 94
        assert 53.23 <= node.redis_ram.free <= 53.24
        assert node.cores == 16
        assert node.quorum is False

    def test_external_address(self, chunks):
        node = parse_nodes(chunks.nodes)[1]
        assert node.external_address == ipaddress.ip_address("34.120.1.2")

    def test_quorum_node(self, chunks):
        """Test a node with no shard capacity is quorum-only."""
        node = parse_nodes(chunks.nodes)[-1]
        assert node.shard_usage.max == 0
        assert node.quorum is True
        assert node.overbooking_depth == pytest.approx(-1.2 / 1024, rel=1e-6)

    def test_shard_usage_pair(self, table, node_headers, node_table_rows):
        node_table_rows[0][8] = "45/94"
        node = parse_nodes(table(node_headers, node_table_rows))[0]
        assert node.quorum is False
        assert node.shard_usage.in_use == 45
        assert node.shard_usage.max == 94

    def test_malformed_shard_usage_fails(self, table, node_headers, node_table_rows):
        """Test a malformed ratio aborts the whole section."""
        node_table_rows[4][8] = "45"

        with pytest.raises(FieldDecodeError) as exc_info:
            parse_nodes(table(node_headers, node_table_rows))

        assert exc_info.value.field == "shard_usage"
        assert exc_info.value.value == "45"

    @pytest.mark.parametrize("index,field", [
        (8, "shard_usage"),
        (10, "redis_ram"),
        (11, "provisional_ram"),
        (6, "masters"),
    ])
    def test_blank_compound_field_fails(self, table, node_headers, node_table_rows, index, field):
        """Test a blank typed cell is a decode error, not a zero value."""
        node_table_rows[2][index] = ""

        with pytest.raises(FieldDecodeError) as exc_info:
            parse_nodes(table(node_headers, node_table_rows))

        assert exc_info.value.field == field
        assert exc_info.value.value == ""

    def test_bad_address_fails(self, table, node_headers, node_table_rows):
        node_table_rows[2][2] = "10.0.0.999"

        with pytest.raises(FieldDecodeError) as exc_info:
            parse_nodes(table(node_headers, node_table_rows))

        assert exc_info.value.field == "address"
        assert exc_info.value.type_name == "IP address"

    def test_empty_section(self):
        assert len(parse_nodes("")) == 0


class TestParseDatabases:
    """Tests for parse_databases."""

    def test_count(self, chunks):
        assert len(parse_databases(chunks.databases)) == 143

    def test_first_database(self, chunks):
        db = parse_databases(chunks.databases, "cluster-a", TS)[0]

        assert db.id == "db:10567021"
        assert db.key == "cluster-a"
        assert db.time_stamp == TS
        assert db.master_shards == 3
        assert db.endpoints == (
            "redis-17798.c99999.us-central1-mz.gcp.cloud.rlrcp.com:17798",
            "redis-17798.c99999.us-central1-mz.gcp.redns.redis-cloud.com:17798",
            "redis-17798.internal.c99999.us-central1-mz.gcp.cloud.rlrcp.com:17798",
        )
        assert db.redis_version == "7.2.4"


class TestParseShards:
    """Tests for parse_shards."""

    def test_count_and_first(self, chunks):
        shards = parse_shards(chunks.shards)
        assert len(shards) == 574
        assert shards[0].name == "sudan-02"

    def test_values(self, chunks):
        shard = parse_shards(chunks.shards, "cluster-a", TS)[0]
        assert shard.id == "redis:1"
        assert shard.role == "master"
        assert shard.is_master
        assert shard.used_memory == pytest.approx(2.36 / 1024, rel=1e-4)
        assert shard.ram_frag == pytest.approx(340.5 / 1024 / 1024, rel=1e-4)
        assert shard.time_stamp == TS


class TestParseEndpoints:
    """Tests for parse_endpoints."""

    def test_count_and_second(self, chunks):
        endpoints = parse_endpoints(chunks.endpoints, "cluster-a", TS)

        assert len(endpoints) == 144
        assert endpoints[1].name == "cambodia-00"
        assert endpoints[1].role == "single"
        assert endpoints[1].ssl is True
        assert endpoints[0].ssl is False

    def test_stamped_with_key(self, chunks):
        endpoint = parse_endpoints(chunks.endpoints, "cluster-a", TS)[0]
        assert endpoint.key == "cluster-a"
        assert endpoint.time_stamp == TS
