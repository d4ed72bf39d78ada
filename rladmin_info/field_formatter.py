"""Field formatters for compound rladmin values."""

from datetime import datetime
from typing import Any, Dict, Iterable, Optional


class FieldFormatter:
    """Formatter for compound rladmin fields.

    Renders memory sizes, slash-joined pairs and lists, addresses, flags and
    timestamps the same way in every output format.
    """

    @staticmethod
    def format_memory(value: float) -> str:
        """Format a memory size in GiB.

        Args:
            value: Memory size in GiB

        Returns:
            Fixed 5-decimal text, e.g. "53.24000"
        """
        return f"{value:0.5f}"

    @staticmethod
    def format_memory_info(info: Any) -> str:
        """Format a memory pair as "{free}/{max}"."""
        return f"{FieldFormatter.format_memory(info.free)}/{FieldFormatter.format_memory(info.max)}"

    @staticmethod
    def format_shard_info(info: Any) -> str:
        """Format a shard count pair as "{in_use}/{max}"."""
        return f"{info.in_use}/{info.max}"

    @staticmethod
    def format_address(address: Optional[Any]) -> str:
        """Format an IP address.

        Returns:
            The address literal, or an empty string if there is none
        """
        if address is None:
            return ""
        return str(address)

    @staticmethod
    def format_address_json(address: Optional[Any]) -> Optional[str]:
        """Format an IP address for JSON (None stays null)."""
        if address is None:
            return None
        return str(address)

    @staticmethod
    def format_list(values: Iterable[str]) -> str:
        """Join a list with "/"."""
        return "/".join(values)

    @staticmethod
    def format_bool(value: bool) -> str:
        """Format a flag as "true" or "false"."""
        return "true" if value else "false"

    @staticmethod
    def format_timestamp(value: Optional[datetime]) -> Optional[str]:
        """Format a timestamp as ISO-8601.

        Returns:
            ISO-8601 text, or None when the report had no timestamp
        """
        if value is None:
            return None
        return value.isoformat()

    @staticmethod
    def format_timestamp_text(value: Optional[datetime]) -> str:
        """Format a timestamp for a table cell (empty when absent)."""
        return FieldFormatter.format_timestamp(value) or ""

    @staticmethod
    def format_memory_info_json(info: Any) -> Dict[str, str]:
        """Format a memory pair as a JSON object."""
        return {
            "free": FieldFormatter.format_memory(info.free),
            "max": FieldFormatter.format_memory(info.max),
        }

    @staticmethod
    def format_shard_info_json(info: Any) -> Dict[str, int]:
        """Format a shard count pair as a JSON object."""
        return {"shardsInUse": info.in_use, "maxShards": info.max}

    @staticmethod
    def format_node_tally_json(tally: Dict[str, Any]) -> Dict[str, Dict[str, int]]:
        """Format per-node shard tallies as a JSON object."""
        return {
            node_id: {"masters": shards.masters, "replicas": shards.replicas}
            for node_id, shards in tally.items()
        }

    @staticmethod
    def format_node_tally(tally: Dict[str, Any]) -> str:
        """Format the nodes holding at least one shard as "/"-joined ids."""
        return "/".join(
            node_id for node_id, shards in tally.items()
            if shards.masters + shards.replicas > 0
        )
