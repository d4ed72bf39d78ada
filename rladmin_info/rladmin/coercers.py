"""Scalar coercers for compound rladmin status tokens.

rladmin packs several values into single whitespace-free tokens: memory sizes
with a unit suffix (``53.24GB``), ``free/max`` memory pairs, ``inUse/max``
shard counts and slash-delimited endpoint lists. Each function here turns one
such token into a typed value or raises ``CoercionError``.
"""

import ipaddress
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from rladmin_info.rladmin.exceptions import CoercionError

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

# Binary multipliers, matching how rladmin reports sizes
KIB = 1024
MIB = KIB * 1024
GIB = MIB * 1024

UNIT_MULTIPLIERS = {
    "": 1,
    "B": 1,
    "BYTE": 1,
    "BYTES": 1,
    "KB": KIB,
    "KIB": KIB,
    "KILOBYTE": KIB,
    "KILOBYTES": KIB,
    "MB": MIB,
    "MIB": MIB,
    "MEGABYTE": MIB,
    "MEGABYTES": MIB,
    "GB": GIB,
    "GIB": GIB,
    "GIGABYTE": GIB,
    "GIGABYTES": GIB,
    "TB": GIB * 1024,
    "TIB": GIB * 1024,
    "TERABYTE": GIB * 1024,
    "TERABYTES": GIB * 1024,
    "PB": GIB * 1024 ** 2,
    "PIB": GIB * 1024 ** 2,
    "PETABYTE": GIB * 1024 ** 2,
    "PETABYTES": GIB * 1024 ** 2,
    "EB": GIB * 1024 ** 3,
    "EIB": GIB * 1024 ** 3,
    "EXABYTE": GIB * 1024 ** 3,
    "EXABYTES": GIB * 1024 ** 3,
}

_SIZE_PATTERN = re.compile(r"^(\d+(?:\.\d*)?|\.\d+)\s*([A-Za-z]*)$")
_UINT16_PATTERN = re.compile(r"^\d+$")
UINT16_MAX = 0xFFFF


@dataclass(frozen=True)
class ShardInfo:
    """Shard slots in use and shard capacity of a node."""

    in_use: int = 0
    max: int = 0


@dataclass(frozen=True)
class MemoryInfo:
    """Free and maximum memory, both in GiB."""

    free: float = 0.0
    max: float = 0.0


def parse_byte_size(token: str) -> int:
    """Parse a human-readable byte quantity such as ``1.5GB``.

    Args:
        token: Unsigned size token

    Returns:
        Number of bytes (truncated to a whole byte)

    Raises:
        CoercionError: If the number or unit cannot be parsed
    """
    match = _SIZE_PATTERN.match(token.strip())
    if not match:
        raise CoercionError("memory size", token)

    number, unit = match.groups()
    multiplier = UNIT_MULTIPLIERS.get(unit.upper())
    if multiplier is None:
        raise CoercionError("memory size", token, f"unknown unit '{unit}'")

    return int(float(number) * multiplier)


def parse_memory(token: str) -> float:
    """Parse a signed memory size into GiB.

    ``-1.2MB`` becomes ``-(1.2 / 1024)``.
    """
    if not token:
        raise CoercionError("memory size", token)

    sign = 1
    if token[0] == "-":
        sign = -1
        token = token[1:]

    return sign * parse_byte_size(token) / GIB


def _split_pair(token: str, kind: str) -> List[str]:
    parts = token.split("/")
    if len(parts) != 2:
        raise CoercionError(kind, token, "expected exactly two '/' separated parts")
    return parts


def parse_uint16(token: str) -> int:
    """Parse a non-negative 16-bit integer."""
    token = token.strip()
    if not _UINT16_PATTERN.match(token):
        raise CoercionError("unsigned 16-bit integer", token)

    value = int(token)
    if value > UINT16_MAX:
        raise CoercionError("unsigned 16-bit integer", token, "value out of range")
    return value


def parse_memory_info(token: str) -> MemoryInfo:
    """Parse a ``free/max`` memory pair."""
    free, maximum = _split_pair(token, "memory info")
    try:
        return MemoryInfo(free=parse_memory(free), max=parse_memory(maximum))
    except CoercionError as e:
        raise CoercionError("memory info", token, e.message, e)


def parse_shard_info(token: str) -> ShardInfo:
    """Parse an ``inUse/max`` shard count pair."""
    in_use, maximum = _split_pair(token, "shard counts")
    try:
        return ShardInfo(in_use=parse_uint16(in_use), max=parse_uint16(maximum))
    except CoercionError as e:
        raise CoercionError("shard counts", token, e.message, e)


def parse_address(token: str) -> Optional[IPAddress]:
    """Parse an IPv4/IPv6 literal; an empty token means no address."""
    if not token:
        return None

    try:
        return ipaddress.ip_address(token)
    except ValueError as e:
        raise CoercionError("address", token, None, e)


def parse_list(token: str) -> Tuple[str, ...]:
    """Split a slash-delimited list, keeping order and duplicates.

    An empty token is an empty list.
    """
    if not token:
        return ()
    return tuple(token.split("/"))


def parse_bool(token: str) -> bool:
    """Parse the yes/no style flags rladmin prints."""
    value = token.strip().lower()
    if value in ("1", "t", "true", "yes", "y", "on", "enabled"):
        return True
    if value in ("0", "f", "false", "no", "n", "off", "disabled"):
        return False
    raise CoercionError("boolean", token)
