"""Message types shared by several MDS services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


def _mapping(data: Any) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise TypeError(f"expected an object, got {type(data).__name__}")
    return data


def _int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"field {key!r} must be an integer")
    return value


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"field {key!r} must be a string")
    return value


def _bool(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"field {key!r} must be a boolean")
    return value


@dataclass
class CopysetInfo:
    """Scan state of one copyset."""

    logical_pool_id: int = 0
    copyset_id: int = 0
    scaning: bool = False
    last_scan_sec: int = 0
    last_scan_consistent: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "CopysetInfo":
        """Build from decoded JSON; missing fields take zero values."""
        data = _mapping(data)
        return cls(
            logical_pool_id=_int(data, "logicalPoolId"),
            copyset_id=_int(data, "copysetId"),
            scaning=_bool(data, "scaning"),
            last_scan_sec=_int(data, "lastScanSec"),
            last_scan_consistent=_bool(data, "lastScanConsistent"),
        )


@dataclass
class ChunkServerLocation:
    """Address of one chunkserver."""

    chunk_server_id: int = 0
    host_ip: str = ""
    port: int = 0
    external_ip: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ChunkServerLocation":
        """Build from decoded JSON; missing fields take zero values."""
        data = _mapping(data)
        return cls(
            chunk_server_id=_int(data, "chunkServerID"),
            host_ip=_str(data, "hostIp"),
            port=_int(data, "port"),
            external_ip=_str(data, "externalIp"),
        )