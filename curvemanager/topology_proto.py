"""Messages and enumerations of the MDS topology service."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Mapping, TypeVar

from curvemanager.protocommon import ChunkServerLocation, CopysetInfo

_E = TypeVar("_E", bound=IntEnum)

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


class LogicalPoolType(IntEnum):
    """Kind of files a logical pool holds."""

    PAGEFILE = 0
    APPENDFILE = 1
    APPENDECFILE = 2


class AllocateStatus(IntEnum):
    """Whether a logical pool accepts new allocations."""

    ALLOW = 0
    DENY = 1


class ChunkServerStatus(IntEnum):
    """Service state of a chunkserver."""

    READWRITE = 0
    PENDDING = 1
    RETIRED = 2


class DiskState(IntEnum):
    """Health of a chunkserver's disk."""

    DISKNORMAL = 0
    DISKERROR = 1


class OnlineState(IntEnum):
    """Reachability of a chunkserver."""

    ONLINE = 0
    OFFLINE = 1
    UNSTABLE = 2


def _mapping(data: Any) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise TypeError(f"expected an object, got {type(data).__name__}")
    return data


def _check_int(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} must be an integer")
    return value


def _uint(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    value = _check_int(value, f"field {key!r}")
    if value < 0:
        raise ValueError(f"field {key!r} must not be negative")
    return value


def _status(data: Mapping[str, Any]) -> int:
    value = data.get("statusCode")
    if value is None:
        return 0
    value = _check_int(value, "field 'statusCode'")
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError("field 'statusCode' is out of range")
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


def _bytes(data: Mapping[str, Any], key: str) -> bytes:
    value = data.get(key)
    if value is None:
        return b""
    if not isinstance(value, str):
        raise TypeError(f"field {key!r} must be a base64 string")
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error:
        raise ValueError(f"field {key!r} is not valid base64") from None


def _enum(data: Mapping[str, Any], key: str, kind: type[_E], default: _E) -> int:
    value = data.get(key)
    if value is None:
        return default
    value = _check_int(value, f"field {key!r}")
    try:
        return kind(value)
    except ValueError:
        return value


def _list(data: Mapping[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"field {key!r} must be a list")
    return value


@dataclass
class PhysicalPoolInfo:
    """Identity of one physical pool."""

    physical_pool_id: int = 0
    physical_pool_name: str = ""
    desc: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "PhysicalPoolInfo":
        """Build from decoded JSON; missing fields take default values."""
        data = _mapping(data)
        return cls(
            physical_pool_id=_uint(data, "physicalPoolID"),
            physical_pool_name=_str(data, "physicalPoolName"),
            desc=_str(data, "desc"),
        )


@dataclass
class ListPhysicalPoolResponse:
    """All physical pools of the cluster."""

    status_code: int = 0
    physical_pool_infos: list[PhysicalPoolInfo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ListPhysicalPoolResponse":
        """Build from decoded JSON."""
        data = _mapping(data)
        return cls(
            status_code=_status(data),
            physical_pool_infos=[
                PhysicalPoolInfo.from_dict(item)
                for item in _list(data, "physicalPoolInfos")
            ],
        )


@dataclass
class LogicalPoolInfo:
    """Description of one logical pool."""

    logical_pool_id: int = 0
    logical_pool_name: str = ""
    physical_pool_id: int = 0
    type: int = LogicalPoolType.PAGEFILE
    create_time: int = 0
    redundance_and_place_ment_policy: bytes = b""
    user_policy: bytes = b""
    allocate_status: int = AllocateStatus.ALLOW
    scan_enable: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "LogicalPoolInfo":
        """Build from decoded JSON; policy fields are base64 encoded."""
        data = _mapping(data)
        return cls(
            logical_pool_id=_uint(data, "logicalPoolID"),
            logical_pool_name=_str(data, "logicalPoolName"),
            physical_pool_id=_uint(data, "physicalPoolID"),
            type=_enum(data, "type", LogicalPoolType, LogicalPoolType.PAGEFILE),
            create_time=_uint(data, "createTime"),
            redundance_and_place_ment_policy=_bytes(
                data, "redundanceAndPlaceMentPolicy"
            ),
            user_policy=_bytes(data, "userPolicy"),
            allocate_status=_enum(
                data, "allocateStatus", AllocateStatus, AllocateStatus.ALLOW
            ),
            scan_enable=_bool(data, "scanEnable"),
        )


@dataclass
class ListLogicalPoolResponse:
    """Logical pools of one physical pool."""

    status_code: int = 0
    logical_pool_infos: list[LogicalPoolInfo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ListLogicalPoolResponse":
        """Build from decoded JSON."""
        data = _mapping(data)
        return cls(
            status_code=_status(data),
            logical_pool_infos=[
                LogicalPoolInfo.from_dict(item)
                for item in _list(data, "logicalPoolInfos")
            ],
        )


@dataclass
class GetLogicalPoolResponse:
    """One logical pool."""

    status_code: int = 0
    logical_pool_info: LogicalPoolInfo = field(default_factory=LogicalPoolInfo)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "GetLogicalPoolResponse":
        """Build from decoded JSON."""
        data = _mapping(data)
        return cls(
            status_code=_status(data),
            logical_pool_info=LogicalPoolInfo.from_dict(data.get("logicalPoolInfo")),
        )


@dataclass
class ZoneInfo:
    """Description of one zone."""

    zone_id: int = 0
    zone_name: str = ""
    physical_pool_id: int = 0
    physical_pool_name: str = ""
    desc: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ZoneInfo":
        """Build from decoded JSON; missing fields take default values."""
        data = _mapping(data)
        return cls(
            zone_id=_uint(data, "zoneID"),
            zone_name=_str(data, "zoneName"),
            physical_pool_id=_uint(data, "physicalPoolID"),
            physical_pool_name=_str(data, "physicalPoolName"),
            desc=_str(data, "desc"),
        )


@dataclass
class ListPoolZoneResponse:
    """Zones of one physical pool."""

    status_code: int = 0
    zones: list[ZoneInfo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ListPoolZoneResponse":
        """Build from decoded JSON."""
        data = _mapping(data)
        return cls(
            status_code=_status(data),
            zones=[ZoneInfo.from_dict(item) for item in _list(data, "zones")],
        )


@dataclass
class ServerInfo:
    """Description of one server."""

    server_id: int = 0
    host_name: str = ""
    internal_ip: str = ""
    internal_port: int = 0
    external_ip: str = ""
    external_port: int = 0
    zone_id: int = 0
    zone_name: str = ""
    physical_pool_id: int = 0
    physical_pool_name: str = ""
    desc: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ServerInfo":
        """Build from decoded JSON; missing fields take default values."""
        data = _mapping(data)
        return cls(
            server_id=_uint(data, "serverID"),
            host_name=_str(data, "hostName"),
            internal_ip=_str(data, "internalIp"),
            internal_port=_uint(data, "internalPort"),
            external_ip=_str(data, "externalIp"),
            external_port=_uint(data, "externalPort"),
            zone_id=_uint(data, "zoneID"),
            zone_name=_str(data, "zoneName"),
            physical_pool_id=_uint(data, "physicalPoolID"),
            physical_pool_name=_str(data, "physicalPoolName"),
            desc=_str(data, "desc"),
        )


@dataclass
class ListZoneServerResponse:
    """Servers of one zone."""

    status_code: int = 0
    server_info: list[ServerInfo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ListZoneServerResponse":
        """Build from decoded JSON."""
        data = _mapping(data)
        return cls(
            status_code=_status(data),
            server_info=[ServerInfo.from_dict(item) for item in _list(data, "serverInfo")],
        )


@dataclass
class ChunkServerInfo:
    """Description of one chunkserver."""

    chunk_server_id: int = 0
    disk_type: str = ""
    host_ip: str = ""
    port: int = 0
    status: int = ChunkServerStatus.READWRITE
    disk_status: int = DiskState.DISKNORMAL
    online_state: int = OnlineState.ONLINE
    mount_point: str = ""
    disk_capacity: int = 0
    disk_used: int = 0
    external_ip: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ChunkServerInfo":
        """Build from decoded JSON; missing fields take default values."""
        data = _mapping(data)
        return cls(
            chunk_server_id=_uint(data, "chunkServerID"),
            disk_type=_str(data, "diskType"),
            host_ip=_str(data, "hostIp"),
            port=_uint(data, "port"),
            status=_enum(data, "status", ChunkServerStatus, ChunkServerStatus.READWRITE),
            disk_status=_enum(data, "diskStatus", DiskState, DiskState.DISKNORMAL),
            online_state=_enum(data, "onlineState", OnlineState, OnlineState.ONLINE),
            mount_point=_str(data, "mountPoint"),
            disk_capacity=_uint(data, "diskCapacity"),
            disk_used=_uint(data, "diskUsed"),
            external_ip=_str(data, "externalIp"),
        )


def _chunk_servers(data: Mapping[str, Any]) -> list[ChunkServerInfo]:
    return [ChunkServerInfo.from_dict(item) for item in _list(data, "chunkServerInfos")]


def _copysets(data: Mapping[str, Any]) -> list[CopysetInfo]:
    return [CopysetInfo.from_dict(item) for item in _list(data, "copysetInfos")]


@dataclass
class ListChunkServerResponse:
    """Chunkservers of one server."""

    status_code: int = 0
    chunk_server_infos: list[ChunkServerInfo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ListChunkServerResponse":
        """Build from decoded JSON."""
        data = _mapping(data)
        return cls(status_code=_status(data), chunk_server_infos=_chunk_servers(data))


@dataclass
class GetChunkServerInClusterResponse:
    """All chunkservers of the cluster."""

    status_code: int = 0
    chunk_server_infos: list[ChunkServerInfo] = field(default_factory=list)

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any] | None
    ) -> "GetChunkServerInClusterResponse":
        """Build from decoded JSON."""
        data = _mapping(data)
        return cls(status_code=_status(data), chunk_server_infos=_chunk_servers(data))


@dataclass
class GetCopySetsInChunkServerResponse:
    """Copysets held by one chunkserver."""

    status_code: int = 0
    copyset_infos: list[CopysetInfo] = field(default_factory=list)

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any] | None
    ) -> "GetCopySetsInChunkServerResponse":
        """Build from decoded JSON."""
        data = _mapping(data)
        return cls(status_code=_status(data), copyset_infos=_copysets(data))


@dataclass
class CopySetServerInfo:
    """Chunkservers that hold one copyset."""

    copyset_id: int = 0
    cs_locs: list[ChunkServerLocation] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "CopySetServerInfo":
        """Build from decoded JSON."""
        data = _mapping(data)
        return cls(
            copyset_id=_uint(data, "copysetId"),
            cs_locs=[ChunkServerLocation.from_dict(item) for item in _list(data, "csLocs")],
        )


@dataclass
class GetChunkServerListInCopySetsResponse:
    """Chunkserver locations of several copysets."""

    status_code: int = 0
    cs_info: list[CopySetServerInfo] = field(default_factory=list)

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any] | None
    ) -> "GetChunkServerListInCopySetsResponse":
        """Build from decoded JSON."""
        data = _mapping(data)
        return cls(
            status_code=_status(data),
            cs_info=[CopySetServerInfo.from_dict(item) for item in _list(data, "csInfo")],
        )


@dataclass
class GetCopySetsInClusterResponse:
    """All copysets of the cluster."""

    status_code: int = 0
    copyset_infos: list[CopysetInfo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "GetCopySetsInClusterResponse":
        """Build from decoded JSON."""
        data = _mapping(data)
        return cls(status_code=_status(data), copyset_infos=_copysets(data))