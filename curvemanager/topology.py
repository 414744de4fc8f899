"""Topology-service calls of the MDS client: pools, zones, servers and copysets."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Iterable, TypeVar

from curvemanager.basehttp import BaseHttp, MdsError
from curvemanager.common import GIB, TIME_FORMAT
from curvemanager.protocommon import CopysetInfo as _ProtoCopysetInfo
from curvemanager.statuscode import TopoStatusCode, topo_status_name
from curvemanager.topology_proto import (
    AllocateStatus,
    ChunkServerInfo,
    ChunkServerStatus,
    DiskState,
    GetChunkServerInClusterResponse,
    GetChunkServerListInCopySetsResponse,
    GetCopySetsInChunkServerResponse,
    GetCopySetsInClusterResponse,
    GetLogicalPoolResponse,
    ListChunkServerResponse,
    ListLogicalPoolResponse,
    ListPhysicalPoolResponse,
    ListPoolZoneResponse,
    ListZoneServerResponse,
    LogicalPoolInfo,
    LogicalPoolType,
    OnlineState,
)

INVALID = "INVALID"

# logical pool type
PAGEFILE_TYPE = "PAGEFILE"
APPENDFILE_TYPE = "APPENDFILE"
APPENDECFILE_TYPE = "APPENDECFILE"

# logical pool allocate status
ALLOW_STATUS = "ALLOW"
DENY_STATUS = "DENY"

# chunkserver status
READWRITE_STATUS = "READWRITE"
PENDDING_STATUS = "PENDDING"
RETIRED_STATUS = "RETIRED"

# chunkserver disk status
DISKNORMAL_STATUS = "DISKNORMAL"
DISKERROR_STATUS = "DISKERROR"

# chunkserver online status
ONLINE_STATUS = "ONLINE"
OFFLINE_STATUS = "OFFLINE"
UNSTABLE_STATUS = "UNSTABLE"

# http paths
HTTP_SERVICE = "TopologyService"
LIST_PHYSICAL_POOL_FUNC = "ListPhysicalPool"
LIST_LOGICAL_POOL_FUNC = "ListLogicalPool"
LIST_POOL_ZONE_FUNC = "ListPoolZone"
LIST_ZONE_SERVER_FUNC = "ListZoneServer"
LIST_CHUNKSERVER_FUNC = "ListChunkServer"
GET_CHUNKSERVER_IN_CLUSTER_FUNC = "GetChunkServerInCluster"
GET_COPYSET_IN_CHUNKSERVER_FUNC = "GetCopySetsInChunkServer"
GET_CHUNKSERVER_LIST_IN_COPYSETS = "GetChunkServerListInCopySets"
GET_COPYSETS_IN_CLUSTER = "GetCopySetsInCluster"
GET_LOGICAL_POOL = "GetLogicalPool"

_LOGICAL_POOL_TYPES = {
    LogicalPoolType.PAGEFILE: PAGEFILE_TYPE,
    LogicalPoolType.APPENDFILE: APPENDFILE_TYPE,
    LogicalPoolType.APPENDECFILE: APPENDECFILE_TYPE,
}
_ALLOCATE_STATUSES = {
    AllocateStatus.ALLOW: ALLOW_STATUS,
    AllocateStatus.DENY: DENY_STATUS,
}
_CHUNK_SERVER_STATUSES = {
    ChunkServerStatus.READWRITE: READWRITE_STATUS,
    ChunkServerStatus.PENDDING: PENDDING_STATUS,
    ChunkServerStatus.RETIRED: RETIRED_STATUS,
}
_DISK_STATUSES = {
    DiskState.DISKNORMAL: DISKNORMAL_STATUS,
    DiskState.DISKERROR: DISKERROR_STATUS,
}
_ONLINE_STATUSES = {
    OnlineState.ONLINE: ONLINE_STATUS,
    OnlineState.OFFLINE: OFFLINE_STATUS,
    OnlineState.UNSTABLE: UNSTABLE_STATUS,
}

_R = TypeVar("_R")


def logical_pool_type_str(t: int) -> str:
    """Return the name of logical pool type ``t``, or INVALID."""
    return _LOGICAL_POOL_TYPES.get(t, INVALID)


def allocate_status_str(s: int) -> str:
    """Return the name of allocate status ``s``, or INVALID."""
    return _ALLOCATE_STATUSES.get(s, INVALID)


def chunk_server_status_str(s: int) -> str:
    """Return the name of chunkserver status ``s``, or INVALID."""
    return _CHUNK_SERVER_STATUSES.get(s, INVALID)


def disk_status_str(s: int) -> str:
    """Return the name of disk state ``s``, or INVALID."""
    return _DISK_STATUSES.get(s, INVALID)


def online_status_str(s: int) -> str:
    """Return the name of online state ``s``, or INVALID."""
    return _ONLINE_STATUSES.get(s, INVALID)


@dataclass
class PhysicalPool:
    """A physical pool as shown to users."""

    id: int = 0
    name: str = ""
    desc: str = ""


@dataclass
class LogicalPool:
    """A logical pool as shown to users."""

    id: int = 0
    name: str = ""
    physical_pool_id: int = 0
    type: str = ""
    create_time: str = ""
    allocate_status: str = ""
    scan_enable: bool = False


@dataclass
class Zone:
    """A zone as shown to users."""

    id: int = 0
    name: str = ""
    physical_pool_id: int = 0
    physical_pool_name: str = ""
    desc: str = ""


@dataclass
class Server:
    """A server as shown to users."""

    id: int = 0
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


@dataclass
class ChunkServer:
    """A chunkserver as shown to users; disk sizes are GiB as text."""

    id: int = 0
    disk_type: str = ""
    host_ip: str = ""
    port: int = 0
    status: str = ""
    disk_status: str = ""
    online_status: str = ""
    mount_point: str = ""
    disk_capacity: str = ""
    disk_used: str = ""
    external_ip: str = ""


@dataclass
class CopySetInfo:
    """Scan state of one copyset as shown to users."""

    logical_pool_id: int = 0
    copyset_id: int = 0
    scanning: bool = False
    last_scan_sec: int = 0
    last_scan_consistent: bool = False


@dataclass
class ChunkServerLocation:
    """Address of one chunkserver holding a copyset."""

    chunk_server_id: int = 0
    host_ip: str = ""
    port: int = 0
    external_ip: str = ""


@dataclass
class CopySetServerInfo:
    """Chunkservers holding one copyset."""

    copyset_id: int = 0
    cs_locs: list[ChunkServerLocation] = field(default_factory=list)


def _format_time(seconds: int) -> str:
    return datetime.fromtimestamp(seconds).strftime(TIME_FORMAT)


def _convert_logical_pool(pool: LogicalPoolInfo) -> LogicalPool:
    return LogicalPool(
        id=pool.logical_pool_id,
        name=pool.logical_pool_name,
        physical_pool_id=pool.physical_pool_id,
        type=logical_pool_type_str(pool.type),
        create_time=_format_time(pool.create_time),
        allocate_status=allocate_status_str(pool.allocate_status),
        scan_enable=pool.scan_enable,
    )


def _convert_chunk_servers(infos: Iterable[ChunkServerInfo]) -> list[ChunkServer]:
    return [
        ChunkServer(
            id=cs.chunk_server_id,
            disk_type=cs.disk_type,
            host_ip=cs.host_ip,
            port=cs.port,
            status=chunk_server_status_str(cs.status),
            disk_status=disk_status_str(cs.disk_status),
            online_status=online_status_str(cs.online_state),
            mount_point=cs.mount_point,
            disk_capacity=str(cs.disk_capacity // GIB),
            disk_used=str(cs.disk_used // GIB),
            external_ip=cs.external_ip,
        )
        for cs in infos
        if cs.status != ChunkServerStatus.RETIRED
    ]


def _convert_copysets(infos: Iterable[_ProtoCopysetInfo]) -> list[CopySetInfo]:
    return [
        CopySetInfo(
            logical_pool_id=cs.logical_pool_id,
            copyset_id=cs.copyset_id,
            scanning=cs.scaning,
            last_scan_sec=cs.last_scan_sec,
            last_scan_consistent=cs.last_scan_consistent,
        )
        for cs in infos
    ]


def _path(func: str, params: Iterable[tuple[str, Any]] = ()) -> str:
    query = "&".join(f"{key}={value}" for key, value in params)
    base = f"{HTTP_SERVICE}/{func}"
    return f"{base}?{query}" if query else base


class TopologyMixin:
    """Topology requests; needs ``addrs`` and ``base_client`` on the instance."""

    addrs: list[str]
    base_client: BaseHttp

    def _topo_call(
        self,
        func: str,
        params: Iterable[tuple[str, Any]],
        parse: Callable[[Any], _R],
    ) -> _R:
        ret = self.base_client.send_http(self.addrs, _path(func, params))
        response = parse(json.loads(ret.result.text))
        code = response.status_code
        if code != TopoStatusCode.Success:
            raise MdsError(topo_status_name(code))
        return response

    def list_physical_pool(self) -> list[PhysicalPool]:
        """Return every physical pool of the cluster."""
        response = self._topo_call(
            LIST_PHYSICAL_POOL_FUNC, (), ListPhysicalPoolResponse.from_dict
        )
        return [
            PhysicalPool(
                id=pool.physical_pool_id,
                name=pool.physical_pool_name,
                desc=pool.desc,
            )
            for pool in response.physical_pool_infos
        ]

    def _logical_pools_of(self, physical_pool_id: int) -> list[LogicalPool]:
        response = self._topo_call(
            LIST_LOGICAL_POOL_FUNC,
            [("physicalPoolID", physical_pool_id)],
            ListLogicalPoolResponse.from_dict,
        )
        return [_convert_logical_pool(pool) for pool in response.logical_pool_infos]

    def list_logical_pool(self) -> list[LogicalPool]:
        """Return the logical pools of every physical pool, queried in parallel."""
        ids = [pool.id for pool in self.list_physical_pool()]
        if not ids:
            return []
        with ThreadPoolExecutor(max_workers=len(ids)) as executor:
            futures = [(pid, executor.submit(self._logical_pools_of, pid)) for pid in ids]
            pools: list[LogicalPool] = []
            for pid, future in futures:
                try:
                    pools.extend(future.result())
                except Exception as exc:
                    raise MdsError(f"physical pool id: {pid}; {exc}") from exc
        return pools

    def get_logical_pool(self, pool_id: int) -> LogicalPool:
        """Return logical pool ``pool_id``."""
        response = self._topo_call(
            GET_LOGICAL_POOL,
            [("LogicalPoolId", pool_id)],
            GetLogicalPoolResponse.from_dict,
        )
        return _convert_logical_pool(response.logical_pool_info)

    def list_pool_zone(self, pool_id: int) -> list[Zone]:
        """Return the zones of physical pool ``pool_id``."""
        response = self._topo_call(
            LIST_POOL_ZONE_FUNC,
            [("PhysicalPoolId", pool_id)],
            ListPoolZoneResponse.from_dict,
        )
        return [
            Zone(
                id=zone.zone_id,
                name=zone.zone_name,
                physical_pool_id=zone.physical_pool_id,
                physical_pool_name=zone.physical_pool_name,
                desc=zone.desc,
            )
            for zone in response.zones
        ]

    def list_zone_server(self, zone_id: int) -> list[Server]:
        """Return the servers of zone ``zone_id``."""
        response = self._topo_call(
            LIST_ZONE_SERVER_FUNC,
            [("ZoneId", zone_id)],
            ListZoneServerResponse.from_dict,
        )
        return [
            Server(
                id=server.server_id,
                host_name=server.host_name,
                internal_ip=server.internal_ip,
                internal_port=server.internal_port,
                external_ip=server.external_ip,
                external_port=server.external_port,
                zone_id=server.zone_id,
                zone_name=server.zone_name,
                physical_pool_id=server.physical_pool_id,
                physical_pool_name=server.physical_pool_name,
                desc=server.desc,
            )
            for server in response.server_info
        ]

    def list_chunk_server(self, server_id: int) -> list[ChunkServer]:
        """Return the chunkservers of server ``server_id``, leaving out retired ones."""
        response = self._topo_call(
            LIST_CHUNKSERVER_FUNC,
            [("ServerId", server_id)],
            ListChunkServerResponse.from_dict,
        )
        return _convert_chunk_servers(response.chunk_server_infos)

    def get_chunk_server_in_cluster(self) -> list[ChunkServer]:
        """Return every chunkserver of the cluster, leaving out retired ones."""
        response = self._topo_call(
            GET_CHUNKSERVER_IN_CLUSTER_FUNC, (), GetChunkServerInClusterResponse.from_dict
        )
        return _convert_chunk_servers(response.chunk_server_infos)

    def get_copysets_in_chunk_server(self, ip: str, port: int) -> list[CopySetInfo]:
        """Return the copysets held by the chunkserver at ``ip:port``."""
        response = self._topo_call(
            GET_COPYSET_IN_CHUNKSERVER_FUNC,
            [("HostIp", ip), ("Port", port)],
            GetCopySetsInChunkServerResponse.from_dict,
        )
        return _convert_copysets(response.copyset_infos)

    def get_chunk_server_list_in_copysets(
        self, logical_pool_id: int, copyset_ids: Iterable[int]
    ) -> list[CopySetServerInfo]:
        """Return the chunkservers holding each of ``copyset_ids``."""
        params: list[tuple[str, Any]] = [("LogicalPoolId", logical_pool_id)]
        params.extend(("CopysetId", cid) for cid in copyset_ids)
        response = self._topo_call(
            GET_CHUNKSERVER_LIST_IN_COPYSETS,
            params,
            GetChunkServerListInCopySetsResponse.from_dict,
        )
        return [
            CopySetServerInfo(
                copyset_id=info.copyset_id,
                cs_locs=[
                    ChunkServerLocation(
                        chunk_server_id=loc.chunk_server_id,
                        host_ip=loc.host_ip,
                        port=loc.port,
                        external_ip=loc.external_ip,
                    )
                    for loc in info.cs_locs
                ],
            )
            for info in response.cs_info
        ]

    def get_copysets_in_cluster(self) -> list[CopySetInfo]:
        """Return every copyset of the cluster."""
        response = self._topo_call(
            GET_COPYSETS_IN_CLUSTER, (), GetCopySetsInClusterResponse.from_dict
        )
        return _convert_copysets(response.copyset_infos)