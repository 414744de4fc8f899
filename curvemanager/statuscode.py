"""Status codes returned by the topology service."""

from __future__ import annotations

from enum import IntEnum


class TopoStatusCode(IntEnum):
    """Result codes of topology requests."""

    Success = 0
    InternalError = -1
    InvalidParam = -2
    InitFail = -3
    StorgeFail = -4
    IdDuplicated = -5
    ChunkServerNotFound = -6
    ServerNotFound = -7
    ZoneNotFound = -8
    PhysicalPoolNotFound = -9
    LogicalPoolNotFound = -10
    CopySetNotFound = -11
    GenCopysetErr = -12
    AllocateIdFail = -13
    CannotRemoveWhenNotEmpty = -14
    IpPortDuplicated = -15
    NameDuplicated = -16
    CreateCopysetNodeOnChunkServerFail = -17
    CannotRemoveNotRetired = -18
    LogicalPoolExist = -19


def topo_status_name(code: int) -> str:
    """Return the name of a topology status code, or "" if it is unknown."""
    try:
        return TopoStatusCode(code).name
    except ValueError:
        return ""