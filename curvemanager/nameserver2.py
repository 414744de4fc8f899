"""Messages and enumerations of the MDS name service."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Mapping, TypeVar

_E = TypeVar("_E", bound=IntEnum)


class FileType(IntEnum):
    """Kind of a file-system node."""

    INODE_DIRECTORY = 0
    INODE_PAGEFILE = 1
    INODE_APPENDFILE = 2
    INODE_APPENDECFILE = 3
    INODE_SNAPSHOT_PAGEFILE = 4


class StatusCode(IntEnum):
    """Result codes of name-service requests."""

    kOK = 0
    kFileExists = 101
    kFileNotExists = 102
    kNotDirectory = 103
    kParaError = 104
    kShrinkBiggerFile = 105
    kExtentUnitError = 106
    kSegmentNotAllocated = 107
    kSegmentAllocateError = 108
    kDirNotExist = 109
    kNotSupported = 110
    kOwnerAuthFail = 111
    kDirNotEmpty = 112
    kFileUnderSnapShot = 120
    kFileNotUnderSnapShot = 121
    kSnapshotDeleting = 122
    kSnapshotFileNotExists = 123
    kSnapshotFileDeleteError = 124
    kSessionNotExist = 125
    kFileOccupied = 126
    kCloneFileNameIllegal = 127
    kCloneStatusNotMatch = 128
    kCommonFileDeleteError = 129
    kFileIdNotMatch = 130
    kFileUnderDeleting = 131
    kFileLengthNotSupported = 132
    kDeleteFileBeingCloned = 133
    kClientVersionNotMatch = 134
    kSnapshotFrozen = 135
    kSnapshotCloneConnectFail = 136
    kSnapshotCloneServerNotInit = 137
    kRecoverFileCloneMetaInstalled = 138
    kRecoverFileError = 139
    kEpochTooOld = 140
    kStorageError = 501
    KInternalError = 502


class FileStatus(IntEnum):
    """Lifecycle state of a file."""

    kFileCreated = 0
    kFileDeleting = 1
    kFileCloning = 2
    kFileCloneMetaInstalled = 3
    kFileCloned = 4
    kFileBeingCloned = 5


class ThrottleType(IntEnum):
    """What a throttle limit applies to."""

    IOPS_TOTAL = 1
    IOPS_READ = 2
    IOPS_WRITE = 3
    BPS_TOTAL = 4
    BPS_READ = 5
    BPS_WRITE = 6


def status_code_name(code: int) -> str:
    """Return the name of a name-service status code, or "" if it is unknown."""
    try:
        return StatusCode(code).name
    except ValueError:
        return ""


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


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"field {key!r} must be a string")
    return value


def _enum(data: Mapping[str, Any], key: str, kind: type[_E], default: _E) -> int:
    value = data.get(key)
    if value is None:
        return default
    value = _check_int(value, f"field {key!r}")
    try:
        return kind(value)
    except ValueError:
        return value


def _status(data: Mapping[str, Any]) -> int:
    return _enum(data, "statusCode", StatusCode, StatusCode.kOK)


def _list(data: Mapping[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"field {key!r} must be a list")
    return value


@dataclass
class ThrottleParams:
    """One throttle limit of a file."""

    type: int = ThrottleType.IOPS_TOTAL
    limit: int = 0
    burst: int = 0
    burst_length: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ThrottleParams":
        """Build from decoded JSON; missing fields take default values."""
        data = _mapping(data)
        return cls(
            type=_enum(data, "type", ThrottleType, ThrottleType.IOPS_TOTAL),
            limit=_uint(data, "limit"),
            burst=_uint(data, "burst"),
            burst_length=_uint(data, "burstLength"),
        )


@dataclass
class FileThrottleParams:
    """All throttle limits of a file."""

    throttle_params: list[ThrottleParams] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "FileThrottleParams":
        """Build from decoded JSON; a missing list is empty."""
        data = _mapping(data)
        return cls(
            throttle_params=[
                ThrottleParams.from_dict(item) for item in _list(data, "throttleParams")
            ]
        )


@dataclass
class FileInfo:
    """Metadata of one file or directory."""

    id: int = 0
    file_name: str = ""
    parent_id: int = 0
    file_type: int = FileType.INODE_DIRECTORY
    owner: str = ""
    chunk_size: int = 0
    segment_size: int = 0
    length: int = 0
    ctime: int = 0
    seq_num: int = 0
    file_status: int = FileStatus.kFileCreated
    original_full_path_name: str = ""
    clone_source: str = ""
    clone_length: int = 0
    stripe_unit: int = 0
    stripe_count: int = 0
    throttle_params: FileThrottleParams = field(default_factory=FileThrottleParams)
    epoch: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "FileInfo":
        """Build from decoded JSON; missing fields take default values."""
        data = _mapping(data)
        return cls(
            id=_uint(data, "id"),
            file_name=_str(data, "fileName"),
            parent_id=_uint(data, "parentId"),
            file_type=_enum(data, "fileType", FileType, FileType.INODE_DIRECTORY),
            owner=_str(data, "owner"),
            chunk_size=_uint(data, "chunkSize"),
            segment_size=_uint(data, "segmentSize"),
            length=_uint(data, "length"),
            ctime=_uint(data, "ctime"),
            seq_num=_uint(data, "seqNum"),
            file_status=_enum(data, "fileStatus", FileStatus, FileStatus.kFileCreated),
            original_full_path_name=_str(data, "originalFullPathName"),
            clone_source=_str(data, "cloneSource"),
            clone_length=_uint(data, "cloneLength"),
            stripe_unit=_uint(data, "stripeUnit"),
            stripe_count=_uint(data, "stripeCount"),
            throttle_params=FileThrottleParams.from_dict(data.get("throttleParams")),
            epoch=_uint(data, "epoch"),
        )


@dataclass
class ClientInfo:
    """Address of a client that has a file open."""

    ip: str = ""
    port: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ClientInfo":
        """Build from decoded JSON; missing fields take default values."""
        data = _mapping(data)
        return cls(ip=_str(data, "ip"), port=_uint(data, "port"))


@dataclass
class GetAllocatedSizeResponse:
    """Allocated size of a file, in total and per logical pool."""

    status_code: int = StatusCode.kOK
    allocated_size: int = 0
    alloc_size_map: dict[int, int] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "GetAllocatedSizeResponse":
        """Build from decoded JSON; map keys are logical pool ids."""
        data = _mapping(data)
        raw = _mapping(data.get("allocSizeMap"))
        sizes: dict[int, int] = {}
        for key, value in raw.items():
            try:
                pool_id = int(key)
            except (TypeError, ValueError):
                raise ValueError(f"invalid logical pool id {key!r}") from None
            if pool_id < 0:
                raise ValueError(f"invalid logical pool id {key!r}")
            size = _check_int(value, f"size of pool {key!r}")
            if size < 0:
                raise ValueError(f"size of pool {key!r} must not be negative")
            sizes[pool_id] = size
        return cls(
            status_code=_status(data),
            allocated_size=_uint(data, "allocatedSize"),
            alloc_size_map=sizes,
        )


@dataclass
class ListDirResponse:
    """Entries of a directory."""

    status_code: int = StatusCode.kOK
    file_info: list[FileInfo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ListDirResponse":
        """Build from decoded JSON."""
        data = _mapping(data)
        return cls(
            status_code=_status(data),
            file_info=[FileInfo.from_dict(item) for item in _list(data, "fileInfo")],
        )


@dataclass
class GetFileInfoResponse:
    """Metadata of one file."""

    status_code: int = StatusCode.kOK
    file_info: FileInfo = field(default_factory=FileInfo)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "GetFileInfoResponse":
        """Build from decoded JSON."""
        data = _mapping(data)
        return cls(
            status_code=_status(data),
            file_info=FileInfo.from_dict(data.get("fileInfo")),
        )


@dataclass
class GetFileSizeResponse:
    """Length of a file or directory."""

    status_code: int = StatusCode.kOK
    file_size: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "GetFileSizeResponse":
        """Build from decoded JSON."""
        data = _mapping(data)
        return cls(status_code=_status(data), file_size=_uint(data, "fileSize"))


@dataclass
class DeleteFileResponse:
    """Outcome of deleting a file."""

    status_code: int = StatusCode.kOK

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "DeleteFileResponse":
        """Build from decoded JSON."""
        return cls(status_code=_status(_mapping(data)))


@dataclass
class RecoverFileResponse:
    """Outcome of recovering a file."""

    status_code: int = StatusCode.kOK

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "RecoverFileResponse":
        """Build from decoded JSON."""
        return cls(status_code=_status(_mapping(data)))


@dataclass
class CreateFileResponse:
    """Outcome of creating a file."""

    status_code: int = StatusCode.kOK

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "CreateFileResponse":
        """Build from decoded JSON."""
        return cls(status_code=_status(_mapping(data)))


@dataclass
class ExtendFileResponse:
    """Outcome of extending a file."""

    status_code: int = StatusCode.kOK

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ExtendFileResponse":
        """Build from decoded JSON."""
        return cls(status_code=_status(_mapping(data)))


@dataclass
class UpdateFileThrottleParamsResponse:
    """Outcome of changing a file's throttle limits."""

    status_code: int = StatusCode.kOK

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any] | None
    ) -> "UpdateFileThrottleParamsResponse":
        """Build from decoded JSON."""
        return cls(status_code=_status(_mapping(data)))


@dataclass
class FindFileMountPointResponse:
    """Clients that have a file mounted."""

    status_code: int = StatusCode.kOK
    client_info: list[ClientInfo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "FindFileMountPointResponse":
        """Build from decoded JSON."""
        data = _mapping(data)
        return cls(
            status_code=_status(data),
            client_info=[ClientInfo.from_dict(item) for item in _list(data, "clientInfo")],
        )