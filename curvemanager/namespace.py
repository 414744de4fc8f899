"""Name-service calls of the MDS client: files, directories and volumes."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Iterable, TypeVar

from curvemanager.basehttp import BaseHttp, MdsError
from curvemanager.common import GIB, TIME_FORMAT
from curvemanager.nameserver2 import (
    CreateFileResponse,
    DeleteFileResponse,
    ExtendFileResponse,
    FileStatus,
    FileType,
    FindFileMountPointResponse,
    GetAllocatedSizeResponse,
    GetFileInfoResponse,
    GetFileSizeResponse,
    ListDirResponse,
    RecoverFileResponse,
    StatusCode,
    ThrottleType,
    UpdateFileThrottleParamsResponse,
    status_code_name,
)
from curvemanager.nameserver2 import FileInfo as _ProtoFileInfo

INVALID = "INVALID"

# file type
INODE_DIRECTORY = "INODE_DIRECTORY"
INODE_PAGEFILE = "INODE_PAGEFILE"
INODE_APPENDFILE = "INODE_APPENDFILE"
INODE_APPENDECFILE = "INODE_APPENDECFILE"
INODE_SNAPSHOT_PAGEFILE = "INODE_SNAPSHOT_PAGEFILE"

# file status
FILE_CREATED = "kFileCreated"
FILE_DELETING = "kFileDeleting"
FILE_CLONING = "kFileCloning"
FILE_CLONEMETA_INSTALLED = "kFileCloneMetaInstalled"
FILE_CLONED = "kFileCloned"
FILE_BEIING_CLONED = "kFileBeingCloned"

# throttle type
IOPS_TOTAL = "IOPS_TOTAL"
IOPS_READ = "IOPS_READ"
IOPS_WRITE = "IOPS_WRITE"
BPS_TOTAL = "BPS_TOTAL"
BPS_READ = "BPS_READ"
BPS_WRITE = "BPS_WRITE"

# apis
GET_FILE_ALLOC_SIZE_FUNC = "GetAllocatedSize"
LIST_DIR_FUNC = "ListDir"
GET_FILE_INFO = "GetFileInfo"
GET_FILE_SIZE = "GetFileSize"
DELETE_FILE = "DeleteFile"
CREATE_FILE = "CreateFile"
EXTEND_FILE = "ExtendFile"
RECOVER_FILE = "RecoverFile"
UPDATE_FILE_THROTTLE_PARAMS = "UpdateFileThrottleParams"
FIND_FILE_MOUNTPOINT = "FindFileMountPoint"

_FILE_TYPES = {
    INODE_DIRECTORY: FileType.INODE_DIRECTORY,
    INODE_PAGEFILE: FileType.INODE_PAGEFILE,
    INODE_APPENDFILE: FileType.INODE_APPENDFILE,
    INODE_APPENDECFILE: FileType.INODE_APPENDECFILE,
    INODE_SNAPSHOT_PAGEFILE: FileType.INODE_SNAPSHOT_PAGEFILE,
}
_FILE_TYPE_NAMES = {value: key for key, value in _FILE_TYPES.items()}

_FILE_STATUS_NAMES = {
    FileStatus.kFileCreated: FILE_CREATED,
    FileStatus.kFileDeleting: FILE_DELETING,
    FileStatus.kFileCloning: FILE_CLONING,
    FileStatus.kFileCloneMetaInstalled: FILE_CLONEMETA_INSTALLED,
    FileStatus.kFileCloned: FILE_CLONED,
    FileStatus.kFileBeingCloned: FILE_BEIING_CLONED,
}

_THROTTLE_TYPES = {
    IOPS_TOTAL: ThrottleType.IOPS_TOTAL,
    IOPS_READ: ThrottleType.IOPS_READ,
    IOPS_WRITE: ThrottleType.IOPS_WRITE,
    BPS_TOTAL: ThrottleType.BPS_TOTAL,
    BPS_READ: ThrottleType.BPS_READ,
    BPS_WRITE: ThrottleType.BPS_WRITE,
}
_THROTTLE_TYPE_NAMES = {value: key for key, value in _THROTTLE_TYPES.items()}

_R = TypeVar("_R")


def file_type_from_str(t: str) -> int:
    """Return the file type named ``t``, or -1 if the name is unknown."""
    return _FILE_TYPES.get(t, -1)


def file_type_str(t: int) -> str:
    """Return the name of file type ``t``, or INVALID."""
    return _FILE_TYPE_NAMES.get(t, INVALID)


def file_status_str(s: int) -> str:
    """Return the name of file status ``s``, or INVALID."""
    return _FILE_STATUS_NAMES.get(s, INVALID)


def throttle_type_str(t: int) -> str:
    """Return the name of throttle type ``t``, or INVALID."""
    return _THROTTLE_TYPE_NAMES.get(t, INVALID)


def throttle_type_from_str(t: str) -> int:
    """Return the throttle type named ``t``, or 0 if the name is unknown."""
    return _THROTTLE_TYPES.get(t, 0)


@dataclass
class ThrottleParams:
    """A throttle limit as shown to users."""

    type: str = ""
    limit: int = 0
    burst: int = 0
    burst_length: int = 0


@dataclass
class FileInfo:
    """File metadata as shown to users; sizes are in GiB."""

    id: int = 0
    file_name: str = ""
    parent_id: int = 0
    file_type: str = ""
    owner: str = ""
    chunk_size: int = 0
    segment_size: int = 0
    length: int = 0
    allocate_size: int = 0
    ctime: str = ""
    seq_num: int = 0
    file_status: str = ""
    original_full_path_name: str = ""
    clone_source: str = ""
    clone_length: int = 0
    stripe_unit: int = 0
    stripe_count: int = 0
    throttle_params: list[ThrottleParams] = field(default_factory=list)
    epoch: int = 0
    mount_points: list[str] = field(default_factory=list)


def _convert_file_info(v: _ProtoFileInfo) -> FileInfo:
    return FileInfo(
        id=v.id,
        file_name=v.file_name,
        parent_id=v.parent_id,
        file_type=file_type_str(v.file_type),
        owner=v.owner,
        chunk_size=v.chunk_size,
        segment_size=v.segment_size,
        length=v.length // GIB,
        ctime=datetime.fromtimestamp(v.ctime // 1_000_000).strftime(TIME_FORMAT),
        seq_num=v.seq_num,
        file_status=file_status_str(v.file_status),
        original_full_path_name=v.original_full_path_name,
        clone_source=v.clone_source,
        clone_length=v.clone_length,
        stripe_unit=v.stripe_unit,
        stripe_count=v.stripe_count,
        throttle_params=[
            ThrottleParams(
                type=throttle_type_str(p.type),
                limit=p.limit,
                burst=p.burst,
                burst_length=p.burst_length,
            )
            for p in v.throttle_params.throttle_params
        ],
        epoch=v.epoch,
    )


def _path(func: str, params: Iterable[tuple[str, Any]]) -> str:
    query = "&".join(f"{key}={value}" for key, value in params)
    return f"{func}?{query}" if query else func


class NamespaceMixin:
    """Name-service requests; needs ``addrs`` and ``base_client`` on the instance."""

    addrs: list[str]
    base_client: BaseHttp

    def _call(
        self,
        func: str,
        params: list[tuple[str, Any]],
        parse: Callable[[Any], _R],
    ) -> _R:
        ret = self.base_client.send_http(self.addrs, _path(func, params))
        response = parse(json.loads(ret.result.text))
        code = response.status_code
        if code != StatusCode.kOK:
            raise MdsError(status_code_name(code))
        return response

    @staticmethod
    def _signed(params: list[tuple[str, Any]], sig: str) -> list[tuple[str, Any]]:
        if sig:
            params.append(("Signature", sig))
        return params

    def get_file_allocated_size(self, filename: str) -> tuple[int, dict[int, int]]:
        """Return the allocated size in GiB, in total and per logical pool."""
        response = self._call(
            GET_FILE_ALLOC_SIZE_FUNC,
            [("FileName", filename)],
            GetAllocatedSizeResponse.from_dict,
        )
        per_pool = {pool: size // GIB for pool, size in response.alloc_size_map.items()}
        return response.allocated_size // GIB, per_pool

    def list_dir(self, filename: str, owner: str, sig: str, date: int) -> list[FileInfo]:
        """Return the entries of directory ``filename``."""
        params = self._signed(
            [("FileName", filename), ("Owner", owner), ("Date", int(date))], sig
        )
        response = self._call(LIST_DIR_FUNC, params, ListDirResponse.from_dict)
        return [_convert_file_info(v) for v in response.file_info]

    def get_file_info(self, filename: str, owner: str, sig: str, date: int) -> FileInfo:
        """Return the metadata of ``filename``."""
        params = self._signed(
            [("FileName", filename), ("Owner", owner), ("Date", int(date))], sig
        )
        response = self._call(GET_FILE_INFO, params, GetFileInfoResponse.from_dict)
        return _convert_file_info(response.file_info)

    def get_file_size(self, filename: str) -> int:
        """Return the length of ``filename`` in GiB."""
        response = self._call(
            GET_FILE_SIZE, [("FileName", filename)], GetFileSizeResponse.from_dict
        )
        return response.file_size // GIB

    def delete_file(
        self,
        filename: str,
        owner: str,
        sig: str,
        file_id: int,
        date: int,
        force_delete: bool,
    ) -> None:
        """Delete ``filename``, or move it to the recycle bin unless forced."""
        params: list[tuple[str, Any]] = [
            ("FileName", filename),
            ("Owner", owner),
            ("Date", int(date)),
            ("ForceDelete", "true" if force_delete else "false"),
        ]
        self._signed(params, sig)
        if file_id:
            params.append(("FileId", file_id))
        self._call(DELETE_FILE, params, DeleteFileResponse.from_dict)

    def recover_file(
        self, filename: str, owner: str, sig: str, file_id: int, date: int
    ) -> None:
        """Restore ``filename`` from the recycle bin."""
        params = self._signed(
            [("FileName", filename), ("Owner", owner), ("Date", int(date))], sig
        )
        if file_id:
            params.append(("FileId", file_id))
        self._call(RECOVER_FILE, params, RecoverFileResponse.from_dict)

    def create_file(
        self,
        filename: str,
        ftype: str,
        owner: str,
        sig: str,
        length: int,
        date: int,
        stripe_unit: int,
        stripe_count: int,
    ) -> None:
        """Create a file or directory of type ``ftype``."""
        params = self._signed(
            [
                ("FileName", filename),
                ("FileType", file_type_from_str(ftype)),
                ("Owner", owner),
                ("FileLength", length),
                ("Date", int(date)),
                ("StripeUnit", stripe_unit),
                ("StripeCount", stripe_count),
            ],
            sig,
        )
        self._call(CREATE_FILE, params, CreateFileResponse.from_dict)

    def extend_file(
        self, filename: str, owner: str, sig: str, new_size: int, date: int
    ) -> None:
        """Grow ``filename`` to ``new_size`` bytes."""
        params = self._signed(
            [
                ("FileName", filename),
                ("NewSize", int(new_size)),
                ("Owner", owner),
                ("Date", int(date)),
            ],
            sig,
        )
        self._call(EXTEND_FILE, params, ExtendFileResponse.from_dict)

    def update_file_throttle_params(
        self, filename: str, owner: str, sig: str, date: int, params: ThrottleParams
    ) -> None:
        """Set one throttle limit of ``filename``."""
        query = self._signed(
            [
                ("FileName", filename),
                ("Owner", owner),
                ("Date", int(date)),
                ("Type", throttle_type_from_str(params.type)),
                ("Limit", params.limit),
                ("Burst", params.burst),
                ("BurstLength", params.burst_length),
            ],
            sig,
        )
        self._call(
            UPDATE_FILE_THROTTLE_PARAMS, query, UpdateFileThrottleParamsResponse.from_dict
        )

    def find_file_mount_point(self, filename: str) -> list[str]:
        """Return ``ip:port`` of every client that has ``filename`` mounted."""
        response = self._call(
            FIND_FILE_MOUNTPOINT,
            [("FileName", filename)],
            FindFileMountPointResponse.from_dict,
        )
        return [f"{c.ip}:{c.port}" for c in response.client_info]