import json

import pytest

from curvemanager.nameserver2 import (
    ClientInfo,
    CreateFileResponse,
    DeleteFileResponse,
    ExtendFileResponse,
    FileInfo,
    FileStatus,
    FileThrottleParams,
    FileType,
    FindFileMountPointResponse,
    GetAllocatedSizeResponse,
    GetFileInfoResponse,
    GetFileSizeResponse,
    ListDirResponse,
    RecoverFileResponse,
    StatusCode,
    ThrottleParams,
    ThrottleType,
    UpdateFileThrottleParamsResponse,
    status_code_name,
)


def test_status_code_names_from_source():
    assert status_code_name(0) == "kOK"
    assert status_code_name(102) == "kFileNotExists"
    assert status_code_name(502) == "KInternalError"
    assert status_code_name(501) == "kStorageError"


def test_status_code_name_unknown_is_empty():
    assert status_code_name(999) == ""


def test_enum_values_decode_from_wire_numbers():
    assert status_code_name(140) == "kEpochTooOld"
    assert StatusCode[status_code_name(140)] == 140
    assert FileInfo.from_dict({"fileType": 4}).file_type is FileType.INODE_SNAPSHOT_PAGEFILE
    assert FileInfo.from_dict({"fileStatus": 5}).file_status is FileStatus.kFileBeingCloned
    assert ThrottleParams.from_dict({"type": 6}).type is ThrottleType.BPS_WRITE


def test_status_code_name_round_trip_over_all_members():
    for member in StatusCode:
        assert StatusCode[status_code_name(member.value)] is member


def test_throttle_params_from_dict():
    params = ThrottleParams.from_dict({"type": 4, "limit": 100, "burst": 200, "burstLength": 10})
    assert params == ThrottleParams(
        type=ThrottleType.BPS_TOTAL, limit=100, burst=200, burst_length=10
    )


def test_throttle_params_defaults():
    params = ThrottleParams.from_dict({})
    assert params.type is ThrottleType.IOPS_TOTAL
    assert (params.limit, params.burst, params.burst_length) == (0, 0, 0)


def test_file_throttle_params_list():
    parsed = FileThrottleParams.from_dict(
        {"throttleParams": [{"type": 2, "limit": 5}, {"type": 3, "limit": 6}]}
    )
    assert [p.type for p in parsed.throttle_params] == [
        ThrottleType.IOPS_READ,
        ThrottleType.IOPS_WRITE,
    ]
    assert [p.limit for p in parsed.throttle_params] == [5, 6]


def test_file_info_from_dict_full():
    raw = {
        "id": 7,
        "fileName": "vol1",
        "parentId": 1,
        "fileType": 1,
        "owner": "alice",
        "chunkSize": 16,
        "segmentSize": 32,
        "length": 1024,
        "ctime": 1600000000000000,
        "seqNum": 3,
        "fileStatus": 4,
        "originalFullPathName": "/vol1",
        "cloneSource": "/src",
        "cloneLength": 512,
        "stripeUnit": 8,
        "stripeCount": 2,
        "throttleParams": {"throttleParams": [{"type": 1, "limit": 9}]},
        "epoch": 11,
    }
    info = FileInfo.from_dict(raw)
    assert info.id == 7
    assert info.file_name == "vol1"
    assert info.file_type is FileType.INODE_PAGEFILE
    assert info.file_status is FileStatus.kFileCloned
    assert info.ctime == 1600000000000000
    assert info.original_full_path_name == "/vol1"
    assert info.stripe_count == 2
    assert info.throttle_params.throttle_params[0].limit == 9
    assert info.epoch == 11


def test_file_info_defaults_when_missing():
    info = FileInfo.from_dict(None)
    assert info == FileInfo()
    assert info.file_type is FileType.INODE_DIRECTORY
    assert info.file_status is FileStatus.kFileCreated
    assert info.throttle_params.throttle_params == []


def test_unknown_enum_value_is_kept():
    info = FileInfo.from_dict({"fileType": 42})
    assert info.file_type == 42
    assert not isinstance(info.file_type, FileType)


def test_file_info_rejects_wrong_types():
    with pytest.raises(TypeError):
        FileInfo.from_dict({"fileName": 5})
    with pytest.raises(TypeError):
        FileInfo.from_dict({"id": "7"})
    with pytest.raises(TypeError):
        FileInfo.from_dict({"id": True})
    with pytest.raises(ValueError):
        FileInfo.from_dict({"length": -1})


def test_not_an_object_rejected():
    with pytest.raises(TypeError):
        FileInfo.from_dict([1, 2])


def test_client_info_from_dict():
    assert ClientInfo.from_dict({"ip": "10.0.0.1", "port": 9000}) == ClientInfo("10.0.0.1", 9000)


def test_allocated_size_map_keys_become_ints():
    data = json.loads(
        '{"statusCode": 0, "allocatedSize": 300, "allocSizeMap": {"1": 100, "2": 200}}'
    )
    response = GetAllocatedSizeResponse.from_dict(data)
    assert response.status_code is StatusCode.kOK
    assert response.allocated_size == 300
    assert response.alloc_size_map == {1: 100, 2: 200}


def test_allocated_size_map_bad_key():
    with pytest.raises(ValueError):
        GetAllocatedSizeResponse.from_dict({"allocSizeMap": {"abc": 1}})
    with pytest.raises(ValueError):
        GetAllocatedSizeResponse.from_dict({"allocSizeMap": {"-1": 1}})


def test_list_dir_response():
    response = ListDirResponse.from_dict(
        {"statusCode": 109, "fileInfo": [{"fileName": "a"}, {"fileName": "b"}]}
    )
    assert response.status_code is StatusCode.kDirNotExist
    assert [f.file_name for f in response.file_info] == ["a", "b"]


def test_get_file_info_response_missing_info():
    response = GetFileInfoResponse.from_dict({"statusCode": 102})
    assert response.status_code is StatusCode.kFileNotExists
    assert response.file_info == FileInfo()


def test_get_file_size_response():
    response = GetFileSizeResponse.from_dict({"fileSize": 2048})
    assert response.status_code is StatusCode.kOK
    assert response.file_size == 2048


@pytest.mark.parametrize(
    "cls",
    [
        DeleteFileResponse,
        RecoverFileResponse,
        CreateFileResponse,
        ExtendFileResponse,
        UpdateFileThrottleParamsResponse,
    ],
)
def test_status_only_responses(cls):
    assert cls.from_dict({"statusCode": 111}).status_code is StatusCode.kOwnerAuthFail
    assert cls.from_dict({}).status_code is StatusCode.kOK
    with pytest.raises(TypeError):
        cls.from_dict({"statusCode": "kOK"})


def test_find_file_mount_point_response():
    response = FindFileMountPointResponse.from_dict(
        {"statusCode": 0, "clientInfo": [{"ip": "1.2.3.4", "port": 80}]}
    )
    assert response.client_info == [ClientInfo(ip="1.2.3.4", port=80)]


def test_list_field_must_be_list():
    with pytest.raises(TypeError):
        FindFileMountPointResponse.from_dict({"clientInfo": {"ip": "x"}})