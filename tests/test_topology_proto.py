import base64

import pytest

from curvemanager.protocommon import ChunkServerLocation, CopysetInfo
from curvemanager.statuscode import TopoStatusCode
from curvemanager.topology_proto import (
    AllocateStatus,
    ChunkServerInfo,
    ChunkServerStatus,
    CopySetServerInfo,
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
    PhysicalPoolInfo,
    ServerInfo,
    ZoneInfo,
)


def test_physical_pool_info_fields():
    info = PhysicalPoolInfo.from_dict(
        {"physicalPoolID": 3, "physicalPoolName": "pool1", "desc": "ssd pool"}
    )
    assert info == PhysicalPoolInfo(3, "pool1", "ssd pool")


def test_physical_pool_info_missing_fields_default():
    assert PhysicalPoolInfo.from_dict({}) == PhysicalPoolInfo(0, "", "")
    assert PhysicalPoolInfo.from_dict(None) == PhysicalPoolInfo()


def test_list_physical_pool_response():
    resp = ListPhysicalPoolResponse.from_dict(
        {
            "statusCode": 0,
            "physicalPoolInfos": [
                {"physicalPoolID": 1, "physicalPoolName": "a"},
                {"physicalPoolID": 2, "physicalPoolName": "b"},
            ],
        }
    )
    assert resp.status_code == TopoStatusCode.Success
    assert [p.physical_pool_id for p in resp.physical_pool_infos] == [1, 2]
    assert [p.physical_pool_name for p in resp.physical_pool_infos] == ["a", "b"]


def test_negative_status_code_is_kept():
    resp = ListPhysicalPoolResponse.from_dict({"statusCode": -9})
    assert resp.status_code == TopoStatusCode.PhysicalPoolNotFound
    assert resp.physical_pool_infos == []


def test_status_code_out_of_int32_range():
    with pytest.raises(ValueError):
        ListPoolZoneResponse.from_dict({"statusCode": 2**31})


def test_logical_pool_info_decodes_policies():
    policy = b'{"replicaNum":3}'
    info = LogicalPoolInfo.from_dict(
        {
            "logicalPoolID": 7,
            "logicalPoolName": "lp",
            "physicalPoolID": 1,
            "type": 1,
            "createTime": 1680000000,
            "redundanceAndPlaceMentPolicy": base64.b64encode(policy).decode(),
            "userPolicy": base64.b64encode(b"{}").decode(),
            "allocateStatus": 1,
            "scanEnable": True,
        }
    )
    assert info.logical_pool_id == 7
    assert info.type is LogicalPoolType.APPENDFILE
    assert info.create_time == 1680000000
    assert info.redundance_and_place_ment_policy == policy
    assert info.user_policy == b"{}"
    assert info.allocate_status is AllocateStatus.DENY
    assert info.scan_enable is True


def test_logical_pool_info_defaults():
    info = LogicalPoolInfo.from_dict({})
    assert info.type is LogicalPoolType.PAGEFILE
    assert info.allocate_status is AllocateStatus.ALLOW
    assert info.redundance_and_place_ment_policy == b""
    assert info.scan_enable is False


def test_logical_pool_info_bad_base64():
    with pytest.raises(ValueError):
        LogicalPoolInfo.from_dict({"userPolicy": "not base64!"})


def test_logical_pool_unknown_type_kept_as_int():
    info = LogicalPoolInfo.from_dict({"type": 9})
    assert info.type == 9
    assert not isinstance(info.type, LogicalPoolType)


def test_list_and_get_logical_pool():
    listed = ListLogicalPoolResponse.from_dict(
        {"logicalPoolInfos": [{"logicalPoolID": 4, "logicalPoolName": "x"}]}
    )
    assert listed.status_code == 0
    assert listed.logical_pool_infos[0].logical_pool_name == "x"

    got = GetLogicalPoolResponse.from_dict(
        {"statusCode": -10, "logicalPoolInfo": {"logicalPoolID": 4}}
    )
    assert got.status_code == TopoStatusCode.LogicalPoolNotFound
    assert got.logical_pool_info.logical_pool_id == 4


def test_get_logical_pool_missing_info():
    got = GetLogicalPoolResponse.from_dict({"statusCode": 0})
    assert got.logical_pool_info == LogicalPoolInfo()


def test_zone_and_list_pool_zone():
    resp = ListPoolZoneResponse.from_dict(
        {
            "zones": [
                {
                    "zoneID": 5,
                    "zoneName": "zone1",
                    "physicalPoolID": 1,
                    "physicalPoolName": "pool1",
                    "desc": "d",
                }
            ]
        }
    )
    assert resp.zones == [ZoneInfo(5, "zone1", 1, "pool1", "d")]


def test_server_and_list_zone_server():
    resp = ListZoneServerResponse.from_dict(
        {
            "serverInfo": [
                {
                    "serverID": 2,
                    "hostName": "host1",
                    "internalIp": "10.0.0.1",
                    "internalPort": 8200,
                    "externalIp": "10.1.0.1",
                    "externalPort": 8201,
                    "zoneID": 5,
                    "zoneName": "zone1",
                    "physicalPoolID": 1,
                    "physicalPoolName": "pool1",
                    "desc": "",
                }
            ]
        }
    )
    server = resp.server_info[0]
    assert server == ServerInfo(
        2, "host1", "10.0.0.1", 8200, "10.1.0.1", 8201, 5, "zone1", 1, "pool1", ""
    )


def test_chunk_server_info_fields():
    cs = ChunkServerInfo.from_dict(
        {
            "chunkServerID": 11,
            "diskType": "nvme",
            "hostIp": "10.0.0.2",
            "port": 8200,
            "status": 2,
            "diskStatus": 1,
            "onlineState": 2,
            "mountPoint": "/data/chunkserver0",
            "diskCapacity": 1024,
            "diskUsed": 512,
            "externalIp": "10.1.0.2",
        }
    )
    assert cs.chunk_server_id == 11
    assert cs.status is ChunkServerStatus.RETIRED
    assert cs.disk_status is DiskState.DISKERROR
    assert cs.online_state is OnlineState.UNSTABLE
    assert cs.mount_point == "/data/chunkserver0"
    assert (cs.disk_capacity, cs.disk_used) == (1024, 512)


def test_chunk_server_info_defaults():
    cs = ChunkServerInfo.from_dict({})
    assert cs.status is ChunkServerStatus.READWRITE
    assert cs.disk_status is DiskState.DISKNORMAL
    assert cs.online_state is OnlineState.ONLINE


def test_chunk_server_list_responses_agree():
    payload = {"statusCode": 0, "chunkServerInfos": [{"chunkServerID": 1}, {"chunkServerID": 2}]}
    listed = ListChunkServerResponse.from_dict(payload)
    cluster = GetChunkServerInClusterResponse.from_dict(payload)
    assert listed.chunk_server_infos == cluster.chunk_server_infos
    assert [c.chunk_server_id for c in listed.chunk_server_infos] == [1, 2]


def test_copyset_responses():
    payload = {
        "copysetInfos": [
            {"logicalPoolId": 1, "copysetId": 100, "scaning": True, "lastScanSec": 5}
        ]
    }
    in_cs = GetCopySetsInChunkServerResponse.from_dict(payload)
    in_cluster = GetCopySetsInClusterResponse.from_dict(payload)
    expected = CopysetInfo(1, 100, True, 5, False)
    assert in_cs.copyset_infos == [expected]
    assert in_cluster.copyset_infos == [expected]


def test_chunk_server_list_in_copysets():
    resp = GetChunkServerListInCopySetsResponse.from_dict(
        {
            "csInfo": [
                {
                    "copysetId": 100,
                    "csLocs": [
                        {"chunkServerID": 1, "hostIp": "10.0.0.1", "port": 8200},
                        {"chunkServerID": 2, "hostIp": "10.0.0.2", "port": 8201},
                    ],
                }
            ]
        }
    )
    info = resp.cs_info[0]
    assert info.copyset_id == 100
    assert info.cs_locs[1] == ChunkServerLocation(2, "10.0.0.2", 8201, "")


def test_copyset_server_info_empty():
    assert CopySetServerInfo.from_dict({}) == CopySetServerInfo(0, [])


@pytest.mark.parametrize(
    "data",
    [
        {"chunkServerInfos": {"a": 1}},
        {"statusCode": "0"},
        {"statusCode": True},
    ],
)
def test_type_errors(data):
    with pytest.raises(TypeError):
        ListChunkServerResponse.from_dict(data)


def test_negative_unsigned_rejected():
    with pytest.raises(ValueError):
        ZoneInfo.from_dict({"zoneID": -1})


def test_non_mapping_rejected():
    with pytest.raises(TypeError):
        ServerInfo.from_dict([1, 2])


def test_string_field_type_checked():
    with pytest.raises(TypeError):
        PhysicalPoolInfo.from_dict({"physicalPoolName": 5})


def test_bool_field_type_checked():
    with pytest.raises(TypeError):
        LogicalPoolInfo.from_dict({"scanEnable": 1})