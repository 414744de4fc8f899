import pytest

from curvemanager.protocommon import ChunkServerLocation, CopysetInfo


def test_copyset_info_from_full_dict():
    info = CopysetInfo.from_dict(
        {
            "logicalPoolId": 2,
            "copysetId": 17,
            "scaning": True,
            "lastScanSec": 1680000000,
            "lastScanConsistent": True,
        }
    )
    assert info == CopysetInfo(
        logical_pool_id=2,
        copyset_id=17,
        scaning=True,
        last_scan_sec=1680000000,
        last_scan_consistent=True,
    )


def test_copyset_info_missing_fields_take_zero_values():
    info = CopysetInfo.from_dict({"copysetId": 5})
    assert info.copyset_id == 5
    assert info.logical_pool_id == 0
    assert info.scaning is False
    assert info.last_scan_sec == 0
    assert info.last_scan_consistent is False


def test_copyset_info_from_none_equals_default():
    assert CopysetInfo.from_dict(None) == CopysetInfo()


def test_copyset_info_rejects_wrong_type():
    with pytest.raises(TypeError):
        CopysetInfo.from_dict({"copysetId": "5"})


def test_chunk_server_location_from_dict():
    loc = ChunkServerLocation.from_dict(
        {"chunkServerID": 9, "hostIp": "10.0.0.5", "port": 8200, "externalIp": "10.1.0.5"}
    )
    assert loc.chunk_server_id == 9
    assert loc.host_ip == "10.0.0.5"
    assert loc.port == 8200
    assert loc.external_ip == "10.1.0.5"


def test_chunk_server_location_defaults():
    assert ChunkServerLocation.from_dict({}) == ChunkServerLocation()
    assert ChunkServerLocation.from_dict({}).host_ip == ""


def test_chunk_server_location_rejects_non_object():
    with pytest.raises(TypeError):
        ChunkServerLocation.from_dict([1, 2, 3])