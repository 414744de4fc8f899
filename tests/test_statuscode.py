import pytest

from curvemanager.statuscode import TopoStatusCode, topo_status_name


@pytest.mark.parametrize(
    "code, name",
    [
        (0, "Success"),
        (-4, "StorgeFail"),
        (-9, "PhysicalPoolNotFound"),
        (-17, "CreateCopysetNodeOnChunkServerFail"),
        (-19, "LogicalPoolExist"),
    ],
)
def test_known_names(code, name):
    assert topo_status_name(code) == name


@pytest.mark.parametrize("code", [1, -20, 1000])
def test_unknown_code_gives_empty_name(code):
    assert topo_status_name(code) == ""


def test_every_member_round_trips_through_its_name():
    for member in TopoStatusCode:
        assert TopoStatusCode[topo_status_name(member.value)] is member


def test_every_code_in_range_has_a_name():
    names = [topo_status_name(code) for code in range(-19, 1)]
    assert all(names)
    assert len(set(names)) == 20