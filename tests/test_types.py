import struct

import pytest

from plymesh.types import PlyData, PlyElement, PlyProperty, Type, property_type_from_string


@pytest.mark.parametrize(
    "names, expected",
    [
        (("int8", "char"), Type.INT8),
        (("uint8", "uchar"), Type.UINT8),
        (("int16", "short"), Type.INT16),
        (("uint16", "ushort"), Type.UINT16),
        (("int32", "int"), Type.INT32),
        (("uint32", "uint"), Type.UINT32),
        (("float32", "float"), Type.FLOAT32),
        (("float64", "double"), Type.FLOAT64),
    ],
)
def test_type_names_and_aliases(names, expected):
    for name in names:
        assert property_type_from_string(name) is expected


@pytest.mark.parametrize("name", ["int128", "float16", "", "list"])
def test_unknown_type_is_invalid(name):
    assert property_type_from_string(name) is Type.INVALID


def test_strides_follow_property_table():
    names = ["bogus", "char", "uchar", "short", "ushort", "int", "uint", "float", "double"]
    strides = [property_type_from_string(name).stride for name in names]
    assert strides == [0, 1, 1, 2, 2, 4, 4, 4, 8]


def test_ply_name_round_trips_through_lookup():
    for t in Type:
        if t is not Type.INVALID:
            assert property_type_from_string(t.ply_name) is t
    assert Type.INVALID.ply_name == "INVALID"


def test_struct_code_size_matches_stride():
    for t in Type:
        if t is Type.INVALID:
            continue
        packed = struct.pack("<" + t.struct_code, 1)
        assert len(packed) == t.stride
        assert PlyData(t, bytearray(packed), count=1).to_list() == [1]


def test_property_defaults():
    prop = PlyProperty("x")
    assert (prop.property_type, prop.is_list, prop.list_type, prop.list_count) == (
        Type.INVALID,
        False,
        Type.INVALID,
        0,
    )


def test_element_properties_not_shared():
    a = PlyElement("vertex", 3)
    b = PlyElement("face", 1)
    a.properties.append(PlyProperty("x", Type.FLOAT32))
    assert b.properties == []
    assert a.size == 3


def test_to_list_float_round_trip():
    values = [1.5, -2.25, 0.0, 8.0]
    data = PlyData(Type.FLOAT32, bytearray(struct.pack("<4f", *values)), count=4)
    assert data.to_list() == values


def test_to_list_signed_integers():
    values = [-1, 300, -32768]
    data = PlyData(Type.INT16, bytearray(struct.pack("<3h", *values)), count=3)
    assert data.to_list() == values


def test_to_list_ignores_trailing_partial_value():
    data = PlyData(Type.UINT32, bytearray(struct.pack("<2I", 7, 9) + b"\x01"))
    assert data.to_list() == [7, 9]


def test_to_list_invalid_type_raises():
    with pytest.raises(ValueError):
        PlyData().to_list()