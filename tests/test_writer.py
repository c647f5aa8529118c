import io
import struct

import pytest

from plymesh.header import PlyHeader, parse_header
from plymesh.reader import Request, read_data
from plymesh.types import PlyData, PlyElement, PlyProperty, Type
from plymesh.writer import Source, write_header, write_ply


def _floats(values):
    return bytearray(struct.pack(f"<{len(values)}f", *values))


def _vertex_header(size=2, extra=False):
    props = [PlyProperty("x", Type.FLOAT32), PlyProperty("y", Type.FLOAT32)]
    if extra:
        props.append(PlyProperty("w", Type.FLOAT32))
    return PlyHeader(elements=[PlyElement("vertex", size, props)])


def _xy_source(values):
    return Source("vertex", ["x", "y"], PlyData(Type.FLOAT32, _floats(values), 2))


def test_ascii_header_exact():
    out = io.BytesIO()
    write_header(out, _vertex_header(), [_xy_source([0.5, 1.5, 2.5, 3.5])], False)
    assert out.getvalue() == (
        b"ply\nformat ascii 1.0\nelement vertex 2\n"
        b"property float x\nproperty float y\nend_header\n"
    )


def test_binary_header_format_line():
    out = io.BytesIO()
    write_header(out, _vertex_header(), [_xy_source([0.5, 1.5, 2.5, 3.5])], True)
    assert out.getvalue().splitlines()[1] == b"format binary_little_endian 1.0"


def test_unsourced_property_is_omitted():
    out = io.BytesIO()
    write_header(out, _vertex_header(extra=True), [_xy_source([0.5, 1.5, 2.5, 3.5])], False)
    assert b"property float w" not in out.getvalue()
    assert b"property float y" in out.getvalue()


def test_comments_written():
    header = _vertex_header()
    header.comments.append("made here")
    out = io.BytesIO()
    write_header(out, header, [_xy_source([0.5, 1.5, 2.5, 3.5])], False)
    assert b"comment made here\n" in out.getvalue()


def test_ascii_payload_lines():
    out = io.BytesIO()
    write_ply(out, _vertex_header(), [_xy_source([0.5, 1.5, 2.5, 3.5])], False)
    body = out.getvalue().split(b"end_header\n", 1)[1]
    assert body == b"0.5 1.5 \n2.5 3.5 \n"


def test_ascii_list_payload():
    header = PlyHeader(elements=[PlyElement("face", 1, [
        PlyProperty("vertex_indices", Type.UINT32, True, Type.UINT8, 3)])])
    data = PlyData(Type.UINT32, bytearray(struct.pack("<3I", 0, 1, 2)), 1, True)
    out = io.BytesIO()
    write_ply(out, header, [Source("face", ["vertex_indices"], data)], False)
    assert out.getvalue().endswith(b"end_header\n3 0 1 2 \n")
    assert b"property list uchar uint vertex_indices" in out.getvalue()


def test_binary_list_payload_bytes():
    header = PlyHeader(elements=[PlyElement("face", 1, [
        PlyProperty("vertex_indices", Type.UINT32, True, Type.UINT8, 3)])])
    data = PlyData(Type.UINT32, bytearray(struct.pack("<3I", 0, 1, 2)), 1, True)
    out = io.BytesIO()
    write_ply(out, header, [Source("face", ["vertex_indices"], data)], True)
    body = out.getvalue().split(b"end_header\n", 1)[1]
    assert body == b"\x03\x00\x00\x00\x00\x01\x00\x00\x00\x02\x00\x00\x00"


@pytest.mark.parametrize("is_binary", [False, True])
def test_round_trip_through_reader(is_binary):
    values = [0.5, -1.0, 2.25, 8.0]
    out = io.BytesIO()
    write_ply(out, _vertex_header(), [_xy_source(values)], is_binary)
    out.seek(0)
    header = parse_header(out)
    assert header.is_binary == is_binary
    [data] = read_data(out, header, [Request("vertex", ["x", "y"])])
    assert data.to_list() == values


def test_short_source_raises():
    with pytest.raises(ValueError):
        write_ply(io.BytesIO(), _vertex_header(), [_xy_source([0.5, 1.5])], True)


def test_invalid_type_in_ascii_raises():
    header = PlyHeader(elements=[PlyElement("vertex", 1, [PlyProperty("x", Type.INVALID)])])
    source = Source("vertex", ["x"], PlyData(Type.INVALID, bytearray(4), 1))
    with pytest.raises(ValueError, match="invalid ply property"):
        write_ply(io.BytesIO(), header, [source], False)


def test_text_stream_output():
    out = io.StringIO()
    write_ply(out, _vertex_header(), [_xy_source([0.5, 1.5, 2.5, 3.5])], False)
    text = out.getvalue()
    assert text.startswith("ply\nformat ascii 1.0\n")
    assert text.endswith("0.5 1.5 \n2.5 3.5 \n")