"""Writing PLY headers and payloads from in-memory property data."""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass, field
from typing import BinaryIO, Iterable, Iterator

from .header import PlyHeader
from .types import PlyData, PlyProperty, Type

_Table = dict[tuple[str, str], "Source"]


@dataclass(eq=False)
class Source:
    """Values for a group of properties of one element.

    Values of all properties in the group are stored interleaved, row by row,
    in ``data.buffer`` as little-endian bytes.
    """

    element: str
    properties: list[str]
    data: PlyData = field(default_factory=PlyData)


def _lookup(sources: Iterable[Source]) -> _Table:
    table: _Table = {}
    for source in sources:
        for name in source.properties:
            table.setdefault((source.element, name), source)
    return table


def _emit(stream, chunk: bytes) -> None:
    if isinstance(stream, io.TextIOBase):
        stream.write(chunk.decode("latin-1"))
    else:
        stream.write(chunk)


def _header_bytes(header: PlyHeader, table: _Table, is_binary: bool) -> bytes:
    lines = ["ply", "format binary_little_endian 1.0" if is_binary else "format ascii 1.0"]
    lines.extend(f"comment {comment}" for comment in header.comments)
    for element in header.elements:
        lines.append(f"element {element.name} {element.size}")
        for prop in element.properties:
            if (element.name, prop.name) not in table:
                continue
            if prop.is_list:
                lines.append(
                    f"property list {prop.list_type.ply_name} "
                    f"{prop.property_type.ply_name} {prop.name}"
                )
            else:
                lines.append(f"property {prop.property_type.ply_name} {prop.name}")
    lines.append("end_header")
    return ("\n".join(lines) + "\n").encode("latin-1")


def _rows(header: PlyHeader, table: _Table) -> Iterator[list[tuple[PlyProperty, Source]]]:
    for element in header.elements:
        props = [
            (prop, table[(element.name, prop.name)])
            for prop in element.properties
            if (element.name, prop.name) in table
        ]
        for _ in range(element.size):
            yield props


class _Cursors:
    """Tracks how far into each source's buffer the writer has got."""

    def __init__(self) -> None:
        self._offsets: dict[Source, int] = {}

    def take(self, source: Source, size: int) -> bytes:
        offset = self._offsets.get(source, 0)
        end = offset + size
        buffer = source.data.buffer
        if end > len(buffer):
            raise ValueError(
                f"data for element {source.element!r} is shorter than the header declares"
            )
        self._offsets[source] = end
        return bytes(buffer[offset:end])


def _value_count(prop: PlyProperty) -> int:
    return prop.list_count if prop.is_list else 1


def _binary_payload(header: PlyHeader, table: _Table) -> bytes:
    cursors = _Cursors()
    out: list[bytes] = []
    for props in _rows(header, table):
        for prop, source in props:
            n = _value_count(prop)
            if prop.is_list:
                stride = prop.list_type.stride
                mask = (1 << (8 * stride)) - 1
                out.append((prop.list_count & mask).to_bytes(stride, "little"))
            out.append(cursors.take(source, n * prop.property_type.stride))
    return b"".join(out)


def _format_value(value_type: Type, value) -> str:
    if value_type.is_float:
        return f"{value:g}"
    return str(value)


def _ascii_payload(header: PlyHeader, table: _Table) -> bytes:
    cursors = _Cursors()
    lines: list[str] = []
    for props in _rows(header, table):
        parts: list[str] = []
        for prop, source in props:
            n = _value_count(prop)
            if prop.is_list:
                parts.append(str(prop.list_count))
            if n == 0:
                continue
            value_type = prop.property_type
            if value_type is Type.INVALID:
                raise ValueError("invalid ply property")
            raw = cursors.take(source, n * value_type.stride)
            values = struct.unpack(f"<{n}{value_type.struct_code}", raw)
            parts.extend(_format_value(value_type, v) for v in values)
        lines.append("".join(f"{part} " for part in parts) + "\n")
    return "".join(lines).encode("latin-1")


def write_header(stream: BinaryIO, header: PlyHeader, sources: Iterable[Source], is_binary: bool) -> None:
    """Write the header; only properties that have a source are declared."""
    _emit(stream, _header_bytes(header, _lookup(sources), is_binary))


def write_ply(stream: BinaryIO, header: PlyHeader, sources: Iterable[Source], is_binary: bool) -> None:
    """Write a whole PLY file, ASCII or little-endian binary."""
    table = _lookup(sources)
    head = _header_bytes(header, table, is_binary)
    payload = _binary_payload(header, table) if is_binary else _ascii_payload(header, table)
    _emit(stream, head + payload)