"""Reading the payload of a PLY file into requested property buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO, Iterable

from .header import PlyHeader
from .types import PlyData, PlyElement, PlyProperty, Type

_EOF_MESSAGE = "unexpected EOF. malformed file?"


@dataclass(eq=False)
class Request:
    """A group of same-typed properties of one element, read into one buffer.

    Values of all properties in the group are stored interleaved, row by row,
    in ``data.buffer`` as little-endian bytes. A non-zero ``list_size_hint``
    lets the reader size the buffer up front and skip the sizing pass.
    """

    element: str
    properties: list[str]
    list_size_hint: int = 0
    data: PlyData = field(default_factory=PlyData)


def _swap_bytes(raw: bytes, stride: int) -> bytes:
    return b"".join(raw[i:i + stride][::-1] for i in range(0, len(raw), stride))


class _BinarySource:
    def __init__(self, payload: bytes, big_endian: bool) -> None:
        self._view = memoryview(payload)
        self._pos = 0
        self._big_endian = big_endian

    def _take(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._view):
            raise ValueError(_EOF_MESSAGE)
        chunk = bytes(self._view[self._pos:end])
        self._pos = end
        return chunk

    def values(self, value_type: Type, n: int) -> bytes:
        raw = self._take(value_type.stride * n)
        if self._big_endian and value_type.stride > 1:
            raw = _swap_bytes(raw, value_type.stride)
        return raw

    def skip(self, value_type: Type, n: int) -> None:
        self._take(value_type.stride * n)

    def count(self, count_type: Type, previous: int) -> int:
        if count_type.stride == 0:
            return previous
        raw = self._take(count_type.stride)
        swap = self._big_endian and not count_type.is_float
        return int.from_bytes(raw, "big" if swap else "little")


def _parse_int(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        pass
    try:
        return int(float(token))
    except (ValueError, OverflowError):
        raise ValueError(f"malformed ascii value: {token!r}") from None


def _encode_ascii(value_type: Type, token: str) -> bytes:
    if value_type is Type.INVALID:
        raise ValueError("invalid ply property")
    if value_type.is_float:
        import struct

        try:
            value = float(token)
        except ValueError:
            raise ValueError(f"malformed ascii value: {token!r}") from None
        try:
            return struct.pack("<" + value_type.struct_code, value)
        except OverflowError:
            return struct.pack("<" + value_type.struct_code, float("inf") if value > 0 else float("-inf"))
    mask = (1 << (8 * value_type.stride)) - 1
    return (_parse_int(token) & mask).to_bytes(value_type.stride, "little")


class _AsciiSource:
    def __init__(self, payload: bytes) -> None:
        self._tokens = iter(payload.decode("latin-1").split())

    def _next(self) -> str:
        token = next(self._tokens, None)
        if token is None:
            raise ValueError(_EOF_MESSAGE)
        return token

    def values(self, value_type: Type, n: int) -> bytes:
        return b"".join(_encode_ascii(value_type, self._next()) for _ in range(n))

    def skip(self, value_type: Type, n: int) -> None:
        for _ in range(n):
            self._next()

    def count(self, count_type: Type, previous: int) -> int:
        if count_type is Type.INVALID:
            raise ValueError("invalid ply property")
        mask = (1 << (8 * count_type.stride)) - 1
        return _parse_int(self._next()) & mask


def _bind(request: Request, header: PlyHeader) -> None:
    """Check a request against the header and describe its data."""
    if not header.elements:
        raise ValueError("header had no elements defined. malformed file?")
    if not request.element:
        raise ValueError("`elementKey` argument is empty")
    if not request.properties:
        raise ValueError("`propertyKeys` argument is empty")
    element = header.find_element(request.element)
    if element is None:
        raise ValueError(f"the element key was not found in the header: {request.element}")
    by_name = {p.name: p for p in reversed(element.properties)}
    missing = [key for key in request.properties if key not in by_name]
    if missing:
        listed = "".join(f"{key}, " for key in missing)
        raise ValueError(f"the following property keys were not found in the header: {listed}")
    last = by_name[request.properties[-1]]
    request.data.count = element.size
    request.data.type = last.property_type
    request.data.is_list = last.is_list


def _make_source(payload: bytes, header: PlyHeader):
    if header.is_binary:
        return _BinarySource(payload, header.is_big_endian)
    return _AsciiSource(payload)


_Plan = list[tuple[PlyElement, list[tuple[PlyProperty, "Request | None"]]]]


def _sizing_pass(source, plan: _Plan) -> dict[Request, int]:
    totals: dict[Request, int] = {}
    list_size = 0
    for element, props in plan:
        for _ in range(element.size):
            for prop, request in props:
                n = 1
                if prop.is_list:
                    list_size = source.count(prop.list_type, list_size)
                    n = list_size
                source.skip(prop.property_type, n)
                if request is None:
                    continue
                totals[request] = totals.get(request, 0) + n * prop.property_type.stride
                if prop.is_list:
                    if prop.list_count == 0:
                        prop.list_count = list_size
                    if prop.list_count != list_size:
                        raise ValueError("variable length lists are not supported yet.")
    return totals


def _filling_pass(source, plan: _Plan) -> None:
    offsets: dict[Request, int] = {}
    list_size = 0
    for element, props in plan:
        for _ in range(element.size):
            for prop, request in props:
                n = 1
                if prop.is_list:
                    list_size = source.count(prop.list_type, list_size)
                    n = list_size
                if request is None:
                    source.skip(prop.property_type, n)
                    continue
                buffer = request.data.buffer
                offset = offsets.get(request, 0)
                size = n * prop.property_type.stride
                if offset + size > len(buffer):
                    raise ValueError(_EOF_MESSAGE)
                buffer[offset:offset + size] = source.values(prop.property_type, n)
                offsets[request] = offset + size


def read_data(stream: BinaryIO, header: PlyHeader, requests: Iterable[Request]) -> list[PlyData]:
    """Read the payload following a parsed header into the requested buffers.

    Returns the filled data of each request, in request order. Properties
    that were not requested are skipped.
    """
    requests = list(requests)
    lookup: dict[tuple[str, str], Request] = {}
    for request in requests:
        _bind(request, header)
        for name in request.properties:
            key = (request.element, name)
            if key in lookup:
                raise ValueError(
                    f"element-property key has already been requested: {request.element} {name}"
                )
            lookup[key] = request

    payload = stream.read()
    if isinstance(payload, str):
        payload = payload.encode("latin-1")

    plan: _Plan = [
        (element, [(prop, lookup.get((element.name, prop.name))) for prop in element.properties])
        for element in header.elements
    ]

    if any(request.list_size_hint for request in requests):
        for request in requests:
            data = request.data
            multiplier = request.list_size_hint if data.is_list else 1
            size = data.count * data.type.stride * multiplier * len(request.properties)
            data.buffer = bytearray(size)
    else:
        totals = _sizing_pass(_make_source(payload, header), plan)
        for request in requests:
            request.data.buffer = bytearray(totals.get(request, 0))

    _filling_pass(_make_source(payload, header), plan)
    return [request.data for request in requests]