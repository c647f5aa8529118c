"""High-level access to PLY files: parse, request, read and write."""

from __future__ import annotations

import struct
from typing import BinaryIO, Iterable

from .header import PlyHeader
from .header import parse_header as _parse_ply_header
from .reader import Request, read_data
from .types import PlyData, PlyElement, PlyProperty, Type
from .writer import Source, write_ply


def _to_buffer(prop_type: Type, data) -> bytearray:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytearray(data)
    values = list(data)
    if prop_type is Type.INVALID:
        raise ValueError("cannot pack values of invalid type")
    try:
        return bytearray(struct.pack(f"<{len(values)}{prop_type.struct_code}", *values))
    except struct.error as exc:
        raise ValueError(str(exc)) from exc


class PlyFile:
    """A PLY file: its header, the properties requested for reading and data to write."""

    def __init__(self) -> None:
        self.header = PlyHeader()
        self._requests: list[Request] = []
        self._sources: dict[tuple[str, str], Source] = {}

    @property
    def elements(self) -> list[PlyElement]:
        return list(self.header.elements)

    @property
    def comments(self) -> list[str]:
        """The header comments; append to this list to add comments when writing."""
        return self.header.comments

    @property
    def info(self) -> list[str]:
        return list(self.header.obj_info)

    @property
    def is_binary(self) -> bool:
        return self.header.is_binary

    def parse_header(self, stream: BinaryIO) -> bool:
        """Parse the header; returns False if it held an unexpected keyword."""
        self.header = _parse_ply_header(stream)
        self._requests.clear()
        self._sources.clear()
        return self.header.valid

    def request_properties_from_element(
        self, element_key: str, property_keys: Iterable[str], list_size_hint: int = 0
    ) -> PlyData:
        """Ask for a group of same-typed properties; filled in by ``read``."""
        keys = list(property_keys)
        if not self.header.elements:
            raise ValueError("header had no elements defined. malformed file?")
        if not element_key:
            raise ValueError("`elementKey` argument is empty")
        if not keys:
            raise ValueError("`propertyKeys` argument is empty")
        element = self.header.find_element(element_key)
        if element is None:
            raise ValueError(f"the element key was not found in the header: {element_key}")

        by_name = {p.name: p for p in reversed(element.properties)}
        missing = [key for key in keys if key not in by_name]
        if missing:
            listed = "".join(f"{key}, " for key in missing)
            raise ValueError(f"the following property keys were not found in the header: {listed}")

        seen: set[str] = set()
        for key in keys:
            if (element_key, key) in self._sources or key in seen:
                raise ValueError(
                    f"element-property key has already been requested: {element_key} {key}"
                )
            seen.add(key)

        if len({by_name[key].property_type for key in keys}) > 1:
            raise ValueError("all requested properties must share the same type.")

        last = by_name[keys[-1]]
        data = PlyData(type=last.property_type, count=element.size, is_list=last.is_list)
        self._requests.append(Request(element_key, keys, list_size_hint, data))
        source = Source(element_key, keys, data)
        for key in keys:
            self._sources[(element_key, key)] = source
        return data

    def read(self, stream: BinaryIO) -> None:
        """Read the payload into the data returned by earlier requests."""
        read_data(stream, self.header, self._requests)

    def add_properties_to_element(
        self,
        element_key: str,
        property_keys: Iterable[str],
        prop_type: Type,
        count: int,
        data,
        list_type: Type = Type.INVALID,
        list_count: int = 0,
    ) -> None:
        """Declare properties for writing, backed by bytes or a sequence of numbers."""
        keys = list(property_keys)
        is_list = list_type is not Type.INVALID
        source = Source(
            element_key,
            keys,
            PlyData(type=prop_type, buffer=_to_buffer(prop_type, data), count=count, is_list=is_list),
        )
        element = self.header.find_element(element_key)
        if element is None:
            element = PlyElement(element_key, count)
            self.header.elements.append(element)
        for key in keys:
            element.properties.append(
                PlyProperty(
                    name=key,
                    property_type=prop_type,
                    is_list=is_list,
                    list_type=list_type,
                    list_count=list_count if is_list else 0,
                )
            )
            self._sources.setdefault((element_key, key), source)

    def write(self, stream: BinaryIO, is_binary: bool) -> None:
        """Write the file as ASCII or little-endian binary."""
        self.header.is_binary = is_binary
        self.header.is_big_endian = False
        sources = list(dict.fromkeys(self._sources.values()))
        write_ply(stream, self.header, sources, is_binary)