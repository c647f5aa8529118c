"""Parsing of the ASCII header that starts every PLY file."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO

from .types import PlyElement, PlyProperty, Type, property_type_from_string


@dataclass
class PlyHeader:
    """Everything a PLY header declares."""

    elements: list[PlyElement] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)
    obj_info: list[str] = field(default_factory=list)
    is_binary: bool = False
    is_big_endian: bool = False
    valid: bool = True

    def find_element(self, name: str) -> PlyElement | None:
        return next((e for e in self.elements if e.name == name), None)


def _decode(line) -> str:
    if isinstance(line, bytes):
        line = line.decode("latin-1")
    if line.endswith("\n"):
        line = line[:-1]
    return line


def _parse_size(token: str) -> int:
    try:
        return max(int(token), 0)
    except ValueError:
        return 0


def _parse_element(tokens: list[str]) -> PlyElement:
    name = tokens[0] if tokens else ""
    size = _parse_size(tokens[1]) if len(tokens) > 1 else 0
    return PlyElement(name=name, size=size)


def _parse_property(tokens: list[str]) -> PlyProperty:
    it = iter(tokens)
    type_name = next(it, "")
    is_list = type_name == "list"
    list_type = Type.INVALID
    if is_list:
        list_type = property_type_from_string(next(it, ""))
        type_name = next(it, "")
    return PlyProperty(
        name=next(it, ""),
        property_type=property_type_from_string(type_name),
        is_list=is_list,
        list_type=list_type,
    )


def parse_header(stream: BinaryIO) -> PlyHeader:
    """Read header lines up to and including ``end_header``.

    The stream is left positioned at the start of the payload. Unknown
    header keywords mark the header as not valid rather than raising.
    """
    header = PlyHeader()
    for raw in iter(stream.readline, b"" if not hasattr(stream, "encoding") else ""):
        line = _decode(raw)
        tokens = line.split()
        keyword = tokens[0] if tokens else ""
        args = tokens[1:]
        if keyword in ("ply", "PLY", ""):
            continue
        if keyword == "comment":
            header.comments.append(line[8:])
        elif keyword == "format":
            fmt = args[0] if args else ""
            if fmt == "binary_little_endian":
                header.is_binary = True
            elif fmt == "binary_big_endian":
                header.is_binary = True
                header.is_big_endian = True
        elif keyword == "element":
            header.elements.append(_parse_element(args))
        elif keyword == "property":
            if not header.elements:
                raise ValueError("no elements defined; file is malformed")
            header.elements[-1].properties.append(_parse_property(args))
        elif keyword == "obj_info":
            header.obj_info.append(line[9:])
        elif keyword == "end_header":
            break
        else:
            header.valid = False
    return header