"""Core data types for PLY headers and property data."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field


class Type(enum.Enum):
    """Scalar types a PLY property can hold."""

    INVALID = (0, 0, "INVALID", "")
    INT8 = (1, 1, "char", "b")
    UINT8 = (2, 1, "uchar", "B")
    INT16 = (3, 2, "short", "h")
    UINT16 = (4, 2, "ushort", "H")
    INT32 = (5, 4, "int", "i")
    UINT32 = (6, 4, "uint", "I")
    FLOAT32 = (7, 4, "float", "f")
    FLOAT64 = (8, 8, "double", "d")

    def __init__(self, code: int, stride: int, ply_name: str, struct_code: str) -> None:
        self.code = code
        self.stride = stride
        self.ply_name = ply_name
        self.struct_code = struct_code

    @property
    def is_float(self) -> bool:
        return self in (Type.FLOAT32, Type.FLOAT64)


_TYPE_NAMES = {
    "int8": Type.INT8,
    "char": Type.INT8,
    "uint8": Type.UINT8,
    "uchar": Type.UINT8,
    "int16": Type.INT16,
    "short": Type.INT16,
    "uint16": Type.UINT16,
    "ushort": Type.UINT16,
    "int32": Type.INT32,
    "int": Type.INT32,
    "uint32": Type.UINT32,
    "uint": Type.UINT32,
    "float32": Type.FLOAT32,
    "float": Type.FLOAT32,
    "float64": Type.FLOAT64,
    "double": Type.FLOAT64,
}


def property_type_from_string(name: str) -> Type:
    """Map a PLY type name (either spelling) to a Type; unknown names give INVALID."""
    return _TYPE_NAMES.get(name, Type.INVALID)


@dataclass
class PlyProperty:
    """A property declared on an element."""

    name: str
    property_type: Type = Type.INVALID
    is_list: bool = False
    list_type: Type = Type.INVALID
    list_count: int = 0


@dataclass
class PlyElement:
    """An element declared in the header, with its properties in order."""

    name: str
    size: int = 0
    properties: list[PlyProperty] = field(default_factory=list)


@dataclass
class PlyData:
    """A block of property values stored as little-endian bytes."""

    type: Type = Type.INVALID
    buffer: bytearray = field(default_factory=bytearray)
    count: int = 0
    is_list: bool = False

    def to_list(self) -> list:
        """Decode the buffer into a flat list of numbers."""
        if self.type is Type.INVALID:
            raise ValueError("cannot decode data of invalid type")
        stride = self.type.stride
        n = len(self.buffer) // stride
        raw = bytes(self.buffer[: n * stride])
        return list(struct.unpack(f"<{n}{self.type.struct_code}", raw))