"""Sample geometry and file helpers used by the example command."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

Float2 = tuple[float, float]
Float3 = tuple[float, float, float]
UInt3 = tuple[int, int, int]


@dataclass
class Geometry:
    """A simple indexed triangle mesh."""

    vertices: list[Float3] = field(default_factory=list)
    normals: list[Float3] = field(default_factory=list)
    texcoords: list[Float2] = field(default_factory=list)
    triangles: list[UInt3] = field(default_factory=list)


# Each cube vertex: position, normal, texture coordinate.
_CUBE_VERTICES: tuple[tuple[Float3, Float3, Float2], ...] = (
    ((-1, -1, -1), (-1, 0, 0), (0, 0)), ((-1, -1, +1), (-1, 0, 0), (1, 0)),
    ((-1, +1, +1), (-1, 0, 0), (1, 1)), ((-1, +1, -1), (-1, 0, 0), (0, 1)),
    ((+1, -1, +1), (+1, 0, 0), (0, 0)), ((+1, -1, -1), (+1, 0, 0), (1, 0)),
    ((+1, +1, -1), (+1, 0, 0), (1, 1)), ((+1, +1, +1), (+1, 0, 0), (0, 1)),
    ((-1, -1, -1), (0, -1, 0), (0, 0)), ((+1, -1, -1), (0, -1, 0), (1, 0)),
    ((+1, -1, +1), (0, -1, 0), (1, 1)), ((-1, -1, +1), (0, -1, 0), (0, 1)),
    ((+1, +1, -1), (0, +1, 0), (0, 0)), ((-1, +1, -1), (0, +1, 0), (1, 0)),
    ((-1, +1, +1), (0, +1, 0), (1, 1)), ((+1, +1, +1), (0, +1, 0), (0, 1)),
    ((-1, -1, -1), (0, 0, -1), (0, 0)), ((-1, +1, -1), (0, 0, -1), (1, 0)),
    ((+1, +1, -1), (0, 0, -1), (1, 1)), ((+1, -1, -1), (0, 0, -1), (0, 1)),
    ((-1, +1, +1), (0, 0, +1), (0, 0)), ((-1, -1, +1), (0, 0, +1), (1, 0)),
    ((+1, -1, +1), (0, 0, +1), (1, 1)), ((+1, +1, +1), (0, 0, +1), (0, 1)),
)

_CUBE_QUADS = ((0, 1, 2, 3), (4, 5, 6, 7), (8, 9, 10, 11),
               (12, 13, 14, 15), (16, 17, 18, 19), (20, 21, 22, 23))


def _floats(values) -> tuple[float, ...]:
    return tuple(float(v) for v in values)


def make_cube_geometry() -> Geometry:
    """Build a unit cube of 24 vertices and 12 triangles, two per face."""
    cube = Geometry()
    for x, y, z, w in _CUBE_QUADS:
        cube.triangles.append((x, y, z))
        cube.triangles.append((x, z, w))
    for position, normal, texcoord in _CUBE_VERTICES:
        cube.vertices.append(_floats(position))
        cube.normals.append(_floats(normal))
        cube.texcoords.append(_floats(texcoord))
    return cube


def read_file_binary(path: str | os.PathLike) -> bytes:
    """Return the whole content of a file as bytes."""
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except OSError as exc:
        raise OSError(f"could not open binary file at path {os.fspath(path)}") from exc