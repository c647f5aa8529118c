"""Example command: write a cube to PLY files, then read them back."""

from __future__ import annotations

import argparse
import io
import sys
import time
from typing import Sequence

from .geometry import make_cube_geometry, read_file_binary
from .plyfile import PlyFile
from .types import PlyData, Type


def write_ply_example(filename: str) -> None:
    """Write the sample cube as ``<filename>-ascii.ply`` and ``<filename>-binary.ply``."""
    cube = make_cube_geometry()

    cube_file = PlyFile()
    cube_file.add_properties_to_element(
        "vertex", ["x", "y", "z"], Type.FLOAT32, len(cube.vertices),
        [c for v in cube.vertices for c in v], Type.INVALID, 0,
    )
    cube_file.add_properties_to_element(
        "vertex", ["nx", "ny", "nz"], Type.FLOAT32, len(cube.normals),
        [c for n in cube.normals for c in n], Type.INVALID, 0,
    )
    cube_file.add_properties_to_element(
        "vertex", ["u", "v"], Type.FLOAT32, len(cube.texcoords),
        [c for t in cube.texcoords for c in t], Type.INVALID, 0,
    )
    cube_file.add_properties_to_element(
        "face", ["vertex_indices"], Type.UINT32, len(cube.triangles),
        [i for tri in cube.triangles for i in tri], Type.UINT8, 3,
    )
    cube_file.comments.append("generated by plymesh")

    with open(f"{filename}-ascii.ply", "wb") as ascii_out:
        cube_file.write(ascii_out, False)
    with open(f"{filename}-binary.ply", "wb") as binary_out:
        cube_file.write(binary_out, True)


def _try_request(file: PlyFile, element: str, keys: list[str], hint: int = 0) -> PlyData | None:
    try:
        return file.request_properties_from_element(element, keys, hint)
    except ValueError as exc:
        print(f"ply exception: {exc}", file=sys.stderr)
        return None


def _print_header(file: PlyFile) -> None:
    print(f"\t[ply_header] Type: {'binary' if file.is_binary else 'ascii'}")
    for comment in file.comments:
        print(f"\t[ply_header] Comment: {comment}")
    for info in file.info:
        print(f"\t[ply_header] Info: {info}")
    for element in file.elements:
        print(f"\t[ply_header] element: {element.name} ({element.size})")
        for prop in element.properties:
            line = f"\t[ply_header] \tproperty: {prop.name} (type={prop.property_type.ply_name})"
            if prop.is_list:
                line += f" (list_type={prop.list_type.ply_name})"
            print(line)


def _read_stream(stream, filepath: str) -> dict[str, PlyData | None]:
    stream.seek(0, io.SEEK_END)
    size_mb = stream.tell() * 1e-6
    stream.seek(0)

    file = PlyFile()
    file.parse_header(stream)
    _print_header(file)

    results: dict[str, PlyData | None] = {
        "vertices": _try_request(file, "vertex", ["x", "y", "z"]),
        "normals": _try_request(file, "vertex", ["nx", "ny", "nz"]),
        "colors": _try_request(file, "vertex", ["red", "green", "blue", "alpha"]),
        "texcoords": _try_request(file, "vertex", ["u", "v"]),
        "faces": _try_request(file, "face", ["vertex_indices"], 3),
        "tristrips": _try_request(file, "tristrips", ["vertex_indices"], 0),
    }
    colors = _try_request(file, "vertex", ["r", "g", "b", "a"])
    if colors is not None:
        results["colors"] = colors

    start = time.perf_counter()
    file.read(stream)
    parsing_time = time.perf_counter() - start
    rate = size_mb / parsing_time if parsing_time > 0 else float("inf")
    print(f"\tparsing {size_mb:g}mb in {parsing_time:g} seconds [{rate:g} MBps]")

    labels = {
        "vertices": "total vertices",
        "normals": "total vertex normals",
        "colors": "total vertex colors",
        "texcoords": "total vertex texcoords",
        "faces": "total faces (triangles)",
    }
    for key, label in labels.items():
        data = results[key]
        if data is not None:
            print(f"\tRead {data.count} {label} ")
    strips = results["tristrips"]
    if strips is not None:
        print(f"\tRead {len(strips.buffer) // strips.type.stride} total indices (tristrip) ")
    return results


def read_ply_file(filepath: str, preload_into_memory: bool = True) -> dict[str, PlyData | None] | None:
    """Read a PLY file, print a summary, and return the common vertex and face data.

    Returns None (after reporting the error) when the file cannot be read.
    """
    print("." * 72)
    print(f"Now Reading: {filepath}")
    try:
        if preload_into_memory:
            with io.BytesIO(read_file_binary(filepath)) as stream:
                return _read_stream(stream, filepath)
        with open(filepath, "rb") as stream:
            return _read_stream(stream, filepath)
    except (OSError, ValueError) as exc:
        print(f"Caught ply exception: {exc}", file=sys.stderr)
        return None


def main(argv: Sequence[str] | None = None) -> int:
    """Write the sample cube in both encodings and read each file back."""
    parser = argparse.ArgumentParser(description="Write and read back a sample PLY cube.")
    parser.add_argument("prefix", nargs="?", default="example_cube",
                        help="path prefix of the files to write")
    args = parser.parse_args(argv)

    write_ply_example(args.prefix)
    read_ply_file(f"{args.prefix}-ascii.ply")
    read_ply_file(f"{args.prefix}-binary.ply", True)
    return 0


if __name__ == "__main__":
    sys.exit(main())