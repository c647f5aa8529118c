# plymesh

plymesh is a small library for reading and writing PLY (Polygon File Format)
meshes. It has no dependencies. It reads the ASCII, binary little-endian and
binary big-endian encodings. It writes ASCII and binary little-endian.

Values come back as typed, structured data: little-endian bytes in a
`PlyData`. Copying them into your own mesh types is up to you.

## Installation

```
pip install plymesh
```

## Reading a file

```python
from plymesh.plyfile import PlyFile

ply = PlyFile()
with open("mesh.ply", "rb") as stream:
    ply.parse_header(stream)

    for element in ply.elements:
        print(element.name, element.size, [p.name for p in element.properties])

    vertices = ply.request_properties_from_element("vertex", ["x", "y", "z"], 0)
    faces = ply.request_properties_from_element("face", ["vertex_indices"], 3)

    ply.read(stream)

print(vertices.count, faces.count)
print(vertices.to_list()[:3])
```

Reading happens in three steps:

1. Call `parse_header`. It reads the header and leaves the stream at the
   start of the data.
2. Request the properties you want.
3. Call `read`.

After `parse_header` you can look at the header through these members:

- `elements`
- `comments`
- `info`: the `obj_info` lines
- `is_binary`

`parse_header` returns `False` when the header holds a keyword it does not
recognise. It raises `ValueError` when a `property` line comes before any
`element` line.

Rules for requests:

- Properties requested together go into one `PlyData`. Their values are
  interleaved row by row, in the order they were asked for. All of them must
  have the same type. If they do not, `ValueError` is raised.
- Asking for an element or property that the header does not name raises
  `ValueError`. So does asking for the same property twice.
- The third argument is a list size hint. Pass `3` when every face is known
  to be a triangle: the buffers are then sized up front and the data is read
  in one pass instead of two. Pass `0` when you do not know the list length.
- Lists whose length varies from row to row are not supported. Reading them
  raises `ValueError`. So does data that ends early.

`PlyData.to_list()` decodes a buffer into a flat list of numbers.

## Writing a file

```python
from plymesh.plyfile import PlyFile
from plymesh.types import Type

ply = PlyFile()
ply.add_properties_to_element(
    "vertex", ["x", "y", "z"], Type.FLOAT32, 3,
    [0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0, 0.0],
    Type.INVALID, 0,
)
ply.add_properties_to_element(
    "face", ["vertex_indices"], Type.UINT32, 1,
    [0, 1, 2],
    Type.UINT8, 3,
)
ply.comments.append("generated by plymesh")

with open("triangle.ply", "wb") as stream:
    ply.write(stream, True)   # False writes ASCII
```

How writing works:

- The data may be raw little-endian bytes or a sequence of numbers. A
  sequence is packed with the given type.
- Passing `Type.INVALID` as the list type declares plain properties. Any
  other type declares list properties of `list_count` entries each.
- Binary output is always little-endian.
- In ASCII output, floating-point values are written with six significant
  digits.
- `write` checks only that the data is long enough for the declared counts.
  If it is too short, `ValueError` is raised.

## Lower-level modules

`PlyFile` is built from smaller parts, and you can use them directly:

- `plymesh.header.parse_header(stream)` returns a `PlyHeader`.
- `plymesh.reader.read_data(stream, header, requests)` fills a list of
  `Request` objects.
- `plymesh.writer.write_header` and `plymesh.writer.write_ply` write from a
  header and a list of `Source` objects. Only properties that have a source
  are declared.
- `plymesh.types.property_type_from_string` maps a PLY type name to a
  `Type`. Both spellings are accepted, for example `float` and `float32`.
  Unknown names map to `Type.INVALID`.

## Example command

The package installs a demonstration command:

```
plymesh-example [prefix]
```

It runs these steps:

1. Builds a textured cube with `plymesh.geometry.make_cube_geometry`.
2. Writes the cube as `<prefix>-ascii.ply` and `<prefix>-binary.ply`. The
   default prefix is `example_cube`.
3. Reads both files back and prints their headers and how many items were
   read.

## Modules

- `plymesh.types`: `Type`, `PlyProperty`, `PlyElement`, `PlyData` and
  `property_type_from_string`
- `plymesh.header`: `PlyHeader` and `parse_header`
- `plymesh.reader`: `Request` and `read_data`
- `plymesh.writer`: `Source`, `write_header` and `write_ply`
- `plymesh.plyfile`: `PlyFile`
- `plymesh.geometry`: `Geometry`, `make_cube_geometry` and `read_file_binary`
- `plymesh.cli`: the example command (`write_ply_example`, `read_ply_file`,
  `main`)