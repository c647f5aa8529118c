"""Read and write PLY polygon mesh files in ASCII and binary encodings."""

__version__ = "2.3.4"
__all__ = ["types", "header", "reader", "writer", "plyfile", "geometry", "cli"]