"""Mesh vertex data divided into sub-meshes of triangle indices."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional


@dataclass
class SubMesh:
    """One part of a mesh, drawn with its own material."""

    triangles: list[int] = field(default_factory=list)

    @property
    def triangle_count(self) -> int:
        return len(self.triangles)


@dataclass
class Mesh:
    """Per-vertex data and the sub-meshes that index into it."""

    vertices: list[Any] = field(default_factory=list)
    uvs: list[Any] = field(default_factory=list)
    normals: list[Any] = field(default_factory=list)
    colors: list[Any] = field(default_factory=list)
    weights: list[Any] = field(default_factory=list)
    bone_indices: list[Any] = field(default_factory=list)
    submeshes: list[SubMesh] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    def set_vertices(self, vertices: Optional[Iterable[Any]]) -> None:
        """Replace the vertex positions with a copy; None removes them."""
        self.vertices = [] if vertices is None else list(vertices)

    def set_uvs(self, uvs: Optional[Iterable[Any]]) -> None:
        """Replace the texture coordinates with a copy; None removes them."""
        self.uvs = [] if uvs is None else list(uvs)

    def set_submesh_count(self, count: int) -> None:
        """Discard all sub-meshes and create ``count`` empty ones."""
        if count < 0:
            raise ValueError(f"sub-mesh count cannot be negative: {count}")
        self.submeshes = [SubMesh() for _ in range(count)]

    def set_submesh_triangles(
        self, index: int, triangles: Optional[Iterable[int]]
    ) -> None:
        """Replace a sub-mesh's triangle indices with a copy; None empties it."""
        if not 0 <= index < len(self.submeshes):
            raise IndexError(
                f"sub-mesh {index} out of range for {len(self.submeshes)} sub-meshes"
            )
        self.submeshes[index].triangles = [] if triangles is None else list(triangles)

    def delete(self) -> None:
        """Release all vertex data and sub-meshes."""
        self.vertices = []
        self.uvs = []
        self.normals = []
        self.colors = []
        self.weights = []
        self.bone_indices = []
        self.submeshes = []