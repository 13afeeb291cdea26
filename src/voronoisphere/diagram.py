from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np
import trimesh

from .cell import VoronoiCellSphere
from .errors import check_index


@dataclass(frozen=True, eq=False)
class VoronoiDiagramSphere:
    """
    Spherical Voronoi diagram in flattened (CSR) form.
    - sites: (N,3) input sites
    - vertices: (T,3) unit circumcenters; vertex i is dual to Delaunay triangle i
    - cell_vertices: (3T,) vertex indices, per cell in triangle-fan order
      (clockwise seen from outside)
    - cell_neighbors: (3T,) neighbor site indices, parallel to cell_vertices
    - cell_offsets: (N+1,) cell i spans [cell_offsets[i], cell_offsets[i+1])

    Immutable after construction (arrays are read-only), so cells can be read
    from several threads without locking.
    """
    sites: np.ndarray
    vertices: np.ndarray
    cell_vertices: np.ndarray
    cell_neighbors: np.ndarray
    cell_offsets: np.ndarray

    def num_cells(self) -> int:
        return int(len(self.sites))

    def cell(self, i: int) -> VoronoiCellSphere:
        return VoronoiCellSphere(index=check_index("cell", i, self.num_cells()), diagram=self)

    def cells(self) -> Iterator[VoronoiCellSphere]:
        for i in range(self.num_cells()):
            yield VoronoiCellSphere(index=i, diagram=self)

    def to_trimesh_surface(self) -> trimesh.Trimesh:
        """
        Triangle mesh of the polyhedron spanned by the Voronoi vertices:
        every cell polygon is fan-triangulated from its first vertex, wound
        so that face normals point out of the sphere.
        """
        V = self.vertices
        tri_faces = []

        offsets = self.cell_offsets
        for i in range(self.num_cells()):
            vidx = self.cell_vertices[offsets[i]:offsets[i + 1]]
            if len(vidx) < 3:
                continue
            v0 = vidx[0]
            # fan triangulation, reversed: cell loops run clockwise from outside
            for k in range(1, len(vidx) - 1):
                tri_faces.append([v0, vidx[k + 1], vidx[k]])

        if len(tri_faces) == 0:
            return trimesh.Trimesh(vertices=np.zeros((0, 3)), faces=np.zeros((0, 3), dtype=int), process=False)

        m = trimesh.Trimesh(vertices=np.array(V), faces=np.asarray(tri_faces, dtype=int), process=False)
        m.remove_unreferenced_vertices()
        m.process(validate=True)
        return m
