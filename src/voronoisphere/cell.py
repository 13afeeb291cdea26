from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Tuple

import numpy as np

from .errors import IndexOutOfRangeError, check_index

if TYPE_CHECKING:
    from .diagram import VoronoiDiagramSphere


@dataclass(frozen=True)
class VoronoiCellSphere:
    """
    Read-only view of one Voronoi cell: a site index plus the diagram it lives in.
    Holds no data of its own; every accessor reads the diagram's shared arrays.
    Vertices follow the site's triangle fan (clockwise seen from outside the
    sphere); neighbor k shares the cell edge between vertex k and vertex k+1.
    """
    index: int
    diagram: "VoronoiDiagramSphere" = field(repr=False)

    def _span(self) -> Tuple[int, int]:
        offsets = self.diagram.cell_offsets
        i = check_index("cell", self.index, len(offsets) - 1)
        return int(offsets[i]), int(offsets[i + 1])

    @property
    def site_index(self) -> int:
        return self.index

    @property
    def site(self) -> np.ndarray:
        return self.diagram.sites[self.index]

    @property
    def num_vertices(self) -> int:
        start, end = self._span()
        return end - start

    @property
    def num_neighbors(self) -> int:
        return self.num_vertices

    @property
    def vertex_indices(self) -> np.ndarray:
        start, end = self._span()
        return self.diagram.cell_vertices[start:end]

    @property
    def neighbor_indices(self) -> np.ndarray:
        start, end = self._span()
        return self.diagram.cell_neighbors[start:end]

    @property
    def vertices(self) -> np.ndarray:
        """
        (k,3) polygon of the cell (copy).
        """
        return self.diagram.vertices[self.vertex_indices]

    def vertex(self, j: int) -> np.ndarray:
        start, end = self._span()
        j = check_index("cell vertex", j, end - start)
        return self.diagram.vertices[self.diagram.cell_vertices[start + j]]

    def neighbor(self, j: int) -> "VoronoiCellSphere":
        d = self.diagram
        n_cells = d.num_cells()
        if len(d.cell_offsets) != n_cells + 1:
            raise IndexOutOfRangeError(
                "cell", self.index, n_cells,
                message=f"cell offsets describe {len(d.cell_offsets) - 1} cells, diagram has {n_cells} sites",
            )

        start, end = self._span()
        j = check_index("cell neighbor", j, end - start)
        if end > len(d.cell_neighbors):
            raise IndexOutOfRangeError("cell neighbor", start + j, len(d.cell_neighbors))
        return d.cell(int(d.cell_neighbors[start + j]))
