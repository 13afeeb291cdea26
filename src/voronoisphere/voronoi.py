from __future__ import annotations

from typing import Optional

import numpy as np
import structlog

from .diagram import VoronoiDiagramSphere
from .geometry import triangle_circumcenters
from .hull import HullFunction
from .options import DEFAULT_EPS
from .triangulation import Triangulation, compute_delaunay_triangulation, freeze_array

logger = structlog.get_logger()


def voronoi_from_triangulation(dt: Triangulation) -> VoronoiDiagramSphere:
    """
    Dual Voronoi diagram of a spherical Delaunay triangulation.

    The cell of site v reuses v's sorted triangle fan as its vertex loop (vertex i is
    the circumcenter of triangle i). Its k-th neighbor is next_vertex(fan[k], v),
    the site across the edge between cell vertex k and k+1.
    """
    tris = dt.triangles
    offsets = dt.incident_triangle_offsets
    fan = dt.incident_triangle_indices

    vertices = triangle_circumcenters(dt.sites, tris)

    # owner site of every incidence slot, then its corner inside the triangle
    owner = np.repeat(np.arange(dt.num_sites, dtype=np.int64), np.diff(offsets))
    corner_tris = tris[fan]
    corner = np.argmax(corner_tris == owner[:, None], axis=1)
    neighbors = corner_tris[np.arange(len(fan)), (corner + 1) % 3].astype(np.int64)

    logger.debug("Voronoi diagram built", num_cells=dt.num_sites, num_vertices=len(vertices))

    return VoronoiDiagramSphere(
        sites=dt.sites,
        vertices=freeze_array(vertices),
        cell_vertices=fan,
        cell_neighbors=freeze_array(neighbors),
        cell_offsets=offsets,
    )


def compute_voronoi_sphere(
    sites: np.ndarray,
    *,
    eps: float = DEFAULT_EPS,
    hull: Optional[HullFunction] = None,
) -> VoronoiDiagramSphere:
    """
    Spherical Voronoi diagram for (N,3) unit-sphere sites, N >= 4.

    Construction goes through the Delaunay triangulation (convex hull of the
    sites); errors from that step propagate unchanged.
    """
    dt = compute_delaunay_triangulation(sites, eps=eps, hull=hull)
    d = voronoi_from_triangulation(dt)
    logger.info("Computed spherical Voronoi diagram", num_cells=d.num_cells(), num_vertices=len(d.vertices))
    return d
