from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
import structlog

from .errors import (
    IndexOutOfRangeError,
    InconsistentHullOutputError,
    InsufficientInputError,
    check_index,
)
from .geometry import as_sites, orient_triangles_ccw
from .hull import HullFunction, convex_hull_triangles
from .options import DEFAULT_EPS, MIN_SITES, TriangulationOptions

logger = structlog.get_logger()


def freeze_array(a: np.ndarray) -> np.ndarray:
    a.flags.writeable = False
    return a


def next_vertex(tri: Sequence[int], site_index: int) -> int:
    """
    Vertex following site_index in the cyclic order of tri.
    """
    a, b, c = tri
    if site_index == a:
        return int(b)
    if site_index == b:
        return int(c)
    if site_index == c:
        return int(a)
    raise IndexOutOfRangeError(
        "site", site_index, None,
        message=f"site {site_index} is not a vertex of triangle {tuple(int(x) for x in tri)}",
    )


def prev_vertex(tri: Sequence[int], site_index: int) -> int:
    """
    Vertex preceding site_index in the cyclic order of tri.
    """
    a, b, c = tri
    if site_index == a:
        return int(c)
    if site_index == b:
        return int(a)
    if site_index == c:
        return int(b)
    raise IndexOutOfRangeError(
        "site", site_index, None,
        message=f"site {site_index} is not a vertex of triangle {tuple(int(x) for x in tri)}",
    )


@dataclass(frozen=True, eq=False)
class Triangulation:
    """
    Spherical Delaunay triangulation with CSR vertex -> triangle incidence.

    - sites: (N,3) float64 unit vectors
    - triangles: (T,3) int64, CCW seen from outside the sphere
    - incident_triangle_offsets: (N+1,) int64
    - incident_triangle_indices: (3T,) int64; the slice of site v is its closed fan
      of triangles, next_vertex(fan[k-1], v) == prev_vertex(fan[k], v). With CCW
      triangles this walks around v clockwise when seen from outside the sphere.

    All arrays are read-only.
    """
    sites: np.ndarray
    triangles: np.ndarray
    incident_triangle_indices: np.ndarray
    incident_triangle_offsets: np.ndarray

    @property
    def num_sites(self) -> int:
        return int(len(self.incident_triangle_offsets) - 1)

    @property
    def num_triangles(self) -> int:
        return int(len(self.triangles))

    def incident_triangles(self, site_index: int) -> np.ndarray:
        """
        Fan-ordered triangle indices around a site (view, no copy).
        """
        v = check_index("site", site_index, self.num_sites)
        start = self.incident_triangle_offsets[v]
        end = self.incident_triangle_offsets[v + 1]
        return self.incident_triangle_indices[start:end]

    def triangle_vertices(self, triangle_index: int) -> np.ndarray:
        """
        (3,3) positions of the triangle's sites, in triangle order.
        """
        t = check_index("triangle", triangle_index, self.num_triangles)
        return self.sites[self.triangles[t]]

    def next_vertex(self, triangle_index: int, site_index: int) -> int:
        t = check_index("triangle", triangle_index, self.num_triangles)
        return next_vertex(self.triangles[t], site_index)

    def prev_vertex(self, triangle_index: int, site_index: int) -> int:
        t = check_index("triangle", triangle_index, self.num_triangles)
        return prev_vertex(self.triangles[t], site_index)


def _sort_incident_fan(site_index: int, fan: List[int], triangles: List[List[int]]) -> None:
    """
    Reorder fan in place so that next_vertex(fan[i-1]) == prev_vertex(fan[i]).
    Selection-sort style, O(k^2) for a site of degree k.
    """
    k = len(fan)
    if k < 3:
        raise InconsistentHullOutputError(
            f"site has {k} incident triangles, at least 3 required", site_index=site_index
        )

    for i in range(1, k):
        nxt = next_vertex(triangles[fan[i - 1]], site_index)
        for j in range(i, k):
            if prev_vertex(triangles[fan[j]], site_index) == nxt:
                fan[i], fan[j] = fan[j], fan[i]
                break
        else:
            raise InconsistentHullOutputError(
                "incident triangles do not form a connected fan", site_index=site_index
            )

    if next_vertex(triangles[fan[-1]], site_index) != prev_vertex(triangles[fan[0]], site_index):
        raise InconsistentHullOutputError(
            "incident triangle fan does not close", site_index=site_index
        )


def compute_delaunay_triangulation(
    sites: np.ndarray,
    *,
    eps: float = DEFAULT_EPS,
    hull: Optional[HullFunction] = None,
) -> Triangulation:
    """
    Delaunay triangulation of unit-sphere sites from their convex hull.

    - hull: callable (points, reorient, simplify, eps) -> point-index triples.
      Defaults to the Qhull-backed convex_hull_triangles. Its output is validated:
      exactly 2*(N-2) triangles (Euler) over valid site indices.

    Raises InvalidToleranceError, InsufficientInputError, InconsistentHullOutputError.
    """
    opts = TriangulationOptions(eps=eps)
    if hull is None:
        hull = convex_hull_triangles

    S = np.array(as_sites(sites), dtype=np.float64, copy=True)
    n_sites = int(len(S))
    if n_sites < MIN_SITES:
        raise InsufficientInputError(n_sites, MIN_SITES)

    logger.debug("Computing Delaunay triangulation", num_sites=n_sites, eps=opts.eps)

    n_tri = 2 * (n_sites - 2)
    flat = np.asarray(hull(S, True, True, opts.eps), dtype=np.int64).ravel()
    if flat.size != 3 * n_tri:
        logger.warning("Hull triangle count mismatch", expected=n_tri, index_count=int(flat.size))
        raise InconsistentHullOutputError(
            f"hull returned {flat.size} indices, not a sphere triangulation",
            expected=n_tri,
            actual=int(flat.size) // 3,
        )
    if flat.min() < 0 or flat.max() >= n_sites:
        logger.warning(
            "Hull site index out of range",
            num_sites=n_sites,
            min_index=int(flat.min()),
            max_index=int(flat.max()),
        )
        raise InconsistentHullOutputError(
            f"hull references site indices outside [0, {n_sites})"
        )

    tris = orient_triangles_ccw(S, flat.reshape(n_tri, 3).copy())

    # counting pass + prefix sum
    counts = np.bincount(tris.ravel(), minlength=n_sites)
    offsets = np.zeros(n_sites + 1, dtype=np.int64)
    np.cumsum(counts, out=offsets[1:])

    # placement pass: a stable sort of the (triangle, corner) incidences by site
    # writes each site's triangles at consecutive positions from its start offset
    order = np.argsort(tris.ravel(), kind="stable")
    indices = (order // 3).astype(np.int64)

    tri_list = tris.tolist()
    idx_list = indices.tolist()
    off = offsets.tolist()
    for v in range(n_sites):
        fan = idx_list[off[v]:off[v + 1]]
        try:
            _sort_incident_fan(v, fan, tri_list)
        except InconsistentHullOutputError as exc:
            logger.warning("Incident triangle sort failed", site_index=v, reason=exc.reason)
            raise
        idx_list[off[v]:off[v + 1]] = fan

    indices = np.asarray(idx_list, dtype=np.int64)

    logger.debug("Delaunay triangulation complete", num_sites=n_sites, num_triangles=n_tri)

    return Triangulation(
        sites=freeze_array(S),
        triangles=freeze_array(tris),
        incident_triangle_indices=freeze_array(indices),
        incident_triangle_offsets=freeze_array(offsets),
    )
