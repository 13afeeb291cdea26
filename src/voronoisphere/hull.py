from __future__ import annotations

from typing import Callable

import numpy as np
import structlog
from scipy.spatial import ConvexHull, QhullError

from .errors import InconsistentHullOutputError
from .geometry import triangle_normals

logger = structlog.get_logger()

# (points, reorient, simplify, eps) -> (M,3) int array of point-index triples
HullFunction = Callable[[np.ndarray, bool, bool, float], np.ndarray]


def convex_hull_triangles(
    points: np.ndarray,
    reorient: bool = True,
    simplify: bool = True,
    eps: float = 1e-12,
) -> np.ndarray:
    """
    Triangulated convex hull boundary of a 3D point set via Qhull.

    - reorient: make every triple CCW w.r.t. Qhull's outward facet normal
    - simplify: drop triples whose (unnormalized) normal length is <= eps,
      i.e. the zero-area simplices Qhull's triangulated output may contain
    """
    P = np.asarray(points, dtype=np.float64)

    try:
        hull = ConvexHull(P)
    except QhullError as exc:
        # flat or otherwise degenerate input, Qhull cannot build an initial simplex
        lines = str(exc).strip().splitlines()
        first = lines[0] if lines else type(exc).__name__
        logger.warning("Qhull failed", num_points=len(P), error=first)
        raise InconsistentHullOutputError(f"convex hull failed: {first}") from exc

    tris = np.array(hull.simplices, dtype=np.int64)
    if len(tris) == 0:
        return tris.reshape(0, 3)

    n = triangle_normals(P, tris)

    if reorient:
        outward = hull.equations[:, :3]
        flip = np.einsum("ij,ij->i", n, outward) < 0
        tris[flip] = tris[flip][:, [0, 2, 1]]

    if simplify:
        keep = np.linalg.norm(n, axis=1) > float(eps)
        if not np.all(keep):
            logger.debug("Dropping degenerate hull triangles", count=int((~keep).sum()))
        tris = tris[keep]

    return tris
