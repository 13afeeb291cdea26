import numpy as np


def as_sites(points) -> np.ndarray:
    """
    Coerce to a (N,3) float64 array.
    """
    P = np.asarray(points, dtype=np.float64)
    if P.ndim != 2 or P.shape[1] != 3:
        raise ValueError("sites must be (N,3)")
    return P


def normalize_rows(v: np.ndarray) -> np.ndarray:
    n = np.linalg.norm(v, axis=1)
    return v / n[:, None]


def triangle_normals(points: np.ndarray, triangles: np.ndarray) -> np.ndarray:
    """
    Unnormalized normals cross(p1 - p0, p2 - p0) for every (T,3) triangle row.
    """
    p0 = points[triangles[:, 0]]
    p1 = points[triangles[:, 1]]
    p2 = points[triangles[:, 2]]
    return np.cross(p1 - p0, p2 - p0)


def _points_outward(points: np.ndarray, triangles: np.ndarray, n: np.ndarray) -> np.ndarray:
    """
    Mask of triangle normals pointing away from the hull interior.
    The site centroid is always inside the hull, the sphere center is not
    when all sites share one hemisphere.
    """
    inner = points.mean(axis=0)
    p0 = points[triangles[:, 0]]
    return np.einsum("ij,ij->i", n, p0 - inner[None, :]) >= 0


def orient_triangles_ccw(points: np.ndarray, triangles: np.ndarray) -> np.ndarray:
    """
    Reorder vertices in place so each triangle is CCW seen from outside the hull;
    inward-facing triangles get the last two vertices swapped.
    """
    n = triangle_normals(points, triangles)
    flip = ~_points_outward(points, triangles, n)
    triangles[flip] = triangles[flip][:, [0, 2, 1]]
    return triangles


def triangle_circumcenters(points: np.ndarray, triangles: np.ndarray) -> np.ndarray:
    """
    Unit circumcenters on the sphere, one per triangle:
    cross(p0 - p1, p1 - p2), flipped to face out of the hull, normalized.
    This is the center of the triangle's empty circumcircle.
    """
    p0 = points[triangles[:, 0]]
    p1 = points[triangles[:, 1]]
    p2 = points[triangles[:, 2]]

    c = np.cross(p0 - p1, p1 - p2)
    flip = ~_points_outward(points, triangles, c)
    c[flip] *= -1.0
    return normalize_rows(c)
