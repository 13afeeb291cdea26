from .cell import VoronoiCellSphere
from .diagram import VoronoiDiagramSphere
from .errors import (
    ErrorKind,
    VoronoiSphereError,
    InsufficientInputError,
    InvalidToleranceError,
    InconsistentHullOutputError,
    IndexOutOfRangeError,
)
from .hull import convex_hull_triangles
from .options import DEFAULT_EPS, TriangulationOptions
from .sampling import sample_points_on_sphere
from .triangulation import Triangulation, compute_delaunay_triangulation, next_vertex, prev_vertex
from .voronoi import compute_voronoi_sphere, voronoi_from_triangulation

__all__ = [
    "VoronoiCellSphere",
    "VoronoiDiagramSphere",
    "Triangulation",
    "TriangulationOptions",
    "DEFAULT_EPS",
    "compute_delaunay_triangulation",
    "compute_voronoi_sphere",
    "voronoi_from_triangulation",
    "convex_hull_triangles",
    "next_vertex",
    "prev_vertex",
    "sample_points_on_sphere",
]

__all__ += [
    "ErrorKind",
    "VoronoiSphereError",
    "InsufficientInputError",
    "InvalidToleranceError",
    "InconsistentHullOutputError",
    "IndexOutOfRangeError",
]
