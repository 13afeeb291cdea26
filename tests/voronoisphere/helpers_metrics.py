from __future__ import annotations

import hashlib
from io import BytesIO
from typing import Any, Dict, Tuple

import numpy as np
from PIL import Image, ImageDraw

from voronoisphere.diagram import VoronoiDiagramSphere


def regular_tetrahedron() -> np.ndarray:
    S = np.array([
        [1.0, 1.0, 1.0],
        [1.0, -1.0, -1.0],
        [-1.0, 1.0, -1.0],
        [-1.0, -1.0, 1.0],
    ], dtype=np.float64)
    return S / np.sqrt(3.0)


def _hash_array(a: np.ndarray, decimals: int = 9) -> str:
    """
    Stable hash for numeric arrays: round + bytes hash.
    """
    b = np.round(np.asarray(a, dtype=np.float64), decimals=decimals)
    return hashlib.sha256(b.tobytes()).hexdigest()


def _hash_ints(a: np.ndarray) -> str:
    return hashlib.sha256(np.asarray(a, dtype=np.int64).tobytes()).hexdigest()


def compute_metrics_sphere(d: VoronoiDiagramSphere) -> Dict[str, Any]:
    """
    Return small, stable summary metrics + hashes.
    """
    degrees = np.diff(d.cell_offsets)
    return {
        "cell_count": int(d.num_cells()),
        "vertex_count": int(len(d.vertices)),
        "avg_neighbors": float(np.mean(degrees)) if len(degrees) else 0.0,
        "max_neighbors": int(degrees.max()) if len(degrees) else 0,
        "hash_vertices": _hash_array(d.vertices),
        "hash_cell_vertices": _hash_ints(d.cell_vertices),
        "hash_cell_neighbors": _hash_ints(d.cell_neighbors),
        "hash_cell_offsets": _hash_ints(d.cell_offsets),
    }


def _lon_lat(p: np.ndarray) -> Tuple[float, float]:
    x, y, z = map(float, p)
    return float(np.arctan2(y, x)), float(np.arcsin(np.clip(z, -1.0, 1.0)))


def render_equirect_png(
    d: VoronoiDiagramSphere,
    *,
    img_size: Tuple[int, int] = (720, 360),
) -> bytes:
    """
    Render cell edges in an equirectangular (lon/lat) projection.
    Edges crossing the antimeridian are skipped.
    """
    W, H = img_size
    img = Image.new("RGB", (W, H), (255, 255, 255))
    draw = ImageDraw.Draw(img)

    def map_pt(lon: float, lat: float):
        x = (lon + np.pi) / (2 * np.pi) * (W - 1)
        y = (np.pi / 2 - lat) / np.pi * (H - 1)
        return (x, y)

    for cell in d.cells():
        P = cell.vertices
        for k in range(len(P)):
            a = _lon_lat(P[k])
            b = _lon_lat(P[(k + 1) % len(P)])
            if abs(a[0] - b[0]) > np.pi:
                continue
            draw.line([map_pt(*a), map_pt(*b)], fill=(0, 0, 0), width=1)

    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def count_dark_pixels(png_bytes: bytes) -> int:
    img = np.asarray(Image.open(BytesIO(png_bytes)).convert("L"), dtype=np.int16)
    return int(np.sum(img < 128))
