from __future__ import annotations

import numpy as np


def sample_points_on_sphere(
    n: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Uniform sampling on the unit sphere (normalized isotropic Gaussian triples).
    Deterministic given rng seed.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    pts = rng.standard_normal((int(n), 3))
    norm = np.linalg.norm(pts, axis=1)
    # a zero vector has probability zero; redraw just in case
    while np.any(norm < 1e-12):
        bad = norm < 1e-12
        pts[bad] = rng.standard_normal((int(bad.sum()), 3))
        norm = np.linalg.norm(pts, axis=1)
    return pts / norm[:, None]
