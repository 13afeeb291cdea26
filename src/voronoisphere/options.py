from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import InvalidToleranceError

DEFAULT_EPS = 1e-12
MIN_SITES = 4


@dataclass(frozen=True)
class TriangulationOptions:
    """
    Tunables for triangulation / diagram construction.
    eps: numerical tolerance handed to the hull routine, must be > 0.
    """
    eps: float = DEFAULT_EPS

    def __post_init__(self):
        eps = float(self.eps)
        if not math.isfinite(eps) or eps <= 0:
            raise InvalidToleranceError(self.eps)
        object.__setattr__(self, "eps", eps)
