import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np

from voronoisphere.sampling import sample_points_on_sphere
from voronoisphere.visualize import plot_voronoi_sphere
from voronoisphere.voronoi import compute_voronoi_sphere


def test_plot_draws_one_loop_per_cell():
    d = compute_voronoi_sphere(sample_points_on_sphere(30, np.random.default_rng(0)))
    ax = plot_voronoi_sphere(d)
    try:
        assert len(ax.lines) == d.num_cells()
    finally:
        plt.close(ax.figure)
