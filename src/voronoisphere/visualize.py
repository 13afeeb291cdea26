import matplotlib.pyplot as plt
import numpy as np


def plot_voronoi_sphere(diagram, ax=None, *, show_sites: bool = True):
    if ax is None:
        fig = plt.figure()
        ax = fig.add_subplot(projection="3d")

    for cell in diagram.cells():
        p = cell.vertices
        loop = np.vstack([p, p[:1]])
        ax.plot(*loop.T, "-k", linewidth=0.8)

    if show_sites:
        ax.scatter(*diagram.sites.T, s=4, c="tab:red")

    ax.set_box_aspect((1, 1, 1))
    ax.set_title("Voronoi (sphere)")
    return ax
