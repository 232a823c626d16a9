"""
Group visualization utilities.

Scatter plots of two feature axes showing fuzzy membership strengths and
the final balanced groups.
"""

from typing import Optional, Sequence, Tuple

import matplotlib
import matplotlib.pyplot as plt
import numpy as np

from ..base.data_structures import ClusterCenter, Group, MembershipMatrix


def _axes_pair(dims: Tuple[int, int], dimension: int) -> Tuple[int, int]:
    if len(dims) != 2 or not all(0 <= d < dimension for d in dims):
        raise ValueError(f"dims must name two of {dimension} features, got {dims}")
    return dims


def plot_fuzzy_memberships(matrix: MembershipMatrix,
                           centers: Optional[Sequence[ClusterCenter]] = None,
                           dims: Tuple[int, int] = (0, 1),
                           ax: Optional[plt.Axes] = None,
                           threshold: float = 0.1,
                           show_all: bool = False,
                           cmap: str = 'viridis',
                           title: Optional[str] = None) -> plt.Axes:
    """Plot a fuzzy partition with membership strengths.

    Args:
        matrix: Partition matrix (e.g. ``model.partition_matrix_``)
        centers: Optional cluster centers
        dims: Which two features to draw
        ax: Matplotlib axes
        threshold: Minimum membership to show
        show_all: If True, show all points with colours mixed by membership
        cmap: Colormap name
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 8))

    X_np = np.array([[float(v) for v in row.entity.vector] for row in matrix])
    memberships_np = np.array([[float(v) for v in row.vector] for row in matrix])
    x_dim, y_dim = _axes_pair(dims, X_np.shape[1])

    n_clusters = matrix.n_clusters
    colormap = matplotlib.colormaps[cmap]

    if show_all:
        # Mix cluster colors based on memberships
        palette = np.array([colormap(k / n_clusters)[:3] for k in range(n_clusters)])
        colors = np.clip(memberships_np @ palette, 0.0, 1.0)

        # Point sizes based on max membership
        sizes = 20 + 80 * memberships_np.max(axis=1)

        ax.scatter(X_np[:, x_dim], X_np[:, y_dim],
                   c=colors,
                   s=sizes,
                   alpha=0.7,
                   edgecolors='black',
                   linewidth=0.5)
    else:
        # Show only points with membership above threshold
        for k in range(n_clusters):
            mask = memberships_np[:, k] > threshold
            if mask.any():
                ax.scatter(X_np[mask, x_dim], X_np[mask, y_dim],
                           c=[colormap(k / n_clusters)],
                           s=100 * memberships_np[mask, k],
                           alpha=0.7,
                           edgecolors='black',
                           linewidth=0.5,
                           label=f'Cluster {k + 1}')

    if centers:
        _plot_centers(ax, [c.vector for c in centers], x_dim, y_dim)

    ax.set_xlabel(f'Feature {x_dim + 1}')
    ax.set_ylabel(f'Feature {y_dim + 1}')
    ax.set_title(title or 'Fuzzy Membership')

    if not show_all:
        ax.legend()

    return ax


def plot_groups(groups: Sequence[Group],
                dims: Tuple[int, int] = (0, 1),
                ax: Optional[plt.Axes] = None,
                cmap: str = 'tab10',
                annotate: bool = False,
                title: Optional[str] = None) -> plt.Axes:
    """Plot the final disjoint groups.

    Args:
        groups: Output of ``form_groups``
        dims: Which two features to draw
        ax: Matplotlib axes
        cmap: Colormap name
        annotate: Label every point with its entity name
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))

    colormap = matplotlib.colormaps[cmap]
    dimension = len(groups[0].center) if groups else 2
    x_dim, y_dim = _axes_pair(dims, dimension)

    for index, group in enumerate(groups):
        color = colormap(index % colormap.N)
        if group.members:
            X_np = np.array([[float(v) for v in m.entity.vector] for m in group.members])
            ax.scatter(X_np[:, x_dim], X_np[:, y_dim],
                       c=[color],
                       s=50,
                       alpha=0.7,
                       label=f'Group {group.id} ({len(group)})')
            if annotate:
                for member, point in zip(group.members, X_np):
                    ax.annotate(member.entity.name, (point[x_dim], point[y_dim]),
                                fontsize=7, alpha=0.8)

    _plot_centers(ax, [g.center for g in groups], x_dim, y_dim)

    ax.set_xlabel(f'Feature {x_dim + 1}')
    ax.set_ylabel(f'Feature {y_dim + 1}')
    ax.set_title(title or 'Balanced Groups')
    ax.legend()

    return ax


def plot_objective(history: Sequence, ax: Optional[plt.Axes] = None) -> plt.Axes:
    """Plot the objective value per iteration from ``model.history_``."""
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 4))

    iterations = [record.iteration for record in history]
    objectives = [float(record.objective) for record in history]
    ax.plot(iterations, objectives, marker='o')
    ax.set_xlabel('Iteration')
    ax.set_ylabel('Objective J')
    ax.set_title('FCM Objective')
    return ax


def _plot_centers(ax: plt.Axes, vectors: Sequence, x_dim: int, y_dim: int) -> None:
    if not vectors:
        return
    centers_np = np.array([[float(v) for v in vector] for vector in vectors])
    ax.scatter(centers_np[:, x_dim], centers_np[:, y_dim],
               c='red',
               marker='X',
               s=300,
               edgecolors='white',
               linewidth=2,
               label='Centers',
               zorder=10)
