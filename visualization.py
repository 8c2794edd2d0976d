import numpy as np
import seaborn as sns

from metrics import cluster_sizes

CLUSTER_COLORS = [
    "#E63946", "#457B9D", "#2A9D8F", "#E9C46A", "#F4A261",
    "#264653", "#6A0572", "#AB83A1", "#1D3557", "#A8DADC",
]

sns.set_style("whitegrid")


def cluster_color(cluster_id):
    return CLUSTER_COLORS[cluster_id % len(CLUSTER_COLORS)]


def plot_clusters(ax, data, labels, centroids, title, annotate=True):
    """Scatter each cluster in its own colour and mark the final centroids."""
    k = len(centroids)
    sizes = cluster_sizes(labels, k)

    for i in range(k):
        pts = data[labels == i]
        color = cluster_color(i)
        if len(pts):
            ax.scatter(
                pts[:, 0], pts[:, 1],
                s=40, alpha=0.7, color=color, edgecolors="none",
                label=f"C{i} ({sizes[i]} pts)", zorder=2,
            )
        ax.scatter(
            centroids[i, 0], centroids[i, 1],
            s=220, color=color, marker="X",
            edgecolors="black", linewidths=1.5, zorder=4,
        )
        if annotate:
            ax.annotate(
                f"C{i}",
                xy=centroids[i], fontsize=9, fontweight="bold",
                ha="center", va="bottom",
                xytext=(0, 12), textcoords="offset points",
                bbox=dict(boxstyle="round,pad=0.3", facecolor="white",
                          edgecolor=color, alpha=0.85),
                zorder=5,
            )

    ax.set_title(title, fontsize=14, fontweight="bold", pad=12)
    ax.set_xlabel("x", fontsize=12)
    ax.set_ylabel("y", fontsize=12)
    ax.legend(fontsize=8, loc="best", framealpha=0.9)
    ax.grid(True, alpha=0.15, linestyle="--")


def plot_cluster_sizes(ax, labels, k, title):
    """Bar chart of points per cluster."""
    sizes = cluster_sizes(labels, k)
    names = [f"C{i}" for i in range(k)]
    bars = ax.bar(names, sizes, color=[cluster_color(i) for i in range(k)],
                  edgecolor="white", linewidth=1.5)
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.set_ylabel("Number of Points")
    top = max(int(np.max(sizes)), 1)
    for bar, val in zip(bars, sizes):
        ax.text(
            bar.get_x() + bar.get_width() / 2,
            bar.get_height() + top * 0.02,
            str(val), ha="center", fontsize=10,
        )
