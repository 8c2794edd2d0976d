import os

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")  # non-interactive backend, figures go to disk
import matplotlib.pyplot as plt

from kmeans import KMeans, as_points
from visualization import plot_clusters, plot_cluster_sizes

# the ten collinear points (0, 0) .. (9, 9)
REFERENCE_POINTS = [(float(i), float(i)) for i in range(10)]


def load_points(path=None):
    if path is None:
        return as_points(REFERENCE_POINTS)
    df = pd.read_csv(path)
    missing = {"x", "y"} - set(df.columns)
    if missing:
        raise ValueError(f"{path} is missing column(s): {', '.join(sorted(missing))}")
    return as_points(df[["x", "y"]].dropna().values)


def run_kmeans(data, k, **options):
    print(f"\n[1/2] Loaded {len(data)} points | X range: [{data[:, 0].min():.2f}, {data[:, 0].max():.2f}] | Y range: [{data[:, 1].min():.2f}, {data[:, 1].max():.2f}]")
    print(f"\n[2/2] Running K-Means (k={k})...")
    model = KMeans(k=k, **options).fit(data)

    status = "Converged" if model.converged else "Stopped at iteration cap"
    print(f"  {status} after {model.n_iter} iterations")
    print(f"  Inertia: {model.inertia:,.4f}")
    for i in range(model.k):
        c = int(np.sum(model.labels == i))
        print(f"  Cluster {i}: {c} points, centroid=({model.centroids[i, 0]:.2f}, {model.centroids[i, 1]:.2f})")
    return model


def format_assignments(data, labels):
    return [
        f"Point ({x:g}, {y:g}) assigned to cluster {int(c)}"
        for (x, y), c in zip(data, labels)
    ]


def assignments_frame(data, labels):
    return pd.DataFrame({"x": data[:, 0], "y": data[:, 1], "cluster": np.asarray(labels, dtype=int)})


def save_cluster_plot(data, model, path):
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    fig, axes = plt.subplots(1, 2, figsize=(18, 7), gridspec_kw={"width_ratios": [2, 1]})
    plot_clusters(axes[0], data, model.labels, model.centroids, f"K-Means Clustering (k={model.k})")
    plot_cluster_sizes(axes[1], model.labels, model.k, "Cluster Sizes")
    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return path
