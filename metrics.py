import numpy as np


def compute_inertia(X, labels, centroids):
    """Sum of squared distances from each point to its assigned centroid."""
    X = np.asarray(X, dtype=float)
    centroids = np.asarray(centroids, dtype=float)
    return float(np.sum((X - centroids[labels]) ** 2))


def cluster_sizes(labels, k):
    return np.bincount(np.asarray(labels, dtype=int), minlength=k)
