import warnings
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from metrics import compute_inertia

UNASSIGNED = -1
EMPTY_CLUSTER_POLICIES = ("keep", "reseed")
INIT_METHODS = ("random", "k-means++")


class EmptyPointSet(ValueError):
    """Raised when clustering is asked to run on zero points."""


class InvalidClusterCount(ValueError):
    """Raised when K is not in [1, number of points]."""


class DegenerateClusterWarning(RuntimeWarning):
    """A cluster received no points during an update step."""


def as_points(points):
    """Convert a sequence of (x, y) pairs into an (n, 2) float array."""
    X = np.asarray(points, dtype=float)
    if X.size == 0:
        raise EmptyPointSet("point set is empty")
    if X.ndim != 2 or X.shape[1] != 2:
        raise ValueError(f"expected points of shape (n, 2), got {X.shape}")
    return X


def check_cluster_count(k, n_points):
    try:
        integral = not isinstance(k, bool) and int(k) == k
    except (TypeError, ValueError, OverflowError):
        integral = False
    if not integral:
        raise InvalidClusterCount(f"k must be an integer, got {k!r}")
    if k < 1 or k > n_points:
        raise InvalidClusterCount(
            f"k must be between 1 and the number of points ({n_points}), got {k}"
        )
    return int(k)


def distance(a, b):
    return np.sqrt((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2)


def euclidean_distances(X, centroids):
    """(n, 2) x (k, 2) -> (n, k) distance matrix."""
    return np.sqrt(
        ((X[:, np.newaxis, :] - centroids[np.newaxis, :, :]) ** 2).sum(axis=2)
    )


def init_centroids(X, k, rng, method="random"):
    """Pick k starting centroids from X.

    "random" samples k points uniformly with replacement, so two centroids
    may coincide. "k-means++" spreads them out by sampling proportionally to
    the squared distance from the nearest centroid chosen so far.
    """
    n = X.shape[0]
    if method == "random":
        return X[rng.integers(n, size=k)].copy()
    if method != "k-means++":
        raise ValueError(f"unknown init method {method!r}, expected one of {INIT_METHODS}")

    centroids = np.empty((k, 2))
    centroids[0] = X[rng.integers(n)]
    for i in range(1, k):
        probs = euclidean_distances(X, centroids[:i]).min(axis=1) ** 2
        total = probs.sum()
        if total == 0:
            # every point already sits on a centroid
            centroids[i] = X[rng.integers(n)]
            continue
        centroids[i] = X[rng.choice(n, p=probs / total)]
    return centroids


def _assign_chunk(X, centroids, out, start, end):
    # argmin keeps the first minimum, so the lowest cluster id wins ties
    out[start:end] = np.argmin(euclidean_distances(X[start:end], centroids), axis=1)


def assign_points(X, centroids, out=None, n_jobs=1):
    """Overwrite every slot of `out` with the id of the nearest centroid.

    Points are independent of each other, so with n_jobs > 1 the index range
    is split into disjoint chunks handled by a thread pool. Each worker only
    writes its own slice of `out`; X and centroids must not change meanwhile.
    """
    n = X.shape[0]
    if out is None:
        out = np.full(n, UNASSIGNED, dtype=int)
    elif len(out) != n:
        raise ValueError(f"assignment vector has length {len(out)}, expected {n}")

    if n_jobs <= 1 or n < 2:
        _assign_chunk(X, centroids, out, 0, n)
        return out

    bounds = np.linspace(0, n, min(n_jobs, n) + 1, dtype=int)
    with ThreadPoolExecutor(max_workers=len(bounds) - 1) as pool:
        futures = [
            pool.submit(_assign_chunk, X, centroids, out, start, end)
            for start, end in zip(bounds[:-1], bounds[1:])
        ]
        for future in futures:
            future.result()
    return out


def update_centroids(X, labels, k, previous, empty_cluster="keep", rng=None):
    """Recompute each centroid as the mean of the points assigned to it.

    Sums and counts are accumulated serially with bincount. A cluster with no
    points keeps its previous centroid ("keep") or is moved onto a random
    point ("reseed"); either way a DegenerateClusterWarning is issued.
    """
    counts = np.bincount(labels, minlength=k)
    sums = np.column_stack([
        np.bincount(labels, weights=X[:, 0], minlength=k),
        np.bincount(labels, weights=X[:, 1], minlength=k),
    ])

    new_centroids = np.array(previous, dtype=float, copy=True)
    filled = counts > 0
    new_centroids[filled] = sums[filled] / counts[filled, np.newaxis]

    empty = np.flatnonzero(~filled)
    if len(empty):
        warnings.warn(
            f"clusters {empty.tolist()} received no points; "
            f"recovering with {empty_cluster!r}",
            DegenerateClusterWarning,
            stacklevel=2,
        )
        if empty_cluster == "reseed":
            if rng is None:
                raise ValueError("reseeding empty clusters needs a random generator")
            new_centroids[empty] = X[rng.integers(X.shape[0], size=len(empty))]
    return new_centroids


class KMeans:
    """Lloyd's K-Means on 2D points.

    The loop alternates assignment and update until two consecutive centroid
    sets are equal or max_iter passes have run. With tol=None the comparison
    is exact floating-point equality, which in practice often leaves the
    iteration cap as the real terminator. Passing a tol compares the largest
    centroid shift against it instead.
    """

    def __init__(self, k=3, max_iter=100, init="random", random_state=None,
                 tol=None, empty_cluster="keep", n_jobs=1):
        if empty_cluster not in EMPTY_CLUSTER_POLICIES:
            raise ValueError(
                f"empty_cluster must be one of {EMPTY_CLUSTER_POLICIES}, got {empty_cluster!r}"
            )
        if max_iter < 1:
            raise ValueError(f"max_iter must be at least 1, got {max_iter}")
        if tol is not None and tol < 0:
            raise ValueError(f"tol must be non-negative, got {tol}")
        self.k = k
        self.max_iter = max_iter
        self.init = init
        self.random_state = random_state
        self.tol = tol
        self.empty_cluster = empty_cluster
        self.n_jobs = n_jobs
        self.centroids = None
        self.labels = None
        self.inertia = None
        self.n_iter = 0
        self.converged = False

    def _initial_centroids(self, X, rng):
        if isinstance(self.init, str):
            return init_centroids(X, self.k, rng, method=self.init)
        centroids = np.array(self.init, dtype=float)
        if centroids.shape != (self.k, 2):
            raise ValueError(
                f"initial centroids must have shape ({self.k}, 2), got {centroids.shape}"
            )
        return centroids

    def _has_converged(self, new_centroids, centroids):
        if self.tol is None:
            return np.array_equal(new_centroids, centroids)
        shift = np.sqrt(((new_centroids - centroids) ** 2).sum(axis=1)).max()
        return shift <= self.tol

    def fit(self, X):
        X = as_points(X)
        self.k = check_cluster_count(self.k, X.shape[0])
        # fresh generator per fit
        rng = np.random.default_rng(self.random_state)

        centroids = self._initial_centroids(X, rng)
        labels = np.full(X.shape[0], UNASSIGNED, dtype=int)
        n_iter = 0
        converged = False

        while True:
            assign_points(X, centroids, out=labels, n_jobs=self.n_jobs)
            new_centroids = update_centroids(
                X, labels, self.k, centroids,
                empty_cluster=self.empty_cluster, rng=rng,
            )
            n_iter += 1
            if self._has_converged(new_centroids, centroids):
                converged = True
                break
            if n_iter >= self.max_iter:
                break
            centroids = new_centroids

        self.centroids = centroids
        self.labels = labels
        self.n_iter = n_iter
        self.converged = converged
        self.inertia = compute_inertia(X, labels, centroids)
        return self

    def predict(self, X):
        if self.centroids is None:
            raise RuntimeError("KMeans instance is not fitted yet")
        return assign_points(as_points(X), self.centroids, n_jobs=self.n_jobs)


def kmeans(points, k, **options):
    """Cluster `points` into k groups and return one cluster id per point."""
    return KMeans(k=k, **options).fit(points).labels
