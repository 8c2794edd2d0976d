import unittest

import numpy as np

from metrics import cluster_sizes, compute_inertia


class TestMetrics(unittest.TestCase):
    def test_inertia(self):
        X = np.array([[0.0, 0.0], [2.0, 0.0], [10.0, 1.0]])
        centroids = np.array([[1.0, 0.0], [10.0, 0.0]])
        self.assertEqual(compute_inertia(X, np.array([0, 0, 1]), centroids), 3.0)

    def test_inertia_zero_when_points_are_centroids(self):
        X = np.array([[1.0, 2.0], [3.0, 4.0]])
        self.assertEqual(compute_inertia(X, np.array([1, 0]), X[::-1]), 0.0)

    def test_cluster_sizes_include_empty_clusters(self):
        np.testing.assert_array_equal(cluster_sizes([0, 2, 2, 0, 2], 4), [2, 0, 3, 0])


if __name__ == "__main__":
    unittest.main()
