import os
import tempfile
import unittest

import numpy as np
import pandas as pd

from kmeans import KMeans
from main import main
from pipeline import (
    assignments_frame, format_assignments, load_points, run_kmeans, save_cluster_plot,
)


class TestLoadPoints(unittest.TestCase):
    def test_reference_points(self):
        data = load_points()
        self.assertEqual(data.shape, (10, 2))
        np.testing.assert_array_equal(data[:, 0], data[:, 1])

    def test_csv(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "points.csv")
            pd.DataFrame({"x": [0.0, 1.5, 3.0], "y": [2.0, -1.0, 4.0], "label": ["a", "b", "c"]}).to_csv(path, index=False)
            data = load_points(path)
        np.testing.assert_array_equal(data, [[0.0, 2.0], [1.5, -1.0], [3.0, 4.0]])

    def test_csv_missing_column(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "points.csv")
            pd.DataFrame({"x": [1.0, 2.0]}).to_csv(path, index=False)
            with self.assertRaises(ValueError):
                load_points(path)


class TestReporting(unittest.TestCase):
    def setUp(self):
        self.data = load_points()
        self.model = KMeans(k=2, init=[[0, 0], [9, 9]]).fit(self.data)

    def test_format_assignments(self):
        lines = format_assignments(self.data, self.model.labels)
        self.assertEqual(len(lines), 10)
        self.assertEqual(lines[0], "Point (0, 0) assigned to cluster 0")
        self.assertEqual(lines[-1], "Point (9, 9) assigned to cluster 1")

    def test_assignments_frame(self):
        df = assignments_frame(self.data, self.model.labels)
        self.assertEqual(list(df.columns), ["x", "y", "cluster"])
        self.assertEqual(df["cluster"].tolist(), [0] * 5 + [1] * 5)

    def test_run_kmeans(self):
        model = run_kmeans(self.data, 3, random_state=0)
        self.assertEqual(len(model.labels), len(self.data))

    def test_save_cluster_plot(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = save_cluster_plot(self.data, self.model, os.path.join(tmp, "figures", "kmeans.png"))
            self.assertTrue(os.path.getsize(path) > 0)


class TestMain(unittest.TestCase):
    def test_default_run(self):
        model = main(["--k", "3", "--seed", "4"])
        self.assertEqual(len(model.labels), 10)
        self.assertLessEqual(model.n_iter, 100)

    def test_plot_option(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "out.png")
            main(["--k", "2", "--seed", "1", "--init", "k-means++", "--n-jobs", "2", "--plot", path])
            self.assertTrue(os.path.exists(path))

    def test_reseed_option(self):
        model = main(["--k", "3", "--seed", "0", "--empty-cluster", "reseed"])
        self.assertTrue(np.isfinite(model.centroids).all())

    def test_csv_without_y_column_exits(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "points.csv")
            pd.DataFrame({"x": [1.0, 2.0, 3.0]}).to_csv(path, index=False)
            with self.assertRaises(SystemExit) as ctx:
                main(["--input", path])
        self.assertEqual(ctx.exception.code, 2)

    def test_missing_csv_exits(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(SystemExit) as ctx:
                main(["--input", os.path.join(tmp, "absent.csv")])
        self.assertEqual(ctx.exception.code, 2)

    def test_negative_tol_exits(self):
        with self.assertRaises(SystemExit) as ctx:
            main(["--tol", "-0.5"])
        self.assertEqual(ctx.exception.code, 2)

    def test_invalid_k_exits(self):
        with self.assertRaises(SystemExit) as ctx:
            main(["--k", "0"])
        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
