"""
K-Means Clustering of 2D Points
===============================
Assigns points to K clusters with Lloyd's algorithm and prints the cluster
of every point. Without --input the ten collinear points (0,0)..(9,9) are
clustered with K=3.

Usage:
    uv run python main.py --k 3 --seed 42 --plot figures/kmeans.png
"""

import argparse

from kmeans import EMPTY_CLUSTER_POLICIES, INIT_METHODS
from pipeline import load_points, run_kmeans, format_assignments, save_cluster_plot


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="K-Means clustering of 2D points")
    parser.add_argument("--input", default=None, help="CSV file with x and y columns")
    parser.add_argument("--k", type=int, default=3, help="Number of clusters")
    parser.add_argument("--max-iter", type=int, default=100, help="Maximum number of iterations")
    parser.add_argument("--init", choices=INIT_METHODS, default="random", help="Centroid initialization")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--tol", type=float, default=None,
        help="Stop when no centroid moves more than this (default: exact equality)",
    )
    parser.add_argument(
        "--empty-cluster", choices=EMPTY_CLUSTER_POLICIES, default="keep",
        help="What to do with a cluster that loses all its points",
    )
    parser.add_argument("--n-jobs", type=int, default=1, help="Threads for the assignment step")
    parser.add_argument("--plot", default=None, help="Save a cluster plot to this path")
    return parser, parser.parse_args(argv)


def main(argv=None):
    parser, args = parse_args(argv)

    print("=" * 70)
    print("  K-MEANS CLUSTERING")
    print("=" * 70)

    try:
        data = load_points(args.input)
        model = run_kmeans(
            data, args.k,
            max_iter=args.max_iter, init=args.init, random_state=args.seed,
            tol=args.tol, empty_cluster=args.empty_cluster, n_jobs=args.n_jobs,
        )
    except (ValueError, OSError) as exc:
        parser.error(str(exc))

    print("\nAssignments:")
    for line in format_assignments(data, model.labels):
        print(line)

    if args.plot:
        save_cluster_plot(data, model, args.plot)
        print(f"\nFigure saved to {args.plot}")
    print("Done!")
    return model


if __name__ == "__main__":
    main()
