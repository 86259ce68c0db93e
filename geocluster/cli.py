"""
Command-line entry point: cluster the locations of a CSV file.

Reads a CSV with latitude/longitude columns (detected by name), runs DBSCAN
with haversine distances and writes every record back with a ``cluster``
column (-1 for noise).
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .spatial import (
    ClusteringConfig,
    InvalidCoordinate,
    InvalidParameter,
    cluster_dataframe,
    validate_parameters,
)
from .tools import (
    CoordinateColumnsNotFound,
    get_clustering_config,
    read_locations,
    write_clustered,
)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_INVALID_PARAMETER = 2


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="geocluster",
        description="Cluster lat/long points with DBSCAN and append a 'cluster' column.",
    )
    ap.add_argument("-i", "--input", required=True, help="Input CSV file with lat/long data")
    ap.add_argument("-o", "--output", required=True, help="Output CSV file with cluster information")
    ap.add_argument(
        "--epsilon",
        type=float,
        default=None,
        help="Maximum distance between neighboring points, in kilometers (profile default: 1.0)",
    )
    ap.add_argument(
        "--min-samples",
        type=int,
        default=None,
        help="Minimum number of points, the point itself included, to form a dense region "
             "(profile default: 5)",
    )
    ap.add_argument("--profile", default=None, help="Clustering profile (default, dense-city, suburban, rural)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log progress")
    return ap


def resolve_config(args: argparse.Namespace) -> ClusteringConfig:
    """Profile values overridden by any flags given on the command line."""
    config = get_clustering_config(args.profile)
    if args.epsilon is not None:
        config.epsilon_km = args.epsilon
    if args.min_samples is not None:
        config.min_samples = args.min_samples
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = resolve_config(args)
    except FileNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    try:
        validate_parameters(config.epsilon_km, config.min_samples)
    except InvalidParameter as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID_PARAMETER

    try:
        df, columns = read_locations(args.input)
        if df.empty:
            print("error: No locations found in the input file", file=sys.stderr)
            return EXIT_INPUT_ERROR
        print(f"Found {len(df)} locations")

        print("Running DBSCAN clustering...")
        clustered, infos, diagnostics = cluster_dataframe(
            df, config, lat_col=columns.lat, lng_col=columns.lng
        )
        write_clustered(clustered, args.output)
    except (OSError, CoordinateColumnsNotFound, InvalidCoordinate) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    print("Clustering complete!")
    print(f"Found {diagnostics.num_clusters} clusters")
    print(f"{diagnostics.num_noise} points classified as noise")
    for info in infos:
        print(
            f"  cluster {info.cluster_id}: {info.size} points, "
            f"centroid ({info.centroid_lat:.5f}, {info.centroid_lng:.5f})"
        )
    if diagnostics.silhouette_score is not None:
        print(f"Quality (silhouette): {diagnostics.silhouette_score:.3f}")
    for suggestion in diagnostics.suggestions:
        print(f"  hint: {suggestion}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
