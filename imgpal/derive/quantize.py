# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""
Color quantization using k-means clustering in HSV space.

Reduces the filtered pixel cloud to at most k representative colors.
The iteration cap is low and the result is accepted even if it has not
converged; downstream palette assembly is heuristic anyway.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from imgpal.derive.filter import PixelSamples
from imgpal.errors import InvalidParameterError
from imgpal.schema import ColorCluster

logger = logging.getLogger(__name__)

KMEANS_MAX_ITER = 30

# Point-to-centroid pairs per distance block. Peak memory stays at a few
# float64 copies of this many pairs, whatever k is.
PAIR_BUDGET = 1 << 19


def kmeans(
    data: NDArray[np.float64],
    k: int,
    rng: np.random.Generator,
    max_iter: int = KMEANS_MAX_ITER,
) -> tuple[NDArray[np.float64], NDArray[np.int64]]:
    """
    Vectorized k-means implementation.

    Uses k-means++ initialization over the distinct points, then runs
    Lloyd iterations on the distinct points weighted by multiplicity.
    Identical points always share a label, so this gives the same
    centroids as clustering the full array, at a fraction of the cost.

    Args:
        data: Array of shape (N, D)
        k: Requested number of clusters (capped at the distinct point count)
        rng: Random generator used for seeding
        max_iter: Maximum iterations

    Returns:
        (centroids, labels) where:
        - centroids: (k', D) array of cluster centers, k' = min(k, distinct)
        - labels: (N,) array of cluster assignments
    """
    data = np.asarray(data, dtype=np.float64)
    if k < 1:
        raise InvalidParameterError("k", f"need at least one cluster, got {k}")

    # Find unique points to avoid issues with duplicates
    unique_data, inverse, weights = np.unique(
        data, axis=0, return_inverse=True, return_counts=True
    )
    inverse = inverse.reshape(-1)
    n_unique = len(unique_data)

    # Adjust k if we have fewer unique points
    k = min(k, n_unique)

    if k == 0:
        raise ValueError("No valid data points for clustering")

    centroids = _kmeans_plus_plus(unique_data, k, rng)

    labels = np.zeros(n_unique, dtype=np.int64)
    for it in range(max_iter):
        old_labels = labels
        labels = _assign(unique_data, centroids)

        # Check convergence
        if it > 0 and np.array_equal(labels, old_labels):
            break

        # Update centroids (weighted by pixel multiplicity)
        for j in range(k):
            mask = labels == j
            if np.any(mask):
                centroids[j] = np.average(unique_data[mask], axis=0, weights=weights[mask])
    else:
        labels = _assign(unique_data, centroids)
        logger.debug("k-means stopped at iteration cap (%d) without converging", max_iter)

    return centroids, labels[inverse]


def _kmeans_plus_plus(
    points: NDArray[np.float64],
    k: int,
    rng: np.random.Generator,
) -> NDArray[np.float64]:
    """
    k-means++ seeding over distinct points.

    Keeps a running squared distance to the nearest chosen centroid, so
    each step is O(N) rather than O(N * k).
    """
    n, d = points.shape
    centroids = np.empty((k, d), dtype=np.float64)

    # First centroid: random unique point
    centroids[0] = points[rng.integers(n)]
    dists = np.sum((points - centroids[0]) ** 2, axis=1)

    # Remaining centroids: weighted by distance squared
    for i in range(1, k):
        total = dists.sum()
        if total == 0:
            idx = rng.integers(n)
        else:
            idx = rng.choice(n, p=dists / total)
        centroids[i] = points[idx]
        dists = np.minimum(dists, np.sum((points - centroids[i]) ** 2, axis=1))

    return centroids


def _assign(
    points: NDArray[np.float64],
    centroids: NDArray[np.float64],
) -> NDArray[np.int64]:
    """Nearest-centroid labels, computed in row blocks."""
    labels = np.empty(len(points), dtype=np.int64)
    rows = block_rows(len(centroids))
    for start in range(0, len(points), rows):
        block = points[start:start + rows]
        dists = np.sum(
            (block[:, np.newaxis, :] - centroids[np.newaxis, :, :]) ** 2,
            axis=2,
        )
        labels[start:start + rows] = np.argmin(dists, axis=1)
    return labels


def block_rows(n_targets: int) -> int:
    """Rows per block when each row is compared against n_targets points."""
    return max(1, PAIR_BUDGET // max(1, n_targets))


def quantize(
    samples: PixelSamples,
    k: int,
    rng: np.random.Generator,
    max_iter: int = KMEANS_MAX_ITER,
) -> tuple[ColorCluster, ...]:
    """
    Reduce filtered samples to at most k HSV color clusters.

    The effective cluster count is min(k, number of distinct (h, s, v)
    tuples), and exactly that many clusters are returned, in centroid order.

    Args:
        samples: Filtered pixel samples
        k: Requested number of clusters
        rng: Random generator used for k-means seeding
        max_iter: k-means iteration cap

    Returns:
        Tuple of ColorCluster
    """
    if len(samples) == 0:
        raise ValueError("Cannot quantize an empty pixel sample")

    centroids, labels = kmeans(samples.hsv, k, rng, max_iter=max_iter)
    counts = np.bincount(labels, minlength=len(centroids))

    logger.debug("Quantized %d samples into %d clusters (requested %d)",
                 len(samples), len(centroids), k)

    return tuple(
        _to_cluster(centroid, int(count))
        for centroid, count in zip(centroids, counts)
    )


def _to_cluster(centroid: NDArray[np.float64], count: int) -> ColorCluster:
    """Build a ColorCluster, clamping float drift back into range."""
    h, s, v = centroid
    return ColorCluster(
        h=float(h) % 360.0,
        s=float(np.clip(s, 0.0, 1.0)),
        v=float(np.clip(v, 0.0, 1.0)),
        count=count,
    )
