# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""
Palette assembly strategies.

Three mutually exclusive strategies turn quantized or filtered colors into
exactly n output colors:

1. Qualitative: best-of-N random search for a well-separated subset,
   then best-of-N random search for a high hue-contrast order
2. Sequential: sort clusters, average them into at most 10 control colors,
   ramp through the controls
3. Divergent: split the filtered pixels into two poles, ramp from one pole
   through a center color to the other

The randomized searches are pure functions of (data, n, rng, trials);
any smarter heuristic with the same signature can replace them.
"""

from __future__ import annotations

import logging
from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from imgpal.derive.colorspace import encode_hex, hex_to_rgb, hsv_to_hex_batch
from imgpal.derive.filter import PixelSamples
from imgpal.derive.quantize import KMEANS_MAX_ITER, block_rows, kmeans
from imgpal.derive.ramp import ramp
from imgpal.schema import ColorCluster, Palette, PaletteType

logger = logging.getLogger(__name__)

DEFAULT_TRIALS = 10_000
MAX_SEQ_GROUPS = 10
DEFAULT_CENTER = "#FFFFFF"

# Trials scored per vectorized block
_TRIAL_CHUNK = 512

HSV_AXES = {"h": 0, "s": 1, "v": 2}


# =============================================================================
# Qualitative
# =============================================================================


def select_dispersed(
    points: NDArray[np.float64],
    n: int,
    rng: np.random.Generator,
    trials: int = DEFAULT_TRIALS,
) -> NDArray[np.int64]:
    """
    Pick n well-separated points by best-of-N random sampling.

    Each trial draws n distinct indices uniformly without replacement and
    is scored by the minimum pairwise Euclidean distance among its points.
    The trial with the largest score wins; ties go to the earliest trial.
    A randomized approximation to max-min dispersion, not an exact solver.

    Args:
        points: (k, D) array of candidate colors
        n: Subset size, 1 <= n <= k
        rng: Random generator
        trials: Number of random subsets to score

    Returns:
        (n,) array of indices into points, in draw order
    """
    k = len(points)
    if not 1 <= n <= k:
        raise ValueError(f"Subset size must be in [1, {k}], got {n}")
    if n == 1:
        return np.array([int(rng.integers(k))], dtype=np.int64)

    pair_dist = _pairwise_distances(points)
    iu, ju = np.triu_indices(n, 1)

    best_idx: NDArray[np.int64] = np.arange(n)
    best_score = -np.inf
    for start in range(0, trials, _TRIAL_CHUNK):
        size = min(_TRIAL_CHUNK, trials - start)
        # Uniform random n-subsets without replacement
        subsets = np.argsort(rng.random((size, k)), axis=1)[:, :n]
        scores = pair_dist[subsets[:, iu], subsets[:, ju]].min(axis=1)
        top = int(np.argmax(scores))
        if scores[top] > best_score:
            best_score = float(scores[top])
            best_idx = subsets[top]

    logger.debug("Dispersion search: best min-distance %.4f over %d trials",
                 best_score, trials)
    return best_idx


def _pairwise_distances(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """(k, k) Euclidean distance matrix, filled in row blocks."""
    k = len(points)
    out = np.empty((k, k), dtype=np.float64)
    rows = block_rows(k)
    for start in range(0, k, rows):
        diff = points[start:start + rows, np.newaxis, :] - points[np.newaxis, :, :]
        out[start:start + rows] = np.sqrt(np.sum(diff ** 2, axis=-1))
    return out


def order_by_hue_contrast(
    hues: NDArray[np.float64],
    rng: np.random.Generator,
    trials: int = DEFAULT_TRIALS,
) -> NDArray[np.int64]:
    """
    Order colors so neighbouring swatches differ strongly in hue.

    Each trial draws a uniform random permutation and is scored by the mean
    squared difference between consecutive hues. The largest score wins;
    ties go to the earliest trial.

    Returns:
        Permutation of range(len(hues))
    """
    n = len(hues)
    if n < 2:
        return np.arange(n)

    best_perm: NDArray[np.int64] = np.arange(n)
    best_score = -np.inf
    for start in range(0, trials, _TRIAL_CHUNK):
        size = min(_TRIAL_CHUNK, trials - start)
        perms = np.argsort(rng.random((size, n)), axis=1)
        scores = np.mean(np.diff(hues[perms], axis=1) ** 2, axis=1)
        top = int(np.argmax(scores))
        if scores[top] > best_score:
            best_score = float(scores[top])
            best_perm = perms[top]

    logger.debug("Hue-contrast ordering: best score %.2f over %d trials",
                 best_score, trials)
    return best_perm


def qualitative_palette(
    clusters: Sequence[ColorCluster],
    n: int,
    rng: np.random.Generator,
    trials: int = DEFAULT_TRIALS,
) -> Palette:
    """
    Build a qualitative palette of distinct, high-contrast colors.

    If fewer clusters than n are available, n is capped to the cluster
    count. Dispersion selection draws from rng before ordering does.
    """
    if not clusters:
        raise ValueError("Cannot build a palette from zero clusters")

    if n > len(clusters):
        logger.warning(
            "Only %d distinct colors available; qualitative palette capped "
            "from %d to %d colors", len(clusters), n, len(clusters),
        )
        n = len(clusters)

    points = _cluster_array(clusters)
    chosen = points[select_dispersed(points, n, rng, trials)]
    ordered = chosen[order_by_hue_contrast(chosen[:, 0], rng, trials)]

    return Palette(
        colors=hsv_to_hex_batch(ordered),
        type=PaletteType.QUALITATIVE,
    )


# =============================================================================
# Sequential
# =============================================================================


def parse_seq_by(seq_by: Union[str, Sequence[str]]) -> tuple[int, ...]:
    """
    Convert a sort order like "hsv" or ("s", "v", "h") to column indices.

    Raises:
        ValueError: Unless seq_by is a permutation of h, s and v
    """
    keys = tuple(str(c).lower() for c in seq_by)
    if sorted(keys) != ["h", "s", "v"]:
        raise ValueError(
            f"seq_by must be a permutation of 'h', 's', 'v', got {seq_by!r}"
        )
    return tuple(HSV_AXES[c] for c in keys)


def _sort_by(points: NDArray[np.float64], columns: tuple[int, ...]) -> NDArray[np.float64]:
    """Stable lexicographic sort; columns[0] is the primary key."""
    # np.lexsort treats its last key as primary
    order = np.lexsort([points[:, c] for c in reversed(columns)])
    return points[order]


def group_labels(size: int, n_groups: int) -> NDArray[np.int64]:
    """
    Assign positions 1..size to n_groups equal-width contiguous segments.

    Segments are right-closed intervals over [1, size]; the first segment
    also holds its left edge.
    """
    if size == 1 or n_groups == 1:
        return np.zeros(size, dtype=np.int64)
    positions = np.arange(1, size + 1, dtype=np.float64)
    inner = np.linspace(1.0, float(size), n_groups + 1)[1:-1]
    return np.searchsorted(inner, positions, side="left").astype(np.int64)


def sequential_palette(
    clusters: Sequence[ColorCluster],
    n: int,
    seq_by: Union[str, Sequence[str]] = "hsv",
) -> Palette:
    """
    Build a sequential palette by ramping through sorted cluster averages.

    Clusters are sorted by seq_by (e.g. "hsv": hue, then saturation, then
    value), split into min(10, k) contiguous groups, and averaged per
    group. The group averages, re-sorted by seq_by, are the ramp controls.
    """
    if not clusters:
        raise ValueError("Cannot build a palette from zero clusters")

    columns = parse_seq_by(seq_by)
    points = _sort_by(_cluster_array(clusters), columns)

    labels = group_labels(len(points), min(MAX_SEQ_GROUPS, len(points)))
    groups = np.unique(labels)
    averaged = np.stack([points[labels == g].mean(axis=0) for g in groups])

    # Averaging within sorted groups keeps order; re-sort anyway
    controls = hsv_to_hex_batch(_sort_by(averaged, columns))

    return Palette(
        colors=ramp(controls, n),
        type=PaletteType.SEQUENTIAL,
        controls=controls,
    )


# =============================================================================
# Divergent
# =============================================================================


def divergent_palette(
    samples: PixelSamples,
    n: int,
    rng: np.random.Generator,
    center: str = DEFAULT_CENTER,
    max_iter: int = KMEANS_MAX_ITER,
) -> Palette:
    """
    Build a divergent palette from two color poles and a center color.

    The filtered samples (not the k quantized clusters) are split into two
    clusters A and B; the ramp runs B -> center -> A.
    """
    centroids, _ = kmeans(samples.hsv, 2, rng, max_iter=max_iter)
    if len(centroids) < 2:
        # A single distinct color is both poles
        centroids = np.repeat(centroids, 2, axis=0)

    color_a, color_b = hsv_to_hex_batch(centroids)
    controls = (color_b, encode_hex(*hex_to_rgb(center)), color_a)

    return Palette(
        colors=ramp(controls, n),
        type=PaletteType.DIVERGENT,
        controls=controls,
    )


def _cluster_array(clusters: Sequence[ColorCluster]) -> NDArray[np.float64]:
    return np.array([c.hsv for c in clusters], dtype=np.float64).reshape(-1, 3)
