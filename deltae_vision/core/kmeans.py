"""Deterministic K-Means over RGB samples.

Seeding takes the first k samples in input order, so identical input always
yields identical centroids. Clustering runs in RGB, not LAB.

Each round assigns every sample to the nearest centroid (squared Euclidean
distance, lowest index wins ties), then moves every centroid that gained
members to the rounded mean of those members. A centroid with no members keeps
its previous value. There is no convergence test: exactly `iterations` rounds run.
"""

from collections.abc import Sequence

import numpy as np

from deltae_vision.core.types import RGB, ConfigError


def _assign(pixels: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Index of the nearest centroid for every pixel. argmin returns the first minimum."""
    diff = pixels[:, None, :] - centroids[None, :, :]
    return np.argmin((diff * diff).sum(axis=2), axis=1)


def cluster(samples: Sequence[RGB], k: int, iterations: int = 6) -> list[RGB]:
    """Cluster samples into min(k, len(samples)) centroids.

    Returns centroids in seeding order. Empty input or k <= 0 gives [] whatever
    the iteration count; otherwise raises ConfigError if iterations < 1.
    """
    actual_k = min(k, len(samples))
    if actual_k <= 0:
        return []
    if iterations < 1:
        raise ConfigError(f'iterations must be >= 1, got {iterations}')

    # int64 so squared distances and sums cannot overflow uint8
    pixels = np.asarray(samples, dtype=np.int64).reshape(-1, 3)
    centroids = pixels[:actual_k].copy()

    for _ in range(iterations):
        labels = _assign(pixels, centroids)
        counts = np.bincount(labels, minlength=actual_k)
        sums = np.zeros((actual_k, 3), dtype=np.int64)
        np.add.at(sums, labels, pixels)
        for i in range(actual_k):
            if counts[i] == 0:
                continue
            # Round half up: floor(mean + 0.5) in exact integer arithmetic
            centroids[i] = (sums[i] * 2 + counts[i]) // (2 * counts[i])

    return [(int(c[0]), int(c[1]), int(c[2])) for c in centroids]
