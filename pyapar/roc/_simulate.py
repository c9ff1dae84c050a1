"""Simulated scores from the binormal model.

Each sample is diseased with probability 1/2; diseased scores are drawn
from N(disease_mean, disease_std²) and healthy scores from
N(healthy_mean, healthy_std²).
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def simulate_binormal(
    disease_mean: float = 1.0,
    disease_std: float = 1.0,
    healthy_mean: float = 0.0,
    healthy_std: float = 1.0,
    size: int = 1000,
    *,
    rng: np.random.Generator | int | None = None,
) -> tuple[NDArray[np.float64], NDArray[np.intp]]:
    """Draw ``(scores, labels)`` from a binormal model.

    Parameters
    ----------
    disease_mean, disease_std : float
        Score distribution of diseased (label 1) samples.
    healthy_mean, healthy_std : float
        Score distribution of healthy (label 0) samples.
    size : int
        Number of samples.
    rng : Generator, int or None
        Random generator or seed, passed to ``np.random.default_rng``.

    Returns
    -------
    scores : array of float
    labels : array of int
    """
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")
    if disease_std <= 0 or healthy_std <= 0:
        raise ValueError(
            f"standard deviations must be positive, "
            f"got {disease_std} and {healthy_std}"
        )

    gen = np.random.default_rng(rng)
    labels = (gen.random(size) < 0.5).astype(np.intp)

    mean = np.where(labels == 1, disease_mean, healthy_mean)
    std = np.where(labels == 1, disease_std, healthy_std)
    scores = gen.normal(mean, std)

    return scores, labels
