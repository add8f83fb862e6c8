"""Angle wraparound helpers."""

import numpy as np
from typing import Sequence


def wrap_angle(angle):
    """Wrap an angle (or array of angles) into [-pi, pi)."""
    return (np.asarray(angle) + np.pi) % (2.0 * np.pi) - np.pi


def angular_difference(a, b):
    """Shortest signed rotation taking b onto a."""
    return wrap_angle(np.asarray(a) - np.asarray(b))


def wrap_indices(values: np.ndarray, indices: Sequence[int]) -> np.ndarray:
    """Return a copy of values with the given components wrapped."""
    result = np.array(values, dtype=float, copy=True)
    if len(indices):
        idx = list(indices)
        result[idx] = wrap_angle(result[idx])
    return result
