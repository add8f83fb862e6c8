"""Finite-difference Jacobians for cost objects without analytic derivatives."""

import numpy as np
from typing import Callable, List, Sequence, Tuple

# (forward offset, backward offset) in units of the step size
_STENCILS = {
    "forward": (1.0, 0.0),
    "backward": (0.0, -1.0),
    "central": (1.0, -1.0),
}


def finite_difference_jacobian(
    func: Callable[[np.ndarray], np.ndarray],
    x: np.ndarray,
    h: float = 1e-6,
    method: str = "central"
) -> np.ndarray:
    """Compute Jacobian using finite differences.

    Args:
        func: Function that takes x and returns residual vector
        x: Input parameters
        h: Step size for finite differences
        method: Finite difference method ("forward", "backward", "central")

    Returns:
        Jacobian matrix J where J[i,j] = df_i/dx_j
    """
    if method not in _STENCILS:
        raise ValueError(f"Unknown finite difference method: {method}")
    upper, lower = _STENCILS[method]

    x = np.atleast_1d(np.asarray(x, dtype=float))
    f0 = np.atleast_1d(func(x))

    def shifted(j: int, offset: float) -> np.ndarray:
        if offset == 0.0:
            return f0
        probe = x.copy()
        probe[j] += offset * h
        return np.atleast_1d(func(probe))

    columns = [
        (shifted(j, upper) - shifted(j, lower)) / ((upper - lower) * h)
        for j in range(len(x))
    ]
    if not columns:
        return np.zeros((len(f0), 0))
    return np.column_stack(columns)


def split_columns(J: np.ndarray, block_sizes: Sequence[int]) -> List[np.ndarray]:
    """Split a stacked Jacobian into one column block per parameter block."""
    if J.shape[1] != sum(block_sizes):
        raise ValueError(f"Jacobian has {J.shape[1]} columns, expected {sum(block_sizes)}")

    blocks = []
    offset = 0
    for size in block_sizes:
        blocks.append(J[:, offset:offset + size].copy())
        offset += size
    return blocks


def block_jacobians(
    func: Callable[[Sequence[np.ndarray]], np.ndarray],
    parameters: Sequence[np.ndarray],
    h: float = 1e-6
) -> List[np.ndarray]:
    """Finite-difference Jacobians of a multi-block function.

    Args:
        func: Function taking one array per parameter block
        parameters: Current value of each parameter block
        h: Step size

    Returns:
        One Jacobian matrix per parameter block, in the same order
    """
    block_sizes = [len(np.atleast_1d(p)) for p in parameters]
    x = np.concatenate([np.atleast_1d(np.asarray(p, dtype=float)) for p in parameters])

    def stacked(flat: np.ndarray) -> np.ndarray:
        blocks = []
        offset = 0
        for size in block_sizes:
            blocks.append(flat[offset:offset + size])
            offset += size
        return func(blocks)

    return split_columns(finite_difference_jacobian(stacked, x, h), block_sizes)


def check_jacobian(
    cost_function,
    parameters: Sequence[np.ndarray],
    h: float = 1e-6,
    atol: float = 1e-6,
    rtol: float = 1e-6
) -> Tuple[bool, float, List[np.ndarray]]:
    """Compare a cost object's analytic Jacobians with finite differences.

    Returns:
        Tuple of (is_correct, max_error, per-block absolute error matrices)
    """
    _, analytic = cost_function.evaluate(parameters, compute_jacobians=True)
    numeric = block_jacobians(cost_function.residual, parameters, h)

    errors = [np.abs(a - n) for a, n in zip(analytic, numeric)]
    max_error = max((float(e.max()) for e in errors if e.size), default=0.0)
    is_correct = all(
        np.allclose(a, n, atol=atol, rtol=rtol) for a, n in zip(analytic, numeric)
    )
    return is_correct, max_error, errors
