"""Covariance validation and square-root information matrices."""

import numpy as np


def validate_covariance(covariance, size: int, tolerance: float = 1e-9) -> np.ndarray:
    """Check that a covariance is a symmetric positive definite size x size matrix.

    Returns:
        The covariance as a float array

    Raises:
        ValueError: If the matrix is malformed or not positive definite
    """
    covariance = np.atleast_2d(np.array(covariance, dtype=float))
    if covariance.shape != (size, size):
        raise ValueError(f"Covariance shape {covariance.shape} != expected ({size}, {size})")
    if not np.all(np.isfinite(covariance)):
        raise ValueError("Covariance contains non-finite values")
    if not np.allclose(covariance, covariance.T, atol=tolerance):
        raise ValueError("Covariance must be symmetric")
    try:
        np.linalg.cholesky(covariance)
    except np.linalg.LinAlgError:
        raise ValueError("Covariance must be positive definite")
    return covariance


def sqrt_information(covariance: np.ndarray) -> np.ndarray:
    """Upper-triangular A with A^T A = covariance^-1."""
    information = np.linalg.inv(covariance)
    information = 0.5 * (information + information.T)
    return np.linalg.cholesky(information).T
