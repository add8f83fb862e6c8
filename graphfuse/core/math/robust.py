"""Robust loss (penalty-shaping) functions for nonlinear optimization.

A loss function rho(s) acts on the squared norm s = ||r||^2 of a residual
block. Returning ``None`` instead of a loss object means the plain quadratic
penalty rho(s) = s.
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import Optional, Tuple


class LossFunction(ABC):
    """Base class for loss objects handed to the optimizer."""

    name: str = "abstract"

    @abstractmethod
    def evaluate(self, s) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Evaluate the loss at squared norm s.

        Args:
            s: Squared residual norm (scalar or array), s >= 0

        Returns:
            Tuple of (rho, rho', rho'')
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class TrivialLoss(LossFunction):
    """Plain quadratic penalty."""

    name = "none"

    def evaluate(self, s):
        s = np.asarray(s, dtype=float)
        return s.copy(), np.ones_like(s), np.zeros_like(s)


class HuberLoss(LossFunction):
    """Huber loss: quadratic inside delta, linear outside."""

    name = "huber"

    def __init__(self, delta: float = 1.0):
        if delta <= 0:
            raise ValueError(f"Huber delta must be positive, got {delta}")
        self.delta = float(delta)

    def evaluate(self, s):
        s = np.asarray(s, dtype=float)
        b = self.delta**2
        is_inlier = s <= b
        root = np.sqrt(np.where(is_inlier, 1.0, s))

        rho = np.where(is_inlier, s, 2.0 * self.delta * root - b)
        rho_prime = np.where(is_inlier, 1.0, self.delta / root)
        rho_second = np.where(is_inlier, 0.0, -rho_prime / (2.0 * root**2))
        return rho, rho_prime, rho_second

    def __repr__(self) -> str:
        return f"HuberLoss(delta={self.delta})"


class CauchyLoss(LossFunction):
    """Cauchy loss: logarithmic growth for large residuals."""

    name = "cauchy"

    def __init__(self, sigma: float = 1.0):
        if sigma <= 0:
            raise ValueError(f"Cauchy sigma must be positive, got {sigma}")
        self.sigma = float(sigma)

    def evaluate(self, s):
        s = np.asarray(s, dtype=float)
        b = self.sigma**2
        ratio = 1.0 + s / b

        rho = b * np.log(ratio)
        rho_prime = 1.0 / ratio
        rho_second = -rho_prime**2 / b
        return rho, rho_prime, rho_second

    def __repr__(self) -> str:
        return f"CauchyLoss(sigma={self.sigma})"


_LOSS_TYPES = {
    TrivialLoss.name: TrivialLoss,
    HuberLoss.name: HuberLoss,
    CauchyLoss.name: CauchyLoss,
}


def create_loss(loss_type: str, **params) -> Optional[LossFunction]:
    """Create a loss object by name.

    Args:
        loss_type: "none", "huber" or "cauchy"
        **params: Parameters for the loss function (delta, sigma)

    Returns:
        Loss object, or None for the plain quadratic penalty
    """
    if loss_type not in _LOSS_TYPES:
        raise ValueError(f"Unknown loss type: {loss_type}")
    if loss_type == TrivialLoss.name:
        return None
    return _LOSS_TYPES[loss_type](**params)
