"""Optimizer-facing cost objects."""

from .cost_function import (
    CostFunction,
    NormalPriorCostFunction,
    NormalDeltaCostFunction,
    MarginalCostFunction,
)

__all__ = [
    "CostFunction",
    "NormalPriorCostFunction",
    "NormalDeltaCostFunction",
    "MarginalCostFunction",
]
