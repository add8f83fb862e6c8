"""Optimizer integration."""

from .scipy_solver import ScipySolver
from .settings import SolverSettings, SolveResult

__all__ = ["ScipySolver", "SolverSettings", "SolveResult"]
