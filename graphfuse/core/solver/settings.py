"""Solver configuration and result models."""

import math
from typing import Dict, Literal, Optional
from pydantic import BaseModel, Field, field_validator


class SolverSettings(BaseModel):
    """Solver configuration settings."""

    method: Literal["trf", "dogbox", "lm"] = Field(
        default="trf",
        description="scipy.optimize.least_squares algorithm"
    )
    max_iterations: int = Field(default=100, gt=0, description="Maximum solver iterations")
    function_tolerance: float = Field(default=1e-8, gt=0, description="Tolerance on cost change")
    parameter_tolerance: float = Field(default=1e-8, gt=0, description="Tolerance on step size")
    gradient_tolerance: float = Field(default=1e-8, gt=0, description="Tolerance on gradient norm")
    verbose: int = Field(default=0, ge=0, le=2, description="scipy verbosity level")


class SolveResult(BaseModel):
    """Results from optimization solve."""

    success: bool = Field(description="Whether solve succeeded")
    iterations: int = Field(default=0, description="Number of residual evaluations")
    initial_cost: float = Field(default=0.0, description="Cost before optimization")
    final_cost: float = Field(default=0.0, description="Final optimization cost")
    convergence_reason: str = Field(description="Reason for convergence/termination")
    residuals: Dict[str, float] = Field(
        default_factory=dict,
        description="Per-constraint residual norms, keyed by constraint UUID"
    )
    computation_time: Optional[float] = Field(
        default=None,
        description="Solve time in seconds"
    )

    @field_validator('initial_cost', 'final_cost')
    @classmethod
    def validate_cost(cls, v):
        """Keep costs finite so results stay JSON serializable."""
        if math.isinf(v) or math.isnan(v):
            return 1e10
        return v
