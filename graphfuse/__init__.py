"""graphfuse - identity and composition core for graph-based state estimation.

Variables hold fixed-size numeric state keyed by deterministic or random
identifiers; constraints reference variables by identifier and build the cost
and loss objects a nonlinear optimizer consumes.
"""

__version__ = "0.1.0"

# Identity
from .core.identity import NIL, UUIDGenerator, generate_deterministic, generate_random
from .core.time import Time

# Models
from .core.models import Constraint, FixedSizeVariable, Stamped, StampedVariable, Variable
from .core.variables import (
    AccelerationAngular2DStamped,
    AccelerationLinear2DStamped,
    Orientation2DStamped,
    Position2DStamped,
    Position3DStamped,
    VelocityAngular2DStamped,
    VelocityLinear2DStamped,
)
from .core.constraints import AbsoluteConstraint, MarginalConstraint, RelativeConstraint

# Graph and optimization
from .core.graph import Graph, HashGraph
from .core.math.robust import CauchyLoss, HuberLoss, LossFunction
from .core.optimization import CostFunction
from .core.solver import ScipySolver, SolverSettings, SolveResult

__all__ = [
    # Version
    "__version__",
    # Identity
    "NIL",
    "UUIDGenerator",
    "generate_deterministic",
    "generate_random",
    "Time",
    # Models
    "Variable",
    "FixedSizeVariable",
    "Stamped",
    "StampedVariable",
    "Constraint",
    # Variables
    "AccelerationAngular2DStamped",
    "AccelerationLinear2DStamped",
    "Orientation2DStamped",
    "Position2DStamped",
    "Position3DStamped",
    "VelocityAngular2DStamped",
    "VelocityLinear2DStamped",
    # Constraints
    "AbsoluteConstraint",
    "RelativeConstraint",
    "MarginalConstraint",
    # Graph and optimization
    "Graph",
    "HashGraph",
    "CostFunction",
    "LossFunction",
    "HuberLoss",
    "CauchyLoss",
    "ScipySolver",
    "SolverSettings",
    "SolveResult",
]
