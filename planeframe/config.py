# planeframe/config.py
"""
Numerical settings for the frame solver.
"""

from dataclasses import dataclass

from .model import ConfigurationError


@dataclass(frozen=True)
class SolverConfig:
    """Solver tolerances and sampling settings."""

    # Diagonal regularization: |K[i,i]| below this gets dummy_stiffness.
    # Affects DOFs with no physical stiffness (e.g. rotation at a node where
    # every member end is pinned); their computed values carry no meaning.
    zero_stiffness_tol: float = 1e-9
    dummy_stiffness: float = 1.0

    # Max condition number of Kff before raising MechanismError
    cond_limit: float = 1e12

    # Diagram sampling: uniform intervals per member (load points are added)
    n_intervals: int = 50

    # Slack allowed on 0 <= load.position <= L
    position_tol: float = 1e-9

    def __post_init__(self):
        if self.zero_stiffness_tol < 0.0:
            raise ConfigurationError("zero_stiffness_tol must be >= 0.")
        if self.dummy_stiffness <= 0.0:
            raise ConfigurationError("dummy_stiffness must be positive.")
        if self.cond_limit <= 1.0:
            raise ConfigurationError("cond_limit must be greater than 1.")
        if self.n_intervals < 1:
            raise ConfigurationError("n_intervals must be at least 1.")
        if self.position_tol < 0.0:
            raise ConfigurationError("position_tol must be >= 0.")


# Global config instance
CONFIG = SolverConfig()
