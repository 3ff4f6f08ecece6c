# planeframe - Plane frame analysis by the direct stiffness method
"""
PLANEFRAME: Linear Static Analysis of 2D Frames
===============================================

This package provides:
- Plane frame members with rigid or pinned ends (static condensation)
- Point loads anywhere along a member (release-aware fixed-end forces)
- Pin, fixed and (horizontal) roller supports
- Member end forces, support reactions and sampled V / M / v diagrams

ARCHITECTURE:
-------------
    kernel/         DOF numbering, scatter-add assembly, partitioned solve
    model.py        Node, Member, Support, Load + validation
    config.py       Solver tolerances (SolverConfig)
    elements.py     Member stiffness matrices and transformation
    loads.py        Fixed-end forces / equivalent nodal loads
    assembly.py     Frame K, F and support conditions
    post.py         End forces, displacements, reactions
    diagrams.py     Shear, moment and deflection along members
    analysis.py     solve() and AnalysisResult
"""

from .model import Node, Member, Support, Load, ConfigurationError
from .config import SolverConfig, CONFIG
from .analysis import AnalysisResult, solve
from .kernel import DOFManager, solve_linear, MechanismError

__version__ = "0.1.0"

__all__ = [
    'Node',
    'Member',
    'Support',
    'Load',
    'ConfigurationError',
    'SolverConfig',
    'CONFIG',
    'AnalysisResult',
    'solve',
    'DOFManager',
    'solve_linear',
    'MechanismError',
]
