# planeframe/kernel - Assembly and solve core
"""
KERNEL: THE ASSEMBLY AND SOLVE FOUNDATION
=========================================

Assembly and solving don't care how element matrices were derived.
They just need:
- A way to map (node_id, local_dof) → global_dof_index
- Element stiffness matrices and load vectors in global coordinates
- Fixed DOF lists

The element formulation (releases, fixed-end forces) lives in
planeframe.elements / planeframe.loads; the kernel plumbing is generic.
"""

from .dof import DOFManager, DOF_PER_NODE
from .assemble import assemble_global_K, assemble_global_F, regularize_diagonal
from .solve import solve_linear, MechanismError

__all__ = [
    'DOFManager',
    'DOF_PER_NODE',
    'assemble_global_K',
    'assemble_global_F',
    'regularize_diagonal',
    'solve_linear',
    'MechanismError',
]
