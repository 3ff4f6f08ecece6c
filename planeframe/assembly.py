# global K / F assembly and support conditions for plane frames

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Mapping

import numpy as np

from .model import Load, Member, Node, Support
from .elements import frame2d_global_stiffness
from .loads import member_fef_global
from .kernel.dof import DOFManager
from .kernel.assemble import assemble_global_K, assemble_global_F

logger = logging.getLogger(__name__)

# support type -> constrained dof kinds
SUPPORT_DOFS = {
    "pin": ("x", "y"),
    "fixed": ("x", "y", "r"),
    "roller": ("y",),   # horizontal bearing surface assumed
}


def member_dof_map(dof: DOFManager, m: Member) -> List[int]:
    return dof.element_dof_map([m.start, m.end])


def loads_by_member(loads: Iterable[Load]) -> Dict[str, List[Load]]:
    grouped = defaultdict(list)
    for load in loads:
        grouped[load.member].append(load)
    return grouped


def assemble_frame_K(
    nodes: Mapping[str, Node],
    members: Iterable[Member],
    dof: DOFManager,
) -> np.ndarray:
    contributions = [
        (member_dof_map(dof, m), frame2d_global_stiffness(nodes, m))
        for m in members
    ]
    return assemble_global_K(dof.ndof(), contributions)


def assemble_frame_F(
    nodes: Mapping[str, Node],
    members: Iterable[Member],
    loads: Iterable[Load],
    dof: DOFManager,
    position_tol: float = 1e-9,
) -> np.ndarray:
    """
    Global load vector of equivalent nodal loads (-FEF) from member point loads.
    """
    grouped = loads_by_member(loads)
    contributions = []
    for m in members:
        member_loads = grouped.get(m.id)
        if not member_loads:
            continue
        fef_global = member_fef_global(nodes, m, member_loads, position_tol)
        contributions.append((member_dof_map(dof, m), -fef_global))
    return assemble_global_F(dof.ndof(), contributions)


def support_fixed_dofs(supports: Iterable[Support], dof: DOFManager) -> List[int]:
    """
    Constrained DOF indices for a set of supports.

    pin -> ux, uy; fixed -> ux, uy, rz; roller -> uy.
    Rollers always constrain the vertical translation, whatever their angle.
    """
    fixed = set()
    for s in supports:
        if s.type == "roller" and s.angle % 180.0 != 0.0:
            logger.debug(
                "Support %s: roller angle %.1f° ignored, constraining uy", s.id, s.angle
            )
        for kind in SUPPORT_DOFS[s.type]:
            fixed.add(dof.idx(s.node, kind))
    return sorted(fixed)
