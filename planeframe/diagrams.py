# planeframe/diagrams.py
"""
MEMBER DIAGRAM COMPUTATIONS
===========================

This module samples shear V(x), bending moment M(x) and transverse
deflection v(x) along each member of a solved plane frame.

KEY CONCEPTS:
-------------
With point loads only, every diagram is piecewise polynomial between load
positions, so it can be written in closed form from the start-end forces
and the loads:

    V(x) = V0 + Σ_{a<x} P
    M(x) = M0 + V0·x + Σ_{a<x} P·(x - a)
    EI·v(x) = M0·x²/2 + V0·x³/6 + Σ_{a<x} P·(x - a)³/6  + EI·(θ0·x + v1)

where V0 = f_local[1], M0 = -f_local[2] (start end forces of the member),
v1 is the local transverse translation of the start node and θ0 the slope
at the start.

The sample points are a uniform partition of [0, L] plus every load
position, so the jump in V and the kink in M under a load are not smoothed
away.

SIGN CONVENTIONS:
-----------------
- Positive V: upward force on the left-hand segment (local +y)
- Positive M: sagging (compression on the local +y fibre)
- v: local transverse displacement (local +y)

PINNED START:
-------------
When the start end is pinned, the node rotation is not the slope of the
member, so θ0 is found from compatibility at the far end:

    v(L) = v2   →   θ0 = (v2 - v1 - bending(L)) / L
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional

import numpy as np

from .model import Load, Member, Node, PINNED
from .elements import member_geometry, frame2d_transform
from .post import member_end_forces_local
from .assembly import member_dof_map, loads_by_member
from .kernel.dof import DOFManager


@dataclass(frozen=True, eq=False)
class MemberDiagram:
    """Sampled diagrams for one member (arrays share the x grid)."""
    x: np.ndarray               # Position along member (0 to L)
    shear: np.ndarray           # V(x)
    moment: np.ndarray          # M(x)
    displacement: np.ndarray    # v(x), local transverse

    def __eq__(self, other):
        if not isinstance(other, MemberDiagram):
            return NotImplemented
        return all(
            np.array_equal(getattr(self, name), getattr(other, name))
            for name in ("x", "shear", "moment", "displacement")
        )

    __hash__ = None

    @property
    def max_shear(self) -> float:
        return float(np.max(np.abs(self.shear))) if self.shear.size else 0.0

    @property
    def max_moment(self) -> float:
        return float(np.max(np.abs(self.moment))) if self.moment.size else 0.0

    @property
    def max_displacement(self) -> float:
        return float(np.max(np.abs(self.displacement))) if self.displacement.size else 0.0


def evaluation_points(L: float, loads: Iterable[Load], n_intervals: int = 50) -> np.ndarray:
    """
    Uniform partition of [0, L] unioned with every load position.

    >>> evaluation_points(4.0, [Load("l", "m", -1.0, 1.3)], n_intervals=4)
    array([0. , 1. , 1.3, 2. , 3. , 4. ])
    """
    xs = np.linspace(0.0, L, n_intervals + 1)
    positions = [min(max(ld.position, 0.0), L) for ld in loads]
    return np.unique(np.concatenate([xs, np.asarray(positions, dtype=float)]))


def _bending_deflection(
    x: np.ndarray,
    V0: float,
    M0: float,
    loads: List[Load],
    EI: float,
) -> np.ndarray:
    """Twice-integrated curvature M(x)/EI with zero slope and offset at x = 0."""
    total = M0 * x**2 / 2.0 + V0 * x**3 / 6.0
    for ld in loads:
        beyond = np.clip(x - ld.position, 0.0, None)
        total = total + ld.magnitude * beyond**3 / 6.0
    return total / EI


def compute_member_diagram(
    nodes: Mapping[str, Node],
    member: Member,
    loads: Iterable[Load],
    f_global: np.ndarray,
    d_global: np.ndarray,
    dof: DOFManager,
    n_intervals: int = 50,
) -> MemberDiagram:
    """
    Compute V, M and v at sample points along a member.

    Parameters:
    -----------
    nodes : Mapping[str, Node]
        Node lookup by id
    member : Member
        The member
    loads : Iterable[Load]
        Point loads acting on this member
    f_global : np.ndarray
        Member end forces in global coordinates (see post.member_end_forces_global)
    d_global : np.ndarray
        Global displacement vector from solver
    dof : DOFManager
        DOF numbering used for the solve
    n_intervals : int
        Uniform intervals along the member (load positions are added)

    Returns:
    --------
    MemberDiagram
    """
    loads = [ld for ld in loads if ld.member == member.id]
    L, c, s = member_geometry(nodes, member)
    EI = member.E * member.I

    f_local = member_end_forces_local(nodes, member, f_global)
    V0 = float(f_local[1])
    M0 = float(-f_local[2])

    # Local displacements: [u_i, v_i, theta_i, u_j, v_j, theta_j]
    T = frame2d_transform(c, s)
    d_local = T @ d_global[member_dof_map(dof, member)]
    v1 = float(d_local[1])
    theta_start = float(d_local[2])
    v2 = float(d_local[4])

    if member.start_release == PINNED:
        bending_L = float(_bending_deflection(np.array([L]), V0, M0, loads, EI)[0])
        theta_start = (v2 - v1 - bending_L) / L

    x = evaluation_points(L, loads, n_intervals)

    shear = np.full_like(x, V0)
    moment = M0 + V0 * x
    for ld in loads:
        beyond = x > ld.position
        shear = shear + np.where(beyond, ld.magnitude, 0.0)
        moment = moment + np.where(beyond, ld.magnitude * (x - ld.position), 0.0)

    displacement = _bending_deflection(x, V0, M0, loads, EI) + theta_start * x + v1

    return MemberDiagram(x=x, shear=shear, moment=moment, displacement=displacement)


def compute_frame_diagrams(
    nodes: Mapping[str, Node],
    members: Iterable[Member],
    loads: Iterable[Load],
    end_forces: Mapping[str, np.ndarray],
    d_global: np.ndarray,
    dof: DOFManager,
    n_intervals: int = 50,
) -> Dict[str, MemberDiagram]:
    """
    Compute diagrams for all members of a frame, keyed by member id.
    """
    grouped = loads_by_member(loads)
    return {
        m.id: compute_member_diagram(
            nodes, m, grouped.get(m.id, []), end_forces[m.id], d_global, dof, n_intervals
        )
        for m in members
    }


def frame_summary(diagrams: Mapping[str, MemberDiagram]) -> Dict[str, Optional[object]]:
    """
    Get summary statistics for the entire frame.

    Returns:
    --------
    Dict with the largest absolute shear, moment and displacement over all
    members and the member where each occurs.
    """
    if not diagrams:
        return {
            "max_shear": 0.0,
            "max_moment": 0.0,
            "max_displacement": 0.0,
            "critical_member_V": None,
            "critical_member_M": None,
            "critical_member_v": None,
        }

    max_V_id = max(diagrams, key=lambda k: diagrams[k].max_shear)
    max_M_id = max(diagrams, key=lambda k: diagrams[k].max_moment)
    max_v_id = max(diagrams, key=lambda k: diagrams[k].max_displacement)

    return {
        "max_shear": diagrams[max_V_id].max_shear,
        "max_moment": diagrams[max_M_id].max_moment,
        "max_displacement": diagrams[max_v_id].max_displacement,
        "critical_member_V": max_V_id,
        "critical_member_M": max_M_id,
        "critical_member_v": max_v_id,
    }
