# member end forces, nodal displacements, support reactions

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping

import numpy as np

from .model import ConfigurationError, Load, Member, Node, Support
from .elements import member_geometry, frame2d_global_stiffness, frame2d_transform
from .loads import member_fef_global
from .assembly import member_dof_map, loads_by_member
from .kernel.dof import DOFManager


@dataclass(frozen=True)
class NodeDisplacement:
    dx: float
    dy: float
    rotation: float


@dataclass(frozen=True)
class MemberForces:
    """
    End forces of a member in its local frame.

    axial, shear_start, moment_start are the forces acting on the start of
    the member. shear_end and moment_end are sign-flipped, i.e. reported as
    the action of the member on the end node.
    """
    axial: float
    shear_start: float
    moment_start: float
    shear_end: float
    moment_end: float


@dataclass(frozen=True)
class Reaction:
    Fx: float
    Fy: float
    Mz: float


def member_end_forces_global(
    nodes: Mapping[str, Node],
    member: Member,
    loads: Iterable[Load],
    d_global: np.ndarray,
    dof: DOFManager,
    position_tol: float = 1e-9,
) -> np.ndarray:
    """
    Compute element end forces in GLOBAL coordinates from global displacements.

    f = K_e·d_e + FEF_e

    The stiffness and fixed-end forces are rebuilt from the member definition,
    nothing is cached from assembly.

    Returns:
    --------
    np.ndarray
        Shape (6,): [Fx_i, Fy_i, Mz_i, Fx_j, Fy_j, Mz_j], forces acting on
        the member ends (positive along global +x, +y, counterclockwise)
    """
    d_elem_global = d_global[member_dof_map(dof, member)]
    k_global = frame2d_global_stiffness(nodes, member)
    fef_global = member_fef_global(nodes, member, loads, position_tol)
    return k_global @ d_elem_global + fef_global


def member_end_forces_local(
    nodes: Mapping[str, Node],
    member: Member,
    f_global: np.ndarray,
) -> np.ndarray:
    """
    Rotate global end forces into the member's local frame.

    Returns [Ni, Vi, Mi, Nj, Vj, Mj] acting on the member ends.
    """
    _, c, s = member_geometry(nodes, member)
    return frame2d_transform(c, s) @ f_global


def compute_member_end_forces(
    nodes: Mapping[str, Node],
    members: Iterable[Member],
    loads: Iterable[Load],
    d_global: np.ndarray,
    dof: DOFManager,
    position_tol: float = 1e-9,
) -> Dict[str, np.ndarray]:
    """Global end-force vector for every member, keyed by member id."""
    grouped = loads_by_member(loads)
    return {
        m.id: member_end_forces_global(
            nodes, m, grouped.get(m.id, []), d_global, dof, position_tol
        )
        for m in members
    }


def compute_member_forces(
    nodes: Mapping[str, Node],
    members: Iterable[Member],
    end_forces: Mapping[str, np.ndarray],
) -> Dict[str, MemberForces]:
    result = {}
    for m in members:
        f_local = member_end_forces_local(nodes, m, end_forces[m.id])
        result[m.id] = MemberForces(
            axial=float(f_local[0]),
            shear_start=float(f_local[1]),
            moment_start=float(f_local[2]),
            shear_end=float(-f_local[4]),
            moment_end=float(-f_local[5]),
        )
    return result


def compute_nodal_displacements(
    nodes: Iterable[Node],
    d_global: np.ndarray,
    dof: DOFManager,
) -> Dict[str, NodeDisplacement]:
    """
    Extract nodal displacements from global displacement vector.
    """
    result = {}
    for node in nodes:
        ux, uy, rz = d_global[dof.node_dofs(node.id)]
        result[node.id] = NodeDisplacement(dx=float(ux), dy=float(uy), rotation=float(rz))
    return result


def compute_reactions(
    supports: Iterable[Support],
    members: Iterable[Member],
    end_forces: Mapping[str, np.ndarray],
) -> Dict[str, Reaction]:
    """
    Support reactions from member end forces.

    For each supported node, sum the global end forces of every member that
    starts or ends there. That sum is what the support must provide to hold
    the node in equilibrium.

    Returns:
    --------
    Dict[str, Reaction]
        Mapping of supported node id to (Fx, Fy, Mz)
    """
    members = list(members)
    result = {}
    for s in supports:
        if s.node in result:
            continue
        total = np.zeros(3, dtype=float)
        for m in members:
            try:
                f = end_forces[m.id]
            except KeyError:
                raise ConfigurationError(f"No end forces for member {m.id!r}.") from None
            if m.start == s.node:
                total += f[0:3]
            if m.end == s.node:
                total += f[3:6]
        result[s.node] = Reaction(Fx=float(total[0]), Fy=float(total[1]), Mz=float(total[2]))
    return result
