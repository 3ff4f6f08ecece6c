# planeframe/analysis.py
"""
ANALYSIS: one linear static solve of a plane frame
==================================================

    result = solve(nodes, members, supports, loads)

Pipeline (run once per call, nothing shared between calls):

    1. DOF numbering        kernel.dof.DOFManager
    2. Element formulation  elements / loads (stiffness, fixed-end forces)
    3. Assembly + solve     assembly, kernel.assemble, kernel.solve
    4. Extraction           post (forces, reactions), diagrams

Faults:
    ConfigurationError  bad references or geometry, raised before solving
    MechanismError      free-free system cannot be solved
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

import numpy as np
import pandas as pd

from .config import CONFIG, SolverConfig
from .model import Load, Member, Node, Support, validate_model
from .assembly import assemble_frame_F, assemble_frame_K, support_fixed_dofs
from .diagrams import MemberDiagram, compute_frame_diagrams
from .kernel.assemble import regularize_diagonal
from .kernel.dof import DOFManager
from .kernel.solve import solve_linear
from .post import (
    MemberForces,
    NodeDisplacement,
    Reaction,
    compute_member_end_forces,
    compute_member_forces,
    compute_nodal_displacements,
    compute_reactions,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Results of one solve. Built fresh on every call and owned by the caller."""
    displacements: Dict[str, NodeDisplacement] = field(default_factory=dict)
    member_forces: Dict[str, MemberForces] = field(default_factory=dict)
    diagrams: Dict[str, MemberDiagram] = field(default_factory=dict)
    reactions: Dict[str, Reaction] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not (self.displacements or self.member_forces
                    or self.diagrams or self.reactions)

    def to_frames(self) -> Dict[str, pd.DataFrame]:
        """
        Result tables as pandas DataFrames.

        Keys: "displacements" (index node), "member_forces" (index member),
        "reactions" (index node), "diagrams" (long format, one row per
        sample point: member, x, shear, moment, displacement).
        """
        displacements = pd.DataFrame(
            [(nid, v.dx, v.dy, v.rotation) for nid, v in self.displacements.items()],
            columns=["node", "dx", "dy", "rotation"],
        ).set_index("node")

        member_forces = pd.DataFrame(
            [(mid, f.axial, f.shear_start, f.moment_start, f.shear_end, f.moment_end)
             for mid, f in self.member_forces.items()],
            columns=["member", "axial", "shear_start", "moment_start", "shear_end", "moment_end"],
        ).set_index("member")

        reactions = pd.DataFrame(
            [(nid, r.Fx, r.Fy, r.Mz) for nid, r in self.reactions.items()],
            columns=["node", "Fx", "Fy", "Mz"],
        ).set_index("node")

        diagram_columns = ["member", "x", "shear", "moment", "displacement"]
        parts = [
            pd.DataFrame({
                "member": mid,
                "x": dg.x,
                "shear": dg.shear,
                "moment": dg.moment,
                "displacement": dg.displacement,
            }, columns=diagram_columns)
            for mid, dg in self.diagrams.items()
        ]
        diagrams = (pd.concat(parts, ignore_index=True) if parts
                    else pd.DataFrame(columns=diagram_columns))

        return {
            "displacements": displacements,
            "member_forces": member_forces,
            "reactions": reactions,
            "diagrams": diagrams,
        }


def solve(
    nodes: Iterable[Node],
    members: Iterable[Member],
    supports: Iterable[Support],
    loads: Iterable[Load],
    config: Optional[SolverConfig] = None,
) -> AnalysisResult:
    """
    Linear static analysis of a plane frame by the direct stiffness method.

    Parameters:
    -----------
    nodes, members, supports, loads
        Model collections. Ids are opaque strings, unique per collection;
        references must resolve within this call.
    config : SolverConfig, optional
        Numerical settings (defaults to planeframe.config.CONFIG)

    Returns:
    --------
    AnalysisResult
        Empty if there are no nodes.

    Raises:
    -------
    ConfigurationError
        Missing references, duplicate ids, zero-length member, load outside
        its member, unknown release/support/load type.
    MechanismError
        Unstable or singular system after regularization.
    """
    cfg = config or CONFIG
    nodes, members, supports, loads = list(nodes), list(members), list(supports), list(loads)

    if not nodes:
        return AnalysisResult()

    validate_model(nodes, members, supports, loads)

    node_map = {n.id: n for n in nodes}
    dof = DOFManager.from_nodes(nodes)
    logger.debug("Numbered %d nodes -> %d DOFs", len(nodes), dof.ndof())

    K = assemble_frame_K(node_map, members, dof)
    F = assemble_frame_F(node_map, members, loads, dof, cfg.position_tol)
    fixed = support_fixed_dofs(supports, dof)

    K_reg, patched = regularize_diagonal(K, cfg.zero_stiffness_tol, cfg.dummy_stiffness)
    if patched:
        logger.info("%d DOF(s) had no stiffness and were regularized", len(patched))

    # R = K·d - F from the solver includes the dummy springs; reactions are
    # summed from member end forces instead.
    d, _, _ = solve_linear(K_reg, F, fixed, cfg.cond_limit)

    end_forces = compute_member_end_forces(node_map, members, loads, d, dof, cfg.position_tol)

    result = AnalysisResult(
        displacements=compute_nodal_displacements(nodes, d, dof),
        member_forces=compute_member_forces(node_map, members, end_forces),
        diagrams=compute_frame_diagrams(node_map, members, loads, end_forces, d, dof,
                                        cfg.n_intervals),
        reactions=compute_reactions(supports, members, end_forces),
    )
    logger.info(
        "Solved frame: %d nodes, %d members, %d supports, %d loads (max |d| = %.3e)",
        len(nodes), len(members), len(supports), len(loads),
        float(np.max(np.abs(d))) if d.size else 0.0,
    )
    return result
