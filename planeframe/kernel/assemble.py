# planeframe/kernel/assemble.py
"""
ASSEMBLY: Global Matrix Assembly
================================

PURPOSE:
--------
This module handles the assembly of element contributions into global matrices.
This is the scatter-add operation that builds K and F from element-level data.

Assembly doesn't care how an element matrix was derived (rigid ends, pinned
ends, axial only). It just needs:
- Total number of DOFs
- For each element: its DOF map and its stiffness matrix / load vector

Every call allocates fresh arrays; nothing is shared between solves.

USAGE:
------
    contributions = []
    for member in members:
        dof_map = dof.element_dof_map([member.start, member.end])
        ke = frame2d_global_stiffness(nodes, member)
        contributions.append((dof_map, ke))

    K = assemble_global_K(dof.ndof(), contributions)
"""

import logging
from typing import List, Tuple

import numpy as np

logger = logging.getLogger(__name__)


def assemble_global_K(
    ndof: int,
    contributions: List[Tuple[List[int], np.ndarray]]
) -> np.ndarray:
    """
    Assemble global stiffness matrix from element contributions.

    ALGORITHM:
    ----------
    K = zeros(ndof × ndof)
    for each element:
        for each (local_i, local_j) in element ke:
            K[dof_map[local_i], dof_map[local_j]] += ke[local_i, local_j]

    Parameters:
    -----------
    ndof : int
        Total number of DOFs in the system (3 × n_nodes)

    contributions : List[Tuple[List[int], np.ndarray]]
        List of (dof_map, ke) tuples, one per element:
        - dof_map: global DOF indices for this element, e.g. [0, 1, 2, 3, 4, 5]
        - ke: element stiffness matrix in global coordinates,
          shape (len(dof_map), len(dof_map))

    Returns:
    --------
    np.ndarray
        Global stiffness matrix K, shape (ndof, ndof)
        Symmetric positive semi-definite (becomes PD after BCs applied)
    """
    K = np.zeros((ndof, ndof), dtype=float)

    for dof_map, ke in contributions:
        n_element_dofs = len(dof_map)

        assert ke.shape == (n_element_dofs, n_element_dofs), \
            f"Element ke shape {ke.shape} doesn't match dof_map length {n_element_dofs}"

        # np.add.at accumulates repeated indices (a member whose two ends share
        # a DOF would otherwise overwrite instead of add)
        idx = np.asarray(dof_map, dtype=int)
        np.add.at(K, np.ix_(idx, idx), ke)

    return K


def assemble_global_F(
    ndof: int,
    contributions: List[Tuple[List[int], np.ndarray]]
) -> np.ndarray:
    """
    Assemble global load vector from element contributions.

    Same scatter-add logic as assemble_global_K, but for load vectors.
    Used for equivalent nodal loads from member point loads.

    Parameters:
    -----------
    ndof : int
        Total number of DOFs in the system

    contributions : List[Tuple[List[int], np.ndarray]]
        List of (dof_map, fe) tuples, one per loaded element:
        - dof_map: List of global DOF indices
        - fe: Element load vector in global coordinates, shape (len(dof_map),)

    Returns:
    --------
    np.ndarray
        Global load vector F, shape (ndof,)
    """
    F = np.zeros(ndof, dtype=float)

    for dof_map, fe in contributions:
        n_element_dofs = len(dof_map)

        assert fe.shape == (n_element_dofs,), \
            f"Element fe shape {fe.shape} doesn't match dof_map length {n_element_dofs}"

        np.add.at(F, np.asarray(dof_map, dtype=int), fe)

    return F


def regularize_diagonal(
    K: np.ndarray,
    tol: float = 1e-9,
    dummy_stiffness: float = 1.0,
) -> Tuple[np.ndarray, List[int]]:
    """
    Replace negligible diagonal entries of K with a small dummy stiffness.

    A zero diagonal means a DOF that no element stiffens at all, e.g. the
    rotation of a node where every connected member end is pinned. Such a DOF
    makes K singular although the structure itself is stable. Giving it a
    dummy spring lets the solve proceed; the value computed for that DOF is
    not physically meaningful.

    Off-diagonal terms and genuine rigid-body modes are left alone.

    Returns:
    --------
    K_reg : np.ndarray
        Copy of K with the patched diagonal
    patched : List[int]
        DOF indices that received the dummy stiffness
    """
    K_reg = K.copy()
    diag = np.diag(K_reg)
    patched = [int(i) for i in np.flatnonzero(np.abs(diag) < tol)]
    if patched:
        K_reg[patched, patched] = dummy_stiffness
        logger.debug("Regularized %d zero-stiffness DOF(s): %s", len(patched), patched)
    return K_reg, patched
