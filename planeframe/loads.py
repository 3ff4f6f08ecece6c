# loads.py - Fixed-end forces and equivalent nodal loads for member point loads

from typing import Iterable, Mapping

import numpy as np

from .model import ConfigurationError, Load, Member, Node, FIXED, PINNED
from .elements import member_geometry, frame2d_transform


def point_load_fef_local(
    P: float,
    a: float,
    L: float,
    start_release: str = FIXED,
    end_release: str = FIXED,
) -> np.ndarray:
    """
    Fixed-end forces of a transverse point load in LOCAL element coordinates.

    These are the end reactions of the restrained member: a downward load
    (P < 0) gives upward (positive) end shears.

    Fixed-fixed (b = L - a):
        V_i = -P·b²·(3a + b)/L³      M_i = -P·a·b²/L²
        V_j = -P·a²·(a + 3b)/L³      M_j =  P·a²·b/L²

    Releases:
    - Both ends pinned: simple-beam reactions V_i = -P·b/L, V_j = -P·a/L,
      no end moments.
    - One end pinned: the released moment M_rel = -M(pinned end) is carried
      over to the other end (0.5·M_rel) and balanced by a shear couple
      1.5·M_rel/L (added at i, subtracted at j); the pinned-end moment is zero.

    Parameters:
    -----------
    P : float
        Signed load along local +y (negative = downward on a left-to-right member)
    a : float
        Distance from start node, 0 <= a <= L
    L : float
        Member length

    Returns:
    --------
    np.ndarray
        Shape (6,): [Fx_i, Fy_i, Mz_i, Fx_j, Fy_j, Mz_j]
    """
    b = L - a
    L2 = L * L
    L3 = L2 * L

    if start_release == PINNED and end_release == PINNED:
        return np.array([0.0, -P * b / L, 0.0, 0.0, -P * a / L, 0.0], dtype=float)

    fy_i = -P * b * b * (3 * a + b) / L3
    m_i = -P * a * b * b / L2
    fy_j = -P * a * a * (a + 3 * b) / L3
    m_j = P * a * a * b / L2

    if start_release == PINNED:
        M_rel = -m_i
        fy_i += 1.5 * M_rel / L
        fy_j -= 1.5 * M_rel / L
        m_j += 0.5 * M_rel
        m_i = 0.0
    elif end_release == PINNED:
        M_rel = -m_j
        fy_i += 1.5 * M_rel / L
        fy_j -= 1.5 * M_rel / L
        m_i += 0.5 * M_rel
        m_j = 0.0

    return np.array([0.0, fy_i, m_i, 0.0, fy_j, m_j], dtype=float)


def check_load_position(load: Load, L: float, tol: float = 1e-9) -> None:
    if not (-tol <= load.position <= L + tol):
        raise ConfigurationError(
            f"Invalid load {load.id!r}: position {load.position} outside member "
            f"{load.member!r} (0 <= position <= {L:.6g})."
        )


def member_fef_local(
    nodes: Mapping[str, Node],
    member: Member,
    loads: Iterable[Load],
    position_tol: float = 1e-9,
) -> np.ndarray:
    """Sum of local fixed-end forces of every load acting on `member`."""
    L, _, _ = member_geometry(nodes, member)
    f_local = np.zeros(6, dtype=float)
    for load in loads:
        if load.member != member.id:
            continue
        check_load_position(load, L, position_tol)
        a = min(max(load.position, 0.0), L)
        f_local += point_load_fef_local(
            load.magnitude, a, L, member.start_release, member.end_release
        )
    return f_local


def member_fef_global(
    nodes: Mapping[str, Node],
    member: Member,
    loads: Iterable[Load],
    position_tol: float = 1e-9,
) -> np.ndarray:
    """
    Fixed-end forces of a member in GLOBAL coordinates.

    The equivalent nodal load that goes into F is the negative of this
    vector: FEFs are reactions of the restrained member, and cancelling
    them recovers the response of the loaded structure.
    """
    _, c, s = member_geometry(nodes, member)
    T = frame2d_transform(c, s)
    # T.T transforms from local to global (transpose rotates back)
    return T.T @ member_fef_local(nodes, member, loads, position_tol)
