# Member stiffness (with end releases) + transformation

from typing import Mapping

import numpy as np

from .model import ConfigurationError, Member, Node, FIXED, PINNED


def member_geometry(nodes: Mapping[str, Node], m: Member):
    """Return (L, c, s) for a member; raise ConfigurationError on bad geometry."""
    try:
        ni = nodes[m.start]
        nj = nodes[m.end]
    except KeyError:
        raise ConfigurationError(
            f"Invalid member {m.id!r}: missing node(s). Start: {m.start!r}, End: {m.end!r}"
        ) from None
    dx = nj.x - ni.x
    dy = nj.y - ni.y
    L = float(np.hypot(dx, dy))
    if L <= 0.0:
        raise ConfigurationError(f"Invalid member {m.id!r}: length is zero.")
    c = dx / L
    s = dy / L
    return L, c, s


def frame2d_local_stiffness(
    E: float,
    A: float,
    I: float,
    L: float,
    start_release: str = FIXED,
    end_release: str = FIXED,
) -> np.ndarray:
    """
    Local stiffness matrix in element local coords (x along member).
    DOF order: [uix, uiy, rzi, ujx, ujy, rzj]

    A pinned end is condensed out rather than zeroed: with one end pinned the
    bending terms become the propped-cantilever values 3EI/L³, 3EI/L², 3EI/L
    and the released rotation row/column is zero. With both ends pinned only
    the axial block survives.
    """
    EA_L = E * A / L
    EI = E * I
    L2 = L * L
    L3 = L2 * L

    k = np.zeros((6, 6), dtype=float)
    k[0, 0] = k[3, 3] = EA_L
    k[0, 3] = k[3, 0] = -EA_L

    if start_release == PINNED and end_release == PINNED:
        return k

    if start_release == PINNED:
        w2, w3, w4 = 3*EI/L3, 3*EI/L2, 3*EI/L
        k[1, 1] = k[4, 4] = w2
        k[1, 4] = k[4, 1] = -w2
        k[1, 5] = k[5, 1] = w3
        k[4, 5] = k[5, 4] = -w3
        k[5, 5] = w4
        return k

    if end_release == PINNED:
        w2, w3, w4 = 3*EI/L3, 3*EI/L2, 3*EI/L
        k[1, 1] = k[4, 4] = w2
        k[1, 4] = k[4, 1] = -w2
        k[1, 2] = k[2, 1] = w3
        k[2, 4] = k[4, 2] = -w3
        k[2, 2] = w4
        return k

    k[1:3, 1:3] = [[12*EI/L3, 6*EI/L2],
                   [ 6*EI/L2,  4*EI/L]]
    k[1:3, 4:6] = [[-12*EI/L3, 6*EI/L2],
                   [ -6*EI/L2,  2*EI/L]]
    k[4:6, 1:3] = [[-12*EI/L3, -6*EI/L2],
                   [  6*EI/L2,   2*EI/L]]
    k[4:6, 4:6] = [[12*EI/L3, -6*EI/L2],
                   [-6*EI/L2,   4*EI/L]]
    return k


def frame2d_transform(c: float, s: float) -> np.ndarray:
    """
    6x6 transform from global DOFs to local DOFs.
    """
    T = np.array([
        [ c,  s, 0,  0, 0, 0],
        [-s,  c, 0,  0, 0, 0],
        [ 0,  0, 1,  0, 0, 0],
        [ 0,  0, 0,  c, s, 0],
        [ 0,  0, 0, -s, c, 0],
        [ 0,  0, 0,  0, 0, 1],
    ], dtype=float)
    return T


def frame2d_global_stiffness(nodes: Mapping[str, Node], m: Member) -> np.ndarray:
    L, c, s = member_geometry(nodes, m)
    k_local = frame2d_local_stiffness(m.E, m.A, m.I, L, m.start_release, m.end_release)
    T = frame2d_transform(c, s)
    k_global = T.T @ k_local @ T
    return k_global
