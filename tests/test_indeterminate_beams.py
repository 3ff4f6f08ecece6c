"""
TEST: Statically Indeterminate Beams
====================================

Fixed-fixed and propped-cantilever spans with a central point load, checked
against the classical closed-form results. The propped cantilever is built
twice: once with a roller support, once with a pinned member end, which
exercises the condensed stiffness and the released fixed-end forces.
"""

import numpy as np
import pytest

from planeframe.model import Node, Member, Support, Load
from planeframe.analysis import solve

L = 10.0
E = 200e9
I = 1e-4
A = 0.01
P = -10.0


def _beam(supports, start_release="fixed", end_release="fixed", position=L / 2):
    nodes = [Node("n1", 0.0, 0.0), Node("n2", L, 0.0)]
    members = [Member("m1", "n1", "n2", E=E, I=I, A=A,
                      start_release=start_release, end_release=end_release)]
    loads = [Load("l1", "m1", magnitude=P, position=position)]
    return solve(nodes, members, supports, loads)


def test_fixed_fixed_central_load():
    result = _beam([Support("s1", "n1", "fixed"), Support("s2", "n2", "fixed")])
    diag = result.diagrams["m1"]

    # End moments PL/8, hogging at both ends
    assert np.isclose(diag.moment[0], -abs(P) * L / 8, atol=0.1)
    assert np.isclose(diag.moment[-1], -abs(P) * L / 8, atol=0.1)
    assert np.isclose(np.max(diag.moment), abs(P) * L / 8, atol=0.1)

    assert np.isclose(diag.shear[0], 5.0, atol=0.1)
    assert np.isclose(diag.shear[-1], -5.0, atol=0.1)

    # Max deflection PL³/(192EI) at midspan
    assert np.max(np.abs(diag.displacement)) == pytest.approx(abs(P) * L**3 / (192 * E * I), rel=1e-6)
    assert np.isclose(diag.displacement[-1], 0.0, atol=1e-12)

    # Reported end forces: both end moments are the restraining moments
    forces = result.member_forces["m1"]
    assert np.isclose(forces.moment_start, abs(P) * L / 8, atol=1e-6)
    assert np.isclose(forces.moment_end, abs(P) * L / 8, atol=1e-6)
    assert np.isclose(forces.shear_start, -P / 2, atol=1e-6)
    assert np.isclose(forces.shear_end, P / 2, atol=1e-6)

    assert np.isclose(result.reactions["n1"].Mz, abs(P) * L / 8, atol=1e-6)
    assert np.isclose(result.reactions["n2"].Mz, -abs(P) * L / 8, atol=1e-6)


def test_propped_cantilever_roller():
    result = _beam([Support("s1", "n1", "fixed"), Support("s2", "n2", "roller")])
    diag = result.diagrams["m1"]

    assert np.isclose(diag.moment[0], -3 * abs(P) * L / 16, atol=0.1)   # -18.75
    assert np.isclose(diag.moment[-1], 0.0, atol=0.1)
    assert np.isclose(diag.shear[0], 11 * abs(P) / 16, atol=0.1)         # 6.875
    assert np.isclose(diag.shear[-1], -5 * abs(P) / 16, atol=0.1)        # -3.125

    # Midspan deflection 7PL³/(768EI)
    mid = np.argmin(np.abs(diag.x - L / 2))
    assert diag.displacement[mid] == pytest.approx(7 * P * L**3 / (768 * E * I), rel=1e-6)

    assert np.isclose(result.reactions["n1"].Fy, 11 * abs(P) / 16, atol=1e-6)
    assert np.isclose(result.reactions["n2"].Fy, 5 * abs(P) / 16, atol=1e-6)


def test_propped_cantilever_pinned_member_end():
    """Both nodes fixed, member pinned at its end: same forces as the roller case."""
    result = _beam([Support("s1", "n1", "fixed"), Support("s2", "n2", "fixed")],
                   end_release="pinned")
    diag = result.diagrams["m1"]

    assert np.isclose(diag.moment[0], -18.75, atol=0.1)
    assert np.isclose(diag.moment[-1], 0.0, atol=0.1)
    assert np.isclose(diag.shear[0], 6.875, atol=0.1)
    assert np.isclose(diag.shear[-1], -3.125, atol=0.1)
    assert np.isclose(result.reactions["n2"].Mz, 0.0, atol=1e-9)

    mid = np.argmin(np.abs(diag.x - L / 2))
    assert diag.displacement[mid] == pytest.approx(7 * P * L**3 / (768 * E * I), rel=1e-6)


def test_propped_cantilever_pinned_member_start():
    """
    Mirror image: member pinned at its start. The start slope is not the
    (clamped) node rotation, so the deflection relies on the compatibility
    solve and must still return to zero at the far end.
    """
    result = _beam([Support("s1", "n1", "fixed"), Support("s2", "n2", "fixed")],
                   start_release="pinned")
    diag = result.diagrams["m1"]

    assert np.isclose(diag.moment[0], 0.0, atol=0.1)
    assert np.isclose(diag.moment[-1], -18.75, atol=0.1)
    assert np.isclose(diag.shear[0], 3.125, atol=0.1)
    assert np.isclose(diag.shear[-1], -6.875, atol=0.1)

    assert np.isclose(diag.displacement[0], 0.0, atol=1e-12)
    assert np.isclose(diag.displacement[-1], 0.0, atol=1e-12)
    mid = np.argmin(np.abs(diag.x - L / 2))
    assert diag.displacement[mid] == pytest.approx(7 * P * L**3 / (768 * E * I), rel=1e-6)
