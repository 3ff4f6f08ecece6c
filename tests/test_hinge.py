"""
TEST: Interior Hinge
====================

Fixed A ── m1 ── hinge B ── m2 ── fixed C, with both members pinned at B.
The hinge node has no rotational stiffness at all, so its rotation DOF goes
through the diagonal regularization. No moment may cross B.

Closed form (P = 10 down at the middle of m1, L1 = L2 = 5):
    B-C acts as a spring 3EI/L2³ under A-B  →  shear through the hinge 1.5625
    A: V = 8.4375, M = -17.1875;  C: M = -7.8125
"""

import logging

import numpy as np
import pytest

from planeframe.model import Node, Member, Support, Load
from planeframe.analysis import solve

E, I, A = 200e9, 1e-4, 0.01


def _hinged_beam(loads):
    nodes = [Node("n1", 0.0, 0.0), Node("n2", 5.0, 0.0), Node("n3", 10.0, 0.0)]
    members = [
        Member("m1", "n1", "n2", E=E, I=I, A=A, end_release="pinned"),
        Member("m2", "n2", "n3", E=E, I=I, A=A, start_release="pinned"),
    ]
    supports = [Support("s1", "n1", "fixed"), Support("s3", "n3", "fixed")]
    return solve(nodes, members, supports, loads)


def test_hinge_closed_form():
    result = _hinged_beam([Load("l1", "m1", magnitude=-10.0, position=2.5)])
    m1 = result.diagrams["m1"]
    m2 = result.diagrams["m2"]

    assert np.isclose(m1.shear[0], 8.4375, atol=0.1)
    assert np.isclose(m1.moment[0], -17.1875, atol=0.1)
    assert np.isclose(np.max(np.abs(m1.moment)), 17.1875, atol=0.1)

    assert np.allclose(m2.shear, -1.5625, atol=0.1)
    assert np.isclose(m2.moment[-1], -7.8125, atol=0.1)


def test_hinge_transmits_no_moment():
    loads = [
        Load("l1", "m1", magnitude=-10.0, position=2.5),
        Load("l2", "m2", magnitude=-4.0, position=1.0),
    ]
    result = _hinged_beam(loads)

    # both diagrams vanish at the shared node
    assert np.isclose(result.diagrams["m1"].moment[-1], 0.0, atol=1e-6)
    assert np.isclose(result.diagrams["m2"].moment[0], 0.0, atol=1e-6)
    assert np.isclose(result.member_forces["m1"].moment_end, 0.0, atol=1e-6)
    assert np.isclose(result.member_forces["m2"].moment_start, 0.0, atol=1e-6)


def test_hinge_deflection_is_continuous():
    """Both members meet the hinge node's translation, whatever its rotation."""
    result = _hinged_beam([Load("l1", "m1", magnitude=-10.0, position=2.5)])
    dy_hinge = result.displacements["n2"].dy

    # -R_B·L2³/(3EI) with R_B = 1.5625
    assert dy_hinge == pytest.approx(-1.5625 * 5.0**3 / (3 * E * I), rel=1e-6)
    assert result.diagrams["m1"].displacement[-1] == pytest.approx(dy_hinge, rel=1e-6)
    assert result.diagrams["m2"].displacement[0] == pytest.approx(dy_hinge, rel=1e-12)
    assert np.isclose(result.diagrams["m2"].displacement[-1], 0.0, atol=1e-12)


def test_hinge_regularization_is_logged(caplog):
    with caplog.at_level(logging.INFO, logger="planeframe"):
        _hinged_beam([Load("l1", "m1", magnitude=-10.0, position=2.5)])
    assert "1 DOF(s) had no stiffness" in caplog.text
