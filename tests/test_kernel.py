"""
TEST: Kernel (assembly, regularization, partitioned solve)
==========================================================
"""

import numpy as np
import pytest

from planeframe.model import Node, Member, PINNED
from planeframe.assembly import assemble_frame_K
from planeframe.kernel import (
    DOFManager,
    MechanismError,
    assemble_global_F,
    assemble_global_K,
    regularize_diagonal,
    solve_linear,
)
from planeframe.kernel.solve import partition_dofs


def test_scatter_add_accumulates_shared_dofs():
    ke = np.ones((2, 2))
    K = assemble_global_K(3, [([0, 1], ke), ([1, 2], ke)])
    np.testing.assert_array_equal(K, [[1, 1, 0], [1, 2, 1], [0, 1, 1]])

    F = assemble_global_F(3, [([0, 1], np.array([1.0, 2.0])), ([1, 2], np.array([3.0, 4.0]))])
    np.testing.assert_array_equal(F, [1.0, 5.0, 4.0])


def test_fresh_arrays_every_call():
    ke = np.eye(2)
    K1 = assemble_global_K(2, [([0, 1], ke)])
    K2 = assemble_global_K(2, [([0, 1], ke)])
    K1[0, 0] = 99.0
    assert K2[0, 0] == 1.0


def test_hinge_node_rotation_is_regularized():
    """Both members pinned at the middle node: nothing stiffens its rotation."""
    nodes = [Node("a", 0, 0), Node("b", 5, 0), Node("c", 10, 0)]
    members = [
        Member("m1", "a", "b", E=200e9, I=1e-4, A=0.01, end_release=PINNED),
        Member("m2", "b", "c", E=200e9, I=1e-4, A=0.01, start_release=PINNED),
    ]
    dof = DOFManager.from_nodes(nodes)
    K = assemble_frame_K({n.id: n for n in nodes}, members, dof)

    r_b = dof.idx("b", "r")
    assert K[r_b, r_b] == 0.0

    K_reg, patched = regularize_diagonal(K, tol=1e-9, dummy_stiffness=2.5)
    assert patched == [r_b]
    assert K_reg[r_b, r_b] == 2.5
    assert K[r_b, r_b] == 0.0, "input matrix must not be modified"
    # off-diagonal terms untouched
    mask = ~np.eye(K.shape[0], dtype=bool)
    np.testing.assert_array_equal(K_reg[mask], K[mask])


def test_regularize_leaves_stiff_diagonal_alone():
    K = np.diag([1.0, 1e-12, 3.0])
    K_reg, patched = regularize_diagonal(K)
    assert patched == [1]
    np.testing.assert_array_equal(np.diag(K_reg), [1.0, 1.0, 3.0])


def test_partition_dofs():
    free, fixed = partition_dofs(6, [4, 0, 4])
    np.testing.assert_array_equal(free, [1, 2, 3, 5])
    np.testing.assert_array_equal(fixed, [0, 4])


def test_solve_linear_spring_chain():
    """Two springs in series, fixed at the left: d = F/k cumulative."""
    k = 100.0
    K = np.array([
        [k, -k, 0.0],
        [-k, 2 * k, -k],
        [0.0, -k, k],
    ])
    F = np.array([0.0, 0.0, 10.0])
    d, R, free = solve_linear(K, F, [0])

    np.testing.assert_allclose(d, [0.0, 0.1, 0.2])
    assert R[0] == pytest.approx(-10.0)
    np.testing.assert_allclose(R[1:], 0.0, atol=1e-12)
    np.testing.assert_array_equal(free, [1, 2])


def test_all_dofs_fixed():
    K = np.eye(3)
    d, R, free = solve_linear(K, np.array([1.0, 0.0, 0.0]), [0, 1, 2])
    assert not np.any(d)
    assert free.size == 0
    np.testing.assert_array_equal(R, [-1.0, 0.0, 0.0])


def test_singular_free_block_raises():
    K = np.array([[1.0, -1.0], [-1.0, 1.0]])
    with pytest.raises(MechanismError, match="Unstable"):
        solve_linear(K, np.array([0.0, 1.0]), [])


def test_non_finite_stiffness_raises_mechanism_error():
    """numpy's own LinAlgError (e.g. SVD not converging) never escapes."""
    K = np.array([[np.nan, 0.0], [0.0, 1.0]])
    with pytest.raises(MechanismError):
        solve_linear(K, np.array([1.0, 1.0]), [])
