# planeframe/kernel/solve.py
"""Linear system solver with boundary conditions and mechanism detection."""

import logging

import numpy as np

logger = logging.getLogger(__name__)


class MechanismError(RuntimeError):
    """Raised when structure is unstable or ill-conditioned."""
    pass


def partition_dofs(ndof: int, fixed_dofs: list[int]) -> tuple[np.ndarray, np.ndarray]:
    """Split 0..ndof-1 into sorted (free, fixed) index arrays."""
    fixed_set = set(int(i) for i in fixed_dofs)
    fixed = np.array(sorted(fixed_set), dtype=int)
    free = np.array([i for i in range(ndof) if i not in fixed_set], dtype=int)
    return free, fixed


def solve_linear(
    K: np.ndarray,
    F: np.ndarray,
    fixed_dofs: list[int],
    cond_limit: float = 1e12
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Solve K·d = F with fixed boundary conditions via partitioning.

    Constrained DOFs are held at zero displacement (no support settlement).

    Args:
        K: Global stiffness matrix (ndof x ndof)
        F: Global load vector (ndof,)
        fixed_dofs: List of constrained DOF indices (displacement = 0)
        cond_limit: Max condition number before raising MechanismError

    Returns:
        d: Displacement vector (ndof,)
        R: Reaction vector (ndof,)
        free: Array of free DOF indices

    Raises:
        MechanismError: If structure is unstable (singular, cond > cond_limit,
            or non-finite solution)
    """
    ndof = K.shape[0]
    free, _ = partition_dofs(ndof, fixed_dofs)

    d = np.zeros(ndof, dtype=float)

    if free.size > 0:
        # Extract reduced system
        Kff = K[np.ix_(free, free)]
        Ff = F[free]

        try:
            # Check conditioning
            cond = np.linalg.cond(Kff)
            if not np.isfinite(cond) or cond > cond_limit:
                raise MechanismError(
                    f"Unstable system (cond={cond:.2e}). Check supports. Need cond < {cond_limit:.0e}."
                )
            df = np.linalg.solve(Kff, Ff)
        except np.linalg.LinAlgError as e:
            raise MechanismError(f"Structure is unstable or singular matrix: {e}") from e

        if not np.all(np.isfinite(df)):
            raise MechanismError("Solve produced non-finite displacements. Check supports.")

        d[free] = df
        logger.debug("Solved %d free of %d DOFs (cond=%.2e)", free.size, ndof, cond)

    # Compute reactions: R = K·d - F
    R = K @ d - F

    return d, R, free
