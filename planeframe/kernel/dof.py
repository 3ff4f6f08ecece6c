# planeframe/kernel/dof.py
"""
DOF MANAGER: Degree of Freedom Indexing for Plane Frames
========================================================

PURPOSE:
--------
This module handles the mapping from (node_id, dof kind) to global DOF indices.
Every node of a plane frame carries three unknowns:

    0 / "x"  horizontal translation (ux)
    1 / "y"  vertical translation   (uy)
    2 / "r"  rotation               (rz)

Node ids are opaque strings, so the manager remembers the order in which the
nodes were given: the i-th node occupies global indices [3i, 3i+1, 3i+2].
The mapping is fixed for the lifetime of one solve.

USAGE:
------
    dof = DOFManager.from_nodes(nodes)

    # Global index of node "n2", vertical translation
    dof.idx("n2", "y")      # → 4 if "n2" is the second node

    # The six indices of a member (start node first)
    dof.element_dof_map(["n1", "n2"])   # → [0, 1, 2, 3, 4, 5]
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Union

from ..model import ConfigurationError, Node

DOF_PER_NODE = 3  # ux, uy, rz
DOF_KINDS = {"x": 0, "y": 1, "r": 2}


@dataclass
class DOFManager:
    """
    Manages degree-of-freedom indexing for a plane frame.

    This is the bridge between "node n5, y-displacement" and "global DOF index 16".

    Attributes:
    -----------
    node_order : Dict[str, int]
        Position of each node id in the input sequence
    dof_per_node : int
        Number of DOFs per node (3 for a plane frame: ux, uy, rz)

    Examples:
    ---------
    >>> dof = DOFManager.from_nodes([Node("a", 0, 0), Node("b", 4, 0)])
    >>> dof.idx("a", "x")
    0
    >>> dof.idx("b", "r")
    5
    >>> dof.ndof()
    6
    """
    node_order: Dict[str, int] = field(default_factory=dict)
    dof_per_node: int = DOF_PER_NODE

    @classmethod
    def from_nodes(cls, nodes: Iterable[Node]) -> "DOFManager":
        """Number the nodes in the order given."""
        return cls(node_order={n.id: i for i, n in enumerate(nodes)})

    def idx(self, node_id: str, local_dof: Union[int, str]) -> int:
        """
        Get the global DOF index for a node's local DOF.

        Parameters:
        -----------
        node_id : str
            The node identifier
        local_dof : int or str
            0/"x" = ux, 1/"y" = uy, 2/"r" = rz

        Returns:
        --------
        int
            Global DOF index in the system matrices
        """
        if isinstance(local_dof, str):
            local_dof = DOF_KINDS[local_dof]
        return self.dof_per_node * self.position(node_id) + local_dof

    def position(self, node_id: str) -> int:
        try:
            return self.node_order[node_id]
        except KeyError:
            raise ConfigurationError(f"Unknown node {node_id!r}.") from None

    def ndof(self) -> int:
        """Total number of DOFs (size of K)."""
        return self.dof_per_node * len(self.node_order)

    def node_dofs(self, node_id: str) -> List[int]:
        """
        Get all global DOF indices for a single node.

        Examples:
        ---------
        >>> dof.node_dofs("c")   # third node
        [6, 7, 8]
        """
        base = self.dof_per_node * self.position(node_id)
        return list(range(base, base + self.dof_per_node))

    def element_dof_map(self, node_ids: List[str]) -> List[int]:
        """
        Get the DOF map for an element connecting multiple nodes.

        This returns the indices needed to scatter/gather element
        matrices into/from the global matrices.

        Examples:
        ---------
        >>> dof.element_dof_map(["c", "a"])   # member from 3rd node to 1st
        [6, 7, 8, 0, 1, 2]
        """
        result = []
        for node_id in node_ids:
            result.extend(self.node_dofs(node_id))
        return result
