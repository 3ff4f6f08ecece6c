# Node, Member, Support, Load + model validation

from dataclasses import dataclass
from typing import Iterable

import numpy as np

FIXED = "fixed"
PINNED = "pinned"
RELEASES = (FIXED, PINNED)

SUPPORT_TYPES = ("pin", "fixed", "roller")
LOAD_TYPES = ("point",)


class ConfigurationError(ValueError):
    """Raised when the model references missing items or has undefined geometry."""
    pass


@dataclass(frozen=True)
class Node:
    id: str
    x: float
    y: float


@dataclass(frozen=True)
class Member:
    """
    2D beam-column (Euler–Bernoulli): 2 nodes, 3 DOF per node: (ux, uy, rz)

    start_release / end_release: "fixed" (moment connection) or "pinned"
    (no moment transfer at that end).
    """
    id: str
    start: str
    end: str
    E: float
    I: float
    A: float
    start_release: str = FIXED
    end_release: str = FIXED


@dataclass(frozen=True)
class Support:
    """
    Support at a node.

    type: "pin" (ux, uy), "fixed" (ux, uy, rz) or "roller" (uy only).
    angle: bearing orientation in degrees. Only horizontal rollers are
    handled, so the angle does not change which DOF is constrained.
    """
    id: str
    node: str
    type: str
    angle: float = 0.0


@dataclass(frozen=True)
class Load:
    """
    Point load on a member.

    magnitude: signed, acting along the member's local y axis
               (negative = "downward" for a member drawn left to right)
    position:  distance from the start node, 0 <= position <= L
    """
    id: str
    member: str
    magnitude: float
    position: float
    type: str = "point"


def _check_unique(kind: str, items) -> None:
    seen = set()
    for item in items:
        if item.id in seen:
            raise ConfigurationError(f"Duplicate {kind} id {item.id!r}.")
        seen.add(item.id)


def validate_model(
    nodes: Iterable[Node],
    members: Iterable[Member],
    supports: Iterable[Support],
    loads: Iterable[Load],
) -> None:
    """
    Check that every reference resolves and every vocabulary value is known.

    Raises ConfigurationError on the first problem found. Geometry (zero
    length, load position) is checked later, when member lengths are known.
    """
    nodes, members, supports, loads = list(nodes), list(members), list(supports), list(loads)
    for kind, items in (("node", nodes), ("member", members),
                        ("support", supports), ("load", loads)):
        _check_unique(kind, items)

    node_ids = {n.id for n in nodes}
    member_ids = {m.id for m in members}

    for n in nodes:
        if not (np.isfinite(n.x) and np.isfinite(n.y)):
            raise ConfigurationError(
                f"Invalid node {n.id!r}: coordinates must be finite (x={n.x}, y={n.y})."
            )

    for m in members:
        if m.start not in node_ids or m.end not in node_ids:
            raise ConfigurationError(
                f"Invalid member {m.id!r}: missing node(s). Start: {m.start!r}, End: {m.end!r}"
            )
        for release in (m.start_release, m.end_release):
            if release not in RELEASES:
                raise ConfigurationError(
                    f"Invalid member {m.id!r}: unknown release {release!r} (expected one of {RELEASES})."
                )
        if not all(np.isfinite(v) and v > 0.0 for v in (m.E, m.I, m.A)):
            raise ConfigurationError(
                f"Invalid member {m.id!r}: E, I and A must be finite and positive (E={m.E}, I={m.I}, A={m.A})."
            )

    for s in supports:
        if s.node not in node_ids:
            raise ConfigurationError(f"Invalid support {s.id!r}: missing node {s.node!r}.")
        if s.type not in SUPPORT_TYPES:
            raise ConfigurationError(
                f"Invalid support {s.id!r}: unknown type {s.type!r} (expected one of {SUPPORT_TYPES})."
            )

    for ld in loads:
        if ld.member not in member_ids:
            raise ConfigurationError(f"Invalid load {ld.id!r}: missing member {ld.member!r}.")
        if ld.type not in LOAD_TYPES:
            raise ConfigurationError(
                f"Invalid load {ld.id!r}: unsupported type {ld.type!r} (only point loads)."
            )
        if not (np.isfinite(ld.magnitude) and np.isfinite(ld.position)):
            raise ConfigurationError(
                f"Invalid load {ld.id!r}: magnitude and position must be finite "
                f"(magnitude={ld.magnitude}, position={ld.position})."
            )
