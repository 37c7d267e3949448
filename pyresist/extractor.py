"""Detection of the one parallel shape the symbolic solver can invert.

Supported shape:

    + S0 * (Su + Rx) || Sk = * S3 -

    S0  known series resistance before the group
    S3  known series resistance after the group
    Su  known resistance in the branch holding the unknown
    Sk  total of the fully known branch

The unknown may sit in either branch.
"""

from __future__ import annotations
import logging
from typing import NamedTuple

from .sequence import (
    Sequence,
    Component,
    GROUP_START,
    GROUP_END,
    BRANCH_START,
    BRANCH_END,
)

logger = logging.getLogger(__name__)


class ParallelStructure(NamedTuple):
    """Scalar sums describing a two-branch group with one unknown."""
    s0: float
    s3: float
    su: float
    sk: float


def _scan_branch(components: tuple[Component, ...], cursor: int,
                 stop_kinds: tuple[str, ...]) -> tuple[float, bool, int]:
    """Sum known resistors up to a stop kind; report whether an unknown was seen."""
    total = 0.0
    has_unknown = False
    while cursor < len(components) and components[cursor].kind not in stop_kinds:
        comp = components[cursor]
        if comp.is_unknown:
            has_unknown = True
        elif comp.is_resistor:
            total += comp.value
        cursor += 1
    return total, has_unknown, cursor


def extract_parallel_structure(sequence: Sequence) -> ParallelStructure | None:
    """
    Decompose the circuit into (S0, S3, Su, Sk).

    Returns:
        ParallelStructure, or None when the circuit is not a single
        two-branch group with the unknown in exactly one branch
    """
    comps = sequence.components
    n = len(comps)

    s0, _, cursor = _scan_branch(comps, 0, (GROUP_START,))
    if cursor == n:
        logger.debug("No parallel group in %r", sequence.notation)
        return None

    branch1, unknown1, cursor = _scan_branch(comps, cursor + 1, (BRANCH_START, GROUP_END))
    if cursor == n or comps[cursor].kind != BRANCH_START:
        logger.debug("Parallel group in %r has a single branch", sequence.notation)
        return None

    branch2, unknown2, cursor = _scan_branch(
        comps, cursor + 1, (GROUP_END, BRANCH_START, BRANCH_END)
    )
    if cursor < n and comps[cursor].kind == BRANCH_START:
        logger.debug("Second branch of %r is not closed", sequence.notation)
        return None
    if cursor < n and comps[cursor].kind == BRANCH_END:
        cursor += 1
    if cursor < n and comps[cursor].kind == BRANCH_START:
        logger.debug("Parallel group in %r has more than two branches", sequence.notation)
        return None
    if cursor < n and comps[cursor].kind == GROUP_END:
        cursor += 1

    s3, _, end = _scan_branch(comps, cursor, (GROUP_START,))
    if end < n:
        logger.debug("More than one parallel group in %r", sequence.notation)
        return None

    if unknown1 and not unknown2:
        return ParallelStructure(s0=s0, s3=s3, su=branch1, sk=branch2)
    if unknown2 and not unknown1:
        return ParallelStructure(s0=s0, s3=s3, su=branch2, sk=branch1)

    logger.debug("Unknown is not in exactly one branch of %r", sequence.notation)
    return None
