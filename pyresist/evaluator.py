"""
Equivalent-resistance reducer over a parsed Sequence.

Two mutually recursive routines walk the components with an explicit
integer cursor and hand the advanced cursor back to the caller:

    evaluate_series          sums resistors, descends into parallel groups
    evaluate_parallel_group  collects branch sums and combines them

The notation cannot put a parallel group inside a branch (the shared '*'
toggle closes the open group instead), so recursion is at most one group
deep.

The value lookup and the branch combiner are pluggable so the same walk
can run on plain floats or on jax arrays (see compiled.py).
"""

from __future__ import annotations
import logging
from typing import Callable, Sequence as Seq

from .errors import CapacityError, UnsupportedTopologyError
from .sequence import (
    Sequence,
    Component,
    RESISTOR_KINDS,
    GROUP_START,
    GROUP_END,
    BRANCH_START,
    BRANCH_END,
)

logger = logging.getLogger(__name__)

MAX_BRANCHES = 10

_STOP_KINDS = (GROUP_END, BRANCH_START, BRANCH_END)


def known_value(comp: Component) -> float:
    """Resistance of a component; unknown resistors contribute nothing."""
    if comp.is_unknown:
        return 0.0
    return comp.value


def parallel_combine(branches: Seq[float]) -> float:
    """
    Parallel law over branch sums.

    Branches summing to zero (e.g. holding only the unknown) are left out.
    Returns 0.0 when no branch is positive.
    """
    inv_sum = 0.0
    for b in branches:
        if b > 0:
            inv_sum += 1.0 / b
    return 1.0 / inv_sum if inv_sum > 0 else 0.0


def evaluate_series(
    components: Seq[Component],
    cursor: int = 0,
    value_of: Callable = known_value,
    combine: Callable = parallel_combine,
) -> tuple[float, int]:
    """
    Sum a series run starting at cursor.

    Stops, without consuming it, at a group end or branch delimiter.

    Returns:
        (total, cursor after the run)
    """
    total = 0.0
    while cursor < len(components):
        comp = components[cursor]
        if comp.kind in RESISTOR_KINDS:
            total = total + value_of(comp)
            cursor += 1
        elif comp.kind == GROUP_START:
            group, cursor = evaluate_parallel_group(
                components, cursor + 1, value_of, combine
            )
            total = total + group
        elif comp.kind in _STOP_KINDS:
            break
        else:
            cursor += 1
    return total, cursor


def evaluate_parallel_group(
    components: Seq[Component],
    cursor: int,
    value_of: Callable = known_value,
    combine: Callable = parallel_combine,
) -> tuple[float, int]:
    """
    Evaluate a parallel group whose GROUP_START has already been consumed.

    A branch that is not closed by '=' ends branch collection; a trailing
    GROUP_END is consumed when present.

    Returns:
        (combined resistance, cursor after the group)

    Raises:
        CapacityError: more than MAX_BRANCHES branches
    """
    first, cursor = evaluate_series(components, cursor, value_of, combine)
    branches = [first]

    while cursor < len(components) and components[cursor].kind == BRANCH_START:
        if len(branches) == MAX_BRANCHES:
            raise CapacityError(len(branches) + 1, MAX_BRANCHES)
        branch, cursor = evaluate_series(components, cursor + 1, value_of, combine)
        branches.append(branch)
        if cursor < len(components) and components[cursor].kind == BRANCH_END:
            cursor += 1
        else:
            logger.debug("Branch %d not closed, stopping collection", len(branches))
            break

    if cursor < len(components) and components[cursor].kind == GROUP_END:
        cursor += 1

    return combine(branches), cursor


def equivalent_resistance(sequence: Sequence) -> float:
    """
    Equivalent resistance using only known resistor values (Req_known).

    Args:
        sequence: Parsed circuit

    Returns:
        Resistance in Ohms
    """
    total, cursor = evaluate_series(sequence.components)
    if cursor < len(sequence.components):
        logger.debug(
            "Evaluation stopped at %s (index %d) before the end of %r",
            sequence.components[cursor].kind, cursor, sequence.notation,
        )
    return total


def count_unknowns(sequence: Sequence) -> int:
    """Number of unknown resistors in the circuit."""
    return sum(1 for c in sequence.components if c.is_unknown)


def check_unknowns(sequence: Sequence) -> int:
    """
    Count unknowns and reject circuits that cannot be solved.

    Returns:
        0 (nothing to solve) or 1 (solve for Rx)

    Raises:
        UnsupportedTopologyError: two or more unknowns
    """
    count = count_unknowns(sequence)
    if count > 1:
        raise UnsupportedTopologyError(count)
    return count
