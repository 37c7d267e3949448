"""Notation parser: turns "+10_20*x||30=*-" into a component Sequence.

Grammar:
    circuit  := '+' element* '-'
    element  := resistor | 'x' | '_' | '*' | '||' | '=' | '|' | '-'
    resistor := digit+ (('.' | ',') digit+)?

Token semantics:
    digits  known resistor (the first one in the circuit is the generator lead)
    x       unknown resistor
    _       series connector
    *       opens a parallel group, the next '*' closes it (one shared toggle)
    ||      starts a parallel branch, following elements sit at depth -1
    =       ends a parallel branch, depth returns to 0
    -       terminator (every '-', not only the last one)
    |       bend, drawn only
"""

from __future__ import annotations
import logging
import re
from typing import NamedTuple

from .errors import FormatError, ParseError
from .sequence import (
    Sequence,
    Component,
    KNOWN,
    UNKNOWN,
    GENERATOR_LEAD,
    SERIES,
    GROUP_START,
    GROUP_END,
    BRANCH_START,
    BRANCH_END,
    TERMINATOR,
    BEND,
    MAIN_DEPTH,
    BRANCH_DEPTH,
)

logger = logging.getLogger(__name__)

GENERATOR_MARK = "+"
TERMINATOR_MARK = "-"

_DIGITS = "0123456789"
_NUMBER_RUN = re.compile(r"[0-9][0-9.,]*")
_DECIMAL = re.compile(r"[0-9]+(?:[.,][0-9]+)?")

INSTRUCTIONS = """\
+       -> generator (start of circuit)
number  -> resistor (e.g. 10, 47, 2.2)
x       -> unknown resistor to solve for
_       -> series connection
*       -> node (opens/closes a parallel group)
||      -> start of a parallel branch
=       -> end of a parallel branch
-       -> circuit closing

Valid example: +10_20*x||30=*-"""


class ParserState(NamedTuple):
    """State threaded through the tokenizing loop."""
    depth: int = MAIN_DEPTH
    group_open: bool = False  # shared '*' toggle, not a nesting stack
    known_count: int = 0
    unknown_count: int = 0


def parse_notation(notation: str) -> Sequence:
    """
    Parse circuit notation into an immutable Sequence.

    Args:
        notation: String starting with '+' and ending with '-'

    Returns:
        Sequence beginning with a generator lead

    Raises:
        FormatError: missing leading '+' or trailing '-'
        ParseError: malformed numeric token
    """
    if len(notation) < 2 or not notation.startswith(GENERATOR_MARK) \
            or not notation.endswith(TERMINATOR_MARK):
        raise FormatError(notation)

    seq = Sequence(notation=notation)
    state = ParserState()
    i = 0
    n = len(notation)

    while i < n:
        token = notation[i]

        if token in _DIGITS:
            run = _NUMBER_RUN.match(notation, i).group()
            seq, state = _add_resistor(seq, state, run, i)
            i += len(run)
            continue

        if token == GENERATOR_MARK:
            pass  # generator marker emits nothing
        elif token == "x":
            count = state.unknown_count + 1
            name = "Rx" if count == 1 else f"Rx{count}"
            seq, _ = seq.add(UNKNOWN, state.depth, value=None, name=name)
            state = state._replace(unknown_count=count)
        elif token == "_":
            seq, _ = seq.add(SERIES, state.depth)
        elif token == TERMINATOR_MARK:
            seq, _ = seq.add(TERMINATOR, state.depth)
        elif token == "*":
            if state.group_open:
                seq, _ = seq.add(GROUP_END, state.depth)
            else:
                seq, _ = seq.add(GROUP_START, state.depth)
            state = state._replace(group_open=not state.group_open)
        elif token == "|":
            if notation.startswith("||", i):
                state = state._replace(depth=BRANCH_DEPTH)
                seq, _ = seq.add(BRANCH_START, state.depth)
                i += 1
            else:
                seq, _ = seq.add(BEND, state.depth)
        elif token == "=":
            seq, _ = seq.add(BRANCH_END, state.depth)
            state = state._replace(depth=MAIN_DEPTH)
        else:
            logger.debug("Skipping unrecognised character %r at %d", token, i)

        i += 1

    if not seq.components or seq.components[0].kind != GENERATOR_LEAD:
        seq = seq.prepend(Component(GENERATOR_LEAD, 0, MAIN_DEPTH, 0.0, "R0"))

    logger.debug("Parsed %r into %d components", notation, len(seq.components))
    return seq


def _add_resistor(seq: Sequence, state: ParserState, run: str,
                  position: int) -> tuple[Sequence, ParserState]:
    """Emit a known resistor (or the generator lead) for a digit run."""
    if not _DECIMAL.fullmatch(run):
        raise ParseError(run, position)
    value = float(run.replace(",", "."))

    count = state.known_count + 1
    # only a number opening the circuit is the lead; otherwise R0 is synthesized
    kind = KNOWN if seq.components else GENERATOR_LEAD
    seq, _ = seq.add(kind, state.depth, value=value, name=f"R{count}")
    return seq, state._replace(known_count=count)
