"""
Solving for a single unknown resistor from a measured total resistance.

Two modes, chosen by the structure extractor:

    series    Rx = Req_measured - Req_known

    parallel  R_par = Req_measured - (S0 + S3)
              1/R_par = 1/(Su + Rx) + 1/Sk
              Rx = R_par * Sk / (Sk - R_par) - Su

Every function here is stateless, so a caller can retry with fresh
measurements as often as its policy allows.
"""

from __future__ import annotations
import logging
import re
from typing import NamedTuple, Callable

from .errors import CircuitError, ParseError, PhysicallyInvalidError, RetryExhaustedError
from .evaluator import equivalent_resistance, check_unknowns
from .extractor import ParallelStructure, extract_parallel_structure
from .parser import parse_notation
from .sequence import Sequence

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3

SERIES_MODE = "series"
PARALLEL_MODE = "parallel"

_MEASUREMENT = re.compile(r"[+-]?(?:[0-9]+(?:[.,][0-9]*)?|[.,][0-9]+)(?:[eE][+-]?[0-9]+)?")


class Analysis(NamedTuple):
    """Everything known about a circuit before a measurement is supplied."""
    sequence: Sequence
    req_known: float
    unknown_count: int
    structure: ParallelStructure | None  # None: series mode (or nothing to solve)

    @property
    def mode(self) -> str | None:
        if self.unknown_count == 0:
            return None
        return PARALLEL_MODE if self.structure is not None else SERIES_MODE


class Solution(NamedTuple):
    """Solved unknown resistor."""
    rx: float
    mode: str
    req_measured: float


def analyze(notation: str) -> Analysis:
    """
    Parse a circuit and prepare it for solving.

    Raises:
        FormatError, ParseError: bad notation
        CapacityError: too many branches in a group
        UnsupportedTopologyError: two or more unknowns
    """
    sequence = parse_notation(notation)
    req_known = equivalent_resistance(sequence)
    count = check_unknowns(sequence)
    structure = extract_parallel_structure(sequence) if count == 1 else None
    return Analysis(sequence, req_known, count, structure)


def _check_measured(req_measured: float) -> None:
    if not req_measured > 0:
        raise PhysicallyInvalidError(
            f"measured resistance must be positive, got {req_measured}",
            req_measured,
        )


def solve_series(req_known: float, req_measured: float) -> float:
    """
    Unknown resistor in series with the known part.

    Raises:
        PhysicallyInvalidError: non-positive measurement or Rx <= 0
    """
    _check_measured(req_measured)
    rx = req_measured - req_known
    if rx <= 0:
        raise PhysicallyInvalidError(
            f"Rx is zero or negative ({rx:.2f} Ohm), "
            f"measured {req_measured} is not above the known {req_known}",
            rx,
        )
    return rx


def solve_parallel(structure: ParallelStructure, req_measured: float) -> float:
    """
    Unknown resistor in one branch of a two-branch parallel group.

    Raises:
        PhysicallyInvalidError: non-positive measurement, R_par <= 0,
            Sk <= R_par, or Rx <= 0
    """
    _check_measured(req_measured)
    s0, s3, su, sk = structure
    r_par = req_measured - (s0 + s3)
    if r_par <= 0:
        raise PhysicallyInvalidError(
            f"parallel part would be {r_par:.2f} Ohm (S0={s0}, S3={s3})", r_par
        )
    # a second branch can only pull the group below the known branch
    if sk <= r_par:
        raise PhysicallyInvalidError(
            f"invalid data (S_k={sk:.2f}, R_par={r_par:.2f})", r_par
        )
    rx = (r_par * sk) / (sk - r_par) - su
    if rx <= 0:
        raise PhysicallyInvalidError(
            f"Rx is zero or negative ({rx:.2f} Ohm)", rx
        )
    return rx


def solve_unknown(analysis: Analysis, req_measured: float) -> Solution:
    """
    Solve Rx for one candidate measurement.

    Args:
        analysis: Result of analyze() with exactly one unknown
        req_measured: Measured total resistance in Ohms

    Returns:
        Solution with rx and the mode used
    """
    if analysis.unknown_count != 1:
        raise ValueError(
            f"solving needs exactly one unknown, circuit has {analysis.unknown_count}"
        )
    if analysis.structure is not None:
        rx = solve_parallel(analysis.structure, req_measured)
        return Solution(rx, PARALLEL_MODE, req_measured)
    rx = solve_series(analysis.req_known, req_measured)
    return Solution(rx, SERIES_MODE, req_measured)


def parse_measurement(text: str) -> float:
    """Read a resistance typed by a user; ',' is accepted as decimal separator."""
    cleaned = text.strip()
    if not _MEASUREMENT.fullmatch(cleaned):
        raise ParseError(cleaned)
    return float(cleaned.replace(",", "."))


def solve_with_retries(
    analysis: Analysis,
    read_measured: Callable[[int], float],
    max_attempts: int = MAX_ATTEMPTS,
) -> Solution:
    """
    Bounded retry around solve_unknown.

    Args:
        analysis: Result of analyze() with exactly one unknown
        read_measured: Called with the attempt number (1-based), returns a
            candidate measurement; may raise ParseError for unreadable input
        max_attempts: Attempts before giving up

    Raises:
        RetryExhaustedError: every attempt failed
    """
    last_error: CircuitError | None = None
    for attempt in range(1, max_attempts + 1):
        try:
            return solve_unknown(analysis, read_measured(attempt))
        except (ParseError, PhysicallyInvalidError) as e:
            logger.warning("Attempt %d/%d rejected: %s", attempt, max_attempts, e)
            last_error = e
    raise RetryExhaustedError(max_attempts, last_error)
