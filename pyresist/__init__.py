"""PyResist - series-parallel resistor circuit resolver.

Reads circuits written in a compact notation, computes the equivalent
resistance of the known resistors and solves for a single unknown one
from a measured total resistance.

Notation:
    +10_20*x||30=*-   10 and 20 Ohm in series with (Rx || 30 Ohm)

Usage:
    from pyresist import analyze, solve_unknown
    analysis = analyze("+10_x-")
    solution = solve_unknown(analysis, 35.0)   # solution.rx == 25.0

Importing pyresist enables jax 64-bit mode (jax_enable_x64) process-wide,
so compiled evaluation runs in float64.
"""

from .errors import (
    CircuitError,
    FormatError,
    ParseError,
    UnsupportedTopologyError,
    PhysicallyInvalidError,
    CapacityError,
    RetryExhaustedError,
)
from .sequence import Sequence, Component
from .parser import ParserState, parse_notation
from .evaluator import (
    MAX_BRANCHES,
    evaluate_series,
    evaluate_parallel_group,
    equivalent_resistance,
    count_unknowns,
    check_unknowns,
)
from .extractor import ParallelStructure, extract_parallel_structure
from .solver import (
    MAX_ATTEMPTS,
    Analysis,
    Solution,
    analyze,
    solve_series,
    solve_parallel,
    solve_unknown,
    solve_with_retries,
    parse_measurement,
)
from .ohms import OperatingPoint, operating_point
from .compiled import Evaluator, compile_sequence

__version__ = "0.1.0"
__all__ = [
    # Errors
    "CircuitError",
    "FormatError",
    "ParseError",
    "UnsupportedTopologyError",
    "PhysicallyInvalidError",
    "CapacityError",
    "RetryExhaustedError",
    # Model
    "Sequence",
    "Component",
    "ParserState",
    "parse_notation",
    # Evaluation
    "MAX_BRANCHES",
    "evaluate_series",
    "evaluate_parallel_group",
    "equivalent_resistance",
    "count_unknowns",
    "check_unknowns",
    # Solving
    "ParallelStructure",
    "extract_parallel_structure",
    "MAX_ATTEMPTS",
    "Analysis",
    "Solution",
    "analyze",
    "solve_series",
    "solve_parallel",
    "solve_unknown",
    "solve_with_retries",
    "parse_measurement",
    # Compiled evaluation
    "Evaluator",
    "compile_sequence",
    # Post-processing
    "OperatingPoint",
    "operating_point",
    "__version__",
]
