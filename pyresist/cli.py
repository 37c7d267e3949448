"""
Command-line circuit resolver.

Usage::

    pyresist "+10_20-"
    pyresist "+10_x-" --measured 35
    pyresist "+10*x||30=*-" --measured 5 --measured 25 --current 0.5
    pyresist                      # prompts for everything
    python -m pyresist "+10_20*x||30=*-" --batch --measured 35
"""

from __future__ import annotations
import argparse
import logging
import sys

from .errors import CircuitError, ParseError
from .evaluator import equivalent_resistance, check_unknowns
from .extractor import extract_parallel_structure
from .ohms import operating_point
from .parser import parse_notation, INSTRUCTIONS
from .render import render
from .solver import Analysis, MAX_ATTEMPTS, parse_measurement, solve_with_retries

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyresist",
        description="Resolve series-parallel resistor circuits written in "
                    "'+10_20*x||30=*-' notation",
        epilog=INSTRUCTIONS,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("notation", nargs="?",
                        help="Circuit notation (prompted for when omitted)")
    parser.add_argument("--measured", action="append", default=[], metavar="OHMS",
                        help=f"Measured total resistance; repeat to supply up to "
                             f"{MAX_ATTEMPTS} attempts")
    parser.add_argument("--current", type=float, help="Known current in A")
    parser.add_argument("--voltage", type=float, help="Known voltage in V")
    parser.add_argument("--batch", action="store_true",
                        help="Never prompt; missing values count as not known")
    parser.add_argument("--no-diagram", action="store_true",
                        help="Do not draw the circuit")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    return parser


def _prompt(text: str) -> str | None:
    try:
        return input(text)
    except EOFError:
        return None


def _optional_float(value: float | None, label: str, batch: bool) -> float | None:
    """Use a command-line value, or ask for it (-1 meaning not known)."""
    if value is not None or batch:
        return value
    answer = _prompt(f"Enter {label}, if known (-1 if not known): ")
    if answer is None or not answer.strip():
        return None
    try:
        return parse_measurement(answer)
    except ParseError:
        logger.debug("Unreadable %s %r, treated as not known", label, answer)
        return None


def _measurement_reader(args: argparse.Namespace):
    def read(attempt: int) -> float:
        if attempt <= len(args.measured):
            return parse_measurement(args.measured[attempt - 1])
        if args.batch:
            raise ParseError("")
        answer = _prompt("Enter the measured total resistance (Req): ")
        if answer is None:
            raise ParseError("")
        return parse_measurement(answer)
    return read


def run(args: argparse.Namespace, notation: str) -> int:
    """Resolve one circuit; CircuitError propagates to main()."""
    sequence = parse_notation(notation)

    if not args.no_diagram:
        print("\n=== Circuit ===\n")
        print(render(sequence))

    req_known = equivalent_resistance(sequence)
    print("\n--- Results ---")
    print(f"Sum of known resistances (Req_known): {req_known:.2f} Ohm")

    count = check_unknowns(sequence)
    req = req_known

    if count == 1:
        structure = extract_parallel_structure(sequence)
        analysis = Analysis(sequence, req_known, count, structure)
        if structure is not None:
            print("\nThe circuit has an unknown resistor inside a parallel group.")
        else:
            print("\nThe circuit has an unknown resistor in series.")

        solution = solve_with_retries(analysis, _measurement_reader(args))
        print(f"Unknown resistor Rx: {solution.rx:.2f} Ohm")

        rx_name = sequence.unknowns[0].name
        check = float(sequence.compile().req({rx_name: solution.rx}))
        logger.debug("Req with solved Rx: %.6f (measured %.6f)", check, solution.req_measured)
        print(f"Check: Req with Rx = {check:.2f} Ohm")
        req = solution.req_measured

    current = _optional_float(args.current, "current I (A)", args.batch)
    voltage = _optional_float(args.voltage, "voltage V (V)", args.batch)
    point = operating_point(req, current=current, voltage=voltage)

    if point.voltage is not None:
        print(f"Voltage: {point.voltage:.2f} V")
    else:
        print("Voltage: (not available)")
    if point.current is not None:
        print(f"Current: {point.current:.2f} A")
    else:
        print("Current: (not available)")

    if point.complete:
        print("\nCalculation completed.")
    else:
        print("\nNot enough data to complete the analysis.")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    notation = args.notation
    if notation is None:
        if args.batch:
            parser.error("notation is required with --batch")
        print(INSTRUCTIONS)
        notation = _prompt("\nEnter circuit: ")
        if notation is None:
            print("Error: could not read the circuit.", file=sys.stderr)
            return 1
    notation = notation.strip()

    try:
        return run(args, notation)
    except CircuitError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
