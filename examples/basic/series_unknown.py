"""
Example: Unknown resistor in series

Circuit "+10_20_x-":
    10 Ohm and 20 Ohm in series with an unknown Rx.

A meter across the whole network reads 75 Ohm, so Rx = 75 - 30 = 45 Ohm.

Shows: parsing, Req_known, series-mode solve, checking the solution with
the compiled evaluator and Ohm's law post-processing.
"""
from pyresist import analyze, solve_unknown, operating_point
from pyresist.render import render


NOTATION = "+10_20_x-"
MEASURED = 75.0


def main():
    print("=" * 60)
    print("Unknown Resistor in Series")
    print(f"Notation: {NOTATION}")
    print("=" * 60)

    analysis = analyze(NOTATION)

    print("\n1. Circuit")
    print("-" * 40)
    print(render(analysis.sequence))

    print("\n2. Known part")
    print("-" * 40)
    print(f"   Req_known:        {analysis.req_known:.2f} Ohm")
    print(f"   Unknowns:         {analysis.unknown_count}")
    print(f"   Mode:             {analysis.mode}")

    print("\n3. Solve")
    print("-" * 40)
    solution = solve_unknown(analysis, MEASURED)
    check = float(analysis.sequence.compile().req({"Rx": solution.rx}))
    print(f"   Req_measured:     {MEASURED:.2f} Ohm")
    print(f"   Rx:               {solution.rx:.2f} Ohm (expected: 45.00)")
    print(f"   Req with Rx:      {check:.2f} Ohm")

    print("\n4. Operating point at 12 V")
    print("-" * 40)
    point = operating_point(MEASURED, voltage=12.0)
    print(f"   Current:          {point.current * 1e3:.1f} mA")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
