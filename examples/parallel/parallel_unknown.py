"""
Example: Unknown resistor inside a parallel group

Circuit "+10*x_5||60=*_8-":
    10 Ohm, then (Rx + 5 Ohm) in parallel with 60 Ohm, then 8 Ohm.

            |-----[Rx]--[5]-----|
    --[10]--*                   *--[8]--
            |-------[60]--------|

With a measured total of 38 Ohm the parallel part is 38 - 18 = 20 Ohm,
so Rx + 5 = 20*60/(60-20) = 30 and Rx = 25 Ohm.

Also shows the sensitivity of Req to each resistor at the solved point.
"""
from pyresist import analyze, solve_unknown
from pyresist.render import render


NOTATION = "+10*x_5||60=*_8-"
MEASURED = 38.0


def main():
    print("=" * 60)
    print("Unknown Resistor in a Parallel Group")
    print(f"Notation: {NOTATION}")
    print("=" * 60)

    analysis = analyze(NOTATION)
    s = analysis.structure

    print("\n1. Circuit")
    print("-" * 40)
    print(render(analysis.sequence))

    print("\n2. Extracted structure")
    print("-" * 40)
    print(f"   S0 (before group):    {s.s0:.2f} Ohm")
    print(f"   S3 (after group):     {s.s3:.2f} Ohm")
    print(f"   Su (with Rx):         {s.su:.2f} Ohm")
    print(f"   Sk (known branch):    {s.sk:.2f} Ohm")

    print("\n3. Solve")
    print("-" * 40)
    solution = solve_unknown(analysis, MEASURED)
    print(f"   Req_measured:         {MEASURED:.2f} Ohm")
    print(f"   Rx:                   {solution.rx:.2f} Ohm (expected: 25.00)")

    print("\n4. Sensitivities dReq/dR at the solved point")
    print("-" * 40)
    ev = analysis.sequence.compile()
    solved = {"Rx": solution.rx}
    print(f"   Req:                  {float(ev.req(solved)):.4f} Ohm")
    for name in ev.param_names:
        print(f"   d/d{name:<4s}              {float(ev.sensitivity(name, solved)):.4f}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
