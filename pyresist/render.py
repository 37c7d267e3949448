"""ASCII drawing of a parsed circuit.

Each component occupies one 6-character block in column `index`, on row
MAIN_ROW + depth, so parallel branches are drawn one row above the main
path. The two ends are then joined by a return wire along the bottom row
and the generator is drawn centred underneath.
"""

from __future__ import annotations

from .sequence import (
    Sequence,
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
    DELIMITER_KINDS,
)

BLOCK_WIDTH = 6
ROWS = 9
MAIN_ROW = 4

RES_BLOCK = "\\/\\/\\"
RX_BLOCK = "\\/Rx\\/"
GEN_BLOCK = "---| '---"

BLOCKS = {
    KNOWN: RES_BLOCK,
    GENERATOR_LEAD: RES_BLOCK,
    UNKNOWN: RX_BLOCK,
    SERIES: "------",
    BEND: "|-----",
    GROUP_START: "----*|",
    GROUP_END: "|*----",
    TERMINATOR: "|*---|",
    BRANCH_START: "|-----",
    BRANCH_END: "------|",
}


def is_simple_circuit(sequence: Sequence) -> bool:
    """True when there are no parallel delimiters and no unknown resistor."""
    return not any(
        c.kind in DELIMITER_KINDS or c.is_unknown for c in sequence.components
    )


def render_simple() -> str:
    """Fixed drawing used for plain series circuits."""
    return "\n".join([
        f"|-----{RES_BLOCK}-----|",
        "|               |",
        "|------| '------|",
    ])


def render_grid(sequence: Sequence) -> str:
    """
    Draw every component on the block grid.

    Returns:
        Multi-line string: grid rows followed by the generator line
    """
    max_col = max((c.index for c in sequence.components), default=0) + 1
    width = max_col * BLOCK_WIDTH
    grid = [[" "] * width for _ in range(ROWS)]

    for comp in sequence.components:
        row = MAIN_ROW + comp.depth
        offset = comp.index * BLOCK_WIDTH
        for i, ch in enumerate(BLOCKS[comp.kind]):
            if offset + i < width:
                grid[row][offset + i] = ch

    # return wire
    start_x = BLOCK_WIDTH // 2
    end_x = (max_col - 1) * BLOCK_WIDTH + BLOCK_WIDTH // 2
    for r in range(MAIN_ROW, ROWS):
        grid[r][start_x] = "|"
        grid[r][end_x] = "|"
    for x in range(start_x, end_x + 1):
        grid[ROWS - 1][x] = "-"

    lines = ["".join(row).rstrip() for row in grid]
    pad = max(0, (width - len(GEN_BLOCK)) // 2)
    lines.append(" " * pad + GEN_BLOCK)
    return "\n".join(lines)


def render(sequence: Sequence) -> str:
    """Simple drawing for plain series circuits, full grid otherwise."""
    if is_simple_circuit(sequence):
        return render_simple()
    return render_grid(sequence)
