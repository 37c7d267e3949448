"""Component and Sequence classes for circuit topology (immutable/functional style)."""

from __future__ import annotations
from typing import NamedTuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .compiled import Evaluator


# Component kinds
KNOWN = "R"
UNKNOWN = "Rx"
GENERATOR_LEAD = "Lead"
SERIES = "Series"
GROUP_START = "GroupStart"
GROUP_END = "GroupEnd"
BRANCH_START = "BranchStart"
BRANCH_END = "BranchEnd"
TERMINATOR = "Terminator"
BEND = "Bend"  # single '|', drawn only

RESISTOR_KINDS = (KNOWN, UNKNOWN, GENERATOR_LEAD)
DELIMITER_KINDS = (GROUP_START, GROUP_END, BRANCH_START, BRANCH_END)

MAIN_DEPTH = 0
BRANCH_DEPTH = -1


class Component(NamedTuple):
    """A single element of the parsed circuit."""
    kind: str
    index: int  # position in the sequence (layout only)
    depth: int  # 0 = main path, -1 = inside a parallel branch
    value: float | None = 0.0  # ohms; None for the unknown resistor
    name: str = ""  # parameter name for resistors ("R1", "Rx", ...)

    @property
    def is_unknown(self) -> bool:
        return self.kind == UNKNOWN

    @property
    def is_resistor(self) -> bool:
        return self.kind in RESISTOR_KINDS


class Sequence(NamedTuple):
    """
    Immutable, ordered circuit model produced by one parse.

    Build using functional style:
        seq = Sequence(notation="+10_x-")
        seq, lead = seq.add(GENERATOR_LEAD, 0, value=10.0, name="R1")
        seq, _ = seq.add(SERIES, 0)
    """
    components: tuple[Component, ...] = ()
    notation: str = ""

    def add(
        self,
        kind: str,
        depth: int,
        value: float | None = 0.0,
        name: str = "",
    ) -> tuple[Sequence, Component]:
        """
        Append a component.

        Returns (new_sequence, component).
        """
        comp = Component(kind, len(self.components), depth, value, name)
        new_seq = self._replace(components=self.components + (comp,))
        return new_seq, comp

    def prepend(self, comp: Component) -> Sequence:
        """Insert a component at the head and renumber every index."""
        ordered = (comp,) + self.components
        renumbered = tuple(c._replace(index=i) for i, c in enumerate(ordered))
        return self._replace(components=renumbered)

    @property
    def resistors(self) -> tuple[Component, ...]:
        """Known resistors, the generator lead and unknowns, in order."""
        return tuple(c for c in self.components if c.is_resistor)

    @property
    def unknowns(self) -> tuple[Component, ...]:
        return tuple(c for c in self.components if c.is_unknown)

    @property
    def unknown_count(self) -> int:
        return len(self.unknowns)

    @property
    def defaults(self) -> dict[str, float]:
        """Parameter defaults: known values, 0.0 for unknowns."""
        return {
            c.name: (0.0 if c.is_unknown else c.value)
            for c in self.components
            if c.is_resistor
        }

    def compile(self) -> Evaluator:
        """
        Create a jax evaluation function from this sequence.

        Returns:
            Evaluator with req and sensitivity functions
        """
        from .compiled import compile_sequence
        return compile_sequence(self)
