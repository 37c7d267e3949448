"""Ohm's law post-processing once the equivalent resistance is known."""

from __future__ import annotations
from typing import NamedTuple

from .errors import PhysicallyInvalidError


class OperatingPoint(NamedTuple):
    """Voltage across and current through the whole network (None if unavailable)."""
    voltage: float | None
    current: float | None

    @property
    def complete(self) -> bool:
        return self.voltage is not None and self.current is not None


def operating_point(
    resistance: float,
    current: float | None = None,
    voltage: float | None = None,
) -> OperatingPoint:
    """
    Fill in whichever of V or I is missing.

    Non-positive current or voltage counts as "not known".

    Raises:
        PhysicallyInvalidError: resistance <= 0
    """
    if not resistance > 0:
        raise PhysicallyInvalidError(
            f"resistance for current/voltage must be positive, got {resistance}",
            resistance,
        )
    i = current if current is not None and current > 0 else None
    v = voltage if voltage is not None and voltage > 0 else None

    if i is not None and v is None:
        v = i * resistance
    elif v is not None and i is None:
        i = v / resistance

    return OperatingPoint(voltage=v, current=i)
