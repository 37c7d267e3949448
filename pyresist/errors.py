"""Exception types raised by the notation parser, evaluator and solver."""

from __future__ import annotations


class CircuitError(Exception):
    """Base class for every failure reported by pyresist."""


class FormatError(CircuitError, ValueError):
    """Notation does not start with '+' or does not end with '-'."""

    def __init__(self, notation: str):
        self.notation = notation
        super().__init__(
            f"circuit must start with '+' and end with '-', got {notation!r}"
        )


class ParseError(CircuitError, ValueError):
    """A numeric token cannot be read as a decimal."""

    def __init__(self, token: str, position: int | None = None):
        self.token = token
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"invalid number {token!r}{where}")


class UnsupportedTopologyError(CircuitError):
    """The network has more unknown resistors than can be solved."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"circuit contains {count} unknown resistors, at most one is supported"
        )


class PhysicallyInvalidError(CircuitError, ValueError):
    """A measured or solved resistance violates a physical precondition."""

    def __init__(self, message: str, value: float):
        self.value = value
        super().__init__(message)


class CapacityError(CircuitError):
    """A parallel group has more branches than the evaluator supports."""

    def __init__(self, branches: int, limit: int):
        self.branches = branches
        self.limit = limit
        super().__init__(
            f"parallel group has {branches} branches, limit is {limit}"
        )


class RetryExhaustedError(CircuitError):
    """No valid measured resistance was supplied within the allowed attempts."""

    def __init__(self, attempts: int, last_error: CircuitError | None):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"no valid value after {attempts} attempts: {last_error}"
        )
