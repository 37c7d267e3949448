"""
JAX-compiled equivalent resistance.

compile_sequence turns a parsed Sequence into a pure function of the
resistor values, so Req can be re-evaluated with overridden values (e.g.
the solved Rx) and differentiated with jax.grad.

Parameters are keyed by component name:
    R0          synthesized generator lead (always 0 Ohm by default)
    R1, R2, ... known resistors in order of appearance
    Rx          the unknown resistor (0 Ohm by default, i.e. left out)

Importing this module switches jax to 64-bit mode for the whole process
(jax_enable_x64). Code sharing the interpreter with pyresist sees float64
as the default jax dtype.
"""

from __future__ import annotations
from typing import NamedTuple, Callable

import jax
import jax.numpy as jnp
from jax import Array

from .evaluator import evaluate_series
from .sequence import Sequence, Component

jax.config.update("jax_enable_x64", True)


class Evaluator(NamedTuple):
    """Compiled evaluation functions for one Sequence."""
    sequence: Sequence
    defaults: dict  # {param_name: default_value}
    param_names: tuple[str, ...]
    req: Callable  # (params) -> scalar Array
    sensitivity: Callable  # (name, params) -> dReq/dR_name


def _safe_reciprocal(x: Array, mask: Array) -> Array:
    """1/x where mask holds, 0 elsewhere (gradient-safe at x = 0)."""
    return jnp.where(mask, 1.0 / jnp.where(mask, x, 1.0), 0.0)


def jax_parallel_combine(branches) -> Array:
    """Parallel law over branch sums, traced with jax.numpy."""
    b = jnp.stack([jnp.asarray(x, dtype=jnp.float64) for x in branches])
    inv_sum = jnp.sum(_safe_reciprocal(b, b > 0))
    return _safe_reciprocal(inv_sum, inv_sum > 0)


def compile_sequence(sequence: Sequence) -> Evaluator:
    """
    Compile a Sequence into jax evaluation functions.

    Args:
        sequence: Parsed circuit

    Returns:
        Evaluator with req and sensitivity functions
    """
    defaults = sequence.defaults
    param_names = tuple(defaults)
    components = sequence.components

    def req(params: dict | None = None) -> Array:
        """
        Equivalent resistance with params merged over defaults.

        Args:
            params: {name: ohms}, e.g. {"Rx": 20.0}

        Returns:
            Scalar float64 Array
        """
        if params is None:
            params = {}
        unknown = set(params) - set(defaults)
        if unknown:
            raise KeyError(f"Unknown resistor names: {sorted(unknown)}")

        merged = {**defaults, **params}

        def value_of(comp: Component):
            return jnp.asarray(merged[comp.name], dtype=jnp.float64)

        total, _ = evaluate_series(components, 0, value_of, jax_parallel_combine)
        return jnp.asarray(total, dtype=jnp.float64)

    def sensitivity(name: str, params: dict | None = None) -> Array:
        """dReq/dR for the resistor called name, at params merged over defaults."""
        if name not in defaults:
            raise KeyError(f"Unknown resistor name: {name}")
        base = {**defaults, **(params or {})}

        def req_of(value):
            return req({**base, name: value})

        return jax.grad(req_of)(jnp.asarray(base[name], dtype=jnp.float64))

    return Evaluator(
        sequence=sequence,
        defaults=defaults,
        param_names=param_names,
        req=req,
        sensitivity=sensitivity,
    )
