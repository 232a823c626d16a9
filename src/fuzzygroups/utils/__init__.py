"""Utility functions for the fuzzy grouping engine."""

from .decimal_ops import (
    DEFAULT_PRECISION,
    decimal_context,
    to_decimal,
    to_decimal_vector,
    add,
    subtract,
    power,
    scale,
    divide,
    total,
    vector_sum,
    distance
)

from .convergence import ChangeInObjective

__all__ = [
    # Decimal vector arithmetic
    'DEFAULT_PRECISION',
    'decimal_context',
    'to_decimal',
    'to_decimal_vector',
    'add',
    'subtract',
    'power',
    'scale',
    'divide',
    'total',
    'vector_sum',
    'distance',

    # Convergence criteria
    'ChangeInObjective'
]
