"""
Exact-decimal vector arithmetic.

Every quantity the engine touches (feature vectors, memberships, centers,
distances, objective values) is a ``decimal.Decimal``. Vectors are plain
sequences of Decimals; the helpers below never mutate their inputs.
"""

from contextlib import contextmanager
from decimal import Decimal, localcontext
from numbers import Real
from typing import Iterable, Iterator, List, Sequence, Union

from ..exceptions import LengthMismatch

DEFAULT_PRECISION = 28

ZERO = Decimal(0)
ONE = Decimal(1)

Number = Union[Decimal, Real, str]
DecimalVector = Sequence[Decimal]


@contextmanager
def decimal_context(precision: int = DEFAULT_PRECISION) -> Iterator[None]:
    """Run a block with the given number of significant digits."""
    with localcontext() as ctx:
        ctx.prec = precision
        yield


def to_decimal(value: Number) -> Decimal:
    """Convert a scalar to Decimal.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal('0.1')``
    rather than its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Booleans are not numeric scores")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, (float, Real)):
        return Decimal(str(float(value)))
    if isinstance(value, str):
        return Decimal(value.strip())
    raise TypeError(f"Cannot convert {type(value)} to Decimal")


def to_decimal_vector(values: Iterable[Number]) -> List[Decimal]:
    return [to_decimal(v) for v in values]


def _check_lengths(left: DecimalVector, right: DecimalVector) -> None:
    if len(left) != len(right):
        raise LengthMismatch(len(left), len(right))


def add(left: DecimalVector, right: DecimalVector) -> List[Decimal]:
    _check_lengths(left, right)
    return [a + b for a, b in zip(left, right)]


def subtract(left: DecimalVector, right: DecimalVector) -> List[Decimal]:
    _check_lengths(left, right)
    return [a - b for a, b in zip(left, right)]


def power(vector: DecimalVector, exponent: Number) -> List[Decimal]:
    exponent = to_decimal(exponent)
    return [v ** exponent for v in vector]


def scale(vector: DecimalVector, factor: Decimal) -> List[Decimal]:
    return [v * factor for v in vector]


def divide(vector: DecimalVector, divisor: Decimal) -> List[Decimal]:
    """Divide every component by a scalar."""
    return [v / divisor for v in vector]


def total(vector: DecimalVector) -> Decimal:
    """Sum of the components of a single vector."""
    return sum(vector, ZERO)


def vector_sum(vectors: Iterable[DecimalVector]) -> List[Decimal]:
    """Elementwise sum of a non-empty sequence of equal-length vectors."""
    result = None
    for vector in vectors:
        result = list(vector) if result is None else add(result, vector)
    if result is None:
        raise ValueError("vector_sum() requires at least one vector")
    return result


def distance(left: DecimalVector, right: DecimalVector) -> Decimal:
    """Euclidean distance ``sqrt(sum((a_i - b_i)^2))``.

    Raises:
        LengthMismatch: If the vectors differ in length.
    """
    _check_lengths(left, right)
    return total([(a - b) ** 2 for a, b in zip(left, right)]).sqrt()
