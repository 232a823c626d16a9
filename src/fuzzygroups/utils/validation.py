"""
Input validation and preprocessing utilities.

Converts the accepted population formats into ``Entity`` records and checks
engine parameters before any iteration runs.
"""

from decimal import Decimal
from numbers import Integral
from typing import Any, List, Optional, Sequence, Union

import numpy as np
import torch
from torch import Tensor

from ..base.data_structures import Entity
from ..exceptions import InvalidParameter
from .decimal_ops import ONE, ZERO, Number, to_decimal

PopulationLike = Union[Sequence[Entity], Sequence[Sequence[Any]], np.ndarray, Tensor]


def validate_population(population: PopulationLike) -> List[Entity]:
    """Validate and convert a population to a list of entities.

    Accepts:
    - a sequence of ``Entity``
    - a sequence of ``(id, name, vector)`` or ``(id, vector)`` tuples
    - a 2D array, tensor or list of feature rows (ids 1..n are assigned)

    Raises:
        ValueError: If the population is empty, non-finite, or its feature
            vectors differ in length
    """
    if isinstance(population, Tensor):
        population = population.detach().cpu().numpy()

    if isinstance(population, np.ndarray):
        if population.ndim != 2:
            raise ValueError(f"Expected 2D array, got {population.ndim}D")
        if not np.isfinite(population).all():
            raise ValueError("Input contains NaN or infinite values")
        population = population.tolist()

    entities = []
    for index, item in enumerate(population):
        entities.append(_to_entity(item, index))

    if not entities:
        raise ValueError("Population must contain at least one entity")

    dimension = entities[0].dimension
    if dimension == 0:
        raise ValueError("Entities must have at least one feature")
    for entity in entities:
        if entity.dimension != dimension:
            raise ValueError(f"Entity {entity.id} has {entity.dimension} features, "
                             f"expected {dimension}")
        if not all(v.is_finite() for v in entity.vector):
            raise ValueError(f"Entity {entity.id} has non-finite features")

    return entities


def _to_entity(item: Any, index: int) -> Entity:
    if isinstance(item, Entity):
        return item
    if isinstance(item, tuple) and len(item) == 3 and not _is_scalar(item[2]):
        return Entity.from_scores(item[0], item[1], item[2])
    if isinstance(item, tuple) and len(item) == 2 and not _is_scalar(item[1]):
        return Entity.from_scores(item[0], f"Entity {item[0]}", item[1])
    return Entity.from_scores(index + 1, f"Entity {index + 1}", item)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (int, float, str, Decimal, np.number))


def check_group_count(group_count: int, n_samples: Optional[int] = None) -> None:
    """Validate number of groups.

    Raises:
        TypeError: If not an integer
        ValueError: If not positive, or larger than the population
    """
    if isinstance(group_count, bool) or not isinstance(group_count, Integral):
        raise TypeError(f"group_count must be int, got {type(group_count)}")

    if group_count <= 0:
        raise ValueError(f"group_count must be positive, got {group_count}")

    if n_samples is not None and group_count > n_samples:
        raise ValueError(f"group_count ({group_count}) cannot be larger than "
                         f"population size ({n_samples})")


def check_max_iteration(max_iteration: int) -> None:
    if isinstance(max_iteration, bool) or not isinstance(max_iteration, Integral):
        raise TypeError(f"max_iteration must be int, got {type(max_iteration)}")
    if max_iteration <= 0:
        raise ValueError(f"max_iteration must be positive, got {max_iteration}")


def check_mass(mass: Number) -> Decimal:
    """Validate the fuzziness exponent.

    Raises:
        InvalidParameter: If mass is not strictly greater than 1
    """
    value = _parse_parameter('mass', mass)
    if not value > ONE:
        raise InvalidParameter(f"Mass must be greater than 1, got {mass}")
    return value


def check_min_improvement(min_improvement: Number) -> Decimal:
    """Validate the convergence threshold.

    Raises:
        InvalidParameter: Unless 0 < min_improvement < 1
    """
    value = _parse_parameter('min_improvement', min_improvement)
    if not (ZERO < value < ONE):
        raise InvalidParameter("Minimum improvement must be greater than 0 and "
                               f"lower than 1, got {min_improvement}")
    return value


def _parse_parameter(name: str, value: Number) -> Decimal:
    try:
        parsed = to_decimal(value)
    except (TypeError, ArithmeticError) as e:
        raise InvalidParameter(f"{name} must be numeric, got {value!r}") from e
    if not parsed.is_finite():
        raise InvalidParameter(f"{name} must be finite, got {value!r}")
    return parsed


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> torch.Generator:
    """Create generator from random state.

    Args:
        random_state: Seed, generator, or None for a freshly seeded generator

    Returns:
        Generator
    """
    if random_state is None:
        generator = torch.Generator()
        generator.seed()
        return generator
    elif isinstance(random_state, torch.Generator):
        return random_state
    elif isinstance(random_state, Integral) and not isinstance(random_state, bool):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    else:
        raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")
