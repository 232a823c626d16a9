"""
Record sources for the grouping engine.

Reads learning-style trait scores from CSV files and generates random
populations of the same shape. Both return ``Entity`` lists ready to be
passed to :meth:`FuzzyCMeans.build_model`. Seeded membership rows for
``initial_vectors`` can be read from a headerless CSV as well.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union

import numpy as np

from .base.data_structures import Entity

ID_COLUMN = 'Num'
NAME_COLUMN = 'Name'
TRAIT_COLUMNS = (
    'Active_Reflective',
    'Sensing_Intuitive',
    'Visual_Verbal',
    'Sequential_Global'
)


def load_population(path: Union[str, Path],
                    trait_columns: Sequence[str] = TRAIT_COLUMNS,
                    id_column: str = ID_COLUMN,
                    name_column: str = NAME_COLUMN) -> List[Entity]:
    """Load a population from a CSV file with a header row.

    Args:
        path: CSV file
        trait_columns: Columns forming the feature vector, in order
        id_column: Integer identifier column
        name_column: Display name column

    Returns:
        Entities in file order

    Raises:
        ValueError: If a required column is missing or a value cannot be parsed
    """
    table = np.genfromtxt(path, delimiter=',', names=True, dtype=None,
                          encoding='utf-8', autostrip=True, deletechars='')
    table = np.atleast_1d(table)

    columns = table.dtype.names or ()
    missing = [c for c in (id_column, name_column, *trait_columns) if c not in columns]
    if missing:
        raise ValueError(f"Missing column(s) in {path}: {', '.join(missing)}")

    return [
        Entity.from_scores(
            record[id_column],
            str(record[name_column]),
            [record[column] for column in trait_columns]
        )
        for record in table
    ]


def make_random_population(size: int,
                           random_state: Optional[int] = None,
                           dimension: int = len(TRAIT_COLUMNS)) -> List[Entity]:
    """Generate a population with trait scores uniform in [-1, 17).

    Entities are named ``Person 1`` .. ``Person size``.

    Args:
        size: Number of entities
        random_state: Seed for reproducibility
        dimension: Length of each feature vector
    """
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")

    rng = np.random.default_rng(random_state)
    scores = 2 * rng.random((size, dimension)) * 9 - 1

    return [
        Entity.from_scores(i, f"Person {i}", row)
        for i, row in enumerate(scores.tolist(), start=1)
    ]


def load_initial_vectors(path: Union[str, Path]) -> List[Optional[List[str]]]:
    """Load seeded membership rows, one CSV line per entity in population order.

    Values are kept as strings so they convert to Decimal exactly. A line
    whose fields are all empty yields ``None``, and that entity starts from
    a uniform-random row.

    Args:
        path: Headerless CSV, one column per group

    Returns:
        Rows suitable for ``FuzzyCMeansConfig.initial_vectors``
    """
    table = np.genfromtxt(path, delimiter=',', dtype=str, autostrip=True,
                          encoding='utf-8', ndmin=2)
    if table.size == 0:
        raise ValueError(f"No membership rows in {path}")

    return [
        None if all(value == '' for value in row) else list(row)
        for row in table.tolist()
    ]
