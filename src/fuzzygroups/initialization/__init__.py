"""Initialization strategies for the membership matrix."""

from .random import UniformRandomInit
from .from_previous import FromPreviousInit

__all__ = [
    'UniformRandomInit',
    'FromPreviousInit'
]
