"""
Error taxonomy for the fuzzy grouping engine.

Fatal conditions are raised to the immediate caller; non-fatal ones are
reported through the warnings machinery.
"""


class FuzzyGroupsError(Exception):
    """Base class for all errors raised by fuzzygroups."""


class InvalidParameter(FuzzyGroupsError, ValueError):
    """A model parameter is outside its admissible range."""


class LengthMismatch(FuzzyGroupsError, ValueError):
    """Two vectors that must have equal length do not."""

    def __init__(self, left: int, right: int):
        super().__init__(f"Vector size is not equal: left => {left}, right => {right}")
        self.left = left
        self.right = right


class RedistributionExhausted(FuzzyGroupsError, RuntimeError):
    """No group can accept a member moved out of an overfull group."""


class OrphanMemberWarning(UserWarning):
    """A hard-assigned member has no matching group and was dropped."""
