"""Exceptions raised by the estimators."""


class MalformedInputError(ValueError):
    """A trajectory, state count, or time step is invalid."""


class SymmetryMismatchError(ValueError):
    """A relabeling is not a permutation of the state space."""
