"""Exceptions raised by the multiset permutation ranking functions."""


class RankCombError(Exception):
    """Base class for all ranking errors."""


class InvalidInputError(RankCombError, ValueError):
    """The base multiset (or its type counts) can't define a codec."""


class PotentialOverflowError(RankCombError, OverflowError):
    """The number of permutations doesn't fit in the configured integer width."""


class OutOfRangeError(RankCombError, IndexError):
    """A rank outside [0, potential) was requested."""


class LengthMismatchError(RankCombError, ValueError):
    """A permutation has a different length than the base multiset."""


class InvalidPermutationError(RankCombError, ValueError):
    """A sequence isn't a rearrangement of the base multiset."""
