from .errors import (RankCombError, InvalidInputError, PotentialOverflowError,
                     OutOfRangeError, LengthMismatchError, InvalidPermutationError)
from .main_functions import (DEFAULT_INT_BITS, MultisetRankCodec, max_potential,
                             multiset_potential, rank_multiset_perm, rank_multiset_perm_raw,
                             generate_multiset_perm, generate_multiset_perm_raw)

__all__ = [
    "DEFAULT_INT_BITS",
    "MultisetRankCodec",
    "max_potential",
    "multiset_potential",
    "rank_multiset_perm",
    "rank_multiset_perm_raw",
    "generate_multiset_perm",
    "generate_multiset_perm_raw",
    "RankCombError",
    "InvalidInputError",
    "PotentialOverflowError",
    "OutOfRangeError",
    "LengthMismatchError",
    "InvalidPermutationError",
]
