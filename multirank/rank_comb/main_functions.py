import logging
import operator
from collections import Counter

import numpy as np
from sortedcontainers import SortedSet

from .errors import (InvalidInputError, PotentialOverflowError, OutOfRangeError,
                     LengthMismatchError, InvalidPermutationError)


logger = logging.getLogger(__name__)

DEFAULT_INT_BITS = 64

_SIGNED_DTYPES = {8: np.int8, 16: np.int16, 32: np.int32, 64: np.int64}


def max_potential(int_bits):
    """
    Largest potential that fits in a signed integer of int_bits bits.
    None means unbounded.
    """
    if int_bits is None:
        return None

    try:
        dtype = _SIGNED_DTYPES[int_bits]
    except (KeyError, TypeError):
        raise InvalidInputError(f"Unsupported integer width: {int_bits!r} "
                                f"(expected one of {sorted(_SIGNED_DTYPES)} or None)") from None

    return int(np.iinfo(dtype).max)


def multiset_potential(counts, max_value=None):
    """
    Number of distinct permutations of a multiset with the given type counts:

                    factorial(sum(counts))
        ----------------------------------------------
        factorial(counts[0]) * .. * factorial(counts[-1])

    Built as a product of binomials, one item at a time, so every division is
    exact and the running value never exceeds potential * length.
    """
    potential = 1
    n = 0

    for count in counts:
        for j in range(1, count + 1):
            n += 1
            potential = potential * n // j

            if max_value is not None and potential > max_value:
                raise PotentialOverflowError(
                    f"Potential exceeds {max_value} after {n} of {sum(counts)} items")

    return potential


def _check_counts(counts):
    try:
        counts = tuple(operator.index(c) for c in counts)
    except TypeError as e:
        raise InvalidInputError(f"Type counts must be integers: {e}") from e

    if not counts:
        raise InvalidInputError("Base multiset is empty")
    if min(counts) < 1:
        raise InvalidInputError(f"Every type must occur at least once: {counts}")

    return counts


def _index_labels(base):
    '''sorted distinct labels and their multiplicities in that order'''
    try:
        tally = Counter(base)
        labels = SortedSet(tally)
    except TypeError as e:
        raise InvalidInputError(f"Labels must be hashable and mutually comparable: {e}") from e

    if not labels:
        raise InvalidInputError("Base multiset is empty")

    return labels, tuple(tally[label] for label in labels)


def generate_multiset_perm_raw(counts, rank, potential=None):
    """
    Returns the permutation at the given rank for a multiset of type codes
    0..len(counts)-1, where counts[t] is the multiplicity of type t.
    Ranks follow the lexicographic order of the code sequences.
    """
    counts = list(_check_counts(counts))
    if potential is None:
        potential = multiset_potential(counts)

    rank = operator.index(rank)
    if rank < 0 or rank >= potential:
        raise OutOfRangeError(f"Rank {rank} is beyond permutation bounds [0, {potential})")

    permutation = []

    for remaining in range(sum(counts), 0, -1):
        # rank scaled down to a slot among the remaining items
        selector = rank * remaining // potential
        offset = 0
        t = 0

        # each type owns a run of counts[t] slots
        while offset + counts[t] <= selector:
            offset += counts[t]
            t += 1

        # drop the permutations that start with a lower type
        rank -= potential * offset // remaining
        # permutations of what's left once t is consumed
        potential = potential * counts[t] // remaining
        counts[t] -= 1
        permutation.append(t)

    return tuple(permutation)


def _check_codes(seq, counts):
    tally = [0] * len(counts)

    for code in seq:
        try:
            code = operator.index(code)
        except TypeError:
            raise InvalidPermutationError(f"Type code {code!r} is not an integer") from None
        if not 0 <= code < len(counts):
            raise InvalidPermutationError(f"Unknown type code {code} (expected 0..{len(counts) - 1})")
        tally[code] += 1

    if tally != list(counts):
        raise InvalidPermutationError(f"Type counts {tally} don't match the base multiset {list(counts)}")


def rank_multiset_perm_raw(seq, counts, potential=None):
    """
    Assigns a rank to a permutation of type codes. Inverse of
    generate_multiset_perm_raw.
    """
    counts = list(_check_counts(counts))
    if potential is None:
        potential = multiset_potential(counts)

    seq = tuple(seq)
    remaining = sum(counts)
    if len(seq) != remaining:
        raise LengthMismatchError(f"Permutation length {len(seq)} != multiset length {remaining}")
    _check_codes(seq, counts)

    rank = 0

    # once a single arrangement is left the rest of seq adds nothing
    for t in seq:
        if potential <= 1:
            break

        offset = sum(counts[:t])
        rank += potential * offset // remaining
        potential = potential * counts[t] // remaining
        counts[t] -= 1
        remaining -= 1

    return rank


class MultisetRankCodec:
    """
    Ranks and unranks the distinct permutations of a fixed multiset.

    Labels may be any hashable, mutually comparable values. They are ordered
    by value and ranks follow the lexicographic order that induces, so a
    base of 0..types-1 integers is ranked by its own values.

    Example:
        codec = MultisetRankCodec((0, 0, 1, 1, 2, 3))
        codec.potential                   # 180
        codec.rank((0, 1, 0, 1, 2, 3))    # 12
        codec.unrank(12)                  # (0, 1, 0, 1, 2, 3)
    """

    __slots__ = ('labels', 'counts', 'length', 'types', 'potential',
                 'max_type_length', 'int_bits')

    def __init__(self, base, int_bits=DEFAULT_INT_BITS):
        labels, counts = _index_labels(base)
        self._setup(labels, counts, int_bits)

    @classmethod
    def from_counts(cls, counts, int_bits=DEFAULT_INT_BITS):
        '''codec over type codes 0..len(counts)-1'''
        counts = _check_counts(counts)
        codec = cls.__new__(cls)
        codec._setup(SortedSet(range(len(counts))), counts, int_bits)
        return codec

    def _setup(self, labels, counts, int_bits):
        potential = multiset_potential(counts, max_potential(int_bits))

        for name, value in (('labels', labels), ('counts', counts),
                            ('length', sum(counts)), ('types', len(counts)),
                            ('potential', potential),
                            ('max_type_length', max(counts)),
                            ('int_bits', int_bits)):
            object.__setattr__(self, name, value)

        logger.debug(f"MultisetRankCodec: types={self.types}, length={self.length}, "
                     f"potential={self.potential}, int_bits={self.int_bits}")

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return type(self), (self.base, self.int_bits)

    @property
    def base(self):
        '''the base multiset, sorted'''
        return tuple(label for label, count in zip(self.labels, self.counts)
                     for _ in range(count))

    def encode(self, perm):
        '''labels -> type codes'''
        try:
            return tuple(self.labels.index(label) for label in perm)
        except (ValueError, TypeError) as e:
            raise InvalidPermutationError(f"Unknown label in {perm!r}: {e}") from e

    def decode(self, codes):
        '''type codes -> labels'''
        perm = []
        for code in codes:
            try:
                code = operator.index(code)
            except TypeError:
                raise InvalidPermutationError(f"Type code {code!r} is not an integer") from None
            if not 0 <= code < self.types:
                raise InvalidPermutationError(f"Unknown type code {code} (expected 0..{self.types - 1})")
            perm.append(self.labels[code])
        return tuple(perm)

    def unrank(self, index):
        """
        Returns the permutation at the given rank.
        Raises OutOfRangeError unless 0 <= index < potential.
        """
        codes = generate_multiset_perm_raw(self.counts, index, self.potential)
        return self.decode(codes)

    def rank(self, perm):
        """
        Returns the rank of perm, which must be a rearrangement of the base
        multiset.
        """
        perm = tuple(perm)
        if len(perm) != self.length:
            raise LengthMismatchError(f"Permutation length {len(perm)} != multiset length {self.length}")

        return rank_multiset_perm_raw(self.encode(perm), self.counts, self.potential)

    def permutations(self, start=0, stop=None):
        '''yields permutations in rank order, ranks sliced like a range'''
        for rank in range(self.potential)[start:stop]:
            yield self.unrank(rank)

    def permutation_table(self, start=0, stop=None):
        """
        Type codes of the permutations ranked start..stop, one row per rank.
        """
        ranks = range(self.potential)[start:stop]
        dtype = np.min_scalar_type(self.types - 1)
        table = np.empty((max(0, ranks.stop - ranks.start), self.length), dtype=dtype)

        for row, rank in enumerate(ranks):
            table[row] = generate_multiset_perm_raw(self.counts, rank, self.potential)

        logger.debug(f"permutation_table: {table.shape[0]} rows, dtype={table.dtype}")
        return table

    def __contains__(self, perm):
        try:
            self.rank(perm)
        except (LengthMismatchError, InvalidPermutationError):
            return False
        return True

    def _key(self):
        return tuple(self.labels), self.counts, self.int_bits

    def __eq__(self, other):
        if not isinstance(other, MultisetRankCodec):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return f"{type(self).__name__}({self.base!r}, int_bits={self.int_bits!r})"


def rank_multiset_perm(perm, base):
    '''rank of perm among the permutations of base'''
    return MultisetRankCodec(base, int_bits=None).rank(perm)


def generate_multiset_perm(base, rank):
    '''permutation of base at the given rank'''
    return MultisetRankCodec(base, int_bits=None).unrank(rank)
