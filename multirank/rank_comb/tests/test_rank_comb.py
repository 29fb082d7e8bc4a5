import logging
import random
import unittest
from itertools import permutations

from ..main_functions import *
from ..safe import *


logging.basicConfig(level=logging.INFO)  # Set the default logging level
logger = logging.getLogger(__name__)


class TestRankComb(unittest.TestCase):

    test_params = {
        'base': tuple('AABBCD'),
        'num_tests': 50,
    }

    bases = [
        (0, 0, 1, 1, 2, 3),
        tuple('MISSISSIPPI'[:7]),
        (0, 1, 2, 3, 4),
        (5, 5, 5, 5),
        (2, 0, 1, 0, 2, 1, 0),
        ('x',),
    ]

    def test_rank_multiset_perm_cmp(self):
        self.rank_multiset_perm_cmp(**self.test_params)

    def rank_multiset_perm_cmp(self, base, num_tests, **kwargs):

        samples = random.sample(sorted(set(permutations(base))), num_tests)

        for permutation in samples:
            rank = rank_multiset_perm(permutation, base)
            rank_safe = rank_multiset_perm_safe(permutation, base)
            self.assertEqual(rank, rank_safe, msg=f"Test failed: {rank} != {rank_safe} (safe) {permutation = }")
            logger.debug(f"Test passed: {permutation = } -> Rank: {rank} -> Rank(Safe): {rank_safe}")

    def test_generate_multiset_perm_cmp(self):
        self.generate_multiset_perm_cmp(**self.test_params)

    def generate_multiset_perm_cmp(self, base, num_tests, **kwargs):

        potential = multiset_potential_safe(MultisetRankCodec(base).counts)
        samples = random.sample(range(potential), num_tests)

        for rank in samples:
            result_perm_safe = generate_multiset_perm_safe(base, rank)
            result_perm = generate_multiset_perm(base, rank)
            self.assertEqual(result_perm, result_perm_safe,
                             msg=f"Test failed: {result_perm} != {result_perm_safe} (safe) {rank = }")
            logger.debug(f"Test passed: {rank} -> Result: {result_perm} -> Result Safe: {result_perm_safe}")

    def test_multiset_potential_cmp(self):

        for _ in range(100):
            counts = [random.randint(1, 6) for _ in range(random.randint(1, 6))]
            potential = multiset_potential(counts)
            potential_safe = multiset_potential_safe(counts)
            self.assertEqual(potential, potential_safe, msg=f"Test failed: {potential} != {potential_safe} (safe) {counts = }")

    def test_generate_multiset_perm_and_undo(self):

        for base in self.bases:
            codec = MultisetRankCodec(base)

            for rank in range(codec.potential):
                permutation = codec.unrank(rank)
                result_rank = codec.rank(permutation)
                self.assertEqual(rank, result_rank, f"Test failed: {result_rank} != {rank} {base = }")

    def test_rank_multiset_perm_and_undo(self):

        for base in self.bases:
            codec = MultisetRankCodec(base)

            for permutation in set(permutations(base)):
                rank = codec.rank(permutation)
                result_perm = codec.unrank(rank)
                self.assertEqual(permutation, result_perm,
                                 msg=f"Test failed: {permutation} != {result_perm}, ({rank = })")

    def test_every_permutation_once(self):

        for base in self.bases:
            codec = MultisetRankCodec(base)
            ranked = list(codec.permutations())

            self.assertEqual(len(ranked), codec.potential)
            self.assertEqual(set(ranked), set(permutations(base)))
            # ranks follow lexicographic order of the labels
            self.assertEqual(ranked, sorted(ranked))

    def test_potential_of_reference_multiset(self):
        codec = MultisetRankCodec((0, 0, 1, 1, 2, 3))

        self.assertEqual(codec.counts, (2, 2, 1, 1))
        self.assertEqual(codec.length, 6)
        self.assertEqual(codec.types, 4)
        self.assertEqual(codec.potential, 180)
        self.assertEqual(codec.max_type_length, 2)

    def test_reference_multiset_ranks(self):
        codec = MultisetRankCodec((0, 0, 1, 1, 2, 3))

        self.assertEqual(codec.unrank(0), (0, 0, 1, 1, 2, 3))
        self.assertEqual(codec.unrank(1), (0, 0, 1, 1, 3, 2))
        self.assertEqual(codec.unrank(12), (0, 1, 0, 1, 2, 3))
        self.assertEqual(codec.unrank(179), (3, 2, 1, 1, 0, 0))
        self.assertEqual(codec.rank((0, 1, 0, 1, 2, 3)), 12)
        self.assertEqual(codec.rank((3, 2, 1, 1, 0, 0)), 179)

    def test_unrank_bounds(self):
        codec = MultisetRankCodec((0, 0, 1, 1, 2, 3))

        for rank in (-1, codec.potential, codec.potential + 10):
            with self.assertRaises(OutOfRangeError):
                codec.unrank(rank)

        self.assertEqual(len(codec.unrank(0)), 6)
        self.assertEqual(len(codec.unrank(codec.potential - 1)), 6)

    def test_single_type(self):
        codec = MultisetRankCodec('aaaa')

        self.assertEqual(codec.potential, 1)
        self.assertEqual(codec.unrank(0), ('a',) * 4)
        self.assertEqual(codec.rank('aaaa'), 0)
        with self.assertRaises(OutOfRangeError):
            codec.unrank(1)

    def test_all_distinct(self):
        for n in range(1, 8):
            codec = MultisetRankCodec(range(n))
            self.assertEqual(codec.potential, multiset_potential_safe([1] * n))
            self.assertEqual(codec.max_type_length, 1)

        codec = MultisetRankCodec(range(5))
        self.assertEqual(codec.potential, 120)

    def test_rank_length_mismatch(self):
        codec = MultisetRankCodec((0, 0, 1, 1, 2, 3))

        for permutation in ((0, 1, 0, 1), (0, 0, 1, 1, 2, 3, 3), ()):
            with self.assertRaises(LengthMismatchError):
                codec.rank(permutation)

    def test_raw_functions(self):
        counts = (2, 2, 1, 1)

        self.assertEqual(multiset_potential(counts), 180)
        self.assertEqual(generate_multiset_perm_raw(counts, 0), (0, 0, 1, 1, 2, 3))
        self.assertEqual(rank_multiset_perm_raw((3, 2, 1, 1, 0, 0), counts), 179)

        with self.assertRaises(InvalidPermutationError):
            rank_multiset_perm_raw((0, 0, 1, 1, 2, 4), counts)
        with self.assertRaises(InvalidPermutationError):
            rank_multiset_perm_raw((0, 0, 0, 1, 2, 3), counts)
        with self.assertRaises(InvalidPermutationError):
            rank_multiset_perm_raw((0, 0, 1, 1, 2, -1), counts)
        with self.assertRaises(LengthMismatchError):
            rank_multiset_perm_raw((0, 0, 1), counts)

    def test_raw_functions_bad_counts(self):

        for counts in ((2, 0, 1), (-1, 2), (1.5, 2), ()):
            with self.assertRaises(InvalidInputError, msg=f"{counts = }"):
                generate_multiset_perm_raw(counts, 0)
            with self.assertRaises(InvalidInputError, msg=f"{counts = }"):
                rank_multiset_perm_raw((0, 1), counts)

    def test_label_mapping(self):
        base = 'MISSISSIPPI'

        self.assertEqual(rank_multiset_perm(sorted(base), base), 0)
        self.assertEqual(generate_multiset_perm(base, 0), tuple(sorted(base)))
        self.assertEqual(rank_multiset_perm_safe(tuple(base[:7]), base[:7]), rank_multiset_perm(base[:7], base[:7]))


if __name__ == '__main__':
    unittest.main()
