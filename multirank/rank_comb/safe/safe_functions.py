from math import factorial
from itertools import permutations


def _sorted_distinct_perms(base):
    return sorted(set(permutations(base)))


def generate_multiset_perm_safe(base, rank):
    '''slow but correct version of generate_multiset_perm'''
    for r, perm in enumerate(_sorted_distinct_perms(base)):
        if rank == r:
            return perm


def rank_multiset_perm_safe(perm, base):
    '''slow but correct version of rank_multiset_perm'''
    perm = tuple(perm)
    for rank, elm in enumerate(_sorted_distinct_perms(base)):
        if elm == perm:
            return rank


def multiset_potential_safe(counts):
    '''slow but correct version of multiset_potential'''
    res = factorial(sum(counts))
    for count in counts:
        res //= factorial(count)
    return res
