"""
multirank: dense, bijective ranking of the distinct permutations of a multiset.
"""

__version__ = "0.1.0"

from .rank_comb import *
from .rank_comb import __all__ as _rank_comb_all

__all__ = ["__version__", *_rank_comb_all]
