from .safe_functions import (generate_multiset_perm_safe, rank_multiset_perm_safe,
                             multiset_potential_safe)

__all__ = [
    "generate_multiset_perm_safe",
    "rank_multiset_perm_safe",
    "multiset_potential_safe",
]
