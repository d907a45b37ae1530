"""Meal selection: draw one dish from a category's ordered list.

Fallback tiers, tried in order (the first non-empty pool is drawn from):

    FRESH   candidates not yet used this week
    REPEAT  all candidates (repeats allowed, only when nothing fresh is left)
    NONE    no candidates at all -> None

Under the weighted policy a dish at index i of n gets weight n - i, computed on
the full list, so filtering out used dishes keeps the original weights.
"""
from __future__ import annotations
import random
from enum import Enum
from typing import AbstractSet, List, Optional, Sequence, Tuple

from middag.domain.SelectionPolicy import SelectionPolicy

__all__ = ["SelectionTier", "selection_tier", "candidate_pool", "rank_weights", "select_meal"]


class SelectionTier(str, Enum):
    FRESH = "fresh"
    REPEAT = "repeat"
    NONE = "none"


def rank_weights(candidates: Sequence[str]) -> List[Tuple[str, int]]:
    n = len(candidates)
    return [(dish, n - i) for i, dish in enumerate(candidates)]


def selection_tier(candidates: Sequence[str], used: AbstractSet[str]) -> SelectionTier:
    if not candidates:
        return SelectionTier.NONE
    if any(dish not in used for dish in candidates):
        return SelectionTier.FRESH
    return SelectionTier.REPEAT


def candidate_pool(candidates: Sequence[str], used: AbstractSet[str]) -> Tuple[SelectionTier, List[Tuple[str, int]]]:
    """Return the applicable tier and its (dish, weight) pool."""
    tier = selection_tier(candidates, used)
    weighted = rank_weights(candidates)
    if tier is SelectionTier.FRESH:
        return tier, [(dish, w) for dish, w in weighted if dish not in used]
    return tier, weighted


def _uniform_draw(pool: List[Tuple[str, int]], rng) -> str:
    return rng.choice(pool)[0]


def _weighted_draw(pool: List[Tuple[str, int]], rng) -> str:
    total = sum(w for _, w in pool)
    if total <= 0:
        return pool[0][0]
    remaining = rng.random() * total
    for dish, weight in pool:
        remaining -= weight
        if remaining <= 0:
            return dish
    # Float rounding can leave a sliver above zero
    return pool[-1][0]


def select_meal(candidates: Sequence[str], used: AbstractSet[str],
                policy: SelectionPolicy = SelectionPolicy.WEIGHTED, rng=random) -> Optional[str]:
    """Pick one dish from `candidates`, avoiding `used` while fresh dishes remain.

    Args:
        candidates: dishes of one category in source order (earlier = preferred).
        used: dishes already placed this week.
        policy: uniform or rank-weighted draw.
        rng: anything exposing `random()` and `choice()`; the `random` module by default.
    Returns:
        str | None: the chosen dish, or None when `candidates` is empty.
    """
    tier, pool = candidate_pool(candidates, used)
    if tier is SelectionTier.NONE:
        return None
    if SelectionPolicy.parse(policy) is SelectionPolicy.WEIGHTED:
        return _weighted_draw(pool, rng)
    return _uniform_draw(pool, rng)
