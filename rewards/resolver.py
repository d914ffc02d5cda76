"""Rarity-weighted reward draws.

``resolve`` turns one trigger's reward list into concrete grants:

1. roll the number of draws ``N`` inside the caller's tries range;
2. for each draw, pick an entry by cumulative rarity weight (roulette
   selection, with replacement);
3. roll a quantity inside the entry's ``[min, max]``;
4. emit ``Grant(item_key, display_name, variant_id, quantity)`` when the
   quantity is positive.

Nothing here raises on bad data. An empty list, a zero total weight or a
degenerate quantity range makes that draw a no-op.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple

from .rarity import RarityWeights, weight_for
from .rng import RandomSource, default_random
from .table import RewardDefinition

logger = logging.getLogger(__name__)

TriesRange = Tuple[int, int]


class Grant(NamedTuple):
    item_key: str
    display_name: Optional[str]
    variant_id: int
    quantity: int


def total_weight(rewards: Sequence[RewardDefinition], weights: RarityWeights) -> int:
    return sum(weight_for(weights, r.rarity) for r in rewards)


def selection_odds(
    rewards: Sequence[RewardDefinition], weights: RarityWeights
) -> List[Tuple[RewardDefinition, float]]:
    """Per-entry probability of being picked by one draw (``w / total``)."""
    total = total_weight(rewards, weights)
    if total <= 0:
        return [(r, 0.0) for r in rewards]
    return [(r, weight_for(weights, r.rarity) / total) for r in rewards]


def select_reward(
    rewards: Sequence[RewardDefinition],
    weights: RarityWeights,
    rng: RandomSource,
) -> Optional[RewardDefinition]:
    total = total_weight(rewards, weights)
    if total <= 0:
        return None
    roll = rng.randint(0, total - 1)
    cumulative = 0
    for reward in rewards:
        w = weight_for(weights, reward.rarity)
        if w <= 0:
            continue
        cumulative += w
        if roll < cumulative:
            return reward
    return None


def roll_quantity(reward: RewardDefinition, rng: RandomSource) -> int:
    """Quantity for one draw of ``reward``; 0 means no grant."""
    if reward.is_degenerate:
        return 0
    qty = rng.randint(reward.min_amount, reward.max_amount)
    return qty if qty > 0 else 0


def roll_tries(tries: TriesRange, rng: RandomSource) -> int:
    lo, hi = int(tries[0]), int(tries[1])
    if lo > hi:
        lo, hi = hi, lo
    return max(0, rng.randint(lo, hi))


def iter_grants(
    rewards: Sequence[RewardDefinition],
    weights: RarityWeights,
    draws: int,
    rng: RandomSource,
) -> Iterator[Grant]:
    """Run exactly ``draws`` independent draws, yielding each positive grant."""
    for i in range(draws):
        reward = select_reward(rewards, weights, rng)
        if reward is None:
            logger.debug("draw=%s no selectable reward", i)
            continue
        qty = roll_quantity(reward, rng)
        if qty <= 0:
            logger.debug("draw=%s item=%s rolled no quantity", i, reward.item_key)
            continue
        yield Grant(reward.item_key, reward.display_name, reward.variant_id, qty)


def resolve(
    rewards: Sequence[RewardDefinition],
    weights: RarityWeights,
    tries: TriesRange,
    rng: Optional[RandomSource] = None,
) -> List[Grant]:
    rng = rng or default_random
    draws = roll_tries(tries, rng)
    return list(iter_grants(rewards, weights, draws, rng))


class RewardResolver:
    """Binds a random source to ``resolve``; holds no other state."""

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng or default_random

    def resolve(
        self,
        rewards: Sequence[RewardDefinition],
        weights: RarityWeights,
        tries: TriesRange,
    ) -> List[Grant]:
        return resolve(rewards, weights, tries, self.rng)
