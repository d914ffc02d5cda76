"""Rarity-weighted unwrap reward resolution."""

# Expose primary APIs for convenience
from .rarity import Rarity, RarityWeights, freeze_weights, weight_for
from .table import RewardDefinition, RewardTable
from .resolver import Grant, RewardResolver, resolve, select_reward, selection_odds
from .rng import KeyedRandom, RandomSource, ThreadLocalRandom
