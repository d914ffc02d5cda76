"""Rarity tiers and the read-only weight map used by reward selection."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union


class Rarity(str, Enum):
    Common = "Common"
    Uncommon = "Uncommon"
    Rare = "Rare"
    VeryRare = "VeryRare"


RarityWeights = Mapping[Rarity, int]


def freeze_weights(raw: Optional[Mapping[Union[Rarity, str], int]]) -> RarityWeights:
    """Build an immutable weight map from tier names or ``Rarity`` keys.

    Unknown tier names raise ``ValueError``; tier validation belongs to the
    config loader, so anything reaching here is expected to be well formed.
    """
    out = {}
    for tier, weight in (raw or {}).items():
        out[Rarity(tier)] = int(weight)
    return MappingProxyType(out)


def weight_for(weights: RarityWeights, rarity: Rarity) -> int:
    """Weight of a tier; missing tiers and negative weights count as 0."""
    w = weights.get(rarity, 0) or 0
    return w if w > 0 else 0
