"""Default config document written when no config file exists yet."""

from __future__ import annotations

import copy
from typing import Any, Dict

from .config import PLUGIN_VERSION

DEFAULT_RARITY_WEIGHTS = {
    "Common": 60,
    "Uncommon": 25,
    "Rare": 10,
    "VeryRare": 5,
}


def _reward(item: str, lo: int, hi: int, rarity: str) -> Dict[str, Any]:
    return {
        "Item Short Name": item,
        "Display Name": None,
        "Skin Id": 0,
        "Minimum Amount": lo,
        "Maximum Amount": hi,
        "Rarity": rarity,
    }


DEFAULT_UNWRAP_REWARDS = {
    "easter.goldegg": [
        _reward("ammo.rocket.mlrs", 1, 2, "Common"),
        _reward("explosives", 3, 7, "Uncommon"),
        _reward("explosive.satchel", 1, 3, "Rare"),
        _reward("metal.facemask", 1, 1, "Rare"),
        _reward("potato", 10, 20, "VeryRare"),
        _reward("t1_smg", 1, 1, "VeryRare"),
    ],
}


def default_document() -> Dict[str, Any]:
    """Fresh copy of the default document; callers may mutate it."""
    return {
        "Version": PLUGIN_VERSION,
        "Unwrap Rewards": copy.deepcopy(DEFAULT_UNWRAP_REWARDS),
        "Rarity Weights": dict(DEFAULT_RARITY_WEIGHTS),
    }
