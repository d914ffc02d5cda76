"""Reward definitions and the trigger -> rewards lookup table."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from .rarity import Rarity
from .schemas import RewardConfig, UnwrapConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RewardDefinition:
    item_key: str
    rarity: Rarity
    min_amount: int = 1
    max_amount: int = 1
    display_name: Optional[str] = None
    variant_id: int = 0

    @property
    def quantity_range(self) -> Tuple[int, int]:
        return (self.min_amount, self.max_amount)

    @property
    def is_degenerate(self) -> bool:
        """True when no quantity roll can ever be positive."""
        return self.max_amount <= 0 or self.min_amount > self.max_amount

    def export(self) -> Dict[str, Any]:
        return {
            "item_key": self.item_key,
            "display_name": self.display_name,
            "variant_id": self.variant_id,
            "min_amount": self.min_amount,
            "max_amount": self.max_amount,
            "rarity": self.rarity.value,
        }


Rewards = Tuple[RewardDefinition, ...]


class RewardTable(Mapping[str, Rewards]):
    """
    Read-only mapping trigger key -> ordered rewards.

    Entries with a blank item key are dropped at construction; they could
    never be granted. Degenerate quantity ranges are kept and handled at
    draw time.
    """

    def __init__(self, entries: Optional[Mapping[str, Iterable[RewardDefinition]]] = None):
        table: Dict[str, Rewards] = {}
        for trigger, rewards in (entries or {}).items():
            kept = []
            for reward in rewards:
                if not (reward.item_key or "").strip():
                    logger.debug("dropping reward with blank item key trigger=%s", trigger)
                    continue
                kept.append(reward)
            table[trigger] = tuple(kept)
        self._table = MappingProxyType(table)

    def lookup(self, trigger_key: str) -> Optional[Rewards]:
        """Rewards for ``trigger_key`` or ``None`` when it is not configured."""
        return self._table.get(trigger_key)

    def __getitem__(self, trigger_key: str) -> Rewards:
        return self._table[trigger_key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"RewardTable(triggers={list(self._table)!r})"

    @classmethod
    def from_config(cls, config: UnwrapConfig) -> "RewardTable":
        return cls({
            trigger: [_definition(r) for r in rewards]
            for trigger, rewards in config.unwrap_rewards.items()
        })

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "RewardTable":
        """Build from the ``Unwrap Rewards`` section of a raw config document."""
        return cls({
            trigger: [
                _definition(RewardConfig.model_validate(r)) for r in (rewards or [])
            ]
            for trigger, rewards in (raw or {}).items()
        })


def _definition(r: RewardConfig) -> RewardDefinition:
    return RewardDefinition(
        item_key=r.item_short_name,
        rarity=r.rarity,
        min_amount=r.minimum_amount,
        max_amount=r.maximum_amount,
        display_name=r.display_name or None,
        variant_id=r.skin_id,
    )
