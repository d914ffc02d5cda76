# rewards/schemas.py
"""
Pydantic models for the unwrap rewards config document.

- Pydantic v2.
- Field names on disk follow the document the server writes
  ("Unwrap Rewards", "Item Short Name", ...); the compact spellings
  ("UnwrapRewards", "ItemShortName", ...) are accepted on read.
- Keep this module free of draw logic; it is schemas + light validation only.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .rarity import Rarity


def _alias(name: str) -> Dict[str, Any]:
    compact = name.replace(" ", "")
    snake = name.lower().replace(" ", "_")
    return {
        "validation_alias": AliasChoices(name, compact, snake),
        "serialization_alias": name,
    }


NonNegativeWeight = Annotated[int, Field(ge=0)]


class RewardConfig(BaseModel):
    """One reward entry of a trigger's list."""

    model_config = ConfigDict(extra="ignore")

    item_short_name: str = Field("", **_alias("Item Short Name"))
    display_name: Optional[str] = Field(None, **_alias("Display Name"))
    skin_id: int = Field(0, ge=0, **_alias("Skin Id"))
    minimum_amount: int = Field(0, **_alias("Minimum Amount"))
    maximum_amount: int = Field(0, **_alias("Maximum Amount"))
    rarity: Rarity = Field(Rarity.Common, **_alias("Rarity"))

    @field_validator("item_short_name", mode="before")
    @classmethod
    def _blank_item(cls, v):
        # Blank keys survive parsing; the reward table drops them.
        return "" if v is None else v


class UnwrapConfig(BaseModel):
    """The whole document: version + reward tables + rarity weights."""

    model_config = ConfigDict(extra="ignore")

    version: Optional[str] = Field(None, **_alias("Version"))
    unwrap_rewards: Dict[str, List[RewardConfig]] = Field(
        default_factory=dict, **_alias("Unwrap Rewards")
    )
    rarity_weights: Dict[Rarity, NonNegativeWeight] = Field(
        default_factory=dict, **_alias("Rarity Weights")
    )

    @field_validator("rarity_weights", mode="before")
    @classmethod
    def _null_weights(cls, v):
        return {} if v is None else v

    @field_validator("unwrap_rewards", mode="before")
    @classmethod
    def _null_rewards(cls, v):
        if v is None:
            return {}
        if isinstance(v, dict):
            return {k: (rewards or []) for k, rewards in v.items()}
        return v

    def to_document(self) -> Dict[str, Any]:
        """JSON-ready dict using the on-disk field names."""
        return self.model_dump(mode="json", by_alias=True)
