# server/services/inventory.py
"""
Reference grant sink: turn a resolved grant into an item and place it.

The host provides three small capabilities:
- ``create_item(item_key, quantity, variant_id)`` -> item or None
- ``container.move(item)`` -> bool (False when the container is full)
- ``owner.drop(item)`` for the overflow drop; without an owner the item is
  removed via ``item.remove()``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

PLACED = "placed"
DROPPED = "dropped"
DISCARDED = "discarded"
SKIPPED = "skipped"

ItemFactory = Callable[[str, int, int], Any]


class ContainerGrantSink:
    def __init__(self, create_item: ItemFactory, container: Any, owner: Any = None):
        self.create_item = create_item
        self.container = container
        self.owner = owner

    def __call__(self, item_key: str, display_name: Optional[str], variant_id: int, quantity: int) -> str:
        item = self.create_item(item_key, quantity, variant_id)
        if item is None:
            logger.warning("grant skipped, unknown item=%s", item_key)
            return SKIPPED
        if display_name:
            item.name = display_name

        if self.container.move(item):
            return PLACED
        if self.owner is not None:
            self.owner.drop(item)
            logger.warning("container full, dropped item=%s qty=%s", item_key, quantity)
            return DROPPED
        item.remove()
        logger.warning("container full and no owner, discarded item=%s qty=%s", item_key, quantity)
        return DISCARDED
