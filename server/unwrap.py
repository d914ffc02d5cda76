import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from rewards.resolver import resolve
from rewards.rng import RandomSource

from .config import UNWRAP_HOOK
from .config_store import Ruleset
from .hooks import hook

logger = logging.getLogger(__name__)

GrantSink = Callable[[str, Optional[str], int, int], Any]
EffectPlayer = Callable[[str, Any], Any]


@dataclass
class UnwrapEvent:
    """What the game hands us when a player unwraps an item."""
    trigger_key: Optional[str]
    min_tries: int = 1
    max_tries: int = 1
    # uses up `amount` of the trigger item
    consume: Optional[Callable[[int], Any]] = None
    success_effect: Optional[str] = None
    position: Any = None

    @property
    def tries(self) -> Tuple[int, int]:
        return (self.min_tries, self.max_tries)


@hook(UNWRAP_HOOK)
def on_item_unwrap(
    event: UnwrapEvent,
    *,
    ruleset: Ruleset,
    sink: GrantSink,
    effects: Optional[EffectPlayer] = None,
    rng: Optional[RandomSource] = None,
) -> Optional[dict]:
    """
    Replace the default unwrap with configured rewards.

    Returns ``None`` when the trigger has no configured rewards so the host
    falls back to its own unwrap behavior.
    """
    if event is None or not event.trigger_key:
        return None
    rewards = ruleset.lookup(event.trigger_key)
    if rewards is None:
        return None

    if event.consume is not None:
        event.consume(1)

    grants = resolve(rewards, ruleset.weights, event.tries, rng)
    for g in grants:
        sink(g.item_key, g.display_name, g.variant_id, g.quantity)

    if effects is not None and event.success_effect:
        effects(event.success_effect, event.position)

    logger.info(
        "unwrap trigger=%s tries=%s-%s grants=%s",
        event.trigger_key,
        event.min_tries,
        event.max_tries,
        len(grants),
    )
    msg = ("You unwrap it… You found " +
           ", ".join(f"{g.quantity} × {g.display_name or g.item_key}" for g in grants) + "!"
           ) if grants else "You unwrap it… nothing inside."
    return {
        "ok": True,
        "trigger": event.trigger_key,
        "grants": [g._asdict() for g in grants],
        "events": [{"type": "log", "text": msg}],
    }
