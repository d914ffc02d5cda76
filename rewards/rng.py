"""
Random sources for reward resolution
------------------------------------

The resolver never touches a global generator; it is handed a source with a
single method, ``randint(a, b)`` (inclusive on both ends).

Two implementations ship here:
- ``ThreadLocalRandom``: one ``random.Random`` per calling thread. This is the
  default for live unwraps; concurrent resolvers never share generator state.
- ``KeyedRandom``: deterministic, hash-derived draws from (seed, namespace,
  key, counter). Stable across Python versions (no reliance on
  random.Random internals), so previews and simulations can be replayed.

Use:
    from rewards.rng import KeyedRandom, ThreadLocalRandom

    rng = KeyedRandom(seed=12345678, namespace="preview")
    n = rng.randint(1, 3)
"""

from __future__ import annotations

import hashlib
import itertools
import random
import threading
from typing import Optional, Protocol


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int:
        ...


# -------- Core hashing --------------------------------------------------------

def _to_uint64(seed: int, key: str, namespace: str = "") -> int:
    """
    Produce a deterministic 64-bit unsigned int from seed+key+namespace.
    """
    h = hashlib.blake2s(digest_size=8)
    h.update(f"{int(seed):08d}".encode("utf-8"))
    if namespace:
        h.update(b"|")
        h.update(namespace.encode("utf-8"))
    h.update(b"|")
    h.update(key.encode("utf-8"))
    return int.from_bytes(h.digest(), "big")


def keyed_randint(seed: int, key: str, a: int, b: int, namespace: str = "") -> int:
    """Uniform integer in [a, b] inclusive for one (seed, key, namespace)."""
    if a > b:
        a, b = b, a
    u = _to_uint64(seed, key, namespace)
    span = (b - a + 1)
    return a + (u % span)


# -------- Sources -------------------------------------------------------------

class ThreadLocalRandom:
    """
    ``random.Random`` per thread. With a seed, each thread's generator is
    seeded with ``(seed, thread ident)`` so threads do not mirror each other.

    Thread idents differ between runs, so a seeded instance only repeats its
    draws within one thread of one process. Use ``KeyedRandom`` to replay.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._local = threading.local()

    def _generator(self) -> random.Random:
        gen = getattr(self._local, "gen", None)
        if gen is None:
            if self.seed is None:
                gen = random.Random()
            else:
                gen = random.Random(f"{self.seed}:{threading.get_ident()}")
            self._local.gen = gen
        return gen

    def randint(self, a: int, b: int) -> int:
        return self._generator().randint(a, b)


class KeyedRandom:
    """
    Deterministic source that carries (seed, namespace) and numbers its draws.

    Example:
        rng = KeyedRandom(12345678, "preview.easter.goldegg")
        rng.randint(0, 99)   # same value for every run with this seed
    """
    __slots__ = ("seed", "namespace", "_counter")

    def __init__(self, seed: int, namespace: str = ""):
        self.seed = int(seed)
        self.namespace = namespace or ""
        # next() on itertools.count is atomic under the GIL
        self._counter = itertools.count()

    def randint(self, a: int, b: int) -> int:
        n = next(self._counter)
        return keyed_randint(self.seed, f"draw.{n}", a, b, self.namespace)

    def with_namespace(self, extra: str) -> "KeyedRandom":
        ns = f"{self.namespace}.{extra}" if self.namespace else extra
        return KeyedRandom(self.seed, ns)


default_random = ThreadLocalRandom()
