"""Deterministic random number generation with isolated streams.

Each consumer of randomness gets its own named stream derived from a master
seed. Today the only consumer is ``wfc.seed``, which draws fresh map seeds.
Separate streams keep one consumer from shifting another's sequence.

Usage:
    from hexwfc.util import rng
    rng.init(config.RANDOM_SEED)

    _rng = rng.get("wfc.seed")

    def fresh_seed() -> int:
        return _rng.getrandbits(64)

Generators do not draw from these streams: each one owns a ``random.Random``
seeded from its map ``Seed`` so that a seed string alone reproduces a map.
"""

from __future__ import annotations

import zlib
from random import Random
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hexwfc.types import RandomSeed


class RNGStream:
    """Proxy that delegates to the current RNG for a domain.

    Callers may cache a stream at module level; after ``reset()`` the proxy
    looks up the freshly seeded Random instance on its next call.
    """

    def __init__(self, provider: RNGProvider, domain: str) -> None:
        self._provider = provider
        self._domain = domain

    def _rng(self) -> Random:
        return self._provider._get_raw(self._domain)

    def getrandbits(self, k: int) -> int:
        """Return an integer with k random bits."""
        return self._rng().getrandbits(k)


class RNGProvider:
    """Provides isolated RNG streams identified by hierarchical names."""

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self._master_seed = master_seed
        self._streams: dict[str, Random] = {}
        self._proxies: dict[str, RNGStream] = {}

    @property
    def master_seed(self) -> RandomSeed:
        return self._master_seed

    def get(self, domain: str) -> RNGStream:
        """Get a cacheable stream proxy for ``domain`` (e.g. "wfc.seed")."""
        if domain not in self._proxies:
            self._proxies[domain] = RNGStream(self, domain)
        return self._proxies[domain]

    def _get_raw(self, domain: str) -> Random:
        if domain not in self._streams:
            if self._master_seed is None:
                self._streams[domain] = Random()
            else:
                # crc32 rather than hash(): str hashing is salted per process
                derived_seed = zlib.crc32(f"{self._master_seed}:{domain}".encode())
                self._streams[domain] = Random(derived_seed)
        return self._streams[domain]

    def reset(self, master_seed: RandomSeed = None) -> None:
        """Reseed every stream. Existing proxies stay valid."""
        self._master_seed = master_seed
        self._streams.clear()


# =============================================================================
# Module-level API
# =============================================================================

_provider: RNGProvider | None = None


def init(master_seed: RandomSeed = None) -> None:
    """Initialize the global provider, or reset it if it already exists."""
    global _provider
    if _provider is not None:
        _provider.reset(master_seed)
    else:
        _provider = RNGProvider(master_seed)


def get(domain: str) -> RNGStream:
    """Get a stream from the global provider, creating it unseeded if needed."""
    global _provider
    if _provider is None:
        _provider = RNGProvider(None)
    return _provider.get(domain)


def reset(master_seed: RandomSeed = None) -> None:
    """Reseed all global streams.

    Raises:
        RuntimeError: If ``init()`` has not been called.
    """
    if _provider is None:
        raise RuntimeError("RNG not initialized - call rng.init() first")
    _provider.reset(master_seed)
