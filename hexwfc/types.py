from __future__ import annotations

# =============================================================================
# WFC TYPES
# =============================================================================

# Index of a tile in a Template. Tiles are numbered in ascending order of their
# seven-value signature, so ids are stable for a given sample and transform set.
type TileId = int

# Seed for an RNG stream provider. Can be an int, a descriptive string like
# "archipelago", or None for non-deterministic behavior.
type RandomSeed = int | str | None

# RGB colour in 0-255 space, used by the PNG preview.
type ColorRGB = tuple[int, int, int]
