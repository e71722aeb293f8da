"""
Seeded random number service.

Every random decision in the kernel flows through a single RNG instance that
is passed explicitly into each subsystem call. Two runs with the same seed and
the same call sequence produce identical results, so callers must keep the
order of draws fixed.

All helpers are built on top of ``next()`` so the whole kernel consumes one
stream of uniform draws.
"""

from __future__ import annotations

import math
import random
import zlib
from typing import Iterable, List, Sequence, Tuple, TypeVar, Union

from scoutsim.core.errors import RandomSelectionError


T = TypeVar("T")

Seed = Union[int, str]

_ID_CHARS = "abcdefghijklmnopqrstuvwxyz0123456789"


class RNG:
    """Deterministic random source for one simulation run."""

    def __init__(self, seed: Seed = 0):
        self.seed = seed
        self._random = random.Random(seed)

    def __repr__(self) -> str:
        return f"RNG(seed={self.seed!r})"

    # =========================================================================
    # Primitive draws
    # =========================================================================

    def next(self) -> float:
        """Uniform float in [0, 1)."""
        return self._random.random()

    def next_int(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both inclusive."""
        if low > high:
            raise RandomSelectionError(f"next_int: low ({low}) must be <= high ({high})")
        return math.floor(self.next() * (high - low + 1)) + low

    def next_float(self, low: float, high: float) -> float:
        """Uniform float in [low, high)."""
        if low > high:
            raise RandomSelectionError(f"next_float: low ({low}) must be <= high ({high})")
        return self.next() * (high - low) + low

    def gaussian(self, mean: float, stddev: float) -> float:
        """Normal draw using the Box-Muller transform."""
        u1 = max(self.next(), 1e-10)
        u2 = self.next()
        z = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
        return mean + stddev * z

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        if probability < 0 or probability > 1:
            raise RandomSelectionError(
                f"chance: probability must be in [0, 1], got {probability}"
            )
        return self.next() < probability

    # =========================================================================
    # Selection
    # =========================================================================

    def pick(self, items: Sequence[T]) -> T:
        """Uniformly pick one element of a non-empty sequence."""
        if len(items) == 0:
            raise RandomSelectionError("pick: items must not be empty")
        return items[self.next_int(0, len(items) - 1)]

    def pick_weighted(self, items: Iterable[Tuple[T, float]]) -> T:
        """
        Pick one item from (item, weight) pairs.

        Raises:
            RandomSelectionError: if there are no items, a weight is negative,
                or the weights do not sum to a positive total.
        """
        entries = list(items)
        if not entries:
            raise RandomSelectionError("pick_weighted: items must not be empty")

        total = 0.0
        for _, weight in entries:
            if weight < 0:
                raise RandomSelectionError(
                    f"pick_weighted: weight must be non-negative, got {weight}"
                )
            total += weight
        if total <= 0:
            raise RandomSelectionError("pick_weighted: total weight must be positive")

        threshold = self.next() * total
        for item, weight in entries:
            threshold -= weight
            if threshold < 0:
                return item
        # Float drift: fall back to the last item that can be picked
        return next(item for item, weight in reversed(entries) if weight > 0)

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Return a shuffled copy (Fisher-Yates); the input is untouched."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.next_int(0, i)
            result[i], result[j] = result[j], result[i]
        return result

    # =========================================================================
    # Streams
    # =========================================================================

    def derive(self, tag: str) -> "RNG":
        """
        Create an independent child stream for a named purpose.

        The child seed depends only on this RNG's seed and the tag, never on
        how many draws have been made, and uses crc32 rather than hash() so it
        is stable across processes.
        """
        crc = zlib.crc32(f"{self.seed}:{tag}".encode("utf-8")) & 0xFFFFFFFF
        return RNG(crc)


def generate_id(prefix: str, rng: RNG) -> str:
    """Build a ``prefix_xxxxxxxxxxxx`` id from 12 random lowercase alphanumerics."""
    suffix = "".join(
        _ID_CHARS[rng.next_int(0, len(_ID_CHARS) - 1)] for _ in range(12)
    )
    return f"{prefix}_{suffix}"


__all__ = ["RNG", "Seed", "generate_id"]
