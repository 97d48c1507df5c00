"""Seeded random number generator for deterministic combat resolution.

Wraps Python's random.Random to provide reproducible randomness.  Every
component that rolls dice or draws probabilities takes a ``GameRNG`` as an
argument; nothing in the engine touches module-global random state.  Each
sub-system (enemy AI, player agent, content generation, ...) should use a
*forked* RNG so that consuming random values in one system does not
perturb another.
"""

from __future__ import annotations

import hashlib
import random
from typing import Sequence, TypeVar

T = TypeVar("T")


class GameRNG:
    """Deterministic RNG that can be forked into independent sub-streams.

    Parameters
    ----------
    seed:
        Integer seed for the underlying Mersenne Twister.
    """

    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    # -- public properties ---------------------------------------------------

    @property
    def seed(self) -> int:
        """Return the seed this RNG was initialised with."""
        return self._seed

    # -- dice ----------------------------------------------------------------

    def roll(self, sides: int) -> int:
        """Roll one die with *sides* faces: uniform in ``[1, sides]``."""
        if sides < 1:
            raise ValueError(f"a die needs at least one side, got {sides}")
        return self._rng.randint(1, sides)

    # -- core random methods -------------------------------------------------

    def random_int(self, low: int, high: int) -> int:
        """Return a random integer *N* such that ``low <= N <= high``."""
        return self._rng.randint(low, high)

    def random_float(self) -> float:
        """Return a random float in the half-open interval ``[0.0, 1.0)``."""
        return self._rng.random()

    def chance(self, probability: float) -> bool:
        """Bernoulli draw: True with the given *probability*."""
        return self.random_float() < probability

    def random_choice(self, seq: Sequence[T]) -> T:
        """Return a random element from a non-empty sequence."""
        return self._rng.choice(seq)

    # -- forking -------------------------------------------------------------

    def fork(self, name: str) -> GameRNG:
        """Create a child RNG whose seed is derived from this RNG's seed and
        *name*.

        The derivation is deterministic: forking with the same *name*
        from an RNG in the same state always produces the same child
        seed.  This lets sub-systems (e.g. ``"dice"``, ``"enemy_ai"``,
        ``"agent"``) each have their own independent random stream.
        """
        digest = hashlib.sha256(f"{self._seed}:{name}".encode()).digest()
        child_seed = int.from_bytes(digest[:8], "big")
        return GameRNG(child_seed)

    # -- dunder helpers ------------------------------------------------------

    def __repr__(self) -> str:
        return f"GameRNG(seed={self._seed})"
