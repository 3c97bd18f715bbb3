"""Random byte sources for the CXNN instruction."""

from typing import Iterable, Protocol

import jax
import jax.numpy as jnp


class RandomSource(Protocol):
    """Anything that can produce a byte on demand."""

    def next_byte(self) -> int:
        ...


class JaxRandomSource:
    """Random bytes drawn from a split ``jax.random`` key."""

    def __init__(self, seed: int = 0):
        self.rng = jax.random.PRNGKey(seed)

    def next_byte(self) -> int:
        self.rng, subkey = jax.random.split(self.rng)
        return int(jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32))


class ScriptedRandomSource:
    """Deterministic source that cycles through a fixed byte sequence."""

    def __init__(self, values: Iterable[int]):
        self.values = [value & 0xFF for value in values]
        if not self.values:
            raise ValueError("ScriptedRandomSource needs at least one value")
        self.position = 0

    def next_byte(self) -> int:
        value = self.values[self.position % len(self.values)]
        self.position += 1
        return value
