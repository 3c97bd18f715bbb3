"""CHIP-8 monochrome display buffer.

The display is a boolean array shaped ``(SCREEN_WIDTH, SCREEN_HEIGHT)`` and
indexed ``[x, y]``. Sprites are XORed in with toroidal wrap on both axes.
"""

from typing import Sequence

import jax.numpy as jnp
import numpy as np

from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH

# Bit masks for the 8 columns of a sprite row, MSB is the leftmost pixel
_COLUMN_BITS = jnp.array([0x80 >> column for column in range(SPRITE_WIDTH)], dtype=jnp.uint8)


def clear(display: jnp.ndarray) -> jnp.ndarray:
    """Unset every pixel."""
    return jnp.zeros_like(display)


def sprite_mask(x: int, y: int, sprite_bytes: Sequence[int] | jnp.ndarray) -> jnp.ndarray:
    """Rasterise sprite rows into a full-screen boolean mask at (x, y)."""
    if not isinstance(sprite_bytes, jnp.ndarray):
        sprite_bytes = list(sprite_bytes)
    rows = jnp.asarray(sprite_bytes, dtype=jnp.uint8).reshape(-1)
    mask = jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_)
    if rows.shape[0] == 0:
        return mask

    bits = (rows[:, None] & _COLUMN_BITS[None, :]) != 0
    xs = (x + jnp.arange(SPRITE_WIDTH)) % SCREEN_WIDTH
    ys = (y + jnp.arange(rows.shape[0])) % SCREEN_HEIGHT
    return mask.at[xs[None, :], ys[:, None]].set(bits)


def draw_sprite(
    display: jnp.ndarray, x: int, y: int, sprite_bytes: Sequence[int] | jnp.ndarray
) -> tuple[jnp.ndarray, bool]:
    """XOR a sprite into the display.

    Returns the new display and whether any lit pixel was turned off.
    """
    sprite = sprite_mask(x % SCREEN_WIDTH, y % SCREEN_HEIGHT, sprite_bytes)
    collision = bool(jnp.any(display & sprite))
    return display ^ sprite, collision


def get_pixel(display: jnp.ndarray, x: int, y: int) -> bool:
    return bool(display[x % SCREEN_WIDTH, y % SCREEN_HEIGHT])


def to_rows(display: jnp.ndarray) -> np.ndarray:
    """Host-facing copy of the display as a ``(height, width)`` array."""
    return np.array(display, dtype=np.bool_).T
