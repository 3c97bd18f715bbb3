"""CHIP-8 hexadecimal keypad state."""

import jax.numpy as jnp
from chip8vm.constants import NUM_KEYS


def _check_code(code: int) -> None:
    if not 0 <= code < NUM_KEYS:
        raise ValueError(f"Invalid key code: {code!r} (expected 0x0-0xF)")


def set_key(keypad: jnp.ndarray, code: int, pressed: bool) -> jnp.ndarray:
    """Return a keypad with key ``code`` set to ``pressed``."""
    _check_code(code)
    return keypad.at[code].set(bool(pressed))


def is_pressed(keypad: jnp.ndarray, code: int) -> bool:
    _check_code(code)
    return bool(keypad[code])


def newly_pressed(snapshot: jnp.ndarray, keypad: jnp.ndarray) -> int | None:
    """Lowest key that is down now but was up in ``snapshot``, if any."""
    fresh = keypad & ~snapshot
    if not bool(jnp.any(fresh)):
        return None
    return int(jnp.argmax(fresh))
