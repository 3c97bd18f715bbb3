"""CHIP-8 delay and sound timers.

Both counters are 8-bit and count down towards zero. Only :func:`tick`
decrements them, and it is driven by the host's clock (conventionally
60 Hz), never by instruction execution.
"""

import jax.numpy as jnp
from chip8vm.state import EmulatorState


def get_delay(state: EmulatorState) -> int:
    return int(state.delay_timer)


def get_sound(state: EmulatorState) -> int:
    return int(state.sound_timer)


def set_delay(state: EmulatorState, value: int) -> EmulatorState:
    return state.replace(delay_timer=jnp.array(value & 0xFF, dtype=jnp.uint8))


def set_sound(state: EmulatorState, value: int) -> EmulatorState:
    return state.replace(sound_timer=jnp.array(value & 0xFF, dtype=jnp.uint8))


def tick(state: EmulatorState) -> EmulatorState:
    """Decrement both timers by one, clamping at zero."""
    return set_sound(
        set_delay(state, max(get_delay(state) - 1, 0)),
        max(get_sound(state) - 1, 0),
    )


def sound_active(state: EmulatorState) -> bool:
    """Whether the host should currently be producing a tone."""
    return get_sound(state) > 0
