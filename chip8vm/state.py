"""CHIP-8 emulator state structures."""

import jax.numpy as jnp
from flax.struct import PyTreeNode, field

from chip8vm.config import Quirks
from chip8vm.constants import (
    ADDRESS_MASK, PROGRAM_START, FONT_START, FONT_DATA, MEMORY_SIZE, NUM_KEYS,
    NUM_REGISTERS, SCREEN_WIDTH, SCREEN_HEIGHT, STACK_SIZE,
)
from chip8vm.random_source import JaxRandomSource, RandomSource


class StackState(PyTreeNode):
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    ``key_wait_register`` is the target of a pending FX0A, or -1 when the
    machine is ready. ``key_wait_snapshot`` holds the keypad as it was when
    the wait began, so only a fresh press resolves it.
    """
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.array(PROGRAM_START, dtype=jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_))
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    key_wait_register: int = -1
    key_wait_snapshot: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    cycles: int = 0
    quirks: Quirks = field(pytree_node=False, default_factory=Quirks)
    random_source: RandomSource = field(pytree_node=False, default=None)

    @property
    def awaiting_key(self) -> bool:
        return self.key_wait_register >= 0

    def set_pc(self, address: int) -> "EmulatorState":
        """Return a state with pc set to ``address`` wrapped into the 12-bit space."""
        return self.replace(pc=jnp.array(int(address) & ADDRESS_MASK, dtype=jnp.uint16))

    def set_index(self, address: int) -> "EmulatorState":
        return self.replace(I=jnp.array(int(address) & 0xFFFF, dtype=jnp.uint16))

    def set_register(self, x: int, value: int) -> "EmulatorState":
        """Return a state with VX set to ``value`` (wrapped to 8 bits)."""
        return self.replace(V=self.V.at[x].set(value & 0xFF))

    def set_flag(self, value: int) -> "EmulatorState":
        """Return a state with VF set to ``value``."""
        return self.set_register(0xF, value)


def create_state(
    quirks: Quirks | None = None,
    random_source: RandomSource | None = None,
) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    state = EmulatorState(
        quirks=quirks if quirks is not None else Quirks(),
        random_source=random_source if random_source is not None else JaxRandomSource(),
    )
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA))
