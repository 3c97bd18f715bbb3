"""CHIP-8 memory access.

Single-byte accesses wrap into the 12-bit address space. Block accesses are
bounds-checked up front and raise :class:`OutOfBoundsAccess` before touching
memory, so a failing instruction never leaves a partial write behind.
"""

from typing import Sequence

import jax.numpy as jnp

from chip8vm.constants import ADDRESS_MASK, MEMORY_SIZE
from chip8vm.errors import OutOfBoundsAccess


def read_byte(memory: jnp.ndarray, address: int) -> int:
    """Read one byte, masking the address to 12 bits."""
    return int(memory[address & ADDRESS_MASK])


def write_byte(memory: jnp.ndarray, address: int, value: int) -> jnp.ndarray:
    """Write one byte, masking the address to 12 bits."""
    return memory.at[address & ADDRESS_MASK].set(value & 0xFF)


def check_block(address: int, length: int) -> None:
    """Raise if ``length`` bytes starting at ``address`` do not fit in memory."""
    if address < 0 or length < 0 or address + length > MEMORY_SIZE:
        raise OutOfBoundsAccess(address, length)


def read_block(memory: jnp.ndarray, address: int, length: int) -> jnp.ndarray:
    """Read ``length`` consecutive bytes."""
    check_block(address, length)
    return memory[address:address + length]


def write_block(memory: jnp.ndarray, address: int, data: Sequence[int] | jnp.ndarray) -> jnp.ndarray:
    """Write a block of bytes starting at ``address``."""
    if isinstance(data, jnp.ndarray):
        values = data.astype(jnp.uint8)
    else:
        values = jnp.array(list(data), dtype=jnp.uint8)
    check_block(address, len(values))
    if len(values) == 0:
        return memory
    return memory.at[address:address + len(values)].set(values)


load_block = write_block


def read_word(memory: jnp.ndarray, address: int) -> int:
    """Read a big-endian 16-bit word."""
    high, low = read_block(memory, address, 2)
    return (int(high) << 8) | int(low)


def write_word(memory: jnp.ndarray, address: int, word: int) -> jnp.ndarray:
    """Write a big-endian 16-bit word."""
    return write_block(memory, address, [(word >> 8) & 0xFF, word & 0xFF])
