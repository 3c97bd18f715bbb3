"""CHIP-8 stack operations."""

import jax.numpy as jnp
from chip8vm.constants import ADDRESS_MASK, STACK_SIZE
from chip8vm.errors import StackOverflow, StackUnderflow
from chip8vm.state import StackState


def push(stack: StackState, address: int) -> StackState:
    """Push address onto stack."""
    pointer = int(stack.pointer)
    if pointer >= STACK_SIZE:
        raise StackOverflow(int(address) & ADDRESS_MASK)
    masked_address = int(address) & ADDRESS_MASK
    new_data = stack.data.at[pointer].set(masked_address)
    return stack.replace(data=new_data, pointer=pointer + 1)


def pop(stack: StackState) -> tuple[StackState, int]:
    """Pop address from stack."""
    pointer = int(stack.pointer)
    if pointer == 0:
        raise StackUnderflow()
    new_pointer = pointer - 1
    popped_address = int(stack.data[new_pointer])
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address


def depth(stack: StackState) -> int:
    """Number of return addresses currently held."""
    return int(stack.pointer)


def peek(stack: StackState) -> int | None:
    """Most recently pushed address, or None when empty."""
    pointer = int(stack.pointer)
    return int(stack.data[pointer - 1]) if pointer else None
