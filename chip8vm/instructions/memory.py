"""CHIP-8 memory and register operations."""

from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction


def execute_set(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """6XNN - Set VX = NN."""
    return state.set_register(instruction.x, instruction.nn)


def execute_add(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """7XNN - Add NN to VX. No carry flag."""
    return state.set_register(instruction.x, int(state.V[instruction.x]) + instruction.nn)


def execute_set_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.set_index(instruction.nnn)


def execute_random(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """CXNN - Set VX = random & NN."""
    random_value = state.random_source.next_byte()
    return state.set_register(instruction.x, random_value & instruction.nn)
