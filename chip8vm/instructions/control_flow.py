"""CHIP-8 control flow instructions."""

from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.constants import ADDRESS_MASK
from chip8vm.keypad import is_pressed
from chip8vm.stack import push


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.set_pc(instruction.nnn)


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        if condition_fn(state, instruction):
            return state.set_pc(int(state.pc) + 2)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == int(state.V[inst.y])
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != int(state.V[inst.y])
)

execute_skip_if_key_pressed = make_skip_instruction(
    lambda state, inst: is_pressed(state.keypad, int(state.V[inst.x]) & 0xF)
)

execute_skip_if_key_not_pressed = make_skip_instruction(
    lambda state, inst: not is_pressed(state.keypad, int(state.V[inst.x]) & 0xF)
)


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - Jump to address NNN + V0."""
    jump_address = (instruction.nnn + int(state.V[0])) & ADDRESS_MASK
    return state.set_pc(jump_address)
