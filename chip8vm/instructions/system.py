"""CHIP-8 system instructions (0x0xxx)."""

from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.constants import ADDRESS_MASK
from chip8vm.errors import UnknownInstruction
from chip8vm.framebuffer import clear
from chip8vm.stack import pop


def no_op(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """0NNN - Machine code routine; ignored by interpreters."""
    return state


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=clear(state.display))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack).set_pc(address)


def execute_unknown(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Opcode outside the instruction set."""
    raise UnknownInstruction(instruction.raw, (int(state.pc) - 2) & ADDRESS_MASK)
