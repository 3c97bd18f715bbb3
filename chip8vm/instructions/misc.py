"""CHIP-8 miscellaneous instructions (Fxxx)."""

from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.constants import FONT_START, FONT_CHAR_SIZE
from chip8vm.ram import read_block, write_block
from chip8vm.timers import get_delay, set_delay, set_sound


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.set_register(instruction.x, get_delay(state))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return set_delay(state, int(state.V[instruction.x]))


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return set_sound(state, int(state.V[instruction.x]))


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register. VF is not affected."""
    return state.set_index(int(state.I) + int(state.V[instruction.x]))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    Does not block: the program counter is held on this instruction and the
    machine records which register receives the key. The executor resolves
    the wait on a later step once a key goes down.
    """
    return state.replace(
        key_wait_register=instruction.x,
        key_wait_snapshot=state.keypad,
    ).set_pc(int(state.pc) - 2)


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = int(state.V[instruction.x]) & 0xF
    return state.set_index(FONT_START + digit * FONT_CHAR_SIZE)


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    digits = [value // 100, (value // 10) % 10, value % 10]
    return state.replace(memory=write_block(state.memory, int(state.I), digits))


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = instruction.x + 1
    state = state.replace(memory=write_block(state.memory, int(state.I), state.V[:count]))

    if state.quirks.load_store_increments_index:
        state = state.set_index(int(state.I) + count)
    return state


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.x + 1
    values = read_block(state.memory, int(state.I), count)
    state = state.replace(V=state.V.at[:count].set(values))

    if state.quirks.load_store_increments_index:
        state = state.set_index(int(state.I) + count)
    return state
