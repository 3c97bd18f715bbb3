"""Main CHIP-8 emulator execution engine."""

import enum
from typing import Callable

from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction, Op, decode
from chip8vm.constants import PROGRAM_START
from chip8vm.keypad import newly_pressed
from chip8vm.ram import read_word, write_block
from chip8vm.instructions.system import (
    no_op, execute_clear_screen, execute_return, execute_unknown
)
from chip8vm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key_pressed, execute_skip_if_key_not_pressed
)
from chip8vm.instructions.alu import execute_alu_operation
from chip8vm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)

Handler = Callable[[EmulatorState, DecodedInstruction], EmulatorState]


class MachineStatus(enum.Enum):
    """Outcome of a successful step."""
    READY = "ready"
    AWAITING_KEY = "awaiting_key"


HANDLERS: dict[Op, Handler] = {
    Op.CLS: execute_clear_screen,
    Op.RET: execute_return,
    Op.SYS: no_op,
    Op.JP: execute_jump,
    Op.CALL: execute_call,
    Op.SE_IMM: execute_skip_if_equal_immediate,
    Op.SNE_IMM: execute_skip_if_not_equal_immediate,
    Op.SE_REG: execute_skip_if_equal_register,
    Op.LD_IMM: execute_set,
    Op.ADD_IMM: execute_add,
    Op.LD_REG: execute_alu_operation,
    Op.OR: execute_alu_operation,
    Op.AND: execute_alu_operation,
    Op.XOR: execute_alu_operation,
    Op.ADD_REG: execute_alu_operation,
    Op.SUB: execute_alu_operation,
    Op.SHR: execute_alu_operation,
    Op.SUBN: execute_alu_operation,
    Op.SHL: execute_alu_operation,
    Op.SNE_REG: execute_skip_if_not_equal_register,
    Op.LD_I: execute_set_index,
    Op.JP_V0: execute_jump_with_offset,
    Op.RND: execute_random,
    Op.DRW: execute_display,
    Op.SKP: execute_skip_if_key_pressed,
    Op.SKNP: execute_skip_if_key_not_pressed,
    Op.LD_VX_DT: execute_get_delay_timer,
    Op.LD_VX_K: execute_wait_for_key,
    Op.LD_DT_VX: execute_set_delay_timer,
    Op.LD_ST_VX: execute_set_sound_timer,
    Op.ADD_I: execute_add_to_index,
    Op.LD_F: execute_font_character,
    Op.LD_B: execute_bcd_conversion,
    Op.LD_MEM_VX: execute_store_registers,
    Op.LD_VX_MEM: execute_load_registers,
    Op.UNKNOWN: execute_unknown,
}


def execute(state: EmulatorState, instruction: int | DecodedInstruction) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Assumes the program counter has already been advanced past it.
    """
    if not isinstance(instruction, DecodedInstruction):
        instruction = decode(instruction)
    return HANDLERS[instruction.op](state, instruction)


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory."""
    instruction = read_word(state.memory, int(state.pc))
    return state.set_pc(int(state.pc) + 2), instruction


def resolve_key_wait(state: EmulatorState) -> EmulatorState:
    """Complete a pending FX0A if a key has gone down since it started.

    Keys released during the wait drop out of the snapshot, so releasing and
    pressing a key that was held when the wait began also resolves it.
    """
    key = newly_pressed(state.key_wait_snapshot, state.keypad)
    if key is None:
        return state.replace(key_wait_snapshot=state.key_wait_snapshot & state.keypad)
    return state.set_register(state.key_wait_register, key).replace(
        key_wait_register=-1,
    ).set_pc(int(state.pc) + 2)


def status(state: EmulatorState) -> MachineStatus:
    return MachineStatus.AWAITING_KEY if state.awaiting_key else MachineStatus.READY


def step(state: EmulatorState) -> tuple[EmulatorState, MachineStatus]:
    """Run one cycle: resolve a pending key wait, or fetch, decode and execute.

    Raises a :class:`chip8vm.errors.Chip8Error` on failure; the input state
    is never modified, so the caller keeps the pre-step state.
    """
    if state.awaiting_key:
        state = resolve_key_wait(state)
        return state, status(state)

    state, instruction = fetch(state)
    state = execute(state, instruction)
    state = state.replace(cycles=state.cycles + 1)
    return state, status(state)


def load_rom(state: EmulatorState, rom_data: bytes) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    return state.replace(memory=write_block(state.memory, PROGRAM_START, rom_data))
