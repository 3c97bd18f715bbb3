"""CHIP-8 ALU operations (8xxx).

Each operation maps ``(vx, vy)`` to ``(result, flag)``. A flag of ``None``
leaves VF untouched. The flag is written after the result, so when X is F
the flag wins.
"""

from typing import Callable, Optional

from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction, Op

AluResult = tuple[int, Optional[int]]


def alu_set(vx: int, vy: int) -> AluResult:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> AluResult:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> AluResult:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> AluResult:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> AluResult:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    return result & 0xFF, int(result > 0xFF)


def alu_sub_xy(vx: int, vy: int) -> AluResult:
    """8XY5 - Subtract: VX -= VY, VF = NOT borrow."""
    return (vx - vy) & 0xFF, int(vx >= vy)


def alu_shift_right(vx: int, vy: int) -> AluResult:
    """8XY6 - Shift right: VX >>= 1."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx: int, vy: int) -> AluResult:
    """8XY7 - Subtract: VX = VY - VX, VF = NOT borrow."""
    return (vy - vx) & 0xFF, int(vy >= vx)


def alu_shift_left(vx: int, vy: int) -> AluResult:
    """8XYE - Shift left: VX <<= 1."""
    return (vx << 1) & 0xFF, (vx & 0x80) >> 7


ALU_OPERATIONS: dict[Op, Callable[[int, int], AluResult]] = {
    Op.LD_REG: alu_set,
    Op.OR: alu_or,
    Op.AND: alu_and,
    Op.XOR: alu_xor,
    Op.ADD_REG: alu_add,
    Op.SUB: alu_sub_xy,
    Op.SHR: alu_shift_right,
    Op.SUBN: alu_sub_yx,
    Op.SHL: alu_shift_left,
}

SHIFT_OPERATIONS = {Op.SHR, Op.SHL}


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    vx = int(state.V[instruction.x])
    vy = int(state.V[instruction.y])

    # COSMAC VIP shifts VY into VX instead of shifting VX in place
    if instruction.op in SHIFT_OPERATIONS and state.quirks.shift_uses_vy:
        vx = vy

    result, vf = ALU_OPERATIONS[instruction.op](vx, vy)

    state = state.set_register(instruction.x, result)
    if vf is not None:
        state = state.set_flag(vf)
    return state
