"""CHIP-8 display operations."""

from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.framebuffer import draw_sprite
from chip8vm.ram import read_block


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N."""
    sprite_x = int(state.V[instruction.x])
    sprite_y = int(state.V[instruction.y])
    sprite_bytes = read_block(state.memory, int(state.I), instruction.n)

    display, collision = draw_sprite(state.display, sprite_x, sprite_y, sprite_bytes)
    return state.replace(display=display).set_flag(int(collision))
