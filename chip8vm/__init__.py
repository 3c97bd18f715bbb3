"""CHIP-8 virtual machine core package."""

from chip8vm.state import EmulatorState, StackState, create_state
from chip8vm.emulator import MachineStatus, execute, fetch, load_rom, step
from chip8vm.decode import DecodedInstruction, Op, decode
from chip8vm.config import Quirks
from chip8vm.errors import (
    Chip8Error, StackOverflow, StackUnderflow, UnknownInstruction, OutOfBoundsAccess
)
from chip8vm.random_source import RandomSource, JaxRandomSource, ScriptedRandomSource
from chip8vm.logging import ConsoleLogger
from chip8vm.machine import Machine
from chip8vm.constants import *

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "MachineStatus",
    "fetch",
    "execute",
    "step",
    "load_rom",
    "DecodedInstruction",
    "Op",
    "decode",
    "Quirks",
    "Chip8Error",
    "StackOverflow",
    "StackUnderflow",
    "UnknownInstruction",
    "OutOfBoundsAccess",
    "RandomSource",
    "JaxRandomSource",
    "ScriptedRandomSource",
    "ConsoleLogger",
    "Machine",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
