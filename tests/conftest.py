"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
from chip8vm import create_state, Machine, Quirks, ScriptedRandomSource, ConsoleLogger
from chip8vm.ram import write_block


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state(random_source=ScriptedRandomSource([0xA5, 0x3C, 0xFF, 0x00]))


@pytest.fixture
def modern_state():
    """Provide a fresh state with modern quirks."""
    return create_state(quirks=Quirks.modern())


@pytest.fixture
def cosmac_state():
    """Provide a fresh state with COSMAC VIP quirks."""
    return create_state(quirks=Quirks.cosmac())


@pytest.fixture
def machine():
    """Provide a machine with a silent logger and scripted randomness."""
    return Machine(
        random_source=ScriptedRandomSource([0x5A]),
        logger=ConsoleLogger(log_level="CRITICAL", use_colors=False),
    )


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(memory=write_block(state.memory, address, sprite_bytes))


def assemble(*opcodes):
    """Encode opcodes as big-endian program bytes."""
    return b"".join(opcode.to_bytes(2, "big") for opcode in opcodes)
