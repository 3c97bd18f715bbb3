"""Host-facing CHIP-8 machine.

:class:`Machine` owns exactly one :class:`EmulatorState` and swaps it for the
successor state after every successful operation. Instruction handlers never
mutate state in place, so an operation that raises leaves the machine exactly
as it was. Each machine owns its state exclusively; separate instances can be
driven from separate threads without locking.

Typical host loop::

    machine = Machine()
    machine.load_rom(rom_bytes)
    while running:
        machine.set_key(0x5, key_down)
        for _ in range(cycles_per_frame):
            machine.step()
        machine.tick()
        render(machine.framebuffer())
"""

from typing import Optional

import numpy as np
from tqdm import tqdm

from chip8vm import emulator, framebuffer, keypad, ram, stack, timers
from chip8vm.config import Quirks
from chip8vm.constants import MEMORY_SIZE
from chip8vm.decode import decode
from chip8vm.emulator import MachineStatus
from chip8vm.errors import Chip8Error, OutOfBoundsAccess
from chip8vm.logging import ConsoleLogger
from chip8vm.random_source import RandomSource
from chip8vm.state import EmulatorState, create_state


class Machine:
    """A single CHIP-8 machine instance."""

    def __init__(
        self,
        quirks: Optional[Quirks] = None,
        random_source: Optional[RandomSource] = None,
        logger: Optional[ConsoleLogger] = None,
    ):
        self.logger = logger or ConsoleLogger()
        self.state: EmulatorState = create_state(quirks, random_source)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    @property
    def status(self) -> MachineStatus:
        return emulator.status(self.state)

    @property
    def cycles(self) -> int:
        return self.state.cycles

    def step(self) -> MachineStatus:
        """Execute one instruction, or re-check a pending key wait.

        Raises:
            Chip8Error: StackOverflow, StackUnderflow, UnknownInstruction or
                OutOfBoundsAccess. The machine state is left as before the call.
        """
        was_waiting = self.state.awaiting_key
        try:
            new_state, status = emulator.step(self.state)
        except Chip8Error as e:
            self.logger.fault(int(self.state.pc), e)
            raise

        if self.logger.is_enabled_for("DEBUG") and not was_waiting:
            raw = ram.read_word(self.state.memory, int(self.state.pc))
            self.logger.instruction(int(self.state.pc), raw, decode(raw).op.name)

        self.state = new_state
        if status is MachineStatus.AWAITING_KEY and not was_waiting:
            self.logger.key_wait(int(self.state.pc), self.state.key_wait_register)
        return status

    def run(self, cycles: int, show_progress: bool = False) -> MachineStatus:
        """Step up to ``cycles`` times, returning early while awaiting a key."""
        status = self.status
        for _ in tqdm(range(cycles), desc="Emulating", unit="cycle", disable=not show_progress):
            status = self.step()
            if status is MachineStatus.AWAITING_KEY:
                break
        return status

    def skip_instruction(self) -> None:
        """Advance past the current instruction without executing it.

        A pending key wait is abandoned, so its FX0A is skipped too.
        """
        self.state = self.state.replace(key_wait_register=-1).set_pc(int(self.state.pc) + 2)

    def tick(self) -> None:
        """Decrement the delay and sound timers; call at the host's timer rate."""
        self.state = timers.tick(self.state)

    # ------------------------------------------------------------------
    # Program loading and resets
    # ------------------------------------------------------------------

    def load_rom(self, rom_data: bytes) -> None:
        """Write program bytes at the program origin (0x200)."""
        self.state = emulator.load_rom(self.state, rom_data)
        self.logger.info(f"Loaded ROM ({len(rom_data)} bytes)")

    def soft_reset(self) -> None:
        """Clear registers, timers, stack and key wait; keep memory and display."""
        fresh = create_state(self.state.quirks, self.state.random_source)
        self.state = self.state.replace(
            pc=fresh.pc,
            V=fresh.V,
            I=fresh.I,
            stack=fresh.stack,
            delay_timer=fresh.delay_timer,
            sound_timer=fresh.sound_timer,
            key_wait_register=-1,
            cycles=0,
        )
        self.logger.info("Soft reset")

    def hard_reset(self) -> None:
        """Return to power-on state. Memory is wiped; reload the ROM afterwards."""
        self.state = create_state(self.state.quirks, self.state.random_source)
        self.logger.info("Hard reset")

    # ------------------------------------------------------------------
    # Registers and memory
    # ------------------------------------------------------------------

    @property
    def program_counter(self) -> int:
        return int(self.state.pc)

    def set_program_counter(self, address: int) -> None:
        if not 0 <= address < MEMORY_SIZE:
            raise OutOfBoundsAccess(address)
        self.state = self.state.set_pc(address)

    @property
    def index(self) -> int:
        return int(self.state.I)

    def set_index(self, address: int) -> None:
        self.state = self.state.set_index(address)

    def get_register(self, x: int) -> int:
        return int(self.state.V[x & 0xF])

    def set_register(self, x: int, value: int) -> None:
        self.state = self.state.set_register(x & 0xF, value)

    @property
    def stack_depth(self) -> int:
        return stack.depth(self.state.stack)

    def read_memory(self, address: int) -> int:
        return ram.read_byte(self.state.memory, address)

    def write_memory(self, address: int, value: int) -> None:
        self.state = self.state.replace(memory=ram.write_byte(self.state.memory, address, value))

    def write_word(self, address: int, word: int) -> None:
        self.state = self.state.replace(memory=ram.write_word(self.state.memory, address, word))

    def load_block(self, address: int, data: bytes) -> None:
        self.state = self.state.replace(memory=ram.load_block(self.state.memory, address, data))

    # ------------------------------------------------------------------
    # Peripherals
    # ------------------------------------------------------------------

    @property
    def delay_timer(self) -> int:
        return timers.get_delay(self.state)

    @property
    def sound_timer(self) -> int:
        return timers.get_sound(self.state)

    @property
    def sound_active(self) -> bool:
        return timers.sound_active(self.state)

    def set_key(self, code: int, pressed: bool) -> None:
        self.state = self.state.replace(keypad=keypad.set_key(self.state.keypad, code, pressed))

    def is_pressed(self, code: int) -> bool:
        return keypad.is_pressed(self.state.keypad, code)

    def get_pixel(self, x: int, y: int) -> bool:
        return framebuffer.get_pixel(self.state.display, x, y)

    def framebuffer(self) -> np.ndarray:
        """Display as a ``(32, 64)`` boolean array, row-major for renderers."""
        return framebuffer.to_rows(self.state.display)
