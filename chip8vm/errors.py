"""CHIP-8 execution errors.

Every failure raised out of the core derives from :class:`Chip8Error`, so a
host can catch the whole family in one place and decide whether to halt,
log or skip the faulting instruction.
"""


class Chip8Error(Exception):
    """Base class for all machine faults."""


class StackOverflow(Chip8Error):
    """CALL attempted with the return stack already full."""

    def __init__(self, address: int):
        self.address = address
        super().__init__(f"Stack overflow calling 0x{address:03X}")


class StackUnderflow(Chip8Error):
    """RET attempted with an empty return stack."""

    def __init__(self):
        super().__init__("Stack underflow: return with empty stack")


class UnknownInstruction(Chip8Error):
    """Opcode that matches no instruction pattern."""

    def __init__(self, opcode: int, address: int | None = None):
        self.opcode = opcode
        self.address = address
        where = f" at 0x{address:03X}" if address is not None else ""
        super().__init__(f"Unknown instruction 0x{opcode:04X}{where}")


class OutOfBoundsAccess(Chip8Error):
    """Memory access that would fall outside the 4096-byte address space."""

    def __init__(self, address: int, length: int = 1):
        self.address = address
        self.length = length
        super().__init__(
            f"Access of {length} byte(s) at 0x{address:03X} exceeds memory"
        )
