"""Console logging for chip8vm machines.

Level-filtered console output with optional ANSI colours and elapsed-time
stamps. :class:`Machine` reports through the typed helpers below: executed
instructions at DEBUG, lifecycle events at INFO, key waits at WARNING and
faults at ERROR.
"""

import sys
import time

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"


class ConsoleLogger:
    """Console logger for machine events."""

    def __init__(
        self,
        name: str = "chip8vm",
        log_level: str = "WARNING",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        if log_level.upper() not in LEVELS:
            raise ValueError(f"Unknown log level {log_level!r}; expected one of {', '.join(LEVELS)}")
        self.name = name
        self.log_level = log_level.upper()
        self.use_colors = use_colors and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def is_enabled_for(self, level: str) -> bool:
        return LEVELS.index(level.upper()) >= LEVELS.index(self.log_level)

    def log(self, level: str, message: str):
        if not self.is_enabled_for(level):
            return
        timestamp = f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        level_str = f"[{level:>8s}]"
        if self.use_colors:
            level_str = f"{_COLORS[level]}{level_str}{_RESET}"
        print(f"{timestamp}{level_str}[{self.name}] {message}", flush=True)

    def info(self, message: str):
        self.log("INFO", message)

    # Machine events

    def instruction(self, pc: int, raw: int, op_name: str):
        """Trace one executed instruction."""
        self.log("DEBUG", f"PC=0x{pc:03X} {raw:04X} {op_name}")

    def key_wait(self, pc: int, register: int):
        self.log("WARNING", f"PC=0x{pc:03X} waiting for key into V{register:X}")

    def fault(self, pc: int, error: Exception):
        self.log("ERROR", f"Fault at PC=0x{pc:03X} ({type(error).__name__}): {error}")
