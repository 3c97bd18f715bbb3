"""Interpreter quirk configuration."""

from typing import Any, Mapping

from chex import dataclass


@dataclass(frozen=True)
class Quirks:
    """Behavioural toggles for instructions that differ between interpreters.

    Attributes:
        shift_uses_vy: When True, 8XY6/8XYE shift VY and store the result in
            VX, as the COSMAC VIP interpreter did. When False (default), VX is
            shifted in place, as on CHIP-48 and SUPER-CHIP.
        load_store_increments_index: When True, FX55/FX65 leave I pointing
            past the last register transferred (I += X + 1), as the COSMAC VIP
            interpreter did. When False (default), I is left unchanged.
    """
    shift_uses_vy: bool = False
    load_store_increments_index: bool = False

    @classmethod
    def modern(cls) -> "Quirks":
        """CHIP-48 / SUPER-CHIP behaviour expected by most ROMs."""
        return cls(shift_uses_vy=False, load_store_increments_index=False)

    @classmethod
    def cosmac(cls) -> "Quirks":
        """Original COSMAC VIP behaviour."""
        return cls(shift_uses_vy=True, load_store_increments_index=True)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "Quirks":
        """Build quirks from a plain mapping, e.g. a host config file section.

        Values may be booleans, 0/1, or the strings true/false, yes/no, on/off
        and 1/0 in any case. Anything else raises ``ValueError``.
        """
        known = {"shift_uses_vy", "load_store_increments_index"}
        unknown = set(mapping) - known
        if unknown:
            raise ValueError(f"Unknown quirk option(s): {', '.join(sorted(unknown))}")
        return cls(**{key: _parse_flag(key, value) for key, value in mapping.items()})


_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}


def _parse_flag(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError(f"Quirk option {key!r} expects a boolean, got {value!r}")
