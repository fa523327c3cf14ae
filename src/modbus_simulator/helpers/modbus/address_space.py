"""
Modbus address-space partitioning and payload rules.

A register's start address selects one of four Modbus data classes. The class
fixes how many hex characters one unit of payload occupies: coils and discrete
inputs pack 8 points per byte (2 hex chars), input and holding registers hold
one 16-bit word each (4 hex chars).
"""

import string
from typing import NamedTuple, Optional

from modbus_simulator.utils.exceptions import AddressRangeError, PayloadLengthError

HEX_DIGITS = frozenset(string.hexdigits)


class RegisterClass(NamedTuple):
    """One contiguous Modbus address range and its payload granularity."""
    min_address: int
    max_address: int
    name: str
    hex_multiple: int

    def contains(self, address: int) -> bool:
        return self.min_address <= address <= self.max_address


REGISTER_CLASSES: tuple[RegisterClass, ...] = (
    RegisterClass(1, 9999, "Coil", 2),
    RegisterClass(10001, 19999, "Discrete Input", 2),
    RegisterClass(30001, 39999, "Input Register", 4),
    RegisterClass(40001, 49999, "Holding Register", 4),
)

VALID_RANGES_DESCRIPTION = ", ".join(
    f"{rc.min_address}-{rc.max_address} {rc.name}" for rc in REGISTER_CLASSES
)


def register_class_for(address: int) -> Optional[RegisterClass]:
    """Return the register class whose range holds ``address``, or None."""
    for register_class in REGISTER_CLASSES:
        if register_class.contains(address):
            return register_class
    return None


def is_valid_hex(value: str) -> bool:
    """True if ``value`` is non-empty and made only of 0-9, A-F, a-f."""
    if not value:
        return False
    return all(char in HEX_DIGITS for char in value)


def validate_address_and_payload(start_address: int, hex_payload: str) -> RegisterClass:
    """
    Check that ``hex_payload`` is a legal payload for the class at ``start_address``.

    Args:
        start_address: Register start address
        hex_payload: Hex payload, already known to be valid hex

    Returns:
        The register class the address belongs to

    Raises:
        AddressRangeError: If the address is outside all four classes
        PayloadLengthError: If the payload length is not a multiple of the class unit
    """
    register_class = register_class_for(start_address)
    if register_class is None:
        raise AddressRangeError(
            f"Start address {start_address} is not in a valid range ({VALID_RANGES_DESCRIPTION})",
            field="start_address",
        )

    if len(hex_payload) % register_class.hex_multiple != 0:
        raise PayloadLengthError(
            f"{register_class.name} payload length must be a multiple of "
            f"{register_class.hex_multiple} hex characters (got {len(hex_payload)})",
            field="hex_payload",
        )

    return register_class
