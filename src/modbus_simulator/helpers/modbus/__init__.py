"""Modbus address-space helpers."""

from modbus_simulator.helpers.modbus.address_space import (
    REGISTER_CLASSES,
    RegisterClass,
    is_valid_hex,
    register_class_for,
    validate_address_and_payload,
)

__all__ = [
    "REGISTER_CLASSES",
    "RegisterClass",
    "is_valid_hex",
    "register_class_for",
    "validate_address_and_payload",
]
