"""Enumerated types shared by ORM and API models."""

from enum import IntEnum


class ProtocolType(IntEnum):
    """Framing used by a simulated connection. Informational for the store."""
    RTU_OVER_TCP = 0
    TCP = 1

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DISPLAY_NAMES = {
    ProtocolType.RTU_OVER_TCP: "Modbus RTU over TCP",
    ProtocolType.TCP: "Modbus TCP",
}

_DESCRIPTIONS = {
    ProtocolType.RTU_OVER_TCP: "Modbus RTU frames carried over a TCP connection, CRC retained",
    ProtocolType.TCP: "Standard Modbus TCP, frames wrapped in an MBAP header",
}
