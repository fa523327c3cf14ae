"""
Field validation shared by the domain services.

Each check raises ValidationError naming the offending field; services run
them before touching the store.
"""

from typing import Optional

from modbus_simulator.utils.exceptions import ValidationError

PORT_MIN = 1
PORT_MAX = 65535
SLAVE_ADDRESS_MIN = 1
SLAVE_ADDRESS_MAX = 247


def require_id(value: Optional[str], field: str, label: str) -> None:
    if value is None or not value.strip():
        raise ValidationError(f"{label} ID must not be empty", field=field)


def validate_name(name: Optional[str], max_length: int, label: str) -> str:
    """
    Check a connection or slave name.

    Returns:
        The name with surrounding whitespace removed
    """
    if name is None or not name.strip():
        raise ValidationError(f"{label} name must not be empty", field="name")
    if len(name) > max_length:
        raise ValidationError(f"{label} name must not exceed {max_length} characters", field="name")
    return name.strip()


def validate_port(port: int) -> None:
    if port < PORT_MIN or port > PORT_MAX:
        raise ValidationError(f"Port must be between {PORT_MIN} and {PORT_MAX}", field="port")


def validate_slave_address(slave_address: int) -> None:
    if slave_address < SLAVE_ADDRESS_MIN or slave_address > SLAVE_ADDRESS_MAX:
        raise ValidationError(
            f"Slave address must be between {SLAVE_ADDRESS_MIN} and {SLAVE_ADDRESS_MAX}",
            field="slave_address",
        )
