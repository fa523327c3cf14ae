"""Unit tests for service-level field validation."""

import pytest

from modbus_simulator.helpers.registers import validate_register_fields
from modbus_simulator.helpers.validation import (
    require_id,
    validate_name,
    validate_port,
    validate_slave_address,
)
from modbus_simulator.utils.exceptions import AddressRangeError, PayloadLengthError, ValidationError


class TestIds:

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_id(self, value):
        with pytest.raises(ValidationError) as exc_info:
            require_id(value, "slave_id", "Slave")
        assert exc_info.value.field == "slave_id"
        assert exc_info.value.message == "Slave ID must not be empty"

    def test_present_id(self):
        require_id("abc", "slave_id", "Slave")


class TestNames:

    def test_name_is_trimmed(self):
        assert validate_name("  Main  ", 100, "Connection") == "Main"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_name(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_name(value, 100, "Connection")
        assert exc_info.value.field == "name"

    def test_name_at_limit(self):
        assert validate_name("x" * 100, 100, "Slave") == "x" * 100

    def test_name_over_limit(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_name("x" * 101, 100, "Slave")
        assert "100" in exc_info.value.message


class TestRanges:

    @pytest.mark.parametrize("port", [1, 502, 65535])
    def test_valid_port(self, port):
        validate_port(port)

    @pytest.mark.parametrize("port", [0, -1, 65536])
    def test_invalid_port(self, port):
        with pytest.raises(ValidationError) as exc_info:
            validate_port(port)
        assert exc_info.value.field == "port"

    @pytest.mark.parametrize("address", [1, 247])
    def test_valid_slave_address(self, address):
        validate_slave_address(address)

    @pytest.mark.parametrize("address", [0, 248, -5])
    def test_invalid_slave_address(self, address):
        with pytest.raises(ValidationError) as exc_info:
            validate_slave_address(address)
        assert exc_info.value.field == "slave_address"


class TestRegisterFields:
    """First failing check decides the error."""

    def test_payload_is_upper_cased(self):
        assert validate_register_fields(40001, "abcd") == "ABCD"

    def test_negative_address_before_payload_checks(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_register_fields(-1, "")
        assert exc_info.value.field == "start_address"

    @pytest.mark.parametrize("payload", ["", "   "])
    def test_blank_payload(self, payload):
        with pytest.raises(ValidationError) as exc_info:
            validate_register_fields(0, payload)
        assert exc_info.value.field == "hex_payload"
        assert "empty" in exc_info.value.message

    def test_non_hex_before_range(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_register_fields(0, "XYZ")
        assert exc_info.value.field == "hex_payload"
        assert not isinstance(exc_info.value, AddressRangeError)

    def test_range_after_hex(self):
        with pytest.raises(AddressRangeError):
            validate_register_fields(0, "ABCD")

    def test_length_last(self):
        with pytest.raises(PayloadLengthError):
            validate_register_fields(1, "ABC")
