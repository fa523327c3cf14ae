"""Pydantic models for connections, slaves and registers."""

from pydantic import BaseModel, Field

from modbus_simulator.schemas.db_models.types import ProtocolType


class ConnectionCreate(BaseModel):
    """Request model for creating a connection. A port of 0 means auto-assign."""
    name: str = Field(..., description="Unique connection name")
    port: int = Field(default=0, description="TCP port, 0 to auto-assign")
    protocol_type: ProtocolType = Field(default=ProtocolType.RTU_OVER_TCP, description="Framing protocol")


class ConnectionUpdate(BaseModel):
    """Request model for updating a connection."""
    name: str = Field(..., description="Unique connection name")
    port: int = Field(..., description="TCP port (1-65535)")
    protocol_type: ProtocolType = Field(default=ProtocolType.RTU_OVER_TCP, description="Framing protocol")


class ConnectionResponse(BaseModel):
    """Response model for a connection."""
    id: str = Field(..., description="Connection ID")
    name: str = Field(..., description="Connection name")
    port: int = Field(..., description="TCP port")
    protocol_type: ProtocolType = Field(..., description="Framing protocol")

    model_config = {
        "from_attributes": True,
    }


class SlaveCreate(BaseModel):
    """Request model for creating a slave."""
    name: str = Field(..., description="Slave name, unique per connection")
    slave_address: int = Field(..., description="Modbus unit identifier (1-247)")


class SlaveUpdate(BaseModel):
    """Request model for updating a slave."""
    name: str = Field(..., description="Slave name, unique per connection")
    slave_address: int = Field(..., description="Modbus unit identifier (1-247)")


class SlaveResponse(BaseModel):
    """Response model for a slave."""
    id: str = Field(..., description="Slave ID")
    connection_id: str = Field(..., description="Parent connection ID")
    name: str = Field(..., description="Slave name")
    slave_address: int = Field(..., description="Modbus unit identifier")

    model_config = {
        "from_attributes": True,
    }


class ConnectionTree(ConnectionResponse):
    """A connection with its slaves, ordered by slave address."""
    slaves: list[SlaveResponse] = Field(default_factory=list, description="Slaves of this connection")


class RegisterCreate(BaseModel):
    """Request model for creating a register."""
    start_address: int = Field(..., description="Modbus start address")
    hex_payload: str = Field(..., description="Hex-encoded payload")
    names: str = Field(default="", description="Point names metadata")
    coefficients: str = Field(default="", description="Point coefficients metadata")


class RegisterUpdate(BaseModel):
    """Request model for updating a register."""
    start_address: int = Field(..., description="Modbus start address")
    hex_payload: str = Field(..., description="Hex-encoded payload")
    names: str = Field(default="", description="Point names metadata")
    coefficients: str = Field(default="", description="Point coefficients metadata")


class RegisterResponse(BaseModel):
    """Response model for a register."""
    id: str = Field(..., description="Register ID")
    slave_id: str = Field(..., description="Parent slave ID")
    start_address: int = Field(..., description="Modbus start address")
    hex_payload: str = Field(..., description="Upper-case hex payload")
    names: str = Field(default="", description="Point names metadata")
    coefficients: str = Field(default="", description="Point coefficients metadata")

    model_config = {
        "from_attributes": True,
    }


__all__ = [
    "ConnectionCreate",
    "ConnectionUpdate",
    "ConnectionResponse",
    "ConnectionTree",
    "SlaveCreate",
    "SlaveUpdate",
    "SlaveResponse",
    "RegisterCreate",
    "RegisterUpdate",
    "RegisterResponse",
]
