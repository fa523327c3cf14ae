"""
SQLAlchemy ORM models for database tables.

These models represent the database schema and are used for ORM operations.
Uniqueness and cascading deletes are enforced by the database itself.
"""

from sqlalchemy import String, Integer, Text, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from modbus_simulator.schemas.db_models.types import ProtocolType


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class Connection(Base):
    """
    SQLAlchemy model for the connections table.

    Represents a simulated network endpoint hosting slaves.
    """
    __tablename__ = "connections"
    __table_args__ = (
        UniqueConstraint("name", name="uq_connections_name"),
        UniqueConstraint("port", name="uq_connections_port"),
    )

    id: Mapped[str] = mapped_column(
        String(32),
        primary_key=True,
        comment="Opaque unique identifier (uuid4 hex)"
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Unique connection name"
    )

    port: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Unique TCP port (1-65535)"
    )

    protocol_type: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=int(ProtocolType.RTU_OVER_TCP),
        comment="0 = Modbus RTU over TCP, 1 = Modbus TCP"
    )

    slaves: Mapped[list["Slave"]] = relationship(
        "Slave",
        back_populates="connection",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Slave.slave_address",
    )

    def __repr__(self) -> str:
        return f"<Connection(id='{self.id}', name='{self.name}', port={self.port})>"


class Slave(Base):
    """
    SQLAlchemy model for the slaves table.

    Represents a simulated Modbus device (unit address) under a connection.
    """
    __tablename__ = "slaves"
    __table_args__ = (
        UniqueConstraint("connection_id", "slave_address", name="uq_slaves_connection_id_slave_address"),
        UniqueConstraint("connection_id", "name", name="uq_slaves_connection_id_name"),
        Index("idx_slaves_connection_id", "connection_id"),
    )

    id: Mapped[str] = mapped_column(
        String(32),
        primary_key=True,
        comment="Opaque unique identifier (uuid4 hex)"
    )

    connection_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("connections.id", ondelete="CASCADE"),
        nullable=False,
        comment="Foreign key to connections table"
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Slave name, unique per connection"
    )

    slave_address: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Modbus unit identifier (1-247), unique per connection"
    )

    connection: Mapped["Connection"] = relationship("Connection", back_populates="slaves")

    registers: Mapped[list["Register"]] = relationship(
        "Register",
        back_populates="slave",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Slave(id='{self.id}', connection_id='{self.connection_id}', slave_address={self.slave_address})>"


class Register(Base):
    """
    SQLAlchemy model for the registers table.

    Represents an addressable range of a slave with its hex-encoded payload.
    """
    __tablename__ = "registers"
    __table_args__ = (
        UniqueConstraint("slave_id", "start_address", name="uq_registers_slave_id_start_address"),
        Index("idx_registers_slave_id_start_address", "slave_id", "start_address"),
    )

    id: Mapped[str] = mapped_column(
        String(32),
        primary_key=True,
        comment="Opaque unique identifier (uuid4 hex)"
    )

    slave_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("slaves.id", ondelete="CASCADE"),
        nullable=False,
        comment="Foreign key to slaves table"
    )

    start_address: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Modbus start address; its range selects the register class"
    )

    hex_payload: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Upper-case hex payload"
    )

    names: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Opaque point names metadata"
    )

    coefficients: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Opaque point coefficients metadata"
    )

    slave: Mapped["Slave"] = relationship("Slave", back_populates="registers")

    def __repr__(self) -> str:
        return f"<Register(id='{self.id}', slave_id='{self.slave_id}', start_address={self.start_address})>"
