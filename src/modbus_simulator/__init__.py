"""Configuration store for a simulated Modbus device registry."""

__version__ = "1.0.0"
