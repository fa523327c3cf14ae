"""Pytest configuration and fixtures shared by all tests."""

import os

# Settings are read at import time; keep tests away from a real PostgreSQL server
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./modbus_simulator_test.db")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
