"""Pydantic and ORM schemas."""
