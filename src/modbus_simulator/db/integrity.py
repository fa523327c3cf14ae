"""
Helpers for interpreting database integrity errors.

PostgreSQL drivers report the violated constraint by name; that name is used
whenever it is available, since the message text also carries the offending
values. SQLite only reports a table.column list in its message, which holds no
user data, so the text is matched there.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError


def _error_text(error: IntegrityError) -> str:
    return str(error.orig if error.orig is not None else error).lower()


def constraint_name(error: IntegrityError) -> Optional[str]:
    """
    Name of the violated constraint as reported by the driver, if any.

    asyncpg exposes it on the exception SQLAlchemy wraps (``__cause__`` of
    ``error.orig``), psycopg on ``error.orig.diag``.
    """
    orig = error.orig
    candidates = (
        orig,
        getattr(orig, "__cause__", None),
        getattr(orig, "diag", None),
    )
    for candidate in candidates:
        name = getattr(candidate, "constraint_name", None)
        if isinstance(name, str) and name:
            return name.lower()
    return None


def is_unique_violation(error: IntegrityError) -> bool:
    text = _error_text(error)
    return "unique" in text or "duplicate" in text


def is_foreign_key_violation(error: IntegrityError) -> bool:
    return "foreign key" in _error_text(error)


def violated_field(error: IntegrityError, markers: dict[str, tuple[str, ...]]) -> Optional[str]:
    """
    Identify which unique field an integrity error refers to.

    Args:
        error: The IntegrityError raised on flush/commit
        markers: Field name -> (constraint name, further substrings identifying
            the constraint in the message text), checked in order

    Returns:
        The matching field name, or None if nothing matches
    """
    name = constraint_name(error)
    if name is not None:
        for field, field_markers in markers.items():
            if name == field_markers[0]:
                return field
        return None

    text = _error_text(error)
    for field, field_markers in markers.items():
        if any(marker in text for marker in field_markers):
            return field
    return None
