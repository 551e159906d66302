"""Identifier generation and validation."""

from __future__ import annotations

import keyword
import uuid


def generate_history_id() -> str:
    """Return a fresh console history entry id."""
    return uuid.uuid4().hex


def generate_directive_id() -> str:
    """Return a fresh directive id."""
    return uuid.uuid4().hex[:12]


def validate_variable_name(name: str) -> str | None:
    """Check that a directive's variable name can be bound in the namespace.

    Returns:
        None when the name is usable, otherwise a description of the problem
    """
    if not name:
        return "missing variable name"
    if not name.isidentifier():
        return f"'{name}' is not a valid variable name"
    if keyword.iskeyword(name):
        return f"'{name}' is a reserved word"
    return None
