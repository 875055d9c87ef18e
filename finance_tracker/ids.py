"""Identifier generator for record keys and transfer correlation."""

import uuid


def new_id() -> str:
    """Return a new random UUID-v4 string."""
    return str(uuid.uuid4())
