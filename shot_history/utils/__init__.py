"""Utility functions."""

from .validation import (
    ensure_sequence,
    ensure_valid_bool,
    ensure_valid_count,
    ensure_valid_cursor,
    ensure_valid_number,
    is_valid_cursor,
    remaining_count,
)

__all__ = [
    "ensure_valid_number",
    "ensure_valid_bool",
    "ensure_valid_count",
    "ensure_valid_cursor",
    "ensure_sequence",
    "is_valid_cursor",
    "remaining_count",
]
