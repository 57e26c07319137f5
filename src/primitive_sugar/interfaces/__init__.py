"""
Native interfaces for chainables.

Adapters between a raw value and the native operations Python offers for it:
- its own public methods ('abc'.upper, [1, 2].copy)
- built-in functions for its category (format, len, round, ...)

The chainable doesn't know or care which source a native method came from.
"""

__all__ = [
    "natives",
]
