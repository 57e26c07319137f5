"""
Runtime side of the chainable layer.

This package handles wrapped values:
- Chainable: raw value holder and method resolution
- Operator coercion (a chainable behaves like its raw value)
"""

__all__ = [
    "chainable",
]
