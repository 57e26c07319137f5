"""
Core primitives of the chainable layer.

This package contains the fundamental building blocks:
- categories: the closed set of wrappable categories
- namespace: per-category method tables
- registry: the process-wide namespace registry (Sugar)
- self_logger: namespaces log to themselves
- errors: the error hierarchy

Nothing is imported here; import from the submodules (or from the
top-level package) directly.
"""

__all__ = [
    "categories",
    "errors",
    "namespace",
    "registry",
    "self_logger",
]
