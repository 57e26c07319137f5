"""
Sugar errors

All errors raised by the chainable layer derive from SugarError.

Design principles:
- Errors are raised immediately, never retried or swallowed
- Lookup failures are also AttributeErrors (hasattr() keeps working)
- Messages name the namespace and method involved
"""


class SugarError(Exception):
    """Base exception for chainable and namespace errors"""
    pass


class InvocationError(SugarError, TypeError):
    """Raised when a namespace is called without the .new() construction marker"""
    pass


class DuplicateDefinitionError(SugarError):
    """Raised when a method name is already defined (or reserved) in a namespace"""
    pass


class MethodNotFoundError(SugarError, AttributeError):
    """Raised when a name is neither a registered nor a native method"""
    pass


class UnknownNamespaceError(SugarError, KeyError):
    """Raised when a namespace name is not a recognized category"""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ''
