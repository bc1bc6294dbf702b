"""
Error types for covenant.

Every error raised by the library derives from CovenantError. Errors that
correspond to a misuse of types also derive from the builtin TypeError so
that callers can catch them either way.
"""

from __future__ import annotations

from typing import Optional

from covenant.utils.diagnostics import Violation, render_violation


class CovenantError(Exception):
    """Base exception for all covenant errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InstantiationError(CovenantError, TypeError):
    """
    Raised when a sum type itself is called as a constructor.

    Maybe and Either are only reachable through their variant
    constructors (Just, Nothing, Left, Right).
    """

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"Cannot instantiate {type_name}")


class SignatureError(CovenantError, ValueError):
    """Raised when a function signature is malformed at definition time."""

    def __init__(self, message: str, function_name: Optional[str] = None) -> None:
        self.function_name = function_name
        if function_name:
            message = f"Invalid signature for ‘{function_name}’: {message}"
        super().__init__(message)


class TypeViolationError(CovenantError, TypeError):
    """
    Raised at a checked call boundary when the arguments violate the signature.

    The structured report is available as ``violation``; ``str(error)`` is
    the rendered diagnostic.
    """

    def __init__(self, violation: Violation) -> None:
        self.violation = violation
        super().__init__(render_violation(violation))

    @property
    def code(self) -> str:
        return self.violation.code
