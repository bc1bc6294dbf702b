"""
covenant Utilities Package.

Error types and signature-violation diagnostics.
"""

from covenant.utils.diagnostics import (
    ERROR_DESCRIPTIONS,
    ErrorCode,
    OffendingValue,
    Underline,
    Violation,
    ViolationBuilder,
    ViolationKind,
    render_markers,
    render_violation,
)
from covenant.utils.errors import (
    CovenantError,
    InstantiationError,
    SignatureError,
    TypeViolationError,
)

__all__ = [
    # Errors
    "CovenantError",
    "InstantiationError",
    "SignatureError",
    "TypeViolationError",
    # Error codes
    "ErrorCode",
    "ERROR_DESCRIPTIONS",
    # Violation records
    "ViolationKind",
    "Underline",
    "OffendingValue",
    "Violation",
    "ViolationBuilder",
    # Rendering
    "render_markers",
    "render_violation",
]
