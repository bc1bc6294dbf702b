"""
covenant Checker Package.

Named types, type-class registry, type descriptors, signatures and the
runtime signature checker.
"""

from covenant.checker.checker import CheckResult, Passed, SignatureChecker, define
from covenant.checker.config import CHECK_TYPES_VARIABLE, CheckerConfig
from covenant.checker.descriptors import describe, rank, type_names
from covenant.checker.signature import Constraint, RenderedSignature, Signature, Slot, variadic
from covenant.checker.type_classes import (
    DEFAULT_REGISTRY,
    STANDARD_TYPE_CLASSES,
    TypeClass,
    TypeClassRegistry,
)
from covenant.checker.types import (
    ANY,
    ARRAY,
    BOOLEAN,
    DATE,
    DEFAULT_ENV,
    EITHER,
    ERROR,
    FINITE_NUMBER,
    FUNCTION,
    INTEGER,
    MAYBE,
    NON_NEGATIVE_INTEGER,
    NON_ZERO_FINITE_NUMBER,
    NULL,
    NUMBER,
    OBJECT,
    REGEXP,
    STRING,
    TYPE_REP,
    VALID_NUMBER,
    Concrete,
    Fn,
    NamedType,
    TypeExpr,
    Var,
    fn,
)

__all__ = [
    # Named types
    "NamedType",
    "DEFAULT_ENV",
    "ANY",
    "ARRAY",
    "BOOLEAN",
    "DATE",
    "EITHER",
    "ERROR",
    "FINITE_NUMBER",
    "FUNCTION",
    "INTEGER",
    "MAYBE",
    "NON_NEGATIVE_INTEGER",
    "NON_ZERO_FINITE_NUMBER",
    "NULL",
    "NUMBER",
    "OBJECT",
    "REGEXP",
    "STRING",
    "TYPE_REP",
    "VALID_NUMBER",
    # Type expressions
    "TypeExpr",
    "Concrete",
    "Var",
    "Fn",
    "fn",
    # Type classes
    "TypeClass",
    "TypeClassRegistry",
    "STANDARD_TYPE_CLASSES",
    "DEFAULT_REGISTRY",
    # Descriptors
    "describe",
    "rank",
    "type_names",
    # Signatures
    "Constraint",
    "Slot",
    "variadic",
    "Signature",
    "RenderedSignature",
    # Checking
    "CheckerConfig",
    "CHECK_TYPES_VARIABLE",
    "SignatureChecker",
    "Passed",
    "CheckResult",
    "define",
]
