"""
covenant - Maybe and Either with a runtime signature checker.

covenant provides the algebraic data types Maybe and Either, implementing
the Setoid, Semigroup, Monoid, Functor, Apply, Applicative, Alt, Chain,
Monad, Foldable, Traversable and Extend type classes, together with a
checker that enforces type-class constraints on function arguments at
call time and explains violations.
"""

from covenant.checker import CheckerConfig, Signature, SignatureChecker, define
from covenant.runtime import Either, Just, Left, Maybe, Nothing, Right
from covenant.utils.errors import (
    CovenantError,
    InstantiationError,
    SignatureError,
    TypeViolationError,
)

__version__ = "0.1.0"
__all__ = [
    "Maybe",
    "Just",
    "Nothing",
    "Either",
    "Left",
    "Right",
    "CheckerConfig",
    "Signature",
    "SignatureChecker",
    "define",
    "CovenantError",
    "InstantiationError",
    "SignatureError",
    "TypeViolationError",
]
