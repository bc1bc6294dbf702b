"""
covenant Runtime Package.

The algebraic data types Maybe and Either, the capability interfaces of
the built-in type classes, and generic type-class dispatch.
"""

from covenant.runtime.either import Either, Left, Right
from covenant.runtime.maybe import Just, Maybe, Nothing
from covenant.runtime.protocol import (
    CAPABILITIES,
    FL_PREFIX,
    LEGACY_ALIASES,
    Alt,
    Applicative,
    Apply,
    Capability,
    Chain,
    Extend,
    Foldable,
    Functor,
    Monad,
    Monoid,
    Ord,
    Semigroup,
    Setoid,
    Traversable,
)

__all__ = [
    # Sum types
    "Maybe",
    "Just",
    "Nothing",
    "Either",
    "Left",
    "Right",
    # Capability interfaces
    "Capability",
    "CAPABILITIES",
    "FL_PREFIX",
    "LEGACY_ALIASES",
    "Setoid",
    "Ord",
    "Semigroup",
    "Monoid",
    "Functor",
    "Apply",
    "Applicative",
    "Alt",
    "Chain",
    "Monad",
    "Foldable",
    "Traversable",
    "Extend",
]
