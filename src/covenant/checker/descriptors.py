"""
Type Descriptor Resolver.

A value's descriptor is the tuple of environment types it belongs to:

    describe(123)     -> (Number, FiniteNumber, NonZeroFiniteNumber, Integer, ValidNumber)
    describe("abc")   -> (String,)
    describe(None)    -> (Null,)

Descriptors keep environment order, which is how they are reported.
``rank`` reorders one narrowest first, which is how type variables bind.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from covenant.checker.types import DEFAULT_ENV, NamedType


@lru_cache(maxsize=None)
def _nominal_type(name: str) -> NamedType:
    # One instance per name, so nominal types of equal name compare equal
    # and intersect as expected.
    return NamedType(name, lambda x: _nominal_name(x) == name)


def _nominal_name(value: Any) -> str:
    identifier = getattr(type(value), "type_identifier", None)
    if isinstance(identifier, str):
        return identifier.split("/")[-1]
    return type(value).__name__


def describe(value: Any, env: tuple[NamedType, ...] = DEFAULT_ENV) -> tuple[NamedType, ...]:
    """
    Resolve the environment types a value belongs to.

    Values outside every environment type are given a nominal type named
    after their type identifier or class, so the result is never empty.
    """
    descriptor = tuple(t for t in env if t.test(value))
    if not descriptor:
        descriptor = (_nominal_type(_nominal_name(value)),)
    return descriptor


def rank(descriptor: tuple[NamedType, ...]) -> tuple[NamedType, ...]:
    """Order a descriptor narrowest first; ties keep their order."""
    return tuple(sorted(descriptor, key=lambda t: -t.specificity))


def type_names(value: Any, env: tuple[NamedType, ...] = DEFAULT_ENV) -> tuple[str, ...]:
    return tuple(t.name for t in describe(value, env))
