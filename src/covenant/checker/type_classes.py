"""
Type-Class Registry.

A registry maps type-class names to TypeClass records. Membership of a
value is decided by its capability interface first (any object defining
the required ``fl_`` methods) and then by the built-in rules for Python
primitives. A Maybe or an Either is a Setoid or a Semigroup only when
the value it holds is one too. Registries are immutable once constructed;
the default one is built at import time and handed to the checker
through its config.
"""

from __future__ import annotations

import datetime
import numbers
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional

from covenant.runtime.either import Either
from covenant.runtime.maybe import Just, Maybe
from covenant.runtime.protocol import CAPABILITIES, Capability


# =============================================================================
# Built-in Rules for Primitives
# =============================================================================


def _variant_contents(value: Any) -> Optional[tuple[Any, ...]]:
    # The values held by a Maybe or an Either; None for anything else.
    if isinstance(value, (Just, Either)):
        return (value.value,)
    if isinstance(value, Maybe):
        return ()
    return None


def _is_setoid(value: Any) -> bool:
    items = _variant_contents(value)
    if items is not None:
        return all(_is_setoid(item) for item in items)
    if isinstance(value, CAPABILITIES["Setoid"]):
        return True
    if value is None or isinstance(
        value, (bool, numbers.Number, str, bytes, datetime.date, re.Pattern)
    ):
        return True
    if isinstance(value, (list, tuple)):
        return all(_is_setoid(item) for item in value)
    if isinstance(value, dict):
        return all(_is_setoid(item) for item in value.values())
    return False


def _is_ord(value: Any) -> bool:
    if isinstance(value, CAPABILITIES["Ord"]):
        return True
    if isinstance(value, (bool, numbers.Real, str, datetime.date)):
        return True
    if isinstance(value, (list, tuple)):
        return all(_is_ord(item) for item in value)
    return False


def _sequences(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _sequences_and_mappings(value: Any) -> bool:
    return isinstance(value, (list, tuple, dict))


def _is_semigroup(value: Any) -> bool:
    items = _variant_contents(value)
    if items is not None:
        return all(_is_semigroup(item) for item in items)
    if isinstance(value, CAPABILITIES["Semigroup"]):
        return True
    return isinstance(value, (str, list, tuple, dict))


def _functors(value: Any) -> bool:
    return isinstance(value, (list, tuple, dict)) or (
        callable(value) and not isinstance(value, type)
    )


# Type representatives of the primitives each class admits.
_SEQUENCE_REPS: tuple[type, ...] = (list, tuple)
_SEMIGROUP_REPS: tuple[type, ...] = (str, list, tuple, dict)
_SETOID_REPS: tuple[type, ...] = (
    type(None), bool, int, float, complex, str, bytes, list, tuple, dict,
    datetime.date, datetime.datetime,
)
_ORD_REPS: tuple[type, ...] = (
    bool, int, float, str, list, tuple, datetime.date, datetime.datetime
)


# =============================================================================
# Type Classes
# =============================================================================


@dataclass(frozen=True)
class TypeClass:
    """
    A named capability contract.

    Attributes:
        name: Type-class name as shown in signatures (e.g. "Ord")
        capability: Interface whose members satisfy the class
        builtin: Rule admitting Python primitives
        superclasses: Names of the classes this one refines
        contents: Rule the values held by a Maybe or an Either must pass
        reps: Primitive type representatives that are members
    """

    name: str
    capability: type[Capability]
    builtin: Callable[[Any], bool] = field(default=lambda value: False, compare=False)
    superclasses: tuple[str, ...] = ()
    contents: Callable[[Any], bool] = field(default=lambda value: True, compare=False)
    reps: tuple[type, ...] = field(default=(), compare=False)

    def test(self, value: Any) -> bool:
        """True if the value is a member of this type class."""
        items = _variant_contents(value)
        if items is not None:
            return isinstance(value, self.capability) and all(
                self.contents(item) for item in items
            )
        return isinstance(value, self.capability) or self.builtin(value)

    def test_type_rep(self, type_rep: Any) -> bool:
        """True if the type representative names a member type of this class."""
        if not isinstance(type_rep, type):
            return False
        return issubclass(type_rep, self.capability) or type_rep in self.reps

    @property
    def required_methods(self) -> tuple[str, ...]:
        return self.capability.required

    def __str__(self) -> str:
        return self.name


def _standard(
    name: str,
    builtin: Callable[[Any], bool],
    reps: tuple[type, ...],
    superclasses: tuple[str, ...] = (),
    contents: Callable[[Any], bool] = lambda value: True,
) -> TypeClass:
    return TypeClass(name, CAPABILITIES[name], builtin, superclasses, contents, reps)


STANDARD_TYPE_CLASSES: tuple[TypeClass, ...] = (
    _standard("Setoid", _is_setoid, _SETOID_REPS, contents=_is_setoid),
    _standard("Ord", _is_ord, _ORD_REPS, ("Setoid",)),
    _standard("Semigroup", _is_semigroup, _SEMIGROUP_REPS, contents=_is_semigroup),
    _standard(
        "Monoid", _is_semigroup, _SEMIGROUP_REPS, ("Semigroup",), contents=_is_semigroup
    ),
    _standard("Functor", _functors, (list, tuple, dict)),
    _standard("Apply", _sequences, _SEQUENCE_REPS, ("Functor",)),
    _standard("Applicative", _sequences, _SEQUENCE_REPS, ("Apply",)),
    _standard("Alt", _sequences, _SEQUENCE_REPS, ("Functor",)),
    _standard("Chain", _sequences, _SEQUENCE_REPS, ("Apply",)),
    _standard("Monad", _sequences, _SEQUENCE_REPS, ("Applicative", "Chain")),
    _standard("Foldable", _sequences_and_mappings, (list, tuple, dict)),
    _standard("Traversable", _sequences, _SEQUENCE_REPS, ("Functor", "Foldable")),
    _standard("Extend", _sequences, _SEQUENCE_REPS, ("Functor",)),
)


# =============================================================================
# Registry
# =============================================================================


class TypeClassRegistry:
    """
    Read-only table of type classes by name.

    Usage:
        registry = TypeClassRegistry(STANDARD_TYPE_CLASSES)
        registry.satisfies("Ord", 42)       -> True
        registry.satisfies("Ord", None)     -> False
    """

    def __init__(self, type_classes: Iterable[TypeClass]) -> None:
        self._classes = MappingProxyType({tc.name: tc for tc in type_classes})

    def __getitem__(self, name: str) -> TypeClass:
        return self._classes[name]

    def __contains__(self, name: object) -> bool:
        return name in self._classes

    def __iter__(self):
        return iter(self._classes.values())

    def __len__(self) -> int:
        return len(self._classes)

    def names(self) -> tuple[str, ...]:
        return tuple(self._classes)

    def satisfies(self, name: str, value: Any) -> bool:
        """
        Test whether a value is a member of the named type class.

        Raises:
            KeyError: If no type class has that name
        """
        return self._classes[name].test(value)

    def satisfies_type_rep(self, name: str, type_rep: Any) -> bool:
        """
        Test whether a type representative names a member of the type class.

            registry.satisfies_type_rep("Monoid", str)      -> True
            registry.satisfies_type_rep("Monoid", Either)   -> False
        """
        return self._classes[name].test_type_rep(type_rep)

    def required_methods(self, name: str) -> tuple[str, ...]:
        """The methods a value must define to satisfy the class by capability."""
        return self._classes[name].required_methods

    def classes_of(self, value: Any) -> tuple[str, ...]:
        """Names of every registered class the value satisfies, in registry order."""
        return tuple(name for name, tc in self._classes.items() if tc.test(value))


DEFAULT_REGISTRY = TypeClassRegistry(STANDARD_TYPE_CLASSES)
