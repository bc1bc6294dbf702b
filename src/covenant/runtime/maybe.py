"""
The Maybe type.

A Maybe is either Nothing, carrying no value, or Just(value). Maybe is a
member of Setoid, Semigroup, Monoid, Functor, Apply, Applicative, Alt,
Chain, Monad, Foldable, Traversable and Extend.

    Just(9).map(math.sqrt)            -> Just(3.0)
    Nothing.map(math.sqrt)            -> Nothing
    Just("foo").concat(Just("bar"))   -> Just("foobar")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar

from covenant.runtime import values
from covenant.runtime.protocol import (
    Alt,
    Extend,
    Monad,
    Monoid,
    Setoid,
    Traversable,
    with_legacy_aliases,
)
from covenant.utils.errors import InstantiationError


class Maybe(Setoid, Monoid, Monad, Alt, Traversable, Extend):
    """
    The Maybe type representative.

    Maybe cannot be instantiated; use Just(value) or Nothing.
    """

    __slots__ = ()

    type_identifier: ClassVar[str] = "covenant/Maybe"

    def __new__(cls, *args: Any, **kwargs: Any) -> Maybe:
        if cls is Maybe:
            raise InstantiationError("Maybe")
        return super().__new__(cls)

    @classmethod
    def fl_of(cls, value: Any) -> Maybe:
        return Just(value)

    @classmethod
    def fl_empty(cls) -> Maybe:
        return Nothing

    @property
    def is_nothing(self) -> bool:
        return not self.is_just

    @property
    def is_just(self) -> bool:
        raise NotImplementedError

    def to_boolean(self) -> bool:
        return self.is_just

    def __bool__(self) -> bool:
        return self.to_boolean()

    def inspect(self) -> str:
        return self.to_string()

    def to_string(self) -> str:
        raise NotImplementedError

    def sequence(self, of: Callable[[Any], Any]) -> Any:
        """Turn a Maybe of an Applicative into an Applicative of a Maybe."""
        return self.fl_traverse(lambda x: x, of)

    def __eq__(self, other: object) -> bool:
        return self.fl_equals(other)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return self.to_string()


@with_legacy_aliases
class _Nothing(Maybe):
    """The nullary variant. There is exactly one instance, Nothing."""

    __slots__ = ()

    _instance: ClassVar[_Nothing | None] = None

    def __new__(cls) -> _Nothing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def is_just(self) -> bool:
        return False

    def fl_equals(self, other: Any) -> bool:
        return other is self

    def fl_concat(self, other: Any) -> Any:
        return other

    def fl_map(self, f: Callable[[Any], Any]) -> Maybe:
        return self

    def fl_ap(self, other: Any) -> Maybe:
        return self

    def fl_alt(self, other: Any) -> Any:
        return other

    def fl_chain(self, f: Callable[[Any], Any]) -> Maybe:
        return self

    def fl_reduce(self, f: Callable[[Any, Any], Any], initial: Any) -> Any:
        return initial

    def fl_traverse(self, f: Callable[[Any], Any], of: Callable[[Any], Any]) -> Any:
        return of(self)

    def fl_extend(self, f: Callable[[Any], Any]) -> Maybe:
        return self

    def to_string(self) -> str:
        return "Nothing"

    def __hash__(self) -> int:
        return hash(Maybe.type_identifier)

    def __reduce__(self) -> str:
        return "Nothing"


Nothing = _Nothing()


@with_legacy_aliases
@dataclass(frozen=True, eq=False, repr=False)
class Just(Maybe):
    """The unary variant, carrying exactly one value."""

    value: Any

    @property
    def is_just(self) -> bool:
        return True

    def fl_equals(self, other: Any) -> bool:
        return isinstance(other, Just) and values.equals(self.value, other.value)

    def fl_concat(self, other: Any) -> Maybe:
        if isinstance(other, Just):
            return Just(values.concat(self.value, other.value))
        return self

    def fl_map(self, f: Callable[[Any], Any]) -> Maybe:
        return Just(f(self.value))

    def fl_ap(self, other: Any) -> Maybe:
        if isinstance(other, Just):
            return Just(other.value(self.value))
        return other

    def fl_alt(self, other: Any) -> Maybe:
        return self

    def fl_chain(self, f: Callable[[Any], Any]) -> Any:
        return f(self.value)

    def fl_reduce(self, f: Callable[[Any, Any], Any], initial: Any) -> Any:
        return f(initial, self.value)

    def fl_traverse(self, f: Callable[[Any], Any], of: Callable[[Any], Any]) -> Any:
        return values.map(Just, f(self.value))

    def fl_extend(self, f: Callable[[Any], Any]) -> Maybe:
        return Just(f(self))

    def to_string(self) -> str:
        return f"Just({values.to_string(self.value)})"

    def __hash__(self) -> int:
        if values.is_nan(self.value):
            return hash((Maybe.type_identifier, "NaN"))
        try:
            return hash((Maybe.type_identifier, self.value))
        except TypeError:
            return hash(Maybe.type_identifier)
