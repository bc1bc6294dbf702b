"""
The Either type.

An Either is Left(value), conventionally a failure, or Right(value), the
success branch. Either is a member of Setoid, Semigroup, Functor, Apply,
Applicative, Alt, Chain, Monad, Foldable, Traversable and Extend. It has
no Monoid instance.
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
    Semigroup,
    Setoid,
    Traversable,
    with_legacy_aliases,
)
from covenant.utils.errors import InstantiationError


class Either(Setoid, Semigroup, Monad, Alt, Traversable, Extend):
    """
    The Either type representative.

    Either cannot be instantiated; use Left(value) or Right(value).
    """

    __slots__ = ()

    type_identifier: ClassVar[str] = "covenant/Either"

    def __new__(cls, *args: Any, **kwargs: Any) -> Either:
        if cls is Either:
            raise InstantiationError("Either")
        return super().__new__(cls)

    @classmethod
    def fl_of(cls, value: Any) -> Either:
        return Right(value)

    @property
    def is_left(self) -> bool:
        return not self.is_right

    @property
    def is_right(self) -> bool:
        raise NotImplementedError

    def inspect(self) -> str:
        return self.to_string()

    def to_string(self) -> str:
        raise NotImplementedError

    def sequence(self, of: Callable[[Any], Any]) -> Any:
        """Turn an Either of an Applicative into an Applicative of an Either."""
        return self.fl_traverse(lambda x: x, of)

    def __eq__(self, other: object) -> bool:
        return self.fl_equals(other)

    def __hash__(self) -> int:
        value = self.value  # type: ignore[attr-defined]
        if values.is_nan(value):
            return hash((type(self).__name__, "NaN"))
        try:
            return hash((type(self).__name__, value))
        except TypeError:
            return hash(type(self).__name__)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return self.to_string()


@with_legacy_aliases
@dataclass(frozen=True, eq=False, repr=False)
class Left(Either):
    """The failure variant."""

    value: Any

    @property
    def is_right(self) -> bool:
        return False

    def fl_equals(self, other: Any) -> bool:
        return isinstance(other, Left) and values.equals(self.value, other.value)

    def fl_concat(self, other: Any) -> Either:
        if isinstance(other, Left):
            return Left(values.concat(self.value, other.value))
        return other

    def fl_map(self, f: Callable[[Any], Any]) -> Either:
        return self

    def fl_ap(self, other: Any) -> Either:
        # The Left in function position takes precedence.
        if isinstance(other, Left):
            return other
        return self

    def fl_alt(self, other: Any) -> Any:
        return other

    def fl_chain(self, f: Callable[[Any], Any]) -> Either:
        return self

    def fl_reduce(self, f: Callable[[Any, Any], Any], initial: Any) -> Any:
        return initial

    def fl_traverse(self, f: Callable[[Any], Any], of: Callable[[Any], Any]) -> Any:
        return of(self)

    def fl_extend(self, f: Callable[[Any], Any]) -> Either:
        return self

    def to_string(self) -> str:
        return f"Left({values.to_string(self.value)})"


@with_legacy_aliases
@dataclass(frozen=True, eq=False, repr=False)
class Right(Either):
    """The success variant."""

    value: Any

    @property
    def is_right(self) -> bool:
        return True

    def fl_equals(self, other: Any) -> bool:
        return isinstance(other, Right) and values.equals(self.value, other.value)

    def fl_concat(self, other: Any) -> Either:
        if isinstance(other, Right):
            return Right(values.concat(self.value, other.value))
        return self

    def fl_map(self, f: Callable[[Any], Any]) -> Either:
        return Right(f(self.value))

    def fl_ap(self, other: Any) -> Either:
        if isinstance(other, Right):
            return Right(other.value(self.value))
        return other

    def fl_alt(self, other: Any) -> Either:
        return self

    def fl_chain(self, f: Callable[[Any], Any]) -> Any:
        return f(self.value)

    def fl_reduce(self, f: Callable[[Any, Any], Any], initial: Any) -> Any:
        return f(initial, self.value)

    def fl_traverse(self, f: Callable[[Any], Any], of: Callable[[Any], Any]) -> Any:
        return values.map(Right, f(self.value))

    def fl_extend(self, f: Callable[[Any], Any]) -> Either:
        return Right(f(self))

    def to_string(self) -> str:
        return f"Right({values.to_string(self.value)})"
