"""
Capability interfaces for the built-in type classes.

Each type class is an abstract base class naming the methods a member
must provide. Method names carry the ``fl_`` prefix of the capability
protocol so that values from other libraries can take part simply by
defining them: like the ABCs of ``collections.abc``, every interface
recognises any class that defines its required methods, whether or not
it inherits from the interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar, TypeVar

FL_PREFIX = "fl_"

# Only these methods also exist without the prefix.
LEGACY_ALIASES: tuple[str, ...] = ("ap", "chain", "concat", "equals", "extend", "map", "reduce")


def _check_methods(C: type, *methods: str) -> Any:
    mro = C.__mro__
    for method in methods:
        for B in mro:
            if method in B.__dict__:
                if B.__dict__[method] is None:
                    return NotImplemented
                break
        else:
            return NotImplemented
    return True


class Capability(ABC):
    """Base class of the type-class interfaces."""

    __slots__ = ()

    required: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def __subclasshook__(cls, C: type) -> Any:
        if "required" in cls.__dict__ and cls.required:
            return _check_methods(C, *cls.required)
        return NotImplemented


class Setoid(Capability):
    __slots__ = ()
    required = ("fl_equals",)

    @abstractmethod
    def fl_equals(self, other: Any) -> bool:
        ...


class Ord(Setoid):
    __slots__ = ()
    required = ("fl_equals", "fl_lte")

    @abstractmethod
    def fl_lte(self, other: Any) -> bool:
        ...


class Semigroup(Capability):
    __slots__ = ()
    required = ("fl_concat",)

    @abstractmethod
    def fl_concat(self, other: Any) -> Any:
        ...


class Monoid(Semigroup):
    __slots__ = ()
    required = ("fl_concat", "fl_empty")

    @classmethod
    @abstractmethod
    def fl_empty(cls) -> Any:
        ...


class Functor(Capability):
    __slots__ = ()
    required = ("fl_map",)

    @abstractmethod
    def fl_map(self, f: Callable[[Any], Any]) -> Any:
        ...


class Apply(Functor):
    __slots__ = ()
    required = ("fl_map", "fl_ap")

    @abstractmethod
    def fl_ap(self, other: Any) -> Any:
        ...


class Applicative(Apply):
    __slots__ = ()
    required = ("fl_map", "fl_ap", "fl_of")

    @classmethod
    @abstractmethod
    def fl_of(cls, value: Any) -> Any:
        ...


class Alt(Functor):
    __slots__ = ()
    required = ("fl_map", "fl_alt")

    @abstractmethod
    def fl_alt(self, other: Any) -> Any:
        ...


class Chain(Apply):
    __slots__ = ()
    required = ("fl_map", "fl_ap", "fl_chain")

    @abstractmethod
    def fl_chain(self, f: Callable[[Any], Any]) -> Any:
        ...


class Monad(Applicative, Chain):
    __slots__ = ()
    required = ("fl_map", "fl_ap", "fl_of", "fl_chain")


class Foldable(Capability):
    __slots__ = ()
    required = ("fl_reduce",)

    @abstractmethod
    def fl_reduce(self, f: Callable[[Any, Any], Any], initial: Any) -> Any:
        ...


class Traversable(Functor, Foldable):
    __slots__ = ()
    required = ("fl_map", "fl_reduce", "fl_traverse")

    @abstractmethod
    def fl_traverse(self, f: Callable[[Any], Any], of: Callable[[Any], Any]) -> Any:
        ...


class Extend(Functor):
    __slots__ = ()
    required = ("fl_map", "fl_extend")

    @abstractmethod
    def fl_extend(self, f: Callable[[Any], Any]) -> Any:
        ...


CAPABILITIES: dict[str, type[Capability]] = {
    "Setoid": Setoid,
    "Ord": Ord,
    "Semigroup": Semigroup,
    "Monoid": Monoid,
    "Functor": Functor,
    "Apply": Apply,
    "Applicative": Applicative,
    "Alt": Alt,
    "Chain": Chain,
    "Monad": Monad,
    "Foldable": Foldable,
    "Traversable": Traversable,
    "Extend": Extend,
}


C = TypeVar("C", bound=type)


def with_legacy_aliases(cls: C) -> C:
    """
    Class decorator binding the unprefixed legacy names.

    Each alias is the very same function object as its prefixed method,
    so ``cls.map is cls.fl_map``.
    """
    for name in LEGACY_ALIASES:
        setattr(cls, name, getattr(cls, FL_PREFIX + name))
    return cls
