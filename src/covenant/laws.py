"""
Algebraic Laws.

Predicates for the laws each type class must obey. Every predicate takes
the values under test and returns True when both sides of the law are
equal according to ``values.equals``:

    functor_identity(Just(1))                        -> True
    monad_left_identity(Maybe, lambda x: Just(x), 1) -> True

Identity and compose_functors provide the applicative functors the
Traversable laws are stated in terms of.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import reduce as functools_reduce
from typing import Any

from covenant.runtime import values
from covenant.runtime.protocol import Applicative, Extend, Monad, Setoid, Traversable


def _identity(x: Any) -> Any:
    return x


# =============================================================================
# Helper Functors
# =============================================================================


@dataclass(frozen=True, eq=False)
class Identity(Setoid, Monad, Traversable, Extend):
    """The trivial functor, holding exactly one value with no effect."""

    value: Any

    @classmethod
    def fl_of(cls, value: Any) -> Identity:
        return cls(value)

    def fl_equals(self, other: Any) -> bool:
        return isinstance(other, Identity) and values.equals(self.value, other.value)

    def fl_map(self, f: Callable[[Any], Any]) -> Identity:
        return Identity(f(self.value))

    def fl_ap(self, other: Any) -> Identity:
        return Identity(other.value(self.value))

    def fl_chain(self, f: Callable[[Any], Any]) -> Any:
        return f(self.value)

    def fl_reduce(self, f: Callable[[Any, Any], Any], initial: Any) -> Any:
        return f(initial, self.value)

    def fl_traverse(self, f: Callable[[Any], Any], of: Callable[[Any], Any]) -> Any:
        return values.map(Identity, f(self.value))

    def fl_extend(self, f: Callable[[Any], Any]) -> Identity:
        return Identity(f(self))

    def __eq__(self, other: object) -> bool:
        return self.fl_equals(other)

    def __hash__(self) -> int:
        return hash(("Identity", repr(self.value)))


def compose_functors(outer: Any, inner: Any) -> type:
    """
    Build the composition of two applicatives, given their type representatives.

    A Compose value wraps an ``outer`` of ``inner`` values:

        C = compose_functors(list, Maybe)
        C([Just(1), Nothing]).fl_map(inc)    -> C([Just(2), Nothing])
    """

    @dataclass(frozen=True, eq=False)
    class Compose(Setoid, Applicative):
        value: Any

        @classmethod
        def fl_of(cls, x: Any) -> Compose:
            return cls(values.of(outer, values.of(inner, x)))

        def fl_equals(self, other: Any) -> bool:
            return type(other) is type(self) and values.equals(self.value, other.value)

        def fl_map(self, f: Callable[[Any], Any]) -> Compose:
            return type(self)(values.map(lambda g: values.map(f, g), self.value))

        def fl_ap(self, other: Any) -> Compose:
            lifted = values.map(lambda gf: lambda gx: values.ap(gf, gx), other.value)
            return type(self)(values.ap(lifted, self.value))

        def __eq__(self, other: object) -> bool:
            return self.fl_equals(other)

    Compose.__name__ = Compose.__qualname__ = (
        f"Compose({getattr(outer, '__name__', outer)}, {getattr(inner, '__name__', inner)})"
    )
    return Compose


# =============================================================================
# Setoid
# =============================================================================


def setoid_reflexivity(a: Any) -> bool:
    return values.equals(a, a)


def setoid_symmetry(a: Any, b: Any) -> bool:
    return values.equals(a, b) == values.equals(b, a)


def setoid_transitivity(a: Any, b: Any, c: Any) -> bool:
    if values.equals(a, b) and values.equals(b, c):
        return values.equals(a, c)
    return True


# =============================================================================
# Semigroup and Monoid
# =============================================================================


def semigroup_associativity(a: Any, b: Any, c: Any) -> bool:
    return values.equals(
        values.concat(values.concat(a, b), c),
        values.concat(a, values.concat(b, c)),
    )


def monoid_left_identity(type_rep: Any, m: Any) -> bool:
    return values.equals(values.concat(values.empty(type_rep), m), m)


def monoid_right_identity(type_rep: Any, m: Any) -> bool:
    return values.equals(values.concat(m, values.empty(type_rep)), m)


# =============================================================================
# Functor, Apply, Applicative
# =============================================================================


def functor_identity(u: Any) -> bool:
    return values.equals(values.map(_identity, u), u)


def functor_composition(u: Any, f: Callable[[Any], Any], g: Callable[[Any], Any]) -> bool:
    return values.equals(
        values.map(lambda x: f(g(x)), u),
        values.map(f, values.map(g, u)),
    )


def apply_composition(a: Any, u: Any, v: Any) -> bool:
    """``a`` and ``u`` hold functions; ``v`` holds a value."""
    compose = lambda f: lambda g: lambda x: f(g(x))  # noqa: E731
    return values.equals(
        values.ap(values.ap(values.map(compose, a), u), v),
        values.ap(a, values.ap(u, v)),
    )


def applicative_identity(type_rep: Any, v: Any) -> bool:
    return values.equals(values.ap(values.of(type_rep, _identity), v), v)


def applicative_homomorphism(type_rep: Any, f: Callable[[Any], Any], x: Any) -> bool:
    return values.equals(
        values.ap(values.of(type_rep, f), values.of(type_rep, x)),
        values.of(type_rep, f(x)),
    )


def applicative_interchange(type_rep: Any, u: Any, y: Any) -> bool:
    """``u`` holds a function."""
    return values.equals(
        values.ap(u, values.of(type_rep, y)),
        values.ap(values.of(type_rep, lambda f: f(y)), u),
    )


# =============================================================================
# Chain and Monad
# =============================================================================


def chain_associativity(m: Any, f: Callable[[Any], Any], g: Callable[[Any], Any]) -> bool:
    return values.equals(
        values.chain(g, values.chain(f, m)),
        values.chain(lambda x: values.chain(g, f(x)), m),
    )


def monad_left_identity(type_rep: Any, f: Callable[[Any], Any], a: Any) -> bool:
    return values.equals(values.chain(f, values.of(type_rep, a)), f(a))


def monad_right_identity(type_rep: Any, m: Any) -> bool:
    return values.equals(values.chain(lambda x: values.of(type_rep, x), m), m)


# =============================================================================
# Foldable, Traversable, Extend
# =============================================================================


def foldable_associativity(f: Callable[[Any, Any], Any], initial: Any, u: Any) -> bool:
    """Reducing u equals reducing the list of u's elements."""
    elements = values.reduce(lambda acc, x: acc + [x], [], u)
    return values.equals(
        values.reduce(f, initial, u),
        functools_reduce(f, elements, initial),
    )


def traversable_naturality(
    outer: Any, inner: Any, t: Callable[[Any], Any], u: Any
) -> bool:
    """
    ``t`` is a natural transformation from ``outer`` to ``inner``; ``u``
    is a traversable of ``outer`` values.
    """
    return values.equals(
        t(values.sequence(lambda x: values.of(outer, x), u)),
        values.traverse(lambda x: values.of(inner, x), t, u),
    )


def traversable_identity(u: Any) -> bool:
    return values.equals(values.traverse(Identity.fl_of, Identity, u), Identity(u))


def traversable_composition(outer: Any, inner: Any, u: Any) -> bool:
    """``u`` is a traversable of ``outer`` values holding ``inner`` values."""
    composed = compose_functors(outer, inner)
    return values.equals(
        values.traverse(composed.fl_of, composed, u),
        composed(
            values.map(
                lambda x: values.sequence(lambda y: values.of(inner, y), x),
                values.sequence(lambda y: values.of(outer, y), u),
            )
        ),
    )


def extend_associativity(w: Any, f: Callable[[Any], Any], g: Callable[[Any], Any]) -> bool:
    return values.equals(
        values.extend(f, values.extend(g, w)),
        values.extend(lambda w_: f(values.extend(g, w_)), w),
    )
