"""
Checked Combinators.

A small library of functions defined through the signature checker. Each
call validates its arguments before running:

    from covenant import functions as S

    S.gt(1, 0)                       -> True
    S.map(S.inc, Just(1))            -> Just(2)
    S.gt(None, 0)                    -> raises TypeViolationError

``create(config)`` builds an independent set of the same functions with
its own configuration; the module-level functions are built from the
environment (see CheckerConfig.from_environ).
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Callable, Optional

from covenant.checker import (
    ANY,
    ARRAY,
    BOOLEAN,
    EITHER,
    FINITE_NUMBER,
    MAYBE,
    TYPE_REP,
    CheckerConfig,
    SignatureChecker,
    Var,
    fn,
    variadic,
)
from covenant.runtime import Just, Nothing, values

a, b, c = Var("a"), Var("b"), Var("c")
f, m, t, w = Var("f"), Var("m"), Var("t"), Var("w")


def create(config: Optional[CheckerConfig] = None) -> SimpleNamespace:
    """Build the checked combinators for one configuration."""
    checker = SignatureChecker(config)
    checked = checker.checked

    # =========================================================================
    # Combinators
    # =========================================================================

    @checked({}, [a, a], name="I")
    def identity(x: Any) -> Any:
        return x

    @checked({}, [a, b, a], name="K")
    def constant(x: Any, y: Any) -> Any:
        return x

    @checked({}, [a, fn(a, b), b], name="T")
    def thrush(x: Any, g: Callable[[Any], Any]) -> Any:
        return g(x)

    @checked({}, [fn(b, c), fn(a, b), a, c])
    def compose(g: Callable[[Any], Any], h: Callable[[Any], Any], x: Any) -> Any:
        return g(h(x))

    @checked({}, [FINITE_NUMBER, FINITE_NUMBER])
    def inc(x: Any) -> Any:
        return x + 1

    # =========================================================================
    # Setoid and Ord
    # =========================================================================

    @checked({"a": ["Setoid"]}, [a, a, BOOLEAN])
    def equals(x: Any, y: Any) -> bool:
        return values.equals(x, y)

    @checked({"a": ["Ord"]}, [a, a, BOOLEAN])
    def lt(x: Any, y: Any) -> bool:
        return not values.lte(y, x)

    @checked({"a": ["Ord"]}, [a, a, BOOLEAN])
    def lte(x: Any, y: Any) -> bool:
        return values.lte(x, y)

    @checked({"a": ["Ord"]}, [a, a, BOOLEAN])
    def gt(x: Any, y: Any) -> bool:
        return not values.lte(x, y)

    @checked({"a": ["Ord"]}, [a, a, BOOLEAN])
    def gte(x: Any, y: Any) -> bool:
        return values.lte(y, x)

    @checked({"a": ["Ord"]}, [a, a, a])
    def min(x: Any, y: Any) -> Any:
        return x if values.lte(x, y) else y

    @checked({"a": ["Ord"]}, [a, a, a])
    def max(x: Any, y: Any) -> Any:
        return y if values.lte(x, y) else x

    @checked({"a": ["Ord"]}, [a, variadic(a), a])
    def minimum(x: Any, *rest: Any) -> Any:
        result = x
        for y in rest:
            if not values.lte(result, y):
                result = y
        return result

    @checked({"a": ["Ord"]}, [a, variadic(a), a])
    def maximum(x: Any, *rest: Any) -> Any:
        result = x
        for y in rest:
            if values.lte(result, y):
                result = y
        return result

    # =========================================================================
    # Algebra
    # =========================================================================

    @checked({"a": ["Semigroup"]}, [a, a, a])
    def concat(x: Any, y: Any) -> Any:
        return values.concat(x, y)

    @checked({"a": ["Monoid"]}, [TYPE_REP(a), a])
    def empty(type_rep: type) -> Any:
        return values.empty(type_rep)

    @checked({"f": ["Applicative"]}, [TYPE_REP(f), a, f(a)])
    def of(type_rep: type, x: Any) -> Any:
        return values.of(type_rep, x)

    @checked({"f": ["Functor"]}, [fn(a, b), f(a), f(b)])
    def map(g: Callable[[Any], Any], functor: Any) -> Any:
        return values.map(g, functor)

    @checked({"f": ["Apply"]}, [f(fn(a, b)), f(a), f(b)])
    def ap(apply_f: Any, apply_x: Any) -> Any:
        return values.ap(apply_f, apply_x)

    @checked({"f": ["Alt"]}, [f(a), f(a), f(a)])
    def alt(x: Any, y: Any) -> Any:
        return values.alt(x, y)

    @checked({"m": ["Chain"]}, [fn(a, m(b)), m(a), m(b)])
    def chain(g: Callable[[Any], Any], monad: Any) -> Any:
        return values.chain(g, monad)

    @checked({"f": ["Foldable"]}, [fn(b, a, b), b, f(a), b])
    def reduce(g: Callable[[Any, Any], Any], initial: Any, foldable: Any) -> Any:
        return values.reduce(g, initial, foldable)

    @checked({"w": ["Extend"]}, [fn(w(a), b), w(a), w(b)])
    def extend(g: Callable[[Any], Any], extend_w: Any) -> Any:
        return values.extend(g, extend_w)

    @checked(
        {"f": ["Applicative"], "t": ["Traversable"]},
        [TYPE_REP(f), fn(a, f(b)), t(a), f(t(b))],
    )
    def traverse(type_rep: type, g: Callable[[Any], Any], traversable: Any) -> Any:
        return values.traverse(lambda x: values.of(type_rep, x), g, traversable)

    @checked(
        {"f": ["Applicative"], "t": ["Traversable"]},
        [TYPE_REP(f), t(f(a)), f(t(a))],
    )
    def sequence(type_rep: type, traversable: Any) -> Any:
        return values.sequence(lambda x: values.of(type_rep, x), traversable)

    # =========================================================================
    # Arrays
    # =========================================================================

    @checked({}, [ARRAY(a), MAYBE(a)])
    def head(xs: Any) -> Any:
        return Just(xs[0]) if xs else Nothing

    @checked({}, [ARRAY(a), MAYBE(a)])
    def last(xs: Any) -> Any:
        return Just(xs[-1]) if xs else Nothing

    # =========================================================================
    # Maybe and Either
    # =========================================================================

    @checked({}, [a, MAYBE(a), a])
    def from_maybe(default: Any, maybe_value: Any) -> Any:
        return maybe_value.value if maybe_value.is_just else default

    @checked({}, [b, fn(a, b), MAYBE(a), b])
    def maybe(default: Any, g: Callable[[Any], Any], maybe_value: Any) -> Any:
        return g(maybe_value.value) if maybe_value.is_just else default

    @checked({}, [fn(a, c), fn(b, c), EITHER(a, b), c])
    def either(
        on_left: Callable[[Any], Any], on_right: Callable[[Any], Any], either_value: Any
    ) -> Any:
        if either_value.is_left:
            return on_left(either_value.value)
        return on_right(either_value.value)

    @checked({}, [ANY, MAYBE(a)])
    def to_maybe(x: Any) -> Any:
        return Nothing if x is None else Just(x)

    @checked({}, [MAYBE(a), BOOLEAN])
    def is_just(maybe_value: Any) -> bool:
        return maybe_value.is_just

    @checked({}, [MAYBE(a), BOOLEAN])
    def is_nothing(maybe_value: Any) -> bool:
        return maybe_value.is_nothing

    @checked({}, [EITHER(a, b), BOOLEAN])
    def is_left(either_value: Any) -> bool:
        return either_value.is_left

    @checked({}, [EITHER(a, b), BOOLEAN])
    def is_right(either_value: Any) -> bool:
        return either_value.is_right

    return SimpleNamespace(
        I=identity,
        K=constant,
        T=thrush,
        compose=compose,
        inc=inc,
        equals=equals,
        lt=lt,
        lte=lte,
        gt=gt,
        gte=gte,
        min=min,
        max=max,
        minimum=minimum,
        maximum=maximum,
        concat=concat,
        empty=empty,
        of=of,
        map=map,
        ap=ap,
        alt=alt,
        chain=chain,
        reduce=reduce,
        extend=extend,
        traverse=traverse,
        sequence=sequence,
        head=head,
        last=last,
        from_maybe=from_maybe,
        maybe=maybe,
        either=either,
        to_maybe=to_maybe,
        is_just=is_just,
        is_nothing=is_nothing,
        is_left=is_left,
        is_right=is_right,
    )


# =============================================================================
# Default Instance
# =============================================================================

_default = create(CheckerConfig.from_environ())

I = _default.I
K = _default.K
T = _default.T
compose = _default.compose
inc = _default.inc
equals = _default.equals
lt = _default.lt
lte = _default.lte
gt = _default.gt
gte = _default.gte
min = _default.min
max = _default.max
minimum = _default.minimum
maximum = _default.maximum
concat = _default.concat
empty = _default.empty
of = _default.of
map = _default.map
ap = _default.ap
alt = _default.alt
chain = _default.chain
reduce = _default.reduce
extend = _default.extend
traverse = _default.traverse
sequence = _default.sequence
head = _default.head
last = _default.last
from_maybe = _default.from_maybe
maybe = _default.maybe
either = _default.either
to_maybe = _default.to_maybe
is_just = _default.is_just
is_nothing = _default.is_nothing
is_left = _default.is_left
is_right = _default.is_right

__all__ = [
    "create",
    "I",
    "K",
    "T",
    "compose",
    "inc",
    "equals",
    "lt",
    "lte",
    "gt",
    "gte",
    "min",
    "max",
    "minimum",
    "maximum",
    "concat",
    "empty",
    "of",
    "map",
    "ap",
    "alt",
    "chain",
    "reduce",
    "extend",
    "traverse",
    "sequence",
    "head",
    "last",
    "from_maybe",
    "maybe",
    "either",
    "to_maybe",
    "is_just",
    "is_nothing",
    "is_left",
    "is_right",
]
