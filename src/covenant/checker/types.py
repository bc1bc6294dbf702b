"""
Named Types and Type Expressions.

Named types are the vocabulary of type descriptors: each one pairs a name
with a membership test. Type expressions are built from named types and
type variables to describe the parameters of a checked function:

    a = Var("a")
    f = Var("f")
    ARRAY(a)                 -> Array a
    f(a)                     -> f a
    fn(a, MAYBE(b))          -> (a -> Maybe b)
"""

from __future__ import annotations

import datetime
import math
import numbers
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from covenant.runtime.either import Either, Left
from covenant.runtime.maybe import Just, Maybe
from covenant.runtime.values import is_nan, is_number
from covenant.utils.errors import SignatureError

# A key locates a sub-expression of a signature: the slot index followed
# by the argument path within that slot's type expression.
SpanKey = tuple[int, ...]


# =============================================================================
# Named Types
# =============================================================================


@dataclass(frozen=True)
class NamedType:
    """
    A named set of runtime values.

    Attributes:
        name: Name shown in signatures and descriptors
        test: Membership predicate
        arity: Number of type parameters (Array a has 1, Either a b has 2)
        extract: For parameterised types, the contained values per parameter
        specificity: Narrowness rank; higher values are preferred as bindings
    """

    name: str
    test: Callable[[Any], bool] = field(compare=False, repr=False)
    arity: int = 0
    extract: Optional[Callable[[Any], tuple[tuple[Any, ...], ...]]] = field(
        default=None, compare=False, repr=False
    )
    specificity: int = 0

    def __str__(self) -> str:
        return self.name

    def __call__(self, *args: TypeLike) -> Concrete:
        """Apply a parameterised type to type arguments."""
        if len(args) != self.arity:
            raise SignatureError(
                f"{self.name} takes {self.arity} type argument(s), got {len(args)}"
            )
        return Concrete(self, tuple(as_type_expr(arg) for arg in args))

    def contains(self, value: Any) -> bool:
        return self.test(value)


def _is_finite(value: Any) -> bool:
    if not is_number(value):
        return False
    if isinstance(value, numbers.Integral):
        return True
    return math.isfinite(value)


def _is_integer(value: Any) -> bool:
    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return True
    return _is_finite(value) and value == math.floor(value)


def _maybe_contents(value: Maybe) -> tuple[tuple[Any, ...], ...]:
    return ((value.value,),) if isinstance(value, Just) else ((),)


def _either_contents(value: Either) -> tuple[tuple[Any, ...], ...]:
    if isinstance(value, Left):
        return ((value.value,), ())
    return ((), (value.value,))


FUNCTION = NamedType("Function", callable)
ARRAY = NamedType(
    "Array",
    lambda x: isinstance(x, (list, tuple)),
    arity=1,
    extract=lambda x: (tuple(x),),
)
BOOLEAN = NamedType("Boolean", lambda x: isinstance(x, bool))
DATE = NamedType("Date", lambda x: isinstance(x, datetime.date))
ERROR = NamedType("Error", lambda x: isinstance(x, BaseException))
NULL = NamedType("Null", lambda x: x is None)
NUMBER = NamedType("Number", is_number)
OBJECT = NamedType("Object", lambda x: isinstance(x, dict))
REGEXP = NamedType("RegExp", lambda x: isinstance(x, re.Pattern))
STRING = NamedType("String", lambda x: isinstance(x, str))
VALID_NUMBER = NamedType(
    "ValidNumber", lambda x: is_number(x) and not is_nan(x), specificity=1
)
FINITE_NUMBER = NamedType("FiniteNumber", _is_finite, specificity=2)
NON_ZERO_FINITE_NUMBER = NamedType(
    "NonZeroFiniteNumber", lambda x: _is_finite(x) and x != 0, specificity=3
)
INTEGER = NamedType("Integer", _is_integer, specificity=4)
NON_NEGATIVE_INTEGER = NamedType(
    "NonNegativeInteger", lambda x: _is_integer(x) and x >= 0, specificity=5
)
EITHER = NamedType(
    "Either", lambda x: isinstance(x, Either), arity=2, extract=_either_contents
)
MAYBE = NamedType("Maybe", lambda x: isinstance(x, Maybe), arity=1, extract=_maybe_contents)

# Signature-only types; neither appears in a value's descriptor.
ANY = NamedType("Any", lambda x: True)
TYPE_REP = NamedType("TypeRep", lambda x: isinstance(x, type), arity=1)


DEFAULT_ENV: tuple[NamedType, ...] = (
    FUNCTION,
    ARRAY,
    BOOLEAN,
    DATE,
    ERROR,
    NULL,
    NUMBER,
    OBJECT,
    REGEXP,
    STRING,
    FINITE_NUMBER,
    NON_ZERO_FINITE_NUMBER,
    EITHER,
    INTEGER,
    MAYBE,
    VALID_NUMBER,
)


# =============================================================================
# Rendering Support
# =============================================================================


class TextLayout:
    """
    Accumulates rendered text and records where each keyed part landed.

    Spans are (start, end) column pairs into the final text.
    """

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._length = 0
        self.spans: dict[SpanKey, tuple[int, int]] = {}

    @property
    def position(self) -> int:
        return self._length

    def write(self, text: str) -> None:
        self._parts.append(text)
        self._length += len(text)

    def mark(self, key: SpanKey, start: int) -> None:
        self.spans[key] = (start, self._length)

    @property
    def text(self) -> str:
        return "".join(self._parts)


# =============================================================================
# Type Expressions
# =============================================================================


class TypeExpr(ABC):
    """Base class for the type of a signature slot."""

    @abstractmethod
    def variables(self) -> Iterator[str]:
        """Yield the names of the type variables used, outermost first."""

    @abstractmethod
    def write(self, layout: TextLayout, key: SpanKey, nested: bool = False) -> None:
        """Render into layout, recording the span of each sub-expression."""

    def __str__(self) -> str:
        layout = TextLayout()
        self.write(layout, ())
        return layout.text


def _write_applied(
    layout: TextLayout, key: SpanKey, nested: bool, head: str, args: tuple[TypeExpr, ...]
) -> None:
    parens = nested and bool(args)
    if parens:
        layout.write("(")
    start = layout.position
    layout.write(head)
    for i, arg in enumerate(args):
        layout.write(" ")
        arg.write(layout, key + (i,), nested=True)
    layout.mark(key, start)
    if parens:
        layout.write(")")


@dataclass(frozen=True)
class Concrete(TypeExpr):
    """A named type, possibly applied to type arguments (Array a)."""

    type: NamedType
    args: tuple[TypeExpr, ...] = ()

    def variables(self) -> Iterator[str]:
        for arg in self.args:
            yield from arg.variables()

    def write(self, layout: TextLayout, key: SpanKey, nested: bool = False) -> None:
        _write_applied(layout, key, nested, self.type.name, self.args)


@dataclass(frozen=True)
class Var(TypeExpr):
    """
    A type variable.

    A variable applied to arguments (``f a``) ranges over parameterised
    types; it binds on the outer value and its arguments describe the
    contained values.
    """

    name: str
    args: tuple[TypeExpr, ...] = ()

    def __call__(self, *args: TypeLike) -> Var:
        return Var(self.name, tuple(as_type_expr(arg) for arg in args))

    def variables(self) -> Iterator[str]:
        yield self.name
        for arg in self.args:
            yield from arg.variables()

    def write(self, layout: TextLayout, key: SpanKey, nested: bool = False) -> None:
        _write_applied(layout, key, nested, self.name, self.args)


@dataclass(frozen=True)
class Fn(TypeExpr):
    """A function type. Values are checked for being callable only."""

    params: tuple[TypeExpr, ...]
    result: TypeExpr

    def variables(self) -> Iterator[str]:
        for param in self.params:
            yield from param.variables()
        yield from self.result.variables()

    def write(self, layout: TextLayout, key: SpanKey, nested: bool = False) -> None:
        start = layout.position
        layout.write("(")
        for i, param in enumerate(self.params):
            param.write(layout, key + (i,))
            layout.write(" -> ")
        self.result.write(layout, key + (len(self.params),))
        layout.write(")")
        layout.mark(key, start)


TypeLike = Union[TypeExpr, NamedType, str]


def as_type_expr(value: TypeLike) -> TypeExpr:
    """
    Coerce a NamedType or a variable name to a type expression.

    Raises:
        SignatureError: If the value cannot describe a type
    """
    if isinstance(value, TypeExpr):
        return value
    if isinstance(value, NamedType):
        return Concrete(value)
    if isinstance(value, str) and value.isidentifier():
        return Var(value)
    raise SignatureError(f"{value!r} is not a type")


def fn(*types: TypeLike) -> Fn:
    """Build a function type; the last type is the result."""
    if not types:
        raise SignatureError("a function type needs a result type")
    exprs = tuple(as_type_expr(t) for t in types)
    return Fn(exprs[:-1], exprs[-1])
