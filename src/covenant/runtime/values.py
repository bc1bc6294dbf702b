"""
Generic Type-Class Dispatch.

This module provides the type-class operations as plain functions over
any value: members of a capability interface are dispatched to their
``fl_`` methods, and the Python primitives (numbers, strings, lists,
tuples, dicts, callables) get built-in instances.

    equals(Just(nan), Just(nan))    -> True
    concat([1], [2])                -> [1, 2]
    map(inc, Just(1))               -> Just(2)
    ap(Just(inc), Just(1))          -> Just(2)
"""

from __future__ import annotations

import datetime
import json
import math
import numbers
from collections.abc import Callable
from functools import reduce as functools_reduce
from typing import Any

from covenant.runtime.protocol import (
    Alt,
    Apply,
    Chain,
    Extend,
    Foldable,
    Functor,
    Ord,
    Semigroup,
    Setoid,
    Traversable,
)


# =============================================================================
# Numeric Helpers
# =============================================================================


def is_number(value: Any) -> bool:
    """True for real numbers; booleans are not numbers."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def is_nan(value: Any) -> bool:
    return is_number(value) and value != value


def is_negative_zero(value: Any) -> bool:
    return is_number(value) and value == 0 and math.copysign(1.0, value) < 0


def _type_name(value: Any) -> str:
    return type(value).__name__


def _instant(value: datetime.date) -> datetime.datetime:
    # Dates count as midnight, naive datetimes as UTC.
    if isinstance(value, datetime.datetime):
        if value.utcoffset() is not None:
            return value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
        return value
    return datetime.datetime.combine(value, datetime.time())


# =============================================================================
# Setoid and Ord
# =============================================================================


def equals(x: Any, y: Any) -> bool:
    """
    Value-based equality.

    NaN is equal to NaN, 0.0 is not equal to -0.0, and values of different
    kinds are never equal. Never raises for foreign values.
    """
    if isinstance(x, Setoid):
        return type(x) is type(y) and x.fl_equals(y)
    if is_number(x):
        if not is_number(y):
            return False
        if is_nan(x) or is_nan(y):
            return is_nan(x) and is_nan(y)
        if x == 0 and y == 0:
            return is_negative_zero(x) == is_negative_zero(y)
        return x == y
    if x is None or isinstance(x, bool):
        return x is y
    if isinstance(x, (list, tuple)):
        return (
            type(x) is type(y)
            and len(x) == len(y)
            and all(equals(a, b) for a, b in zip(x, y))
        )
    if isinstance(x, datetime.date):
        return isinstance(y, datetime.date) and _instant(x) == _instant(y)
    if isinstance(x, dict):
        return (
            isinstance(y, dict)
            and x.keys() == y.keys()
            and all(equals(x[k], y[k]) for k in x)
        )
    return x is y or (type(x) is type(y) and x == y)


def lte(x: Any, y: Any) -> bool:
    """
    Total ordering for members of Ord.

    NaN is less than or equal to every number. Dates and datetimes share
    one order.

    Raises:
        TypeError: If the values are not comparable members of Ord
    """
    if isinstance(x, Ord):
        if type(x) is not type(y):
            raise TypeError(f"Cannot compare {_type_name(x)} with {_type_name(y)}")
        return x.fl_lte(y)
    if is_number(x) and is_number(y):
        return is_nan(x) or x <= y
    if isinstance(x, (list, tuple)) and type(x) is type(y):
        for a, b in zip(x, y):
            if not equals(a, b):
                return lte(a, b)
        return len(x) <= len(y)
    if isinstance(x, datetime.date) and isinstance(y, datetime.date):
        return _instant(x) <= _instant(y)
    if isinstance(x, (bool, str)) and type(x) is type(y):
        return x <= y
    raise TypeError(f"Cannot compare {_type_name(x)} with {_type_name(y)}")


# =============================================================================
# Textual Representation
# =============================================================================


def to_string(value: Any) -> str:
    """
    Canonical textual form of a value.

        to_string("abc")           -> '"abc"'
        to_string([1, 2, 3])       -> '[1, 2, 3]'
        to_string(Just(-0.0))      -> 'Just(-0.0)'
    """
    if value is None or isinstance(value, bool):
        return str(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return repr(value)
    if isinstance(value, list):
        return "[" + ", ".join(to_string(item) for item in value) + "]"
    if isinstance(value, tuple):
        if len(value) == 1:
            return f"({to_string(value[0])},)"
        return "(" + ", ".join(to_string(item) for item in value) + ")"
    if isinstance(value, dict):
        items = (f"{to_string(k)}: {to_string(v)}" for k, v in value.items())
        return "{" + ", ".join(items) + "}"
    if isinstance(value, type):
        return value.__name__
    if callable(getattr(value, "to_string", None)):
        return value.to_string()
    return repr(value)


# =============================================================================
# Semigroup and Monoid
# =============================================================================


def concat(x: Any, y: Any) -> Any:
    """
    Combine two members of the same Semigroup.

    Raises:
        TypeError: If the values cannot be concatenated
    """
    if isinstance(x, Semigroup):
        return x.fl_concat(y)
    if isinstance(x, (str, list, tuple)) and type(x) is type(y):
        return x + y
    if isinstance(x, dict) and isinstance(y, dict):
        return {**x, **y}
    raise TypeError(f"Cannot concatenate {_type_name(x)} with {_type_name(y)}")


_EMPTY: dict[type, Callable[[], Any]] = {str: str, list: list, tuple: tuple, dict: dict}


def empty(type_rep: Any) -> Any:
    """Return the identity element of a Monoid, given its type representative."""
    if hasattr(type_rep, "fl_empty"):
        return type_rep.fl_empty()
    if type_rep in _EMPTY:
        return _EMPTY[type_rep]()
    raise TypeError(f"{getattr(type_rep, '__name__', type_rep)!s} is not a Monoid")


# =============================================================================
# Functor, Apply, Applicative, Alt, Chain
# =============================================================================


def of(type_rep: Any, value: Any) -> Any:
    """Lift a value into an Applicative, given its type representative."""
    if hasattr(type_rep, "fl_of"):
        return type_rep.fl_of(value)
    if type_rep is list:
        return [value]
    if type_rep is tuple:
        return (value,)
    raise TypeError(f"{getattr(type_rep, '__name__', type_rep)!s} is not an Applicative")


def map(f: Callable[[Any], Any], functor: Any) -> Any:
    """Apply f inside a Functor."""
    if isinstance(functor, Functor):
        return functor.fl_map(f)
    if isinstance(functor, list):
        return [f(x) for x in functor]
    if isinstance(functor, tuple):
        return tuple(f(x) for x in functor)
    if isinstance(functor, dict):
        return {k: f(v) for k, v in functor.items()}
    if callable(functor):
        return lambda *args: f(functor(*args))
    raise TypeError(f"{_type_name(functor)} is not a Functor")


def ap(apply_f: Any, apply_x: Any) -> Any:
    """Apply the function(s) held by apply_f to the value(s) held by apply_x."""
    if isinstance(apply_x, Apply):
        return apply_x.fl_ap(apply_f)
    if isinstance(apply_x, (list, tuple)) and isinstance(apply_f, (list, tuple)):
        return type(apply_x)(f(x) for f in apply_f for x in apply_x)
    raise TypeError(f"{_type_name(apply_x)} is not an Apply")


def alt(x: Any, y: Any) -> Any:
    """Choose between two alternatives."""
    if isinstance(x, Alt):
        return x.fl_alt(y)
    if isinstance(x, (list, tuple)) and type(x) is type(y):
        return x + y
    raise TypeError(f"{_type_name(x)} is not an Alt")


def chain(f: Callable[[Any], Any], m: Any) -> Any:
    """Apply f, which returns a value of the same Chain, and flatten."""
    if isinstance(m, Chain):
        return m.fl_chain(f)
    if isinstance(m, (list, tuple)):
        return type(m)(y for x in m for y in f(x))
    raise TypeError(f"{_type_name(m)} is not a Chain")


# =============================================================================
# Foldable, Traversable, Extend
# =============================================================================


def reduce(f: Callable[[Any, Any], Any], initial: Any, foldable: Any) -> Any:
    """Left fold over a Foldable."""
    if isinstance(foldable, Foldable):
        return foldable.fl_reduce(f, initial)
    if isinstance(foldable, (list, tuple)):
        return functools_reduce(f, foldable, initial)
    if isinstance(foldable, dict):
        return functools_reduce(f, (foldable[k] for k in sorted(foldable)), initial)
    raise TypeError(f"{_type_name(foldable)} is not a Foldable")


def traverse(of_: Callable[[Any], Any], f: Callable[[Any], Any], traversable: Any) -> Any:
    """
    Map each element to an Applicative action and collect the results.

    ``of_`` lifts a value into the target Applicative.
    """
    if isinstance(traversable, Traversable):
        return traversable.fl_traverse(f, of_)
    if isinstance(traversable, (list, tuple)):
        kind = type(traversable)
        acc = of_(kind())
        for x in traversable:
            acc = ap(map(lambda xs: lambda y: xs + kind((y,)), acc), f(x))
        return acc
    raise TypeError(f"{_type_name(traversable)} is not a Traversable")


def sequence(of_: Callable[[Any], Any], traversable: Any) -> Any:
    """Swap a Traversable of Applicatives into an Applicative of a Traversable."""
    return traverse(of_, lambda x: x, traversable)


def extend(f: Callable[[Any], Any], w: Any) -> Any:
    """Apply f to the whole of w (and each suffix, for sequences)."""
    if isinstance(w, Extend):
        return w.fl_extend(f)
    if isinstance(w, (list, tuple)):
        return type(w)(f(w[i:]) for i in range(len(w)))
    raise TypeError(f"{_type_name(w)} is not an Extend")
