"""
Signature Checker.

Validates the arguments of a call against a Signature:

1. The argument count must fit the signature's arity.
2. Each argument is checked against its slot's type expression:
   - a concrete type must contain the value (and, for Array, Maybe and
     Either, their contents are checked against the type arguments);
   - a function type must be callable;
   - a type variable must satisfy every type class it is constrained by,
     and all values seen for one variable must share at least one type,
     as must the values they contain;
   - a TypeRep a argument must name a type satisfying the classes on a.

``check`` returns Passed or a Violation and has no side effects. ``define``
wraps an implementation so that a violation raises TypeViolationError
before the implementation runs.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional, Union

from covenant.checker.config import CheckerConfig
from covenant.checker.descriptors import describe, rank
from covenant.checker.signature import Signature, Slot
from covenant.checker.type_classes import TypeClass
from covenant.checker.types import (
    TYPE_REP,
    Concrete,
    Fn,
    NamedType,
    SpanKey,
    TypeExpr,
    TypeLike,
    Var,
)
from covenant.runtime.values import to_string
from covenant.utils.diagnostics import (
    Violation,
    ViolationBuilder,
    ViolationKind,
    arity_explanation,
    invalid_value_explanation,
    type_class_explanation,
    type_variable_explanation,
)
from covenant.utils.errors import SignatureError, TypeViolationError

logger = logging.getLogger("covenant.checker")


@dataclass(frozen=True)
class Passed:
    """A successful check, with the type each variable was bound to."""

    bindings: Mapping[str, NamedType] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return True


CheckResult = Union[Passed, Violation]


# A variable name, or (variable, parameter index) for the contents of a
# parameterised value bound to that variable.
_VarKey = Union[str, tuple]


@dataclass
class _Observation:
    position: int
    value: Any
    key: SpanKey


class _CheckState:
    """Per-call unification state. A new one is created for every check."""

    def __init__(self) -> None:
        self.candidates: dict[_VarKey, tuple[NamedType, ...]] = {}
        self.observations: dict[_VarKey, list[_Observation]] = {}


class SignatureChecker:
    """
    Checks calls against signatures using one configuration.

    Usage:
        checker = SignatureChecker()
        gt = checker.define("gt", {"a": ["Ord"]}, ["a", "a", BOOLEAN], impl)
        gt(1, 0)            -> True
        gt(None, 0)         -> raises TypeViolationError
    """

    def __init__(self, config: Optional[CheckerConfig] = None) -> None:
        self.config = config if config is not None else CheckerConfig()

    # -------------------------------------------------------------------------
    # Checking
    # -------------------------------------------------------------------------

    def check(self, signature: Signature, args: Sequence[Any]) -> CheckResult:
        """Validate args against signature."""
        violation = self._check_arity(signature, args)
        if violation is not None:
            return violation

        state = _CheckState()
        for index, value in enumerate(args):
            slot_index = signature.slot_for(index)
            slot = signature.slots[slot_index]
            violation = self._check_value(
                signature, state, slot.type, value, index + 1, (slot_index,)
            )
            if violation is not None:
                logger.debug(
                    "%s: %s at position %d", signature.name, violation.kind.value, index + 1
                )
                return violation

        bindings = {
            var: candidates[0]
            for var, candidates in state.candidates.items()
            if isinstance(var, str)
        }
        if bindings:
            logger.debug(
                "%s: bound %s",
                signature.name,
                ", ".join(f"{var} = {t}" for var, t in bindings.items()),
            )
        return Passed(MappingProxyType(bindings))

    def _check_arity(self, signature: Signature, args: Sequence[Any]) -> Optional[Violation]:
        received = len(args)
        if signature.is_variadic:
            if received >= signature.min_arity:
                return None
        elif received == signature.min_arity:
            return None

        return (
            ViolationBuilder(ViolationKind.ARITY, signature.name, signature.rendered.text)
            .explain(
                arity_explanation(
                    signature.name, signature.min_arity, received, signature.is_variadic
                )
            )
            .build()
        )

    def _check_value(
        self,
        signature: Signature,
        state: _CheckState,
        expr: TypeExpr,
        value: Any,
        position: int,
        key: SpanKey,
    ) -> Optional[Violation]:
        if isinstance(expr, Var):
            return self._check_variable(signature, state, expr, value, position, key)

        if isinstance(expr, Fn):
            if callable(value):
                return None
            return self._invalid_value(signature, str(expr), value, position, key)

        if not isinstance(expr, Concrete):
            raise SignatureError(f"unsupported type expression {expr!r}", signature.name)
        if not expr.type.test(value):
            return self._invalid_value(signature, str(expr), value, position, key)
        if expr.type == TYPE_REP:
            return self._check_type_rep(signature, expr.args, value, position, key)
        if expr.args and expr.type.extract is not None:
            return self._check_contents(
                signature, state, expr.args, expr.type.extract(value), position, key
            )
        return None

    def _check_type_rep(
        self,
        signature: Signature,
        args: tuple[TypeExpr, ...],
        type_rep: type,
        position: int,
        key: SpanKey,
    ) -> Optional[Violation]:
        # TypeRep a: the representative must name a member of every class on a.
        registry = self.config.registry
        for arg in args:
            if not isinstance(arg, Var):
                continue
            for type_class in signature.constraints_on(arg.name):
                if not registry.satisfies_type_rep(type_class, type_rep):
                    return self._type_class_violation(
                        signature, arg.name, type_class, type_rep, position, key
                    )
        return None

    def _check_contents(
        self,
        signature: Signature,
        state: _CheckState,
        args: tuple[TypeExpr, ...],
        contents: tuple[tuple[Any, ...], ...],
        position: int,
        key: SpanKey,
    ) -> Optional[Violation]:
        # Type arguments describe the trailing parameters of the container.
        contents = contents[len(contents) - len(args):]
        for i, (arg, items) in enumerate(zip(args, contents)):
            for item in items:
                violation = self._check_value(signature, state, arg, item, position, key + (i,))
                if violation is not None:
                    return violation
        return None

    def _check_variable(
        self,
        signature: Signature,
        state: _CheckState,
        var: Var,
        value: Any,
        position: int,
        key: SpanKey,
    ) -> Optional[Violation]:
        registry = self.config.registry
        for type_class in signature.constraints_on(var.name):
            if not registry.satisfies(type_class, value):
                return self._type_class_violation(
                    signature, var.name, type_class, value, position, key
                )

        violation = self._unify(signature, state, var.name, value, position, key, len(var.args))
        if violation is not None or not var.args:
            return violation

        extractor = next(
            (
                t
                for t in state.candidates[var.name]
                if t.extract is not None and t.arity >= len(var.args)
            ),
            None,
        )
        if extractor is not None:
            return self._check_contents(
                signature, state, var.args, extractor.extract(value), position, key
            )
        return None

    def _unify(
        self,
        signature: Signature,
        state: _CheckState,
        name: _VarKey,
        value: Any,
        position: int,
        key: SpanKey,
        named: int = 0,
    ) -> Optional[Violation]:
        """
        Narrow the candidate types of a variable by one more value.

        The contents of a parameterised value are unified too, one hidden
        variable per type parameter, so Array Number and Array String do not
        share a type. The trailing ``named`` parameters are described by the
        variable's own type arguments and are left to the caller.
        """
        ranked = rank(describe(value, self.config.env))
        current = state.candidates.get(name)
        candidates = ranked if current is None else tuple(t for t in current if t in ranked)
        state.observations.setdefault(name, []).append(_Observation(position, value, key))
        if not candidates:
            return self._type_variable_violation(signature, state.observations[name])
        state.candidates[name] = candidates

        extractor = next(
            (t for t in candidates if t.extract is not None and t.arity >= named), None
        )
        if extractor is None:
            return None
        params = extractor.extract(value)
        for index, items in enumerate(params[: len(params) - named]):
            for item in items:
                violation = self._unify(signature, state, (name, index), item, position, key)
                if violation is not None:
                    return violation
        return None

    # -------------------------------------------------------------------------
    # Violations
    # -------------------------------------------------------------------------

    def _type_names(self, value: Any) -> tuple[str, ...]:
        return tuple(t.name for t in describe(value, self.config.env))

    def _invalid_value(
        self, signature: Signature, type_text: str, value: Any, position: int, key: SpanKey
    ) -> Violation:
        rendered = signature.rendered
        builder = ViolationBuilder(ViolationKind.INVALID_VALUE, signature.name, rendered.text)
        builder.value(position, to_string(value), self._type_names(value), rendered.spans.get(key))
        return builder.explain(invalid_value_explanation(type_text, 1)).build()

    def _type_class_violation(
        self,
        signature: Signature,
        var: str,
        type_class: str,
        value: Any,
        position: int,
        key: SpanKey,
    ) -> Violation:
        rendered = signature.rendered
        builder = ViolationBuilder(ViolationKind.TYPE_CLASS, signature.name, rendered.text)
        start, end = rendered.constraint_spans[(type_class, var)]
        builder.underline(start, end)
        builder.value(position, to_string(value), self._type_names(value), rendered.spans.get(key))
        explanation = type_class_explanation(signature.name, var, type_class, 1)
        return builder.explain(explanation).build()

    def _type_variable_violation(
        self, signature: Signature, observations: list[_Observation]
    ) -> Violation:
        rendered = signature.rendered
        builder = ViolationBuilder(ViolationKind.TYPE_VARIABLE, signature.name, rendered.text)
        for observation in observations:
            builder.value(
                observation.position,
                to_string(observation.value),
                self._type_names(observation.value),
                rendered.spans.get(observation.key),
            )
        return builder.explain(type_variable_explanation()).build()

    # -------------------------------------------------------------------------
    # Definition
    # -------------------------------------------------------------------------

    def signature(
        self,
        name: str,
        constraints: Mapping[str, Iterable[Union[str, TypeClass]]],
        types: Sequence[Union[TypeLike, Slot]],
    ) -> Signature:
        return Signature.build(name, constraints, types, self.config.registry)

    def define(
        self,
        name: str,
        constraints: Mapping[str, Iterable[Union[str, TypeClass]]],
        types: Sequence[Union[TypeLike, Slot]],
        impl: Callable[..., Any],
    ) -> Callable[..., Any]:
        """
        Wrap impl so that every call is checked against the signature.

        The signature is validated immediately, whether or not checking is
        enabled.

        Raises:
            SignatureError: If the signature is malformed
        """
        signature = self.signature(name, constraints, types)
        if not self.config.check_types:
            return impl

        @functools.wraps(impl)
        def wrapper(*args: Any) -> Any:
            result = self.check(signature, args)
            if isinstance(result, Violation):
                raise TypeViolationError(result)
            return impl(*args)

        wrapper.signature = signature  # type: ignore[attr-defined]
        return wrapper

    def checked(
        self,
        constraints: Mapping[str, Iterable[Union[str, TypeClass]]],
        types: Sequence[Union[TypeLike, Slot]],
        name: Optional[str] = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """
        Decorator form of define; the name defaults to the function's.

            @checker.checked({"a": ["Ord"]}, ["a", "a", BOOLEAN])
            def gt(x, y): ...
        """

        def decorator(impl: Callable[..., Any]) -> Callable[..., Any]:
            return self.define(name or impl.__name__, constraints, types, impl)

        return decorator


def define(
    name: str,
    constraints: Mapping[str, Iterable[Union[str, TypeClass]]],
    types: Sequence[Union[TypeLike, Slot]],
    impl: Callable[..., Any],
    config: Optional[CheckerConfig] = None,
) -> Callable[..., Any]:
    """Define a checked function with a one-off checker."""
    return SignatureChecker(config).define(name, constraints, types, impl)
