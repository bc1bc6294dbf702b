"""
Function Signatures.

A Signature describes a checked function: its name, the type-class
constraints on its type variables, one Slot per parameter and a result
type. Rendering records the column span of every constraint and of every
sub-expression of every slot, so diagnostics can point at them:

    gt :: Ord a => a -> a -> Boolean
          ^^^^^    ^    ^
          ("Ord", "a")  (0,)  (1,)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from functools import cached_property
from typing import Optional, Union

from covenant.checker.type_classes import DEFAULT_REGISTRY, TypeClass, TypeClassRegistry
from covenant.checker.types import SpanKey, TextLayout, TypeExpr, TypeLike, as_type_expr
from covenant.utils.errors import SignatureError


@dataclass(frozen=True)
class Constraint:
    """A type-class constraint on one type variable (``Ord a``)."""

    type_class: str
    var: str

    def __str__(self) -> str:
        return f"{self.type_class} {self.var}"


@dataclass(frozen=True)
class Slot:
    """One parameter position. A variadic slot takes every remaining argument."""

    type: TypeExpr
    variadic: bool = False


def variadic(type_: TypeLike) -> Slot:
    """Mark the last parameter as taking any number of arguments."""
    return Slot(as_type_expr(type_), variadic=True)


@dataclass(frozen=True)
class RenderedSignature:
    """
    Signature text with the spans of its parts.

    Attributes:
        text: The signature as shown to users
        spans: Slot sub-expression spans, keyed by slot index and argument path
        constraint_spans: Constraint spans, keyed by (type class, variable)
    """

    text: str
    spans: Mapping[SpanKey, tuple[int, int]]
    constraint_spans: Mapping[tuple[str, str], tuple[int, int]]


@dataclass(frozen=True)
class Signature:
    """A checked function's name, constraints, parameter slots and result."""

    name: str
    constraints: tuple[Constraint, ...]
    slots: tuple[Slot, ...]
    returns: TypeExpr

    def __post_init__(self) -> None:
        for slot in self.slots[:-1]:
            if slot.variadic:
                raise SignatureError("only the last parameter may be variadic", self.name)

        used = set(self.returns.variables())
        for slot in self.slots:
            used.update(slot.type.variables())
        for constraint in self.constraints:
            if constraint.var not in used:
                raise SignatureError(
                    f"constraint {constraint} names a type variable that is not used",
                    self.name,
                )

    @classmethod
    def build(
        cls,
        name: str,
        constraints: Mapping[str, Iterable[Union[str, TypeClass]]],
        types: Sequence[Union[TypeLike, Slot]],
        registry: TypeClassRegistry = DEFAULT_REGISTRY,
    ) -> Signature:
        """
        Build a signature from a constraint mapping and a list of types.

        The last entry of ``types`` is the result type.

        Usage:
            Signature.build("gt", {"a": ["Ord"]}, ["a", "a", BOOLEAN])

        Raises:
            SignatureError: If a type class is unknown, a constrained
                variable is unused, or a variadic slot is not last
        """
        if not types:
            raise SignatureError("at least a result type is required", name)

        flat: list[Constraint] = []
        for var, classes in constraints.items():
            for type_class in classes:
                class_name = type_class.name if isinstance(type_class, TypeClass) else type_class
                if class_name not in registry:
                    raise SignatureError(f"unknown type class ‘{class_name}’", name)
                flat.append(Constraint(class_name, var))

        *params, result = types
        if isinstance(result, Slot):
            raise SignatureError("the result type cannot be variadic", name)
        slots = tuple(p if isinstance(p, Slot) else Slot(as_type_expr(p)) for p in params)
        return cls(name, tuple(flat), slots, as_type_expr(result))

    # -------------------------------------------------------------------------
    # Arity
    # -------------------------------------------------------------------------

    @property
    def is_variadic(self) -> bool:
        return bool(self.slots) and self.slots[-1].variadic

    @property
    def min_arity(self) -> int:
        return len(self.slots) - 1 if self.is_variadic else len(self.slots)

    @property
    def max_arity(self) -> Optional[int]:
        """None when the signature takes any number of trailing arguments."""
        return None if self.is_variadic else len(self.slots)

    def slot_for(self, index: int) -> int:
        """Index of the slot that checks the argument at the 0-based index."""
        if self.is_variadic and index >= len(self.slots) - 1:
            return len(self.slots) - 1
        return index

    def constraints_on(self, var: str) -> tuple[str, ...]:
        return tuple(c.type_class for c in self.constraints if c.var == var)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    @cached_property
    def rendered(self) -> RenderedSignature:
        layout = TextLayout()
        constraint_spans: dict[tuple[str, str], tuple[int, int]] = {}

        layout.write(f"{self.name} :: ")
        if self.constraints:
            grouped = len(self.constraints) > 1
            if grouped:
                layout.write("(")
            for i, constraint in enumerate(self.constraints):
                if i:
                    layout.write(", ")
                start = layout.position
                layout.write(str(constraint))
                constraint_spans[(constraint.type_class, constraint.var)] = (
                    start,
                    layout.position,
                )
            if grouped:
                layout.write(")")
            layout.write(" => ")

        for i, slot in enumerate(self.slots):
            if slot.variadic:
                layout.write("...")
            slot.type.write(layout, (i,))
            layout.write(" -> ")
        self.returns.write(layout, (len(self.slots),))

        return RenderedSignature(layout.text, dict(layout.spans), constraint_spans)

    def __str__(self) -> str:
        return self.rendered.text
