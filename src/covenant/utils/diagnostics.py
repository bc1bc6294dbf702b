"""
Signature Violation Diagnostics for covenant.

This module turns a signature violation into the multi-section report
attached to a TypeViolationError. Rendering is a pure function of the
Violation record, so reports can be tested by feeding synthetic records.

Example output:
    Type-variable constraint violation

    gt :: Ord a => a -> a -> Boolean
                   ^    ^
                   1    2

    1)  "abc" :: String

    2)  123 :: Number, FiniteNumber, NonZeroFiniteNumber, Integer, ValidNumber

    Since there is no type of which all the above values are members, the
    type-variable constraint has been violated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


# =============================================================================
# Error Codes Catalog
# =============================================================================


class ErrorCode:
    """
    Centralized catalog of violation codes.

    - V01xx: violations detected at a checked call boundary
    """

    V0101 = "V0101"  # type-class constraint violation
    V0102 = "V0102"  # type-variable constraint violation
    V0103 = "V0103"  # invalid value
    V0104 = "V0104"  # wrong number of arguments


ERROR_DESCRIPTIONS: dict[str, str] = {
    ErrorCode.V0101: "type-class constraint violation",
    ErrorCode.V0102: "type-variable constraint violation",
    ErrorCode.V0103: "invalid value",
    ErrorCode.V0104: "wrong number of arguments",
}


# =============================================================================
# Violation Records
# =============================================================================


class ViolationKind(Enum):
    """The kind of rule a call violated; the value is the report title."""

    TYPE_CLASS = "Type-class constraint violation"
    TYPE_VARIABLE = "Type-variable constraint violation"
    INVALID_VALUE = "Invalid value"
    ARITY = "Arity violation"

    @property
    def code(self) -> str:
        codes = {
            ViolationKind.TYPE_CLASS: ErrorCode.V0101,
            ViolationKind.TYPE_VARIABLE: ErrorCode.V0102,
            ViolationKind.INVALID_VALUE: ErrorCode.V0103,
            ViolationKind.ARITY: ErrorCode.V0104,
        }
        return codes[self]


@dataclass(frozen=True, slots=True)
class Underline:
    """
    A marked range of the rendered signature.

    Attributes:
        start: 0-indexed column of the first marked character
        end: 0-indexed column one past the last marked character
        label: Text printed beneath the carets (usually a value number)
    """

    start: int
    end: int
    label: str = ""

    @property
    def width(self) -> int:
        return max(1, self.end - self.start)


@dataclass(frozen=True, slots=True)
class OffendingValue:
    """One enumerated value of a report, with its descriptive types."""

    number: int
    text: str
    types: tuple[str, ...]

    def render(self) -> str:
        return f"{self.number})  {self.text} :: {', '.join(self.types)}"


@dataclass(frozen=True)
class Violation:
    """
    A structured signature violation.

    Attributes:
        kind: Which rule was violated
        function_name: Name of the checked function
        signature_text: The signature as rendered for the report
        underlines: Marked ranges of signature_text
        values: Enumerated offending values
        explanation: Closing sentence naming the violated rule
        positions: 1-based argument positions implicated in the violation
    """

    kind: ViolationKind
    function_name: str
    signature_text: str
    underlines: tuple[Underline, ...] = ()
    values: tuple[OffendingValue, ...] = ()
    explanation: str = ""
    positions: tuple[int, ...] = ()

    @property
    def code(self) -> str:
        return self.kind.code

    def __str__(self) -> str:
        return render_violation(self)


# =============================================================================
# Rendering
# =============================================================================


def render_markers(underlines: tuple[Underline, ...] | list[Underline]) -> tuple[str, str]:
    """
    Render the caret line and the label line for a set of underlines.

    Labels are centred beneath their carets; a label that would collide
    with the previous one is pushed right.

    Returns:
        (caret_line, label_line), both with trailing whitespace removed
    """
    carets: list[str] = []
    labels: list[str] = []

    for underline in sorted(underlines, key=lambda u: u.start):
        if len(carets) < underline.start:
            carets.extend(" " * (underline.start - len(carets)))
        for col in range(underline.start, underline.start + underline.width):
            if col < len(carets):
                carets[col] = "^"
            else:
                carets.append("^")

        if underline.label:
            col = underline.start + (underline.width - len(underline.label)) // 2
            if labels:
                col = max(col, len(labels) + 1)
            labels.extend(" " * (col - len(labels)))
            labels.extend(underline.label)

    return "".join(carets).rstrip(), "".join(labels).rstrip()


def render_violation(violation: Violation) -> str:
    """
    Render a violation as a human-readable report.

    The output is deterministic and ends with a newline.
    """
    signature_block = [violation.signature_text]
    if violation.underlines:
        caret_line, label_line = render_markers(violation.underlines)
        signature_block.append(caret_line)
        if label_line:
            signature_block.append(label_line)

    sections = [violation.kind.value, "\n".join(signature_block)]
    sections.extend(value.render() for value in violation.values)
    if violation.explanation:
        sections.append(violation.explanation)

    return "\n\n".join(sections) + "\n"


# =============================================================================
# Violation Builder (Fluent API)
# =============================================================================


class ViolationBuilder:
    """
    Fluent builder for Violation records.

        ViolationBuilder(ViolationKind.TYPE_CLASS, "gt", text)
            .underline(6, 11)
            .value(position=1, text="None", types=("Null",), span=(15, 16))
            .explain(...)
            .build()

    Values are numbered in the order they are added; the number becomes
    the label of the value's span.
    """

    def __init__(self, kind: ViolationKind, function_name: str, signature_text: str) -> None:
        self._kind = kind
        self._function_name = function_name
        self._signature_text = signature_text
        self._underlines: list[Underline] = []
        self._labelled: dict[tuple[int, int], list[str]] = {}
        self._values: list[OffendingValue] = []
        self._positions: list[int] = []
        self._explanation = ""

    def underline(self, start: int, end: int, label: str = "") -> ViolationBuilder:
        """Mark a range of the signature without attaching a value."""
        self._underlines.append(Underline(start, end, label))
        return self

    def value(
        self,
        position: int,
        text: str,
        types: tuple[str, ...],
        span: Optional[tuple[int, int]] = None,
    ) -> ViolationBuilder:
        """Enumerate an offending value, optionally marking its span."""
        number = len(self._values) + 1
        self._values.append(OffendingValue(number, text, types))
        if position not in self._positions:
            self._positions.append(position)
        if span is not None:
            self._labelled.setdefault(span, []).append(str(number))
        return self

    def explain(self, explanation: str) -> ViolationBuilder:
        self._explanation = explanation
        return self

    @property
    def value_count(self) -> int:
        return len(self._values)

    def build(self) -> Violation:
        """Build the violation record."""
        underlines = list(self._underlines)
        for (start, end), numbers in self._labelled.items():
            underlines.append(Underline(start, end, ",".join(numbers)))
        return Violation(
            kind=self._kind,
            function_name=self._function_name,
            signature_text=self._signature_text,
            underlines=tuple(sorted(underlines, key=lambda u: (u.start, u.end))),
            values=tuple(self._values),
            explanation=self._explanation,
            positions=tuple(self._positions),
        )


# =============================================================================
# Common Explanations
# =============================================================================


def type_class_explanation(function_name: str, var: str, type_class: str, number: int) -> str:
    return (
        f"‘{function_name}’ requires ‘{var}’ to satisfy the {type_class} type-class "
        f"constraint; the value at position {number} does not."
    )


def type_variable_explanation() -> str:
    return (
        "Since there is no type of which all the above values are members, "
        "the type-variable constraint has been violated."
    )


def invalid_value_explanation(type_name: str, number: int) -> str:
    return f"The value at position {number} is not a member of ‘{type_name}’."


def arity_explanation(function_name: str, expected: int, received: int, variadic: bool) -> str:
    """Explain a wrong argument count."""
    quantity = f"at least {expected}" if variadic else str(expected)
    noun = "argument" if expected == 1 else "arguments"
    return f"‘{function_name}’ expects {quantity} {noun} but received {received}."


__all__ = [
    "ErrorCode",
    "ERROR_DESCRIPTIONS",
    "ViolationKind",
    "Underline",
    "OffendingValue",
    "Violation",
    "ViolationBuilder",
    "render_markers",
    "render_violation",
    "type_class_explanation",
    "type_variable_explanation",
    "invalid_value_explanation",
    "arity_explanation",
]
