"""
Unit tests for the signature checker.
"""

import logging

import pytest

from covenant.checker import (
    BOOLEAN,
    FINITE_NUMBER,
    INTEGER,
    MAYBE,
    NON_ZERO_FINITE_NUMBER,
    ARRAY,
    TYPE_REP,
    Passed,
    SignatureChecker,
    TypeExpr,
    Var,
    define,
    fn,
    variadic,
)
from covenant.runtime import Either, Just, Left, Nothing, Right
from covenant.utils import (
    SignatureError,
    TypeViolationError,
    Violation,
    ViolationKind,
    render_violation,
)
from covenant.utils.diagnostics import ErrorCode

a, f = Var("a"), Var("f")


@pytest.fixture
def gt_signature(signature_factory):
    return signature_factory("gt", {"a": ["Ord"]}, ["a", "a", BOOLEAN])


class TestPassing:
    """Tests for calls that satisfy their signature."""

    def test_binds_narrowest_type(self, checker, gt_signature):
        """Test a variable binds to the narrowest shared type."""
        result = checker.check(gt_signature, (1, 0))
        assert isinstance(result, Passed)
        assert result.bindings["a"] == INTEGER

    def test_binding_narrows_across_values(self, checker, gt_signature):
        """Test integers and fractions unify on a shared numeric type."""
        assert checker.check(gt_signature, (1, 1.5)).bindings["a"] == NON_ZERO_FINITE_NUMBER
        assert checker.check(gt_signature, (0, 1.5)).bindings["a"] == FINITE_NUMBER

    def test_strings(self, checker, gt_signature):
        """Test strings satisfy Ord."""
        assert checker.check(gt_signature, ("a", "b")).bindings["a"].name == "String"

    def test_each_check_is_independent(self, checker, gt_signature):
        """Test bindings do not leak between checks."""
        assert isinstance(checker.check(gt_signature, ("a", "b")), Passed)
        assert isinstance(checker.check(gt_signature, (1, 2)), Passed)

    def test_passed_is_truthy(self, checker, gt_signature):
        """Test a passed result is truthy."""
        assert checker.check(gt_signature, (1, 2))

    def test_unconstrained_variable(self, checker, signature_factory):
        """Test variables without constraints still unify."""
        signature = signature_factory("I", {}, ["a", "a"])
        assert isinstance(checker.check(signature, (None,)), Passed)


class TestArity:
    """Tests for argument count violations."""

    def test_too_few(self, checker, gt_signature):
        """Test a missing argument."""
        violation = checker.check(gt_signature, (1,))
        assert isinstance(violation, Violation)
        assert violation.kind is ViolationKind.ARITY
        assert violation.explanation == "‘gt’ expects 2 arguments but received 1."

    def test_too_many(self, checker, gt_signature):
        """Test an extra argument."""
        violation = checker.check(gt_signature, (1, 2, 3))
        assert violation.kind is ViolationKind.ARITY
        assert render_violation(violation) == (
            "Arity violation\n"
            "\n"
            "gt :: Ord a => a -> a -> Boolean\n"
            "\n"
            "‘gt’ expects 2 arguments but received 3.\n"
        )

    def test_variadic(self, checker, signature_factory):
        """Test a variadic signature needs its fixed arguments."""
        signature = signature_factory("minimum", {"a": ["Ord"]}, ["a", variadic("a"), "a"])
        violation = checker.check(signature, ())
        assert violation.explanation == "‘minimum’ expects at least 1 argument but received 0."
        assert isinstance(checker.check(signature, (1,)), Passed)
        assert isinstance(checker.check(signature, (1, 2, 3, 4)), Passed)


class TestTypeClassViolations:
    """Tests for unsatisfied type-class constraints."""

    def test_second_position(self, checker, gt_signature):
        """Test the offending position is reported."""
        violation = checker.check(gt_signature, (1, None))
        assert violation.kind is ViolationKind.TYPE_CLASS
        assert violation.positions == (2,)
        assert violation.values[0].text == "None"
        assert violation.values[0].types == ("Null",)
        assert violation.code == ErrorCode.V0101

    def test_underlines_constraint_and_value(self, checker, gt_signature):
        """Test the constraint and the value's slot are marked."""
        violation = checker.check(gt_signature, (1, None))
        spans = [(u.start, u.end, u.label) for u in violation.underlines]
        assert spans == [(6, 11, ""), (20, 21, "1")]

    def test_class_checked_before_unification(self, checker, gt_signature):
        """Test a non-Ord value is reported even when types also conflict."""
        violation = checker.check(gt_signature, ("a", {"k": 1}))
        assert violation.kind is ViolationKind.TYPE_CLASS

    def test_variadic_values_are_checked(self, checker, signature_factory):
        """Test every argument of a variadic slot is checked."""
        signature = signature_factory("minimum", {"a": ["Ord"]}, ["a", variadic("a"), "a"])
        violation = checker.check(signature, (1, 2, None))
        assert violation.kind is ViolationKind.TYPE_CLASS
        assert violation.positions == (3,)


class TestTypeVariableViolations:
    """Tests for values that share no type."""

    def test_lists_every_value(self, checker, gt_signature):
        """Test every value of the variable is enumerated."""
        violation = checker.check(gt_signature, ("abc", 123))
        assert violation.kind is ViolationKind.TYPE_VARIABLE
        assert [v.text for v in violation.values] == ['"abc"', "123"]
        assert violation.positions == (1, 2)
        assert violation.code == ErrorCode.V0102

    def test_bool_and_number_conflict(self, checker, gt_signature):
        """Test booleans are not numbers."""
        violation = checker.check(gt_signature, (True, 1))
        assert violation.kind is ViolationKind.TYPE_VARIABLE

    def test_contents_of_arrays(self, checker, signature_factory):
        """Test values inside an array unify with each other."""
        signature = signature_factory("first", {}, [ARRAY(a), MAYBE(a)])
        violation = checker.check(signature, ([1, "x"],))
        assert violation.kind is ViolationKind.TYPE_VARIABLE
        assert [v.text for v in violation.values] == ["1", '"x"']
        assert [u.label for u in violation.underlines] == ["1,2"]

    def test_higher_kinded_outer_types(self, checker, signature_factory):
        """Test a higher-kinded variable binds on the outer value."""
        signature = signature_factory("alt", {"f": ["Alt"]}, [f(a), f(a), f(a)])
        violation = checker.check(signature, (Just(1), Right(1)))
        assert violation.kind is ViolationKind.TYPE_VARIABLE
        assert [v.types for v in violation.values] == [("Maybe",), ("Either",)]

    def test_higher_kinded_contents(self, checker, signature_factory):
        """Test a higher-kinded variable recurses into contained values."""
        signature = signature_factory("alt", {"f": ["Alt"]}, [f(a), f(a), f(a)])
        violation = checker.check(signature, (Just(1), Just("x")))
        assert violation.kind is ViolationKind.TYPE_VARIABLE
        spans = [(u.start, u.end, u.label) for u in violation.underlines]
        assert spans == [(18, 19, "1"), (25, 26, "2")]

    def test_nothing_has_no_contents(self, checker, signature_factory):
        """Test Nothing contributes no contained values."""
        signature = signature_factory("alt", {"f": ["Alt"]}, [f(a), f(a), f(a)])
        assert isinstance(checker.check(signature, (Nothing, Just("x"))), Passed)


class TestInvalidValues:
    """Tests for concrete type mismatches."""

    def test_concrete(self, checker, signature_factory):
        """Test a value outside a concrete type."""
        signature = signature_factory("inc", {}, [FINITE_NUMBER, FINITE_NUMBER])
        violation = checker.check(signature, ("x",))
        assert violation.kind is ViolationKind.INVALID_VALUE
        assert violation.explanation == "The value at position 1 is not a member of ‘FiniteNumber’."
        assert violation.code == ErrorCode.V0103

    def test_function_type(self, checker, signature_factory):
        """Test a function slot requires a callable."""
        signature = signature_factory("T", {}, [a, fn(a, Var("b")), Var("b")])
        violation = checker.check(signature, (1, 2))
        assert violation.kind is ViolationKind.INVALID_VALUE
        assert violation.positions == (2,)
        assert "‘(a -> b)’" in violation.explanation

    def test_applied_type(self, checker, signature_factory):
        """Test an applied concrete type names itself in full."""
        signature = signature_factory("is_just", {}, [MAYBE(a), BOOLEAN])
        violation = checker.check(signature, (1,))
        assert "‘Maybe a’" in violation.explanation


class TestContainedValues:
    """Tests for unifying the values held by containers."""

    def test_arrays_of_different_types(self, checker, gt_signature):
        """Test arrays only share a type when their elements do."""
        violation = checker.check(gt_signature, ([1], ["a"]))
        assert violation.kind is ViolationKind.TYPE_VARIABLE
        assert [v.text for v in violation.values] == ["1", '"a"']
        assert violation.positions == (1, 2)

    def test_arrays_of_compatible_numbers(self, checker, gt_signature):
        result = checker.check(gt_signature, ([1], [2.5]))
        assert result.bindings["a"].name == "Array"

    def test_nested_arrays(self, checker, gt_signature):
        violation = checker.check(gt_signature, ([[1]], [["x"]]))
        assert violation.kind is ViolationKind.TYPE_VARIABLE

    def test_mixed_array(self, checker, signature_factory):
        """Test the elements of a single array unify with each other."""
        signature = signature_factory("I", {}, ["a", "a"])
        violation = checker.check(signature, ([1, "x"],))
        assert violation.kind is ViolationKind.TYPE_VARIABLE
        assert violation.positions == (1,)

    def test_maybe_contents(self, checker, signature_factory):
        signature = signature_factory("equals", {"a": ["Setoid"]}, ["a", "a", BOOLEAN])
        violation = checker.check(signature, (Just(1), Just("x")))
        assert violation.kind is ViolationKind.TYPE_VARIABLE
        assert isinstance(checker.check(signature, (Just(1), Nothing)), Passed)

    def test_either_sides_are_separate(self, checker, signature_factory):
        """Test Left and Right contents unify independently."""
        signature = signature_factory("equals", {"a": ["Setoid"]}, ["a", "a", BOOLEAN])
        assert isinstance(checker.check(signature, (Left(1), Right("x"))), Passed)
        violation = checker.check(signature, (Left(1), Left("x")))
        assert violation.kind is ViolationKind.TYPE_VARIABLE

    def test_bindings_name_declared_variables(self, checker, gt_signature):
        result = checker.check(gt_signature, ([1], [2]))
        assert set(result.bindings) == {"a"}

    def test_higher_kinded_leading_parameter(self, checker, signature_factory):
        """Test the Left side of f a is unified across values."""
        signature = signature_factory("alt", {"f": ["Alt"]}, [f(a), f(a), f(a)])
        assert isinstance(checker.check(signature, (Left(1), Right("x"))), Passed)
        violation = checker.check(signature, (Left(1), Left("x")))
        assert violation.kind is ViolationKind.TYPE_VARIABLE


class TestTypeRepresentatives:
    """Tests for TypeRep arguments."""

    @pytest.fixture
    def empty_signature(self, signature_factory):
        return signature_factory("empty", {"a": ["Monoid"]}, [TYPE_REP(a), a])

    def test_rendered(self, empty_signature):
        assert str(empty_signature) == "empty :: Monoid a => TypeRep a -> a"

    def test_member(self, checker, empty_signature):
        assert isinstance(checker.check(empty_signature, (str,)), Passed)

    def test_non_member(self, checker, empty_signature):
        """Test a type outside the class is a type-class violation."""
        violation = checker.check(empty_signature, (Either,))
        assert violation.kind is ViolationKind.TYPE_CLASS
        assert violation.positions == (1,)
        assert violation.values[0].text == "Either"

    def test_not_a_type(self, checker, empty_signature):
        violation = checker.check(empty_signature, ("str",))
        assert violation.kind is ViolationKind.INVALID_VALUE


class TestUnsupportedExpressions:
    """Tests for type expressions the checker cannot interpret."""

    class Opaque(TypeExpr):
        def variables(self):
            return iter(())

        def write(self, layout, key, nested=False):
            start = layout.position
            layout.write("Opaque")
            layout.mark(key, start)

    def test_raises_signature_error(self, checker, signature_factory):
        signature = signature_factory("g", {}, [self.Opaque(), BOOLEAN])
        with pytest.raises(SignatureError):
            checker.check(signature, (1,))


class TestDefine:
    """Tests for wrapping implementations."""

    def test_wrapper_calls_impl(self, checker):
        """Test a passing call runs the implementation."""
        gt = checker.define("gt", {"a": ["Ord"]}, ["a", "a", BOOLEAN], lambda x, y: x > y)
        assert gt(2, 1) is True

    def test_violation_prevents_call(self, checker):
        """Test the implementation never runs after a violation."""
        calls = []

        def impl(x, y):
            calls.append((x, y))
            return True

        gt = checker.define("gt", {"a": ["Ord"]}, ["a", "a", BOOLEAN], impl)
        with pytest.raises(TypeViolationError) as exc_info:
            gt(None, 1)
        assert calls == []
        assert exc_info.value.violation.kind is ViolationKind.TYPE_CLASS
        assert exc_info.value.code == ErrorCode.V0101
        assert str(exc_info.value) == render_violation(exc_info.value.violation)

    def test_violation_error_is_type_error(self, checker):
        """Test violations can be caught as TypeError."""
        inc = checker.define("inc", {}, [FINITE_NUMBER, FINITE_NUMBER], lambda x: x + 1)
        with pytest.raises(TypeError):
            inc("x")

    def test_wrapper_metadata(self, checker):
        """Test the wrapper keeps the implementation's name and exposes its signature."""

        def greater(x, y):
            return x > y

        gt = checker.define("gt", {"a": ["Ord"]}, ["a", "a", BOOLEAN], greater)
        assert gt.__name__ == "greater"
        assert str(gt.signature) == "gt :: Ord a => a -> a -> Boolean"

    def test_checking_disabled(self, checker_factory):
        """Test disabled checking returns the implementation itself."""
        unchecked = checker_factory(check_types=False)

        def impl(x, y):
            return x > y

        assert unchecked.define("gt", {"a": ["Ord"]}, ["a", "a", BOOLEAN], impl) is impl

    def test_signature_validated_when_disabled(self, checker_factory):
        """Test malformed signatures are rejected even without checking."""
        unchecked = checker_factory(check_types=False)
        with pytest.raises(ValueError):
            unchecked.define("gt", {"a": ["Nope"]}, ["a", "a", BOOLEAN], lambda x, y: x)

    def test_checked_decorator(self, checker):
        """Test the decorator form uses the function's name."""

        @checker.checked({"a": ["Semigroup"]}, ["a", "a", "a"])
        def combine(x, y):
            return x + y

        assert combine("a", "b") == "ab"
        assert str(combine.signature) == "combine :: Semigroup a => a -> a -> a"
        with pytest.raises(TypeViolationError):
            combine(1, 2)

    def test_nested_checked_calls(self, checker):
        """Test a checked function may call another checked function."""
        inc = checker.define("inc", {}, [FINITE_NUMBER, FINITE_NUMBER], lambda x: x + 1)
        twice = checker.define("twice", {}, [FINITE_NUMBER, FINITE_NUMBER], lambda x: inc(inc(x)))
        assert twice(1) == 3

    def test_module_level_define(self):
        """Test define with a one-off checker."""
        gt = define("gt", {"a": ["Ord"]}, ["a", "a", BOOLEAN], lambda x, y: x > y)
        assert gt("b", "a") is True


class TestLogging:
    """Tests for checker logging."""

    def test_violation_logged(self, caplog, checker, gt_signature):
        """Test a violation is logged at DEBUG."""
        caplog.set_level(logging.DEBUG, logger="covenant.checker")
        checker.check(gt_signature, (None, 1))
        assert any(
            "Type-class constraint violation" in record.getMessage()
            for record in caplog.records
        )

    def test_bindings_logged(self, caplog, checker, gt_signature):
        """Test bindings are logged at DEBUG."""
        caplog.set_level(logging.DEBUG, logger="covenant.checker")
        checker.check(gt_signature, (1, 2))
        assert any("a = Integer" in record.getMessage() for record in caplog.records)

    def test_custom_checker_instance(self):
        """Test a checker can be constructed without a config."""
        assert SignatureChecker().config.check_types is True
