"""
Property tests for the algebraic laws of Maybe and Either.
"""

import pytest

from covenant import laws
from covenant.laws import Identity, compose_functors
from covenant.runtime import Either, Just, Left, Maybe, Nothing, Right, values


def box(x):
    return [x]


def pair(x):
    return (x, x)


def either_to_maybe(e):
    return Just(e.value) if e.is_right else Nothing


class TestSetoidLaws:
    """Tests for reflexivity, symmetry and transitivity."""

    @pytest.mark.parametrize("kind", ["maybe", "either"])
    def test_reflexivity(self, forall, arbitrary, kind):
        gen = getattr(arbitrary, kind)
        forall(lambda rng: (gen(rng),), laws.setoid_reflexivity)

    @pytest.mark.parametrize("kind", ["maybe", "either"])
    def test_symmetry(self, forall, arbitrary, kind):
        gen = getattr(arbitrary, kind)
        forall(lambda rng: (gen(rng), gen(rng)), laws.setoid_symmetry)

    def test_transitivity(self, forall, arbitrary):
        # Small domain so that equal triples actually occur.
        gen = arbitrary.maybe_of(lambda rng: rng.choice([0, 1, -0.0]))
        forall(lambda rng: (gen(rng), gen(rng), gen(rng)), laws.setoid_transitivity)


class TestSemigroupMonoidLaws:
    """Tests for associativity and identity."""

    @pytest.mark.parametrize("kind", ["maybe_text", "either_text"])
    def test_associativity(self, forall, arbitrary, kind):
        gen = getattr(arbitrary, kind)
        forall(lambda rng: (gen(rng), gen(rng), gen(rng)), laws.semigroup_associativity)

    def test_maybe_identity(self, forall, arbitrary):
        gen = arbitrary.maybe_text
        forall(lambda rng: (Maybe, gen(rng)), laws.monoid_left_identity)
        forall(lambda rng: (Maybe, gen(rng)), laws.monoid_right_identity)


class TestFunctorLaws:
    """Tests for identity and composition."""

    @pytest.mark.parametrize("kind", ["maybe", "either"])
    def test_identity(self, forall, arbitrary, kind):
        """Test mapping the identity function changes nothing."""
        gen = getattr(arbitrary, kind)
        forall(lambda rng: (gen(rng),), laws.functor_identity)

    @pytest.mark.parametrize("kind", ["maybe", "either"])
    def test_composition(self, forall, arbitrary, kind):
        gen = getattr(arbitrary, kind)
        forall(lambda rng: (gen(rng), box, pair), laws.functor_composition)


class TestApplicativeLaws:
    """Tests for Apply and Applicative."""

    @staticmethod
    def _maybe_function(rng):
        return Nothing if rng.random() < 0.25 else Just(rng.choice([box, pair]))

    @staticmethod
    def _either_function(rng):
        if rng.random() < 0.3:
            return Left(rng.choice(["e1", "e2"]))
        return Right(rng.choice([box, pair]))

    def test_apply_composition_maybe(self, forall, arbitrary):
        fn = self._maybe_function
        forall(lambda rng: (fn(rng), fn(rng), arbitrary.maybe(rng)), laws.apply_composition)

    def test_apply_composition_either(self, forall, arbitrary):
        fn = self._either_function
        forall(lambda rng: (fn(rng), fn(rng), arbitrary.either(rng)), laws.apply_composition)

    @pytest.mark.parametrize("type_rep,kind", [(Maybe, "maybe"), (Either, "either")])
    def test_identity(self, forall, arbitrary, type_rep, kind):
        gen = getattr(arbitrary, kind)
        forall(lambda rng: (type_rep, gen(rng)), laws.applicative_identity)

    @pytest.mark.parametrize("type_rep", [Maybe, Either])
    def test_homomorphism(self, forall, arbitrary, type_rep):
        forall(lambda rng: (type_rep, box, arbitrary.scalar(rng)), laws.applicative_homomorphism)

    def test_interchange(self, forall, arbitrary):
        fn = self._either_function
        forall(lambda rng: (Either, fn(rng), arbitrary.scalar(rng)), laws.applicative_interchange)
        fn = self._maybe_function
        forall(lambda rng: (Maybe, fn(rng), arbitrary.scalar(rng)), laws.applicative_interchange)


class TestMonadLaws:
    """Tests for Chain and Monad."""

    @staticmethod
    def _to_maybe(x):
        return Nothing if x is None else Just([x])

    @staticmethod
    def _to_either(x):
        return Left("empty") if x == [] else Right(pair(x))

    def test_chain_associativity_maybe(self, forall, arbitrary):
        forall(
            lambda rng: (arbitrary.maybe(rng), self._to_maybe, lambda xs: Just(len(xs))),
            laws.chain_associativity,
        )

    def test_chain_associativity_either(self, forall, arbitrary):
        forall(
            lambda rng: (arbitrary.either(rng), self._to_either, lambda p: Right(p[0])),
            laws.chain_associativity,
        )

    def test_left_identity(self, forall, arbitrary):
        forall(lambda rng: (Maybe, self._to_maybe, arbitrary.scalar(rng)), laws.monad_left_identity)
        forall(
            lambda rng: (Either, self._to_either, arbitrary.scalar(rng)), laws.monad_left_identity
        )

    @pytest.mark.parametrize("type_rep,kind", [(Maybe, "maybe"), (Either, "either")])
    def test_right_identity(self, forall, arbitrary, type_rep, kind):
        gen = getattr(arbitrary, kind)
        forall(lambda rng: (type_rep, gen(rng)), laws.monad_right_identity)


class TestFoldableTraversableExtendLaws:
    """Tests for Foldable, Traversable and Extend."""

    @pytest.mark.parametrize("kind", ["maybe", "either"])
    def test_foldable(self, forall, arbitrary, kind):
        gen = getattr(arbitrary, kind)
        forall(
            lambda rng: (lambda acc, x: acc + [x], [], gen(rng)),
            laws.foldable_associativity,
        )

    def test_traversable_naturality(self, forall, arbitrary):
        gen = arbitrary.maybe_of(arbitrary.either)
        forall(
            lambda rng: (Either, Maybe, either_to_maybe, gen(rng)),
            laws.traversable_naturality,
        )

    @pytest.mark.parametrize("kind", ["maybe", "either"])
    def test_traversable_identity(self, forall, arbitrary, kind):
        gen = getattr(arbitrary, kind)
        forall(lambda rng: (gen(rng),), laws.traversable_identity)

    def test_traversable_identity_lists(self, forall, arbitrary):
        forall(
            lambda rng: ([arbitrary.number(rng) for _ in range(rng.randrange(4))],),
            laws.traversable_identity,
        )

    def test_traversable_composition(self, forall, arbitrary):
        gen = arbitrary.maybe_of(arbitrary.maybe_of(arbitrary.either))
        forall(lambda rng: (Maybe, Either, gen(rng)), laws.traversable_composition)

    def test_traversable_composition_lists(self, forall, arbitrary):
        inner = arbitrary.maybe_of(arbitrary.either)
        forall(
            lambda rng: (Maybe, Either, [inner(rng) for _ in range(rng.randrange(3))]),
            laws.traversable_composition,
        )

    @pytest.mark.parametrize("kind", ["maybe", "either"])
    def test_extend_associativity(self, forall, arbitrary, kind):
        gen = getattr(arbitrary, kind)
        forall(
            lambda rng: (gen(rng), values.to_string, lambda w: w.reduce(lambda acc, x: acc + 1, 0)),
            laws.extend_associativity,
        )


class TestHelperFunctors:
    """Tests for Identity and Compose."""

    def test_identity(self):
        assert Identity(1).fl_map(lambda x: x + 1) == Identity(2)
        assert Identity.fl_of(1) == Identity(1)
        assert Identity(1).fl_ap(Identity(lambda x: x * 3)) == Identity(3)
        assert Identity(1) != Identity(2)

    def test_compose(self):
        composed = compose_functors(list, Maybe)
        assert composed.fl_of(1) == composed([Just(1)])
        assert composed([Just(1), Nothing]).fl_map(lambda x: x + 1) == composed([Just(2), Nothing])
        assert composed.__name__ == "Compose(list, Maybe)"

    def test_compose_ap(self):
        composed = compose_functors(Maybe, Either)
        functions = composed(Just(Right(lambda x: x + 1)))
        assert composed(Just(Right(1))).fl_ap(functions) == composed(Just(Right(2)))

    def test_composed_types_are_distinct(self):
        assert compose_functors(list, Maybe)([]) != compose_functors(list, Maybe)([])
