"""
Pytest configuration and shared fixtures for covenant tests.
"""

import random
import string
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest

from covenant.checker import CheckerConfig, Signature, SignatureChecker
from covenant.functions import create
from covenant.runtime import Just, Left, Nothing, Right

SEED = 20240229


# =============================================================================
# Checker Fixtures
# =============================================================================


@pytest.fixture
def checker_factory():
    """Factory fixture for creating signature checkers."""

    def _create_checker(**overrides: Any) -> SignatureChecker:
        return SignatureChecker(CheckerConfig(**overrides))

    return _create_checker


@pytest.fixture
def checker(checker_factory):
    """A checker with the default configuration."""
    return checker_factory()


@pytest.fixture
def signature_factory():
    """Factory fixture for building signatures."""

    def _create_signature(name: str, constraints: dict, types: list) -> Signature:
        return Signature.build(name, constraints, types)

    return _create_signature


@pytest.fixture
def S():
    """A fresh set of checked combinators with checking enabled."""
    return create(CheckerConfig(check_types=True))


# =============================================================================
# Property Testing
# =============================================================================


def _number(rng: random.Random) -> Any:
    kind = rng.randrange(6)
    if kind == 0:
        return rng.randint(-1000, 1000)
    if kind == 1:
        return rng.uniform(-1e6, 1e6)
    if kind == 2:
        return rng.choice([0, 0.0, -0.0, 1, -1])
    if kind == 3:
        return rng.choice([float("nan"), float("inf"), float("-inf")])
    return rng.randint(0, 10)


def _text(rng: random.Random) -> str:
    return "".join(rng.choice(string.ascii_letters) for _ in range(rng.randrange(6)))


def _scalar(rng: random.Random) -> Any:
    kind = rng.randrange(4)
    if kind == 0:
        return _number(rng)
    if kind == 1:
        return _text(rng)
    if kind == 2:
        return rng.choice([None, True, False])
    return [_number(rng) for _ in range(rng.randrange(3))]


def _maybe_of(gen: Callable[[random.Random], Any]) -> Callable[[random.Random], Any]:
    def _generate(rng: random.Random) -> Any:
        return Nothing if rng.random() < 0.25 else Just(gen(rng))

    return _generate


def _either_of(
    left: Callable[[random.Random], Any], right: Callable[[random.Random], Any]
) -> Callable[[random.Random], Any]:
    def _generate(rng: random.Random) -> Any:
        return Left(left(rng)) if rng.random() < 0.4 else Right(right(rng))

    return _generate


@pytest.fixture
def arbitrary():
    """Generators of arbitrary values; each takes a random.Random."""
    return SimpleNamespace(
        number=_number,
        text=_text,
        scalar=_scalar,
        maybe_of=_maybe_of,
        either_of=_either_of,
        maybe=_maybe_of(_scalar),
        either=_either_of(_scalar, _scalar),
        maybe_text=_maybe_of(_text),
        either_text=_either_of(_text, _text),
    )


@pytest.fixture
def forall():
    """
    Run a property against generated inputs.

    ``gen`` returns a tuple of arguments for ``prop``; the first failing
    input is reported.
    """

    def _forall(
        gen: Callable[[random.Random], tuple],
        prop: Callable[..., bool],
        runs: int = 100,
    ) -> None:
        rng = random.Random(SEED)
        for _ in range(runs):
            args = gen(rng)
            assert prop(*args), f"property failed for {args!r}"

    return _forall
