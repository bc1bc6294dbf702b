"""Configuration for the signature checker."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from covenant.checker.type_classes import DEFAULT_REGISTRY, TypeClassRegistry
from covenant.checker.types import DEFAULT_ENV, NamedType

CHECK_TYPES_VARIABLE = "COVENANT_CHECK_TYPES"

_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class CheckerConfig:
    """
    Configuration for the signature checker.

    Attributes:
        check_types: When False, defined functions are returned unwrapped
        env: Named types used to describe values
        registry: Type classes available to constraints
    """

    check_types: bool = True
    env: tuple[NamedType, ...] = DEFAULT_ENV
    registry: TypeClassRegistry = DEFAULT_REGISTRY

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> CheckerConfig:
        """Build a config, disabling checks if COVENANT_CHECK_TYPES is 0/false/no/off."""
        if environ is None:
            environ = os.environ
        raw = environ.get(CHECK_TYPES_VARIABLE, "")
        return cls(check_types=raw.strip().lower() not in _FALSE_VALUES)
