# Argmatch Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgumentAction`, an enum used to standardize the behavior of declared
arguments.

Each member maps to one of the argparse actions. The enum also knows which
actions consume values from the command line and which ones only record a
constant, so the declaration factory, the positional allocator and the action
dispatcher share a single source of truth.

Supports alias coercion for shorthand or config-friendly values.

Example:
    ArgumentAction("store_true") → ArgumentAction.STORE_TRUE
    ArgumentAction("true")       → ArgumentAction.STORE_TRUE (via alias)
    ArgumentAction("const")      → ArgumentAction.STORE_CONST (via alias)
"""
from __future__ import annotations

from enum import Enum


class ArgumentAction(Enum):
    """
    Defines the action to be taken when the argument is encountered.

    Members:
        STORE: Store the provided value(s), replacing earlier ones (default).
        APPEND: Append the value(s) to the bound sequence.
        EXTEND: Extend the bound sequence with the value(s).
        STORE_CONST: Store the declared constant.
        APPEND_CONST: Append the declared constant on every occurrence.
        STORE_TRUE: Store "true" if the flag is present.
        STORE_FALSE: Store "false" if the flag is present.
        COUNT: Count the number of occurrences.
        HELP: Display help and stop matching.
        VERSION: Display the version string and stop matching.

    Aliases:
        - "true" → "store_true"
        - "false" → "store_false"
        - "const" → "store_const"
    """

    STORE = "store"
    APPEND = "append"
    EXTEND = "extend"
    STORE_CONST = "store_const"
    APPEND_CONST = "append_const"
    STORE_TRUE = "store_true"
    STORE_FALSE = "store_false"
    COUNT = "count"
    HELP = "help"
    VERSION = "version"

    @classmethod
    def choices(cls) -> list[ArgumentAction]:
        """Return a list of all argument actions."""
        return list(cls)

    @property
    def takes_values(self) -> bool:
        """True for actions that consume values from the command line."""
        return self in (ArgumentAction.STORE, ArgumentAction.APPEND, ArgumentAction.EXTEND)

    @property
    def stores_const(self) -> bool:
        """True for actions that write their constant when matched."""
        return self in (
            ArgumentAction.STORE_CONST,
            ArgumentAction.STORE_TRUE,
            ArgumentAction.STORE_FALSE,
        )

    @property
    def short_circuits(self) -> bool:
        """True for actions that end matching immediately."""
        return self in (ArgumentAction.HELP, ArgumentAction.VERSION)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "true": "store_true",
            "false": "store_false",
            "const": "store_const",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> ArgumentAction:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        """Return the string representation of the argument action."""
        return self.value
