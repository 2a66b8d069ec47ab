# Argmatch Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Turns the raw strings of a binding into Python values.

The engine only ever binds raw strings. `coerce_binding` gives one binding its
Python shape from the action that produced it:

- `count` → number of occurrences
- `store_true` / `store_false` → `bool`
- single-valued `store` / `store_const` → one string (or `None`)
- everything else → a list

Values lose one pair of surrounding quotes, and when a target type is given each
value goes through `coerce_value`, which understands `Enum`, `bool`,
`datetime`, `Literal` and unions of those.
"""
import types
from datetime import datetime
from enum import EnumMeta
from typing import Any, Literal, Union, get_args, get_origin

from dateutil import parser as date_parser

from argmatch.parser.argument_action import ArgumentAction
from argmatch.parser.tokens import remove_quotes

_FLAG_ACTIONS = (ArgumentAction.STORE_TRUE, ArgumentAction.STORE_FALSE)


def coerce_bool(value: str) -> bool:
    """
    Convert a raw string to a boolean.

    `store_true` and `store_false` bind "true" and "false"; user supplied values
    may also be spelled 'yes', '0', 'off' and so on.
    """
    if isinstance(value, bool):
        return value
    value = value.strip().lower()
    if value in {"true", "t", "1", "yes", "on"}:
        return True
    elif value in {"false", "f", "0", "no", "off"}:
        return False
    return bool(value)


def coerce_enum(value: Any, enum_type: EnumMeta) -> Any:
    """
    Resolve a raw value to an Enum member, by name first and then by value.

    Raises:
        ValueError: If the value names no member.
    """
    if isinstance(value, enum_type):
        return value

    if isinstance(value, str):
        try:
            return enum_type[value]
        except KeyError:
            pass

    base_type = type(next(iter(enum_type)).value)
    try:
        return enum_type(base_type(value))
    except (ValueError, TypeError):
        values = [str(enum.value) for enum in enum_type]
        raise ValueError(f"'{value}' should be one of {{{', '.join(values)}}}") from None


def coerce_value(value: str, target_type: type) -> Any:
    """
    Convert one raw string to `target_type`.

    Union members are tried left to right, skipping `None`.

    Raises:
        ValueError: If no conversion applies.
    """
    origin = get_origin(target_type)
    args = get_args(target_type)

    if origin is Literal:
        if value not in args:
            raise ValueError(
                f"Value '{value}' is not a valid literal for type {target_type}"
            )
        return value

    if isinstance(target_type, types.UnionType) or origin is Union:
        for arg in args:
            if arg is type(None):
                continue
            try:
                return coerce_value(value, arg)
            except (ValueError, TypeError):
                continue
        raise ValueError(f"Value '{value}' could not be coerced to any of {args}")

    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)

    if target_type is bool:
        return coerce_bool(value)

    if target_type is datetime:
        try:
            return date_parser.parse(value)
        except ValueError as e:
            raise ValueError(f"Value '{value}' could not be parsed as a datetime") from e

    return target_type(value)


def coerce_values(values: list[str], target_type: type | None = None) -> list[Any]:
    """Strip quotes from each raw value and coerce it when a type is given."""
    items = [remove_quotes(value) for value in values]
    if target_type is None:
        return items
    return [coerce_value(item, target_type) for item in items]


def coerce_binding(
    action: ArgumentAction,
    values: list[str],
    single: bool,
    target_type: type | None = None,
) -> Any:
    """
    Give the raw values of one binding their Python shape.

    Args:
        action (ArgumentAction): The action that produced the binding.
        values (list[str]): The raw bound strings.
        single (bool): Return one value instead of a list.
        target_type (type | None): Coerce every value to this type.
    """
    if action == ArgumentAction.COUNT:
        return len(values)
    if action in _FLAG_ACTIONS:
        return coerce_bool(values[0]) if values else None
    items = coerce_values(values, target_type)
    if single:
        return items[0] if items else None
    return items
