# Argmatch Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Applies argument actions to the bindings of a `MatchState`.

Every write into the bindings goes through this module, so choice validation,
const handling and the short-circuiting actions live in one place:

- `dispatch_optional()` applies a matched flag with the values the engine
  collected for it.
- `apply_allocation()` applies a positional plan produced by the allocator.
- `store_positional_fallback()` fills a positional slot that received no tokens.
- `inject_defaults()` fills optionals that were never matched.
"""
from __future__ import annotations

from argmatch.exceptions import (
    ConfigurationError,
    ExplicitArgumentIgnoredError,
    InvalidChoiceError,
)
from argmatch.logger import logger
from argmatch.parser.argument import ArgumentSpec
from argmatch.parser.argument_action import ArgumentAction
from argmatch.parser.parser_types import Allocation, BoundValue, MatchState
from argmatch.parser.tokens import remove_quotes
from argmatch.signals import HelpSignal, VersionSignal


def _bound(state: MatchState, spec: ArgumentSpec) -> BoundValue:
    bound = state.bindings.get(spec.dest)
    if bound is None:
        bound = BoundValue(spec.action)
        state.bindings[spec.dest] = bound
    return bound


def validate_choice(spec: ArgumentSpec, value: str) -> None:
    """Raise `InvalidChoiceError` if the value is outside the declared choices."""
    if not spec.choices:
        return
    value = remove_quotes(value)
    if value not in spec.choices:
        raise InvalidChoiceError(spec.display_name, value, spec.choices)


def store_value(state: MatchState, spec: ArgumentSpec, value: str) -> None:
    validate_choice(spec, value)
    _bound(state, spec).values.append(value)


def store_default(state: MatchState, spec: ArgumentSpec) -> None:
    """Store the default of a store-action slot that is still empty."""
    if spec.action != ArgumentAction.STORE:
        return
    bound = _bound(state, spec)
    if not bound.values:
        bound.values.extend(state.spec_set.default_for(spec))


def store_const(state: MatchState, spec: ArgumentSpec) -> None:
    bound = _bound(state, spec)
    if not bound.values and spec.const is not None:
        bound.values.append(spec.const)


def append_const(state: MatchState, spec: ArgumentSpec) -> None:
    if spec.default_values:
        raise ConfigurationError(
            f"argument {spec.flags[0]}: ignored default value '{spec.default}'"
        )
    _bound(state, spec).values.append(spec.const)


def store_count(state: MatchState, spec: ArgumentSpec) -> None:
    _bound(state, spec).values.append("")


def store_positional_fallback(state: MatchState, spec: ArgumentSpec) -> bool:
    """Fill a positional that received no tokens.

    Const-like positionals record their constant, store slots take their
    default. Returns False when the slot has nothing to fall back on.
    """
    if spec.action.stores_const:
        store_const(state, spec)
        return True
    if spec.action == ArgumentAction.APPEND_CONST:
        append_const(state, spec)
        return True
    if spec.action == ArgumentAction.COUNT:
        store_count(state, spec)
        return True
    if spec.nargs in ("?", "*"):
        store_default(state, spec)
        return True
    return False


def dispatch_optional(
    state: MatchState,
    spec: ArgumentSpec,
    flag: str,
    values: list[str],
    explicit: str | None = None,
) -> None:
    """
    Apply a matched optional.

    Args:
        state (MatchState): The state being filled.
        spec (ArgumentSpec): The matched optional.
        flag (str): The flag as written (after abbreviation resolution).
        values (list[str]): Values consumed for a value-taking action.
        explicit (str | None): The inline `=value`, if one was given.

    Raises:
        ExplicitArgumentIgnoredError: Inline value on a zero-value action.
        InvalidChoiceError: A value outside the declared choices.
        HelpSignal: The help action was matched.
        VersionSignal: The version action was matched.
    """
    action = spec.action
    if not action.takes_values and explicit is not None:
        raise ExplicitArgumentIgnoredError(flag, explicit)

    if action.takes_values:
        bound = _bound(state, spec)
        if action == ArgumentAction.STORE:
            bound.values.clear()
        if not values and spec.nargs == "?":
            if spec.const is not None:
                bound.values.append(spec.const)
        for value in values:
            store_value(state, spec, value)
    elif action.stores_const:
        store_const(state, spec)
        if action == ArgumentAction.STORE_TRUE and spec.callback is not None:
            spec.callback()
    elif action == ArgumentAction.APPEND_CONST:
        append_const(state, spec)
    elif action == ArgumentAction.COUNT:
        store_count(state, spec)
    elif action == ArgumentAction.HELP:
        logger.debug("Help requested by '%s'", flag)
        raise HelpSignal()
    elif action == ArgumentAction.VERSION:
        logger.debug("Version requested by '%s'", flag)
        raise VersionSignal(spec.version or "")


def apply_allocation(state: MatchState, allocation: Allocation) -> None:
    """Apply a positional plan; the subcommand name is validated but not bound."""
    for spec, values in allocation.assignments:
        if spec is state.spec_set.subcommand:
            validate_choice(spec, values[0])
            continue
        if values is None:
            store_positional_fallback(state, spec)
            continue
        for value in values:
            store_value(state, spec, value)


def inject_defaults(state: MatchState) -> None:
    """Give every unmatched optional its default, or the parser-wide default."""
    for spec in state.spec_set.optionals:
        if spec.action in (
            ArgumentAction.COUNT,
            ArgumentAction.HELP,
            ArgumentAction.VERSION,
        ):
            continue
        bound = state.bindings.get(spec.dest)
        if bound is None or bound.values:
            continue
        bound.values.extend(state.spec_set.default_for(spec))
