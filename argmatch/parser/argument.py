# Argmatch Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `ArgumentSpec` dataclass used by the match engine to represent
individual command-line parameters, and `create_argument()`, the validating
factory that builds them.

Each `ArgumentSpec` is immutable. Instead of setters that silently reset
unrelated fields when the action changes, the factory normalizes the arity for
the chosen action and rejects every incompatible combination up front with a
`ConfigurationError`, so the engine can trust the specs it is given.

Key Attributes:
- `flags`: One or more flags (`-v`, `--verbose`), or the single positional name
- `dest`: Key used in the resulting `Namespace`
- `action`: `ArgumentAction` describing what a match does
- `nargs`: Arity (`int`, `'?'`, `'*'`, `'+'` or `None` for exactly one value)
- `const`: Value recorded by const-like actions and by `'?'` optionals
- `default`: Fallback value(s) when the argument is not matched
- `choices`: Allowed values, if restricted
- `required`: Whether an optional must be present
- `positional`: Whether this argument is matched by position

Arguments are normally created through `ArgumentParser.add_argument()` or
loaded from a declaration file.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from argmatch.exceptions import ConfigurationError
from argmatch.parser.argument_action import ArgumentAction
from argmatch.parser.tokens import flag_name, is_optional_token, prefix_count

VARIABLE_NARGS = ("?", "*", "+")


@dataclass(frozen=True)
class ArgumentSpec:
    """
    Represents a declared command-line argument.

    Attributes:
        flags (tuple[str, ...]): Flags of an optional, or the positional's name.
        dest (str): The destination name for the argument.
        positional (bool): True if the argument is matched by position.
        action (ArgumentAction): The action taken when the argument is matched.
        nargs (int | str | None): Number of values consumed: an int, '?', '*', '+',
            or None for exactly one. Actions that take no value always carry 0.
        const (str | None): Constant stored by const-like actions.
        default (str | tuple[str, ...] | None): Value(s) used when not matched.
        choices (tuple[str, ...]): Allowed values; empty means unconstrained.
        required (bool): True if an optional argument must be supplied.
        help (str): Help text for the argument.
        metavar (str | None): Display name used in help output.
        version (str | None): Version string for the version action.
        callback (Callable[[], None] | None): Called each time a store_true flag
            is matched.
        suppressed (bool): Hide the argument from usage and help output.
    """

    flags: tuple[str, ...]
    dest: str
    positional: bool = False
    action: ArgumentAction = ArgumentAction.STORE
    nargs: int | str | None = None
    const: str | None = None
    default: str | tuple[str, ...] | None = None
    choices: tuple[str, ...] = ()
    required: bool = False
    help: str = ""
    metavar: str | None = None
    version: str | None = None
    callback: Callable[[], None] | None = field(default=None, compare=False)
    suppressed: bool = False

    @property
    def display_name(self) -> str:
        """Name used in error messages: `-o/--out` or the positional's name."""
        return "/".join(self.flags)

    @property
    def default_values(self) -> list[str]:
        """The default as a list of raw values (empty when there is none)."""
        if self.default is None or self.default == "":
            return []
        if isinstance(self.default, tuple):
            return list(self.default)
        return [self.default]

    @property
    def min_values(self) -> int:
        """Lowest number of tokens this argument consumes when matched."""
        if not self.action.takes_values:
            return 0
        if self.nargs is None or self.nargs == "+":
            return 1
        if isinstance(self.nargs, int):
            return self.nargs
        return 0

    @property
    def is_open_ended(self) -> bool:
        """True when the argument may absorb any number of extra tokens."""
        return self.action.takes_values and self.nargs in ("*", "+")

    @property
    def is_single_valued(self) -> bool:
        """True when a match yields at most one value."""
        return self.nargs in (None, 1, "?", 0)

    def get_metavar(self) -> str:
        """Return the name shown for this argument's values in help output."""
        if self.metavar:
            return self.metavar
        if self.choices:
            return "{" + ",".join(self.choices) + "}"
        if self.positional:
            return self.dest
        return self.dest.upper()


def dest_from_flags(
    flags: tuple[str, ...], positional: bool, prefix_chars: str = "-"
) -> str:
    """Derive a destination name from the flags.

    Positionals use their name; optionals use the flag with the most leading
    prefix characters (first one wins on ties).
    """
    if positional:
        name = flags[0]
    else:
        best = max(flags, key=lambda flag: prefix_count(flag, prefix_chars))
        name = flag_name(best, prefix_chars)
    return name.replace("-", "_")


def _validate_flags(flags: Iterable[str], prefix_chars: str) -> tuple[tuple[str, ...], bool]:
    """Validate the flags and return them with the positional marker."""
    flags = tuple(flags)
    if not flags:
        raise ConfigurationError("No flags provided")
    for flag in flags:
        if not isinstance(flag, str):
            raise ConfigurationError(f"Flag '{flag}' must be a string")
    flags = (flags[0].strip(),) + flags[1:]
    if not flags[0]:
        raise ConfigurationError("Flag must not be empty")
    positional = not is_optional_token(flags[0], prefix_chars)
    if positional and flags[0][0] in prefix_chars:
        raise ConfigurationError(f"Invalid option string '{flags[0]}': missing name")
    if positional and len(flags) > 1:
        raise ConfigurationError(
            f"Invalid option string '{flags[1]}': positional arguments cannot have "
            "multiple names"
        )
    for flag in flags[1:]:
        if not flag:
            raise ConfigurationError("Flag must not be empty")
        if not is_optional_token(flag, prefix_chars):
            raise ConfigurationError(
                f"Invalid option string '{flag}': must start with a character "
                f"'{prefix_chars}'"
            )
    if not positional:
        for flag in flags:
            if not flag_name(flag, prefix_chars):
                raise ConfigurationError(f"Invalid option string '{flag}': missing name")
    return flags, positional


def _validate_action(action: ArgumentAction | str, positional: bool) -> ArgumentAction:
    if not isinstance(action, ArgumentAction):
        try:
            action = ArgumentAction(action)
        except ValueError as error:
            raise ConfigurationError(str(error)) from error
    if action.short_circuits and positional:
        raise ConfigurationError(
            f"Action '{action}' cannot be used with positional arguments"
        )
    return action


def _validate_nargs(nargs: int | str | None, action: ArgumentAction) -> int | str | None:
    if not action.takes_values:
        if nargs is not None:
            raise ConfigurationError(f"nargs cannot be specified for {action} actions")
        return 0
    if nargs is None:
        return None
    if isinstance(nargs, bool):
        raise ConfigurationError(f"nargs must be an int or one of {VARIABLE_NARGS}")
    if isinstance(nargs, int):
        if nargs < 0:
            raise ConfigurationError("nargs must be a positive integer")
        if nargs == 0:
            raise ConfigurationError(
                f"nargs for {action} actions must be != 0; if there is nothing to "
                "store, store_true or store_const may be more appropriate"
            )
        return nargs
    if isinstance(nargs, str):
        value = nargs.strip()
        if value.isdigit():
            return _validate_nargs(int(value), action)
        if value not in VARIABLE_NARGS:
            raise ConfigurationError(f"Invalid nargs value: '{nargs}'")
        return value
    raise ConfigurationError(f"nargs must be an int or one of {VARIABLE_NARGS}")


def _resolve_const(
    const: Any,
    action: ArgumentAction,
    nargs: int | str | None,
    positional: bool,
) -> str | None:
    if action == ArgumentAction.STORE_TRUE:
        if const is not None:
            raise ConfigurationError("const cannot be specified for store_true actions")
        return "true"
    if action == ArgumentAction.STORE_FALSE:
        if const is not None:
            raise ConfigurationError("const cannot be specified for store_false actions")
        return "false"
    if action in (ArgumentAction.STORE_CONST, ArgumentAction.APPEND_CONST):
        if const is None or str(const).strip() == "":
            raise ConfigurationError(f"const is required for {action} actions")
        return str(const).strip()
    if const is None:
        return None
    if action.takes_values and not positional:
        if nargs != "?":
            raise ConfigurationError("nargs must be '?' to supply const")
        return str(const).strip()
    raise ConfigurationError(f"const cannot be specified for {action} actions")


def _resolve_default(default: Any, action: ArgumentAction) -> str | tuple[str, ...] | None:
    if action == ArgumentAction.STORE_TRUE:
        if default is not None:
            raise ConfigurationError(
                "Default value cannot be set for store_true actions. It is a boolean flag."
            )
        return "false"
    if action == ArgumentAction.STORE_FALSE:
        if default is not None:
            raise ConfigurationError(
                "Default value cannot be set for store_false actions. It is a boolean flag."
            )
        return "true"
    if default is None:
        return None
    if action in (
        ArgumentAction.APPEND_CONST,
        ArgumentAction.COUNT,
        ArgumentAction.HELP,
        ArgumentAction.VERSION,
    ):
        raise ConfigurationError(f"Default value cannot be set for {action} actions")
    if isinstance(default, (list, tuple)):
        return tuple(str(item).strip() for item in default)
    return str(default).strip()


def _normalize_choices(choices: Iterable | None, action: ArgumentAction) -> tuple[str, ...]:
    if choices is None:
        return ()
    if not action.takes_values:
        raise ConfigurationError(f"choices cannot be specified for {action} actions")
    if isinstance(choices, (str, dict)):
        raise ConfigurationError("choices must be a list, tuple or set of values")
    try:
        normalized = tuple(str(choice).strip() for choice in choices)
    except TypeError as error:
        raise ConfigurationError(
            "choices must be iterable (like list, tuple, or set)"
        ) from error
    return tuple(choice for choice in normalized if choice)


def create_argument(
    *flags: str,
    prefix_chars: str = "-",
    action: ArgumentAction | str = ArgumentAction.STORE,
    nargs: int | str | None = None,
    const: Any = None,
    default: Any = None,
    choices: Iterable | None = None,
    required: bool = False,
    help: str = "",
    metavar: str | None = None,
    dest: str | None = None,
    version: str | None = None,
    callback: Callable[[], None] | None = None,
    suppress: bool = False,
) -> ArgumentSpec:
    """
    Build a validated `ArgumentSpec`.

    Args:
        *flags (str): The flag(s) or name identifying the argument.
        prefix_chars (str): Characters that introduce optional flags.
        action (ArgumentAction | str): The argument action (default: "store").
        nargs (int | str | None): Number of values the argument consumes.
        const (Any): Constant for const-like actions and `'?'` optionals.
        default (Any): Default value, or a list of values.
        choices (Iterable | None): Allowed values.
        required (bool): Whether an optional is mandatory.
        help (str): Help text.
        metavar (str | None): Display name for values in help output.
        dest (str | None): Custom destination key (optionals only).
        version (str | None): Version string for the version action.
        callback (Callable[[], None] | None): Hook for store_true flags.
        suppress (bool): Hide the argument from help output.

    Raises:
        ConfigurationError: If the combination of options is invalid.
    """
    flags, positional = _validate_flags(flags, prefix_chars)
    action = _validate_action(action, positional)
    if positional and required:
        raise ConfigurationError("'required' is an invalid argument for positionals")
    if positional and dest:
        raise ConfigurationError("dest supplied twice for positional argument")
    nargs = _validate_nargs(nargs, action)
    const = _resolve_const(const, action, nargs, positional)
    resolved_default = _resolve_default(default, action)
    normalized_choices = _normalize_choices(choices, action)

    if action == ArgumentAction.VERSION:
        if not version:
            raise ConfigurationError("version is required for version actions")
    elif version is not None:
        raise ConfigurationError(f"version cannot be specified for {action} actions")

    if callback is not None:
        if action != ArgumentAction.STORE_TRUE:
            raise ConfigurationError(
                f"callback can only be used with store_true actions, not {action}"
            )
        if not callable(callback):
            raise ConfigurationError("callback must be callable")

    if dest is not None:
        dest = dest.strip()
        if not dest:
            raise ConfigurationError("dest must not be empty")
    else:
        dest = dest_from_flags(flags, positional, prefix_chars)

    if action == ArgumentAction.VERSION and not help:
        help = "show program's version number and exit"

    return ArgumentSpec(
        flags=flags,
        dest=dest,
        positional=positional,
        action=action,
        nargs=nargs,
        const=const,
        default=resolved_default,
        choices=normalized_choices,
        required=required,
        help=help.strip(),
        metavar=metavar.strip() if metavar else None,
        version=version.strip() if version else None,
        callback=callback,
        suppressed=suppress,
    )
