# Argmatch Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Data structures shared by the argmatch match engine.

Contents:
- `SpecSet`: the frozen declaration view a parser hands to the engine, with the
  flag lookup table and the negative-number bit computed once.
- `BoundValue`: the (action, raw values) pair stored per destination.
- `Allocation`: the plan produced by the positional allocator for one run.
- `SubcommandDispatch`: the chosen subcommand and the tokens left for it.
- `MatchState`: the mutable state of a single match call.
- `Matched`, `HelpRequested`, `VersionRequested`, `Failed`: the terminal
  outcomes returned by `ArgumentParser.match()`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from argmatch.exceptions import ArgumentError
from argmatch.parser.argument import ArgumentSpec
from argmatch.parser.argument_action import ArgumentAction
from argmatch.parser.tokens import is_negative_number

if TYPE_CHECKING:
    from argmatch.parser.argument_parser import ArgumentParser
    from argmatch.parser.namespace import Namespace


@dataclass(frozen=True)
class SpecSet:
    """Immutable view of a parser's declarations used for one or more matches."""

    positionals: tuple[ArgumentSpec, ...]
    optionals: tuple[ArgumentSpec, ...]
    prefix_chars: str = "-"
    allow_abbrev: bool = True
    argument_default: str = ""
    subcommand: ArgumentSpec | None = None
    flag_map: dict[str, ArgumentSpec] = field(default_factory=dict, compare=False)
    negative_number_flags: bool = False

    @classmethod
    def freeze(
        cls,
        positionals: list[ArgumentSpec],
        optionals: list[ArgumentSpec],
        prefix_chars: str = "-",
        allow_abbrev: bool = True,
        argument_default: str = "",
        subcommand: ArgumentSpec | None = None,
    ) -> SpecSet:
        """Build a `SpecSet`, precomputing the flag table and negative-number bit."""
        flag_map: dict[str, ArgumentSpec] = {}
        for spec in optionals:
            for flag in spec.flags:
                flag_map[flag] = spec
        negative_number_flags = "-" in prefix_chars and any(
            is_negative_number(flag) for flag in flag_map
        )
        all_positionals = list(positionals)
        if subcommand is not None:
            all_positionals.append(subcommand)
        return cls(
            positionals=tuple(all_positionals),
            optionals=tuple(optionals),
            prefix_chars=prefix_chars,
            allow_abbrev=allow_abbrev,
            argument_default=argument_default,
            subcommand=subcommand,
            flag_map=flag_map,
            negative_number_flags=negative_number_flags,
        )

    def get_optional(self, flag: str) -> ArgumentSpec | None:
        """Return the optional declared with exactly this flag."""
        return self.flag_map.get(flag)

    def default_for(self, spec: ArgumentSpec) -> list[str]:
        """Return the spec's default values, falling back to the parser-wide default."""
        values = spec.default_values
        if values:
            return values
        if self.argument_default:
            return [self.argument_default]
        return []


@dataclass
class BoundValue:
    """The action and raw string values bound to one destination."""

    action: ArgumentAction
    values: list[str] = field(default_factory=list)


@dataclass
class Allocation:
    """Plan for assigning one run of positional tokens to positional slots.

    Each assignment pairs a spec with the tokens it receives, or with `None`
    when the slot falls back to its default.
    """

    assignments: list[tuple[ArgumentSpec, list[str] | None]] = field(
        default_factory=list
    )
    unrecognized: list[str] = field(default_factory=list)
    cursor: int = 0
    remainder: list[str] | None = None


@dataclass(frozen=True)
class SubcommandDispatch:
    """The subcommand chosen by a match and the tokens it must consume."""

    name: str
    remainder: tuple[str, ...] = ()


@dataclass
class MatchState:
    """Transient state owned by a single match call."""

    spec_set: SpecSet
    bindings: dict[str, BoundValue]
    cursor: int = 0
    unrecognized: list[str] = field(default_factory=list)
    allocations: list[Allocation] = field(default_factory=list)
    subcommand: SubcommandDispatch | None = None

    @property
    def negative_number_flags(self) -> bool:
        return self.spec_set.negative_number_flags


@dataclass(frozen=True)
class Matched:
    """Matching succeeded."""

    namespace: Namespace
    positionals_consumed: int = 0


@dataclass(frozen=True)
class HelpRequested:
    """A help flag was matched; `parser` is the parser whose help was asked for."""

    parser: ArgumentParser


@dataclass(frozen=True)
class VersionRequested:
    """A version flag was matched."""

    version: str
    parser: ArgumentParser | None = None


@dataclass(frozen=True)
class Failed:
    """Matching failed with a user-input error."""

    error: ArgumentError
    parser: ArgumentParser | None = None


ParseOutcome = Union[Matched, HelpRequested, VersionRequested, Failed]
