# Argmatch Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
The argmatch match engine.

`MatchEngine` binds a flat token list against a frozen `SpecSet` in a single
left-to-right scan:

- Optional-looking tokens are resolved (abbreviations, flag clusters) and
  applied through the action dispatcher, consuming the values that follow them.
- Contiguous positional tokens are buffered into runs. When a run ends, the
  allocator plans it against the positional slots at the cursor.
- `--` ends option processing; every later token is positional.
- When a plan reaches the subcommand slot, scanning stops and the remaining
  tokens are returned for the subcommand's parser.

At the end of the scan the positional plans are applied (choice validation
happens here), required arguments and leftovers are checked, and unmatched
optionals receive their defaults.

The engine raises `ArgumentError` subclasses for bad input, `HelpSignal` and
`VersionSignal` for short-circuiting flags, and `ConfigurationError` for broken
declarations. It never prints and never exits; `ArgumentParser.match()` turns
all of this into a result variant.
"""
from __future__ import annotations

from typing import Sequence

from argmatch.exceptions import (
    ConfigurationError,
    ExpectedArgumentError,
    MissingRequiredError,
    UnrecognizedArgumentsError,
)
from argmatch.logger import logger
from argmatch.parser.abbreviations import resolve_token
from argmatch.parser.allocator import allocate
from argmatch.parser.argument import ArgumentSpec
from argmatch.parser.dispatcher import (
    apply_allocation,
    dispatch_optional,
    inject_defaults,
    store_positional_fallback,
)
from argmatch.parser.namespace import Namespace
from argmatch.parser.parser_types import (
    BoundValue,
    MatchState,
    SpecSet,
    SubcommandDispatch,
)
from argmatch.parser.tokens import (
    is_end_of_options,
    is_negative_number,
    is_optional_token,
    remove_quotes,
    split_equal,
)


def _expected(nargs: int | str | None) -> str:
    if nargs is None or nargs == 1 or nargs == "?":
        return "one argument"
    if nargs == "+":
        return "at least one argument"
    return f"{nargs} arguments"


class MatchEngine:
    """
    Matches token lists against one `SpecSet`.

    The engine holds no per-call state; every `match()` call creates its own
    `MatchState`, so one engine can be reused for any number of matches.
    """

    def __init__(self, spec_set: SpecSet) -> None:
        self.spec_set = spec_set

    def _create_bindings(self) -> dict[str, BoundValue]:
        bindings: dict[str, BoundValue] = {}
        for spec in self.spec_set.positionals + self.spec_set.optionals:
            if spec is self.spec_set.subcommand or spec.action.short_circuits:
                continue
            if spec.dest in bindings:
                raise ConfigurationError(
                    f"argument {spec.display_name}: conflicting destination: {spec.dest}"
                )
            bindings[spec.dest] = BoundValue(spec.action)
        return bindings

    def _is_value(self, token: str) -> bool:
        if not is_optional_token(token, self.spec_set.prefix_chars):
            return True
        return not self.spec_set.negative_number_flags and is_negative_number(token)

    def match(
        self, tokens: Sequence[str]
    ) -> tuple[Namespace, SubcommandDispatch | None, int]:
        """
        Match tokens and return the bindings.

        Returns:
            tuple[Namespace, SubcommandDispatch | None, int]: The bindings, the
                subcommand hand-off (if the subcommand slot was reached) and the
                number of positional slots consumed.
        """
        tokens = list(tokens)
        logger.debug(
            "Matching %s against %d positional(s) and %d optional(s)",
            tokens,
            len(self.spec_set.positionals),
            len(self.spec_set.optionals),
        )
        state = MatchState(spec_set=self.spec_set, bindings=self._create_bindings())
        self._scan(state, tokens)
        for allocation in state.allocations:
            apply_allocation(state, allocation)
        self._finalize(state)
        specs = [
            spec
            for spec in self.spec_set.positionals + self.spec_set.optionals
            if spec.dest in state.bindings
        ]
        return Namespace(state.bindings, specs), state.subcommand, state.cursor

    def _scan(self, state: MatchState, tokens: list[str]) -> None:
        run: list[int] = []
        options_ended = False
        index = 0
        while index < len(tokens):
            token = tokens[index]
            if not options_ended and is_end_of_options(token, self.spec_set.prefix_chars):
                options_ended = True
                index += 1
                continue
            if options_ended or self._is_value(token):
                run.append(index)
                index += 1
                continue

            if run:
                if self._flush_run(state, run, tokens):
                    return
                run = []

            index += 1
            expanded = resolve_token(token, self.spec_set)
            for position, item in enumerate(expanded):
                spec = self.spec_set.get_optional(item)
                flag, inline = item, None
                if spec is None:
                    flag, inline = split_equal(item)
                    spec = self.spec_set.get_optional(flag) if inline is not None else None
                if spec is None:
                    logger.debug("Unrecognized option '%s'", item)
                    state.unrecognized.append(item)
                    continue
                if position == len(expanded) - 1:
                    index = self._consume_optional(state, spec, flag, inline, tokens, index)
                else:
                    self._consume_optional(state, spec, flag, inline, [], 0)

        if run:
            self._flush_run(state, run, tokens)

    def _flush_run(self, state: MatchState, run: list[int], tokens: list[str]) -> bool:
        """Plan one positional run. Returns True when it reached the subcommand."""
        values = [tokens[index] for index in run]
        allocation = allocate(
            values, self.spec_set.positionals, state.cursor, self.spec_set.subcommand
        )
        state.allocations.append(allocation)
        state.cursor = allocation.cursor
        state.unrecognized.extend(allocation.unrecognized)
        if allocation.remainder is None:
            return False
        name_index = run[len(values) - len(allocation.remainder) - 1]
        state.subcommand = SubcommandDispatch(
            name=remove_quotes(tokens[name_index]),
            remainder=tuple(tokens[name_index + 1 :]),
        )
        logger.debug(
            "Handing %s to subcommand '%s'",
            list(state.subcommand.remainder),
            state.subcommand.name,
        )
        return True

    def _consume_optional(
        self,
        state: MatchState,
        spec: ArgumentSpec,
        flag: str,
        inline: str | None,
        tokens: list[str],
        index: int,
    ) -> int:
        """Collect the values of a matched optional and dispatch it.

        Returns the index of the first token that was not consumed.
        """
        if not spec.action.takes_values:
            dispatch_optional(state, spec, flag, [], inline)
            return index

        nargs = spec.nargs
        if inline is not None:
            if isinstance(nargs, int) and nargs > 1:
                raise ExpectedArgumentError(flag, _expected(nargs))
            if not inline:
                raise ExpectedArgumentError(flag, "one argument")
            dispatch_optional(state, spec, flag, [inline])
            return index

        if nargs is None or nargs == "?":
            limit: int | None = 1
        elif isinstance(nargs, int):
            limit = nargs
        else:
            limit = None

        values: list[str] = []
        while index < len(tokens) and (limit is None or len(values) < limit):
            if not self._is_value(tokens[index]):
                break
            values.append(tokens[index])
            index += 1

        if nargs in (None, "+") and not values:
            raise ExpectedArgumentError(flag, _expected(nargs))
        if isinstance(nargs, int) and len(values) < nargs:
            raise ExpectedArgumentError(flag, _expected(nargs))

        dispatch_optional(state, spec, flag, values)
        return index

    def _finalize(self, state: MatchState) -> None:
        missing: list[str] = []
        for spec in self.spec_set.optionals:
            bound = state.bindings.get(spec.dest)
            if spec.required and bound is not None and not bound.values:
                missing.append(spec.display_name)

        for spec in self.spec_set.positionals[state.cursor :]:
            if spec is self.spec_set.subcommand:
                if spec.required:
                    missing.append(spec.flags[0])
                continue
            if not store_positional_fallback(state, spec):
                missing.append(spec.flags[0])

        if missing:
            raise MissingRequiredError(missing, state.unrecognized)
        if state.unrecognized:
            raise UnrecognizedArgumentsError(state.unrecognized)

        inject_defaults(state)
