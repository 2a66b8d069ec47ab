# Argmatch Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Abbreviation resolution for optional flags.

Before the scan, every optional-looking token that is not an exact declared flag
is rewritten:

- `--verb` → `--verbose` when exactly one declared flag starts with it
  (`--verb=1` → `--verbose=1`). Several matches raise
  `AmbiguousAbbreviationError`.
- `-abc` → `-a -b -c` when every letter is a declared single-character flag.
  The first letter whose flag takes a value absorbs the rest of the token as
  its inline value (`-vofile` → `-v -o=file`).

Tokens that cannot be resolved are left as written; the engine reports them as
unrecognized.
"""
from __future__ import annotations

from argmatch.exceptions import AmbiguousAbbreviationError
from argmatch.logger import logger
from argmatch.parser.parser_types import SpecSet
from argmatch.parser.tokens import (
    is_negative_number,
    is_optional_token,
    prefix_count,
    split_equal,
)


def _needs_resolution(token: str, spec_set: SpecSet) -> bool:
    if not is_optional_token(token, spec_set.prefix_chars):
        return False
    if not spec_set.negative_number_flags and is_negative_number(token):
        return False
    if spec_set.get_optional(token):
        return False
    head, value = split_equal(token)
    if value is not None and spec_set.get_optional(head):
        return False
    return True


def _find_candidates(token: str, spec_set: SpecSet) -> list[tuple[str, bool]]:
    """Collect (flag, is_full_flag) candidates, at most one per optional."""
    head, _ = split_equal(token)
    candidates: list[tuple[str, bool]] = []
    for spec in spec_set.optionals:
        for flag in spec.flags:
            if flag.startswith(head):
                candidates.append((flag, True))
                break
            if len(flag) == 2 and token.startswith(flag):
                candidates.append((flag, False))
                break
    return candidates


def split_cluster(token: str, spec_set: SpecSet) -> list[str]:
    """Split `-abc` into single-character flags.

    Returns `[token]` unchanged when the token is not a cluster or its first
    letter is not a declared flag.
    """
    if prefix_count(token, spec_set.prefix_chars) != 1:
        return [token]
    prefix, name = token[0], token[1:]
    expanded: list[str] = []
    for index, char in enumerate(name):
        if char == "=":
            if not expanded:
                return [token]
            expanded[-1] += name[index:]
            break
        spec = spec_set.get_optional(prefix + char)
        if spec is None:
            if not expanded:
                return [token]
            rest = name[index:]
            expanded[-1] += rest if rest.startswith("=") else f"={rest}"
            break
        expanded.append(prefix + char)
        if spec.action.takes_values:
            rest = name[index + 1 :]
            if rest:
                expanded[-1] += rest if rest.startswith("=") else f"={rest}"
            break
    return expanded


def resolve_token(token: str, spec_set: SpecSet) -> list[str]:
    """Resolve one token into one or more canonical flag tokens."""
    if not _needs_resolution(token, spec_set):
        return [token]

    if spec_set.allow_abbrev:
        candidates = _find_candidates(token, spec_set)
        if len(candidates) > 1:
            raise AmbiguousAbbreviationError(token, [flag for flag, _ in candidates])
        if candidates and candidates[0][1]:
            flag = candidates[0][0]
            _, value = split_equal(token)
            resolved = flag if value is None else f"{flag}={value}"
            logger.debug("Resolved abbreviation '%s' to '%s'", token, resolved)
            return [resolved]

    expanded = split_cluster(token, spec_set)
    if expanded != [token]:
        logger.debug("Split flag cluster '%s' into %s", token, expanded)
    return expanded
