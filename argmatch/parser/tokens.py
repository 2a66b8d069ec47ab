# Argmatch Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Token classification helpers shared by the declaration layer and the engine.

Everything here is a pure function of a raw token and the parser's prefix
characters:

- `is_optional_token`: does the token look like a flag?
- `is_negative_number`: is the token a negative decimal literal?
- `split_equal`: split `--flag=value` into flag and inline value.
- `flag_name`: strip the leading prefix characters from a flag.
- `remove_quotes`: drop one pair of matching surrounding quotes.
"""
from __future__ import annotations

import re

NEGATIVE_NUMBER_PATTERN = re.compile(r"^-(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?$")


def is_optional_token(token: str, prefix_chars: str) -> bool:
    """Return True if the token starts with a prefix character.

    A lone prefix character (`-`) is a value, conventionally meaning stdin.
    """
    if not token or token[0] not in prefix_chars:
        return False
    return len(token) > 1


def is_negative_number(token: str) -> bool:
    """Return True if the token is a decimal literal with a value below zero."""
    if not NEGATIVE_NUMBER_PATTERN.match(token):
        return False
    return float(token) < 0


def is_end_of_options(token: str, prefix_chars: str) -> bool:
    """Return True for the `--` marker that ends option processing."""
    return bool(prefix_chars) and token == prefix_chars[0] * 2


def split_equal(token: str) -> tuple[str, str | None]:
    """Split a token at its first `=` into (flag, inline value)."""
    flag, separator, value = token.partition("=")
    if not separator:
        return token, None
    return flag, value


def flag_name(flag: str, prefix_chars: str = "-") -> str:
    """Return the flag without its leading run of prefix characters."""
    return flag.lstrip(prefix_chars)


def prefix_count(flag: str, prefix_chars: str = "-") -> int:
    """Return the number of leading prefix characters of a flag."""
    return len(flag) - len(flag_name(flag, prefix_chars))


def remove_quotes(value: str) -> str:
    """Remove one pair of matching single or double quotes around a value."""
    if len(value) > 1 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value
