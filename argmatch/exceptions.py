# Argmatch Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by argmatch.

Declaration mistakes raise `ConfigurationError`, which always propagates to the
caller. Problems with the tokens being matched raise a subclass of
`ArgumentError`, each tagged with an `ErrorKind` and carrying the short message
fragment (flag names, offending values) that callers can embed in their own
usage output.

Exception Hierarchy:
- ArgmatchError
    ├── ConfigurationError
    └── ArgumentError
        ├── AmbiguousAbbreviationError
        ├── InvalidChoiceError
        ├── MissingRequiredError
        ├── UnrecognizedArgumentsError
        ├── ExplicitArgumentIgnoredError
        ├── ExpectedArgumentError
        └── ArgumentFileError
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Taxonomy of user-input failures reported by the match engine."""

    AMBIGUOUS_ABBREVIATION = "ambiguous_abbreviation"
    INVALID_CHOICE = "invalid_choice"
    MISSING_REQUIRED = "missing_required"
    UNRECOGNIZED_TOKENS = "unrecognized_tokens"
    EXPLICIT_ARGUMENT_IGNORED = "explicit_argument_ignored"
    EXPECTED_ARGUMENT = "expected_argument"
    ARGUMENT_FILE = "argument_file"

    def __str__(self) -> str:
        return self.value


class ArgmatchError(Exception):
    """Base exception for argmatch."""


class ConfigurationError(ArgmatchError):
    """Exception raised when an argument declaration is invalid."""


class ArgumentError(ArgmatchError):
    """Exception raised when the tokens cannot be matched against the declaration."""

    kind: ErrorKind

    def __init__(self, fragment: str) -> None:
        super().__init__(fragment)
        self.fragment = fragment


class AmbiguousAbbreviationError(ArgumentError):
    """Exception raised when a flag prefix matches more than one declared flag."""

    kind = ErrorKind.AMBIGUOUS_ABBREVIATION

    def __init__(self, token: str, candidates: list[str]) -> None:
        self.token = token
        self.candidates = candidates
        super().__init__(
            f"ambiguous option: '{token}' could match {', '.join(candidates)}"
        )


class InvalidChoiceError(ArgumentError):
    """Exception raised when a value is outside the declared choices."""

    kind = ErrorKind.INVALID_CHOICE

    def __init__(self, flag: str, value: str, choices: tuple[str, ...]) -> None:
        self.flag = flag
        self.value = value
        self.choices = choices
        allowed = ", ".join(f"'{choice}'" for choice in choices)
        super().__init__(
            f"argument {flag}: invalid choice: '{value}' (choose from {allowed})"
        )


class MissingRequiredError(ArgumentError):
    """Exception raised when required arguments were never matched.

    When unrecognized tokens were also left over, they are reported in the same
    error (after the missing names) and listed in `unrecognized`.
    """

    kind = ErrorKind.MISSING_REQUIRED

    def __init__(self, missing: list[str], unrecognized: list[str] | None = None) -> None:
        self.missing = missing
        self.unrecognized = unrecognized or []
        message = f"the following arguments are required: {' '.join(missing)}"
        if self.unrecognized:
            message += f"; unrecognized arguments: {' '.join(self.unrecognized)}"
        super().__init__(message)


class UnrecognizedArgumentsError(ArgumentError):
    """Exception raised when tokens were not consumed by any argument."""

    kind = ErrorKind.UNRECOGNIZED_TOKENS

    def __init__(self, tokens: list[str]) -> None:
        self.tokens = tokens
        super().__init__(f"unrecognized arguments: {' '.join(tokens)}")


class ExplicitArgumentIgnoredError(ArgumentError):
    """Exception raised when `--flag=value` is given to a flag that takes no value."""

    kind = ErrorKind.EXPLICIT_ARGUMENT_IGNORED

    def __init__(self, flag: str, value: str) -> None:
        self.flag = flag
        self.value = value
        super().__init__(f"argument {flag}: ignored explicit argument '{value}'")


class ExpectedArgumentError(ArgumentError):
    """Exception raised when an optional receives the wrong number of values."""

    kind = ErrorKind.EXPECTED_ARGUMENT

    def __init__(self, flag: str, expected: str) -> None:
        self.flag = flag
        self.expected = expected
        super().__init__(f"argument {flag}: expected {expected}")


class ArgumentFileError(ArgumentError):
    """Exception raised when an argument file cannot be read."""

    kind = ErrorKind.ARGUMENT_FILE

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"{reason}: '{path}'")
