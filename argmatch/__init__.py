"""
Argmatch Argument Engine

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .exceptions import (
    AmbiguousAbbreviationError,
    ArgmatchError,
    ArgumentError,
    ArgumentFileError,
    ConfigurationError,
    ErrorKind,
    ExpectedArgumentError,
    ExplicitArgumentIgnoredError,
    InvalidChoiceError,
    MissingRequiredError,
    UnrecognizedArgumentsError,
)
from .parser import (
    ArgumentAction,
    ArgumentParser,
    ArgumentSpec,
    Failed,
    HelpRequested,
    Matched,
    Namespace,
    ParseOutcome,
    SubcommandGroup,
    VersionRequested,
    create_argument,
)
from .signals import FlowSignal, HelpSignal, VersionSignal
from .version import __version__

logger = logging.getLogger("argmatch")


__all__ = [
    "ArgumentParser",
    "ArgumentSpec",
    "ArgumentAction",
    "Namespace",
    "SubcommandGroup",
    "create_argument",
    "Matched",
    "HelpRequested",
    "VersionRequested",
    "Failed",
    "ParseOutcome",
    "ArgmatchError",
    "ConfigurationError",
    "ArgumentError",
    "ErrorKind",
    "AmbiguousAbbreviationError",
    "InvalidChoiceError",
    "MissingRequiredError",
    "UnrecognizedArgumentsError",
    "ExplicitArgumentIgnoredError",
    "ExpectedArgumentError",
    "ArgumentFileError",
    "FlowSignal",
    "HelpSignal",
    "VersionSignal",
    "__version__",
]
