"""
Argmatch Argument Engine

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .argument import ArgumentSpec, create_argument
from .argument_action import ArgumentAction
from .argument_parser import ArgumentParser, SubcommandGroup
from .engine import MatchEngine
from .help_formatter import HelpFormatter
from .namespace import Namespace
from .parser_types import (
    Failed,
    HelpRequested,
    Matched,
    ParseOutcome,
    SpecSet,
    SubcommandDispatch,
    VersionRequested,
)

__all__ = [
    "ArgumentSpec",
    "ArgumentAction",
    "ArgumentParser",
    "SubcommandGroup",
    "create_argument",
    "MatchEngine",
    "HelpFormatter",
    "Namespace",
    "SpecSet",
    "SubcommandDispatch",
    "Matched",
    "HelpRequested",
    "VersionRequested",
    "Failed",
    "ParseOutcome",
]
