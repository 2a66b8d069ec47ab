# Argmatch Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Loads `ArgumentParser` declarations from YAML or TOML files.

A declaration file mirrors the `ArgumentParser` / `add_argument` keywords:

    prog: copy
    description: Copy a file somewhere.
    arguments:
      - flags: [src]
      - flags: [-o, --out]
        required: true
      - flags: [--verbose]
        action: store_true
    subcommands:
      dest: command
      parsers:
        check:
          help: Check the files only.
          arguments:
            - flags: [--strict]
              action: store_true

The raw data is validated with pydantic, then replayed through the normal
declaration API, so every declaration rule applies to loaded parsers as well.
"""
from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Callable

import toml
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from argmatch.exceptions import ConfigurationError
from argmatch.logger import logger
from argmatch.parser.argument_parser import ArgumentParser, SubcommandGroup


def import_callback(dotted_path: str) -> Callable[[], None]:
    """Dynamically imports a callable from a dotted path like 'my.module.func'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise ConfigurationError(f"Invalid callback path: {dotted_path}")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise ConfigurationError(
            f"Could not import '{dotted_path}': {error}. Ensure the module is "
            "installed and discoverable via PYTHONPATH."
        ) from error
    try:
        callback = getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        raise ConfigurationError(
            f"Module '{module_path}' has no attribute '{attr}'"
        ) from error
    return callback


class RawArgument(BaseModel):
    """Raw argument model; keys mirror `ArgumentParser.add_argument()`."""

    model_config = ConfigDict(extra="forbid")

    flags: list[str]
    action: str = "store"
    nargs: int | str | None = None
    const: Any = None
    default: Any = None
    choices: list[Any] | None = None
    required: bool = False
    help: str = ""
    metavar: str | None = None
    dest: str | None = None
    version: str | None = None
    callback: str | None = None
    suppress: bool = False

    @field_validator("flags")
    @classmethod
    def validate_flags(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("flags must contain at least one flag or name")
        return value

    def add_to(self, parser: ArgumentParser) -> None:
        kwargs = self.model_dump(exclude={"flags", "callback"})
        if self.callback:
            kwargs["callback"] = import_callback(self.callback)
        parser.add_argument(*self.flags, **kwargs)


class RawSubcommands(BaseModel):
    """Raw subcommand group model; `parsers` maps command names to parsers."""

    model_config = ConfigDict(extra="forbid")

    dest: str | None = None
    required: bool = False
    title: str = ""
    help: str = ""
    metavar: str | None = None
    parsers: dict[str, RawParser] = Field(default_factory=dict)

    def add_to(self, parser: ArgumentParser) -> SubcommandGroup:
        group = parser.add_subparsers(
            dest=self.dest,
            required=self.required,
            title=self.title,
            help=self.help,
            metavar=self.metavar,
        )
        for name, raw_parser in self.parsers.items():
            child = group.add_parser(
                name,
                help=raw_parser.help,
                aliases=raw_parser.aliases,
                **raw_parser.parser_kwargs(),
            )
            raw_parser.populate(child)
        return group


class RawParser(BaseModel):
    """Raw parser model for argmatch declaration files."""

    model_config = ConfigDict(extra="forbid")

    prog: str | None = None
    usage: str | None = None
    description: str = ""
    epilog: str = ""
    prefix_chars: str = "-"
    fromfile_prefix_chars: str = ""
    argument_default: str = ""
    add_help: bool = True
    allow_abbrev: bool = True
    exit_on_error: bool = True
    help: str = ""
    aliases: list[str] = Field(default_factory=list)
    arguments: list[RawArgument] = Field(default_factory=list)
    subcommands: RawSubcommands | None = None

    @field_validator("argument_default", mode="before")
    @classmethod
    def validate_argument_default(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    def parser_kwargs(self) -> dict[str, Any]:
        kwargs = self.model_dump(
            exclude={"help", "aliases", "arguments", "subcommands"},
            exclude_defaults=True,
        )
        if not kwargs.get("description") and self.help:
            kwargs["description"] = self.help
        return kwargs

    def populate(self, parser: ArgumentParser) -> ArgumentParser:
        for raw_argument in self.arguments:
            raw_argument.add_to(parser)
        if self.subcommands is not None:
            self.subcommands.add_to(parser)
        return parser

    def to_parser(self, prog: str | None = None) -> ArgumentParser:
        kwargs = self.parser_kwargs()
        if prog and "prog" not in kwargs:
            kwargs["prog"] = prog
        return self.populate(ArgumentParser(**kwargs))


RawSubcommands.model_rebuild()


def parser_from_dict(
    raw_config: dict[str, Any], prog: str | None = None
) -> ArgumentParser:
    """Build an `ArgumentParser` from an already loaded declaration mapping."""
    if not isinstance(raw_config, dict):
        raise ConfigurationError(
            "Declaration file must contain a mapping.\n"
            "Example:\n"
            "prog: 'copy'\n"
            "arguments:\n"
            "  - flags: ['--out']\n"
            "    required: true"
        )
    try:
        raw_parser = RawParser.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigurationError(str(error)) from error
    return raw_parser.to_parser(prog)


def load_parser(file_path: Path | str) -> ArgumentParser:
    """
    Load an `ArgumentParser` declaration from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to a `.yaml`, `.yml` or `.toml` file.

    Returns:
        ArgumentParser: The declared parser.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the file cannot be parsed or declares invalid
            arguments.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such declaration file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        try:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise ConfigurationError(f"Unsupported declaration format: {suffix}")
        except (yaml.YAMLError, toml.TomlDecodeError) as error:
            raise ConfigurationError(f"Could not parse '{path}': {error}") from error

    logger.debug("Loaded declaration file '%s'", path)
    return parser_from_dict(raw_config, prog=path.stem)
