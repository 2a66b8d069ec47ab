# Argmatch Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Namespace`, the result of a successful match.

A `Namespace` maps every declared destination to the action that bound it and
the raw string values it received, in declaration order. Raw values are kept as
the engine produced them; the accessors give them a Python shape:

- `count` → `int`
- `store_true` / `store_false` → `bool`
- `store` / `store_const` with a single-valued arity → `str | None`
- everything else → `list[str]`

`namespace.get(key, type=int)` additionally coerces each value (see
`coerce_binding`). Keys may be destinations or any declared flag. Destinations
named after a public method (`values`, `get`, ...) are rejected by the parser.

Example:
    >>> ns = parser.parse_args(["--out", "result.txt", "a.txt"])
    >>> ns["out"], ns.files, ns.get("--out")
    ('result.txt', ['a.txt'], 'result.txt')
"""
from __future__ import annotations

from typing import Any, Iterator

from argmatch.parser.argument import ArgumentSpec
from argmatch.parser.argument_action import ArgumentAction
from argmatch.parser.parser_types import BoundValue
from argmatch.parser.utils import coerce_binding

_SINGLE_ACTIONS = (ArgumentAction.STORE, ArgumentAction.STORE_CONST)

# Public methods of `Namespace`; a destination with one of these names would be
# hidden from attribute access.
RESERVED_DESTS = frozenset(
    ("action", "as_dict", "bind", "get", "keys", "merge", "to_string", "values")
)


class Namespace:
    """Mapping from destination to the (action, raw values) bound to it."""

    def __init__(
        self,
        bindings: dict[str, BoundValue] | None = None,
        specs: list[ArgumentSpec] | None = None,
    ) -> None:
        self._bindings: dict[str, BoundValue] = dict(bindings or {})
        self._specs: dict[str, ArgumentSpec] = {}
        self._aliases: dict[str, str] = {}
        for spec in specs or []:
            self._register(spec)

    def _register(self, spec: ArgumentSpec) -> None:
        self._specs[spec.dest] = spec
        if not spec.positional:
            for flag in spec.flags:
                self._aliases[flag] = spec.dest

    def _resolve(self, key: str) -> str:
        if key in self._bindings:
            return key
        if key in self._aliases:
            return self._aliases[key]
        raise KeyError(key)

    def bind(self, dest: str, action: ArgumentAction, values: list[str]) -> None:
        """Bind raw values to a destination, replacing any earlier binding."""
        self._bindings[dest] = BoundValue(action, list(values))

    def merge(self, other: Namespace) -> None:
        """Merge another namespace into this one; its bindings win."""
        for spec in other._specs.values():
            self._register(spec)
        for dest, bound in other._bindings.items():
            self._bindings[dest] = BoundValue(bound.action, list(bound.values))

    def values(self, key: str) -> list[str]:
        """Return the raw values bound to a key."""
        return list(self._bindings[self._resolve(key)].values)

    def action(self, key: str) -> ArgumentAction:
        """Return the action that bound a key."""
        return self._bindings[self._resolve(key)].action

    def _is_single(self, dest: str, action: ArgumentAction) -> bool:
        spec = self._specs.get(dest)
        if action not in _SINGLE_ACTIONS:
            return False
        return spec is None or spec.is_single_valued

    def _typed(self, dest: str, target_type: type | None = None) -> Any:
        bound = self._bindings[dest]
        single = self._is_single(dest, bound.action)
        return coerce_binding(bound.action, bound.values, single, target_type)

    def get(self, key: str, default: Any = None, *, type: type | None = None) -> Any:
        """Return the typed value for a key, or `default` if it is not bound.

        Args:
            key (str): A destination or one of the declared flags.
            default (Any): Returned when the key is unknown or has no value.
            type (type | None): Coerce every raw value to this type.
        """
        try:
            dest = self._resolve(key)
        except KeyError:
            return default
        value = self._typed(dest, type)
        if value is None:
            return default
        return value

    def to_string(self, key: str) -> str:
        """Render a binding the way it would be echoed on a terminal."""
        bound = self._bindings[self._resolve(key)]
        if bound.action == ArgumentAction.COUNT:
            return str(len(bound.values))
        if bound.action in (
            ArgumentAction.STORE_CONST,
            ArgumentAction.STORE_TRUE,
            ArgumentAction.STORE_FALSE,
        ):
            return bound.values[0] if bound.values else "None"
        items = ", ".join(value if value else "None" for value in bound.values)
        return f"[{items}]"

    def as_dict(self) -> dict[str, Any]:
        """Return every binding as its typed value, in declaration order."""
        return {dest: self._typed(dest) for dest in self._bindings}

    def keys(self) -> list[str]:
        return list(self._bindings)

    def __getitem__(self, key: str) -> Any:
        return self._typed(self._resolve(key))

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(
                f"'Namespace' object has no attribute '{name}'"
            ) from None

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return key in self._bindings or key in self._aliases

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Namespace):
            return NotImplemented
        return self._bindings == other._bindings

    def __repr__(self) -> str:
        items = ", ".join(f"{dest}={value!r}" for dest, value in self.as_dict().items())
        return f"Namespace({items})"
