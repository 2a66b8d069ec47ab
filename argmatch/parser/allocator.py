# Argmatch Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Plans how a contiguous run of positional tokens fills the positional slots.

`allocate()` is a pure function: it reads the run, the positional specs and the
cursor, and returns an `Allocation` describing which spec receives which tokens,
which tokens are left over, and where the cursor ends up. Nothing is stored
here; the engine applies the plan through the action dispatcher.

The plan follows the greedy argparse heuristics:

1. Window: walk the specs from the cursor, adding each one's minimum token
   count, and stop before the first spec that would need more tokens than the
   run holds. `?` adds optional slack, `*` and `+` are open-ended. Specs that
   take no value are part of the window but consume nothing.
2. Empty window: every token is unrecognized.
3. Exact fit: each slot gets its minimum, `?` and `*` slots their default.
4. Open-ended slot present: the first one in declaration order takes the whole
   surplus.
5. Enough `?` slack: `?` slots take one token each, left to right.
6. Otherwise: every slot takes its fixed count (`?` takes one) and the rest of
   the run is unrecognized.

A subcommand slot behaves like a `+` spec with the lowest priority: it takes
exactly the command name, ends the window, and every later token of the run is
handed to the subcommand as its remainder.
"""
from __future__ import annotations

from dataclasses import dataclass

from argmatch.logger import logger
from argmatch.parser.argument import ArgumentSpec
from argmatch.parser.parser_types import Allocation


@dataclass
class _Window:
    finish: int
    min_args: int = 0
    one_args: int = 0
    more_args: bool = False


def _scan_window(
    run: list[str],
    positionals: tuple[ArgumentSpec, ...],
    cursor: int,
    subcommand: ArgumentSpec | None,
) -> _Window:
    window = _Window(finish=cursor)
    while window.finish < len(positionals):
        spec = positionals[window.finish]
        if spec is subcommand:
            if window.min_args + 1 > len(run):
                break
            window.min_args += 1
            window.more_args = True
            window.finish += 1
            break
        if not spec.action.takes_values:
            window.finish += 1
            continue
        if spec.nargs == "?":
            window.one_args += 1
        if spec.is_open_ended:
            window.more_args = True
        if window.min_args + spec.min_values > len(run):
            break
        window.min_args += spec.min_values
        window.finish += 1
    return window


def allocate(
    run: list[str],
    positionals: tuple[ArgumentSpec, ...],
    cursor: int,
    subcommand: ArgumentSpec | None = None,
) -> Allocation:
    """
    Plan the assignment of one positional run.

    Args:
        run (list[str]): The contiguous positional tokens.
        positionals (tuple[ArgumentSpec, ...]): Every positional slot, the
            subcommand slot last.
        cursor (int): Index of the first unfilled slot.
        subcommand (ArgumentSpec | None): The subcommand slot, if declared.

    Returns:
        Allocation: The assignments, leftovers, new cursor and, when the
            subcommand slot was reached, the tokens that follow its name.
    """
    allocation = Allocation(cursor=cursor)
    if cursor >= len(positionals):
        allocation.unrecognized = list(run)
        logger.debug("No positional slot left for %s", run)
        return allocation

    window = _scan_window(run, positionals, cursor, subcommand)
    if window.finish == cursor:
        allocation.unrecognized = list(run)
        logger.debug("Positional window is empty for %s", run)
        return allocation

    count = len(run)
    if window.min_args == count:
        branch = "exact"
    elif window.more_args:
        branch = "open-ended"
    elif window.min_args + window.one_args >= count:
        branch = "optional"
    else:
        branch = "fixed"

    surplus = count - window.min_args
    optional_taken = 0
    index = 0
    for spec in positionals[cursor : window.finish]:
        if spec is subcommand:
            allocation.assignments.append((spec, [run[index]]))
            allocation.remainder = list(run[index + 1 :])
            index = count
            continue
        if not spec.action.takes_values:
            allocation.assignments.append((spec, None))
            continue

        if spec.nargs == "?":
            if branch == "fixed" or (branch == "optional" and optional_taken < surplus):
                allocation.assignments.append((spec, [run[index]]))
                index += 1
                optional_taken += 1
            else:
                allocation.assignments.append((spec, None))
            continue

        taken = spec.min_values
        if spec.is_open_ended and branch == "open-ended":
            taken += surplus
            surplus = 0

        if taken == 0:
            allocation.assignments.append((spec, None))
        else:
            allocation.assignments.append((spec, list(run[index : index + taken])))
            index += taken

    allocation.cursor = window.finish
    if index < count:
        allocation.unrecognized = list(run[index:])

    logger.debug(
        "Allocated %d token(s) to slots %d..%d (%s): %s",
        count,
        cursor,
        window.finish - 1,
        branch,
        [(spec.dest, values) for spec, values in allocation.assignments],
    )
    return allocation
