import pytest

from argmatch.exceptions import MissingRequiredError, UnrecognizedArgumentsError
from argmatch.parser import ArgumentParser, create_argument
from argmatch.parser.allocator import allocate


def make_parser(*positionals):
    parser = ArgumentParser(prog="prog", exit_on_error=False)
    for name, kwargs in positionals:
        parser.add_argument(name, **kwargs)
    return parser


def test_two_open_ended_positionals_surplus_goes_to_first():
    parser = make_parser(("a", {"nargs": "*"}), ("b", {"nargs": "*"}))
    args = parser.parse_args(["1", "2", "3"])
    assert args.a == ["1", "2", "3"]
    assert args.b == []


def test_open_ended_positional_takes_its_default():
    parser = make_parser(("a", {"nargs": "*"}), ("b", {"nargs": "*", "default": ["x"]}))
    args = parser.parse_args(["1"])
    assert args.a == ["1"]
    assert args.b == ["x"]


def test_exact_fit_gives_optional_slot_its_default():
    parser = make_parser(
        ("src", {}), ("dst", {}), ("extra", {"nargs": "?", "default": "none"})
    )
    args = parser.parse_args(["s", "d"])
    assert (args.src, args.dst, args.extra) == ("s", "d", "none")


def test_optional_slack_is_filled():
    parser = make_parser(("src", {}), ("dst", {}), ("extra", {"nargs": "?"}))
    args = parser.parse_args(["s", "d", "e"])
    assert (args.src, args.dst, args.extra) == ("s", "d", "e")


def test_optional_slots_fill_left_to_right():
    parser = make_parser(("x", {"nargs": "?"}), ("y", {"nargs": "?"}))
    args = parser.parse_args(["1"])
    assert args.x == "1"
    assert args.y is None


def test_one_or_more_before_single():
    parser = make_parser(("files", {"nargs": "+"}), ("dest", {}))
    args = parser.parse_args(["a", "b", "c"])
    assert args.files == ["a", "b"]
    assert args.dest == "c"


def test_fixed_count_then_single():
    parser = make_parser(("pair", {"nargs": 2}), ("name", {}))
    args = parser.parse_args(["a", "b", "c"])
    assert args.pair == ["a", "b"]
    assert args.name == "c"


def test_fixed_counts_leave_trailing_tokens_unrecognized():
    parser = make_parser(("pair", {"nargs": 2}), ("name", {}))
    with pytest.raises(UnrecognizedArgumentsError) as exc_info:
        parser.parse_args(["a", "b", "c", "d"])
    assert exc_info.value.tokens == ["d"]


def test_empty_window_reports_tokens_and_missing_slot():
    parser = make_parser(("pair", {"nargs": 2}))
    with pytest.raises(MissingRequiredError) as exc_info:
        parser.parse_args(["a"])
    error = exc_info.value
    assert error.missing == ["pair"]
    assert error.unrecognized == ["a"]
    assert str(error) == (
        "the following arguments are required: pair; unrecognized arguments: a"
    )


def test_runs_between_optionals_fill_successive_slots():
    parser = make_parser(("a", {}), ("b", {}))
    parser.add_argument("--flag", action="store_true")
    args = parser.parse_args(["1", "--flag", "2"])
    assert (args.a, args.b, args.flag) == ("1", "2", True)


def test_unrecognized_tokens_keep_input_order():
    parser = make_parser(("a", {}))
    with pytest.raises(UnrecognizedArgumentsError) as exc_info:
        parser.parse_args(["1", "2", "--zz", "3"])
    assert exc_info.value.tokens == ["2", "--zz", "3"]
    assert str(exc_info.value) == "unrecognized arguments: 2 --zz 3"


def test_const_positional_is_stored_without_consuming():
    parser = make_parser(
        ("mode", {"action": "store_const", "const": "fast"}), ("target", {})
    )
    args = parser.parse_args(["t"])
    assert args.mode == "fast"
    assert args.target == "t"


def test_allocate_plan():
    a = create_argument("a", nargs="*")
    b = create_argument("b", nargs="*")
    allocation = allocate(["x", "y", "z"], (a, b), 0)
    assert allocation.assignments == [(a, ["x", "y", "z"]), (b, None)]
    assert allocation.cursor == 2
    assert allocation.unrecognized == []
    assert allocation.remainder is None


def test_allocate_without_slots_leaves_everything_unrecognized():
    a = create_argument("a")
    allocation = allocate(["x", "y"], (a,), 1)
    assert allocation.assignments == []
    assert allocation.unrecognized == ["x", "y"]
    assert allocation.cursor == 1


def test_allocate_window_stops_before_unsatisfiable_slot():
    a = create_argument("a")
    pair = create_argument("pair", nargs=2)
    allocation = allocate(["x"], (a, pair), 0)
    assert allocation.assignments == [(a, ["x"])]
    assert allocation.cursor == 1


def test_allocate_stops_at_subcommand():
    env = create_argument("env")
    command = create_argument("command", choices=["build"])
    allocation = allocate(["prod", "build", "x", "y"], (env, command), 0, command)
    assert allocation.assignments == [(env, ["prod"]), (command, ["build"])]
    assert allocation.remainder == ["x", "y"]
    assert allocation.cursor == 2
    assert allocation.unrecognized == []


def test_allocate_surplus_goes_to_one_or_more_slot():
    head = create_argument("head", nargs=2)
    rest = create_argument("rest", nargs="+")
    tail = create_argument("tail")
    allocation = allocate(["a", "b", "c", "d", "e"], (head, rest, tail), 0)
    assert allocation.assignments == [
        (head, ["a", "b"]),
        (rest, ["c", "d"]),
        (tail, ["e"]),
    ]
    assert allocation.cursor == 3
    assert allocation.unrecognized == []
