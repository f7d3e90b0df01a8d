import logging

import pytest

from canvas import Canvas
from commands import (
    BucketFill,
    CreateCanvas,
    DrawLine,
    DrawRectangle,
    parse_commands,
    parse_line,
    run,
)
from errors import (
    DegenerateLine,
    InvalidColor,
    InvalidDimension,
    OutOfBounds,
    ParseError,
    SequenceError,
)

SCRIPT = """C 20 4
L 1 2 6 2
L 6 3 6 4
R 14 1 18 3
B 10 3 o
"""


def test_parse_line_records():
    assert parse_line("C 20 4") == CreateCanvas(20, 4)
    assert parse_line("L 1 2 6 2", 3) == DrawLine(1, 2, 6, 2, lineno=3)
    assert parse_line("R  14 1   18 3") == DrawRectangle(14, 1, 18, 3)
    assert parse_line("B 10 3 o") == BucketFill(10, 3, "o")


def test_parse_keeps_multi_character_colour_for_canvas_to_reject():
    assert parse_line("B 1 1 oo").color == "oo"


@pytest.mark.parametrize(
    "line",
    [
        "X 1 2", "c 20 4", "C 20", "L 1 2 3", "R 1 2 3 4 5", "B 1 1", "C 2.5 4", "L a 1 2 1", "",
        "C 1_0 4", "C +3 4", "C \u0663 4", "L 1 1 --2 1", "B 1 - o",
    ],
)
def test_parse_errors(line):
    with pytest.raises(ParseError):
        parse_line(line, 7)


def test_parse_error_carries_line_number():
    with pytest.raises(ParseError) as exc:
        parse_commands("C 5 5\n\nQ 1 1\n")
    assert exc.value.lineno == 3
    assert "line 3" in str(exc.value)


def test_parse_commands_skips_blank_lines():
    commands = parse_commands(SCRIPT + "\n\n")
    assert len(commands) == 5
    assert commands[-1] == BucketFill(10, 3, "o", lineno=5)


def test_run_appends_render_after_each_command():
    output, canvas = run(parse_commands(SCRIPT))
    renders = output.split("-" * 22 + "\n")
    # each render contributes a top and a bottom border
    assert output.count("-" * 22 + "\n") == 10
    assert output.endswith(canvas.render())
    assert isinstance(canvas, Canvas)
    assert len(renders) == 11


def test_run_final_state():
    _, canvas = run(parse_commands(SCRIPT))
    assert canvas.render().splitlines()[1:-1] == [
        "|" + "o" * 13 + "xxxxx" + "oo" + "|",
        "|" + "x" * 6 + "o" * 7 + "x   x" + "oo" + "|",
        "|" + " " * 5 + "x" + "o" * 7 + "xxxxx" + "oo" + "|",
        "|" + " " * 5 + "x" + "o" * 14 + "|",
    ]


def test_canvas_must_come_first():
    with pytest.raises(SequenceError, match="initialized first"):
        run([DrawLine(1, 1, 2, 1, lineno=1)])


def test_canvas_created_only_once():
    with pytest.raises(SequenceError, match="more than once"):
        run(parse_commands("C 4 4\nC 5 5\n"))


def test_abort_propagates_canvas_error():
    with pytest.raises(DegenerateLine):
        run(parse_commands("C 4 4\nL 1 1 1 1\n"))


def test_skip_logs_and_continues(caplog):
    with caplog.at_level(logging.WARNING):
        output, canvas = run(parse_commands("C 4 2\nL 9 1 1 1\nL 1 1 4 1\n"), on_error="skip")

    assert output == Canvas(4, 2).render() + canvas.render()
    assert canvas.cell(4, 1) == "x"
    assert "Skipping line 2" in caplog.text


def test_skip_still_fails_without_canvas():
    with pytest.raises(InvalidDimension):
        run(parse_commands("C 0 4\nL 1 1 2 1\n"), on_error="skip")


def test_skip_never_hides_sequence_errors():
    with pytest.raises(SequenceError):
        run(parse_commands("C 4 4\nC 4 4\n"), on_error="skip")


def test_negative_coordinates_reach_canvas_as_out_of_bounds():
    with pytest.raises(OutOfBounds):
        run(parse_commands("C 4 4\nB -1 2 o\n"))


def test_unknown_error_policy():
    with pytest.raises(ValueError):
        run([CreateCanvas(2, 2)], on_error="retry")


def test_empty_command_list():
    assert run([]) == ("", None)


def test_parse_negative_whole_numbers():
    assert parse_line("L -1 2 3 2") == DrawLine(-1, 2, 3, 2)


def test_nul_colour_from_file_is_rejected():
    with pytest.raises(InvalidColor):
        run(parse_commands("C 3 1\nB 1 1 \x00\n"))
