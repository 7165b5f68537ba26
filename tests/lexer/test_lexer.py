from __future__ import annotations

import pytest

from sketchlang.lexer import LineRecord, bracket_delta, lex


def test_records_carry_indent_and_line_number() -> None:
    source = "x=0\nfunction run():\n    circle(x, 1, 2)\n"

    records = lex(source)

    assert records == [
        LineRecord("x=0", 0, 1),
        LineRecord("function run():", 0, 2),
        LineRecord("circle(x, 1, 2)", 4, 3),
    ]


def test_blank_and_comment_lines_are_dropped() -> None:
    source = "\n# heading\nx=1\n\n    # indented comment\ny=2\n"

    records = lex(source)

    assert [record.text for record in records] == ["x=1", "y=2"]
    assert [record.line for record in records] == [3, 6]


def test_multi_line_list_joins_into_one_record() -> None:
    source = "points = [\n    1,\n    2,\n]\nprint(points)\n"

    records = lex(source)

    assert records[0] == LineRecord("points = [ 1, 2, ]", 0, 1)
    assert records[1].text == "print(points)"


def test_comment_inside_open_bracket_is_kept() -> None:
    source = "a = [1,\n# note\n2]\n"

    records = lex(source)

    assert len(records) == 1
    assert records[0].text == "a = [1, # note 2]"


def test_indent_of_merged_record_comes_from_first_line() -> None:
    source = "function run():\n  grid = [[1],\n[2]]\n"

    records = lex(source)

    assert records[1].indent == 2
    assert records[1].text == "grid = [[1], [2]]"


def test_unterminated_bracket_flushes_at_end_of_input() -> None:
    records = lex("a = [1,\n2\n")

    assert records == [LineRecord("a = [1, 2", 0, 1)]


def test_tabs_count_as_single_characters() -> None:
    records = lex("if x:\n\tprint(x)\n")

    assert records[1].indent == 1


def test_brackets_inside_strings_do_not_open_literal() -> None:
    records = lex('label = "[open"\nprint(label)\n')

    assert [record.text for record in records] == ['label = "[open"', "print(label)"]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("[1, [2]]", (0, None)),
        ("[1,", (1, None)),
        ("]", (-1, None)),
        ('"]" + [', (1, None)),
        ('"unterminated [', (0, '"')),
        (r"'it\'s [' ]", (-1, None)),
    ],
)
def test_bracket_delta(text: str, expected: tuple) -> None:
    assert bracket_delta(text) == expected


def test_empty_source_has_no_records() -> None:
    assert lex("") == []
    assert lex("\n\n   \n# only comments\n") == []
