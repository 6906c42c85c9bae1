import pytest

from csv_utility.codec import iter_records, parse_row, parse_table, quote_field, serialize_row, serialize_table
from csv_utility.errors import MalformedRow


def test_serialize_quotes_only_when_needed():
    assert serialize_row(["a", "b,c", 'd"e']) == 'a,"b,c","d""e"'


def test_parse_quoted_fields():
    assert parse_row('a,"b,c","d""e"') == ["a", "b,c", 'd"e']


def test_parse_empty_line_is_single_empty_field():
    assert parse_row("") == [""]


def test_parse_keeps_empty_fields():
    assert parse_row(",,") == ["", "", ""]
    assert parse_row("a,") == ["a", ""]


def test_quote_field_newlines():
    assert quote_field("line1\nline2") == '"line1\nline2"'
    assert quote_field("cr\rhere") == '"cr\rhere"'
    assert quote_field("plain") == "plain"
    assert quote_field("") == ""


@pytest.mark.parametrize(
    "fields",
    [
        ["a", "b", "c"],
        [""],
        ["", ""],
        ["comma,inside", "quote\"inside", "new\nline"],
        ['"fully quoted"', "trailing space ", " leading"],
        ["multi\r\nline, with \"everything\""],
    ],
)
def test_round_trip(fields):
    assert parse_row(serialize_row(fields)) == fields


def test_unbalanced_quote_best_effort():
    # an unterminated quote runs to the end of the line
    assert parse_row('a,"b,c') == ["a", "b,c"]


def test_unbalanced_quote_strict():
    with pytest.raises(MalformedRow):
        parse_row('a,"b,c', strict=True)


def test_text_after_closing_quote_strict():
    with pytest.raises(MalformedRow):
        parse_row('"ab"cd,e', strict=True)


def test_multiple_records_rejected():
    with pytest.raises(MalformedRow):
        parse_row("a,b\nc,d")


def test_parse_table_multiline_field():
    text = 'name,notes\nSword,"sharp,\nheavy"\nShield,plain\n'
    assert parse_table(text) == [
        ["name", "notes"],
        ["Sword", "sharp,\nheavy"],
        ["Shield", "plain"],
    ]


def test_parse_table_blank_lines():
    text = "a,b\n\nc,d\n"
    assert parse_table(text) == [["a", "b"], ["c", "d"]]
    assert parse_table(text, keep_blank=True) == [["a", "b"], [""], ["c", "d"]]


def test_parse_table_crlf():
    assert parse_table("a,b\r\nc,d\r\n") == [["a", "b"], ["c", "d"]]


def test_serialize_table_terminates_rows():
    rows = [["h1", "h2"], ["x", "y,z"]]
    assert serialize_table(rows) == 'h1,h2\nx,"y,z"\n'
    assert parse_table(serialize_table(rows)) == rows


def test_codec_does_not_enforce_width():
    assert parse_table("a,b,c\nd\n") == [["a", "b", "c"], ["d"]]


def test_round_trip_large_field():
    fields = ["x" * 200_000, 'big, "quoted"\n' * 20_000]
    assert parse_row(serialize_row(fields)) == fields
    assert parse_table(serialize_table([fields])) == [fields]


def test_iter_records_reports_physical_lines():
    text = 'h1,h2\n\n"multi\nline",x\nlast,y\n'
    assert list(iter_records(text)) == [
        (1, ["h1", "h2"]),
        (2, []),
        (3, ["multi\nline", "x"]),
        (5, ["last", "y"]),
    ]


def test_malformed_error_names_physical_line():
    text = 'a,b\n\n"two\nlines",c\n"x"y,z\n'
    with pytest.raises(MalformedRow) as exc:
        parse_table(text, strict=True)
    assert str(exc.value).startswith("line 5:")
