"""Tests for taskdocs.schema.fields."""

from __future__ import annotations

from taskdocs.models import Field
from taskdocs.schema.fields import BraceTracker, ScanState, extract_fields
from taskdocs.schema.locator import split_lines


def _fields(text: str, start: int = 0):
    return extract_fields(split_lines(text), start)


def test_nested_message_fields_are_excluded() -> None:
    text = (
        "message OuterTask {\n"
        "  message Inner { string x = 1; }\n"
        "  uint32 y = 2;\n"
        "}\n"
    )
    assert _fields(text) == [Field(name="y", type="uint32", description="")]


def test_multiline_nested_blocks_are_skipped() -> None:
    text = (
        "message OuterTask {\n"
        "  enum Mode {\n"
        "    MODE_A = 0;\n"
        "  }\n"
        "  oneof Source {\n"
        "    string url = 1;\n"
        "    int64 slot = 2;\n"
        "  }\n"
        "  optional Mode mode = 3;\n"
        "}\n"
    )
    assert [field.name for field in _fields(text)] == ["mode"]


def test_trailing_comment_is_used_without_preceding_comment() -> None:
    text = "message QuoteTask {\n  optional string symbol = 3; // the ticker\n}\n"
    (field,) = _fields(text)
    assert field == Field(name="symbol", type="string", description="the ticker")


def test_preceding_comment_wins_over_trailing_comment() -> None:
    text = (
        "message QuoteTask {\n"
        "  /// The ticker symbol\n"
        "  optional string symbol = 3; // something else\n"
        "}\n"
    )
    (field,) = _fields(text)
    assert field.description == "The ticker symbol"


def test_only_the_immediately_preceding_line_counts() -> None:
    text = (
        "message QuoteTask {\n"
        "  /// Describes nothing\n"
        "\n"
        "  optional string symbol = 3;\n"
        "}\n"
    )
    (field,) = _fields(text)
    assert field.description == ""


def test_qualifier_is_optional_and_types_are_raw_tokens() -> None:
    text = (
        "message MixedTask {\n"
        "  string plain = 1;\n"
        "  repeated OracleJob.Task tasks = 2;\n"
        "  required bytes data = 3;\n"
        "  map<string, string> headers = 4;\n"
        "}\n"
    )
    fields = _fields(text)
    assert [(f.name, f.type) for f in fields] == [
        ("plain", "string"),
        ("tasks", "OracleJob.Task"),
        ("data", "bytes"),
        ("headers", "map<string, string>"),
    ]


def test_field_on_closing_brace_line_is_extracted() -> None:
    text = "message TightTask {\n  string a = 1;\n  string b = 2; }\nstring c = 3;\n"
    assert [field.name for field in _fields(text)] == ["a", "b"]


def test_fields_on_single_line_entry_are_extracted() -> None:
    text = "/// Entry doc\nmessage OneLineTask { string a = 1; }\n"
    assert _fields(text, start=1) == [Field(name="a", type="string", description="")]


def test_scan_stops_at_entry_closing_brace() -> None:
    text = (
        "message FirstTask {\n"
        "  string a = 1;\n"
        "}\n"
        "message SecondTask {\n"
        "  string b = 1;\n"
        "}\n"
    )
    assert [field.name for field in _fields(text)] == ["a"]
    assert [field.name for field in _fields(text, start=3)] == ["b"]


def test_unclosed_entry_reads_until_end_of_input() -> None:
    text = "message OpenTask {\n  string a = 1;\n  string b = 2;"
    assert [field.name for field in _fields(text)] == ["a", "b"]


def test_empty_nested_block_on_one_line_keeps_depth_consistent() -> None:
    text = (
        "message EmptyNestTask {\n"
        "  message Marker {}\n"
        "  reserved 5;\n"
        "  optional double value = 1;\n"
        "}\n"
    )
    assert [field.name for field in _fields(text)] == ["value"]


def test_non_field_lines_are_ignored() -> None:
    text = (
        "message OptionsTask {\n"
        "  option deprecated = true;\n"
        "  reserved 2, 3;\n"
        "  // optional string commented = 4;\n"
        "  optional int32 kept = 1;\n"
        "}\n"
    )
    assert [field.name for field in _fields(text)] == ["kept"]


def test_brace_tracker_reports_states() -> None:
    tracker = BraceTracker()
    assert tracker.state is ScanState.SEEKING

    tracker.feed("message OuterTask {")
    assert tracker.state is ScanState.BODY
    assert not tracker.closed

    tracker.feed("  message Inner {")
    assert tracker.state is ScanState.NESTED
    assert tracker.depth == 2

    tracker.feed("  }")
    assert tracker.state is ScanState.BODY

    tracker.feed("}")
    assert tracker.closed


def test_brace_tracker_counts_every_brace_on_a_line() -> None:
    tracker = BraceTracker()
    tracker.feed("message T { message A {} message B { } ")
    assert tracker.depth == 1
    assert tracker.nested_depth == 0
