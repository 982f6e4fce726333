"""
Unit tests for services.event.assembler module.

Tests:
- parse_tag_expression() micro-language
- build_tags() source ordering and dropped expressions
- parse_created_at() "now", integers, and failures
- assemble_event() from an EventConfig
"""

import logging

import pytest

from nak.core.exceptions import ParseError
from nak.models.constants import INT64_MAX, INT64_MIN
from nak.services.event import (
    EventConfig,
    assemble_event,
    build_tags,
    parse_created_at,
    parse_tag_expression,
)


class TestParseTagExpression:
    @pytest.mark.parametrize(
        ("expression", "expected"),
        [
            ("e=abc", ("e", "abc")),
            ("e=abc;wss://relay.example.com;reply", ("e", "abc", "wss://relay.example.com", "reply")),
            ("t=", ("t", "")),
            ("t=;", ("t", "", "")),
            ("d=a=b", ("d", "a=b")),
            ("r=https://example.com/?q=1", ("r", "https://example.com/?q=1")),
            ("x=a;;b", ("x", "a", "", "b")),
        ],
    )
    def test_valid(self, expression: str, expected: tuple[str, ...]):
        assert parse_tag_expression(expression) == expected

    @pytest.mark.parametrize("expression", ["novalue", "", "=value", "=;x"])
    def test_dropped(self, expression: str):
        assert parse_tag_expression(expression) is None


class TestBuildTags:
    def test_empty(self):
        assert build_tags() == []

    def test_source_order(self):
        tags = build_tags(["t=nostr"], ["id1", "id2"], ["pk1"])
        assert tags == [("t", "nostr"), ("e", "id1"), ("e", "id2"), ("p", "pk1")]

    def test_generic_tags_come_first_regardless_of_content(self):
        tags = build_tags(["p=explicit"], [], ["shortcut"])
        assert tags == [("p", "explicit"), ("p", "shortcut")]

    def test_invalid_expressions_skipped(self):
        assert build_tags(["novalue", "t=ok", "=x"]) == [("t", "ok")]

    def test_dropped_expression_logged_at_debug(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.DEBUG, logger="nak.assembler"):
            build_tags(["novalue"])
        assert [r.getMessage() for r in caplog.records] == ["tag_dropped"]
        assert caplog.records[0].structured_kv == {"expression": "novalue"}

    def test_shortcut_values_taken_verbatim(self):
        assert build_tags([], ["a=b;c"]) == [("e", "a=b;c")]


class TestParseCreatedAt:
    def test_now_uses_override(self):
        assert parse_created_at("now", now=1_700_000_000.9) == 1_700_000_000

    def test_now_uses_clock(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr("nak.services.event.assembler.time.time", lambda: 1234.5)
        assert parse_created_at("now") == 1234

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("1700000000", 1_700_000_000),
            ("0", 0),
            ("-1", -1),
            ("+42", 42),
            ("0042", 42),
            (str(INT64_MAX), INT64_MAX),
            (str(INT64_MIN), INT64_MIN),
        ],
    )
    def test_integers(self, value: str, expected: int):
        assert parse_created_at(value) == expected

    @pytest.mark.parametrize(
        "value",
        ["", "NOW", "abc", "1.5", "1e9", " 1", "1_000", str(INT64_MAX + 1), str(INT64_MIN - 1)],
    )
    def test_invalid(self, value: str):
        with pytest.raises(ParseError, match="failed to parse timestamp") as exc_info:
            parse_created_at(value)
        assert exc_info.value.value == value


class TestAssembleEvent:
    def test_defaults(self):
        event = assemble_event(EventConfig(), now=1_700_000_000)
        assert event.kind == 1
        assert event.content == "hello from the nostr army knife"
        assert event.created_at == 1_700_000_000
        assert event.tags == ()
        assert not event.is_signed

    def test_fields(self):
        config = EventConfig(
            kind=7,
            content="+",
            tags=["t=nostr"],
            e_tags=["abc"],
            p_tags=["def"],
            created_at="1600000000",
        )
        event = assemble_event(config)
        assert event.kind == 7
        assert event.content == "+"
        assert event.created_at == 1_600_000_000
        assert event.tags == (("t", "nostr"), ("e", "abc"), ("p", "def"))

    def test_bad_timestamp(self):
        with pytest.raises(ParseError):
            assemble_event(EventConfig(created_at="yesterday"))

    def test_content_with_undecodable_bytes(self):
        with pytest.raises(ParseError, match="content is not valid UTF-8") as exc_info:
            assemble_event(EventConfig(content="caf\udce9", created_at="1700000000"))
        assert exc_info.value.value == "caf\udce9"

    @pytest.mark.parametrize(
        ("fields", "location"),
        [
            ({"tags": ["t=caf\udce9"]}, r"tags\[0\]\[1\]"),
            ({"tags": ["t=ok;\udcff"]}, r"tags\[0\]\[2\]"),
            ({"tags": ["t=ok"], "p_tags": ["\udce9"]}, r"tags\[1\]\[1\]"),
        ],
    )
    def test_tag_with_undecodable_bytes(self, fields: dict, location: str):
        with pytest.raises(ParseError, match=f"{location} is not valid UTF-8"):
            assemble_event(EventConfig(created_at="1700000000", **fields))
