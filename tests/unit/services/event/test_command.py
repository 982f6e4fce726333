"""
Unit tests for services.event.command module.

Tests:
- run_event() render-only output in each mode
- run_event() publish mode (JSON line first, outcomes returned)
- Fatal errors leave stdout empty
"""

import io
import json

import pytest

from nak.core.exceptions import EncodingError, ParseError, SigningError
from nak.models import PublishStatus
from nak.services.event import EventConfig, run_event


NOW = 1_700_000_000


class TestRenderOnly:
    async def test_json(self):
        out = io.StringIO()
        outcomes = await run_event(EventConfig(content="hi"), stdout=out, now=NOW)

        assert outcomes == []
        line = out.getvalue()
        assert line.endswith("\n")
        assert line.count("\n") == 1
        obj = json.loads(line)
        assert obj["content"] == "hi"
        assert obj["created_at"] == NOW
        assert list(obj) == ["id", "pubkey", "created_at", "kind", "tags", "content", "sig"]

    async def test_envelope(self):
        out = io.StringIO()
        await run_event(EventConfig(envelope=True), stdout=out, now=NOW)
        label, obj = json.loads(out.getvalue())
        assert label == "EVENT"
        assert obj["kind"] == 1

    async def test_envelope_wins_over_nson(self):
        out = io.StringIO()
        await run_event(EventConfig(envelope=True, nson=True), stdout=out, now=NOW)
        assert out.getvalue().startswith('["EVENT",')

    async def test_nson(self):
        out = io.StringIO()
        await run_event(EventConfig(nson=True), stdout=out, now=NOW)
        assert json.loads(out.getvalue())["nson"]

    async def test_deterministic(self):
        first, second = io.StringIO(), io.StringIO()
        config = EventConfig(tags=["t=nostr"], created_at=str(NOW))
        await run_event(config, stdout=first)
        await run_event(config, stdout=second)
        assert first.getvalue() == second.getvalue()

    async def test_writes_to_sys_stdout_by_default(self, capsys: pytest.CaptureFixture[str]):
        await run_event(EventConfig(), now=NOW)
        assert json.loads(capsys.readouterr().out)["created_at"] == NOW


class TestFatalErrors:
    async def test_bad_timestamp(self):
        out = io.StringIO()
        with pytest.raises(ParseError):
            await run_event(EventConfig(created_at="soon"), stdout=out)
        assert out.getvalue() == ""

    async def test_bad_key(self):
        out = io.StringIO()
        with pytest.raises(SigningError):
            await run_event(EventConfig(sec="nope"), stdout=out)
        assert out.getvalue() == ""

    async def test_undecodable_content(self):
        out = io.StringIO()
        with pytest.raises(ParseError, match="content"):
            await run_event(EventConfig(content="caf\udce9", created_at="1700000000"), stdout=out)
        assert out.getvalue() == ""

    async def test_nson_unrepresentable(self):
        out = io.StringIO()
        with pytest.raises(EncodingError):
            await run_event(EventConfig(nson=True, created_at="42"), stdout=out)
        assert out.getvalue() == ""

    async def test_publish_mode_fails_before_network(self, make_connector):
        connector = make_connector()
        with pytest.raises(ParseError):
            await run_event(
                EventConfig(created_at="x", relays=["wss://a.example.com"]),
                connector=connector,
                stdout=io.StringIO(),
            )
        assert connector.calls == []


class TestPublishMode:
    async def test_prints_json_then_publishes(self, make_connector):
        out = io.StringIO()
        connector = make_connector(unreachable=("wss://down.example.com",))
        relays = ["wss://down.example.com", "wss://up.example.com"]

        outcomes = await run_event(
            EventConfig(relays=relays, envelope=True),
            connector=connector,
            stdout=out,
            now=NOW,
        )

        obj = json.loads(out.getvalue())
        assert obj["created_at"] == NOW
        assert [o.relay for o in outcomes] == relays
        assert outcomes[0].status is PublishStatus.CONNECTION_FAILED
        assert outcomes[1].status is PublishStatus.PUBLISHED
        published = connector.connections["wss://up.example.com"].published
        assert published[0].id == obj["id"]

    async def test_all_relays_failing_is_not_an_error(self, make_connector):
        connector = make_connector(unreachable=("wss://a.example.com",))
        outcomes = await run_event(
            EventConfig(relays=["wss://a.example.com"]),
            connector=connector,
            stdout=io.StringIO(),
        )
        assert not outcomes[0].ok

    async def test_publish_timeout_passed_through(self, make_connector):
        connector = make_connector(behaviours={"wss://slow.example.com": {"hang": True}})
        outcomes = await run_event(
            EventConfig(relays=["wss://slow.example.com"], publish_timeout=0.05),
            connector=connector,
            stdout=io.StringIO(),
        )
        assert outcomes[0].status is PublishStatus.PUBLISH_FAILED
        assert "timed out" in outcomes[0].detail
