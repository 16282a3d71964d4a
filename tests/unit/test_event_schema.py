from __future__ import annotations

import json

import pytest

from whisper_relay.application.events.event_schema import (
    EVENT_LOG_PREFIX,
    EventKind,
    WhisperEventEnvelope,
    make_event,
    parse_event_line,
)


def test_log_line_is_prefixed_compact_json_with_sorted_payload():
    env = make_event(EventKind.message, {"to": "bob.near", "id": 1, "from": "alice.near"})
    assert env.to_log_line() == (
        'EVENT_JSON:{"standard":"whisper","version":"1.0.0","event":"message",'
        '"data":{"from":"alice.near","id":1,"to":"bob.near"}}'
    )


def test_nested_payload_keys_are_sorted():
    env = make_event("message", {"payment": {"token": "NEAR", "amount": "5"}, "id": 2})
    body = env.to_json()
    assert body.index('"amount"') < body.index('"token"')
    assert list(env.to_dict().keys()) == ["standard", "version", "event", "data"]


def test_non_ascii_passes_through():
    env = make_event(EventKind.key_registered, {"display_name": "Алиса 🔑"})
    assert "Алиса 🔑" in env.to_log_line()


def test_null_fields_are_kept():
    env = make_event(EventKind.group_created, {"name": None})
    assert json.loads(env.to_json())["data"] == {"name": None}


def test_parse_event_line_reads_back_envelope():
    line = make_event(EventKind.group_message, {"group_id": "g1", "id": 3}).to_log_line()
    env = parse_event_line(line)
    assert isinstance(env, WhisperEventEnvelope)
    assert env.event == "group_message"
    assert env.data == {"group_id": "g1", "id": 3}


def test_parse_event_line_rejects_foreign_lines():
    with pytest.raises(ValueError):
        parse_event_line('{"event":"message"}')
    assert EVENT_LOG_PREFIX == "EVENT_JSON:"


def test_event_kind_values():
    assert [k.value for k in EventKind] == ["key_registered", "message", "group_created", "group_message"]
