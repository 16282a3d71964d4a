from __future__ import annotations

import pytest

from tests.helpers import ONE_NEAR, STORAGE_DEPOSIT, make_key
from whisper_relay.core.contract import WhisperContract
from whisper_relay.core.errors import DuplicateGroupError
from whisper_relay.infrastructure.event_log.sqlalchemy_event_log import SqlAlchemyEventLog
from whisper_relay.infrastructure.host.in_process_host import InProcessHost
from whisper_relay.infrastructure.stores.kv_store import SqlAlchemyKeyValueStore


def _open(db_url: str):
    host = InProcessHost(SqlAlchemyKeyValueStore(db_url=db_url))
    return host, SqlAlchemyEventLog(db_url=db_url)


def test_relay_state_survives_restart(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'relay.db'}"
    host, evlog = _open(db_url)
    with host.call("owner.near"):
        contract = WhisperContract.new(host, evlog)
    with host.call("alice.near", STORAGE_DEPOSIT):
        contract.register_key(make_key(1), "Alice")
    with host.call("bob.near", STORAGE_DEPOSIT):
        contract.register_key(make_key(2))
    with host.call("alice.near", STORAGE_DEPOSIT):
        contract.create_group("g1", "Team", '{"bob.near": "k"}')
    with host.call("alice.near", ONE_NEAR):
        contract.send_message_with_payment("bob.near", "tip", "n", 1)
    with host.call("bob.near", STORAGE_DEPOSIT):
        with pytest.raises(DuplicateGroupError):
            contract.create_group("g1", "Other", "{}")
    evlog.close()
    host.storage.close()

    host, evlog = _open(db_url)
    reloaded = WhisperContract.load(host, evlog)
    assert reloaded.get_stats() == {"profile_count": 2, "message_count": 1, "owner": "owner.near"}
    assert reloaded.get_profile("alice.near").display_name == "Alice"
    assert reloaded.get_group("g1").name == "Team"

    with host.call("bob.near"):
        reloaded.send_group_message("g1", "hi", "n", 1)
    assert reloaded.get_stats()["message_count"] == 2

    rows = evlog.list_events()
    assert [r["event"] for r in rows] == [
        "key_registered",
        "key_registered",
        "group_created",
        "message",
        "group_message",
    ]
    assert rows[3]["data"]["payment"] == {"amount": str(ONE_NEAR), "token": "NEAR"}
    assert rows[4]["data"]["id"] == 2
    evlog.close()
    host.storage.close()
