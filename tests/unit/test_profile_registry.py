from __future__ import annotations

import pytest

from tests.helpers import STORAGE_DEPOSIT, make_key
from whisper_relay.core.errors import InsufficientDepositError, MalformedKeyError


def test_first_registration_creates_version_one(contract, register):
    profile = register("alice.near", seed=1, display_name="Alice")

    assert profile.key_version == 1
    assert profile.x25519_pubkey == make_key(1)
    assert profile.display_name == "Alice"
    assert contract.has_profile("alice.near")
    assert contract.get_stats()["profile_count"] == 1


def test_rotation_bumps_version_without_deposit(contract, register):
    register("alice.near", seed=1)
    profile = register("alice.near", seed=2, deposit=0)

    assert profile.key_version == 2
    assert profile.x25519_pubkey == make_key(2)
    assert contract.get_stats()["profile_count"] == 1


def test_n_registrations_give_version_n(contract, register):
    for i in range(1, 6):
        profile = register("alice.near", seed=i, deposit=STORAGE_DEPOSIT if i == 1 else 0)
        assert profile.key_version == i
    assert contract.get_stats()["profile_count"] == 1


def test_profile_count_counts_distinct_accounts(contract, register):
    register("alice.near")
    register("bob.near")
    register("alice.near", seed=9, deposit=0)
    assert contract.get_stats()["profile_count"] == 2


def test_first_registration_requires_storage_deposit(host, contract, event_log):
    with host.call("alice.near", STORAGE_DEPOSIT - 1):
        with pytest.raises(InsufficientDepositError):
            contract.register_key(make_key(1))
    assert contract.get_profile("alice.near") is None
    assert contract.get_stats()["profile_count"] == 0
    assert event_log.events == []


def test_key_shape_is_checked_before_deposit(host, contract):
    with host.call("alice.near", 0):
        with pytest.raises(MalformedKeyError):
            contract.register_key(make_key(1, length=31))


def test_malformed_rotation_leaves_profile_untouched(host, contract, register):
    before = register("alice.near", seed=1, display_name="Alice")
    with host.call("alice.near"):
        with pytest.raises(MalformedKeyError):
            contract.register_key("%%%")
    assert contract.get_profile("alice.near") == before


def test_rotation_without_display_name_clears_it(contract, register):
    register("alice.near", display_name="Alice")
    profile = register("alice.near", seed=2, deposit=0)
    assert profile.display_name is None


def test_registration_emits_key_registered(contract, register, event_log):
    register("alice.near", seed=4, display_name="Alice")
    register("alice.near", seed=5, deposit=0)

    assert [e["event"] for e in event_log.events] == ["key_registered", "key_registered"]
    assert event_log.events[1]["data"] == {
        "account_id": "alice.near",
        "display_name": None,
        "key_version": 2,
        "x25519_pubkey": make_key(5),
    }


def test_unknown_profile_views(contract):
    assert contract.get_profile("nobody.near") is None
    assert contract.has_profile("nobody.near") is False
