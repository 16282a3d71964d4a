# tests/conftest.py
"""
Pytest configuration and fixtures.
Adds src to sys.path so `import whisper_relay` works without installing.
"""

import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
src_root = project_root / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

# Also add project root so `tests.helpers` resolves
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from whisper_relay.core.contract import WhisperContract  # noqa: E402
from whisper_relay.infrastructure.event_log.memory_event_log import InMemoryEventLog  # noqa: E402
from whisper_relay.infrastructure.host.in_process_host import InProcessHost  # noqa: E402

from tests.helpers import STORAGE_DEPOSIT, make_key  # noqa: E402


@pytest.fixture
def host():
    return InProcessHost(account_id="whisper-relay")


@pytest.fixture
def event_log():
    return InMemoryEventLog()


@pytest.fixture
def contract(host, event_log):
    with host.call("owner.near"):
        return WhisperContract.new(host, event_log)


@pytest.fixture
def register(host, contract):
    """Register a key for ``account`` paying the storage deposit on first use."""

    def _register(account: str, seed: int = 1, display_name=None, deposit: int = STORAGE_DEPOSIT):
        with host.call(account, deposit):
            contract.register_key(make_key(seed), display_name)
        return contract.get_profile(account)

    return _register
