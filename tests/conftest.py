import pytest
from eth_utils import keccak

FACTORY = bytes.fromhex("4e59b44847b379578588920ca78fbf26c0b4956c")


@pytest.fixture
def factory():
    return FACTORY


@pytest.fixture
def empty_code_hash():
    return keccak(b"")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("HOOK_FACTORY", "MAX_WORKERS", "CHECK_INTERVAL", "MINE_TIMEOUT", "HOOK_FLAGS", "LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
