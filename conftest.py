import shutil
from pathlib import Path

import pytest

from backend import companion, storage

TEST_DATA_DIR = Path("data-tests")


@pytest.fixture(autouse=True)
def clean_test_data(monkeypatch):
    """Wipe and re-init data-tests/ and the companion session before every test."""
    monkeypatch.delenv("DIALOGUE_API_KEY", raising=False)
    if TEST_DATA_DIR.exists():
        shutil.rmtree(TEST_DATA_DIR)
    storage.init_storage(TEST_DATA_DIR)
    companion.init_session()
    yield
    # leave data-tests around after tests for inspection; CI can ignore it
