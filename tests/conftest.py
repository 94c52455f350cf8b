"""
Pytest configuration for Students API tests.

Sets up the test environment and shared fixtures.
"""
import os
import pytest

# Keep a developer's CONFIG_PATH from leaking into config tests
os.environ.pop("CONFIG_PATH", None)


@pytest.fixture
def valid_student():
    """A request body that passes every constraint."""
    return {
        "name": "Ada Lovelace",
        "email": "ada@university.edu",
        "age": 21
    }


@pytest.fixture
def config_file(tmp_path):
    """Write a dotenv-format config file and return its path."""
    def _write(**values):
        path = tmp_path / "local.env"
        path.write_text("".join(f"{key}={value}\n" for key, value in values.items()))
        return str(path)
    return _write


@pytest.fixture
def clean_config_env(monkeypatch):
    """Remove config-related environment variables for the test."""
    for key in ("CONFIG_PATH", "ENV", "STORAGE_PATH", "HTTP_SERVER_ADDR", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
