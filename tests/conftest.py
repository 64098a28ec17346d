"""Test configuration and fixtures."""

import socket
import pytest
from fastapi.testclient import TestClient
from python_okbench.config.config import Config
from python_okbench.server import create_app


@pytest.fixture
def test_config():
    """Create a test configuration."""
    config = Config()
    config.server_addr = "127.0.0.1:0"
    config.log_level = "warning"
    return config


@pytest.fixture
def test_client(test_config):
    """Create a test client for the app."""
    with TestClient(create_app(test_config)) as client:
        yield client


@pytest.fixture
def occupied_port():
    """Hold a listening socket on an ephemeral port for the test's duration."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(1)
    try:
        yield sock.getsockname()[1]
    finally:
        sock.close()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all OKB_* variables from the environment."""
    for key in ("OKB_CONFIG", "OKB_SERVER_ADDR", "OKB_ACCESS_LOG",
                "OKB_LOG_LEVEL", "OKB_BACKLOG"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
