"""
Pytest configuration and fixtures.
"""

from pathlib import Path

import pytest


SAMPLE_CONFIG = """\
# main configuration
user www-data;
worker_processes auto;

events {
    worker_connections 768;
}

http {
    sendfile on;
    # virtual hosts
    server {
        listen 80 default_server;
        server_name example.com www.example.com;

        location / {
            try_files $uri $uri/ =404;
        }
    }
}
"""


@pytest.fixture
def sample_config() -> str:
    """A small but complete nginx configuration."""
    return SAMPLE_CONFIG


@pytest.fixture
def sample_config_path(tmp_path: Path) -> Path:
    """Sample configuration written to a temporary file."""
    path = tmp_path / "nginx.conf"
    path.write_text(SAMPLE_CONFIG, encoding="utf-8")
    return path
