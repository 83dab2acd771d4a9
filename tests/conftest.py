"""Pytest configuration and shared fixtures for FTP MCP server tests."""

from pathlib import Path

import pytest

from ftp_mcp.config import FTPConfig
from ftp_mcp.models import DirectoryEntry, EntryKind

from .integration.ftp_server import LocalFTPServer


FTP_ENV_VARS = (
    "FTP_HOST",
    "FTP_PORT",
    "FTP_USER",
    "FTP_PASSWORD",
    "FTP_SECURE",
    "FTP_TEMP_DIR",
    "FTP_MCP_SERVER_NAME",
    "FTP_MCP_LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every FTP_* variable the config reads."""
    for name in FTP_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def transfer_dir(tmp_path: Path) -> Path:
    """Empty directory for transfer files."""
    path = tmp_path / "transfer"
    path.mkdir()
    return path


@pytest.fixture
def ftp_config(transfer_dir: Path) -> FTPConfig:
    """Config pointing at a host that is never contacted in unit tests."""
    return FTPConfig(
        host="ftp.example.com",
        port=21,
        user="alice",
        password="s3cret",
        temp_dir=transfer_dir,
    )


@pytest.fixture
def sample_entries():
    """A listing with one entry of each kind."""
    return [
        DirectoryEntry(name="docs", kind=EntryKind.DIRECTORY, size=0,
                       modified_date="2024-03-01T10:00:00Z"),
        DirectoryEntry(name="readme.txt", kind=EntryKind.FILE, size=2048,
                       modified_date="2024-03-02T11:30:00Z"),
        DirectoryEntry(name="current", kind=EntryKind.OTHER, size=7),
    ]


@pytest.fixture
def ftp_server():
    """Provide a running local FTP server."""
    server = LocalFTPServer()
    server.start()
    yield server
    server.stop()


@pytest.fixture
def live_config(ftp_server: LocalFTPServer, transfer_dir: Path) -> FTPConfig:
    """Config for the running local FTP server."""
    return FTPConfig(
        host=ftp_server.host,
        port=ftp_server.port,
        user=ftp_server.username,
        password=ftp_server.password,
        temp_dir=transfer_dir,
    )
