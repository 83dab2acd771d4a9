"""Configuration for the FTP MCP server."""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .exceptions import ConfigurationError


DEFAULT_TEMP_DIR = Path(tempfile.gettempdir()) / "mcp-ftp-temp"


@dataclass(frozen=True)
class FTPConfig:
    """Connection settings shared read-only by every tool call."""
    host: str = "localhost"
    port: int = 21
    user: str = "anonymous"
    password: str = ""
    secure: bool = False

    # Local directory for upload/download transfer files
    temp_dir: Path = DEFAULT_TEMP_DIR

    # Server identification
    server_name: str = "mcp-server-ftp"

    log_level: str = "INFO"

    def __repr__(self) -> str:
        return (
            f"FTPConfig(host={self.host!r}, port={self.port}, user={self.user!r}, "
            f"password='***', secure={self.secure})"
        )


def _parse_port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise ConfigurationError(
            f"FTP_PORT must be an integer, got {value!r}",
            missing_key="FTP_PORT"
        )
    if not 1 <= port <= 65535:
        raise ConfigurationError(
            f"FTP_PORT must be between 1 and 65535, got {port}",
            missing_key="FTP_PORT"
        )
    return port


def get_config() -> FTPConfig:
    """Load configuration from environment.

    Optional environment variables:
        FTP_HOST: FTP server host (default: localhost)
        FTP_PORT: FTP server port (default: 21)
        FTP_USER: Login user (default: anonymous)
        FTP_PASSWORD: Login password (default: empty)
        FTP_SECURE: "true" to use explicit FTPS (default: plain FTP)
        FTP_TEMP_DIR: Local directory for transfer files
            (default: <system temp>/mcp-ftp-temp)
        FTP_MCP_SERVER_NAME: Server name (default: mcp-server-ftp)
        FTP_MCP_LOG_LEVEL: Log level for stderr output (default: INFO)

    Returns:
        FTPConfig with loaded values

    Raises:
        ConfigurationError: If a value cannot be parsed
    """
    # Load .env file if it exists
    env_file = Path(__file__).parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)

    # Also try parent directory .env
    parent_env = Path(__file__).parent.parent / ".env"
    if parent_env.exists():
        load_dotenv(parent_env)

    temp_dir = os.getenv("FTP_TEMP_DIR")

    return FTPConfig(
        host=os.getenv("FTP_HOST") or "localhost",
        port=_parse_port(os.getenv("FTP_PORT") or "21"),
        user=os.getenv("FTP_USER") or "anonymous",
        password=os.getenv("FTP_PASSWORD", ""),
        secure=os.getenv("FTP_SECURE", "").strip().lower() == "true",
        temp_dir=Path(temp_dir).expanduser() if temp_dir else DEFAULT_TEMP_DIR,
        server_name=os.getenv("FTP_MCP_SERVER_NAME", "mcp-server-ftp"),
        log_level=os.getenv("FTP_MCP_LOG_LEVEL", "INFO").upper(),
    )
