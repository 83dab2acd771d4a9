"""Entry point for ``python -m ftp_mcp``."""

from .server import main

main()
