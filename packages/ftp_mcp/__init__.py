"""FTP MCP Server.

Provides MCP tools for listing, downloading, uploading and deleting files
and directories on a single FTP (or FTPS) server.

Each tool call opens its own FTP session, performs one operation and
closes the session again; nothing is kept between calls except the
configuration loaded at startup.
"""

__version__ = "1.0.0"
