#!/usr/bin/env python3
"""FTP MCP Server.

Provides MCP tools for listing, transferring and deleting files and
directories on a single FTP server over the stdio transport.

Usage:
    python -m ftp_mcp              # Run via module
    mcp-server-ftp                 # Installed console script

Environment Variables:
    FTP_HOST: FTP server host (default: localhost)
    FTP_PORT: FTP server port (default: 21)
    FTP_USER: Login user (default: anonymous)
    FTP_PASSWORD: Login password (default: empty)
    FTP_SECURE: "true" for explicit FTPS (default: plain FTP)
"""

import logging
import sys
from typing import Annotated, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, ToolAnnotations
from pydantic import Field

from .client import FTPClient
from .config import FTPConfig, get_config
from .exceptions import ConfigurationError
from .logging_setup import setup_logging
from .tools import (
    ftp_list_directory,
    ftp_download_file,
    ftp_upload_file,
    ftp_create_directory,
    ftp_delete_file,
    ftp_delete_directory,
)

logger = logging.getLogger(__name__)

TOOL_NAMES = (
    "list-directory",
    "download-file",
    "upload-file",
    "create-directory",
    "delete-file",
    "delete-directory",
)


def create_server(config: Optional[FTPConfig] = None) -> FastMCP:
    """Create and configure the MCP server.

    Args:
        config: Connection configuration. If None, loads from environment.

    Returns:
        Configured FastMCP server instance

    Raises:
        ConfigurationError: If the environment holds invalid values
    """
    config = config or get_config()
    client = FTPClient(config)

    mcp = FastMCP(name=config.server_name)

    # Tool argument names are part of the wire schema, hence camelCase

    @mcp.tool(
        name="list-directory",
        annotations=ToolAnnotations(
            title="List FTP Directory",
            readOnlyHint=True,
            idempotentHint=True,
            openWorldHint=True,
        )
    )
    async def list_directory_tool(
        remotePath: Annotated[str, Field(description="Path of the directory on the FTP server")],
    ) -> CallToolResult:
        """List contents of an FTP directory.

        Returns one line per entry with its kind, name, size and
        modification date, followed by a count of directories and files.
        """
        result = await ftp_list_directory(client, remotePath)
        return result.to_call_tool_result()

    @mcp.tool(
        name="download-file",
        annotations=ToolAnnotations(
            title="Download FTP File",
            readOnlyHint=True,
            idempotentHint=True,
            openWorldHint=True,
        )
    )
    async def download_file_tool(
        remotePath: Annotated[str, Field(description="Path of the file on the FTP server")],
    ) -> CallToolResult:
        """Download a file from the FTP server.

        Text files are returned inline. Binary files are saved locally and
        the local path is reported instead.
        """
        result = await ftp_download_file(client, remotePath)
        return result.to_call_tool_result()

    @mcp.tool(
        name="upload-file",
        annotations=ToolAnnotations(
            title="Upload FTP File",
            destructiveHint=True,
            idempotentHint=True,
            openWorldHint=True,
        )
    )
    async def upload_file_tool(
        remotePath: Annotated[str, Field(description="Destination path on the FTP server")],
        content: Annotated[str, Field(description="Content to upload to the file")],
    ) -> CallToolResult:
        """Upload a file to the FTP server, replacing any existing file."""
        result = await ftp_upload_file(client, remotePath, content)
        return result.to_call_tool_result()

    @mcp.tool(
        name="create-directory",
        annotations=ToolAnnotations(
            title="Create FTP Directory",
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=True,
        )
    )
    async def create_directory_tool(
        remotePath: Annotated[str, Field(description="Path of the directory to create")],
    ) -> CallToolResult:
        """Create a new directory on the FTP server.

        Missing parent directories are created too. An existing directory
        is not an error.
        """
        result = await ftp_create_directory(client, remotePath)
        return result.to_call_tool_result()

    @mcp.tool(
        name="delete-file",
        annotations=ToolAnnotations(
            title="Delete FTP File",
            destructiveHint=True,
            idempotentHint=False,
            openWorldHint=True,
        )
    )
    async def delete_file_tool(
        remotePath: Annotated[str, Field(description="Path of the file to delete")],
    ) -> CallToolResult:
        """Delete a file from the FTP server."""
        result = await ftp_delete_file(client, remotePath)
        return result.to_call_tool_result()

    @mcp.tool(
        name="delete-directory",
        annotations=ToolAnnotations(
            title="Delete FTP Directory",
            destructiveHint=True,
            idempotentHint=False,
            openWorldHint=True,
        )
    )
    async def delete_directory_tool(
        remotePath: Annotated[str, Field(description="Path of the directory to delete")],
    ) -> CallToolResult:
        """Delete a directory from the FTP server.

        Most servers refuse to delete a directory that is not empty.
        """
        result = await ftp_delete_directory(client, remotePath)
        return result.to_call_tool_result()

    return mcp


def main():
    """Run the MCP server on stdio until the transport closes."""
    try:
        config = get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(config.log_level)

    try:
        mcp = create_server(config)
    except OSError as e:
        logger.error(f"Cannot prepare transfer directory {config.temp_dir}: {e}")
        sys.exit(1)

    logger.info(f"FTP MCP Server running on stdio ({config.host}:{config.port})")
    try:
        mcp.run(transport="stdio")
    except Exception as e:
        logger.exception(f"Fatal error in main(): {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
