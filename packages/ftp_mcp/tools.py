"""MCP tool implementations for FTP operations.

This module defines the tool functions that are registered with FastMCP.
Each tool validates its arguments, runs one FTPClient operation in a worker
thread and turns the outcome into a ToolResult. No exception escapes a
tool: every failure becomes an error result.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Type

from pydantic import BaseModel, ValidationError

from .client import FTPClient
from .exceptions import FTPOperationError
from .formatting import format_listing, format_size
from .models import RemotePathInput, ToolResult, UploadFileInput

logger = logging.getLogger(__name__)


def describe_validation_error(error: ValidationError) -> str:
    """One-line summary of a pydantic validation error."""
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        problems.append(f"{location}: {item['msg']}")
    return "; ".join(problems)


async def _dispatch(
    tool_name: str,
    error_prefix: str,
    input_model: Type[BaseModel],
    arguments: Dict[str, object],
    operation: Callable[[BaseModel], Awaitable[str]],
) -> ToolResult:
    """Validate arguments, run the operation and fold any failure into a result."""
    try:
        args = input_model(**arguments)
    except ValidationError as e:
        return ToolResult.error(
            f"Invalid arguments for {tool_name}: {describe_validation_error(e)}"
        )

    try:
        return ToolResult.success(await operation(args))
    except FTPOperationError as e:
        return ToolResult.error(f"{error_prefix}: {e}")
    except Exception as e:
        logger.exception(f"Unexpected error in {tool_name}")
        return ToolResult.error(f"{error_prefix}: Unexpected error: {e}")


async def ftp_list_directory(client: FTPClient, remote_path: str) -> ToolResult:
    """List contents of an FTP directory.

    Returns:
        ToolResult with one line per entry and a summary of counts
    """
    async def operation(args: RemotePathInput) -> str:
        entries = await asyncio.to_thread(client.list_directory, args.remote_path)
        return format_listing(args.remote_path, entries)

    return await _dispatch(
        "list-directory", "Error listing directory",
        RemotePathInput, {"remote_path": remote_path}, operation,
    )


async def ftp_download_file(client: FTPClient, remote_path: str) -> ToolResult:
    """Download a file from the FTP server.

    UTF-8 text is returned inline and the local copy is removed. Anything
    else stays in the transfer directory and its local path is reported.

    Returns:
        ToolResult with the file content or the local file location
    """
    def download(remote: str) -> str:
        local_path = client.download_file(remote)
        data = local_path.read_bytes()
        try:
            content = data.decode("utf-8")
        except UnicodeDecodeError:
            return (
                f"File {remote} downloaded to {local_path} "
                f"({format_size(len(data))}, binary content not shown)"
            )
        local_path.unlink(missing_ok=True)
        return f"File content of {remote}:\n\n{content}"

    async def operation(args: RemotePathInput) -> str:
        # Transfer and local file I/O stay off the event loop
        return await asyncio.to_thread(download, args.remote_path)

    return await _dispatch(
        "download-file", "Error downloading file",
        RemotePathInput, {"remote_path": remote_path}, operation,
    )


async def ftp_upload_file(client: FTPClient, remote_path: str, content: str) -> ToolResult:
    """Upload text content to a file on the FTP server."""
    async def operation(args: UploadFileInput) -> str:
        await asyncio.to_thread(client.upload_file, args.remote_path, args.content)
        return f"File successfully uploaded to {args.remote_path}"

    return await _dispatch(
        "upload-file", "Error uploading file",
        UploadFileInput, {"remote_path": remote_path, "content": content}, operation,
    )


async def ftp_create_directory(client: FTPClient, remote_path: str) -> ToolResult:
    """Create a directory (and missing parents) on the FTP server."""
    async def operation(args: RemotePathInput) -> str:
        await asyncio.to_thread(client.create_directory, args.remote_path)
        return f"Directory successfully created at {args.remote_path}"

    return await _dispatch(
        "create-directory", "Error creating directory",
        RemotePathInput, {"remote_path": remote_path}, operation,
    )


async def ftp_delete_file(client: FTPClient, remote_path: str) -> ToolResult:
    async def operation(args: RemotePathInput) -> str:
        await asyncio.to_thread(client.delete_file, args.remote_path)
        return f"File successfully deleted from {args.remote_path}"

    return await _dispatch(
        "delete-file", "Error deleting file",
        RemotePathInput, {"remote_path": remote_path}, operation,
    )


async def ftp_delete_directory(client: FTPClient, remote_path: str) -> ToolResult:
    async def operation(args: RemotePathInput) -> str:
        await asyncio.to_thread(client.delete_directory, args.remote_path)
        return f"Directory successfully deleted from {args.remote_path}"

    return await _dispatch(
        "delete-directory", "Error deleting directory",
        RemotePathInput, {"remote_path": remote_path}, operation,
    )
