"""Unit tests for the MCP tool functions.

Every tool must produce exactly one success or error result and never
raise, whatever the FTP client does.
"""

import threading
from ftplib import error_perm
from unittest.mock import MagicMock

import pytest

from ftp_mcp.client import FTPClient
from ftp_mcp.exceptions import FTPOperationError
from ftp_mcp.models import ToolResult
from ftp_mcp.tools import (
    ftp_create_directory,
    ftp_delete_directory,
    ftp_delete_file,
    ftp_download_file,
    ftp_list_directory,
    ftp_upload_file,
)


@pytest.fixture
def client():
    """FTPClient stand-in with every operation mocked."""
    return MagicMock(spec=FTPClient)


def operation_error(operation: str, message: str) -> FTPOperationError:
    return FTPOperationError(operation, error_perm(message))


class TestListDirectoryTool:

    @pytest.mark.asyncio
    async def test_success(self, client, sample_entries):
        client.list_directory.return_value = sample_entries

        result = await ftp_list_directory(client, "/pub")

        client.list_directory.assert_called_once_with("/pub")
        assert isinstance(result, ToolResult)
        assert result.is_error is False
        assert result.text.startswith("Directory listing for: /pub")
        assert "[FILE] readme.txt (2.00 KB)" in result.text
        assert result.text.endswith("Total: 3 items (1 directories, 1 files, 1 other)")

    @pytest.mark.asyncio
    async def test_failure(self, client):
        client.list_directory.side_effect = operation_error("list directory", "550 Not found")

        result = await ftp_list_directory(client, "/missing")

        assert result.is_error is True
        assert result.text == "Error listing directory: Failed to list directory: 550 Not found"

    @pytest.mark.asyncio
    async def test_empty_path_rejected_before_client(self, client):
        result = await ftp_list_directory(client, "")

        assert result.is_error is True
        assert result.text.startswith("Invalid arguments for list-directory: remote_path")
        client.list_directory.assert_not_called()

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_error_result(self, client):
        client.list_directory.side_effect = RuntimeError("boom")

        result = await ftp_list_directory(client, "/")

        assert result.is_error is True
        assert result.text == "Error listing directory: Unexpected error: boom"


class TestDownloadFileTool:

    @pytest.mark.asyncio
    async def test_text_returned_inline_and_local_copy_removed(self, client, tmp_path):
        local = tmp_path / "download-1-readme.txt"
        local.write_text("hello\nworld\n", encoding="utf-8")
        client.download_file.return_value = local

        result = await ftp_download_file(client, "/pub/readme.txt")

        assert result.is_error is False
        assert result.text == "File content of /pub/readme.txt:\n\nhello\nworld\n"
        assert not local.exists()

    @pytest.mark.asyncio
    async def test_binary_kept_and_path_reported(self, client, tmp_path):
        local = tmp_path / "download-1-image.png"
        local.write_bytes(b"\x89PNG\r\n\x1a\n\xff\xfe" * 200)
        client.download_file.return_value = local

        result = await ftp_download_file(client, "/img/image.png")

        assert result.is_error is False
        assert str(local) in result.text
        assert "1.95 KB" in result.text
        assert local.exists()

    @pytest.mark.asyncio
    async def test_local_copy_read_in_worker_thread(self, client):
        readers = []

        def read_bytes():
            readers.append(threading.get_ident())
            return b"hello"

        local = MagicMock()
        local.read_bytes.side_effect = read_bytes
        client.download_file.return_value = local

        result = await ftp_download_file(client, "/pub/readme.txt")

        assert result.text == "File content of /pub/readme.txt:\n\nhello"
        assert readers and readers[0] != threading.get_ident()
        local.unlink.assert_called_once_with(missing_ok=True)

    @pytest.mark.asyncio
    async def test_failure(self, client):
        client.download_file.side_effect = operation_error("download file", "550 No such file")

        result = await ftp_download_file(client, "/nope.txt")

        assert result.is_error is True
        assert result.text == "Error downloading file: Failed to download file: 550 No such file"


class TestUploadFileTool:

    @pytest.mark.asyncio
    async def test_success(self, client):
        client.upload_file.return_value = True

        result = await ftp_upload_file(client, "/inbox/a.txt", "data")

        client.upload_file.assert_called_once_with("/inbox/a.txt", "data")
        assert result == ToolResult(text="File successfully uploaded to /inbox/a.txt")

    @pytest.mark.asyncio
    async def test_failure(self, client):
        client.upload_file.side_effect = operation_error("upload file", "553 Not allowed")

        result = await ftp_upload_file(client, "/ro/a.txt", "data")

        assert result.is_error is True
        assert result.text == "Error uploading file: Failed to upload file: 553 Not allowed"

    @pytest.mark.asyncio
    async def test_missing_content_rejected(self, client):
        result = await ftp_upload_file(client, "/a.txt", None)

        assert result.is_error is True
        assert "Invalid arguments for upload-file" in result.text
        assert "content" in result.text
        client.upload_file.assert_not_called()


class TestDirectoryAndDeleteTools:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool, method, success_text", [
        (ftp_create_directory, "create_directory", "Directory successfully created at /x"),
        (ftp_delete_file, "delete_file", "File successfully deleted from /x"),
        (ftp_delete_directory, "delete_directory", "Directory successfully deleted from /x"),
    ])
    async def test_success(self, client, tool, method, success_text):
        getattr(client, method).return_value = True

        result = await tool(client, "/x")

        getattr(client, method).assert_called_once_with("/x")
        assert result.is_error is False
        assert result.text == success_text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool, method, operation, prefix", [
        (ftp_create_directory, "create_directory", "create directory", "Error creating directory"),
        (ftp_delete_file, "delete_file", "delete file", "Error deleting file"),
        (ftp_delete_directory, "delete_directory", "delete directory", "Error deleting directory"),
    ])
    async def test_failure(self, client, tool, method, operation, prefix):
        getattr(client, method).side_effect = operation_error(operation, "550 Denied")

        result = await tool(client, "/x")

        assert result.is_error is True
        assert result.text == f"{prefix}: Failed to {operation}: 550 Denied"

    @pytest.mark.asyncio
    async def test_delete_non_empty_directory_is_error_result(self, client):
        client.delete_directory.side_effect = operation_error(
            "delete directory", "550 Directory not empty."
        )

        result = await ftp_delete_directory(client, "/full")

        assert result.is_error is True
        assert "Directory not empty" in result.text
