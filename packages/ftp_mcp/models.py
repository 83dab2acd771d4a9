"""Pydantic models for FTP MCP tool input/output schemas."""

from enum import Enum

from mcp.types import CallToolResult, TextContent
from pydantic import BaseModel, ConfigDict, Field


class EntryKind(str, Enum):
    """Kind of a directory entry."""
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


class DirectoryEntry(BaseModel):
    """One entry of a remote directory listing."""
    name: str = Field(description="Entry name as reported by the server")
    kind: EntryKind = Field(description="file, directory or other")
    size: int = Field(default=0, ge=0, description="Size in bytes")
    modified_date: str = Field(
        default="",
        description="Last modification time as ISO-8601, or empty if unknown"
    )


class RemotePathInput(BaseModel):
    """Input for tools that act on a single remote path."""
    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid'
    )

    remote_path: str = Field(
        ...,
        description="Path on the FTP server",
        min_length=1,
        examples=["/", "/pub/readme.txt", "uploads/reports"]
    )


class UploadFileInput(RemotePathInput):
    """Input for file upload."""

    content: str = Field(
        ...,
        description="Content to upload to the file"
    )


class ToolResult(BaseModel):
    """Outcome of one tool call: a text block, flagged as error or not."""
    text: str = Field(description="Human-readable result text")
    is_error: bool = Field(default=False, description="Whether the call failed")

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(text=text, is_error=False)

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        return cls(text=text, is_error=True)

    def to_call_tool_result(self) -> CallToolResult:
        """Convert to the MCP response envelope."""
        return CallToolResult(
            content=[TextContent(type="text", text=self.text)],
            isError=self.is_error,
        )
