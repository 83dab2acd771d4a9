"""Text rendering for tool results."""

from typing import Iterable, List

from .models import DirectoryEntry, EntryKind


KIND_TAGS = {
    EntryKind.DIRECTORY: "[DIR]",
    EntryKind.FILE: "[FILE]",
    EntryKind.OTHER: "[OTHER]",
}


def format_size(size: int) -> str:
    """Format a byte count with 1024-based units."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 ** 2:
        return f"{size / 1024:.2f} KB"
    if size < 1024 ** 3:
        return f"{size / 1024 ** 2:.2f} MB"
    return f"{size / 1024 ** 3:.2f} GB"


def format_entry(entry: DirectoryEntry) -> str:
    line = f"{KIND_TAGS[entry.kind]} {entry.name}"
    if entry.kind == EntryKind.FILE:
        line += f" ({format_size(entry.size)})"
    return f"{line} - {entry.modified_date}"


def summarize(entries: Iterable[DirectoryEntry]) -> str:
    entries = list(entries)
    directories = sum(1 for e in entries if e.kind == EntryKind.DIRECTORY)
    files = sum(1 for e in entries if e.kind == EntryKind.FILE)
    other = len(entries) - directories - files
    counts = f"{directories} directories, {files} files"
    if other:
        counts += f", {other} other"
    return f"Total: {len(entries)} items ({counts})"


def format_listing(remote_path: str, entries: List[DirectoryEntry]) -> str:
    """
    Render a directory listing with a summary line.

    Args:
        remote_path: Directory that was listed
        entries: Entries in server order

    Returns:
        Multi-line listing text
    """
    body = "\n".join(format_entry(e) for e in entries) or "(empty directory)"
    return f"Directory listing for: {remote_path}\n\n{body}\n\n{summarize(entries)}"
