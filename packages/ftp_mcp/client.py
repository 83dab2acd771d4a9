"""FTP session wrapper for the FTP MCP server.

Every public operation runs one complete session against the configured
server: connect, operate, disconnect. No connection outlives the call that
opened it, so concurrent calls never share protocol state.

Any failure (connection, login, server rejection or local file I/O) is
logged and re-raised as FTPOperationError.
"""

import logging
import time
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from ftplib import FTP, FTP_TLS, all_errors, error_perm
from pathlib import Path, PurePosixPath
from typing import Callable, Iterator, List, Optional, TypeVar

from .config import FTPConfig
from .exceptions import FTPOperationError
from .models import DirectoryEntry, EntryKind

logger = logging.getLogger(__name__)

T = TypeVar("T")

MLSD_KINDS = {
    "file": EntryKind.FILE,
    "dir": EntryKind.DIRECTORY,
    "cdir": EntryKind.DIRECTORY,
    "pdir": EntryKind.DIRECTORY,
}

LIST_KINDS = {
    "-": EntryKind.FILE,
    "d": EntryKind.DIRECTORY,
}

MONTHS = {
    name: number for number, name in enumerate(
        ["jan", "feb", "mar", "apr", "may", "jun",
         "jul", "aug", "sep", "oct", "nov", "dec"],
        start=1,
    )
}

# Reply codes meaning the server does not implement MLSD
MLSD_UNSUPPORTED = ("500", "502")

# ftplib decodes replies strictly, so legacy encodings surface as UnicodeError
SESSION_ERRORS = all_errors + (UnicodeError,)

WRAPPED_ERRORS = (FTPOperationError,) + SESSION_ERRORS


def parse_mlsd_modify(value: str) -> str:
    """Convert an MLSD ``modify`` fact (YYYYMMDDHHMMSS, UTC) to ISO-8601."""
    try:
        parsed = datetime.strptime(value[:14], "%Y%m%d%H%M%S")
    except (TypeError, ValueError):
        return ""
    return parsed.replace(tzinfo=timezone.utc).isoformat().replace("+00:00", "Z")


def parse_list_date(month: str, day: str, time_or_year: str,
                    now: Optional[datetime] = None) -> str:
    """Convert the date columns of a Unix LIST line to ISO-8601.

    Recent entries carry a time instead of a year; those are placed in the
    current year, or the previous one if that would put them in the future.
    """
    now = now or datetime.now()
    month_number = MONTHS.get(month[:3].lower())
    if month_number is None or not day.isdigit():
        return ""
    try:
        if ":" in time_or_year:
            hour, minute = (int(p) for p in time_or_year.split(":", 1))
            parsed = datetime(now.year, month_number, int(day), hour, minute)
            if parsed > now + timedelta(days=1):
                parsed = parsed.replace(year=now.year - 1)
        else:
            parsed = datetime(int(time_or_year), month_number, int(day))
    except ValueError:
        return ""
    return parsed.isoformat()


def parse_dos_line(line: str) -> Optional[DirectoryEntry]:
    """
    Parse one line of DOS/IIS-style LIST output.

    Args:
        line: e.g. "01-31-24  09:05PM       <DIR>          name"

    Returns:
        DirectoryEntry, or None if the line is not in that format
    """
    parts = line.split(None, 3)
    if len(parts) < 4:
        return None

    date, clock, size_or_dir, name = parts
    for date_format in ("%m-%d-%y %I:%M%p", "%m-%d-%Y %I:%M%p", "%m-%d-%y %H:%M", "%m-%d-%Y %H:%M"):
        try:
            modified = datetime.strptime(f"{date} {clock.upper()}", date_format)
            break
        except ValueError:
            continue
    else:
        return None

    if size_or_dir.upper() == "<DIR>":
        kind, size = EntryKind.DIRECTORY, 0
    elif size_or_dir.replace(",", "").isdigit():
        kind, size = EntryKind.FILE, int(size_or_dir.replace(",", ""))
    else:
        return None
    if name in (".", ".."):
        return None

    return DirectoryEntry(name=name, kind=kind, size=size, modified_date=modified.isoformat())


def parse_list_line(line: str) -> Optional[DirectoryEntry]:
    """
    Parse one line of LIST output, Unix style or else DOS/IIS style.

    Args:
        line: e.g. "drwxr-xr-x  2 user group 4096 Jan  1 12:00 name"

    Returns:
        DirectoryEntry, or None for lines that are not entries
        (such as "total 12") and for "." / ".."
    """
    parts = line.split(None, 8)
    if len(parts) < 9 or not parts[4].isdigit() or parts[0][:1].isdigit():
        return parse_dos_line(line)

    permissions, size, month, day, time_or_year, name = (
        parts[0], parts[4], parts[5], parts[6], parts[7], parts[8]
    )
    kind = LIST_KINDS.get(permissions[0], EntryKind.OTHER)
    if permissions[0] == "l" and " -> " in name:
        name = name.split(" -> ", 1)[0]
    if name in (".", ".."):
        return None

    return DirectoryEntry(
        name=name,
        kind=kind,
        size=int(size),
        modified_date=parse_list_date(month, day, time_or_year),
    )


def entry_from_mlsd(name: str, facts: dict) -> DirectoryEntry:
    """Build a DirectoryEntry from one MLSD record."""
    kind = MLSD_KINDS.get(facts.get("type", "").lower(), EntryKind.OTHER)
    try:
        size = int(facts.get("size", 0))
    except ValueError:
        size = 0
    return DirectoryEntry(
        name=name,
        kind=kind,
        size=max(size, 0),
        modified_date=parse_mlsd_modify(facts.get("modify", "")),
    )


class FTPClient:
    """Runs single-operation FTP sessions against one configured server."""

    def __init__(self, config: FTPConfig):
        """
        Initialize the client.

        Args:
            config: Connection configuration, shared read-only
        """
        self._config = config
        self._temp_dir = Path(config.temp_dir)
        self._temp_dir.mkdir(parents=True, exist_ok=True)

    @property
    def config(self) -> FTPConfig:
        """Connection configuration."""
        return self._config

    @property
    def temp_dir(self) -> Path:
        """Directory holding transfer files."""
        return self._temp_dir

    def _connect(self) -> FTP:
        """
        Open and authenticate a connection.

        Raises:
            FTPOperationError: If connecting or logging in fails
        """
        config = self._config
        ftp = FTP_TLS() if config.secure else FTP()
        ftp.set_debuglevel(0)

        try:
            logger.debug(f"Connecting to {config.host}:{config.port} (secure={config.secure})")
            ftp.connect(host=config.host, port=config.port)
            ftp.login(user=config.user, passwd=config.password)
            if config.secure:
                ftp.prot_p()
        except SESSION_ERRORS as e:
            logger.error(f"FTP connection error: {e}")
            ftp.close()
            raise FTPOperationError("connect to FTP server", e)

        return ftp

    @staticmethod
    def _disconnect(ftp: FTP) -> None:
        """Close the connection, best effort."""
        try:
            ftp.quit()
        except all_errors:
            ftp.close()

    @contextmanager
    def session(self) -> Iterator[FTP]:
        """
        Scoped FTP connection.

        The connection is released on every exit path, including failures
        inside the ``with`` block.

        Raises:
            FTPOperationError: If the connection cannot be established
        """
        ftp = self._connect()
        try:
            yield ftp
        finally:
            self._disconnect(ftp)

    def _run(self, operation: str, action: Callable[[FTP], T]) -> T:
        """Run ``action`` inside a fresh session, wrapping any failure."""
        try:
            with self.session() as ftp:
                return action(ftp)
        except WRAPPED_ERRORS as e:
            logger.error(f"{operation.capitalize()} error: {e}")
            raise FTPOperationError(operation, e)

    def artifact_path(self, prefix: str, remote_path: str) -> Path:
        """Unique local path for a transfer file tied to ``remote_path``."""
        base_name = PurePosixPath(remote_path).name or "file"
        return self._temp_dir / f"{prefix}-{int(time.time() * 1000)}-{base_name}"

    def list_directory(self, remote_path: str) -> List[DirectoryEntry]:
        """
        List a remote directory.

        Args:
            remote_path: Directory path on the server

        Returns:
            Entries in the order the server returned them

        Raises:
            FTPOperationError: If the listing fails
        """
        def action(ftp: FTP) -> List[DirectoryEntry]:
            try:
                return [
                    entry_from_mlsd(name, facts)
                    for name, facts in ftp.mlsd(remote_path)
                    if facts.get("type", "").lower() not in ("cdir", "pdir")
                ]
            except error_perm as e:
                if not str(e).startswith(MLSD_UNSUPPORTED):
                    raise
                logger.debug(f"MLSD not supported ({e}), falling back to LIST")

            lines: List[str] = []
            ftp.dir(remote_path, lines.append)
            entries = [entry for entry in map(parse_list_line, lines) if entry is not None]
            if lines and not entries:
                logger.debug(
                    f"LIST output for {remote_path} had {len(lines)} lines but no recognised entries"
                )
            return entries

        return self._run("list directory", action)

    def download_file(self, remote_path: str) -> Path:
        """
        Download a remote file into the transfer directory.

        The caller owns the returned file and is responsible for removing it.
        A partially written file is removed if the transfer fails.

        Args:
            remote_path: File path on the server

        Returns:
            Path of the local copy

        Raises:
            FTPOperationError: If the download fails
        """
        def action(ftp: FTP) -> Path:
            local_path = self.artifact_path("download", remote_path)
            try:
                with open(local_path, "wb") as f:
                    ftp.retrbinary(f"RETR {remote_path}", f.write)
            except Exception:
                local_path.unlink(missing_ok=True)
                raise
            logger.info(f"Downloaded {remote_path} to {local_path}")
            return local_path

        return self._run("download file", action)

    def upload_file(self, remote_path: str, content: str) -> bool:
        """
        Upload text content to a remote file.

        The content is staged in a local transfer file which is removed
        whether or not the upload succeeds.

        Args:
            remote_path: Destination path on the server
            content: Text to store, encoded as UTF-8

        Returns:
            True on success

        Raises:
            FTPOperationError: If the upload fails
        """
        def action(ftp: FTP) -> bool:
            local_path = self.artifact_path("upload", remote_path)
            try:
                local_path.write_bytes(content.encode("utf-8"))
                with open(local_path, "rb") as f:
                    ftp.storbinary(f"STOR {remote_path}", f)
            finally:
                local_path.unlink(missing_ok=True)
            logger.info(f"Uploaded {len(content)} characters to {remote_path}")
            return True

        return self._run("upload file", action)

    def create_directory(self, remote_path: str) -> bool:
        """
        Create a remote directory and any missing parents.

        Succeeds if the directory already exists.

        Raises:
            FTPOperationError: If a component cannot be created
        """
        def action(ftp: FTP) -> bool:
            if remote_path.startswith("/"):
                ftp.cwd("/")
            for part in (p for p in remote_path.split("/") if p):
                try:
                    ftp.cwd(part)
                except error_perm:
                    ftp.mkd(part)
                    ftp.cwd(part)
            logger.info(f"Ensured directory {remote_path}")
            return True

        return self._run("create directory", action)

    def delete_file(self, remote_path: str) -> bool:
        """Delete a remote file."""
        def action(ftp: FTP) -> bool:
            ftp.delete(remote_path)
            logger.info(f"Deleted file {remote_path}")
            return True

        return self._run("delete file", action)

    def delete_directory(self, remote_path: str) -> bool:
        """Delete a remote directory. The server decides whether it must be empty."""
        def action(ftp: FTP) -> bool:
            ftp.rmd(remote_path)
            logger.info(f"Deleted directory {remote_path}")
            return True

        return self._run("delete directory", action)
