from __future__ import annotations

import asyncio
from datetime import datetime
import logging
from pathlib import PurePosixPath
import stat
from types import TracebackType
from typing import Any

import asyncssh

from sftpdrive.core.profiles.models import ConnectionConfig
from sftpdrive.core.remote.client_base import FileStats, ListEntry
from sftpdrive.core.remote.errors import (
    CopyError,
    DeleteError,
    DriveConnectionError,
    DriveError,
    ListError,
    MetadataError,
    MoveError,
    ReadError,
    UnsupportedOperationError,
    WriteError,
)
from sftpdrive.core.remote.listing import DirectoryListing


class SFTPClient:
    """File operations against one SFTP server over a single, lazily opened session.

    Every public operation first calls ``ensure_connected()``, which probes the
    session with a round-trip and reconnects when the probe fails. The
    probe-then-connect sequence runs under a lock so concurrent callers never
    open two sessions; the operations themselves are not serialized.
    """

    def __init__(self, config: ConnectionConfig, logger: logging.Logger | None = None) -> None:
        self._config = config
        self._logger = logger or logging.getLogger("sftpdrive.remote")
        self._connection: asyncssh.SSHClientConnection | None = None
        self._sftp: asyncssh.SFTPClient | None = None
        self._connect_lock = asyncio.Lock()

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    async def __aenter__(self) -> SFTPClient:
        await self.ensure_connected()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.disconnect()

    async def connect(self) -> None:
        if self._connection is not None:
            await self.disconnect()

        address = f"{self._config.host}:{self._config.port}"
        self._logger.info("Connecting to SFTP server %s as %s", address, self._config.username)

        try:
            connection = await asyncssh.connect(**self._connect_options())
        except Exception as error:
            self._logger.warning("SFTP connection to %s failed: %s", address, error)
            raise DriveConnectionError(address, error) from error

        try:
            sftp = await connection.start_sftp_client()
        except Exception as error:
            connection.close()
            self._logger.warning("SFTP session on %s could not be started: %s", address, error)
            raise DriveConnectionError(address, error) from error

        self._connection = connection
        self._sftp = sftp
        self._logger.info("SFTP connection established to %s", address)

    async def disconnect(self) -> None:
        connection = self._connection
        if connection is None:
            return

        self._connection = None
        self._sftp = None
        connection.close()
        await connection.wait_closed()
        self._logger.info("SFTP connection to %s:%s closed", self._config.host, self._config.port)

    async def is_connected(self) -> bool:
        if self._sftp is None:
            return False

        try:
            await self._sftp.realpath(".")
        except Exception as error:
            self._logger.debug("SFTP liveness probe failed: %s", error)
            return False

        return True

    async def ensure_connected(self) -> None:
        async with self._connect_lock:
            if not await self.is_connected():
                await self.connect()

    async def read(self, location: str) -> bytes:
        await self.ensure_connected()
        self._logger.debug("Reading %s", location)
        try:
            async with self._session().open(location, "rb") as remote_file:
                contents = await remote_file.read()
        except Exception as error:
            raise self._failed(ReadError(location, error)) from error

        return bytes(contents)

    async def exists(self, location: str) -> bool:
        await self.ensure_connected()
        try:
            return bool(await self._session().exists(location))
        except Exception as error:
            raise self._failed(MetadataError(location, "exists", error)) from error

    async def stat(self, location: str) -> FileStats:
        await self.ensure_connected()
        try:
            attrs = await self._session().stat(location)
        except Exception as error:
            raise self._failed(MetadataError(location, "stats", error)) from error

        if attrs.mtime is None or attrs.size is None:
            raise self._failed(MetadataError(location, "stats", "server did not report size and modification time"))

        return FileStats(
            modified_at=datetime.fromtimestamp(attrs.mtime),
            size_bytes=int(attrs.size),
            is_file=True,
        )

    async def write(self, location: str, content: bytes | str) -> None:
        """Upload ``content`` to ``location``, replacing any existing file.

        A ``str`` is uploaded as UTF-8 text. It is never treated as a local
        file path.
        """
        await self.ensure_connected()
        data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        self._logger.debug("Writing %s bytes to %s", len(data), location)

        try:
            sftp = self._session()
            await self._make_parents(sftp, location)
            async with sftp.open(location, "wb") as remote_file:
                await remote_file.write(data)
        except Exception as error:
            raise self._failed(WriteError(location, error)) from error

    async def remove(self, location: str) -> None:
        await self.ensure_connected()
        try:
            await self._remove(location)
        except DeleteError as error:
            raise self._failed(error)

    async def copy(self, source: str, destination: str) -> None:
        await self.ensure_connected()
        try:
            await self._copy(source, destination)
        except CopyError as error:
            raise self._failed(error)

    async def move(self, source: str, destination: str) -> None:
        await self.ensure_connected()
        self._logger.debug("Moving %s -> %s", source, destination)
        try:
            await self._copy(source, destination)
            await self._remove(source)
        except DriveError as error:
            original = error.original if error.original is not None else error
            raise self._failed(MoveError(source, destination, original)) from error

    def list(self, location: str) -> DirectoryListing:
        return DirectoryListing(location, self._load_directory)

    async def get_stream(self, location: str) -> Any:
        raise UnsupportedOperationError(location, "get_stream")

    async def put_stream(self, location: str, stream: Any = None) -> None:
        raise UnsupportedOperationError(location, "put_stream")

    async def get_url(self, location: str) -> str:
        raise UnsupportedOperationError(location, "get_url")

    async def get_signed_url(self, location: str, expires_in: Any = None) -> str:
        raise UnsupportedOperationError(location, "get_signed_url")

    async def get_visibility(self, location: str) -> str:
        raise UnsupportedOperationError(location, "get_visibility")

    async def set_visibility(self, location: str, visibility: str) -> None:
        raise UnsupportedOperationError(location, "set_visibility")

    async def _load_directory(self, location: str) -> list[ListEntry]:
        try:
            await self.ensure_connected()
            names = await self._session().readdir(location)
        except Exception as error:
            raise self._failed(ListError(location, error)) from error

        parent = location.rstrip("/")
        entries: list[ListEntry] = []
        for item in names:
            name = str(item.filename)
            if name in (".", ".."):
                continue

            permissions = item.attrs.permissions
            is_file = not (permissions is not None and stat.S_ISDIR(permissions))
            entries.append(ListEntry(is_file=is_file, location=f"{parent}/{name}", raw=item))

        return entries

    async def _remove(self, location: str) -> None:
        try:
            sftp = self._session()
            if not await sftp.exists(location):
                return
            await sftp.remove(location)
        except Exception as error:
            raise DeleteError(location, error) from error

        self._logger.debug("Removed %s", location)

    async def _copy(self, source: str, destination: str) -> None:
        self._logger.debug("Copying %s -> %s", source, destination)
        try:
            sftp = self._session()
            if await sftp.exists(destination):
                await self._remove(destination)
            await self._make_parents(sftp, destination)
            await sftp.copy(source, destination, recurse=True)
        except Exception as error:
            raise CopyError(source, destination, error) from error

    def _session(self) -> asyncssh.SFTPClient:
        if self._sftp is None:
            raise DriveConnectionError(f"{self._config.host}:{self._config.port}", "not connected")
        return self._sftp

    async def _make_parents(self, sftp: asyncssh.SFTPClient, location: str) -> None:
        parent = str(PurePosixPath(location).parent)
        if parent in ("", ".", "/"):
            return
        await sftp.makedirs(parent, exist_ok=True)

    def _failed(self, error: DriveError) -> DriveError:
        self._logger.warning("%s", error)
        return error

    def _connect_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {
            "host": self._config.host,
            "port": self._config.port,
            "username": self._config.username,
            "password": self._config.password,
            "client_keys": None,
            "agent_path": None,
            "login_timeout": self._config.login_timeout_seconds,
        }
        if not self._config.verify_host_key:
            options["known_hosts"] = None
        return options
