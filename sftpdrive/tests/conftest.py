from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import asyncssh
import keyring
import keyring.errors
from keyring.backend import KeyringBackend
import pytest
import pytest_asyncio

from sftpdrive.core.profiles.models import ConnectionConfig
from sftpdrive.core.remote.sftp_client import SFTPClient

TEST_USERNAME = "drive"
TEST_PASSWORD = "s3cret"


@dataclass
class SFTPServerHandle:
    port: int
    root: Path
    connections: list[asyncssh.SSHServerConnection] = field(default_factory=list)

    def config(self, **overrides: Any) -> ConnectionConfig:
        values: dict[str, Any] = {
            "host": "127.0.0.1",
            "port": self.port,
            "username": TEST_USERNAME,
            "password": TEST_PASSWORD,
            "verify_host_key": False,
            "login_timeout_seconds": 5.0,
        }
        values.update(overrides)
        return ConnectionConfig(**values)

    async def drop_connections(self) -> None:
        for connection in list(self.connections):
            connection.close()
            await connection.wait_closed()


class _PasswordServer(asyncssh.SSHServer):
    def __init__(self, handle: SFTPServerHandle) -> None:
        self._handle = handle

    def connection_made(self, conn: asyncssh.SSHServerConnection) -> None:
        self._handle.connections.append(conn)

    def begin_auth(self, username: str) -> bool:
        return True

    def password_auth_supported(self) -> bool:
        return True

    def validate_password(self, username: str, password: str) -> bool:
        return username == TEST_USERNAME and password == TEST_PASSWORD


class MemoryKeyring(KeyringBackend):
    priority = 1

    def __init__(self) -> None:
        super().__init__()
        self.passwords: dict[tuple[str, str], str] = {}

    def set_password(self, service: str, username: str, password: str) -> None:
        self.passwords[(service, username)] = password

    def get_password(self, service: str, username: str) -> str | None:
        return self.passwords.get((service, username))

    def delete_password(self, service: str, username: str) -> None:
        try:
            del self.passwords[(service, username)]
        except KeyError:
            raise keyring.errors.PasswordDeleteError("password not found") from None


@pytest.fixture(scope="session")
def host_key() -> asyncssh.SSHKey:
    return asyncssh.generate_private_key("ssh-ed25519")


@pytest_asyncio.fixture
async def sftp_server(tmp_path: Path, host_key: asyncssh.SSHKey) -> AsyncIterator[SFTPServerHandle]:
    root = tmp_path / "remote"
    root.mkdir()
    handle = SFTPServerHandle(port=0, root=root)

    acceptor = await asyncssh.listen(
        "127.0.0.1",
        0,
        server_factory=lambda: _PasswordServer(handle),
        server_host_keys=[host_key],
        sftp_factory=lambda chan: asyncssh.SFTPServer(chan, chroot=str(root)),
    )
    handle.port = acceptor.get_port()

    yield handle

    acceptor.close()
    await acceptor.wait_closed()


@pytest_asyncio.fixture
async def client(sftp_server: SFTPServerHandle) -> AsyncIterator[SFTPClient]:
    sftp_client = SFTPClient(sftp_server.config())
    yield sftp_client
    await sftp_client.disconnect()


@pytest.fixture
def memory_keyring() -> Iterator[MemoryKeyring]:
    previous = keyring.get_keyring()
    backend = MemoryKeyring()
    keyring.set_keyring(backend)
    yield backend
    keyring.set_keyring(previous)
