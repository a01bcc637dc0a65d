from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from sftpdrive.core.remote.errors import DriveConnectionError, UnsupportedOperationError
from sftpdrive.core.remote.sftp_client import SFTPClient

if TYPE_CHECKING:
    from conftest import SFTPServerHandle


@pytest.mark.asyncio
async def test_client_connects_lazily(client: SFTPClient, sftp_server: SFTPServerHandle) -> None:
    assert await client.is_connected() is False
    assert sftp_server.connections == []

    await client.exists("anything.txt")

    assert await client.is_connected() is True
    assert len(sftp_server.connections) == 1


@pytest.mark.asyncio
async def test_operations_reuse_one_session(client: SFTPClient, sftp_server: SFTPServerHandle) -> None:
    await client.write("a.txt", "a")
    await client.read("a.txt")
    await client.stat("a.txt")
    await client.remove("a.txt")

    assert len(sftp_server.connections) == 1


@pytest.mark.asyncio
async def test_client_reconnects_after_silent_drop(client: SFTPClient, sftp_server: SFTPServerHandle) -> None:
    await client.write("kept.txt", "still here")
    await sftp_server.drop_connections()

    assert await client.is_connected() is False
    assert await client.read("kept.txt") == b"still here"
    assert len(sftp_server.connections) == 2


@pytest.mark.asyncio
async def test_concurrent_first_use_opens_single_session(
    client: SFTPClient,
    sftp_server: SFTPServerHandle,
) -> None:
    results = await asyncio.gather(*(client.exists(f"file-{index}.txt") for index in range(8)))

    assert results == [False] * 8
    assert len(sftp_server.connections) == 1


@pytest.mark.asyncio
async def test_disconnect_is_idempotent_and_client_is_reusable(
    client: SFTPClient,
    sftp_server: SFTPServerHandle,
) -> None:
    await client.disconnect()

    await client.write("again.txt", "one")
    await client.disconnect()
    await client.disconnect()
    assert await client.is_connected() is False

    assert await client.read("again.txt") == b"one"
    assert len(sftp_server.connections) == 2


@pytest.mark.asyncio
async def test_explicit_connect_replaces_existing_session(
    client: SFTPClient,
    sftp_server: SFTPServerHandle,
) -> None:
    await client.connect()
    await client.connect()

    assert await client.is_connected() is True
    assert len(sftp_server.connections) == 2


@pytest.mark.asyncio
async def test_async_context_manager_connects_and_disconnects(sftp_server: SFTPServerHandle) -> None:
    async with SFTPClient(sftp_server.config()) as client:
        assert await client.is_connected() is True
        await client.write("ctx.txt", "ctx")

    assert await client.is_connected() is False
    assert (sftp_server.root / "ctx.txt").read_text(encoding="utf-8") == "ctx"


@pytest.mark.asyncio
async def test_wrong_password_raises_connection_error(sftp_server: SFTPServerHandle) -> None:
    client = SFTPClient(sftp_server.config(password="wrong"))

    with pytest.raises(DriveConnectionError) as excinfo:
        await client.read("a.txt")

    assert excinfo.value.location == f"127.0.0.1:{sftp_server.port}"
    assert excinfo.value.original is not None
    assert await client.is_connected() is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("method_name", "args"),
    [
        ("get_stream", ("a.txt",)),
        ("put_stream", ("a.txt", None)),
        ("get_url", ("a.txt",)),
        ("get_signed_url", ("a.txt",)),
        ("get_visibility", ("a.txt",)),
        ("set_visibility", ("a.txt", "public")),
    ],
)
async def test_unsupported_operations_fail_without_connecting(
    sftp_server: SFTPServerHandle,
    method_name: str,
    args: tuple[object, ...],
) -> None:
    client = SFTPClient(sftp_server.config())

    with pytest.raises(UnsupportedOperationError) as excinfo:
        await getattr(client, method_name)(*args)

    assert excinfo.value.method_name == method_name
    assert excinfo.value.location == "a.txt"
    assert sftp_server.connections == []
