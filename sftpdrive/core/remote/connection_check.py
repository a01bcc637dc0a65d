from __future__ import annotations

import logging

from sftpdrive.core.remote.client_base import RemoteClient
from sftpdrive.core.remote.errors import DriveError


async def run_connection_check(
    client: RemoteClient,
    remote_path: str,
    logger: logging.Logger | None = None,
) -> tuple[bool, str]:
    log = logger or logging.getLogger("sftpdrive.remote")
    try:
        await client.ensure_connected()
        entries = await client.list(remote_path).to_list()
    except DriveError as error:
        log.error("Connection check failed: %s", error)
        return False, str(error)
    finally:
        await client.disconnect()

    log.info("Connection check succeeded, %s entries in %s", len(entries), remote_path)
    return True, "ok"
