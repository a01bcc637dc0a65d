from __future__ import annotations

import asyncio

from sftpdrive.core.config import DriveConfig
from sftpdrive.core.logging import setup_logging
from sftpdrive.core.paths import ensure_runtime_directories
from sftpdrive.core.profiles.credentials import CredentialService
from sftpdrive.core.remote.connection_check import run_connection_check
from sftpdrive.core.remote.sftp_client import SFTPClient


def main() -> int:
    ensure_runtime_directories()

    config = DriveConfig()
    logger = setup_logging(config.get_log_level())

    host = config.get_host()
    username = config.get_username()
    password = CredentialService().get_password(host, username) or config.get_environment_password()
    if password is None:
        logger.error("No password stored for %s@%s and SFTP_PASSWORD is not set", username, host)
        return 2

    try:
        connection_config = config.to_connection_config(password)
    except ValueError as error:
        logger.error("Invalid connection settings in %s: %s", config.path, error)
        return 2

    client = SFTPClient(connection_config, logger=logger.getChild("remote"))
    success, message = asyncio.run(run_connection_check(client, config.get_root_directory(), logger))
    if not success:
        logger.error("SFTP check failed: %s", message)
        return 1

    logger.info("SFTP check passed for %s@%s:%s", username, host, connection_config.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
