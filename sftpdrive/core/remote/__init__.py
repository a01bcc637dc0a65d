from sftpdrive.core.remote.client_base import FileStats, ListEntry, RemoteClient
from sftpdrive.core.remote.connection_check import run_connection_check
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
from sftpdrive.core.remote.sftp_client import SFTPClient

__all__ = [
    "CopyError",
    "DeleteError",
    "DirectoryListing",
    "DriveConnectionError",
    "DriveError",
    "FileStats",
    "ListEntry",
    "ListError",
    "MetadataError",
    "MoveError",
    "ReadError",
    "RemoteClient",
    "SFTPClient",
    "UnsupportedOperationError",
    "WriteError",
    "run_connection_check",
]
