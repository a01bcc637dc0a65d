from sftpdrive.core.profiles.models import ConnectionConfig
from sftpdrive.core.remote import (
    CopyError,
    DeleteError,
    DirectoryListing,
    DriveConnectionError,
    DriveError,
    FileStats,
    ListEntry,
    ListError,
    MetadataError,
    MoveError,
    ReadError,
    SFTPClient,
    UnsupportedOperationError,
    WriteError,
)

__version__ = "1.0.0"

__all__ = [
    "ConnectionConfig",
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
    "SFTPClient",
    "UnsupportedOperationError",
    "WriteError",
    "__version__",
]
