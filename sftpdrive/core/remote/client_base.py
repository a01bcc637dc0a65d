from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from sftpdrive.core.remote.listing import DirectoryListing


@dataclass(slots=True)
class FileStats:
    modified_at: datetime
    size_bytes: int
    is_file: bool = True


@dataclass(slots=True)
class ListEntry:
    is_file: bool
    location: str
    raw: Any


class RemoteClient(Protocol):
    async def connect(self) -> None: ...

    async def disconnect(self) -> None: ...

    async def is_connected(self) -> bool: ...

    async def ensure_connected(self) -> None: ...

    async def read(self, location: str) -> bytes: ...

    async def exists(self, location: str) -> bool: ...

    async def stat(self, location: str) -> FileStats: ...

    async def write(self, location: str, content: bytes | str) -> None: ...

    async def remove(self, location: str) -> None: ...

    async def copy(self, source: str, destination: str) -> None: ...

    async def move(self, source: str, destination: str) -> None: ...

    def list(self, location: str) -> DirectoryListing: ...
