from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sftpdrive.core.remote.client_base import ListEntry


class DirectoryListing:
    """Deferred directory listing.

    Creating a listing does no remote work. The directory is read each time
    ``to_list()`` is awaited or the listing is iterated with ``async for``;
    failures surface only at that point, as ``ListError``.
    """

    def __init__(self, location: str, loader: Callable[[str], Awaitable[list[ListEntry]]]) -> None:
        self._location = location
        self._loader = loader

    @property
    def location(self) -> str:
        return self._location

    async def to_list(self) -> list[ListEntry]:
        return await self._loader(self._location)

    async def __aiter__(self) -> AsyncIterator[ListEntry]:
        for entry in await self.to_list():
            yield entry

    def __repr__(self) -> str:
        return f"DirectoryListing(location={self._location!r})"
