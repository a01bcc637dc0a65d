from __future__ import annotations


class DriveError(Exception):
    """Base class for every failure raised by a remote file client.

    Each subclass names the high-level operation that failed. The transport's
    own exception is kept on ``original`` and chained as ``__cause__``.
    """

    operation: str = "operation"

    def __init__(
        self,
        location: str,
        original: BaseException | str | None = None,
        *,
        destination: str | None = None,
        operation: str | None = None,
    ) -> None:
        if operation is not None:
            self.operation = operation
        self.location = location
        self.destination = destination
        self.original = original
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        if self.destination is not None:
            target = f'"{self.location}" to "{self.destination}"'
        else:
            target = f'"{self.location}"'

        message = f"Cannot {self.operation} {target}"
        if self.original is not None:
            message = f"{message}: {self.original}"
        return message


class DriveConnectionError(DriveError):
    operation = "connect to"


class ReadError(DriveError):
    operation = "read file"


class WriteError(DriveError):
    operation = "write file"


class DeleteError(DriveError):
    operation = "delete file"


class CopyError(DriveError):
    operation = "copy file"

    def __init__(self, source: str, destination: str, original: BaseException | str | None = None) -> None:
        super().__init__(source, original, destination=destination)

    @property
    def source(self) -> str:
        return self.location


class MoveError(DriveError):
    operation = "move file"

    def __init__(self, source: str, destination: str, original: BaseException | str | None = None) -> None:
        super().__init__(source, original, destination=destination)

    @property
    def source(self) -> str:
        return self.location


class MetadataError(DriveError):
    """Raised when metadata for a path cannot be read.

    ``operation_tag`` tells which probe failed: ``"exists"`` or ``"stats"``.
    """

    def __init__(self, location: str, operation_tag: str, original: BaseException | str | None = None) -> None:
        self.operation_tag = operation_tag
        super().__init__(location, original, operation=f"get {operation_tag} of")


class ListError(DriveError):
    operation = "list directory"


class UnsupportedOperationError(DriveError):
    def __init__(self, location: str, method_name: str) -> None:
        self.method_name = method_name
        super().__init__(location, f"{method_name} is not supported", operation="access")
