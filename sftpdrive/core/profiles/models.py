from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ConnectionConfig:
    host: str
    port: int
    username: str
    password: str = field(repr=False)
    verify_host_key: bool = True
    login_timeout_seconds: float = 12.0

    def __post_init__(self) -> None:
        if not self.host:
            raise ValueError("host must not be empty")
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise ValueError("port must be an integer")
        if self.port < 1 or self.port > 65535:
            raise ValueError("port must be between 1 and 65535")
        if self.login_timeout_seconds <= 0:
            raise ValueError("login_timeout_seconds must be positive")
