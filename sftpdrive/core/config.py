from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from sftpdrive.core.paths import get_config_path
from sftpdrive.core.profiles.models import ConnectionConfig


class DriveConfig:
    """Connection settings kept in a JSON file, with an environment overlay.

    The file never stores the password. Values taken from ``SFTP_*``
    environment variables win over the file but are not written back to it.
    """

    _SUPPORTED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}

    _DEFAULTS: dict[str, Any] = {
        "host": "localhost",
        "port": 22,
        "username": "",
        "root_directory": "/",
        "verify_host_key": True,
        "login_timeout_seconds": 12.0,
        "log_level": "INFO",
    }

    _ENVIRONMENT_KEYS = {
        "SFTP_HOST": "host",
        "SFTP_PORT": "port",
        "SFTP_USERNAME": "username",
        "SFTP_ROOT_DIRECTORY": "root_directory",
    }

    def __init__(
        self,
        config_path: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._config_path = config_path or get_config_path()
        self._environ = os.environ if environ is None else environ
        self._data: dict[str, Any] = {}
        self._overrides: dict[str, Any] = {}
        self._load_or_create()
        self._apply_environment()

    @property
    def path(self) -> Path:
        return self._config_path

    def _load_or_create(self) -> None:
        if not self._config_path.exists():
            self._data = dict(self._DEFAULTS)
            self.save()
            return

        try:
            content = self._config_path.read_text(encoding="utf-8")
            loaded = json.loads(content)
            if not isinstance(loaded, dict):
                loaded = {}
        except (json.JSONDecodeError, OSError):
            loaded = {}

        self._data = dict(self._DEFAULTS)
        self._data.update({key: value for key, value in loaded.items() if key in self._DEFAULTS})

        level = str(self._data.get("log_level", self._DEFAULTS["log_level"])).strip().upper()
        if level not in self._SUPPORTED_LOG_LEVELS:
            level = self._DEFAULTS["log_level"]
        self._data["log_level"] = level

        self.save()

    def _apply_environment(self) -> None:
        for variable, key in self._ENVIRONMENT_KEYS.items():
            value = self._environ.get(variable)
            if value:
                self._overrides[key] = value

    def save(self) -> None:
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        self._config_path.write_text(
            json.dumps(self._data, indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._overrides:
            return self._overrides[key]
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        if key not in self._DEFAULTS:
            raise KeyError(key)
        self._data[key] = value
        self._overrides.pop(key, None)
        self.save()

    def get_host(self) -> str:
        return str(self.get("host", self._DEFAULTS["host"]))

    def get_port(self) -> int:
        value = self.get("port", self._DEFAULTS["port"])
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValueError(f"invalid port: {value!r}") from None

    def get_username(self) -> str:
        return str(self.get("username", self._DEFAULTS["username"]))

    def get_root_directory(self) -> str:
        return str(self.get("root_directory", self._DEFAULTS["root_directory"]))

    def get_verify_host_key(self) -> bool:
        return bool(self.get("verify_host_key", self._DEFAULTS["verify_host_key"]))

    def get_login_timeout_seconds(self) -> float:
        return float(self.get("login_timeout_seconds", self._DEFAULTS["login_timeout_seconds"]))

    def get_log_level(self) -> int:
        return logging.getLevelName(str(self.get("log_level", self._DEFAULTS["log_level"])))

    def get_environment_password(self) -> str | None:
        return self._environ.get("SFTP_PASSWORD") or None

    def to_connection_config(self, password: str) -> ConnectionConfig:
        return ConnectionConfig(
            host=self.get_host(),
            port=self.get_port(),
            username=self.get_username(),
            password=password,
            verify_host_key=self.get_verify_host_key(),
            login_timeout_seconds=self.get_login_timeout_seconds(),
        )
