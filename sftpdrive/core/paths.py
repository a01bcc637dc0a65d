from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "SftpDrive"
HOME_ENV_VAR = "SFTPDRIVE_HOME"


def _default_base_dir() -> Path:
    if os.name == "nt":
        appdata = os.getenv("APPDATA")
        return Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    return Path.home() / ".config"


def get_app_data_dir() -> Path:
    override = os.getenv(HOME_ENV_VAR)
    if override:
        app_data_dir = Path(override).expanduser()
    else:
        app_data_dir = _default_base_dir() / APP_NAME

    app_data_dir.mkdir(parents=True, exist_ok=True)
    return app_data_dir.resolve()


def get_logs_dir() -> Path:
    logs_dir = get_app_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir.resolve()


def get_config_path() -> Path:
    return (get_app_data_dir() / "config.json").resolve()


def ensure_runtime_directories() -> None:
    get_logs_dir()
