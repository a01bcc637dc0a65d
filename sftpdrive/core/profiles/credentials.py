from __future__ import annotations

import keyring
import keyring.errors


class CredentialService:
    _SERVICE_NAME = "SftpDrive"

    def _credential_key(self, host: str, username: str) -> str:
        return f"host:{host}:user:{username}"

    def set_password(self, host: str, username: str, password: str) -> None:
        keyring.set_password(self._SERVICE_NAME, self._credential_key(host, username), password)

    def get_password(self, host: str, username: str) -> str | None:
        return keyring.get_password(self._SERVICE_NAME, self._credential_key(host, username))

    def delete_password(self, host: str, username: str) -> None:
        key = self._credential_key(host, username)
        try:
            keyring.delete_password(self._SERVICE_NAME, key)
        except keyring.errors.PasswordDeleteError:
            pass
