"""
Credential stores.

The notifier only ever asks a store for one credential by id. Scoping (which
job may see which credential) belongs to the engine; the ``scope`` handle is
passed through untouched.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Protocol

from ghnotify.core.exceptions import CredentialStoreError
from ghnotify.core.logging import get_logger
from ghnotify.models.credentials import (
    SECRET_TEXT,
    SSH_KEY,
    USERNAME_PASSWORD,
    Credential,
    SecretTextCredential,
    SSHKeyCredential,
    UsernamePasswordCredential,
)

logger = get_logger(__name__)


class CredentialStore(Protocol):
    """Lookup interface consumed by the GitHub gateway."""

    def lookup(self, credentials_id: str, scope: Any = None) -> Credential | None:
        ...


class InMemoryCredentialStore:
    """Credential store backed by a dict, keyed by credential id."""

    def __init__(self, credentials: Iterable[Credential] = ()) -> None:
        self._credentials: dict[str, Credential] = {}
        for credential in credentials:
            self.add(credential)

    def add(self, credential: Credential) -> None:
        self._credentials[credential.id] = credential

    def lookup(self, credentials_id: str, scope: Any = None) -> Credential | None:
        return self._credentials.get(credentials_id)

    def __contains__(self, credentials_id: str) -> bool:
        return credentials_id in self._credentials


def credential_from_dict(entry: dict[str, Any]) -> Credential:
    """
    Build a credential from one JSON entry.

    Args:
        entry: Mapping with ``id``, ``type`` and type-specific fields

    Returns:
        Typed credential

    Raises:
        CredentialStoreError: If the entry has no id or an unknown type
    """
    credentials_id = entry.get("id")
    if not credentials_id:
        raise CredentialStoreError("Credential entry without an id")

    kind = entry.get("type")
    if kind == USERNAME_PASSWORD:
        return UsernamePasswordCredential(
            id=credentials_id,
            username=entry.get("username", ""),
            password=entry.get("password", ""),
        )
    if kind == SECRET_TEXT:
        return SecretTextCredential(id=credentials_id, secret=entry.get("secret", ""))
    if kind == SSH_KEY:
        return SSHKeyCredential(
            id=credentials_id,
            username=entry.get("username", ""),
            private_key=entry.get("private_key", ""),
        )
    raise CredentialStoreError(f"Unknown credential type {kind!r} for {credentials_id!r}")


class JsonFileCredentialStore(InMemoryCredentialStore):
    """Credential store loaded once from a JSON file.

    Expected layout::

        {"credentials": [{"id": "gh-token", "type": "secret_text", "secret": "..."}]}
    """

    def __init__(self, path: str) -> None:
        self._path = path
        super().__init__(self._load(path))
        logger.info(f"Loaded {len(self._credentials)} credentials from {path}")

    @staticmethod
    def _load(path: str) -> list[Credential]:
        try:
            with open(path, encoding="utf-8") as fh:
                data = json.load(fh)
        except OSError as exc:
            raise CredentialStoreError(f"Cannot read credential file {path}: {exc}") from exc
        except ValueError as exc:
            raise CredentialStoreError(f"Credential file {path} is not valid JSON") from exc

        if not isinstance(data, dict) or not isinstance(data.get("credentials"), list):
            raise CredentialStoreError(f"Credential file {path} has no 'credentials' list")

        return [credential_from_dict(entry) for entry in data["credentials"]]
