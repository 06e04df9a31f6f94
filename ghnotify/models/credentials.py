"""
Credential shapes returned by a credential store.

Each shape is tagged with a ``kind`` so callers can switch on it without
isinstance checks.
"""

from dataclasses import dataclass, field
from typing import ClassVar


USERNAME_PASSWORD = "username_password"
SECRET_TEXT = "secret_text"
SSH_KEY = "ssh_key"


@dataclass(frozen=True)
class Credential:
    """Base for stored credentials."""

    kind: ClassVar[str] = "unknown"

    id: str


@dataclass(frozen=True)
class UsernamePasswordCredential(Credential):
    """Username plus password or personal access token."""

    kind: ClassVar[str] = USERNAME_PASSWORD

    username: str = ""
    password: str = field(default="", repr=False)


@dataclass(frozen=True)
class SecretTextCredential(Credential):
    """Bare secret token."""

    kind: ClassVar[str] = SECRET_TEXT

    secret: str = field(default="", repr=False)


@dataclass(frozen=True)
class SSHKeyCredential(Credential):
    """SSH private key. Stored, but not usable against the GitHub API."""

    kind: ClassVar[str] = SSH_KEY

    username: str = ""
    private_key: str = field(default="", repr=False)
