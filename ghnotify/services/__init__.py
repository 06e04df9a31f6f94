# Services module - GitHub gateway, context inference and delivery
from .credentials import CredentialStore, InMemoryCredentialStore, JsonFileCredentialStore
from .notifier import StatusNotifier
from .proxy import ProxyConfiguration
from .resolver import ContextResolver

__all__ = [
    "CredentialStore",
    "InMemoryCredentialStore",
    "JsonFileCredentialStore",
    "StatusNotifier",
    "ProxyConfiguration",
    "ContextResolver",
]
