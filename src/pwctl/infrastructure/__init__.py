"""Infrastructure layer — secret store, templates, clipboard, and prompts."""

from pwctl.infrastructure.store import FileStore, SecretStore

__all__ = ["FileStore", "SecretStore"]
