"""Git helpers used to derive raw-content URLs."""

from .remote import RemoteResolver

__all__ = ["RemoteResolver"]
