"""Exceptions raised inside the portal core."""


class IgilifeError(Exception):
    """Base class for portal errors."""


class StorageError(IgilifeError):
    """The persisted store could not be read, written, or decoded."""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"{key}: {message}")
