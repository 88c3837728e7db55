"""Errors raised by every store backend."""


class StoreError(Exception):
    """Base class for store failures."""


class NotFoundError(StoreError):
    def __init__(self, entity: str, key: int):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} {key} not found")


class DuplicateEmailError(StoreError):
    def __init__(self, email: str):
        self.email = email
        super().__init__("User already exists with this email")


class StorageError(StoreError):
    """The backing medium failed (I/O, corrupt data, database error)."""
