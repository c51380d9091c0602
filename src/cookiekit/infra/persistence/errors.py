class PersistenceError(Exception):
    """Generic failure of a cookie persistence backend."""


class CorruptStoreError(PersistenceError):
    """The backing store exists but does not hold a valid cookie document."""
