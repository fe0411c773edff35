"""The module that contains the exceptions for the `atelier` models.

File storage operations do not have their own exceptions: the underlying `OSError` is propagated as is.
"""


class AtelierError(Exception):
    """The base exception for the `atelier` models."""

    pass


class InvalidAuthor(AtelierError, ValueError):
    """The exception that is raised when the guest flag, the guest nickname and the user of a record disagree."""

    pass


class EntityDeleted(AtelierError):
    """The exception that is raised when an operation requires an active entity but got a soft-deleted one."""

    def __init__(self, entity: object):
        """Initialize the exception with the soft-deleted entity."""
        self.entity = entity
        super().__init__(f"{entity!r} is deleted.")
