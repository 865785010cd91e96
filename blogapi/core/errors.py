"""
Error taxonomy for the blog services.

Services raise these; endpoints translate them into HTTP responses.
"""


class BlogError(Exception):
    """Base class for all blog service failures."""


class BadRequest(BlogError):
    """Required input is missing."""


class StorageError(BlogError):
    """An uploaded asset could not be stored."""


class PersistenceError(BlogError):
    """A document could not be written."""


class NotFound(BlogError):
    """No document exists for the requested identifier."""


class QueryError(BlogError):
    """A read against the document store failed."""
