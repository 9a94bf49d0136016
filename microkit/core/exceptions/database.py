"""
Document Store Exceptions

All exceptions related to the MongoDB connection provider and database facade.
"""

from microkit.core.exceptions.base import MicrokitError


class DatabaseError(MicrokitError):
    """Base exception for document store errors."""
    pass


class DatabaseConnectionError(DatabaseError):
    """
    Raised when a connection to the document store cannot be opened or verified.

    Common causes:
    - MongoDB server is down or unreachable
    - Server selection timeout
    - Authentication failure
    - TLS handshake failure

    The caller decides whether to retry by calling ``get_connection()`` again.
    """
    pass
