"""
Base Exception Classes

MicrokitError carries, besides its message, the context an operator needs
to find the failing resource: ``details`` (subject, database, masked URL,
the wrapped driver error, a suggestion) and the correlation id of the
delivery being processed when the error was created.

ConfigError lives here because every adapter raises it.
"""

from typing import Any, TypeVar

from microkit.core.logging.logger import get_correlation_id

TError = TypeVar("TError", bound="MicrokitError")


class MicrokitError(Exception):
    """
    Base exception for all microkit errors.

    Attributes:
        message: Error message
        details: Resource context (subject, database, url, cause, suggestion)
        correlation_id: Delivery id (subject:sequence) taken from the logging
            context when not given; None outside a listener callback
    """

    def __init__(
        self,
        message: str,
        correlation_id: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = dict(details or {})
        self.correlation_id = correlation_id or get_correlation_id()

    @classmethod
    def from_exception(
        cls: type[TError], exc: BaseException, message: str | None = None, **context: Any
    ) -> TError:
        """
        Wrap a driver exception (pymongo, nats, redis, pydantic).

        The driver error's type and text end up in ``details["cause"]`` and
        ``details["cause_message"]``; keyword arguments name the resource.

        Example:
            raise DatabaseConnectionError.from_exception(e, database="orders") from e
        """
        details = {"cause": type(exc).__name__, "cause_message": str(exc), **context}
        return cls(message or str(exc), details=details)

    def with_suggestion(self: TError, suggestion: str) -> TError:
        """Attach an operator hint, e.g. which environment variable to set."""
        self.details["suggestion"] = suggestion
        return self

    def log_fields(self) -> dict[str, Any]:
        """
        Flatten the error into structlog keyword arguments.

        The correlation id is left out; the logging processor adds it.
        """
        return {"error_type": type(self).__name__, "error": self.message, **self.details}


class ConfigError(MicrokitError):
    """
    Raised when required configuration is missing or empty.

    Fatal to the call that raised it; never retried internally.
    Examples: no Mongo URL, no database name, no NATS group.
    """
    pass
