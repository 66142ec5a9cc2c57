"""Bronze sink error types."""

from __future__ import annotations


class SinkError(RuntimeError):
    """Raised when a Bronze sink cannot persist an ingestion record."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise with a message and optional upstream HTTP status."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int, detail: str | None = None) -> SinkError:
        """Return an error for a non-2xx response from the data API."""
        message = f"Data API HTTP {status_code}"
        if detail:
            message = f"{message}: {detail}"
        return cls(message, status_code=status_code)

    @classmethod
    def transport_error(cls, exc: Exception) -> SinkError:
        """Return an error for a request that never produced a response."""
        return cls(f"Data API request failed: {exc}")

    @classmethod
    def not_configured(cls, exc: Exception) -> SinkError:
        """Return an error when sink credentials are unavailable."""
        return cls(f"Data sink is not configured: {exc}")

    @classmethod
    def database_error(cls, exc: Exception) -> SinkError:
        """Return an error wrapping a database driver failure.

        Uses the driver's message when SQLAlchemy wrapped one.
        """
        orig = getattr(exc, "orig", None)
        detail = str(orig if orig is not None else exc).strip()
        message = f"Database insert failed: {exc.__class__.__name__}"
        if detail:
            message = f"{message}: {detail}"
        return cls(message)
