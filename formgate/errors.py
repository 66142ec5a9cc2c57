"""Configuration errors shared across formgate."""

from __future__ import annotations


class ConfigError(RuntimeError):
    """Raised when required configuration is missing or malformed."""

    def __init__(self, message: str, *, variable: str | None = None) -> None:
        """Record the offending environment variable, when known."""
        self.variable = variable
        super().__init__(message)

    @classmethod
    def missing(cls, variable: str) -> ConfigError:
        """Return an error for an unset environment variable."""
        return cls(f"{variable} is required", variable=variable)

    @classmethod
    def empty(cls, variable: str) -> ConfigError:
        """Return an error for an environment variable set to blank."""
        return cls(f"{variable} must be non-empty", variable=variable)

    @classmethod
    def invalid_url(cls, variable: str, value: str) -> ConfigError:
        """Return an error for a URL without an http(s) scheme."""
        return cls(
            f"{variable} must be an http(s) URL, got: {value!r}",
            variable=variable,
        )
