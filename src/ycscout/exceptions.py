"""YC Scout exception hierarchy."""

from __future__ import annotations


class ScoutError(Exception):
    """Base exception for all YC Scout errors."""


class ConfigurationError(ScoutError):
    """Raised when required configuration (credentials) is missing.

    Attributes:
        missing: Dotted setting names that have no value.
    """

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required settings: {', '.join(self.missing)}")


class ScoutTimeoutError(ScoutError):
    """Raised when a scout run exceeds its overall time limit."""

    def __init__(self, timeout_sec: float) -> None:
        self.timeout_sec = timeout_sec
        super().__init__(f"Scout timed out after {timeout_sec:g}s")
