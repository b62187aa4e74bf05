"""Custom exception hierarchy for num-client.

All exceptions that cross layer boundaries must inherit from
:class:`NumClientError`.  Raw third-party exceptions (e.g. from
dnspython or ``urllib``) must NEVER propagate beyond the infrastructure
layer. They are caught and re-raised as a typed subclass defined here.

Hierarchy
---------
NumClientError
├── ArgumentError
├── OutputPathError
├── ConfigurationError
├── EnvironmentError
└── ResolutionError
    ├── InvalidURIError
    └── NoRecordError
"""

from __future__ import annotations


class NumClientError(Exception):
    """Base exception for all num-client errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command line ----------------------------------------------------------

class ArgumentError(NumClientError):
    """Raised when the command-line arguments cannot be parsed."""


class OutputPathError(NumClientError):
    """Raised when the ``-output`` path cannot be opened for writing."""


# --- Environment / configuration -------------------------------------------

class ConfigurationError(NumClientError):
    """Raised when ``NUM_CLIENT_*`` settings fail validation."""


class EnvironmentError(NumClientError):
    """Raised when a required runtime dependency is not available."""


# --- Resolution ------------------------------------------------------------

class ResolutionError(NumClientError):
    """Raised when a NUM URI cannot be resolved to a record."""


class InvalidURIError(ResolutionError):
    """Raised when the provided NUM URI fails validation."""


class NoRecordError(ResolutionError):
    """Raised when the lookup completes but no record exists."""
