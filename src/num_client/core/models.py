"""Domain models for num-client.

All models are **frozen** dataclasses: immutable value objects with no
behaviour beyond data access and construction-time invariants.
"""

from __future__ import annotations

from dataclasses import dataclass

from num_client.exceptions import NumClientError

EXIT_KEYWORDS: frozenset[str] = frozenset(
    {"q", "quit", "exit", "done", "bye", "goodbye"}
)
"""Interactive-mode entries that end the session (case-insensitive)."""

WARM_UP_URIS: tuple[str, ...] = ("num.uk:1", "num.uk:3", "num.uk:4")
"""Well-known URIs resolved in the background when the shell starts."""


def is_exit_keyword(line: str) -> bool:
    """Return ``True`` when *line* is one of :data:`EXIT_KEYWORDS`."""
    return line.strip().lower() in EXIT_KEYWORDS


# ---------------------------------------------------------------------------
# Parsed command line
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Options:
    """Options recognised on the command line for one invocation."""

    uri: str | None = None
    """NUM URI to resolve once.  ``None`` selects interactive mode."""

    verbose: bool = False
    """Print progress and timing messages."""

    output: str | None = None
    """Write the payload to this path instead of stdout."""

    help: bool = False
    """Print usage and exit without resolving anything."""

    @property
    def interactive(self) -> bool:
        return self.uri is None


# ---------------------------------------------------------------------------
# Resolution outcome
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Result:
    """Outcome of a single resolution attempt.

    Exactly one of :attr:`payload` and :attr:`error` is set.  Use the
    :meth:`success` and :meth:`failure` constructors rather than the
    raw initialiser.
    """

    elapsed: float
    """Wall-clock seconds spent in the resolver."""

    payload: str | None = None
    """Record text returned by the resolver."""

    error: NumClientError | None = None
    """Why no payload is available."""

    def __post_init__(self) -> None:
        if (self.payload is None) == (self.error is None):
            raise ValueError("Result requires exactly one of payload or error.")

    @classmethod
    def success(cls, payload: str, elapsed: float) -> Result:
        return cls(elapsed=elapsed, payload=payload)

    @classmethod
    def failure(cls, error: NumClientError, elapsed: float) -> Result:
        return cls(elapsed=elapsed, error=error)

    @property
    def ok(self) -> bool:
        """``True`` when the resolver produced a payload."""
        return self.payload is not None
