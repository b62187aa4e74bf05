"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols, never on concrete
implementations.
"""

from __future__ import annotations

from typing import Protocol


class RecordFetcher(Protocol):
    """Contract for NUM record retrieval backends.

    Any object that implements :meth:`fetch` with the correct signature
    satisfies this protocol structurally (no explicit inheritance
    required).
    """

    def fetch(self, uri: str) -> str:
        """Resolve *uri* and return the record text.

        Implementations should map backend-specific exceptions to
        :class:`~num_client.exceptions.NumClientError` subclasses.

        Raises
        ------
        InvalidURIError
            When *uri* is not a valid NUM URI.
        NoRecordError
            When no record exists for *uri*.
        ResolutionError
            For every other lookup failure.
        """
        ...  # pragma: no cover


class RecordLookup(Protocol):
    """Contract for the backend behind the ``num`` URL scheme handler."""

    def lookup(self, url: str) -> str:
        """Return the record text for a normalised ``num://`` *url*."""
        ...  # pragma: no cover
