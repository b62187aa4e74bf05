"""dnspython backed implementation of :class:`~num_client.core.protocols.RecordLookup`.

This module is the **only** place in the codebase that imports ``dns``.
All dnspython exceptions are caught here and re-raised as typed
:class:`~num_client.exceptions.NumClientError` subclasses.

The backend is a plain TXT lookup: one DNS name is derived from the URL
and the TXT strings found there are returned verbatim.  Record assembly,
caching and validation are left to whoever consumes the payload.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any
from urllib.parse import urlsplit

from num_client.exceptions import (
    EnvironmentError,
    InvalidURIError,
    NoRecordError,
    ResolutionError,
)

logger = logging.getLogger(__name__)


def lookup_name(url: str) -> str:
    """Return the DNS name holding the record for a normalised ``num://`` *url*.

    ``num://numexample.com:1/support/website`` maps to
    ``website.support.1._num.numexample.com``.

    Raises
    ------
    InvalidURIError
        For user-scoped URIs (``user@domain``), which this backend does
        not serve, or URLs without a module.
    """
    parts = urlsplit(url)
    if parts.username:
        raise InvalidURIError(
            f"User-scoped NUM URIs are not supported: {url}",
            hint="Resolve the domain record instead, e.g. num://numexample.com:1",
        )
    try:
        module = parts.port
    except ValueError as exc:
        raise InvalidURIError(f"Invalid module number in NUM URL: {url}") from exc
    if module is None or not parts.hostname:
        raise InvalidURIError(f"Not a normalised NUM URL: {url}")

    labels = [segment for segment in parts.path.split("/") if segment]
    labels.reverse()
    labels.extend((str(module), "_num", parts.hostname))
    return ".".join(labels)


class DnsRecordLookup:
    """Look NUM records up as DNS TXT records.

    Parameters
    ----------
    nameservers:
        Addresses of the DNS servers to query.  Empty means the system
        resolver configuration.
    timeout:
        Total lifetime of a single query in seconds.
    """

    def __init__(self, nameservers: Sequence[str] = (), timeout: float = 5.0) -> None:
        self._nameservers: tuple[str, ...] = tuple(nameservers)
        self._timeout: float = timeout

    def _build_resolver(self) -> Any:
        try:
            import dns.resolver
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "dnspython is not installed. Install with: pip install dnspython",
            ) from exc

        resolver = dns.resolver.Resolver(configure=not self._nameservers)
        if self._nameservers:
            resolver.nameservers = list(self._nameservers)
        resolver.lifetime = self._timeout
        return resolver

    def lookup(self, url: str) -> str:
        """Return the TXT record text published for *url*.

        Raises
        ------
        NoRecordError
            When the name does not exist or carries no TXT record.
        ResolutionError
            For timeouts and every other DNS failure.
        """
        name = lookup_name(url)
        resolver = self._build_resolver()

        import dns.exception
        import dns.resolver

        logger.debug("TXT lookup for %s", name)
        try:
            answer = resolver.resolve(name, "TXT")
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer) as exc:
            raise NoRecordError(f"No NUM record at {name}") from exc
        except dns.exception.Timeout as exc:
            raise ResolutionError(
                f"DNS query timed out for {name}",
                hint="Raise NUM_CLIENT_TIMEOUT or check your network.",
            ) from exc
        except dns.exception.DNSException as exc:
            raise ResolutionError(f"DNS lookup failed for {name}: {exc}") from exc

        chunks = [b"".join(rdata.strings) for rdata in answer]
        try:
            return b"".join(chunks).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ResolutionError(f"TXT record at {name} is not valid UTF-8.") from exc
