"""``num://`` support for ``urllib.request``.

Registering the scheme installs a process-wide opener whose
:class:`NumHandler` answers ``num://`` URLs from a
:class:`~num_client.core.protocols.RecordLookup` backend.  All other
schemes keep the stock ``urllib`` handlers.

Registration happens once per process through :func:`init`; later calls
are no-ops.  There is no teardown.
"""

from __future__ import annotations

import email.message
import io
import logging
import threading
import urllib.request
import urllib.response
from urllib.parse import urlsplit, urlunsplit

from num_client.core.protocols import RecordLookup
from num_client.exceptions import InvalidURIError, NumClientError, ResolutionError

logger = logging.getLogger(__name__)

SCHEME: str = "num"
DEFAULT_MODULE: int = 0

_lock = threading.Lock()
_installed: bool = False


# ---------------------------------------------------------------------------
# URI normalisation
# ---------------------------------------------------------------------------

def to_url(uri: str) -> str:
    """Convert a NUM URI string into a normalised ``num://`` URL.

    The scheme may be omitted (``num.uk:1``) and the module defaults to
    ``0`` (``num.uk`` → ``num://num.uk:0``).

    Raises
    ------
    InvalidURIError
        If *uri* is empty, uses another scheme, has no host, or carries
        a non-numeric module.
    """
    text = uri.strip()
    if not text:
        raise InvalidURIError("NUM URI must not be empty.")
    if "://" not in text:
        text = f"{SCHEME}://{text}"

    parts = urlsplit(text)
    if parts.scheme.lower() != SCHEME:
        raise InvalidURIError(
            f"Unsupported scheme: {parts.scheme}",
            hint="NUM URIs start with num:// or omit the scheme entirely.",
        )
    try:
        module = parts.port
    except ValueError as exc:
        raise InvalidURIError(f"Invalid module number in NUM URI: {uri}") from exc
    if not parts.hostname:
        raise InvalidURIError(f"NUM URI has no domain: {uri}")

    if module is None:
        module = DEFAULT_MODULE
    userinfo = f"{parts.username}@" if parts.username else ""
    netloc = f"{userinfo}{parts.hostname}:{module}"
    return urlunsplit((SCHEME, netloc, parts.path.rstrip("/"), "", ""))


# ---------------------------------------------------------------------------
# urllib handler
# ---------------------------------------------------------------------------

class NumHandler(urllib.request.BaseHandler):
    """``urllib`` handler serving ``num://`` URLs from a lookup backend."""

    def __init__(self, lookup: RecordLookup) -> None:
        self._lookup: RecordLookup = lookup

    def num_open(self, request: urllib.request.Request) -> urllib.response.addinfourl:
        url = request.full_url
        body = self._lookup.lookup(url).encode("utf-8")

        headers = email.message.Message()
        headers["Content-Type"] = "text/plain; charset=utf-8"
        headers["Content-Length"] = str(len(body))
        return urllib.response.addinfourl(io.BytesIO(body), headers, url, code=200)


def init(lookup: RecordLookup | None = None) -> bool:
    """Register the ``num`` scheme with ``urllib.request``.

    Parameters
    ----------
    lookup:
        Backend answering ``num://`` URLs.  Defaults to a
        :class:`~num_client.infra.dns_lookup.DnsRecordLookup` with
        system resolver settings.

    Returns
    -------
    bool
        ``True`` when this call installed the handler, ``False`` when it
        was already registered.
    """
    global _installed
    with _lock:
        if _installed:
            logger.debug("num:// handler already registered; ignoring init()")
            return False
        if lookup is None:
            from num_client.infra.dns_lookup import DnsRecordLookup

            lookup = DnsRecordLookup()
        urllib.request.install_opener(urllib.request.build_opener(NumHandler(lookup)))
        _installed = True
    logger.debug("Registered num:// handler backed by %s", type(lookup).__name__)
    return True


def is_initialised() -> bool:
    return _installed


# ---------------------------------------------------------------------------
# RecordFetcher implementation
# ---------------------------------------------------------------------------

class UrlRecordFetcher:
    """Concrete :class:`~num_client.core.protocols.RecordFetcher` using ``urlopen``.

    Requires :func:`init` to have been called; the fetcher itself never
    registers the scheme.
    """

    def fetch(self, uri: str) -> str:
        """Open the ``num://`` URL for *uri* and return its UTF-8 text.

        Raises
        ------
        InvalidURIError
            If *uri* cannot be normalised.
        ResolutionError
            If the scheme is not registered, the URL cannot be opened or
            the body is not UTF-8.
        """
        if not is_initialised():
            raise ResolutionError(
                "NUM protocol support is not initialised.",
                hint="Call num_client.infra.protocol_support.init() first.",
            )
        url = to_url(uri)

        try:
            with urllib.request.urlopen(url) as response:
                body: bytes = response.read()
        except NumClientError:
            raise
        except (OSError, ValueError) as exc:
            raise ResolutionError(f"Could not open {url}: {exc}") from exc

        try:
            return body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ResolutionError(f"Record for {url} is not valid UTF-8.") from exc
