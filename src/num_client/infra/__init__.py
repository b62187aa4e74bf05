"""Infrastructure layer — external system integration.

This layer wraps all interaction with ``urllib.request`` and dnspython.
Every raw third-party exception must be caught here and re-raised as a
:class:`~num_client.exceptions.NumClientError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from num_client.infra.dns_lookup import DnsRecordLookup
from num_client.infra.protocol_support import NumHandler, UrlRecordFetcher, init, to_url

__all__: list[str] = [
    "DnsRecordLookup",
    "NumHandler",
    "UrlRecordFetcher",
    "init",
    "to_url",
]
