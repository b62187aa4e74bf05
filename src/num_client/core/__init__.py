"""Core / service layer — pure data and orchestration.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
"""

from num_client.core.models import EXIT_KEYWORDS, WARM_UP_URIS, Options, Result
from num_client.core.protocols import RecordFetcher, RecordLookup
from num_client.core.resolve_service import ResolveService

__all__: list[str] = [
    "EXIT_KEYWORDS",
    "Options",
    "RecordFetcher",
    "RecordLookup",
    "ResolveService",
    "Result",
    "WARM_UP_URIS",
]
