"""Core resolve service — times a fetch and packages the outcome.

The service depends on a :class:`~num_client.core.protocols.RecordFetcher`
injected at construction time, keeping the core free of any
external-system imports.

Guarantees
----------
* :meth:`ResolveService.resolve` never raises; every failure becomes a
  :class:`~num_client.core.models.Result` carrying a typed error.
* Only :class:`~num_client.exceptions.NumClientError` instances are
  stored on a result.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from num_client.core.models import Result
from num_client.core.protocols import RecordFetcher
from num_client.exceptions import NumClientError, ResolutionError

logger = logging.getLogger(__name__)


class ResolveService:
    """Resolve NUM URIs into :class:`Result` values.

    Parameters
    ----------
    fetcher:
        Any object satisfying the :class:`RecordFetcher` protocol.
    clock:
        Monotonic clock returning seconds.  Injectable for tests.
    """

    def __init__(
        self,
        fetcher: RecordFetcher,
        *,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._fetcher: RecordFetcher = fetcher
        self._clock: Callable[[], float] = clock

    def resolve(self, uri: str) -> Result:
        """Fetch the record for *uri* and report how long it took."""
        start = self._clock()
        try:
            payload = self._fetcher.fetch(uri)
        except NumClientError as exc:
            logger.debug("Resolution of %r failed: %s", uri, exc)
            return Result.failure(exc, self._clock() - start)
        except Exception as exc:
            logger.debug("Unexpected fetcher error for %r", uri, exc_info=True)
            error = ResolutionError(f"Unexpected resolver error: {exc}")
            error.__cause__ = exc
            return Result.failure(error, self._clock() - start)

        elapsed = self._clock() - start
        logger.debug("Resolved %r in %.3fs", uri, elapsed)
        return Result.success(payload, elapsed)
