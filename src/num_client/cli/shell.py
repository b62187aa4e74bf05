"""Single-shot and interactive execution of NUM lookups.

Output routing
--------------
* stdout: prompts, ``loading...``, the payload (unless ``-output`` is
  given) and the verbose timing lines.
* stderr: ``No record available.`` and messages caught by the
  interactive loop, via the Rich console.
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Callable, Iterable
from typing import TextIO

from num_client.cli import exit_codes
from num_client.cli.console import console
from num_client.cli.prompt import read_line
from num_client.core.models import WARM_UP_URIS, Options, is_exit_keyword
from num_client.core.resolve_service import ResolveService
from num_client.exceptions import NumClientError, OutputPathError

logger = logging.getLogger(__name__)

PROMPT: str = "Enter URI or Q[uit]> "
NO_RECORD_MESSAGE: str = "No record available."


# ---------------------------------------------------------------------------
# Output sink
# ---------------------------------------------------------------------------

def open_output(path: str) -> TextIO:
    """Open *path* for writing, truncating any existing content.

    Raises
    ------
    OutputPathError
        If the file cannot be created or written.
    """
    try:
        return open(path, "w", encoding="utf-8")
    except OSError as exc:
        raise OutputPathError(
            f"Cannot open output file: {path}",
            hint=exc.strerror or str(exc),
        ) from exc


# ---------------------------------------------------------------------------
# Single-shot
# ---------------------------------------------------------------------------

def run_once(
    options: Options,
    uri: str,
    verbose: bool,
    service: ResolveService,
) -> int:
    """Resolve *uri* once and write the payload to stdout or ``-output``.

    The output file is opened before resolution so an unusable path
    fails fast, and it is closed on every path afterwards.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when a payload was written,
        :data:`exit_codes.NO_RECORD` otherwise.

    Raises
    ------
    OutputPathError
        If ``options.output`` cannot be opened.
    """
    if verbose:
        print("loading...")

    sink: TextIO | None = open_output(options.output) if options.output else None
    try:
        result = service.resolve(uri)
        if result.payload is not None:
            (sink or sys.stdout).write(result.payload + "\n")
    finally:
        if sink is not None:
            sink.close()

    if not result.ok:
        logger.debug("No record for %r: %s", uri, result.error)
        console.print(NO_RECORD_MESSAGE)
        return exit_codes.NO_RECORD

    if verbose:
        print(f"Took  : {result.elapsed:.3f}s")
        print("Done.")
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Interactive
# ---------------------------------------------------------------------------

def _warm_up(service: ResolveService, uris: tuple[str, ...]) -> None:
    for uri in uris:
        service.resolve(uri)


def start_warm_up(
    service: ResolveService,
    uris: Iterable[str] = WARM_UP_URIS,
) -> threading.Thread:
    """Resolve *uris* on a daemon thread and discard the results.

    The caller never joins the thread; it is returned only so tests can.
    """
    thread = threading.Thread(
        target=_warm_up,
        args=(service, tuple(uris)),
        name="num-warm-up",
        daemon=True,
    )
    thread.start()
    return thread


def run_interactive(
    options: Options,
    service: ResolveService,
    *,
    reader: Callable[[str], str | None] = read_line,
    warm_up_uris: Iterable[str] | None = WARM_UP_URIS,
) -> int:
    """Prompt for URIs until an exit keyword or end of input.

    Every entered URI is resolved verbosely.  Failures are reported on
    stderr and the loop carries on.  Input that cannot be read ends the
    session like end of input.  Pass ``warm_up_uris=None`` to skip
    the background warm-up.
    """
    if warm_up_uris:
        start_warm_up(service, warm_up_uris)

    while True:
        try:
            line = reader(PROMPT)
        except (EOFError, OSError, UnicodeDecodeError):
            logger.debug("Input ended with a read failure", exc_info=True)
            line = None
        if line is None:
            print()
            return exit_codes.SUCCESS
        if not line.strip():
            continue
        if is_exit_keyword(line):
            return exit_codes.SUCCESS

        try:
            run_once(options, line.strip(), True, service)
        except NumClientError as exc:
            console.print(str(exc), markup=False)
            if exc.hint:
                console.print(f"Hint: {exc.hint}", markup=False)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Unexpected error for %r", line, exc_info=True)
            console.print(str(exc), markup=False)
