"""CLI application entry point and mode dispatch for num-client.

This module is the **sole error boundary** for the entire application.
It catches :class:`~num_client.exceptions.NumClientError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages and returning well-defined exit codes.

Architecture notes
------------------
* No resolution logic lives here; all work is delegated to
  :mod:`num_client.cli.shell` and the core/infra layers.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import NoReturn

from num_client.cli import exit_codes
from num_client.cli.console import configure_logging, console
from num_client.cli.shell import run_interactive, run_once
from num_client.config import Settings, load_settings
from num_client.core.models import Options
from num_client.core.resolve_service import ResolveService
from num_client.exceptions import ArgumentError, NumClientError
from num_client.version import __version__

URI_FORMS: str = """\
A valid NUM URI is of the form

- num://numexample.com:1
- num://jo.smith@numexample.com:1
- num://jo.smith@numexample.com:1/work
- num://jo.smith@numexample.com:1/personal
- num://jo.smith@numexample.com:1/hobbies
- num://numexample.com:1/support
- num://numexample.com:1/support/website
- num://numexample.com:1/support/delivery
- num://numexample.com:1/enquiries
- num://numexample.com:1/sales

The protocol can be omitted, and the module defaults to 0 if not specified.
"""


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _RaisingArgumentParser(argparse.ArgumentParser):
    """Parser that raises :class:`ArgumentError` instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise ArgumentError(message)


def _build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser.

    The CLI supports:
    * ``num-client -uri <NUM URI> [-verbose] [-output <file>]``: resolve once
    * ``num-client [-verbose] [-output <file>]``: interactive shell
    * ``num-client -help`` / ``num-client -version``
    """
    parser = _RaisingArgumentParser(
        prog="num-client",
        usage="%(prog)s -uri <NUM URI> [-verbose] [-output <file>]",
        description="Resolve NUM URIs and print the record.",
        epilog=URI_FORMS,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("-uri", metavar="NUM_URI", help="a NUM URI, e.g. num.uk:1")
    parser.add_argument("-verbose", action="store_true", help="verbose messages")
    parser.add_argument("-output", metavar="FILE", help="output file")
    parser.add_argument(
        "-help",
        action="store_true",
        help="show this message with the valid NUM URI forms",
    )
    parser.add_argument(
        "-version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def parse_options(argv: Sequence[str], parser: argparse.ArgumentParser | None = None) -> Options:
    """Parse *argv* into :class:`Options`.

    Raises
    ------
    ArgumentError
        On unknown flags or a flag missing its value, unless ``-help``
        appears anywhere in *argv*.
    """
    arguments = list(argv)
    # -help wins over everything else, including malformed flags.
    if "-help" in arguments:
        return Options(help=True)

    parser = parser or _build_parser()
    args = parser.parse_args(arguments)
    return Options(uri=args.uri, verbose=args.verbose, output=args.output)


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

def _build_service(settings: Settings) -> ResolveService:
    """Register the ``num`` scheme and return a service resolving through it."""
    from num_client.infra import protocol_support
    from num_client.infra.dns_lookup import DnsRecordLookup

    protocol_support.init(DnsRecordLookup(settings.nameservers, settings.timeout))
    return ResolveService(protocol_support.UrlRecordFetcher())


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: Sequence[str] | None = None) -> int:
    """Run the num-client CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    arguments = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()

    try:
        options = parse_options(arguments, parser)
    except ArgumentError as exc:
        console.print(f"Error: {exc}", markup=False)
        parser.print_help(sys.stderr)
        return exit_codes.GENERAL_ERROR

    if options.help:
        parser.print_help()
        return exit_codes.SUCCESS

    settings = load_settings()
    configure_logging(settings.log_level, settings.logging_config_file)
    service = _build_service(settings)

    if options.interactive:
        warm_up_uris = settings.warm_up_uris if settings.warm_up else None
        return run_interactive(options, service, warm_up_uris=warm_up_uris)

    return run_once(options, options.uri, options.verbose, service)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except NumClientError as exc:
        console.print(f"Error: {exc}", markup=False)
        if exc.hint:
            console.print(f"Hint: {exc.hint}", markup=False)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "Unexpected error. Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}",
            markup=False,
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
