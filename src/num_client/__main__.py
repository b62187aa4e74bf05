"""Allow ``python -m num_client`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m num_client`` behaves identically to the ``num-client``
console script.
"""

from __future__ import annotations

from num_client.cli.app import cli

if __name__ == "__main__":
    cli()
