"""num-client — command-line client for NUM URIs.

Resolves ``num://`` URIs through a registered ``urllib`` scheme handler
and prints the record, interactively or one-shot.
"""

from num_client.version import __version__

__all__: list[str] = ["__version__"]
