"""CLI console and logging helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``-help``, ``-version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import json
import logging
import logging.config
import sys
from typing import Any

from num_client.exceptions import ConfigurationError, EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console targeting stderr that never hard-wraps lines."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True, soft_wrap=True)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object, markup: bool = True) -> None:
		"""Render with Rich when available, else plain stderr print.

		Pass ``markup=False`` for text that may contain square brackets,
		such as exception messages.
		"""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects, markup=markup)


console = _ConsoleProxy()


def configure_logging(level: str = "WARNING", config_file: str | None = None) -> None:
	"""Route log records to stderr.

	A JSON *config_file* is applied with :func:`logging.config.dictConfig`
	and wins over *level*.  Otherwise a Rich handler is installed, or a
	plain stream handler when Rich is missing.
	"""
	if config_file:
		try:
			with open(config_file, encoding="utf-8") as fl:
				logging.config.dictConfig(json.load(fl))
		except (OSError, ValueError) as exc:
			raise ConfigurationError(
				f"Cannot load logging configuration from {config_file}",
				hint=str(exc),
			) from exc
		return

	try:
		from rich.logging import RichHandler
	except ModuleNotFoundError:
		logging.basicConfig(level=level, stream=sys.stderr, force=True)
		return

	handler = RichHandler(console=get_rich_console(), show_path=False)
	logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)
