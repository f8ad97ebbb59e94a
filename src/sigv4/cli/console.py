"""CLI console helpers: stderr messages, logging setup, color detection.

Everything user-facing that is not the response itself goes to stderr
through Rich, so stdout carries nothing but the rendered response.
"""

from __future__ import annotations

import logging
import os
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

_LOGGER_NAMES: tuple[str, ...] = ("sigv4", "botocore")

LOG_LEVEL_ENV: str = "SIGV4_LOG"
"""Environment variable naming a log level, e.g. ``SIGV4_LOG=info``."""


def get_rich_console() -> Console:
	"""Create a Rich console instance targeting stderr."""
	return Console(stderr=True, highlight=False)


console = get_rich_console()


def print_error(message: str, *, hint: str | None = None) -> None:
	"""Print a single-line error, with the hint appended when present."""
	line = f"[bold red]Error:[/bold red] {escape(_one_line(message))}"
	if hint:
		line += f" [yellow]Hint:[/yellow] {escape(_one_line(hint))}"
	console.print(line, soft_wrap=True)


def _one_line(text: str) -> str:
	return " ".join(text.split())


def resolve_log_level(verbose: bool, env_value: str | None) -> int:
	"""``-v`` wins, then a valid ``SIGV4_LOG`` level, else WARNING."""
	if verbose:
		return logging.DEBUG
	if env_value:
		level = logging.getLevelName(env_value.strip().upper())
		if isinstance(level, int):
			return level
	return logging.WARNING


def configure_logging(level: int) -> None:
	"""Route sigv4 and botocore log records to stderr through Rich.

	Safe to call repeatedly: a previously installed Rich handler is
	replaced rather than duplicated.
	"""
	handler = RichHandler(console=get_rich_console(), show_path=False, show_time=False)
	handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
	for name in _LOGGER_NAMES:
		logger = logging.getLogger(name)
		for existing in [h for h in logger.handlers if isinstance(h, RichHandler)]:
			logger.removeHandler(existing)
		logger.addHandler(handler)
		logger.setLevel(level)


def stream_is_terminal(stream: TextIO) -> bool:
	"""Whether *stream* should receive colors in auto mode.

	Honours the ``NO_COLOR`` convention.
	"""
	if os.environ.get("NO_COLOR"):
		return False
	isatty = getattr(stream, "isatty", None)
	return bool(isatty and isatty())
