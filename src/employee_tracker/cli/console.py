"""Console output for the tracker, with optional Rich support.

Menu output and result tables go to stdout through :data:`console`;
errors and hints go to stderr through :data:`err_console`.  Rich is
imported lazily so bootstrap paths (``--help``, ``--version``) keep
working even when it is not installed, in which case markup is stripped
and plain ``print`` is used.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from employee_tracker.exceptions import EmployeeTrackerError, MissingDependencyError

_MARKUP = re.compile(r"\[/?[a-z][a-z ]*\]")


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``MissingDependencyError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise MissingDependencyError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = False) -> Any:
	"""Create a Rich console bound to the current stdout (or stderr)."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr)


def strip_markup(text: str) -> str:
	"""``"[green]Added Sales[/green]"`` → ``"Added Sales"``."""
	return _MARKUP.sub("", text)


class _ConsoleProxy:
	"""``print``-compatible proxy for one output stream.

	A Rich console is created per call so the proxy always writes to
	the stream that is current at print time.
	"""

	def __init__(self, *, stderr: bool = False) -> None:
		self.stderr = stderr

	def print(self, *objects: object) -> None:
		try:
			rich_console = get_rich_console(stderr=self.stderr)
		except MissingDependencyError:
			stream = sys.stderr if self.stderr else sys.stdout
			plain = [strip_markup(o) if isinstance(o, str) else o for o in objects]
			print(*plain, file=stream)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()
err_console = _ConsoleProxy(stderr=True)


def print_error(exc: EmployeeTrackerError) -> None:
	"""Render a tracker error and its optional hint on stderr."""
	err_console.print(f"[bold red]Error:[/bold red] {exc}")
	if exc.hint:
		err_console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
