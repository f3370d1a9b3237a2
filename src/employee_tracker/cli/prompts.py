"""Thin wrappers over questionary prompts.

Each helper maps questionary's "``None`` on Ctrl+C / Esc" convention to
:class:`~employee_tracker.exceptions.PromptCancelledError`, and refuses
to show a selection with nothing to choose from.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from employee_tracker.exceptions import (
    MissingDependencyError,
    NothingToSelectError,
    PromptCancelledError,
)

T = TypeVar("T")

Validator = Callable[[str], "bool | str"]


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise MissingDependencyError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def ask_text(message: str, *, validate: Validator | None = None) -> str:
    """Prompt for free text.

    Raises
    ------
    PromptCancelledError
        If the user presses Ctrl+C or Esc.
    """
    questionary = _import_questionary()
    kwargs: dict[str, Any] = {}
    if validate is not None:
        kwargs["validate"] = validate
    answer: str | None = questionary.text(message, **kwargs).ask()
    if answer is None:
        raise PromptCancelledError("Cancelled.")
    return answer


def ask_select(
    message: str,
    choices: Sequence[tuple[str, T]],
    *,
    empty_message: str = "Nothing to choose from.",
    empty_hint: str | None = None,
) -> T:
    """Prompt for one of *choices*, given as ``(title, value)`` pairs.

    Raises
    ------
    NothingToSelectError
        If *choices* is empty. The prompt is not shown.
    PromptCancelledError
        If the user presses Ctrl+C or Esc.
    """
    if not choices:
        raise NothingToSelectError(empty_message, hint=empty_hint)

    questionary = _import_questionary()
    selected: T | None = questionary.select(
        message,
        choices=[questionary.Choice(title=title, value=value) for title, value in choices],
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()  # Returns None on Ctrl+C / Esc

    if selected is None:
        raise PromptCancelledError("Cancelled.")
    return selected


def ask_menu(message: str, choices: Sequence[str]) -> str:
    """Prompt for a main-menu entry.

    Raises
    ------
    KeyboardInterrupt
        If the user presses Ctrl+C or Esc; cancelling the main menu
        ends the session.
    """
    questionary = _import_questionary()
    choice: str | None = questionary.select(
        message,
        choices=list(choices),
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()
    if choice is None:
        raise KeyboardInterrupt
    return choice
