"""Interactive prompt helpers built on InquirerPy."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Iterator, Protocol, Sequence

from InquirerPy import inquirer
from InquirerPy.base.control import Choice
from prompt_toolkit.application import create_app_session
from prompt_toolkit.output import create_output

from .exceptions import UserAbort, ValidationError


class Picker(Protocol):
    def present(self, message: str, items: Sequence[str], default_index: int = 0) -> int | None:
        """Return the chosen index, or ``None`` when the user backs out."""
        ...


class Confirmer(Protocol):
    def confirm(self, message: str, default: bool = True) -> bool:
        ...


def _ensure_tty() -> None:
    if not sys.stdin.isatty():
        raise ValidationError(
            "Interactive mode requires a TTY. Provide the missing arguments to run non-interactively."
        )


@contextmanager
def _stderr_session() -> Iterator[None]:
    """Render prompts on stderr; stdout is captured by the shell wrapper."""
    with create_app_session(output=create_output(stdout=sys.stderr)):
        yield


class InquirerPicker:
    """Fuzzy picker; a non-zero ``default_index`` switches to a plain list."""

    def present(self, message: str, items: Sequence[str], default_index: int = 0) -> int | None:
        _ensure_tty()
        choices = [Choice(value=index, name=item) for index, item in enumerate(items)]
        try:
            with _stderr_session():
                if default_index:
                    prompt = inquirer.select(
                        message=message,
                        choices=choices,
                        default=default_index,
                        mandatory=False,
                    )
                else:
                    prompt = inquirer.fuzzy(message=message, choices=choices, mandatory=False)
                selection = prompt.execute()
        except KeyboardInterrupt:
            return None
        return selection if isinstance(selection, int) else None


class InquirerConfirmer:
    def confirm(self, message: str, default: bool = True) -> bool:
        _ensure_tty()
        try:
            with _stderr_session():
                return bool(inquirer.confirm(message=message, default=default).execute())
        except KeyboardInterrupt as exc:
            raise UserAbort("User cancelled the prompt.") from exc


__all__ = ["Picker", "Confirmer", "InquirerPicker", "InquirerConfirmer"]
