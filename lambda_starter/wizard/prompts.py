"""Line-oriented prompt session.

Each question prints one prompt line followed by one numbered line per
option, the default marked with ``*``::

    How do you want to deploy? (enter for Java runtime)
    *1) Java runtime
     2) GraalVM Native Executable
    >

A blank answer picks the default, ``1``..``N`` picks that option and anything
else re-prompts.  Invalid input never leaves the session.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Optional, TypeVar

from rich.console import Console
from rich.markup import escape

from lambda_starter import utils
from lambda_starter.options import YesOrNo

T = TypeVar("T")

INPUT_PROMPT = "> "


class InvalidChoiceError(ValueError):
    """A response that is neither blank nor a number in range."""


class PromptSession:
    """Interactive question/answer session over a rich console.

    Args:
        console: Console to write prompts to.  Defaults to the shared console.
        reader: Callable that shows a prompt and returns one line of input.
            Defaults to ``console.input``.  ``EOFError`` raised by the reader
            propagates to the caller.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        reader: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.console = console or utils.console
        self._reader = reader or self.console.input

    def out(self, message: str) -> None:
        self.console.print(escape(message))

    def choose(
        self,
        prompt: str,
        options: Sequence[T],
        *,
        label: Callable[[T], str] = str,
        default: Optional[T] = None,
    ) -> T:
        """Ask the user to pick one of *options*.

        Args:
            prompt: Question line.
            options: Candidates, shown in the given order.
            label: Renders an option for display.
            default: Option picked on blank input; defaults to the first one.

        Raises:
            ValueError: If *options* is empty or *default* is not one of them.
        """
        if not options:
            raise ValueError(f"No options to choose from for: {prompt}")
        if default is None:
            default = options[0]
        if default not in options:
            raise ValueError(f"Default {default!r} is not one of the options for: {prompt}")
        default_index = list(options).index(default)

        self.out(prompt)
        for index, option in enumerate(options):
            marker = "*" if index == default_index else " "
            self.console.print(f"[blue]{marker}{index + 1})[/blue] {escape(label(option))}")

        while True:
            raw = self._reader(INPUT_PROMPT)
            try:
                index = _parse_choice(raw, len(options))
            except InvalidChoiceError as exc:
                self.out(str(exc))
                continue
            return default if index is None else options[index]

    def yes_or_no(self, prompt: str, default: YesOrNo = YesOrNo.YES) -> bool:
        answer = self.choose(
            prompt,
            list(YesOrNo),
            label=lambda value: value.description,
            default=default,
        )
        return answer is YesOrNo.YES


def _parse_choice(raw: str, count: int) -> Optional[int]:
    """Zero-based index for *raw*, or ``None`` for the default."""
    text = raw.strip()
    if not text:
        return None
    try:
        number = int(text)
    except ValueError:
        number = 0
    if not 1 <= number <= count:
        raise InvalidChoiceError(
            f"Invalid selection '{text}', enter a number between 1 and {count}"
        )
    return number - 1
