"""Prompt layer: the interactive primitives commands are written against."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Protocol, TypeVar

T = TypeVar("T")

Validator = Callable[[str], "str | None"]


class Cancelled(Exception):
    """The user backed out of a prompt; the current command stops without writing."""


@dataclass(frozen=True)
class Option(Generic[T]):
    value: T
    label: str
    hint: str = ""


class Prompter(Protocol):
    def select(self, message: str, options: list[Option[T]], default: T | None = None) -> T: ...
    def multiselect(
        self, message: str, options: list[Option[T]], initial: list[T] | None = None
    ) -> list[T]: ...
    def text(
        self, message: str, default: str = "", validate: Validator | None = None
    ) -> str: ...
    def confirm(self, message: str, default: bool = True) -> bool: ...
    def note(self, message: str) -> None: ...
    def warn(self, message: str) -> None: ...


class ConsolePrompter:
    """Prompter over input()/print(). Typing q, Ctrl-C or EOF cancels."""

    CANCEL_WORDS = ("q", "quit")

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        print_fn: Callable[[str], None] = print,
    ) -> None:
        self._input = input_fn
        self._print = print_fn

    def select(self, message: str, options: list[Option[T]], default: T | None = None) -> T:
        self._print(message)
        for i, option in enumerate(options, start=1):
            marker = "*" if option.value == default else " "
            self._print(f" {marker}{i:>2}) {_label(option)}")
        while True:
            answer = self._ask("Choose a number: ")
            if not answer and default is not None:
                return default
            if answer.isdigit() and 1 <= int(answer) <= len(options):
                return options[int(answer) - 1].value
            self._print(f"  Enter a number between 1 and {len(options)} (q to cancel).")

    def multiselect(
        self, message: str, options: list[Option[T]], initial: list[T] | None = None
    ) -> list[T]:
        chosen = list(initial or [])
        self._print(message)
        for i, option in enumerate(options, start=1):
            box = "[x]" if option.value in chosen else "[ ]"
            self._print(f"  {i:>2}) {box} {_label(option)}")
        self._print("  Numbers separated by commas; empty keeps [x], '-' selects none.")
        while True:
            answer = self._ask("Select: ")
            if not answer:
                return [o.value for o in options if o.value in chosen]
            if answer == "-":
                return []
            picked = _parse_numbers(answer, len(options))
            if picked is not None:
                return [options[i - 1].value for i in picked]
            self._print(f"  Use numbers between 1 and {len(options)}, e.g. 1,3.")

    def text(self, message: str, default: str = "", validate: Validator | None = None) -> str:
        suffix = f" [{default}]" if default else ""
        while True:
            answer = self._ask(f"{message}{suffix} ") or default
            error = validate(answer) if validate is not None else None
            if error is None:
                return answer
            self._print(f"  {error}")

    def confirm(self, message: str, default: bool = True) -> bool:
        hint = "Y/n" if default else "y/N"
        while True:
            answer = self._ask(f"{message} ({hint}) ").lower()
            if not answer:
                return default
            if answer in ("y", "yes"):
                return True
            if answer in ("n", "no"):
                return False

    def note(self, message: str) -> None:
        self._print(message)

    def warn(self, message: str) -> None:
        self._print(f"Warning: {message}")

    def _ask(self, prompt: str) -> str:
        try:
            answer = self._input(prompt).strip()
        except (EOFError, KeyboardInterrupt) as e:
            raise Cancelled() from e
        if answer.lower() in self.CANCEL_WORDS:
            raise Cancelled()
        return answer


def _label(option: Option) -> str:
    return f"{option.label} - {option.hint}" if option.hint else option.label


def _parse_numbers(answer: str, upper: int) -> list[int] | None:
    picked: list[int] = []
    for part in answer.split(","):
        part = part.strip()
        if not part:
            continue
        if not part.isdigit() or not 1 <= int(part) <= upper:
            return None
        if int(part) not in picked:
            picked.append(int(part))
    return picked
