"""Numbered console prompts."""

from __future__ import annotations

from typing import Callable, Sequence


InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


class Prompter:
    def __init__(self, input_fn: InputFn = input, output_fn: OutputFn = print) -> None:
        self._input = input_fn
        self._output = output_fn

    def show(self, text: str) -> None:
        self._output(text)

    def ask(self, text: str) -> str:
        return self._input(text)

    def choose(self, title: str, labels: Sequence[str]) -> int:
        """Show ``labels`` as a 1-based list and return the 0-based pick."""
        if not labels:
            raise ValueError("choose() needs at least one option")

        self.show(title)
        for index, label in enumerate(labels, start=1):
            self.show(f"{index}. {label}")

        while True:
            answer = self.ask(f"Select [1-{len(labels)}]: ").strip()
            if answer.isascii() and answer.isdigit() and 1 <= int(answer) <= len(labels):
                return int(answer) - 1
            self.show(f"Please enter a number between 1 and {len(labels)}.")
