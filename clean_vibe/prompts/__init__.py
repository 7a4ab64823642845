"""Interactive Prompts Package"""

from abc import ABC, abstractmethod
from typing import Any, Sequence

from clean_vibe.output import bold, dim, info

# (label shown to the user, value returned when chosen)
Choice = tuple[str, Any]


class PromptCancelled(Exception):
    """Raised when the user quits a prompt (q, Ctrl-C, EOF)."""
    pass


class Prompter(ABC):
    """Asks the user questions. Flows depend on this, never on input() directly."""

    @abstractmethod
    def choose_one(self, message: str, options: Sequence[Choice], default: Any = None) -> Any:
        pass

    @abstractmethod
    def confirm(self, message: str, default: bool = True) -> bool:
        pass

    @abstractmethod
    def read_text(self, message: str, default: str = "") -> str:
        pass


class TerminalPrompter(Prompter):
    """Prompter reading answers from stdin."""

    def _ask(self, prompt: str) -> str:
        try:
            return input(prompt).strip()
        except (KeyboardInterrupt, EOFError):
            print()
            raise PromptCancelled()

    def choose_one(self, message: str, options: Sequence[Choice], default: Any = None) -> Any:
        if not options:
            raise ValueError("choose_one() needs at least one option")

        default_idx = next((i for i, (_, value) in enumerate(options) if value == default), None)

        print(f"\n{bold(message)}\n")
        for i, (text, _) in enumerate(options, 1):
            marker = dim(' (default)') if default_idx == i - 1 else ''
            print(f"  {info(f'[{i}]')} {text}{marker}")
        print()

        hint = f"Select [1-{len(options)}]"
        if default_idx is not None:
            hint += " (Enter for default)"
        while True:
            choice = self._ask(f"{hint} or (q)uit: ").lower()
            if choice == 'q':
                raise PromptCancelled()
            if choice == '' and default_idx is not None:
                return options[default_idx][1]
            if choice.isdigit() and 1 <= int(choice) <= len(options):
                return options[int(choice) - 1][1]
            print(f"Enter 1-{len(options)} or q")

    def confirm(self, message: str, default: bool = True) -> bool:
        suffix = '[Y/n]' if default else '[y/N]'
        while True:
            answer = self._ask(f"{message} {suffix}: ").lower()
            if answer == '':
                return default
            if answer in ('y', 'yes'):
                return True
            if answer in ('n', 'no'):
                return False
            print("Please answer y or n")

    def read_text(self, message: str, default: str = "") -> str:
        prompt = f"{message} {dim(f'({default})')}: " if default else f"{message}: "
        return self._ask(prompt) or default


__all__ = [
    "Choice",
    "Prompter",
    "PromptCancelled",
    "TerminalPrompter",
]
