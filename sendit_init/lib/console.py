from __future__ import annotations

from typing import Optional

from rich.console import Console

console = Console(highlight=False)


def parse_yes(answer: Optional[str]) -> bool:
    """Only a bare `y`/`Y` counts as yes."""
    return answer in {"y", "Y"}


def ask_yes_no(question: str) -> bool:
    try:
        answer = console.input(question)
    except EOFError:
        console.print()
        return False
    return parse_yes(answer)
