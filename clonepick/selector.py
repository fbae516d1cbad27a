"""Interactive selection of clone URLs."""

import re
import shutil
import subprocess

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from .crawler.models import CloneUrl
from .errors import ClonepickError

console = Console(stderr=True)

SELECTION_RE = re.compile(r"^\s*\d+(-\d+)?([,\s]+\d+(-\d+)?)*\s*$")


def format_line(clone_url: CloneUrl) -> str:
    """Render a clone URL as ``"<symbol> | <url>"``, or the bare URL."""
    if clone_url.symbol:
        return f"{clone_url.symbol} | {clone_url.url}"
    return clone_url.url


def remove_symbol_prefix(line: str) -> str:
    """Inverse of :func:`format_line`."""
    index = line.find("|")
    if index == -1:
        return line
    return line[index + 2:]


def select(lines: list[str]) -> list[str]:
    """Let the user pick any number of ``lines``."""
    if not lines:
        return []
    if shutil.which("fzf"):
        return select_with_fzf(lines)
    return select_with_prompt(lines)


def select_with_fzf(lines: list[str]) -> list[str]:
    result = subprocess.run(
        ["fzf", "--multi", "--exact"],
        input="\n".join(lines),
        stdout=subprocess.PIPE,
        text=True,
    )
    # 1: no match, 130: aborted by the user
    if result.returncode in (1, 130):
        return []
    if result.returncode != 0:
        raise ClonepickError(f"fzf exited with status {result.returncode}")
    return [line for line in result.stdout.splitlines() if line]


def parse_selection(answer: str, count: int) -> list[int] | None:
    """Turn ``"1, 3-5"`` into zero-based indexes, or ``None`` if it is not a selection."""
    if not SELECTION_RE.match(answer):
        return None

    indexes: list[int] = []
    for part in re.split(r"[,\s]+", answer.strip()):
        if "-" in part:
            first, last = (int(p) for p in part.split("-"))
        else:
            first = last = int(part)
        for number in range(first, last + 1):
            if 1 <= number <= count and number - 1 not in indexes:
                indexes.append(number - 1)
    return indexes


def select_with_prompt(lines: list[str]) -> list[str]:
    """Fallback selector: a numbered table, narrowed by filter text."""
    candidates = lines
    while True:
        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right")
        table.add_column("Repository")
        for number, line in enumerate(candidates, start=1):
            table.add_row(str(number), line)
        console.print(table)

        answer = Prompt.ask(
            "Numbers to clone (e.g. 1,3-5), text to filter, or empty to quit",
            console=console,
            default="",
            show_default=False,
        )
        if not answer.strip():
            return []

        indexes = parse_selection(answer, len(candidates))
        if indexes == []:
            console.print(
                f"[yellow]No rows match '{answer.strip()}', pick numbers between 1 and {len(candidates)}[/yellow]"
            )
            continue
        if indexes is not None:
            return [candidates[i] for i in indexes]

        needle = answer.strip().lower()
        filtered = [line for line in lines if needle in line.lower()]
        if not filtered:
            console.print(f"[yellow]Nothing matches '{answer.strip()}'[/yellow]")
            continue
        candidates = filtered
