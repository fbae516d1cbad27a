"""Cloning selected repositories with the git command line."""

import subprocess
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

console = Console(stderr=True)


def folder_name_for_url(url: str) -> str:
    """Derive the checkout folder name from a clone URL.

    >>> folder_name_for_url("git@git.acme.com:org/example.git")
    'example'
    """
    last = url.rstrip("/").replace(":", "/").rsplit("/", 1)[-1]
    return last.removesuffix(".git")


@dataclass
class ClonedRepo:
    """Outcome of cloning a single repository."""
    url: str
    local_path: Path
    success: bool
    error: str | None = None


class RepoManager:
    """Clones repositories below a destination directory."""

    def __init__(self, base_path: Path | str = "."):
        self.base_path = Path(base_path)

    def get_repo_path(self, url: str) -> Path:
        return self.base_path / folder_name_for_url(url)

    def clone_repo(self, url: str) -> ClonedRepo:
        """Clone a single repository."""
        local_path = self.get_repo_path(url)

        if (local_path / ".git").exists():
            return ClonedRepo(url=url, local_path=local_path, success=True)

        self.base_path.mkdir(parents=True, exist_ok=True)

        try:
            result = subprocess.run(
                ["git", "clone", url, str(local_path)],
                capture_output=True,
                text=True,
            )
        except OSError as e:
            return ClonedRepo(url=url, local_path=local_path, success=False, error=str(e))

        if result.returncode != 0:
            return ClonedRepo(
                url=url,
                local_path=local_path,
                success=False,
                error=result.stderr.strip(),
            )
        return ClonedRepo(url=url, local_path=local_path, success=True)

    def clone_repos(self, urls: list[str]) -> list[ClonedRepo]:
        """Clone repositories one after the other."""
        results = []

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total}"),
            console=console,
        ) as progress:
            task = progress.add_task("Cloning repos...", total=len(urls))

            for url in urls:
                result = self.clone_repo(url)
                results.append(result)

                if result.success:
                    progress.console.print(f"  [green]✓[/green] {result.local_path}")
                else:
                    progress.console.print(f"  [red]✗[/red] {url}: {result.error}")

                progress.advance(task)

        success_count = sum(1 for r in results if r.success)
        console.print(f"\n[bold]Cloned {success_count}/{len(urls)} repositories[/bold]")

        return results
