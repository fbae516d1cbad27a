"""Main entry point for clonepick."""

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .config import Paths, load_config
from .crawler.models import CloneUrl
from .crawler.repo_manager import RepoManager
from .errors import ClonepickError
from .providers import Provider, build_providers, collect_all
from .selector import format_line, remove_symbol_prefix, select
from .store.cache import CacheStore

console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def run_collect(providers: list[Provider], cache: CacheStore, refresh: bool = False) -> list[CloneUrl]:
    """Gather clone URLs of all providers, optionally dropping caches first."""
    if refresh:
        for provider in providers:
            if cache.clear(provider.name):
                console.print(f"[blue]Cleared cache for {provider.name}[/blue]")

    with console.status("Collecting clone urls..."):
        clone_urls = collect_all(providers, cache)

    console.print(f"[bold]Found {len(clone_urls)} repositories[/bold]")
    return clone_urls


def run_clone(lines: list[str], dest: Path) -> int:
    """Clone the selected lines; returns the number of failures."""
    urls = [remove_symbol_prefix(line) for line in lines]
    manager = RepoManager(base_path=dest)
    results = manager.clone_repos(urls)
    return sum(1 for r in results if not r.success)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="clonepick - pick and clone repositories from GitHub and Bitbucket servers"
    )
    parser.add_argument(
        "--config", "-c",
        help="Path to configuration file (default: <config dir>/config.yaml)",
    )
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="Drop cached clone urls and fetch them again",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print all clone urls instead of selecting",
    )
    parser.add_argument(
        "--dest", "-d",
        default=".",
        help="Directory to clone into (default: current directory)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log HTTP requests and cache decisions",
    )

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    paths = Paths.default()
    config_path = Path(args.config) if args.config else paths.config_file
    providers: list[Provider] = []

    try:
        providers = build_providers(load_config(config_path))
        clone_urls = run_collect(providers, CacheStore(paths.cache_dir), refresh=args.refresh)

        lines = [format_line(clone_url) for clone_url in clone_urls]
        if args.list:
            for line in lines:
                print(line)
            return 0

        selected = select(lines)
        if not selected:
            return 0
        return 1 if run_clone(selected, Path(args.dest)) else 0

    except ClonepickError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1
    finally:
        for provider in providers:
            provider.close()


if __name__ == "__main__":
    raise SystemExit(main())
