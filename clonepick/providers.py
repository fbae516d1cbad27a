"""Configured providers and the cache-or-fetch collection policy."""

import logging
from dataclasses import dataclass
from urllib.parse import urlsplit

import httpx

from .config import ProviderConfig, ProviderKind
from .crawler.bitbucket_client import USER_PROJECTS_PATH, BitbucketClient
from .crawler.github_client import USER_ORGS_PATH, GitHubClient
from .crawler.models import CloneUrl
from .errors import InvalidConfiguration
from .store.cache import CacheStore

logger = logging.getLogger(__name__)

RemoteClient = GitHubClient | BitbucketClient


@dataclass
class Provider:
    """A remote client bound to a cache name and a display symbol."""
    kind: ProviderKind
    name: str
    client: RemoteClient
    symbol: str = ""

    def fetch(self) -> list[CloneUrl]:
        """Ask the remote API for all clone URLs, bypassing the cache."""
        return self.client.fetch_clone_urls()

    def collect_clone_urls(self, cache: CacheStore) -> list[CloneUrl]:
        """Return cached URLs, or fetch and cache them when the cache is empty.

        A non-empty cache file is trusted as is; there is no expiry.
        """
        if not cache.is_empty(self.name):
            logger.debug("Using cached clone urls for %s", self.name)
            return cache.load(self.name, self.symbol)

        logger.debug("Cache for %s is empty, fetching from remote", self.name)
        clone_urls = self.fetch()
        cache.save(self.name, clone_urls)
        return [clone_url.with_symbol(self.symbol) for clone_url in clone_urls]

    def close(self) -> None:
        self.client.close()


def build_provider(
    config: ProviderConfig,
    name: str | None = None,
    http_client: httpx.Client | None = None,
) -> Provider:
    """Create the provider for one config entry."""
    name = name or config.name or config.kind.value
    if config.kind is ProviderKind.GITHUB:
        client = GitHubClient(
            token=config.token,
            orgs_url=f"{config.base_url}{USER_ORGS_PATH}",
            client=http_client,
        )
    elif config.kind is ProviderKind.BITBUCKET:
        client = BitbucketClient(
            token=config.token,
            projects_url=f"{config.base_url}{USER_PROJECTS_PATH}",
            client=http_client,
        )
    else:
        raise InvalidConfiguration(f"Unsupported provider kind: {config.kind}")

    return Provider(kind=config.kind, name=name, client=client, symbol=config.symbol or "")


def build_providers(configs: list[ProviderConfig]) -> list[Provider]:
    """Create providers in config order, giving each a unique cache name."""
    if not configs:
        raise InvalidConfiguration("No providers configured")

    names = provider_names(configs)
    return [build_provider(config, name) for config, name in zip(configs, names)]


def provider_names(configs: list[ProviderConfig]) -> list[str]:
    """Pick a cache name per provider.

    Explicit names win. Otherwise the kind is used, and a repeated kind is
    suffixed with the host of its base url.
    """
    names: list[str] = []
    for config in configs:
        name = config.name or config.kind.value
        if not config.name and name in names:
            host = urlsplit(config.base_url).hostname or "instance"
            name = f"{name}-{host}"
        if name in names:
            raise InvalidConfiguration(
                f"Two providers share the name '{name}'. Set a unique 'name' for each."
            )
        names.append(name)
    return names


def collect_all(providers: list[Provider], cache: CacheStore) -> list[CloneUrl]:
    """Concatenate the clone URLs of every provider, in config order.

    The first failing provider aborts the whole collection.
    """
    clone_urls: list[CloneUrl] = []
    for provider in providers:
        urls = provider.collect_clone_urls(cache)
        logger.debug("%s contributed %d clone urls", provider.name, len(urls))
        clone_urls.extend(urls)
    return clone_urls
