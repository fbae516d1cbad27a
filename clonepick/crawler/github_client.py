"""GitHub API client for clone URL discovery."""

import logging
import re

import httpx
from pydantic import TypeAdapter

from .models import CloneUrl, GithubRepo, Organization
from .transport import build_client, decode, get

logger = logging.getLogger(__name__)

USER_ORGS_PATH = "/api/v3/user/orgs"

NEXT_LINK_RE = re.compile(r'(http\S*\d+)>;\s+(rel="next")', re.IGNORECASE)

_ORGANIZATIONS = TypeAdapter(list[Organization])
_REPOS = TypeAdapter(list[GithubRepo])


def parse_next_link(header_value: str | None) -> str | None:
    """Extract the ``rel="next"`` URL from a ``Link`` header value.

    >>> parse_next_link('<https://x/repos?page=2>; rel="next"')
    'https://x/repos?page=2'
    """
    if not header_value:
        return None
    match = NEXT_LINK_RE.search(header_value)
    if match is None:
        return None
    return match.group(1)


class GitHubClient:
    """Client for a GitHub (Enterprise) REST API."""

    def __init__(
        self,
        token: str,
        orgs_url: str,
        client: httpx.Client | None = None,
    ):
        self.orgs_url = orgs_url
        self.client = client or build_client(token)

    def close(self) -> None:
        self.client.close()

    def list_organizations(self, url: str | None = None) -> list[Organization]:
        """List the organizations of the authenticated user (unpaginated)."""
        url = url or self.orgs_url
        response = get(self.client, url)
        return decode(response, url, _ORGANIZATIONS)

    def list_repos(self, url: str) -> list[GithubRepo]:
        """Follow ``Link`` headers until every page of ``url`` has been read."""
        repos: list[GithubRepo] = []
        request_url: str | None = url

        while request_url:
            response = get(self.client, request_url)
            repos.extend(decode(response, request_url, _REPOS))

            next_url = parse_next_link(response.headers.get("Link"))
            if next_url == request_url:
                logger.warning("Link header of %s points back to itself", request_url)
                break
            request_url = next_url

        return repos

    def fetch_clone_urls(self) -> list[CloneUrl]:
        """Collect the SSH clone URL of every repo in every organization."""
        clone_urls: list[CloneUrl] = []

        for org in self.list_organizations():
            repos = self.list_repos(org.repos_url)
            logger.debug("%s: %d repositories", org.repos_url, len(repos))
            clone_urls.extend(CloneUrl(repo.ssh_url) for repo in repos if repo.ssh_url)

        return clone_urls
