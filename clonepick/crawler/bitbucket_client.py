"""Bitbucket Server API client for clone URL discovery."""

import logging

import httpx
from pydantic import TypeAdapter

from ..errors import MissingCloneLink
from .models import BitbucketRepo, CloneUrl, Page, Project
from .transport import build_client, decode, get

logger = logging.getLogger(__name__)

USER_PROJECTS_PATH = "/rest/api/1.0/projects"

_PROJECT_PAGE = TypeAdapter(Page[Project])
_REPO_PAGE = TypeAdapter(Page[BitbucketRepo])


def page_url(base_url: str, start: int) -> str:
    """Build the request URL for the page beginning at ``start``.

    Always derived from the unparameterized ``base_url`` so that ``start``
    never accumulates across iterations.
    """
    return str(httpx.URL(base_url).copy_set_param("start", start))


def clone_url_for(repo: BitbucketRepo) -> str | None:
    """Pick the ssh clone link of ``repo``.

    Repos without any clone links yield ``None``. Repos that list clone
    links but none named ``ssh`` raise :class:`MissingCloneLink`.
    """
    if repo.links is None or repo.links.clone is None:
        return None
    href = repo.ssh_link()
    if not href:
        raise MissingCloneLink(repo.id)
    return href


class BitbucketClient:
    """Client for a Bitbucket Server REST API."""

    def __init__(
        self,
        token: str,
        projects_url: str,
        client: httpx.Client | None = None,
    ):
        self.projects_url = projects_url.rstrip("/")
        self.client = client or build_client(token)

    def close(self) -> None:
        self.client.close()

    def _get_all(self, url: str, adapter: TypeAdapter) -> list:
        """Read every page of a paged endpoint, in order."""
        values: list = []
        request_url = url

        while True:
            response = get(self.client, request_url)
            page = decode(response, request_url, adapter)
            values.extend(page.values)

            if page.is_last_page:
                break
            if page.next_page_start is None:
                logger.warning(
                    "%s claims more pages but sent no nextPageStart", request_url
                )
                break
            request_url = page_url(url, page.next_page_start)

        return values

    def list_all_projects(self, url: str | None = None) -> list[Project]:
        """List every project visible to the token."""
        return self._get_all(url or self.projects_url, _PROJECT_PAGE)

    def list_all_repos(self, project_url: str) -> list[BitbucketRepo]:
        """List every repository of the project at ``project_url``."""
        return self._get_all(f"{project_url}/repos", _REPO_PAGE)

    def fetch_clone_urls(self) -> list[CloneUrl]:
        """Collect the SSH clone URL of every repo in every project."""
        clone_urls: list[CloneUrl] = []

        for project in self.list_all_projects():
            project_url = f"{self.projects_url}/{project.key}"
            for repo in self.list_all_repos(project_url):
                try:
                    href = clone_url_for(repo)
                except MissingCloneLink as e:
                    logger.warning("Skipping %s (%s): %s", repo.name, project.key, e)
                    continue
                if href:
                    clone_urls.append(CloneUrl(href))

        return clone_urls
