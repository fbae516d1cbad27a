"""Shared test fixtures."""

import json

import httpx
import pytest

from clonepick.crawler.transport import build_client
from clonepick.store.cache import CacheStore


class FakeServer:
    """Serves canned responses keyed by exact request URL."""

    def __init__(self):
        self.routes: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []

    def add(self, url, body=None, status=200, headers=None, raw=None):
        content = raw if raw is not None else json.dumps(body)
        self.routes[url] = {
            "status_code": status,
            "headers": {"content-type": "application/json", **(headers or {})},
            "content": content.encode(),
        }

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, text="not found")
        return httpx.Response(**route)

    def client(self, token="s3cr3t") -> httpx.Client:
        return build_client(token, transport=httpx.MockTransport(self.handle))

    @property
    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]


@pytest.fixture
def server():
    return FakeServer()


@pytest.fixture
def cache(tmp_path):
    return CacheStore(tmp_path / "cache")


@pytest.fixture
def bitbucket_page():
    """Factory for one page of a Bitbucket paged response."""
    def make(values, is_last=True, next_start=None):
        page = {"size": len(values), "values": values, "isLastPage": is_last}
        if next_start is not None:
            page["nextPageStart"] = next_start
        return page
    return make


@pytest.fixture
def bitbucket_repo():
    """Factory for a Bitbucket repo; ``clone_links`` is a list of (name, href) or None."""
    def make(repo_id, name, clone_links):
        repo = {"id": repo_id, "name": name}
        if clone_links is not None:
            repo["links"] = {
                "clone": [{"href": href, "name": link_name} for link_name, href in clone_links],
                "self": [{"href": f"https://bitbucket.acme.org/projects/P/repos/{name}/browse"}],
            }
        return repo
    return make
