"""Shared data models for repository crawlers."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class CloneUrl:
    """A git remote address paired with its provider display symbol."""
    url: str
    symbol: str = ""

    def with_symbol(self, symbol: str) -> "CloneUrl":
        return CloneUrl(url=self.url, symbol=symbol)


# ---------------------------------------------------------------------------
# GitHub response shapes
# ---------------------------------------------------------------------------


class Organization(BaseModel):
    """Entry of ``GET /user/orgs``."""
    repos_url: str


class GithubRepo(BaseModel):
    """Entry of an organization's repository listing."""
    name: str
    full_name: str
    description: str | None = None
    ssh_url: str


# ---------------------------------------------------------------------------
# Bitbucket response shapes
# ---------------------------------------------------------------------------


class Link(BaseModel):
    href: str
    name: str | None = None


class LinkList(BaseModel):
    clone: list[Link] | None = None
    self_: list[Link] | None = Field(default=None, alias="self")


class Project(BaseModel):
    id: int
    key: str
    name: str
    links: LinkList | None = None


class BitbucketRepo(BaseModel):
    id: int
    name: str
    links: LinkList | None = None

    def ssh_link(self) -> str | None:
        """Return the href of the clone link named ``ssh``, if any."""
        if self.links is None or self.links.clone is None:
            return None
        for link in self.links.clone:
            if link.name == "ssh":
                return link.href
        return None


T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of a Bitbucket paged API response."""
    size: int
    values: list[T]
    is_last_page: bool = Field(alias="isLastPage")
    next_page_start: int | None = Field(default=None, alias="nextPageStart")
