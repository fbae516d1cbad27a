"""Remote clients and clone handling."""

from .models import CloneUrl
from .bitbucket_client import BitbucketClient
from .github_client import GitHubClient
from .repo_manager import RepoManager

__all__ = ["CloneUrl", "BitbucketClient", "GitHubClient", "RepoManager"]
