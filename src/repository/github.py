"""GitHub API client for tag and commit lookups.

Provides a lightweight REST client used to normalize revisions of Github
tuples: commit lookup by ref, tag-ref lookup, tag listing and a
contents-at-path check for nested modules.
"""
from __future__ import annotations

import logging
import posixpath
from typing import List, Optional, Tuple
from urllib.parse import quote

from constants import Constants
from common.http_client import HttpError, NotFoundError, get_json
from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)

_RATE_LIMIT_MARKER = "API rate limit exceeded"

RATE_LIMIT_GUIDANCE = f"""Github API rate limit exceeded. Please either:
- set {Constants.ENV_GITHUB_CREDENTIALS} environment variable to your Github "username:personal_access_token"
  to let {Constants.PROG} call Github API using basic authentication.
  To create a new token, navigate to https://github.com/settings/tokens/new
  (leave all checkboxes unchecked, {Constants.PROG} doesn't need any access to your account)
- unset {Constants.ENV_GITHUB_TAGS} or pass "--no-ghtags" to disable Github tag lookups
- set {Constants.ENV_OFFLINE}=1 or pass "--offline" to disable network access"""


class RateLimitError(HttpError):
    """Github refused the request because the API rate limit was exceeded."""

    def __init__(self, err: HttpError):
        super().__init__(err.url, err.status, err.body)
        self.args = (RATE_LIMIT_GUIDANCE,)

    def __str__(self) -> str:
        return RATE_LIMIT_GUIDANCE


class GitHubClient:
    """Lightweight REST client for GitHub API operations.

    Supports optional basic authentication with a username and personal
    access token.
    """

    def __init__(
        self,
        username: Optional[str] = None,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
    ):
        self.base_url = base_url or Constants.GITHUB_API_BASE
        self.username = username
        self.token = token

    def _auth(self) -> Optional[Tuple[str, str]]:
        if self.username and self.token:
            return (self.username, self.token)
        return None

    def _repo_url(self, account: str, project: str) -> str:
        return f"{self.base_url}/repos/{quote(account, safe='')}/{quote(project, safe='')}"

    def _get_json(self, url: str):
        try:
            return get_json(url, context="github", auth=self._auth())
        except NotFoundError:
            raise
        except HttpError as err:
            if _RATE_LIMIT_MARKER in err.body:
                raise RateLimitError(err) from err
            raise

    def get_commit(self, account: str, project: str, ref: str) -> str:
        """Return the full commit SHA that ref points to.

        Raises:
            HttpError: When the commit cannot be fetched.
        """
        url = f"{self._repo_url(account, project)}/commits/{ref}"
        data = self._get_json(url)
        sha = data.get("sha", "") if isinstance(data, dict) else ""
        if is_debug_enabled(logger):
            logger.debug(
                "Github commit lookup",
                extra=extra_context(
                    event="lookup",
                    component="github",
                    action="get_commit",
                    target=f"{account}/{project}@{ref}",
                    outcome=sha or "empty",
                )
            )
        return sha

    def has_tag(self, account: str, project: str, tag: str) -> bool:
        """Return True when refs/tags/<tag> exists."""
        url = f"{self._repo_url(account, project)}/git/refs/tags/{tag}"
        try:
            data = self._get_json(url)
        except NotFoundError:
            return False
        # An incomplete tag name makes the API return a list of matching refs
        return isinstance(data, dict)

    def list_tags(self, account: str, project: str) -> List[str]:
        """Return all tag refs (refs/tags/...), oldest first."""
        url = f"{self._repo_url(account, project)}/git/refs/tags"
        try:
            data = self._get_json(url)
        except NotFoundError:
            return []
        if not isinstance(data, list):
            return []
        return [r.get("ref", "") for r in data if isinstance(r, dict)]

    def lookup_tag(self, account: str, project: str, path: str, tag: str) -> Optional[str]:
        """Find the tag a nested module at path is released under.

        Tries "<path>/<tag>" first, then the bare tag, then the most recently
        created tag whose name ends with "<path>/<tag>".

        Returns:
            The tag name, or None when no candidate exists.
        """
        prefixed = f"{path}/{tag}"
        if self.has_tag(account, project, prefixed):
            return prefixed
        if self.has_tag(account, project, tag):
            return tag

        suffix = posixpath.join(path, tag)
        # Github returns tags sorted by creation time, earliest first
        for ref in reversed(self.list_tags(account, project)):
            if ref.endswith(suffix):
                return ref[len("refs/tags/"):] if ref.startswith("refs/tags/") else ref
        return None

    def has_contents_at_path(self, account: str, project: str, path: str, ref: str) -> bool:
        """Return True when the repository has contents at path for ref."""
        url = f"{self._repo_url(account, project)}/contents/{path}?ref={quote(ref, safe='')}"
        try:
            self._get_json(url)
        except NotFoundError:
            return False
        return True
