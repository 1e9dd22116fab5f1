"""GitLab API client for commit lookups.

Provides a lightweight REST client that expands abbreviated revisions of
GitLab tuples into full commit ids, for gitlab.com and self-hosted sites.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional
from urllib.parse import quote

from constants import Constants
from common.http_client import get_json
from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)


class GitLabClient:
    """Lightweight REST client for GitLab API operations.

    Supports optional authentication via a personal access token.
    """

    def __init__(self, site: Optional[str] = None, token: Optional[str] = None):
        """Initialize GitLab client.

        Args:
            site: Base site URL (defaults to Constants.GITLAB_DEFAULT_SITE)
            token: GitLab personal access token
        """
        self.site = (site or Constants.GITLAB_DEFAULT_SITE).rstrip("/")
        self.base_url = f"{self.site}{Constants.GITLAB_API_PATH}"
        self.token = token

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers including authorization if token is available."""
        headers = {}
        if self.token:
            headers['Private-Token'] = self.token
        return headers

    def get_commit(self, account: str, project: str, ref: str) -> str:
        """Return the full commit id for ref.

        Args:
            account: Project owner/namespace
            project: Project name
            ref: Tag, branch or abbreviated commit hash

        Returns:
            The full commit id, or an empty string if the response lacks one

        Raises:
            HttpError: When the commit cannot be fetched.
        """
        project_path = quote(f"{account}/{project}", safe='')
        url = f"{self.base_url}/projects/{project_path}/repository/commits/{quote(ref, safe='')}"

        data = get_json(url, context="gitlab", headers=self._get_headers())
        commit_id = data.get("id", "") if isinstance(data, dict) else ""

        if is_debug_enabled(logger):
            logger.debug(
                "GitLab commit lookup",
                extra=extra_context(
                    event="lookup",
                    component="gitlab",
                    action="get_commit",
                    target=f"{self.site}/{account}/{project}@{ref}",
                    outcome=commit_id or "empty",
                )
            )
        return commit_id
