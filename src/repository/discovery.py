"""Remote mirror discovery through Go's ``?go-get=1`` protocol.

Fetches the HTML page served for an import path and extracts the git
repository from its ``<meta name="go-import">`` tags.
"""
from __future__ import annotations

import html.parser
import logging
import re
from typing import Optional

from common.http_client import HttpError, get
from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^https?://")
_GIT_SUFFIX_RE = re.compile(r"\.git$")


class GoImportParser(html.parser.HTMLParser):
    """Collect the git repository of the longest go-import prefix matching a module."""

    def __init__(self, target_module: str):
        super().__init__()
        self.target_module = target_module
        self.prefix: Optional[str] = None
        self.repo_url: Optional[str] = None

    def handle_starttag(self, tag, attrs):
        if tag != 'meta':
            return
        attrs_dict = dict(attrs)
        if attrs_dict.get('name') != 'go-import':
            return
        # Format: "module_prefix vcs repo_url"
        parts = (attrs_dict.get('content') or '').split()
        if len(parts) != 3 or parts[1] != 'git':
            return
        prefix, _, repo_url = parts
        if self.target_module == prefix or self.target_module.startswith(prefix + '/'):
            if self.prefix is None or len(prefix) > len(self.prefix):
                self.prefix = prefix
                self.repo_url = repo_url


def discovery_url(path: str) -> str:
    return f"https://{path}?go-get=1"


def parse_go_import(path: str, page: str) -> Optional[str]:
    """Return the repository path a go-import page declares for path.

    The scheme and ``.git`` suffix are stripped from the repository URL and
    any part of path below the declared import prefix is appended.
    """
    parser = GoImportParser(path)
    parser.feed(page)
    parser.close()
    if parser.repo_url is None:
        return None
    repo = _GIT_SUFFIX_RE.sub("", _SCHEME_RE.sub("", parser.repo_url)).rstrip("/")
    rest = path[len(parser.prefix):]
    return f"{repo}{rest}"


def discover(path: str) -> Optional[str]:
    """Look up the repository hosting an import path.

    Returns:
        The discovered repository path (e.g. ``github.com/owner/repo``), or
        None when the page is missing, unreachable or declares no git import.
    """
    url = discovery_url(path)
    try:
        body = get(url, context="discovery")
    except HttpError as exc:
        logger.warning("Mirror discovery for %s failed: %s", path, exc)
        return None

    found = parse_go_import(path, body.decode("utf-8", errors="ignore"))
    if is_debug_enabled(logger):
        logger.debug(
            "Mirror discovery",
            extra=extra_context(
                event="discovery",
                component="discovery",
                action="go_import",
                target=path,
                outcome=found or "not_found",
            )
        )
    if found is None:
        logger.warning("No go-import meta tag found for %s", path)
    return found
