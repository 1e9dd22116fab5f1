"""Per-tuple revision normalization against the hosting APIs."""

import logging

from repository.github import GitHubClient
from repository.gitlab import GitLabClient

from .errors import TagLookupError
from .models import ResolverConfig, Tuple
from .version import is_release_tag

logger = logging.getLogger(__name__)


def normalize_github(t: Tuple, github: GitHubClient) -> None:
    """Find the real tag of a nested module and detect subdirectory layouts.

    Go resolves tags like ``v1.0.4`` of a module living in ``api/`` to the
    ``api/v1.0.4`` tag upstream actually uses; do the same.

    Raises:
        TagLookupError: When no candidate tag exists.
    """
    if not t.submodule:
        return

    if is_release_tag(t.version):
        tag = github.lookup_tag(t.account, t.project, t.submodule, t.version)
        if tag is None:
            raise TagLookupError(
                f"{t.account}:{t.project}:{t.version} (from {t.package}@{t.version}): "
                f"no tag matching {t.submodule}/{t.version}"
            )
        if tag != t.version:
            logger.info("Using tag %s for %s@%s", tag, t.package, t.version)
        t.version = tag

    suffix = "/" + t.submodule
    if t.subdir.endswith(suffix) and github.has_contents_at_path(t.account, t.project, t.submodule, t.version):
        t.subdir = t.subdir[:-len(suffix)]
        t.nested = True


def normalize_gitlab(t: Tuple, token=None) -> None:
    """Replace the revision with the full commit id the Gitlab site reports."""
    client = GitLabClient(site=t.source.site_url, token=token)
    commit = client.get_commit(t.account, t.project, t.version)
    if commit:
        t.version = commit
    else:
        logger.warning("Gitlab returned no commit id for %s@%s", t.package, t.version)


def normalize(t: Tuple, config: ResolverConfig, github: GitHubClient) -> Tuple:
    """Normalize t in place; a no-op offline.

    Raises:
        TagLookupError: Soft, for unresolvable Github nested module tags.
        HttpError: On remote failures.
    """
    if config.offline or not t.is_resolved:
        return t
    if t.source.is_github:
        if config.lookup_github_tags:
            normalize_github(t, github)
    elif t.source.is_gitlab:
        normalize_gitlab(t, config.gitlab_token)
    return t
