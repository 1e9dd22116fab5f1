"""Conflict resolution passes over the full tuple set.

Each pass sorts the list by its own key first, then walks runs of adjacent
tuples sharing that key. All passes are idempotent.
"""

import logging
from itertools import groupby
from typing import List, Optional

from common.http_client import HttpError
from constants import Constants
from repository.github import GitHubClient, RateLimitError

from .errors import DuplicateProjectAndTagError, SoftError
from .models import Tuple

logger = logging.getLogger(__name__)

# Canonical package -> packages known to be the same repository under another name
ALIASES = (
    ("github.com/sirupsen/logrus", ("github.com/Sirupsen/logrus",)),
    ("github.com/docker/docker", ("github.com/moby/moby",)),
    ("golang.org/x/lint", ("github.com/golang/lint",)),
)


def ensure_unique_groups(tuples: List[Tuple]) -> None:
    """Suffix repeated group names with _1, _2, ... skipping names in use."""
    tuples.sort(key=lambda t: (t.group, t.sort_key()))
    taken = {t.group for t in tuples}
    for group, run in groupby(tuples, key=lambda t: t.group):
        n = 1
        for t in list(run)[1:]:
            while f"{group}_{n}" in taken:
                n += 1
            t.group = f"{group}_{n}"
            taken.add(t.group)
            n += 1


def ensure_unique_github_project_and_tag(tuples: List[Tuple], github: GitHubClient) -> List[SoftError]:
    """Pin tuples sharing a Github project and tag with another account to a commit.

    Distfiles are named after project and tag, so two accounts' forks of the
    same project at the same tag would collide.

    Returns:
        Soft errors for tuples whose commit could not be looked up.

    Raises:
        RateLimitError: When Github refuses further requests.
    """
    errors: List[SoftError] = []
    tuples.sort(key=lambda t: (t.source.sort_key(), t.project, t.version, t.account.lower(), t.package))
    for _, run in groupby(tuples, key=lambda t: (t.source, t.project, t.version)):
        run = list(run)
        first = run[0]
        if not first.source.is_github:
            continue
        for t in run[1:]:
            if t.hidden or t.is_linked or t.account.lower() == first.account.lower():
                continue
            try:
                sha = github.get_commit(t.account, t.project, t.version)
            except RateLimitError:
                raise
            except HttpError as exc:
                errors.append(DuplicateProjectAndTagError(f"{t} (from {t.package}@{t.version}): {exc}"))
                continue
            if len(sha) < Constants.SHORT_COMMIT_LEN:
                errors.append(DuplicateProjectAndTagError(
                    f"{t} (from {t.package}@{t.version}): unexpected commit hash {sha!r}"
                ))
                continue
            logger.info("Pinning %s@%s to commit %s", t.package, t.version, sha[:Constants.SHORT_COMMIT_LEN])
            t.version = sha[:Constants.SHORT_COMMIT_LEN]
    return errors


def resolve_subdir_collisions(tuples: List[Tuple]) -> None:
    """Make tuples extracting into the same vendor directory coexist.

    The repository root is extracted first; a later tuple at the same
    revision is already covered by it and is hidden, one at another revision
    keeps its own fetch and its package directory is symlinked over the
    first extraction.
    """
    candidates = [t for t in tuples if t.subdir and not t.hidden]
    candidates.sort(key=lambda t: (t.subdir, t.nested, t.version, t.submodule, t.package))
    for _, run in groupby(candidates, key=lambda t: t.subdir):
        run = list(run)
        first = run[0]
        for t in run[1:]:
            if t.version == first.version:
                t.hidden = True
            else:
                t.link_target = t.package
                t.link_source = t.package
                t.subdir = ""


def _same_repository(a: Tuple, b: Tuple) -> bool:
    return (
        a.source == b.source
        and a.account.lower() == b.account.lower()
        and a.project.lower() == b.project.lower()
        and a.version == b.version
        and a.submodule == b.submodule
    )


def fix_known_aliases(tuples: List[Tuple]) -> None:
    """Hide duplicate fetches of repositories known under several import paths."""
    by_package = {t.package: t for t in tuples}
    for canonical, aliases in ALIASES:
        c: Optional[Tuple] = by_package.get(canonical)
        if c is None or c.hidden:
            continue
        for alias in aliases:
            a = by_package.get(alias)
            if a is None or a.hidden or not a.subdir or not _same_repository(c, a):
                continue
            a.hidden = True
            a.link_source = c.package
            a.link_target = a.subdir
            a.subdir = ""


def postprocess(tuples: List[Tuple], github: Optional[GitHubClient] = None, offline: bool = True) -> List[SoftError]:
    """Run all conflict resolution passes in order.

    Returns:
        Soft errors collected by the passes.
    """
    errors: List[SoftError] = []
    if len(tuples) < 2:
        return errors
    ensure_unique_groups(tuples)
    if not offline and github is not None:
        errors.extend(ensure_unique_github_project_and_tag(tuples, github))
    resolve_subdir_collisions(tuples)
    fix_known_aliases(tuples)
    return errors
