"""Data models for resolved tuples and resolver configuration."""

import re
import posixpath
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple as TypingTuple

from constants import Constants

_GROUP_RE = re.compile(r"\W+", re.ASCII)


class SourceKind(Enum):
    """Hosting service a tuple is fetched from."""
    UNRESOLVED = "unresolved"
    GITHUB = "github"
    GITLAB = "gitlab"


_KIND_ORDER = {SourceKind.GITHUB: 0, SourceKind.GITLAB: 1, SourceKind.UNRESOLVED: 2}
_VAR_NAMES = {SourceKind.GITHUB: "GH_TUPLE", SourceKind.GITLAB: "GL_TUPLE"}


@dataclass(frozen=True)
class Source:
    """Hosting source: kind plus an optional custom Gitlab site URL."""
    kind: SourceKind = SourceKind.UNRESOLVED
    site: str = ""

    @property
    def is_github(self) -> bool:
        return self.kind is SourceKind.GITHUB

    @property
    def is_gitlab(self) -> bool:
        return self.kind is SourceKind.GITLAB

    @property
    def is_resolved(self) -> bool:
        return self.kind is not SourceKind.UNRESOLVED

    @property
    def is_default_site(self) -> bool:
        if self.is_gitlab:
            return self.site in ("", Constants.GITLAB_DEFAULT_SITE)
        return True

    @property
    def site_url(self) -> str:
        """Base web URL of the hosting site."""
        if self.is_github:
            return Constants.GITHUB_SITE
        if self.is_gitlab:
            return self.site or Constants.GITLAB_DEFAULT_SITE
        return ""

    @property
    def var_name(self) -> str:
        return _VAR_NAMES.get(self.kind, "")

    def sort_key(self) -> TypingTuple[int, str]:
        return (_KIND_ORDER[self.kind], "" if self.is_default_site else self.site)


GITHUB = Source(SourceKind.GITHUB)
GITLAB = Source(SourceKind.GITLAB)
UNRESOLVED = Source()


def gitlab_site(site: str) -> Source:
    """Return a Gitlab source for site, collapsing the default site."""
    if site in ("", Constants.GITLAB_DEFAULT_SITE):
        return GITLAB
    return Source(SourceKind.GITLAB, site)


def make_group(account: str, project: str, submodule: str = "") -> str:
    """Derive the fetch group name for account/project[/submodule]."""
    group = f"{account}_{project}"
    if submodule:
        group = f"{group}_{posixpath.basename(submodule)}"
    return _GROUP_RE.sub("_", group).lower().strip("_")


@dataclass
class Spec:
    """One parsed manifest entry.

    ``package`` is the import path the sources land under, ``path`` and
    ``version`` identify what to fetch (they differ from ``package`` for
    replace directives) and ``revision`` is the classified tag or commit.
    """
    package: str
    path: str
    version: str
    revision: str


@dataclass
class Tuple:  # pylint: disable=too-many-instance-attributes
    """Resolved unit of work for one manifest entry."""
    package: str
    version: str
    source: Source = UNRESOLVED
    account: str = ""
    project: str = ""
    submodule: str = ""
    subdir: str = ""
    group: str = Constants.UNRESOLVED_GROUP
    link_target: str = ""
    link_source: str = ""
    hidden: bool = False
    nested: bool = False
    prefix: str = Constants.DEFAULT_PREFIX

    def make_resolved(self, source: Source, account: str, project: str, submodule: str = "") -> None:
        self.source = source
        self.account = account
        self.project = project
        self.submodule = submodule
        self.group = make_group(account, project, submodule)

    @property
    def is_resolved(self) -> bool:
        return self.source.is_resolved

    @property
    def is_linked(self) -> bool:
        return bool(self.link_target)

    def __str__(self) -> str:
        site = ""
        if self.source.is_gitlab and not self.source.is_default_site:
            site = f"{self.source.site}:"
        text = f"{site}{self.account}:{self.project}:{self.version}:{self.group}"
        if self.subdir:
            text = f"{text}/{self.prefix}/{self.subdir}"
        return text

    def sort_key(self) -> TypingTuple:
        return (
            self.source.sort_key(),
            self.account,
            self.project,
            self.version,
            self.submodule,
            self.group,
            self.link_target,
            self.package,
        )


@dataclass
class ResolverConfig:
    """Runtime options threaded through parsing, resolution and rendering."""
    offline: bool = False
    lookup_github_tags: bool = False
    prefix: str = Constants.DEFAULT_PREFIX
    github_username: Optional[str] = None
    github_token: Optional[str] = None
    gitlab_token: Optional[str] = None
    max_workers: Optional[int] = None
