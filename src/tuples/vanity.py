"""Vanity import domains redirecting to Github repositories.

Each rule owns one domain prefix and a pattern that must match the whole
import path. Rules are tried in order and their prefixes never overlap.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional, Pattern

from .mirrors import Mirror, path_has_prefix
from .models import GITHUB

_NAME = r"([0-9A-Za-z][-0-9A-Za-z]+)"


@dataclass(frozen=True)
class VanityRule:
    """Domain prefix, full-path pattern and the mirror builder for matches."""
    prefix: str
    pattern: Pattern
    build: Callable[[re.Match], Optional[Mirror]]

    def matches(self, path: str) -> bool:
        return path_has_prefix(path, self.prefix)

    def resolve(self, path: str) -> Optional[Mirror]:
        m = self.pattern.match(path)
        if not m:
            return None
        return self.build(m)


def _account(account: str) -> Callable[[re.Match], Mirror]:
    """Builder for <domain>/<name> -> github.com/<account>/<name>."""
    return lambda m: Mirror(GITHUB, account, m.group(1))


def _gopkg_in(m: re.Match) -> Mirror:
    # gopkg.in/pkg.v3 -> go-pkg/pkg, gopkg.in/user/pkg.v3 -> user/pkg
    if m.group(0) == "gopkg.in/fsnotify.v1":
        return Mirror(GITHUB, "fsnotify", "fsnotify")
    if m.group(2):
        return Mirror(GITHUB, m.group(1), m.group(2))
    return Mirror(GITHUB, f"go-{m.group(1)}", m.group(1))


_GOTEST_TOOLS = {
    "gotest.tools": Mirror(GITHUB, "gotestyourself", "gotest.tools"),
    "gotest.tools/gotestsum": Mirror(GITHUB, "gotestyourself", "gotestsum"),
}

RULES = (
    VanityRule("bazil.org", re.compile(rf"^bazil\.org/{_NAME}$"), _account("bazil")),
    VanityRule(
        "cloud.google.com",
        re.compile(rf"^cloud\.google\.com/go(?:/{_NAME})?$"),
        lambda m: Mirror(GITHUB, "googleapis", "google-cloud-go", m.group(1) or ""),
    ),
    VanityRule(
        "go.elastic.co/apm",
        re.compile(r"^go\.elastic\.co/apm(?:/(module/[0-9A-Za-z][-0-9A-Za-z]+))?$"),
        lambda m: Mirror(GITHUB, "elastic", "apm-agent-go", m.group(1) or ""),
    ),
    VanityRule("go.etcd.io", re.compile(rf"^go\.etcd\.io/{_NAME}$"), _account("etcd-io")),
    VanityRule("go.mozilla.org", re.compile(rf"^go\.mozilla\.org/{_NAME}$"), _account("mozilla-services")),
    VanityRule("go.uber.org", re.compile(rf"^go\.uber\.org/{_NAME}$"), _account("uber-go")),
    VanityRule("golang.org", re.compile(rf"^golang\.org/x/{_NAME}$"), _account("golang")),
    VanityRule(
        "gopkg.in",
        re.compile(rf"^gopkg\.in/{_NAME}(?:\.v.+)?(?:/{_NAME}(?:\.v.+))?$"),
        _gopkg_in,
    ),
    VanityRule(
        "gotest.tools",
        re.compile(r"^gotest\.tools(?:/gotestsum)?$"),
        lambda m: _GOTEST_TOOLS.get(m.group(0)),
    ),
    VanityRule("k8s.io", re.compile(rf"^k8s\.io/{_NAME}$"), _account("kubernetes")),
    VanityRule("mvdan.cc", re.compile(rf"^mvdan\.cc/{_NAME}$"), _account("mvdan")),
    VanityRule("rsc.io", re.compile(rf"^rsc\.io/{_NAME}$"), _account("rsc")),
)


def lookup_vanity(path: str) -> Optional[Mirror]:
    """Resolve path through the first vanity rule owning its domain."""
    for rule in RULES:
        if rule.matches(path):
            return rule.resolve(path)
    return None
