"""Static mirror table and generic Github/Gitlab path parsing."""

import posixpath
from dataclasses import dataclass, replace
from typing import Optional

from .errors import SpecFormatError
from .models import GITHUB, GITLAB, Source, gitlab_site


@dataclass(frozen=True)
class Mirror:
    """Where a Go import path is actually hosted."""
    source: Source
    account: str
    project: str
    submodule: str = ""


def path_has_prefix(path: str, prefix: str) -> bool:
    """Return True when prefix equals path or is one of its parent paths."""
    return path == prefix or path.startswith(prefix + "/")


# Ordered, first match wins. Paths below an entry become its submodule.
MIRRORS = (
    ("github.com/docker/docker", Mirror(GITHUB, "moby", "moby")),
    ("contrib.go.opencensus.io/exporter/ocagent", Mirror(GITHUB, "census-ecosystem", "opencensus-go-exporter-ocagent")),
    ("aletheia.icu/broccoli/fs", Mirror(GITHUB, "aletheia-icu", "broccoli", "fs")),
    ("camlistore.org", Mirror(GITHUB, "perkeep", "perkeep")),
    ("docker.io/go-docker", Mirror(GITHUB, "docker", "go-docker")),
    ("git.apache.org/thrift.git", Mirror(GITHUB, "apache", "thrift")),
    ("go.bug.st/serial.v1", Mirror(GITHUB, "bugst", "go-serial")),
    ("go.elastic.co/fastjson", Mirror(GITHUB, "elastic", "go-fastjson")),
    ("go.mongodb.org/mongo-driver", Mirror(GITHUB, "mongodb", "mongo-go-driver")),
    ("go.opencensus.io", Mirror(GITHUB, "census-instrumentation", "opencensus-go")),
    ("go4.org", Mirror(GITHUB, "go4org", "go4")),
    ("gocloud.dev", Mirror(GITHUB, "google", "go-cloud")),
    ("golang.zx2c4.com/wireguard", Mirror(GITHUB, "wireguard", "wireguard-go")),
    ("google.golang.org/api", Mirror(GITHUB, "googleapis", "google-api-go-client")),
    ("google.golang.org/appengine", Mirror(GITHUB, "golang", "appengine")),
    ("google.golang.org/genproto", Mirror(GITHUB, "google", "go-genproto")),
    ("google.golang.org/grpc", Mirror(GITHUB, "grpc", "grpc-go")),
    ("google.golang.org/protobuf", Mirror(GITHUB, "protocolbuffers", "protobuf-go")),
    ("honnef.co/go/tools", Mirror(GITHUB, "dominikh", "go-tools")),
    ("howett.net/plist", Mirror(gitlab_site("https://gitlab.howett.net"), "go", "plist")),
    ("launchpad.net/gocheck", Mirror(GITHUB, "go-check", "check")),
    ("layeh.com/radius", Mirror(GITHUB, "layeh", "radius")),
    ("sigs.k8s.io/yaml", Mirror(GITHUB, "kubernetes-sigs", "yaml")),
    ("tinygo.org/x/go-llvm", Mirror(GITHUB, "tinygo-org", "go-llvm")),
)

# Hosts with github.com-style "<host>/<account>/<project>" paths served by Gitlab
GITLAB_HOSTS = (
    ("gitlab.com", GITLAB),
    ("gitlab.freedesktop.org", gitlab_site("https://gitlab.freedesktop.org")),
    ("gitlab.gnome.org", gitlab_site("https://gitlab.gnome.org")),
    ("salsa.debian.org", gitlab_site("https://salsa.debian.org")),
)


def lookup_static(path: str) -> Optional[Mirror]:
    """Look path up in the static mirror table."""
    for prefix, mirror in MIRRORS:
        if not path_has_prefix(path, prefix):
            continue
        rest = path[len(prefix) + 1:]
        if rest:
            submodule = posixpath.join(mirror.submodule, rest) if mirror.submodule else rest
            return replace(mirror, submodule=submodule)
        return mirror
    return None


def _split_hosted(path: str, host: str, kind: str) -> Optional[tuple]:
    if not path_has_prefix(path, host):
        return None
    parts = path.split("/", 3)
    if len(parts) < 3 or not parts[1] or not parts[2]:
        raise SpecFormatError(f"unexpected {kind} package name: {path!r}")
    return parts[1], parts[2], parts[3] if len(parts) == 4 else ""


def lookup_github(path: str) -> Optional[Mirror]:
    """Parse github.com/<account>/<project>[/<submodule>].

    Raises:
        SpecFormatError: When the path has fewer than two segments after the host.
    """
    parts = _split_hosted(path, "github.com", "Github")
    if parts is None:
        return None
    account, project, submodule = parts
    return Mirror(GITHUB, account, project, submodule)


def lookup_gitlab(path: str) -> Optional[Mirror]:
    """Parse <gitlab-host>/<account>/<project>[/<submodule>] for known Gitlab hosts.

    Raises:
        SpecFormatError: When the path has fewer than two segments after the host.
    """
    for host, source in GITLAB_HOSTS:
        parts = _split_hosted(path, host, "Gitlab")
        if parts is None:
            continue
        account, project, submodule = parts
        return Mirror(source, account, project, submodule)
    return None
