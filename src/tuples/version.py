"""Go module version classification."""

import re

from .errors import SpecFormatError

# v0.0.0-20181001143604-e0a95dfd547c
# v1.2.3-0.20150716171945-2caba252f4dc
# v0.8.0-dev.2.0.20180608203834-19279f049241
PSEUDO_VERSION_RE = re.compile(
    r"^v\d+\.\d+\.\d+-(?:[0-9A-Za-z\.]+\.)?\d{14}-([0-9a-f]+)(?:\+incompatible)?$"
)

# v1.0.0, v1.0.0-0, v1.2.3-pre-release-suffix, any of them +incompatible
SEMVER_RE = re.compile(
    r"^(v\d+\.\d+\.\d+(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?)(?:\+incompatible)?$"
)

RELEASE_TAG_RE = re.compile(r"^v\d+\.\d+\.\d+")


def classify(version: str) -> str:
    """Return the fetchable revision for a module version.

    Pseudo-versions yield their embedded commit hash, semantic versions yield
    the tag without the ``+incompatible`` suffix.

    Raises:
        SpecFormatError: If version is neither.
    """
    m = PSEUDO_VERSION_RE.match(version)
    if m:
        return m.group(1)
    m = SEMVER_RE.match(version)
    if m:
        return m.group(1)
    raise SpecFormatError(f"unexpected version string: {version!r}")


def is_release_tag(revision: str) -> bool:
    """Return True when revision looks like a vX.Y.Z tag rather than a commit."""
    return bool(RELEASE_TAG_RE.match(revision))
