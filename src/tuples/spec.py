"""Manifest line parsing.

Splits a ``vendor/modules.txt`` record into the import path the sources
land under and the (path, version) pair to fetch, handling ``replace``
directives.
"""

from typing import Iterable, Iterator

from constants import Constants

from .errors import (
    ReplacementLocalFilesystemError,
    ReplacementMissingCommitError,
    SpecFormatError,
)
from .models import Spec
from .version import classify


def is_local_path(path: str) -> bool:
    """Return True for replace targets on the local filesystem."""
    return path.startswith(".") or path.startswith("/")


def parse_spec(line: str) -> Spec:
    """Parse one manifest record with the ``# `` marker already removed.

    Raises:
        SpecFormatError: On a malformed line or version string.
        ReplacementMissingCommitError: Replacement without a version.
        ReplacementLocalFilesystemError: Replacement with a local path.
    """
    if Constants.REPLACE_SEP in line:
        parts = line.split(Constants.REPLACE_SEP)
        if len(parts) != 2:
            raise SpecFormatError(f"unexpected number of packages in replace spec: {line!r}")
        left, right = parts[0].split(), parts[1].split()
        if len(left) not in (1, 2):
            raise SpecFormatError(f"unexpected number of fields: {line!r}")
        package = left[0]

        if len(right) == 1:
            if is_local_path(right[0]):
                raise ReplacementLocalFilesystemError(f"{package} => {right[0]}")
            raise ReplacementMissingCommitError(f"{package} => {right[0]}")
        if len(right) != 2:
            raise SpecFormatError(f"unexpected number of fields: {line!r}")

        path, version = right
        return Spec(package=package, path=path, version=version, revision=classify(version))

    fields = line.split()
    if len(fields) != 2:
        raise SpecFormatError(f"unexpected number of fields: {line!r}")
    path, version = fields
    return Spec(package=path, path=path, version=version, revision=classify(version))


def spec_lines(lines: Iterable[str]) -> Iterator[str]:
    """Yield manifest records, stripped of the ``# `` marker.

    Package lines and ``## explicit`` annotations are skipped.
    """
    for line in lines:
        line = line.rstrip("\r\n")
        if line.startswith(Constants.SPEC_PREFIX):
            yield line[len(Constants.SPEC_PREFIX):]
