"""Exceptions raised while parsing, resolving and post-processing tuples.

Hard errors (``SpecFormatError`` and transport failures) abort a run. Soft
errors are collected per category and rendered as comment blocks after the
tuple tables.
"""


class TupleError(Exception):
    """Base class for tuple processing errors."""


class SpecFormatError(TupleError):
    """Malformed manifest line, version string or hosting path."""


class SoftError(TupleError):
    """Per-tuple condition reported to the user without aborting the run."""

    category = "other"
    header = "Other errors found during processing:"


class SourceError(SoftError):
    """No mirror is known for the package."""

    category = "source"
    header = (
        "Mirrors for the following packages are not currently known, "
        "please look them up and handle these tuples manually:"
    )


class TagLookupError(SoftError):
    """A Github tag for a nested module could not be found."""

    category = "tag_lookup"
    header = "Github tags for the following packages could not be resolved, please check them manually:"


class DuplicateProjectAndTagError(SoftError):
    """Tuples from different accounts share project and tag."""

    category = "duplicate_project_and_tag"
    header = (
        "Tuples with the same project and tag from different accounts could not be "
        "disambiguated, please handle them manually:"
    )


class ReplacementMissingCommitError(SoftError):
    """A replace directive without a version or commit."""

    category = "replacement_missing_commit"
    header = (
        "The following replacement packages are missing version/commit specifier, "
        "you will need to handle them manually:"
    )


class ReplacementLocalFilesystemError(SoftError):
    """A replace directive pointing at a local filesystem path."""

    category = "replacement_local_filesystem"
    header = (
        "The following replacement packages are referencing a local filesystem path, "
        "you may need to symlink them manually:"
    )


# Render order of the soft error blocks
SOFT_ERROR_TYPES = (
    SourceError,
    TagLookupError,
    DuplicateProjectAndTagError,
    ReplacementMissingCommitError,
    ReplacementLocalFilesystemError,
)
