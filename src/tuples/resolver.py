"""Import path to hosting source resolution."""

import logging
from typing import Optional

from common.logging_utils import extra_context, is_debug_enabled
from repository.discovery import discover

from .errors import SourceError
from .mirrors import Mirror, lookup_github, lookup_gitlab, lookup_static
from .models import ResolverConfig, Spec, Tuple
from .vanity import lookup_vanity

logger = logging.getLogger(__name__)

_LOOKUPS = (lookup_static, lookup_github, lookup_gitlab, lookup_vanity)


def lookup(path: str) -> Optional[Mirror]:
    """Resolve path from the local tables only; None when nothing matches.

    Raises:
        SpecFormatError: For malformed Github/Gitlab paths.
    """
    for fn in _LOOKUPS:
        mirror = fn(path)
        if mirror is not None:
            return mirror
    return None


def resolve(spec: Spec, config: ResolverConfig) -> Tuple:
    """Build the tuple for a parsed manifest entry.

    When no local rule matches and network access is allowed, the import
    path's go-import page is consulted once.

    Raises:
        SourceError: When no mirror is known for the package.
        SpecFormatError: For malformed Github/Gitlab paths.
    """
    t = Tuple(
        package=spec.package,
        version=spec.revision,
        subdir=spec.package,
        prefix=config.prefix,
    )

    path = spec.path
    mirror = lookup(path)
    if mirror is None and not config.offline:
        discovered = discover(path)
        if discovered:
            logger.info("Discovered mirror %s for %s", discovered, path)
            mirror = lookup(discovered)

    if mirror is None:
        raise SourceError(f"{t} (from {spec.path}@{spec.version})")

    t.make_resolved(mirror.source, mirror.account, mirror.project, mirror.submodule)
    if is_debug_enabled(logger):
        logger.debug(
            "Resolved package",
            extra=extra_context(
                event="resolve",
                component="resolver",
                action="lookup",
                target=spec.package,
                outcome=str(t),
            )
        )
    return t
