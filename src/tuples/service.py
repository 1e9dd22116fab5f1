"""Manifest processing: concurrent per-line resolution and the joined result."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import Constants
from repository.github import GitHubClient

from .errors import SoftError
from .models import ResolverConfig, Tuple
from .normalize import normalize
from .postprocess import postprocess
from .render import render_errors, render_links, render_spack, render_tuples
from .resolver import resolve
from .spec import parse_spec, spec_lines

logger = logging.getLogger(__name__)


@dataclass
class Result:
    """Resolved tuples plus the soft errors collected while producing them."""
    tuples: List[Tuple] = field(default_factory=list)
    errors: Dict[str, List[SoftError]] = field(default_factory=dict)
    prefix: str = Constants.DEFAULT_PREFIX

    def add_error(self, err: SoftError) -> None:
        self.errors.setdefault(err.category, []).append(err)

    @property
    def has_errors(self) -> bool:
        return any(self.errors.values())

    def render(self) -> str:
        sections = [
            render_tuples(self.tuples),
            render_links(self.tuples, self.prefix),
            render_errors(self.errors),
        ]
        return "\n\n".join(s for s in sections if s)

    def render_spack(self, app_version: Optional[str] = None) -> str:
        return render_spack(self.tuples, app_version)

    def __str__(self) -> str:
        return self.render()


def process_line(line: str, config: ResolverConfig, github: GitHubClient) -> Tuple:
    """Parse, resolve and normalize a single manifest record."""
    spec = parse_spec(line)
    t = resolve(spec, config)
    return normalize(t, config, github)


def read(lines: Iterable[str], config: Optional[ResolverConfig] = None) -> Result:
    """Build a Result from manifest lines.

    Records are processed concurrently; soft errors are collected, the first
    hard error cancels pending work and propagates.

    Raises:
        SpecFormatError: On malformed records.
        HttpError: On remote failures.
    """
    config = config or ResolverConfig()
    github = GitHubClient(username=config.github_username, token=config.github_token)
    result = Result(prefix=config.prefix)
    records = list(spec_lines(lines))

    with Timer() as t:
        executor = ThreadPoolExecutor(max_workers=config.max_workers or os.cpu_count())
        try:
            futures = [executor.submit(process_line, line, config, github) for line in records]
            for future in as_completed(futures):
                try:
                    result.tuples.append(future.result())
                except SoftError as err:
                    result.add_error(err)
        except BaseException:
            executor.shutdown(wait=True, cancel_futures=True)
            raise
        executor.shutdown(wait=True)

        for err in postprocess(result.tuples, github=github, offline=config.offline):
            result.add_error(err)

    if is_debug_enabled(logger):
        logger.debug(
            "Manifest processed",
            extra=extra_context(
                event="process",
                component="service",
                action="read",
                count=len(result.tuples),
                errors=sum(len(v) for v in result.errors.values()),
                duration_ms=t.duration_ms(),
            )
        )
    return result


def load(path: str, config: Optional[ResolverConfig] = None) -> Result:
    """Build a Result from the manifest file at path.

    Raises:
        OSError: When the file cannot be read.
        UnicodeDecodeError: When the file is not valid UTF-8.
    """
    with open(path, encoding="utf-8") as fh:
        return read(fh, config)
