"""Text output: tuple tables, post-extract symlinks, error blocks, Spack resources."""

import posixpath
import re
from typing import Dict, Iterable, List, Optional

from constants import Constants

from .errors import SOFT_ERROR_TYPES, SoftError
from .models import Tuple

_ENTRY_SEP = " \\\n\t\t"
_COMMIT_RE = re.compile(r"^[0-9a-f]{%d,}$" % Constants.SHORT_COMMIT_LEN)


def render_tuples(tuples: Iterable[Tuple]) -> str:
    """Render visible resolved tuples as GH_TUPLE/GL_TUPLE variables."""
    visible = sorted(
        (t for t in tuples if t.is_resolved and not t.hidden),
        key=lambda t: t.sort_key(),
    )
    sections: Dict[str, List[str]] = {}
    for t in visible:
        sections.setdefault(t.source.var_name, []).append(str(t))

    blocks = []
    for var_name in ("GH_TUPLE", "GL_TUPLE"):
        entries = sections.get(var_name)
        if not entries:
            continue
        head = "\\\n\t\t" if len(entries) > Constants.TUPLE_INLINE_LIMIT else ""
        blocks.append(f"{var_name}=\t{head}{_ENTRY_SEP.join(entries)}")
    return "\n\n".join(blocks)


def render_links(tuples: Iterable[Tuple], prefix: str = Constants.DEFAULT_PREFIX) -> str:
    """Render the post-extract target symlinking shared extractions into place."""
    tuples = list(tuples)
    by_package = {t.package: t for t in tuples}
    linked = sorted((t for t in tuples if t.link_target), key=lambda t: (t.link_target, t.package))
    if not linked:
        return ""

    lines = ["post-extract:"]
    made_dirs = set()
    for t in linked:
        src = by_package.get(t.link_source or t.package, t)
        src_path = f"${{WRKSRC_{src.group}}}"
        if src.nested and t.submodule:
            src_path = f"{src_path}/{t.submodule}"
        dest = f"${{WRKSRC}}/{prefix}/{t.link_target}"

        parent = posixpath.dirname(dest)
        if parent not in made_dirs:
            made_dirs.add(parent)
            lines.append(f"\t@${{MKDIR}} {parent}")
        if src is t:
            lines.append(f"\t@${{RM}} -r {dest}")
        lines.append(f"\t@${{RLN}} {src_path} {dest}")
    return "\n".join(lines)


def render_errors(errors: Dict[str, List[SoftError]]) -> str:
    """Render one comment block per soft error category."""
    blocks = []
    for err_type in SOFT_ERROR_TYPES:
        errs = errors.get(err_type.category)
        if not errs:
            continue
        entries = sorted(f"\t\t#\t{err}" for err in errs)
        blocks.append("\n".join([f"\t\t# {err_type.header}"] + entries))
    return "\n\n".join(blocks)


def render_spack(tuples: Iterable[Tuple], app_version: Optional[str] = None) -> str:
    """Render visible resolved tuples as Spack resource() declarations."""
    out = []
    for t in sorted((t for t in tuples if t.is_resolved and not t.hidden), key=lambda t: t.sort_key()):
        rev_kind = "commit" if _COMMIT_RE.match(t.version) else "tag"
        repo_url = f"{t.source.site_url}/{t.account}/{t.project}"
        lines = [
            f'    resource(name="{t.package}",',
            f'             git="{repo_url}",',
            f'             {rev_kind}="{t.version}",',
            '             destination=".",',
        ]
        if app_version:
            lines.append(f'             when="@{app_version}",')
        lines.append(f'             placement="{t.prefix}/{t.package}")')
        out.append("\n".join(lines))
    return "\n".join(out)
