"""Fixed skeleton templates for generated mock and test functions.

Templates are plain text files shipped next to the package; placeholders are
bare upper-case tokens replaced verbatim.
"""
from __future__ import annotations
import functools
import re
from pathlib import Path
from typing import Sequence, Tuple

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


@functools.lru_cache(maxsize=None)
def load_template(name: str) -> str:
    p = _TEMPLATE_DIR / name
    if not p.is_file():
        raise FileNotFoundError(f"unknown template: {name}")
    # Templates end with a newline on disk; snippets are joined by the emitter.
    return p.read_text(encoding="utf-8").rstrip("\n")


def substitute(template: str, replacements: Sequence[Tuple[str, str]]) -> str:
    """Replace every placeholder in one pass over the template.

    Substituted values are never rescanned, so a value containing a
    placeholder token (a protocol named `PROTOCOL`) is emitted as is. The
    longest placeholder wins where one is a prefix of another
    (MARKER_VAR_NAME over MARKER).
    """
    values = dict(replacements)
    if not values:
        return template
    pattern = re.compile("|".join(re.escape(p) for p in sorted(values, key=len, reverse=True)))
    return pattern.sub(lambda m: values[m.group(0)], template)
