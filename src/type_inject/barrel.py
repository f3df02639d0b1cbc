"""Barrel file detection.

A barrel file only re-exports other modules. Injecting context for it adds
nothing the re-exported modules would not already provide.
"""

from __future__ import annotations

import re

_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT_RE = re.compile(r"//.*")

_REEXPORT_PATTERNS = [
    re.compile(r"""^export\s*\*\s*from\s+['"]"""),                  # export * from './foo'
    re.compile(r"""^export\s*\{[^}]*\}\s*from\s+['"]"""),           # export { foo } from './foo'
    re.compile(r"""^export\s+type\s*\*\s*from\s+['"]"""),           # export type * from './foo'
    re.compile(r"""^export\s+type\s*\{[^}]*\}\s*from\s+['"]"""),    # export type { Foo } from './foo'
]


def is_barrel_file(content: str) -> bool:
    """Return True if every non-comment line of ``content`` is a re-export."""
    stripped = _LINE_COMMENT_RE.sub("", _BLOCK_COMMENT_RE.sub("", content))
    lines = [line.strip() for line in stripped.split("\n") if line.strip()]
    if not lines:
        return False
    return all(any(p.match(line) for p in _REEXPORT_PATTERNS) for line in lines)
