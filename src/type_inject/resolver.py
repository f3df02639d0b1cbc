"""Import graph resolution.

Walks relative imports from an entry file up to a maximum depth, collecting
declarations from each imported file exactly once.
"""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from pathlib import PurePosixPath

from .models import ImportEdge, Symbol
from .sources import SymbolSource, normalize_path

logger = logging.getLogger(__name__)


class ImportGraphResolver:
    """Collect entry-file symbols plus symbols reached through imports.

    Each file is expanded at most once per ``resolve`` call. Files are
    marked as processed before recursing into them, so cyclic and
    diamond-shaped import graphs terminate without duplicate work.

    Args:
        source: Extractor providing per-file symbols and import edges.
        max_depth: Maximum number of import hops to follow (0 disables).
        include_type_only: Whether ``import type`` statements are followed.
        root: Directory that ``origin_path`` values are made relative to.
            Defaults to the current working directory.
    """

    def __init__(
        self,
        source: SymbolSource,
        max_depth: int = 4,
        include_type_only: bool = True,
        root: str | None = None,
    ):
        self.source = source
        self.max_depth = max(0, max_depth)
        self.include_type_only = include_type_only
        self.root = normalize_path(root or os.getcwd())

    def resolve(self, entry_file: str, processed: set[str] | None = None) -> list[Symbol]:
        """Resolve symbols for ``entry_file``.

        Args:
            entry_file: Absolute path of the file being read.
            processed: Optional visited-file set to thread through the walk.
                Seeded with the entry file; callers may pass their own set to
                inspect which files were expanded.

        Returns:
            Entry-file symbols (unannotated) followed by imported symbols
            tagged with ``origin_path`` and ``import_depth``. Never raises for
            extraction failures; a failing entry file yields an empty list.
        """
        if processed is None:
            processed = set()
        entry = normalize_path(entry_file)
        processed.add(entry)

        try:
            extraction = self.source.extract(entry)
        except Exception:
            logger.warning("Could not extract entry file %s", entry, exc_info=True)
            return []

        symbols = list(extraction.symbols)
        symbols.extend(self.resolve_imports(extraction.imports, 0, processed))
        return symbols

    def resolve_imports(
        self, edges: list[ImportEdge], depth: int, processed: set[str]
    ) -> list[Symbol]:
        """Follow ``edges`` of a file sitting at ``depth`` hops from the entry."""
        if depth >= self.max_depth:
            return []

        imported: list[Symbol] = []
        for edge in edges:
            if not edge.is_relative:
                continue
            if edge.type_only and not self.include_type_only:
                logger.debug("Skipping type-only import %s", edge.specifier)
                continue
            if not edge.target_file:
                logger.warning(
                    "Could not resolve import %s from %s", edge.specifier, edge.source_file
                )
                continue

            target = normalize_path(edge.target_file)
            if target in processed:
                continue
            processed.add(target)

            logger.debug("Resolving import: %s -> %s (depth %d)", edge.specifier, target, depth + 1)
            try:
                extraction = self.source.extract(target)
            except Exception:
                logger.warning(
                    "Error resolving import %s -> %s", edge.specifier, target, exc_info=True
                )
                continue

            origin = self.relative_path(target)
            for symbol in extraction.symbols:
                if edge.names and symbol.name not in edge.names:
                    continue
                imported.append(replace(symbol, origin_path=origin, import_depth=depth + 1))

            imported.extend(self.resolve_imports(extraction.imports, depth + 1, processed))

        return imported

    def relative_path(self, file_path: str) -> str:
        """Render ``file_path`` relative to the root, as ``./dir/file.ts``."""
        relative = os.path.relpath(file_path, self.root)
        return f"./{PurePosixPath(relative.replace(os.sep, '/'))}"
