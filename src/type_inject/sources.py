"""Symbol sources: where the resolver gets per-file declarations from.

Parsing source text is left to an external extractor. Anything that can
report a file's declarations and import statements satisfies
``SymbolSource``; ``InMemorySymbolSource`` is a dict-backed implementation
for hosts that already hold extraction results, and for tests.
"""

from __future__ import annotations

import posixpath
from dataclasses import replace
from typing import Iterable, Protocol, runtime_checkable

from .models import FileExtraction, ImportEdge, Symbol

# Tried in order when an import specifier has no extension
RESOLVABLE_EXTENSIONS = (".ts", ".tsx", ".mts", ".cts", ".d.ts", ".js", ".jsx", ".svelte")


class ExtractionError(Exception):
    """Raised when a file cannot be loaded or parsed into declarations."""

    pass


@runtime_checkable
class SymbolSource(Protocol):
    """Protocol for per-file declaration extractors."""

    def extract(self, file_path: str) -> FileExtraction:
        """Extract declarations and import edges from a file.

        Args:
            file_path: Absolute path of the file.

        Returns:
            FileExtraction with symbols in declaration order and import
            edges in statement order. Symbols must not carry
            ``origin_path``/``import_depth``.

        Raises:
            ExtractionError: If the file cannot be loaded or parsed.
        """
        ...

    def read_source(self, file_path: str) -> str | None:
        """Return the raw text of a file, or None if unavailable."""
        ...


def normalize_path(path: str) -> str:
    """Normalize a path into the identity used for visited-file tracking."""
    return posixpath.normpath(path.replace("\\", "/"))


class InMemorySymbolSource:
    """Dict-backed symbol source.

    Import edges may be registered with an unresolved ``target_file``; they
    are resolved against the registered files when extracted, trying the
    usual module extensions and ``index`` files.

    Example:
        source = InMemorySymbolSource()
        source.add_file(
            "/repo/src/main.ts",
            symbols=[Symbol(SymbolKind.FUNCTION, "getUser", "function getUser(): User")],
            imports=[("./user", {"User"})],
        )
    """

    def __init__(self) -> None:
        self._files: dict[str, FileExtraction] = {}
        self._texts: dict[str, str] = {}
        self.extract_calls: list[str] = []

    def add_file(
        self,
        path: str,
        symbols: Iterable[Symbol] | None = None,
        imports: Iterable[ImportEdge | tuple] | None = None,
        text: str | None = None,
    ) -> None:
        """Register a file.

        Args:
            path: Absolute file path.
            symbols: Declarations in source order.
            imports: ImportEdges, or ``(specifier, names[, type_only])`` tuples.
            text: Raw file content, used for barrel detection and range reads.
        """
        normalized = normalize_path(path)
        edges = [self._to_edge(normalized, item) for item in imports or []]
        self._files[normalized] = FileExtraction(
            path=normalized, symbols=list(symbols or []), imports=edges
        )
        if text is not None:
            self._texts[normalized] = text

    def remove_file(self, path: str) -> None:
        normalized = normalize_path(path)
        self._files.pop(normalized, None)
        self._texts.pop(normalized, None)

    def extract(self, file_path: str) -> FileExtraction:
        normalized = normalize_path(file_path)
        self.extract_calls.append(normalized)
        extraction = self._files.get(normalized)
        if extraction is None:
            raise ExtractionError(f"File not found: {file_path}")

        imports = [
            edge if edge.target_file or not edge.is_relative
            else replace(edge, target_file=self.resolve_specifier(normalized, edge.specifier))
            for edge in extraction.imports
        ]
        return FileExtraction(path=normalized, symbols=list(extraction.symbols), imports=imports)

    def read_source(self, file_path: str) -> str | None:
        return self._texts.get(normalize_path(file_path))

    def resolve_specifier(self, from_file: str, specifier: str) -> str | None:
        """Resolve a relative specifier to a registered file, if any."""
        base = normalize_path(posixpath.join(posixpath.dirname(from_file), specifier))
        candidates = [base]
        candidates.extend(base + ext for ext in RESOLVABLE_EXTENSIONS)
        candidates.extend(posixpath.join(base, "index" + ext) for ext in RESOLVABLE_EXTENSIONS)
        for candidate in candidates:
            if candidate in self._files:
                return candidate
        return None

    def _to_edge(self, source_file: str, item: ImportEdge | tuple) -> ImportEdge:
        if isinstance(item, ImportEdge):
            return replace(item, source_file=source_file)
        specifier, names, *rest = item
        return ImportEdge(
            source_file=source_file,
            specifier=specifier,
            names=frozenset(names or ()),
            type_only=bool(rest[0]) if rest else False,
        )
