"""Per-request orchestration: resolve, classify, pack."""

from __future__ import annotations

import logging
import os
from typing import Optional

from .barrel import is_barrel_file
from .classifier import classify, classify_for_range
from .config import Config
from .models import LineRange, Tier, TypeContext
from .packer import estimate_total_tokens, pack
from .resolver import ImportGraphResolver
from .scanner import ReferenceScanner, scan_references
from .sources import SymbolSource
from .visibility import filter_visible_symbols

logger = logging.getLogger(__name__)


class TypeContextBuilder:
    """Build the type context for one file read.

    Each ``build`` call is independent: it creates its own resolver state and
    tier buckets, so a single builder can serve concurrent requests.

    Example:
        builder = TypeContextBuilder(source, Config(), root="/repo")
        context = builder.build("/repo/src/main.ts", LineRange(offset=0, limit=40))
        for symbol in context.symbols:
            print(symbol.signature)
    """

    def __init__(
        self,
        source: SymbolSource,
        config: Optional[Config] = None,
        root: str | None = None,
        scanner: ReferenceScanner = scan_references,
    ):
        self.source = source
        self.config = config or Config()
        self.root = root or os.getcwd()
        self.scanner = scanner

    def build(self, file_path: str, line_range: LineRange | None = None) -> TypeContext:
        """Extract and prioritize symbols for a read of ``file_path``.

        Args:
            file_path: Absolute path of the file being read.
            line_range: Window of a partial read, or None for a full read.

        Returns:
            TypeContext with the symbols to render, in render order.
        """
        text = self._read_text(file_path)

        if self.config.budget.skip_barrel_files and text is not None and is_barrel_file(text):
            logger.debug("Skipping barrel file %s", file_path)
            return TypeContext(is_partial_read=line_range is not None, skipped_barrel=True)

        resolver = ImportGraphResolver(
            self.source,
            max_depth=self.config.imports.effective_depth,
            include_type_only=self.config.imports.include_type_only,
            root=self.root,
        )
        symbols = [
            s for s in resolver.resolve(file_path) if self.config.inject.allows(s.kind)
        ]

        include_transitive = self.config.filtering.include_transitive
        if line_range is not None and text is not None:
            buckets = classify_for_range(
                symbols, line_range.slice(text), include_transitive, self.scanner
            )
            if self.config.filtering.only_used:
                buckets.drop(Tier.LOCAL, Tier.IMPORTED)
        else:
            if line_range is not None:
                logger.debug("No source text for %s, classifying whole file", file_path)
            buckets = classify(symbols, include_transitive, self.scanner)

        budget = pack(buckets, self.config.budget.max_tokens)

        rendered = budget.symbols
        if self.config.filtering.hide_visible and line_range is not None:
            total_lines = len(text.split("\n")) if text is not None else line_range.end
            rendered = filter_visible_symbols(rendered, line_range, total_lines)

        context = TypeContext(
            symbols=list(rendered),
            budget=budget,
            is_partial_read=line_range is not None,
            estimated_tokens=estimate_total_tokens(rendered),
        )

        level = logging.INFO if self.config.debug else logging.DEBUG
        logger.log(
            level,
            "Built context for %s: %d/%d symbols, %d tokens (budget %s)",
            file_path,
            len(context.symbols),
            len(symbols),
            context.estimated_tokens,
            "exceeded" if budget.budget_exceeded else "ok",
        )
        return context

    def _read_text(self, file_path: str) -> str | None:
        try:
            return self.source.read_source(file_path)
        except Exception:
            logger.warning("Could not read source of %s", file_path, exc_info=True)
            return None
