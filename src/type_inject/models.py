"""Data models for type-signature context extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum


class SymbolKind(str, Enum):
    """Kinds of declarations an extractor can produce."""

    FUNCTION = "function"
    TYPE_ALIAS = "type"
    INTERFACE = "interface"
    ENUM = "enum"
    CLASS = "class"
    CONSTANT = "const"


@dataclass(frozen=True)
class Symbol:
    """One extracted declaration.

    ``origin_path`` and ``import_depth`` are unset for declarations native to
    the entry file and set together for anything reached through imports.
    Line bounds are zero-based and passed through untouched.
    """

    kind: SymbolKind
    name: str
    signature: str
    documentation: str | None = None
    is_exported: bool = False
    origin_path: str | None = None
    import_depth: int | None = None
    line_start: int | None = None
    line_end: int | None = None

    @property
    def is_imported(self) -> bool:
        return self.origin_path is not None

    @property
    def key(self) -> tuple[str | None, str]:
        """Identity of the symbol: names are only unique within a file."""
        return (self.origin_path, self.name)

    def to_dict(self) -> dict:
        result = {
            "kind": self.kind.value,
            "name": self.name,
            "signature": self.signature,
            "exported": self.is_exported,
        }
        if self.documentation:
            result["documentation"] = self.documentation
        if self.origin_path is not None:
            result["origin_path"] = self.origin_path
            result["import_depth"] = self.import_depth
        if self.line_start is not None:
            result["line_start"] = self.line_start
        if self.line_end is not None:
            result["line_end"] = self.line_end
        return result


@dataclass(frozen=True)
class ImportEdge:
    """A single import statement in ``source_file``.

    ``target_file`` is the resolved absolute path, or None when the extractor
    could not resolve the specifier. An empty ``names`` set means the whole
    module is imported.
    """

    source_file: str
    specifier: str
    target_file: str | None = None
    names: frozenset[str] = frozenset()
    type_only: bool = False

    @property
    def is_relative(self) -> bool:
        return self.specifier.startswith(".")


@dataclass
class FileExtraction:
    """What an extractor reports for one file: declarations plus imports."""

    path: str
    symbols: list[Symbol] = field(default_factory=list)
    imports: list[ImportEdge] = field(default_factory=list)


@dataclass(frozen=True)
class LineRange:
    """A partial read window: ``limit`` lines starting at zero-based ``offset``."""

    offset: int
    limit: int

    @property
    def end(self) -> int:
        """Exclusive end line."""
        return self.offset + self.limit

    def slice(self, text: str) -> str:
        lines = text.split("\n")
        return "\n".join(lines[max(0, self.offset) : max(0, self.end)])


class Tier(IntEnum):
    """Importance tiers, packed in ascending order."""

    FUNCTIONS = 1        # The API: always included
    SIGNATURE_TYPES = 2  # Referenced by function signatures
    DEPENDENCIES = 3     # Referenced by tier 2 signatures
    LOCAL = 4            # Everything else declared in the entry file
    IMPORTED = 5         # Everything else reached through imports


@dataclass
class TierBuckets:
    """Symbols partitioned by tier, each bucket in input order."""

    buckets: dict[Tier, list[Symbol]] = field(
        default_factory=lambda: {tier: [] for tier in Tier}
    )

    def __getitem__(self, tier: Tier) -> list[Symbol]:
        return self.buckets[tier]

    def add(self, tier: Tier, symbol: Symbol) -> None:
        self.buckets[tier].append(symbol)

    def drop(self, *tiers: Tier) -> None:
        """Empty the given buckets."""
        for tier in tiers:
            self.buckets[tier] = []

    def names(self, tier: Tier) -> list[str]:
        return [s.name for s in self.buckets[tier]]

    def tier_of(self, symbol: Symbol) -> Tier | None:
        for tier in Tier:
            if any(s is symbol for s in self.buckets[tier]):
                return tier
        return None

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self.buckets.values())


@dataclass
class BudgetResult:
    """Output of the budget packer for one request."""

    symbols: list[Symbol] = field(default_factory=list)
    total_tokens: int = 0
    budget_exceeded: bool = False
    excluded_count: int = 0
    tier_counts: dict[Tier, int] = field(
        default_factory=lambda: {tier: 0 for tier in Tier}
    )

    def get_summary(self) -> dict:
        return {
            "included": len(self.symbols),
            "excluded": self.excluded_count,
            "total_tokens": self.total_tokens,
            "budget_exceeded": self.budget_exceeded,
            "tier_counts": {f"tier{int(t)}": n for t, n in self.tier_counts.items()},
        }


@dataclass
class TypeContext:
    """Final context for one file read, ready for a renderer."""

    symbols: list[Symbol] = field(default_factory=list)
    budget: BudgetResult = field(default_factory=BudgetResult)
    is_partial_read: bool = False
    estimated_tokens: int = 0
    skipped_barrel: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.symbols
