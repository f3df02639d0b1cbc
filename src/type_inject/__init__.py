"""Type Inject - Type-signature context for AI file reads."""

__version__ = "0.1.0"

from .config import Config
from .models import (
    SymbolKind,
    Symbol,
    ImportEdge,
    FileExtraction,
    LineRange,
    Tier,
    TierBuckets,
    BudgetResult,
    TypeContext,
)
from .scanner import ReferenceScanner, scan_references, scan_identifiers
from .sources import SymbolSource, InMemorySymbolSource, ExtractionError
from .resolver import ImportGraphResolver
from .classifier import classify, classify_for_range
from .packer import estimate_tokens, pack
from .barrel import is_barrel_file
from .visibility import filter_visible_symbols
from .builder import TypeContextBuilder

__all__ = [
    "Config",
    "SymbolKind",
    "Symbol",
    "ImportEdge",
    "FileExtraction",
    "LineRange",
    "Tier",
    "TierBuckets",
    "BudgetResult",
    "TypeContext",
    "ReferenceScanner",
    "scan_references",
    "scan_identifiers",
    "SymbolSource",
    "InMemorySymbolSource",
    "ExtractionError",
    "ImportGraphResolver",
    "classify",
    "classify_for_range",
    "estimate_tokens",
    "pack",
    "is_barrel_file",
    "filter_visible_symbols",
    "TypeContextBuilder",
]
