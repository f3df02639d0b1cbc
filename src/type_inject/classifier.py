"""Tier classification for extracted symbols.

Tiers:
1. Function signatures (the API)
2. Types referenced by function signatures
3. Types referenced by tier 2 signatures (one level only)
4. Other entry-file symbols
5. Other imported symbols
"""

from __future__ import annotations

import logging

from .models import Symbol, SymbolKind, Tier, TierBuckets
from .scanner import ReferenceScanner, scan_identifiers, scan_references

logger = logging.getLogger(__name__)


def classify(
    symbols: list[Symbol],
    include_transitive: bool = True,
    scanner: ReferenceScanner = scan_references,
) -> TierBuckets:
    """Partition symbols into tiers by reachability from function signatures.

    Every symbol lands in exactly one bucket, with precedence
    1 > 2 > 3 > 4/5. Buckets keep input order, so the result is stable for
    a given input.
    """
    all_names = {s.name for s in symbols}
    functions = [s for s in symbols if s.kind == SymbolKind.FUNCTION]
    function_names = {f.name for f in functions}

    signature_names: set[str] = set()
    for func in functions:
        signature_names.update(
            name for name in scanner(func.signature) if name in all_names and name != func.name
        )

    dependency_names: set[str] = set()
    if include_transitive:
        claimed = function_names | signature_names
        for symbol in symbols:
            if symbol.kind == SymbolKind.FUNCTION or symbol.name not in signature_names:
                continue
            dependency_names.update(
                name
                for name in scanner(symbol.signature)
                if name in all_names and name not in claimed and name != symbol.name
            )

    buckets = _assign(symbols, _function_tier, signature_names, dependency_names)
    _log_tiers(buckets)
    return buckets


def classify_for_range(
    symbols: list[Symbol],
    range_text: str,
    include_transitive: bool = True,
    scanner: ReferenceScanner = scan_references,
) -> TierBuckets:
    """Classify symbols for a partial read of ``range_text``.

    Symbols named anywhere in the window are "used": used functions go to
    tier 1 and other used symbols to tier 2. Functions outside the window
    get no special treatment. First-level signature references of used
    symbols form tier 3.
    """
    all_names = {s.name for s in symbols}
    used_names = scan_identifiers(range_text) & all_names

    dependency_names: set[str] = set()
    if include_transitive:
        for symbol in symbols:
            if symbol.name not in used_names:
                continue
            dependency_names.update(
                name
                for name in scanner(symbol.signature)
                if name in all_names and name not in used_names and name != symbol.name
            )

    def used_function(symbol: Symbol) -> bool:
        return symbol.kind == SymbolKind.FUNCTION and symbol.name in used_names

    buckets = _assign(symbols, used_function, used_names, dependency_names)
    logger.debug(
        "Range scan: %d used names, %d dependencies", len(used_names), len(dependency_names)
    )
    _log_tiers(buckets)
    return buckets


def _function_tier(symbol: Symbol) -> bool:
    return symbol.kind == SymbolKind.FUNCTION


def _assign(symbols, is_tier1, tier2_names: set[str], tier3_names: set[str]) -> TierBuckets:
    buckets = TierBuckets()
    for symbol in symbols:
        if is_tier1(symbol):
            buckets.add(Tier.FUNCTIONS, symbol)
        elif symbol.kind != SymbolKind.FUNCTION and symbol.name in tier2_names:
            buckets.add(Tier.SIGNATURE_TYPES, symbol)
        elif symbol.kind != SymbolKind.FUNCTION and symbol.name in tier3_names:
            buckets.add(Tier.DEPENDENCIES, symbol)
        elif symbol.is_imported:
            buckets.add(Tier.IMPORTED, symbol)
        else:
            buckets.add(Tier.LOCAL, symbol)
    return buckets


def _log_tiers(buckets: TierBuckets) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug("Tier assignment:")
    for tier in Tier:
        logger.debug(
            "  Tier %d (%s): %s",
            tier,
            tier.name.lower(),
            ", ".join(buckets.names(tier)) or "none",
        )
