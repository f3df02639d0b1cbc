"""Token budget packing over tier buckets."""

from __future__ import annotations

import logging
import math

from .models import BudgetResult, Symbol, Tier, TierBuckets

logger = logging.getLogger(__name__)

CHARS_PER_TOKEN = 4
# Formatting overhead per symbol (newlines, separators)
SYMBOL_OVERHEAD_CHARS = 10
DEFAULT_TOKEN_BUDGET = 1500

# Tiers that are included regardless of the remaining budget
MANDATORY_TIERS = frozenset({Tier.FUNCTIONS})


def estimate_tokens(symbol: Symbol) -> int:
    """Estimate the rendered size of a symbol in tokens."""
    chars = len(symbol.signature) + SYMBOL_OVERHEAD_CHARS
    if symbol.documentation:
        chars += len(symbol.documentation)
    return math.ceil(chars / CHARS_PER_TOKEN)


def estimate_total_tokens(symbols: list[Symbol]) -> int:
    return sum(estimate_tokens(s) for s in symbols)


def pack(buckets: TierBuckets, token_budget: int = DEFAULT_TOKEN_BUDGET) -> BudgetResult:
    """Greedily include symbols tier by tier under ``token_budget``.

    Tier 1 is always included in full, so the budget is a soft target that
    only constrains tiers 2-5. Within those tiers a symbol that does not fit
    is skipped and later, smaller symbols are still considered. A symbol
    appearing twice is included once.

    Args:
        buckets: Classified symbols.
        token_budget: Budget in tokens. A value <= 0 includes tier 1 only.

    Returns:
        BudgetResult with symbols in tier order, then bucket order.
    """
    result = BudgetResult()
    included: set[tuple[str | None, str]] = set()

    if token_budget <= 0:
        result.budget_exceeded = True

    for tier in Tier:
        mandatory = tier in MANDATORY_TIERS
        for symbol in buckets[tier]:
            if symbol.key in included:
                continue

            tokens = estimate_tokens(symbol)
            if not mandatory and (
                token_budget <= 0 or result.total_tokens + tokens > token_budget
            ):
                # Keep going: a smaller symbol later on may still fit
                result.budget_exceeded = True
                continue

            result.symbols.append(symbol)
            included.add(symbol.key)
            result.total_tokens += tokens
            result.tier_counts[tier] += 1

    result.excluded_count = len(buckets) - len(result.symbols)

    logger.debug(
        "Packer: %d/%d symbols included, %d/%d tokens (budget %s)",
        len(result.symbols),
        len(buckets),
        result.total_tokens,
        token_budget,
        "exceeded" if result.budget_exceeded else "ok",
    )
    return result
