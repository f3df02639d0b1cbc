"""Tests for token budget packing."""

import math

import pytest

from helpers import fn, type_alias
from type_inject.classifier import classify
from type_inject.models import Symbol, Tier, TierBuckets
from type_inject.packer import (
    CHARS_PER_TOKEN,
    SYMBOL_OVERHEAD_CHARS,
    estimate_tokens,
    pack,
)


def buckets_of(**tiers) -> TierBuckets:
    buckets = TierBuckets()
    for key, symbols in tiers.items():
        tier = Tier[key.upper()]
        for symbol in symbols:
            buckets.add(tier, symbol)
    return buckets


def sized_type(name: str, tokens: int) -> Symbol:
    """A type alias whose estimate is exactly ``tokens``."""
    prefix = f"type {name} = "
    filler = tokens * CHARS_PER_TOKEN - SYMBOL_OVERHEAD_CHARS - len(prefix)
    assert filler >= 0
    return type_alias(name, prefix + "x" * filler)


class TestEstimateTokens:
    def test_signature_plus_overhead(self):
        symbol = type_alias("A", "type A = string")
        expected = math.ceil((len("type A = string") + SYMBOL_OVERHEAD_CHARS) / CHARS_PER_TOKEN)
        assert estimate_tokens(symbol) == expected

    def test_documentation_counts(self):
        bare = type_alias("A", "type A = string")
        documented = type_alias("A", "type A = string", documentation="An A. " * 20)
        assert estimate_tokens(documented) > estimate_tokens(bare)

    def test_sized_helper(self):
        assert estimate_tokens(sized_type("Foo", 12)) == 12


class TestPack:
    def test_functions_always_included(self):
        """Tier 1 is included even when the budget is tiny."""
        buckets = classify(
            [
                fn("myFunc", "function myFunc(): void"),
                type_alias("MyType", "type MyType = string"),
            ]
        )
        result = pack(buckets, token_budget=1)

        assert [s.name for s in result.symbols] == ["myFunc"]
        assert result.budget_exceeded is True
        assert result.total_tokens > 1

    def test_respects_budget(self):
        symbols = [
            type_alias(f"Type{i}", f"type Type{i} = {{ field: string; anotherField: number; }}")
            for i in range(100)
        ]
        result = pack(classify(symbols), token_budget=100)

        assert len(result.symbols) < 100
        assert result.total_tokens <= 100
        assert result.budget_exceeded is True
        assert result.excluded_count == 100 - len(result.symbols)

    def test_one_of_three_fits(self):
        """Budget of tier 1 plus one tier 2 symbol admits exactly one of three."""
        f1 = fn("a", "function a(x: T1): T2")
        f2 = fn("b", "function b(x: T3): void")
        tier2 = [sized_type("T1", 10), sized_type("T2", 10), sized_type("T3", 10)]
        budget = estimate_tokens(f1) + estimate_tokens(f2) + 10

        result = pack(buckets_of(functions=[f1, f2], signature_types=tier2), budget)

        assert [s.name for s in result.symbols] == ["a", "b", "T1"]
        assert result.tier_counts[Tier.FUNCTIONS] == 2
        assert result.tier_counts[Tier.SIGNATURE_TYPES] == 1
        assert result.total_tokens == budget
        assert result.budget_exceeded is True
        assert result.excluded_count == 2

    def test_large_symbol_does_not_block_smaller(self):
        big = sized_type("Big", 50)
        small = sized_type("Small", 8)
        result = pack(buckets_of(signature_types=[big], local=[small]), token_budget=20)

        assert [s.name for s in result.symbols] == ["Small"]
        assert result.budget_exceeded is True

    def test_tier_order_then_input_order(self):
        buckets = buckets_of(
            imported=[sized_type("E", 8)],
            local=[sized_type("D1", 8), sized_type("D2", 8)],
            dependencies=[sized_type("C", 8)],
            signature_types=[sized_type("B", 8)],
            functions=[fn("a", "function a(): B")],
        )
        result = pack(buckets, token_budget=1000)

        assert [s.name for s in result.symbols] == ["a", "B", "C", "D1", "D2", "E"]
        assert result.budget_exceeded is False
        assert result.excluded_count == 0

    def test_duplicate_symbol_included_once(self):
        shared = sized_type("Shared", 8)
        result = pack(buckets_of(signature_types=[shared], local=[shared]), token_budget=100)

        assert result.symbols == [shared]
        assert result.tier_counts[Tier.SIGNATURE_TYPES] == 1
        assert result.tier_counts[Tier.LOCAL] == 0

    def test_same_name_different_origin_both_included(self):
        local = type_alias("Config", "type Config = {}")
        imported = type_alias("Config", "type Config = {}", origin_path="./c.ts", import_depth=1)
        result = pack(buckets_of(local=[local], imported=[imported]), token_budget=100)

        assert result.symbols == [local, imported]

    @pytest.mark.parametrize("budget", [0, -5])
    def test_non_positive_budget_includes_tier1_only(self, budget):
        buckets = buckets_of(
            functions=[fn("a", "function a(): void")],
            local=[sized_type("Tiny", 8)],
        )
        result = pack(buckets, token_budget=budget)

        assert [s.name for s in result.symbols] == ["a"]
        assert result.budget_exceeded is True

    def test_non_positive_budget_flags_exceeded_even_without_drops(self):
        result = pack(buckets_of(functions=[fn("a", "function a(): void")]), token_budget=0)
        assert result.budget_exceeded is True

    def test_empty_input(self):
        result = pack(TierBuckets(), token_budget=100)

        assert result.symbols == []
        assert result.total_tokens == 0
        assert result.budget_exceeded is False
        assert result.excluded_count == 0

    def test_count_is_monotonic_for_uniform_sizes(self):
        buckets = buckets_of(
            functions=[fn("a", "function a(): void")],
            signature_types=[sized_type(f"S{i}", 8) for i in range(4)],
            local=[sized_type(f"L{i}", 8) for i in range(4)],
        )
        counts = [len(pack(buckets, budget).symbols) for budget in range(0, 80)]

        assert counts == sorted(counts)

    def test_summary(self):
        result = pack(buckets_of(functions=[fn("a", "function a(): void")]), token_budget=100)
        summary = result.get_summary()

        assert summary["included"] == 1
        assert summary["tier_counts"]["tier1"] == 1
        assert summary["budget_exceeded"] is False
