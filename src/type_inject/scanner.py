"""Reference scanning for signature text.

Finding which types a signature refers to is done syntactically: any
capitalized identifier is a candidate. False positives are harmless since
callers only use the result to pull in symbols that actually exist.
"""

from __future__ import annotations

import re
from typing import Protocol, runtime_checkable

# Built-in and generic utility type names never worth resolving
BUILTIN_TYPE_NAMES: frozenset[str] = frozenset(
    {
        "String",
        "Number",
        "Boolean",
        "Object",
        "Array",
        "Function",
        "Promise",
        "Date",
        "Map",
        "Set",
        "WeakMap",
        "WeakSet",
        "RegExp",
        "Error",
        "Symbol",
        "BigInt",
        "Record",
        "Partial",
        "Required",
        "Readonly",
        "Pick",
        "Omit",
        "Exclude",
        "Extract",
        "NonNullable",
        "Parameters",
        "ReturnType",
        "InstanceType",
        "ThisType",
        "Uppercase",
        "Lowercase",
        "Capitalize",
        "Uncapitalize",
    }
)

_TYPE_NAME_RE = re.compile(r"\b([A-Z][A-Za-z0-9]*)\b")
_IDENTIFIER_RE = re.compile(r"\b[A-Za-z_][A-Za-z0-9_]*\b")


@runtime_checkable
class ReferenceScanner(Protocol):
    """Strategy for finding referenced type names in signature text."""

    def __call__(self, text: str) -> set[str]:
        ...


def scan_references(text: str) -> set[str]:
    """Return capitalized names in ``text`` that may refer to declared types."""
    return {
        match.group(1)
        for match in _TYPE_NAME_RE.finditer(text)
        if match.group(1) not in BUILTIN_TYPE_NAMES
    }


def scan_identifiers(text: str) -> set[str]:
    """Return every identifier-like token in ``text``.

    Covers both capitalized type names and lowercase function/variable
    names, which is what a partial read window needs.
    """
    return set(_IDENTIFIER_RE.findall(text))
