"""Symbol builders shared by the test modules."""

from type_inject.models import Symbol, SymbolKind

REPO = "/repo"
DEPTH_DIR = f"{REPO}/tests/fixtures/depth-test"


def make_symbol(kind: SymbolKind, name: str, signature: str, **kwargs) -> Symbol:
    return Symbol(kind=kind, name=name, signature=signature, is_exported=True, **kwargs)


def fn(name: str, signature: str, **kwargs) -> Symbol:
    return make_symbol(SymbolKind.FUNCTION, name, signature, **kwargs)


def type_alias(name: str, signature: str, **kwargs) -> Symbol:
    return make_symbol(SymbolKind.TYPE_ALIAS, name, signature, **kwargs)


def interface(name: str, signature: str, **kwargs) -> Symbol:
    return make_symbol(SymbolKind.INTERFACE, name, signature, **kwargs)
