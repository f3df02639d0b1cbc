"""Pytest configuration and shared fixtures."""

import pytest

from type_inject.config import Config
from helpers import DEPTH_DIR, fn, type_alias
from type_inject.sources import InMemorySymbolSource


@pytest.fixture
def depth_source() -> InMemorySymbolSource:
    """Import chain main -> user -> role -> permission -> audit."""
    source = InMemorySymbolSource()
    source.add_file(
        f"{DEPTH_DIR}/main.ts",
        symbols=[fn("getUser", "function getUser(id: string): User", line_start=2, line_end=9)],
        imports=[("./user", {"User"}, True)],
        text=(
            'import type { User } from "./user";\n'
            "\n"
            "export function getUser(id: string): User {\n"
            "\treturn {\n"
            "\t\tid,\n"
            '\t\tname: "test",\n'
            '\t\temail: "test@test.com",\n'
            '\t\trole: { name: "admin", permissions: [] },\n'
            "\t};\n"
            "}\n"
        ),
    )
    source.add_file(
        f"{DEPTH_DIR}/user.ts",
        symbols=[
            type_alias(
                "User",
                "type User = { id: string; name: string; email: string; role: Role }",
                line_start=3,
                line_end=8,
            )
        ],
        imports=[("./role", {"Role"}, True)],
    )
    source.add_file(
        f"{DEPTH_DIR}/role.ts",
        symbols=[type_alias("Role", "type Role = { name: string; permissions: Permission[] }")],
        imports=[("./permission", {"Permission"}, True)],
    )
    source.add_file(
        f"{DEPTH_DIR}/permission.ts",
        symbols=[
            type_alias(
                "Permission",
                "type Permission = { action: string; resource: string; audit?: AuditLog }",
            )
        ],
        imports=[("./audit", {"AuditLog"}, True)],
    )
    source.add_file(
        f"{DEPTH_DIR}/audit.ts",
        symbols=[type_alias("AuditLog", "type AuditLog = { at: string }")],
    )
    return source


@pytest.fixture
def config() -> Config:
    """Provide a test configuration."""
    return Config()
