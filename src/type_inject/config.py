"""Configuration management for type injection."""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .models import SymbolKind


load_dotenv()

logger = logging.getLogger(__name__)


class ImportSettings(BaseModel):
    """How far and which imports are followed."""

    enabled: bool = Field(default=True)
    max_depth: int = Field(default=4, ge=0)
    include_type_only: bool = Field(default=True)

    @property
    def effective_depth(self) -> int:
        return self.max_depth if self.enabled else 0


class FilteringSettings(BaseModel):
    include_transitive: bool = Field(default=True)
    hide_visible: bool = Field(default=True)
    # Partial reads: keep only symbols used in the window and their dependencies
    only_used: bool = Field(default=True)


class BudgetSettings(BaseModel):
    # Values <= 0 are allowed: only tier 1 gets included
    max_tokens: int = Field(default=10000)
    skip_barrel_files: bool = Field(default=True)


class InjectSettings(BaseModel):
    """Which declaration kinds are injected."""

    functions: bool = Field(default=True)
    types: bool = Field(default=True)
    interfaces: bool = Field(default=True)
    enums: bool = Field(default=True)
    classes: bool = Field(default=True)
    constants: bool = Field(default=True)

    def allows(self, kind: SymbolKind) -> bool:
        return {
            SymbolKind.FUNCTION: self.functions,
            SymbolKind.TYPE_ALIAS: self.types,
            SymbolKind.INTERFACE: self.interfaces,
            SymbolKind.ENUM: self.enums,
            SymbolKind.CLASS: self.classes,
            SymbolKind.CONSTANT: self.constants,
        }[kind]


class Config(BaseModel):
    """Application configuration."""

    debug: bool = Field(default=False)
    imports: ImportSettings = Field(default_factory=ImportSettings)
    filtering: FilteringSettings = Field(default_factory=FilteringSettings)
    budget: BudgetSettings = Field(default_factory=BudgetSettings)
    inject: InjectSettings = Field(default_factory=InjectSettings)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        def _parse_int(value: Optional[str], fallback: int) -> int:
            try:
                return int(value) if value is not None else fallback
            except ValueError:
                return fallback

        def _parse_bool(value: Optional[str], fallback: bool) -> bool:
            if value is None:
                return fallback
            return value.strip().lower() in ("1", "true", "yes", "on")

        return cls(
            debug=_parse_bool(os.getenv("TYPE_INJECT_DEBUG"), False),
            imports=ImportSettings(
                enabled=_parse_bool(os.getenv("TYPE_INJECT_IMPORTS"), True),
                max_depth=max(0, _parse_int(os.getenv("TYPE_INJECT_MAX_DEPTH"), 4)),
                include_type_only=_parse_bool(os.getenv("TYPE_INJECT_INCLUDE_TYPE_ONLY"), True),
            ),
            filtering=FilteringSettings(
                include_transitive=_parse_bool(os.getenv("TYPE_INJECT_INCLUDE_TRANSITIVE"), True),
                hide_visible=_parse_bool(os.getenv("TYPE_INJECT_HIDE_VISIBLE"), True),
                only_used=_parse_bool(os.getenv("TYPE_INJECT_ONLY_USED"), True),
            ),
            budget=BudgetSettings(
                max_tokens=_parse_int(os.getenv("TYPE_INJECT_MAX_TOKENS"), 10000),
                skip_barrel_files=_parse_bool(os.getenv("TYPE_INJECT_SKIP_BARREL_FILES"), True),
            ),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        """Load configuration from a YAML file, falling back to defaults."""
        try:
            raw = yaml.safe_load(Path(path).read_text()) or {}
        except (OSError, yaml.YAMLError):
            logger.warning("Could not read config file %s, using defaults", path)
            return cls()

        if not isinstance(raw, dict):
            logger.warning("Config file %s is not a mapping, using defaults", path)
            return cls()

        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            logger.warning("Invalid config file %s, using defaults: %s", path, e)
            return cls()
