from __future__ import annotations

import json
import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.mapping import ColumnMapping, VendorMapping
from ..models.markup import Markup

"""Config loader.

Responsibilities:
- Load the YAML config (default config/pricesync.yml, or $PRICESYNC_CONFIG)
- Validate it against config_schema.json
- Apply defaults (markup multiplier 1.0, no subclass table, no null sentinels)
- Resolve vendor column mappings given by header name against a sheet header
"""

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "ConfigError",
    "MarkupConfig",
    "PriceSyncConfig",
    "default_config_path",
    "load_config",
    "resolve_vendor_mapping",
]

CONFIG_ENV_VAR = "PRICESYNC_CONFIG"
DEFAULT_CONFIG_PATH = Path("config/pricesync.yml")
SCHEMA_PATH = Path(__file__).parent / "config_schema.json"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class MarkupConfig:
    default_multiplier: float = 1.0
    subclasses: dict[str, float] = field(default_factory=dict)

    @property
    def default_markup(self) -> Markup:
        return Markup(multiplier=self.default_multiplier)

    @property
    def markup_table(self) -> dict[str, Markup]:
        return {name: Markup(multiplier=m) for name, m in self.subclasses.items()}


@dataclass(frozen=True)
class PriceSyncConfig:
    vendor_file: str
    company_file: str
    vendor_mapping: dict[str, dict[str, Any]]  # field -> {name?, index?}
    markup: MarkupConfig = field(default_factory=MarkupConfig)
    output_file: str | None = None
    null_sentinels: list[str] | None = None


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing/invalid, or the data fails validation
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path)
        suffix = f" (at {location})" if location else ""
        raise ConfigError(f"config validation failed: {e.message}{suffix}") from e


def default_config_path() -> Path:
    """$PRICESYNC_CONFIG if set, else config/pricesync.yml."""
    env = os.getenv(CONFIG_ENV_VAR)
    return Path(env) if env else DEFAULT_CONFIG_PATH


def load_config(path: Path) -> PriceSyncConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    markup_raw = data.get("markup") or {}
    markup = MarkupConfig(
        default_multiplier=float(markup_raw.get("default_multiplier", 1.0)),
        subclasses={str(k): float(v) for k, v in (markup_raw.get("subclasses") or {}).items()},
    )
    return PriceSyncConfig(
        vendor_file=data["vendor_file"],
        company_file=data["company_file"],
        vendor_mapping=data["vendor_mapping"],
        markup=markup,
        output_file=data.get("output_file"),
        null_sentinels=data.get("null_sentinels"),
    )


def resolve_vendor_mapping(headers: Sequence[str], entries: dict[str, dict[str, Any]]) -> VendorMapping:
    """Build a VendorMapping from config entries and the vendor sheet header.

    An entry with only ``name`` gets its index from the header; an entry with
    only ``index`` gets its display name from the header (or "" if the index
    is past the header). Index bounds against data rows are checked per row
    by the vendor processor, not here.

    Raises:
        ConfigError: If a named column is not in the header
    """
    resolved: dict[str, ColumnMapping] = {}
    for fld, entry in entries.items():
        index = entry.get("index")
        name = entry.get("name")
        if index is None:
            if name not in headers:
                raise ConfigError(f"vendor column '{name}' for {fld} not found in header {list(headers)}")
            index = list(headers).index(name)
        if name is None:
            name = headers[index] if 0 <= index < len(headers) else ""
        resolved[fld] = ColumnMapping(name=name, index=index)
    return VendorMapping.from_dict(resolved)
