from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load an optional YAML config file
- Validate it against config_schema.json (unknown keys rejected)
- Apply defaults for every missing key
- Let CLI flags override file values (``with_overrides``)
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ConverterConfig:
    output_prefix: str = "item-"
    output_directory: str = "."
    delimiter: str = ","
    encoding: str = "utf-8-sig"
    indent: int | None = None  # None -> compact JSON

    def with_overrides(self, **overrides: Any) -> ConverterConfig:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def default_config() -> ConverterConfig:
    return ConverterConfig()


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: schema file missing / not valid JSON, or data fails validation
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> ConverterConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    defaults = default_config()
    return ConverterConfig(
        output_prefix=data.get("output_prefix", defaults.output_prefix),
        output_directory=data.get("output_directory", defaults.output_directory),
        delimiter=data.get("delimiter", defaults.delimiter),
        encoding=data.get("encoding", defaults.encoding),
        indent=data.get("indent", defaults.indent),
    )
