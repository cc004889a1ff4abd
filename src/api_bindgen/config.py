"""Generator configuration.

Precedence (high to low): CLI flags, the YAML config file (``--config`` or
``$API_BINDGEN_CONFIG``), model defaults.
"""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from api_bindgen.errors import ConfigError

CONFIG_ENV_VAR = "API_BINDGEN_CONFIG"


class GeneratorConfig(BaseModel):
    """Settings that shape the emitted module."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # module holding the API object classes, imported as ``types``
    types_module: str = "api_types"
    # module the generated code imports its collaborator contracts from
    runtime_module: str = "api_bindgen.runtime"
    naming: Literal["snake", "camel"] = "snake"
    output: Path | None = None

    @field_validator("types_module", "runtime_module")
    @classmethod
    def _dotted_name(cls, value: str) -> str:
        if not value or not all(part.isidentifier() for part in value.split(".")):
            raise ValueError(f"{value!r} is not a dotted module name")
        return value


def load_config(path: Path | None) -> GeneratorConfig:
    """Load a config file, or the defaults when *path* is None."""
    if path is None:
        return GeneratorConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Invalid config at {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config at {path}: expected a mapping")
    try:
        return GeneratorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config at {path}: {e}") from e


def resolve_config(path: Path | None = None, **overrides: Any) -> GeneratorConfig:
    """Load the config file and apply non-None CLI overrides on top."""
    base = load_config(path)
    updates = {k: v for k, v in overrides.items() if v is not None}
    if not updates:
        return base
    try:
        return GeneratorConfig.model_validate({**base.model_dump(), **updates})
    except ValidationError as e:
        raise ConfigError(f"Invalid option: {e}") from e
