"""API description loader.

Reads an already-structured JSON or YAML document (YAML is a superset of
JSON, so one reader covers both) and validates it into an APIDescription.
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from api_bindgen.errors import SchemaLoadError
from api_bindgen.schema.base import APIDescription


def load_description(file_path: Path) -> APIDescription:
    """Load an API description file into an APIDescription."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaLoadError(f"cannot read {file_path}: {e}") from e

    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"{file_path} is not valid JSON/YAML: {e}") from e

    if not isinstance(doc, dict):
        raise SchemaLoadError(f"{file_path}: expected a mapping at the top level")

    return parse_description(doc, source=str(file_path))


def parse_description(doc: dict, source: str = "<document>") -> APIDescription:
    """Validate an in-memory document into an APIDescription."""
    try:
        return APIDescription.model_validate(doc)
    except ValidationError as e:
        raise SchemaLoadError(f"{source}: invalid API description:\n{e}") from e
