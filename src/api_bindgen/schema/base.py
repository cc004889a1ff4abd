"""Data models for a loaded API description.

The loader converts the input document into these models; every generator
stage reads them and none modifies them.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


def _type_names(value: Any) -> Any:
    # YAML reads an unquoted True as a boolean; the API spells the type "True".
    if isinstance(value, list):
        return ["True" if item is True else item for item in value]
    return value


class Field(BaseModel):
    """A single method or type field."""

    model_config = ConfigDict(frozen=True)

    name: str  # schema-case, e.g. chat_id
    types: list[str]  # acceptable type names; a union when more than one
    required: bool = False
    description: str = ""

    @field_validator("types", mode="before")
    @classmethod
    def _coerce_types(cls, value: Any) -> Any:
        return _type_names(value)

    @field_validator("types")
    @classmethod
    def _types_not_empty(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("a field must list at least one type")
        return value


class TypeDescription(BaseModel):
    """A named API object type."""

    model_config = ConfigDict(frozen=True)

    fields: list[Field] = []
    description: list[str] = []
    href: str = ""


class MethodDescription(BaseModel):
    """A single remote method with its ordered fields."""

    model_config = ConfigDict(frozen=True)

    fields: list[Field] = []
    returns: list[str]
    description: list[str] = []
    href: str = ""

    @field_validator("returns", mode="before")
    @classmethod
    def _coerce_returns(cls, value: Any) -> Any:
        return _type_names(value)

    @field_validator("returns")
    @classmethod
    def _returns_not_empty(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("a method must declare at least one return type")
        return value


class APIDescription(BaseModel):
    """The whole API: named types and named methods."""

    model_config = ConfigDict(frozen=True)

    types: dict[str, TypeDescription] = {}
    methods: dict[str, MethodDescription] = {}
