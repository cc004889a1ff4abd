"""Naming and type resolution.

Maps schema type declarations to the Python representation used in the
generated module, and schema-case names to Python identifiers.

**Preferred type ranking** (first match wins):

* every candidate is a media type -> ``InputMedia`` (``Array of InputMedia``
  when any candidate is an array);
* exactly one candidate -> that candidate;
* ``InputFile`` or ``String`` -> ``InputFile``;
* ``Integer`` or ``String`` -> ``Integer``;
* every candidate is a reply markup type -> ``ReplyMarkup``.

Anything else is an :class:`~api_bindgen.errors.UnresolvableTypeError`.
Everything here is pure; the same input always gives the same output.
"""

import keyword
import re
from dataclasses import dataclass

from api_bindgen.errors import UnresolvableTypeError
from api_bindgen.schema.base import APIDescription, Field, MethodDescription

ARRAY_PREFIX = "Array of "

INPUT_FILE = "InputFile"
INPUT_MEDIA = "InputMedia"
INPUT_MEDIA_ARRAY = ARRAY_PREFIX + INPUT_MEDIA
REPLY_MARKUP = "ReplyMarkup"

MEDIA_PREFIXES = ("InputMedia", "InputPaidMedia")

MARKUP_TYPES = frozenset({
    "InlineKeyboardMarkup",
    "ReplyKeyboardMarkup",
    "ReplyKeyboardRemove",
    "ForceReply",
})

_PRIMITIVES: dict[str, str] = {
    "Integer": "int",
    "Float": "float",
    "Float number": "float",
    "Boolean": "bool",
    "True": "bool",
    "String": "str",
}

# Python expression templates turning a value into its form text.
_STRINGERS: dict[str, str] = {
    "int": "str({})",
    "float": "str({})",
    "bool": '"true" if {} else "false"',
    "str": "{}",
}

_ZERO_VALUES: dict[str, str] = {
    "int": "0",
    "float": "0.0",
    "bool": "False",
    "str": '""',
}

# Names bound inside every generated function body.
RESERVED_NAMES = frozenset({
    "transport",
    "opts",
    "form",
    "files",
    "raw",
    "err",
    "idx",
    "item",
    "items",
    "types",
    "dataclass",
})


@dataclass(frozen=True)
class ResolvedType:
    """The Python representation chosen for a field or return type."""

    schema_type: str  # the preferred type
    annotation: str
    is_object: bool = False  # an API object, passed by reference
    is_array: bool = False
    accepts_text: bool = False  # attachment that also takes a plain string
    stringer: str | None = None

    def to_text(self, expr: str) -> str:
        """Render the string conversion of *expr*; only valid for primitives."""
        if self.stringer is None:
            raise ValueError(f"{self.schema_type} has no string conversion")
        return self.stringer.format(expr)


@dataclass(frozen=True)
class ResolvedReturn:
    annotation: str
    target: str  # runtime expression handed to decode_result
    zero_value: str
    by_reference: bool


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


def to_lower_camel(name: str) -> str:
    """``chat_id`` -> ``chatId``."""
    head, *rest = name.split("_")
    return head + "".join(p[:1].upper() + p[1:] for p in rest)


def to_upper_camel(name: str) -> str:
    """``chat_id`` -> ``ChatId``; ``sendPhoto`` -> ``SendPhoto``."""
    return "".join(p[:1].upper() + p[1:] for p in name.split("_"))


def to_snake(name: str) -> str:
    """``sendPhoto`` -> ``send_photo``; snake-case input is returned unchanged."""
    result = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    result = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", result)
    return result.lower()


def sanitize_identifier(name: str, reserved: frozenset[str] = frozenset()) -> str:
    """Append an underscore to keywords and *reserved* names (PEP 8 convention)."""
    if keyword.iskeyword(name) or name in reserved:
        return f"{name}_"
    return name


# ---------------------------------------------------------------------------
# Type helpers
# ---------------------------------------------------------------------------


def is_array(type_name: str) -> bool:
    return type_name.startswith(ARRAY_PREFIX)


def element_type(type_name: str) -> str:
    """Strip every ``Array of`` prefix."""
    while is_array(type_name):
        type_name = type_name[len(ARRAY_PREFIX):]
    return type_name


def is_media(type_name: str) -> bool:
    return element_type(type_name).startswith(MEDIA_PREFIXES)


def preferred_type(field: Field) -> str:
    """Choose the single schema type that represents *field*."""
    candidates = field.types
    if all(is_media(t) for t in candidates):
        if any(is_array(t) for t in candidates):
            return INPUT_MEDIA_ARRAY
        return INPUT_MEDIA

    if len(candidates) == 1:
        return candidates[0]

    pair = set(candidates)
    if len(candidates) == 2:
        if pair == {INPUT_FILE, "String"}:
            return INPUT_FILE
        if pair == {"Integer", "String"}:
            return "Integer"

    if pair <= MARKUP_TYPES:
        return REPLY_MARKUP

    raise UnresolvableTypeError(field.name, candidates)


class Resolver:
    """Resolves fields, return types and identifiers against one description."""

    def __init__(self, description: APIDescription, naming: str = "snake"):
        self.description = description
        self.naming = naming

    # -- identifiers ----------------------------------------------------------

    def function_name(self, method_name: str) -> str:
        if self.naming == "camel":
            return sanitize_identifier(method_name)
        return sanitize_identifier(to_snake(method_name))

    def param_name(self, field_name: str) -> str:
        if self.naming == "camel":
            return sanitize_identifier(to_lower_camel(field_name), RESERVED_NAMES)
        return sanitize_identifier(field_name, RESERVED_NAMES)

    def attr_name(self, field_name: str) -> str:
        if self.naming == "camel":
            return sanitize_identifier(to_upper_camel(field_name))
        return sanitize_identifier(field_name)

    def opts_name(self, method_name: str) -> str:
        return to_upper_camel(method_name) + "Opts"

    # -- types ----------------------------------------------------------------

    def is_api_object(self, type_name: str) -> bool:
        return type_name in self.description.types and type_name not in (INPUT_FILE, INPUT_MEDIA, REPLY_MARKUP)

    def annotation(self, type_name: str) -> str:
        """Python annotation for a schema type name."""
        if is_array(type_name):
            return f"list[{self.annotation(type_name[len(ARRAY_PREFIX):])}]"
        if type_name in _PRIMITIVES:
            return _PRIMITIVES[type_name]
        if type_name in (INPUT_FILE, INPUT_MEDIA, REPLY_MARKUP):
            return type_name
        if type_name in self.description.types:
            return f"types.{type_name}"
        raise UnresolvableTypeError(type_name, [type_name], "unknown type")

    def _resolve_type(self, schema_type: str, accepts_text: bool = False) -> ResolvedType:
        annotation = self.annotation(schema_type)
        if accepts_text:
            annotation = f"{annotation} | str"
        return ResolvedType(
            schema_type=schema_type,
            annotation=annotation,
            is_object=not is_array(schema_type) and self.is_api_object(schema_type),
            is_array=is_array(schema_type),
            accepts_text=accepts_text,
            stringer=_STRINGERS.get(annotation),
        )

    def resolve_field(self, field: Field) -> ResolvedType:
        schema_type = preferred_type(field)
        accepts_text = schema_type == INPUT_FILE and len(field.types) > 1
        try:
            return self._resolve_type(schema_type, accepts_text)
        except UnresolvableTypeError as e:
            raise UnresolvableTypeError(field.name, field.types, f"unknown type {schema_type!r}") from e

    def resolve_return(self, method: MethodDescription) -> ResolvedReturn:
        """Resolve the result type of *method*.

        Several declared candidates become an explicit union whose zero value
        is ``None``; no candidate is silently dropped.
        """
        try:
            resolved = [self._resolve_type(t) for t in method.returns]
        except UnresolvableTypeError as e:
            raise UnresolvableTypeError("<returns>", method.returns, "unknown return type") from e

        annotations = list(dict.fromkeys(r.annotation for r in resolved))
        if len(annotations) > 1:
            target = " | ".join(annotations)
            return ResolvedReturn(f"{target} | None", target, "None", by_reference=True)

        result = resolved[0]
        target = result.annotation
        if result.is_object:
            return ResolvedReturn(f"{target} | None", target, "None", by_reference=True)
        if result.is_array:
            return ResolvedReturn(target, target, "[]", by_reference=False)
        if target in _ZERO_VALUES:
            return ResolvedReturn(target, target, _ZERO_VALUES[target], by_reference=False)
        return ResolvedReturn(f"{target} | None", target, "None", by_reference=True)
