"""Encoding strategies: how each field's value is written into the request.

Every field gets exactly one strategy from :func:`select_strategy`.  A
strategy emits the value-collection statements for its field; the statements
fill ``form`` (text values) and, for multipart methods, ``files`` (binary
attachments keyed by disambiguation key).

Generated statements raise ``FieldEncodingError`` naming the method and the
field whenever a value cannot be encoded.
"""

from dataclasses import dataclass
from typing import ClassVar

from api_bindgen.generator.planner import Param
from api_bindgen.generator.resolver import INPUT_FILE, INPUT_MEDIA, INPUT_MEDIA_ARRAY, REPLY_MARKUP

INDENT = "    "


def quote(text: str) -> str:
    """Render *text* as a double-quoted Python string literal."""
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def indent(lines: list[str], depth: int = 1) -> list[str]:
    return [INDENT * depth + line if line else line for line in lines]


def _wrapped(method_name: str, param: Param, statement: str, reason: str = "str(err)") -> list[str]:
    key = quote(param.field.name)
    return [
        "try:",
        INDENT + statement,
        "except Exception as err:",
        INDENT + f"raise FieldEncodingError({quote(method_name)}, {key}, {reason}) from err",
    ]


class EncodingStrategy:
    """Base class; subclasses own the statements for one kind of field."""

    multipart: ClassVar[bool] = False

    def guard(self, param: Param) -> str | None:
        """Condition the statements run under, or None for unconditional."""
        if param.required:
            return None
        return f"{param.expr} is not None"

    def body(self, method_name: str, param: Param) -> list[str]:
        raise NotImplementedError

    def emit(self, method_name: str, param: Param) -> list[str]:
        lines = self.body(method_name, param)
        condition = self.guard(param)
        if condition is None:
            return lines
        return [f"if {condition}:"] + indent(lines)


@dataclass(frozen=True)
class PrimitiveStrategy(EncodingStrategy):
    def body(self, method_name: str, param: Param) -> list[str]:
        key = quote(param.field.name)
        return [f"form[{key}] = {param.resolved.to_text(param.expr)}"]


@dataclass(frozen=True)
class AttachmentStrategy(EncodingStrategy):
    """A file upload; with *accepts_text* a plain string (file id or URL) is sent as is."""

    accepts_text: bool = False
    multipart: ClassVar[bool] = True

    def body(self, method_name: str, param: Param) -> list[str]:
        key = quote(param.field.name)
        attach = quote("attach://" + param.field.name)
        value = param.expr
        lines = []
        keyword = "if"
        if self.accepts_text:
            lines += [
                f"if isinstance({value}, str):",
                f"    form[{key}] = {value}",
            ]
            keyword = "elif"
        lines += [
            f"{keyword} isinstance({value}, NamedReader):",
            f"    form[{key}] = {attach}",
            f"    files[{key}] = {value}",
            f"elif is_readable({value}):",
            f"    form[{key}] = {attach}",
            f"    files[{key}] = NamedReader({value})",
            "else:",
            f"    raise FieldEncodingError({quote(method_name)}, {key}, "
            + '"unsupported value type " + type(' + value + ").__name__)",
        ]
        return lines


@dataclass(frozen=True)
class MarkupStrategy(EncodingStrategy):
    def body(self, method_name: str, param: Param) -> list[str]:
        key = quote(param.field.name)
        return _wrapped(method_name, param, f"form[{key}] = {param.expr}.markup_json()")


@dataclass(frozen=True)
class MediaStrategy(EncodingStrategy):
    multipart: ClassVar[bool] = True

    def body(self, method_name: str, param: Param) -> list[str]:
        key = quote(param.field.name)
        return _wrapped(method_name, param, f"form[{key}] = {param.expr}.media_json({key}, files)")


@dataclass(frozen=True)
class MediaListStrategy(EncodingStrategy):
    """A sequence of media objects; item *n* is keyed ``<field><n>``."""

    multipart: ClassVar[bool] = True

    def guard(self, param: Param) -> str | None:
        return param.expr

    def body(self, method_name: str, param: Param) -> list[str]:
        key = quote(param.field.name)
        item_key = 'f"' + param.field.name + '{idx}"'
        lines = [
            "items = []",
            f"for idx, item in enumerate({param.expr}):",
        ]
        lines += indent(_wrapped(
            method_name,
            param,
            f"items.append(item.media_json({item_key}, files))",
            reason='f"item {idx}: {err}"',
        ))
        lines.append(f'form[{key}] = "[" + ",".join(items) + "]"')
        return lines


@dataclass(frozen=True)
class JsonStrategy(EncodingStrategy):
    """Any other structured value, sent as JSON text."""

    is_array: bool = False

    def guard(self, param: Param) -> str | None:
        if self.is_array:
            return param.expr
        return super().guard(param)

    def body(self, method_name: str, param: Param) -> list[str]:
        key = quote(param.field.name)
        return _wrapped(method_name, param, f"form[{key}] = encode_json({param.expr})")


def select_strategy(param: Param) -> EncodingStrategy:
    """Pick the strategy for *param*; a pure function of its resolved type."""
    resolved = param.resolved
    if resolved.stringer is not None:
        return PrimitiveStrategy()
    if resolved.schema_type == INPUT_FILE:
        return AttachmentStrategy(accepts_text=resolved.accepts_text)
    if resolved.schema_type == REPLY_MARKUP:
        return MarkupStrategy()
    if resolved.schema_type == INPUT_MEDIA:
        return MediaStrategy()
    if resolved.schema_type == INPUT_MEDIA_ARRAY:
        return MediaListStrategy()
    return JsonStrategy(is_array=resolved.is_array)


@dataclass(frozen=True)
class EncodedFields:
    lines: tuple[str, ...]  # body statements, not yet indented
    multipart: bool


def requires_multipart(params: list[Param] | tuple[Param, ...]) -> bool:
    return any(select_strategy(p).multipart for p in params)


def encode_fields(method_name: str, params: list[Param] | tuple[Param, ...]) -> EncodedFields:
    """Emit the value-collection statements for every field, in order."""
    lines: list[str] = []
    multipart = False
    for p in params:
        strategy = select_strategy(p)
        multipart = multipart or strategy.multipart
        lines.extend(strategy.emit(method_name, p))
    return EncodedFields(lines=tuple(lines), multipart=multipart)
