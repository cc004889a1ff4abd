"""Runtime support imported by generated binding modules.

Generated functions are stateless: each call builds its own form values and
attachment map and hands them to a caller-supplied :class:`Transport`, so one
transport may be shared by any number of concurrent callers.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, BinaryIO, Protocol, TypeVar, Union, runtime_checkable

from pydantic import TypeAdapter

T = TypeVar("T")


@dataclass
class NamedReader:
    """A binary stream uploaded under an optional file name."""

    file: BinaryIO
    name: str = ""


InputFile = Union[BinaryIO, NamedReader]


class Transport(Protocol):
    """Performs the HTTP call and returns the raw result bytes."""

    def get(self, method: str, values: dict[str, str]) -> bytes: ...

    def post(self, method: str, values: dict[str, str], attachments: dict[str, NamedReader]) -> bytes: ...


@runtime_checkable
class ReplyMarkup(Protocol):
    """A keyboard or reply markup object that serialises itself to JSON text."""

    def markup_json(self) -> str: ...


@runtime_checkable
class InputMedia(Protocol):
    """A media object that serialises itself to JSON text.

    Any file it carries is registered in *attachments* under *key* (or a key
    derived from it) and referenced from the JSON as ``attach://<key>``.
    """

    def media_json(self, key: str, attachments: dict[str, NamedReader]) -> str: ...


class FieldEncodingError(Exception):
    """Raised by a generated method when one of its fields cannot be encoded."""

    def __init__(self, method: str, field: str, reason: str):
        super().__init__(f"{method}: failed to encode field {field}: {reason}")
        self.method = method
        self.field = field
        self.reason = reason


def is_readable(value: Any) -> bool:
    return callable(getattr(value, "read", None))


_ANY = TypeAdapter(Any)


def encode_json(value: Any) -> str:
    """Serialise a structured value (models, lists, dicts, scalars) to JSON text.

    Model fields are written under their wire aliases, matching what
    :func:`decode_result` reads.
    """
    return _ANY.dump_json(value, exclude_none=True, by_alias=True).decode("utf-8")


@lru_cache(maxsize=None)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def decode_result(raw: bytes, target: Any, default: T) -> T:
    """Decode a method result.

    A ``null`` body yields *default*. Any other body, an empty one included,
    is validated and validation errors propagate.
    """
    if raw.strip() == b"null":
        return default
    return _adapter(target).validate_json(raw)
