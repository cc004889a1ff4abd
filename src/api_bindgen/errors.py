"""Exception hierarchy for api-bindgen.

Every generation-time failure derives from :class:`BindgenError`, which
carries the process exit code the CLI uses::

    BindgenError            (exit 1)
    +-- ConfigError         (exit 1)
    +-- SchemaLoadError     (exit 2)
    +-- UnresolvableTypeError (exit 3)
    +-- MethodGenerationError (exit 3)
    +-- AssemblyError       (exit 4)

Errors raised by *generated* code at runtime live in
:mod:`api_bindgen.runtime` instead.
"""


class BindgenError(Exception):
    """Base exception for all generator errors."""

    exit_code: int = 1

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(BindgenError):
    """Raised for an unreadable or invalid generator config file."""


class SchemaLoadError(BindgenError):
    """Raised when the API description cannot be read or fails validation."""

    exit_code = 2


class UnresolvableTypeError(BindgenError):
    """Raised when no concrete representation can be chosen for a field."""

    exit_code = 3

    def __init__(self, field: str, types: list[str], reason: str = "unable to choose one of the available types"):
        super().__init__(f"field {field!r} {types}: {reason}")
        self.field = field
        self.types = list(types)


class MethodGenerationError(BindgenError):
    """Raised when a single method cannot be generated.

    Wraps the underlying cause and records the offending method and, when
    known, the field.
    """

    exit_code = 3

    def __init__(self, method: str, cause: Exception):
        super().__init__(f"failed to generate method {method}: {cause}")
        self.method = method
        self.field = getattr(cause, "field", None)


class AssemblyError(BindgenError):
    """Raised when the assembled module is not valid Python or cannot be written."""

    exit_code = 4
