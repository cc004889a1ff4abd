"""Output assembler. Turns a whole API description into one Python module."""

import logging
import os
import tempfile
from pathlib import Path

from api_bindgen.config import GeneratorConfig
from api_bindgen.errors import AssemblyError, BindgenError, MethodGenerationError
from api_bindgen.generator.method import EmittedMethod, emit_method
from api_bindgen.generator.resolver import Resolver
from api_bindgen.generator.validator import validate_module
from api_bindgen.schema.base import APIDescription

logger = logging.getLogger(__name__)

PREAMBLE = '''# THIS FILE IS AUTOGENERATED. DO NOT EDIT.
# Regenerate with 'api-bindgen generate'.

from __future__ import annotations

from dataclasses import dataclass

from {runtime_module} import (
    FieldEncodingError,
    InputFile,
    InputMedia,
    NamedReader,
    ReplyMarkup,
    Transport,
    decode_result,
    encode_json,
    is_readable,
)
import {types_module} as types
'''


def render_preamble(config: GeneratorConfig) -> str:
    return PREAMBLE.format(runtime_module=config.runtime_module, types_module=config.types_module)


def emit_methods(description: APIDescription, config: GeneratorConfig) -> list[EmittedMethod]:
    """Emit every method, ordered by method name.

    The first failing method aborts the run with a MethodGenerationError.
    """
    resolver = Resolver(description, naming=config.naming)
    emitted = []
    for name in sorted(description.methods):
        try:
            method = emit_method(name, description.methods[name], resolver)
        except BindgenError as e:
            raise MethodGenerationError(name, e) from e
        logger.debug("Emitted %s (%s)", name, "multipart" if method.multipart else "form")
        emitted.append(method)
    return emitted


def generate_source(description: APIDescription, config: GeneratorConfig, filename: str = "methods.py") -> str:
    """Generate and validate the complete module text."""
    emitted = emit_methods(description, config)
    source = render_preamble(config) + "".join(m.source for m in emitted)

    errors = validate_module(filename, source, [m.function_name for m in emitted])
    if errors:
        raise AssemblyError(f"generated module is invalid: {errors[filename]}")
    return source


def write_artifact(path: Path, source: str) -> None:
    """Write *source* atomically: the target is either fully replaced or untouched."""
    tmp_path: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as fd:
            tmp_path = fd.name
            fd.write(source)
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise AssemblyError(f"cannot write {path}: {e}") from e


class MethodsGenerator:
    """Generates the bindings module for one API description."""

    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config or GeneratorConfig()

    def generate(self, description: APIDescription) -> str:
        """Return the module source; nothing is written."""
        source = generate_source(description, self.config)
        logger.info("Generated %d methods", len(description.methods))
        return source

    def write(self, description: APIDescription, output: Path) -> Path:
        """Generate and write the module; on any failure *output* is left untouched."""
        source = self.generate(description)
        write_artifact(output, source)
        logger.info("Wrote %s", output)
        return output

    def summary(self, description: APIDescription) -> list[EmittedMethod]:
        return emit_methods(description, self.config)
