import importlib.util
import itertools
import sys
from pathlib import Path

import pytest

from api_bindgen.config import GeneratorConfig
from api_bindgen.generator.resolver import Resolver
from api_bindgen.schema.loader import load_description

FIXTURES = Path(__file__).parent / "fixtures"

_counter = itertools.count()


class FakeTransport:
    """Records every call and answers with a fixed body."""

    def __init__(self, response: bytes = b"true"):
        self.response = response
        self.calls = []

    def get(self, method, values):
        self.calls.append(("get", method, dict(values), None))
        return self.response

    def post(self, method, values, attachments):
        self.calls.append(("post", method, dict(values), dict(attachments)))
        return self.response


@pytest.fixture
def description():
    return load_description(FIXTURES / "bot_api.yaml")


@pytest.fixture
def resolver(description):
    return Resolver(description)


@pytest.fixture
def config():
    return GeneratorConfig(types_module="bot_types")


@pytest.fixture
def load_generated(tmp_path, monkeypatch):
    """Write generated source to disk and import it as a module."""
    monkeypatch.syspath_prepend(str(FIXTURES))

    def _load(source: str):
        name = f"generated_methods_{next(_counter)}"
        path = tmp_path / f"{name}.py"
        path.write_text(source, encoding="utf-8")
        spec = importlib.util.spec_from_file_location(name, path)
        module = importlib.util.module_from_spec(spec)
        monkeypatch.setitem(sys.modules, name, module)
        spec.loader.exec_module(module)
        return module

    return _load
