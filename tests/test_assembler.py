import pytest

from api_bindgen.config import GeneratorConfig
from api_bindgen.errors import AssemblyError, MethodGenerationError
from api_bindgen.generator.assembler import MethodsGenerator, generate_source, render_preamble, write_artifact
from api_bindgen.generator.validator import defined_functions
from api_bindgen.schema.base import APIDescription, Field, MethodDescription


def _reordered(description: APIDescription) -> APIDescription:
    return APIDescription(
        types=dict(reversed(list(description.types.items()))),
        methods=dict(reversed(list(description.methods.items()))),
    )


class TestGenerateSource:
    def test_methods_in_lexicographic_order(self, description, config):
        source = generate_source(description, config)
        expected = [
            "delete_message",
            "edit_message_media",
            "get_chat_member_count",
            "get_me",
            "get_updates",
            "send_document",
            "send_media_group",
            "send_message",
            "send_photo",
        ]
        assert defined_functions(source) == expected

    def test_preamble_first(self, description, config):
        source = generate_source(description, config)
        assert source.startswith(render_preamble(config))
        assert "import bot_types as types" in source
        assert "from api_bindgen.runtime import (" in source

    def test_deterministic_under_reordering(self, description, config):
        first = generate_source(description, config)
        second = generate_source(_reordered(description), config)
        assert first == second

    def test_repeated_runs_identical(self, description, config):
        assert generate_source(description, config) == generate_source(description, config)

    def test_custom_runtime_module(self, description):
        source = generate_source(description, GeneratorConfig(runtime_module="mybot.runtime", types_module="mybot.types"))
        assert "from mybot.runtime import (" in source
        assert "import mybot.types as types" in source

    def test_unresolvable_field_names_method_and_field(self, config):
        description = APIDescription(methods={
            "okMethod": MethodDescription(returns=["True"]),
            "badMethod": MethodDescription(
                returns=["True"],
                fields=[Field(name="weird", types=["Integer", "Boolean"], required=True)],
            ),
        })
        with pytest.raises(MethodGenerationError) as exc:
            generate_source(description, config)
        assert exc.value.method == "badMethod"
        assert exc.value.field == "weird"
        assert "badMethod" in str(exc.value)
        assert "weird" in str(exc.value)

    def test_colliding_function_names_fail_assembly(self, config):
        description = APIDescription(methods={
            "sendPhoto": MethodDescription(returns=["True"]),
            "send_photo": MethodDescription(returns=["True"]),
        })
        with pytest.raises(AssemblyError) as exc:
            generate_source(description, config)
        assert "duplicate functions: send_photo" in str(exc.value)


class TestWriteArtifact:
    def test_writes_file(self, tmp_path):
        target = tmp_path / "out" / "methods.py"
        write_artifact(target, "x = 1\n")
        assert target.read_text(encoding="utf-8") == "x = 1\n"
        assert list(target.parent.iterdir()) == [target]

    def test_failed_generation_writes_nothing(self, tmp_path, config):
        target = tmp_path / "methods.py"
        target.write_text("# previous", encoding="utf-8")
        description = APIDescription(methods={
            "badMethod": MethodDescription(returns=["Sticker"]),
        })
        with pytest.raises(MethodGenerationError):
            MethodsGenerator(config).write(description, target)
        assert target.read_text(encoding="utf-8") == "# previous"
        assert list(tmp_path.iterdir()) == [target]


class TestMethodsGenerator:
    def test_write_returns_path(self, description, config, tmp_path):
        target = tmp_path / "methods.py"
        assert MethodsGenerator(config).write(description, target) == target
        assert "def send_photo(" in target.read_text(encoding="utf-8")

    def test_summary(self, description, config):
        summary = {m.name: m for m in MethodsGenerator(config).summary(description)}
        assert summary["sendPhoto"].multipart
        assert not summary["sendMessage"].multipart
        assert summary["getMe"].returns.annotation == "types.User | None"
