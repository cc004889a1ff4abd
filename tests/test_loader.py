import pytest

from api_bindgen.errors import SchemaLoadError
from api_bindgen.schema.loader import load_description, parse_description
from conftest import FIXTURES


class TestLoadDescription:
    def test_load_fixture_counts(self):
        d = load_description(FIXTURES / "bot_api.yaml")
        assert len(d.methods) == 9
        assert "Message" in d.types

    def test_load_send_photo(self):
        d = load_description(FIXTURES / "bot_api.yaml")
        m = d.methods["sendPhoto"]
        assert m.returns == ["Message"]
        assert m.href == "https://core.telegram.org/bots/api#sendphoto"
        assert [f.name for f in m.fields] == ["chat_id", "photo"]
        assert m.fields[1].types == ["InputFile", "String"]
        assert m.fields[1].required is False

    def test_true_return_stays_a_string(self):
        d = load_description(FIXTURES / "bot_api.yaml")
        assert d.methods["deleteMessage"].returns == ["True"]

    def test_load_json(self, tmp_path):
        f = tmp_path / "api.json"
        f.write_text('{"methods": {"getMe": {"returns": ["User"]}}, "types": {"User": {}}}')
        d = load_description(f)
        assert list(d.methods) == ["getMe"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaLoadError):
            load_description(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text("methods: [invalid\n")
        with pytest.raises(SchemaLoadError):
            load_description(f)

    def test_not_a_mapping(self, tmp_path):
        f = tmp_path / "list.yaml"
        f.write_text("- a\n- b\n")
        with pytest.raises(SchemaLoadError):
            load_description(f)


class TestParseDescription:
    def test_field_without_types_rejected(self):
        doc = {"methods": {"m": {"returns": ["True"], "fields": [{"name": "x", "types": []}]}}}
        with pytest.raises(SchemaLoadError) as exc:
            parse_description(doc)
        assert "invalid API description" in str(exc.value)

    def test_method_without_returns_rejected(self):
        with pytest.raises(SchemaLoadError):
            parse_description({"methods": {"m": {"fields": []}}})

    def test_unquoted_true_in_yaml(self, tmp_path):
        f = tmp_path / "api.yaml"
        f.write_text(
            "methods:\n"
            "  deleteMessage:\n"
            "    returns: [True]\n"
            "    fields:\n"
            "      - {name: flag, types: [True]}\n"
        )
        d = load_description(f)
        m = d.methods["deleteMessage"]
        assert m.returns == ["True"]
        assert m.fields[0].types == ["True"]
