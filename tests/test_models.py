import pytest
from pydantic import ValidationError

from api_bindgen.schema.base import APIDescription, Field, MethodDescription


class TestField:
    def test_create_required_field(self):
        f = Field(name="chat_id", types=["Integer", "String"], required=True)
        assert f.name == "chat_id"
        assert f.required is True
        assert f.description == ""

    def test_optional_by_default(self):
        assert Field(name="caption", types=["String"]).required is False

    def test_empty_types_rejected(self):
        with pytest.raises(ValidationError):
            Field(name="x", types=[])

    def test_frozen(self):
        f = Field(name="x", types=["String"])
        with pytest.raises(ValidationError):
            f.name = "y"


class TestMethodDescription:
    def test_returns_required_non_empty(self):
        with pytest.raises(ValidationError):
            MethodDescription(returns=[])

    def test_boolean_true_read_as_type_name(self):
        m = MethodDescription(returns=[True], fields=[Field(name="ok", types=[True, "String"])])
        assert m.returns == ["True"]
        assert m.fields[0].types == ["True", "String"]

    def test_other_non_string_types_rejected(self):
        with pytest.raises(ValidationError):
            MethodDescription(returns=[False])


class TestAPIDescription:
    def test_unknown_keys_ignored(self):
        d = APIDescription.model_validate({
            "version": "Bot API 7.0",
            "methods": {"getMe": {"name": "getMe", "returns": ["User"]}},
            "types": {"User": {"name": "User", "fields": [], "subtypes": []}},
        })
        assert list(d.methods) == ["getMe"]
        assert d.methods["getMe"].returns == ["User"]
        assert "User" in d.types

    def test_serialization_roundtrip(self):
        d = APIDescription(methods={"getMe": MethodDescription(returns=["User"], href="https://x")})
        d2 = APIDescription(**d.model_dump())
        assert d2 == d
