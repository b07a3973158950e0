"""
Tests for the public API functions
"""
import textwrap

import pytest

from fluent_rules import (
    InvalidMacroNameError,
    ParameterFormatting,
    RuleBuilder,
    ValidationRule,
    compile_rules,
    configure,
    get_default_formatting,
    get_registry,
    has_macro,
    macro,
    register_macro,
    rules,
)


class NotDisposable(ValidationRule):
    def passes(self, attribute, value):
        return not value.endswith("@mailinator.com")

    def message(self):
        return "Disposable addresses are not allowed."


class TestRules:
    """Test the rules() factory."""

    def test_empty(self):
        builder = rules()
        assert isinstance(builder, RuleBuilder)
        assert builder.flatten() == []

    def test_seeded(self):
        assert rules("required", ["string", "email"]).max(255).flatten() == [
            "required", "string", "email", "max:255"
        ]


class TestMacroFunctions:
    """Test register_macro(), has_macro() and @macro."""

    def test_register_macro(self):
        register_macro("postcode", lambda builder: builder.string().max(8))
        assert has_macro("postcode")
        assert rules().postcode().flatten() == ["string", "max:8"]

    def test_macro_decorator(self):
        @macro()
        def password(builder, length=12):
            builder.string().min(length).confirmed()

        assert get_registry().has("password")
        assert rules().required().password(16).flatten() == [
            "required", "string", "min:16", "confirmed"
        ]

    def test_reserved_name(self):
        with pytest.raises(InvalidMacroNameError):
            register_macro("required", lambda builder: None)
        assert not has_macro("required")


class TestCompileRules:
    """Test compile_rules() over a field map."""

    def test_mixed_field_values(self):
        rule_object = NotDisposable()
        compiled = compile_rules({
            "email": rules().required().email().rule(rule_object),
            "nickname": ["nullable", "string"],
            "age": "integer",
            "tags": RuleBuilder().array().when(False, "required"),
        })

        assert list(compiled) == ["email", "nickname", "age", "tags"]
        assert compiled["email"] == ["required", "email", rule_object]
        assert compiled["nickname"] == ["nullable", "string"]
        assert compiled["age"] == ["integer"]
        assert compiled["tags"] == ["array"]

    def test_formatting_override(self):
        compiled = compile_rules(
            {"flag": rules().accepted_if("terms", True)},
            formatting=ParameterFormatting(true="1"),
        )
        assert compiled == {"flag": ["accepted_if:terms,1"]}

    def test_builder_formatting_used_by_default(self):
        builder = RuleBuilder(formatting=ParameterFormatting(null="null")).unique("users", None, 5)
        assert compile_rules({"id": builder}) == {"id": ["unique:users,null,5"]}


class TestConfigure:
    """Test configure()."""

    def test_configure_registers_macros(self, tmp_path, monkeypatch):
        (tmp_path / "app_rules.py").write_text(textwrap.dedent("""
            def phone(builder):
                builder.string().regex("/^\\\\+?[0-9 ]+$/")
        """))
        monkeypatch.syspath_prepend(str(tmp_path))
        config = tmp_path / "rules.yaml"
        config.write_text("macros:\n  phone: 'app_rules:phone'\n")

        loader = configure(str(config))

        assert has_macro("phone")
        assert rules().phone().flatten()[0] == "string"
        assert loader.get_macro_paths() == {"phone": "app_rules:phone"}

    def test_configure_defaults(self):
        loader = configure()
        assert loader.get_formatting() == ParameterFormatting()
        assert get_registry().names() == []

    def test_configure_sets_default_formatting(self, tmp_path):
        """Test that configured parameter tokens reach new builders."""
        config = tmp_path / "rules.yaml"
        config.write_text('parameters:\n  "true": "1"\n  "null": "null"\n')

        configure(str(config))

        assert get_default_formatting().true == "1"
        assert rules().accepted_if("terms", True).flatten() == ["accepted_if:terms,1"]
        assert compile_rules({"id": rules().unique("users", None, 5)}) == {
            "id": ["unique:users,null,5"]
        }

    def test_explicit_formatting_beats_configured_default(self, tmp_path):
        config = tmp_path / "rules.yaml"
        config.write_text('parameters:\n  "true": "1"\n')
        configure(str(config))

        builder = RuleBuilder(formatting=ParameterFormatting(true="yes")).accepted_if("terms", True)
        assert builder.flatten() == ["accepted_if:terms,yes"]
        assert builder.flatten(ParameterFormatting()) == ["accepted_if:terms,true"]
