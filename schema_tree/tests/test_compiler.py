"""
Tests for schema compilation.
"""

from __future__ import annotations

import pytest

from schema_tree.pipeline import (
    TYPE_NAME,
    AmbiguousNodeError,
    CompilerConfig,
    DataType,
    DataTypeRef,
    DuplicateFieldError,
    InvalidArrayShapeError,
    InvalidRootError,
    SchemaCompiler,
    TypeNameCollisionError,
    UnrecognizedDataTypeError,
    named,
)
from schema_tree.pipeline.schema_ast import SchemaParser

REQUIRED = {"kind": "required", "message": "This field is required"}
MAX_LENGTH = {"kind": "maxLength", "message": "Too long", "value": 10}


def compile_tree(tree, **config):
    return SchemaCompiler(CompilerConfig(**config)).compile(tree).to_dict()


class TestScenarios:
    """End-to-end compilation of small trees."""

    def test_nested_references(self):
        tree = {"foo": {"bar": {"baz": DataTypeRef("BooleanType")}}}

        assert compile_tree(tree) == {
            "ROOT": {"foo": {"type": "FooType"}},
            "FooType": {"bar": {"type": "BarType"}},
            "BarType": {"baz": {"type": "BooleanType"}},
        }

    def test_array_of_objects(self):
        tree = {"foo": [{"bar": DataType("TextType", validation=[REQUIRED])}]}

        schema = compile_tree(tree)

        assert schema["ROOT"] == {"foo": {"type": "FooType", "isArray": True}}
        assert schema["FooType"] == {"bar": {"type": "TextType", "validation": [REQUIRED]}}

    def test_array_of_leaves(self):
        schema = compile_tree({"tags": [DataTypeRef("StringType")]})

        assert schema == {"ROOT": {"tags": {"type": "StringType", "isArray": True}}}

    def test_empty_root(self):
        assert compile_tree({}) == {"ROOT": {}}

    def test_empty_object_is_a_placeholder_type(self):
        assert compile_tree({"slot": {}}) == {"ROOT": {"slot": {"type": "SlotType"}}, "SlotType": {}}

    def test_types_are_listed_in_discovery_order(self):
        tree = {
            "first": {"inner": {"leaf": DataTypeRef("StringType")}},
            "second": {"leaf": DataTypeRef("StringType")},
        }

        assert list(compile_tree(tree)) == ["ROOT", "FirstType", "InnerType", "SecondType"]

    def test_json_form_tree(self):
        tree = {
            "name": {"$type": "TextType", "$validation": [REQUIRED]},
            "profile": {"$name": "person", "active": {"$ref": "BooleanType"}},
        }

        assert compile_tree(tree) == {
            "ROOT": {
                "name": {"type": "TextType", "validation": [REQUIRED]},
                "person": {"type": "PersonType"},
            },
            "PersonType": {"active": {"type": "BooleanType"}},
        }


class TestRootInvariant:
    def test_root_fields_match_tree(self):
        tree = {
            "a": DataTypeRef("StringType"),
            "b": {"c": DataTypeRef("StringType")},
            "d": [DataTypeRef("NumberType")],
        }

        schema = SchemaCompiler().compile(tree)

        assert list(schema.root.fields) == ["a", "b", "d"]
        assert schema.root_name == "ROOT"
        assert "ROOT" in schema

    def test_custom_root_name(self):
        schema = compile_tree({"a": DataTypeRef("StringType")}, root_name="Form")

        assert schema == {"Form": {"a": {"type": "StringType"}}}

    def test_root_must_be_an_object(self):
        with pytest.raises(InvalidRootError):
            SchemaCompiler().compile([{"a": DataTypeRef("StringType")}])

    def test_root_cannot_be_a_leaf(self):
        with pytest.raises(InvalidRootError):
            SchemaCompiler().compile(DataTypeRef("StringType"))

    def test_root_cannot_be_renamed(self):
        with pytest.raises(InvalidRootError):
            SchemaCompiler().compile({TYPE_NAME: "form", "a": DataTypeRef("StringType")})

    def test_accepts_parsed_tree(self):
        root = SchemaParser().parse({"a": {"b": DataTypeRef("StringType")}})

        schema = SchemaCompiler().compile(root)

        assert schema.to_dict() == {"ROOT": {"a": {"type": "AType"}}, "AType": {"b": {"type": "StringType"}}}


class TestNamingOverride:
    def test_override_renames_type_and_field(self):
        tree = {"foo": {TYPE_NAME: "buzz", "bar": DataTypeRef("StringType")}}

        assert compile_tree(tree) == {
            "ROOT": {"buzz": {"type": "BuzzType"}},
            "BuzzType": {"bar": {"type": "StringType"}},
        }

    def test_named_helper_on_array_element(self):
        tree = {"items": [named("entry", {"label": DataTypeRef("StringType")})]}

        assert compile_tree(tree) == {
            "ROOT": {"entry": {"type": "EntryType", "isArray": True}},
            "EntryType": {"label": {"type": "StringType"}},
        }

    def test_override_onto_sibling_field_is_rejected(self):
        tree = {
            "foo": {TYPE_NAME: "bar", "x": DataTypeRef("StringType")},
            "bar": DataTypeRef("StringType"),
        }

        with pytest.raises(DuplicateFieldError) as exc_info:
            compile_tree(tree)

        assert exc_info.value.path == ("bar",)

    def test_snake_case_field_names(self):
        schema = compile_tree({"contact_info": {"email": DataTypeRef("EmailType")}})

        assert "ContactInfoType" in schema
        assert schema["ROOT"] == {"contact_info": {"type": "ContactInfoType"}}

    def test_non_ascii_field_names(self):
        tree = {
            "café": {"x": DataTypeRef("StringType")},
            "caf": {"y": DataTypeRef("StringType")},
            "名前": {"z": DataTypeRef("StringType")},
        }

        schema = compile_tree(tree)

        assert list(schema) == ["ROOT", "CaféType", "CafType", "名前Type"]
        assert schema["ROOT"]["名前"] == {"type": "名前Type"}

    def test_bracketed_field_name(self):
        schema = compile_tree({"list": {"[a]": {"x": DataTypeRef("StringType")}}})

        assert schema["ListType"] == {"[a]": {"type": "AType"}}
        assert schema["AType"] == {"x": {"type": "StringType"}}

    def test_error_path_keeps_bracketed_field_names(self):
        tree = {"list": {"[a]": {"bad": {"$ref": "StringType", "extra": DataTypeRef("StringType")}}}}

        with pytest.raises(AmbiguousNodeError) as exc_info:
            compile_tree(tree)

        assert "list.[a].bad" in str(exc_info.value)


class TestLeaves:
    def test_reference_has_only_type(self):
        schema = compile_tree({"flag": DataTypeRef("BooleanType")})

        assert schema["ROOT"]["flag"] == {"type": "BooleanType"}

    def test_definition_keeps_rules_in_order(self):
        rules = [MAX_LENGTH, REQUIRED, {"kind": "custom", "message": "No", "fn": "isSlug"}]
        fmt = {"mask": "slug", "options": {"lower": True}}

        schema = compile_tree({"slug": DataType("TextType", validation=rules, format=fmt)})

        assert schema["ROOT"]["slug"] == {"type": "TextType", "validation": rules, "format": fmt}

    def test_definition_without_extras(self):
        schema = compile_tree({"note": DataType("TextType")})

        assert schema["ROOT"]["note"] == {"type": "TextType"}

    def test_output_does_not_alias_input_rules(self):
        rules = [dict(REQUIRED)]
        schema = SchemaCompiler().compile({"a": DataType("TextType", validation=rules)})

        rules[0]["message"] = "changed"

        assert schema.to_dict()["ROOT"]["a"]["validation"][0]["message"] == REQUIRED["message"]

    def test_unrecognized_leaf(self):
        with pytest.raises(UnrecognizedDataTypeError) as exc_info:
            compile_tree({"foo": {"bar": "StringType"}})

        assert exc_info.value.path == ("foo", "bar")


class TestErrors:
    def test_reference_with_sibling_field_is_ambiguous(self):
        tree = {"foo": {"bar": {"$ref": "BooleanType", "baz": DataTypeRef("StringType")}}}

        with pytest.raises(AmbiguousNodeError) as exc_info:
            compile_tree(tree)

        assert exc_info.value.path == ("foo", "bar")
        assert "foo.bar" in str(exc_info.value)

    @pytest.mark.parametrize("items", [[], [DataTypeRef("A"), DataTypeRef("B")]], ids=["empty", "two"])
    def test_array_must_have_one_element(self, items):
        with pytest.raises(InvalidArrayShapeError) as exc_info:
            compile_tree({"list": items})

        assert exc_info.value.path == ("list",)

    def test_nested_arrays_are_rejected(self):
        with pytest.raises(InvalidArrayShapeError):
            compile_tree({"matrix": [[DataTypeRef("NumberType")]]})

    def test_different_definitions_with_same_name_collide(self):
        tree = {
            "billing": {"address": {"city": DataTypeRef("StringType")}},
            "shipping": {"address": {"zip": DataTypeRef("StringType")}},
        }

        with pytest.raises(TypeNameCollisionError) as exc_info:
            compile_tree(tree)

        assert exc_info.value.path == ("shipping", "address")

    def test_identical_definitions_share_name(self):
        tree = {
            "billing": {"address": {"city": DataTypeRef("StringType")}},
            "shipping": {"address": {"city": DataTypeRef("StringType")}},
        }

        schema = compile_tree(tree)

        assert schema["BillingType"] == schema["ShippingType"] == {"address": {"type": "AddressType"}}

    def test_sharing_can_be_disabled(self):
        tree = {
            "billing": {"address": {"city": DataTypeRef("StringType")}},
            "shipping": {"address": {"city": DataTypeRef("StringType")}},
        }

        with pytest.raises(TypeNameCollisionError):
            compile_tree(tree, share_identical_types=False)

    def test_type_nested_in_itself_collides(self):
        with pytest.raises(TypeNameCollisionError):
            compile_tree({"node": {"node": {"leaf": DataTypeRef("StringType")}}})

    def test_name_equal_to_root_collides(self):
        with pytest.raises(TypeNameCollisionError):
            compile_tree({"root": {"a": DataTypeRef("StringType")}}, root_name="RootType")


class TestIsolation:
    def test_compilations_do_not_share_names(self):
        compiler = SchemaCompiler()
        first = compiler.compile({"address": {"city": DataTypeRef("StringType")}})
        second = compiler.compile({"address": {"zip": DataTypeRef("StringType")}})

        assert list(first["AddressType"].fields) == ["city"]
        assert list(second["AddressType"].fields) == ["zip"]

    def test_compiling_twice_is_identical(self):
        tree = {
            "foo": [{"bar": DataType("TextType", validation=[REQUIRED, MAX_LENGTH])}],
            "baz": {TYPE_NAME: "qux", "n": DataTypeRef("NumberType")},
        }

        assert SchemaCompiler().compile(tree).to_json() == SchemaCompiler().compile(tree).to_json()

    def test_referenced_names(self):
        tree = {"a": DataTypeRef("StringType"), "b": {"c": DataType("TextType")}}

        schema = SchemaCompiler().compile(tree)

        assert schema.referenced_names() == {"StringType", "TextType"}
