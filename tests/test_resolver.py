"""Tests for canonical JSON, the component schema index and name resolution."""

import pytest

from inspector.models import SchemaKind, SchemaNode
from inspector.resolver import (
    build_schema_index,
    canonical_json,
    resolve_schema_identity,
    resolve_schema_name,
)


def primitive(body):
    return SchemaNode(kind=SchemaKind.PRIMITIVE, body=body, title=body.get("title"), type=body.get("type"))


def obj(body):
    return SchemaNode(kind=SchemaKind.OBJECT, body=body, title=body.get("title"), type="object")


def reference(ref, target=None, ref_title=None):
    return SchemaNode(kind=SchemaKind.REFERENCE, body={"$ref": ref}, ref=ref, ref_title=ref_title, target=target)


def array(items, **extra):
    body = {"type": "array", "items": items.body, **extra}
    return SchemaNode(kind=SchemaKind.ARRAY, body=body, type="array", items=items, title=extra.get("title"))


PET_BODY = {
    "type": "object",
    "properties": {"id": {"type": "integer"}, "name": {"type": "string"}},
}


# =============================================================================
# Canonical JSON
# =============================================================================

class TestCanonicalJson:
    """Tests for canonical_json."""

    def test_key_order_does_not_matter(self):
        first = {"type": "object", "properties": {"b": {"type": "string"}, "a": {"type": "integer"}}}
        second = {"properties": {"a": {"type": "integer"}, "b": {"type": "string"}}, "type": "object"}

        assert canonical_json(first) == canonical_json(second)

    def test_no_whitespace(self):
        assert canonical_json({"type": "string", "enum": ["a", "b"]}) == '{"enum":["a","b"],"type":"string"}'

    def test_non_string_keys_are_normalized(self):
        # YAML can load numeric mapping keys
        assert canonical_json({"example": {200: "ok", "x": 1}}) == '{"example":{"200":"ok","x":1}}'

    def test_non_json_values_do_not_fail(self):
        import datetime

        assert canonical_json({"default": datetime.date(2024, 1, 2)}) == '{"default":"2024-01-02"}'


# =============================================================================
# Component schema index
# =============================================================================

class TestBuildSchemaIndex:
    """Tests for build_schema_index."""

    def test_empty_components(self):
        assert build_schema_index({}) == {}

    def test_distinct_bodies_get_distinct_keys(self):
        index = build_schema_index({
            "Pet": obj(PET_BODY),
            "Limit": primitive({"type": "integer", "format": "int32"}),
            "Name": primitive({"type": "string"}),
        })

        assert len(index) == 3
        assert set(index.values()) == {"Pet", "Limit", "Name"}

    def test_duplicate_bodies_last_declared_wins(self):
        index = build_schema_index({
            "ErrorA": obj({"type": "object"}),
            "ErrorB": obj({"type": "object"}),
        })

        assert index == {canonical_json({"type": "object"}): "ErrorB"}


# =============================================================================
# Name resolution
# =============================================================================

class TestResolveSchemaName:
    """Tests for resolve_schema_name / resolve_schema_identity."""

    @pytest.fixture
    def index(self):
        return build_schema_index({
            "Pet": obj(PET_BODY),
            "Limit": primitive({"type": "integer", "format": "int32"}),
        })

    def test_none_is_anonymous(self, index):
        assert resolve_schema_identity(None, index) == (None, None)

    def test_reference_with_title_uses_title(self, index):
        schema = reference("#/components/schemas/Pet", target=obj(PET_BODY), ref_title="PetModel")

        assert resolve_schema_name(schema, index) == "PetModel"

    def test_reference_title_wins_over_index(self):
        # the index would say "Pet", the reference title still wins
        index = build_schema_index({"Pet": obj(PET_BODY)})
        schema = reference("#/components/schemas/Other", target=obj(PET_BODY), ref_title="Titled")

        assert resolve_schema_name(schema, index) == "Titled"

    def test_reference_without_title_uses_last_segment(self, index):
        schema = reference("#/components/schemas/Pet", target=obj(PET_BODY))

        identity = resolve_schema_identity(schema, index)

        assert identity.name == "Pet"
        assert identity.ref_path == "#/components/schemas/Pet"

    def test_unresolved_external_reference_uses_last_segment(self, index):
        schema = reference("common.json#/components/schemas/Missing")

        identity = resolve_schema_identity(schema, index)

        assert identity.name == "Missing"
        assert identity.ref_path == "common.json#/components/schemas/Missing"

    def test_array_of_reference_is_named_by_item(self, index):
        schema = array(reference("#/components/schemas/Pet", target=obj(PET_BODY)))

        identity = resolve_schema_identity(schema, index)

        assert identity.name == "Pet"
        assert identity.ref_path is None

    def test_array_of_titled_item_is_named_by_item(self, index):
        schema = array(primitive({"type": "string", "title": "Tag"}), title="Tags")

        assert resolve_schema_name(schema, index) == "Tag"

    def test_array_of_anonymous_item_uses_own_title(self, index):
        schema = array(primitive({"type": "string"}), title="Tags")

        assert resolve_schema_name(schema, index) == "Tags"

    def test_own_title(self, index):
        assert resolve_schema_name(primitive({"type": "string", "title": "Pet Id"}), index) == "Pet Id"

    def test_structural_match_without_reference(self, index):
        inline = obj({"properties": {"name": {"type": "string"}, "id": {"type": "integer"}}, "type": "object"})

        identity = resolve_schema_identity(inline, index)

        assert identity.name == "Pet"
        assert identity.ref_path is None

    def test_anonymous_integer(self, index):
        assert resolve_schema_name(primitive({"type": "integer"}), index) is None

    def test_anonymous_integer_matching_component(self, index):
        assert resolve_schema_name(primitive({"type": "integer", "format": "int32"}), index) == "Limit"
