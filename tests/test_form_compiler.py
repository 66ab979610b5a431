import copy

import pytest

from api_run_forms.form.compiler import compile_form, split_endpoint_id

USERS_DOC = {
    "paths": {
        "/users": {
            "post": {
                "requestBody": {
                    "required": True,
                    "content": {
                        "application/json": {
                            "schema": {
                                "type": "object",
                                "properties": {
                                    "name": {"type": "string"},
                                    "age": {"type": "integer", "minimum": 0},
                                },
                                "required": ["name"],
                            }
                        }
                    },
                }
            }
        }
    }
}


def _body_doc(schema: dict, required=None) -> dict:
    body = {"content": {"application/json": {"schema": schema}}}
    if required is not None:
        body["required"] = required
    return {"paths": {"/things": {"post": {"requestBody": body}}}}


class TestSplitEndpointId:
    def test_split_on_first_space(self):
        assert split_endpoint_id("GET /search results") == ("GET", "/search results")

    def test_missing_path(self):
        assert split_endpoint_id("GET") == ("GET", "")


class TestCompileForm:
    def test_users_example(self):
        model = compile_form(USERS_DOC, "POST /users")
        assert model.to_dict() == {
            "endpoint_id": "POST /users",
            "fields": [
                {"name": "name", "label": "Name", "kind": "string", "required": True},
                {"name": "age", "label": "Age", "kind": "number", "required": False, "minimum": 0},
            ],
        }

    def test_query_parameter_example(self, demo_doc):
        model = compile_form(demo_doc, "GET /items")
        assert model.fields[0].to_dict() == {
            "name": "limit",
            "label": "Limit",
            "kind": "number",
            "required": False,
            "maximum": 100,
        }

    def test_only_query_parameters_become_fields(self, demo_doc):
        model = compile_form(demo_doc, "GET /items")
        assert [f.name for f in model.fields] == ["limit", "sort_order"]
        assert model.fields[1].kind == "enum"

    @pytest.mark.parametrize("document", [None, [], {}, {"paths": None}, {"paths": "x"}])
    def test_documents_without_paths(self, document):
        model = compile_form(document, "GET /items")
        assert model.endpoint_id == "GET /items"
        assert model.fields == []

    @pytest.mark.parametrize("endpoint_id", ["", "GET", "GET ", " /items", "DELETE /items", "GET /nope"])
    def test_unresolvable_endpoint_yields_no_fields(self, demo_doc, endpoint_id):
        model = compile_form(demo_doc, endpoint_id)
        assert model.endpoint_id == endpoint_id
        assert model.fields == []

    def test_path_with_spaces(self, demo_doc):
        model = compile_form(demo_doc, "GET /search results")
        assert model.endpoint_id == "GET /search results"
        assert model.fields[0].to_dict() == {
            "name": "q",
            "label": "Q",
            "kind": "string",
            "required": True,
            "minLength": 2,
        }

    def test_array_of_objects_falls_back_to_body_field(self, demo_doc):
        model = compile_form(demo_doc, "PUT /orders")
        assert [f.to_dict() for f in model.fields] == [
            {"name": "body", "label": "Request Body (JSON)", "kind": "json", "required": True}
        ]

    def test_complex_body_required_defaults_false(self):
        model = compile_form(_body_doc({"oneOf": [{"type": "object"}]}), "POST /things")
        assert model.fields[0].name == "body"
        assert model.fields[0].required is False

    def test_query_fields_precede_body_fields(self):
        doc = _body_doc({"type": "object", "properties": {"z": {"type": "string"}, "a": {"type": "boolean"}}})
        doc["paths"]["/things"]["post"]["parameters"] = [
            {"name": "dry_run", "in": "query", "schema": {"type": "boolean"}},
            {"name": "page", "in": "query", "schema": {"type": "integer"}},
        ]
        model = compile_form(doc, "POST /things")
        assert [f.name for f in model.fields] == ["dry_run", "page", "z", "a"]

    def test_malformed_parameters_skipped(self):
        doc = {
            "paths": {
                "/p": {
                    "get": {
                        "parameters": [
                            None,
                            "limit",
                            {"name": "a", "in": "query"},
                            {"name": "b", "in": "query", "schema": "string"},
                            {"name": 5, "in": "query", "schema": {}},
                            {"name": "c", "in": "header", "schema": {}},
                            {"name": "d", "in": "query", "required": "yes", "schema": {}},
                        ]
                    }
                }
            }
        }
        model = compile_form(doc, "GET /p")
        assert [(f.name, f.required) for f in model.fields] == [("d", False)]

    def test_malformed_body_properties_skipped(self):
        schema = {"type": "object", "properties": {"ok": {"type": "string"}, "bad": None}, "required": "ok"}
        model = compile_form(_body_doc(schema), "POST /things")
        assert [(f.name, f.required) for f in model.fields] == [("ok", False)]

    def test_body_without_properties(self):
        assert compile_form(_body_doc({"type": "string"}), "POST /things").fields == []

    def test_nested_object_property_is_json_field(self):
        schema = {"type": "object", "properties": {"address": {"type": "object", "properties": {"city": {"type": "string"}}}}}
        model = compile_form(_body_doc(schema), "POST /things")
        assert model.fields[0].kind == "json"
        assert model.fields[0].name == "address"

    def test_method_lookup_is_case_insensitive(self):
        doc = {"paths": {"/a": {"Get": {"parameters": [{"name": "x", "in": "query", "schema": {}}]}}}}
        assert [f.name for f in compile_form(doc, "GET /a").fields] == ["x"]

    def test_compile_is_idempotent_and_pure(self, demo_doc):
        before = copy.deepcopy(demo_doc)
        first = compile_form(demo_doc, "POST /users")
        second = compile_form(demo_doc, "POST /users")
        assert first == second
        assert demo_doc == before
