from api_run_forms.contracts import ErrorClass
from api_run_forms.logging import REDACTED, redact_payload
from api_run_forms.runner.demo import DEMO_MESSAGE, run_demo


class TestRunDemo:
    def test_success_envelope(self, demo_doc):
        envelope = run_demo(demo_doc, "POST /users", {"name": "Ada"})
        assert envelope.status == "success"
        assert envelope.http_status == 200
        assert envelope.run_id.startswith("demo-")
        assert envelope.error_class is None
        assert envelope.json_body["demo"] == DEMO_MESSAGE
        assert envelope.json_body["endpoint"] == "POST /users"
        assert envelope.json_body["inputs"] == {"body": {"name": "Ada"}}
        assert envelope.redactions_applied is False

    def test_wire_shape(self, demo_doc):
        data = run_demo(demo_doc, "GET /items", {}).to_dict()
        assert data["content_type"] == "application/json"
        assert data["artifacts"] == []
        assert data["warnings"] == []
        assert "json" in data
        assert "error_class" not in data

    def test_unknown_endpoint(self, demo_doc):
        envelope = run_demo(demo_doc, "GET /missing", {})
        assert envelope.status == "error"
        assert envelope.http_status == 404
        assert envelope.error_class == ErrorClass.ENDPOINT_NOT_FOUND
        assert envelope.suggested_fix
        assert envelope.to_dict()["error_class"] == "ENDPOINT_NOT_FOUND"

    def test_validation_error(self, demo_doc):
        envelope = run_demo(demo_doc, "GET /search results", {"q": "x"})
        assert envelope.status == "error"
        assert envelope.http_status == 422
        assert envelope.error_class == ErrorClass.VALIDATION_ERROR
        assert "q: must be at least 2 characters" in envelope.error_message

    def test_sensitive_inputs_redacted(self):
        doc = {
            "paths": {
                "/login": {
                    "get": {
                        "parameters": [
                            {"name": "user", "in": "query", "schema": {"type": "string"}},
                            {"name": "api_key", "in": "query", "schema": {"type": "string"}},
                        ]
                    }
                }
            }
        }
        envelope = run_demo(doc, "GET /login", {"user": "ada", "api_key": "s3cr3t"})
        assert envelope.json_body["inputs"]["query"] == {"user": "ada", "api_key": REDACTED}
        assert envelope.redactions_applied is True

    def test_sensitive_keys_inside_lists_redacted(self):
        doc = {
            "paths": {
                "/a": {
                    "post": {
                        "requestBody": {
                            "content": {"application/json": {"schema": {"oneOf": [{"type": "array"}]}}}
                        }
                    }
                }
            }
        }
        envelope = run_demo(doc, "POST /a", {"body": '[{"password": "hunter2", "user": "ada"}]'})
        assert envelope.json_body["inputs"] == {"body": [{"password": REDACTED, "user": "ada"}]}
        assert envelope.redactions_applied is True


class TestRedactPayload:
    def test_nested_lists_and_dicts(self):
        payload = {"query": {"token": "t"}, "body": {"users": [{"api-key": "k", "name": "n"}, "plain"]}}
        assert redact_payload(payload) == {
            "query": {"token": REDACTED},
            "body": {"users": [{"api-key": REDACTED, "name": "n"}, "plain"]},
        }
        assert payload["query"]["token"] == "t"
