"""Form models and demo runs derived from OpenAPI 3.x documents."""

from api_run_forms.form.compiler import compile_form
from api_run_forms.parser.endpoints import list_endpoints

__all__ = ["compile_form", "list_endpoints"]
