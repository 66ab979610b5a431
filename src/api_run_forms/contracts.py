"""Wire contracts shared with the rendering layer and execution runners.

Two contracts matter here:

* OpenAPI in: endpoints and form models derived from an uploaded document.
* RunEnvelope out: the standardized result any runner emits for a
  submitted form.

Optional attributes are left *unset* rather than defaulted, so ``to_dict``
reproduces the exact wire shape (absent keys stay absent, an explicit
``null`` default stays ``null``).
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

FieldKind = Literal["string", "number", "boolean", "enum", "json"]
RunStatus = Literal["success", "error", "timeout"]

_STRING_CONSTRAINTS = {"min_length", "max_length", "pattern"}
_NUMBER_CONSTRAINTS = {"minimum", "maximum"}


class EndpointMeta(BaseModel):
    """One (method, path) pair found in a document."""

    id: str  # "GET /users"
    method: str  # uppercased
    path: str  # verbatim key, may contain spaces
    summary: str | None = None
    description: str | None = None

    def to_dict(self) -> dict:
        return self.model_dump(exclude_none=True)


class FormField(BaseModel):
    """A UI-agnostic form field descriptor."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    label: str
    kind: FieldKind
    required: bool
    default_value: Any = Field(default=None, alias="defaultValue")
    options: list[str] | None = None

    # string kind only
    min_length: int | float | None = Field(default=None, alias="minLength")
    max_length: int | float | None = Field(default=None, alias="maxLength")
    pattern: str | None = None

    # number kind only
    minimum: int | float | None = None
    maximum: int | float | None = None

    @model_validator(mode="after")
    def _check_kind_gates(self) -> "FormField":
        given = self.model_fields_set
        if (self.kind == "enum") != ("options" in given):
            raise ValueError("options must be set exactly when kind is 'enum'")
        if self.kind != "string" and given & _STRING_CONSTRAINTS:
            raise ValueError(f"string constraints on a {self.kind!r} field")
        if self.kind != "number" and given & _NUMBER_CONSTRAINTS:
            raise ValueError(f"numeric constraints on a {self.kind!r} field")
        return self

    @property
    def has_default(self) -> bool:
        return "default_value" in self.model_fields_set

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True)


class FormModel(BaseModel):
    """Ordered fields for one endpoint: query parameters, then body fields."""

    endpoint_id: str
    fields: list[FormField] = []

    def to_dict(self) -> dict:
        return {
            "endpoint_id": self.endpoint_id,
            "fields": [f.to_dict() for f in self.fields],
        }


class ErrorClass(str, Enum):
    """Machine-readable error classification carried by RunEnvelope."""

    IMPORT_ERROR = "IMPORT_ERROR"
    ENTRYPOINT_NOT_FOUND = "ENTRYPOINT_NOT_FOUND"
    ENDPOINT_NOT_FOUND = "ENDPOINT_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    RUNTIME_ERROR = "RUNTIME_ERROR"
    TIMEOUT = "TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"
    UNKNOWN = "UNKNOWN"


class ArtifactRef(BaseModel):
    """A file produced during a run."""

    name: str
    size: int  # bytes
    mime: str
    url: str


class RunInputs(BaseModel):
    """Submitted form values, split by where they go in the request."""

    query: dict[str, Any] | None = None
    path: dict[str, Any] | None = None
    body: Any = None
    headers: dict[str, str] | None = None

    def to_dict(self) -> dict:
        return self.model_dump(exclude_unset=True)


class RunEnvelope(BaseModel):
    """Standardized run result; identical across runner implementations."""

    model_config = ConfigDict(populate_by_name=True)

    run_id: str
    status: RunStatus
    duration_ms: int
    http_status: int
    content_type: str
    json_body: Any = Field(default=None, alias="json")
    text_preview: str | None = None
    artifacts: list[ArtifactRef] = []
    warnings: list[str] = []
    redactions_applied: bool = False
    error_class: ErrorClass | None = None
    error_message: str | None = None
    suggested_fix: str | None = None

    @model_validator(mode="after")
    def _check_error_class(self) -> "RunEnvelope":
        if self.status != "success" and self.error_class is None:
            raise ValueError(f"a {self.status!r} envelope needs an error_class")
        return self

    def to_dict(self) -> dict:
        data = self.model_dump(mode="json", by_alias=True, exclude_unset=True)
        # Required list/bool members are part of the wire shape even when defaulted.
        data.setdefault("artifacts", [])
        data.setdefault("warnings", [])
        data.setdefault("redactions_applied", False)
        return data
