"""Exception hierarchy for api-run-forms.

The form compiler and endpoint lister never raise on malformed documents;
these exceptions belong to the surrounding layers (loading files,
validating submitted values).
"""


class ApiRunFormsError(Exception):
    """Base exception for all api-run-forms errors."""


class DocumentLoadError(ApiRunFormsError):
    """Raised when an OpenAPI document file cannot be read or parsed."""


class InputValidationError(ApiRunFormsError):
    """Raised when submitted form values do not satisfy the form model.

    Args:
        problems: One human-readable message per offending field.
    """

    def __init__(self, problems: list[str]):
        super().__init__("; ".join(problems))
        self.problems = problems
