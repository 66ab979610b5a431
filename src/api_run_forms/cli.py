"""CLI entry point for api-run-forms."""

import json
import logging
from pathlib import Path
from typing import Any

import click

from api_run_forms.exceptions import DocumentLoadError
from api_run_forms.form.compiler import compile_form
from api_run_forms.logging import configure_logging
from api_run_forms.parser.endpoints import list_endpoints
from api_run_forms.parser.loader import detect_format, is_openapi_document, load_document
from api_run_forms.runner.demo import run_demo

logger = logging.getLogger(__name__)


def _load(doc_path: Path) -> Any:
    """Load an OpenAPI document, turning failures into CLI errors."""
    try:
        document = load_document(doc_path)
    except DocumentLoadError as e:
        raise click.ClickException(str(e)) from e
    if not is_openapi_document(document):
        logger.warning("%s has no 'openapi' version marker; results may be empty", doc_path)
    return document


def _parse_values(ctx, param, pairs: tuple[str, ...]) -> dict[str, str]:
    values = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected name=value, got {pair!r}")
        values[name] = value
    return values


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False, default=str))


@click.group()
@click.option(
    "--log-level",
    default="WARNING",
    envvar="API_RUN_FORMS_LOG_LEVEL",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity.",
)
def main(log_level: str):
    """API Run Forms: forms and demo runs from OpenAPI documents."""
    configure_logging(log_level)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
def endpoints(doc_path: Path):
    """List the endpoints of an OpenAPI document."""
    found = list_endpoints(_load(doc_path))
    for endpoint in found:
        line = endpoint.id
        if endpoint.summary:
            line = f"{line}  {endpoint.summary}"
        click.echo(line)
    click.echo(f"Found {len(found)} endpoints.", err=True)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.argument("endpoint_id")
def form(doc_path: Path, endpoint_id: str):
    """Print the form model for ENDPOINT_ID (e.g. "POST /users") as JSON."""
    model = compile_form(_load(doc_path), endpoint_id)
    _echo_json(model.to_dict())


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.argument("endpoint_id")
@click.option("-v", "--value", "values", multiple=True, callback=_parse_values, help="Form value as name=value (repeatable).")
@click.pass_context
def run(ctx: click.Context, doc_path: Path, endpoint_id: str, values: dict[str, str]):
    """Demo-run ENDPOINT_ID with form values and print the RunEnvelope."""
    envelope = run_demo(_load(doc_path), endpoint_id, values)
    _echo_json(envelope.to_dict())
    if envelope.status != "success":
        ctx.exit(1)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
def detect(doc_path: Path):
    """Print 'openapi' or 'unknown' for DOC_PATH."""
    click.echo(detect_format(doc_path))
