"""Command line interface entry point."""

from __future__ import annotations

import dataclasses
import logging
import sys
import warnings
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import click

from simple_schema_builder.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    Settings,
    load_configuration,
    write_placeholder_configuration,
)
from simple_schema_builder.ddl_generation import DDLGenerator, Dialect
from simple_schema_builder.field_modeling import (
    FieldTreeError,
    FieldTreeFileError,
    read_field_tree,
    write_field_tree,
)
from simple_schema_builder.schema_management import (
    SchemaDocument,
    SchemaError,
    UnknownTypeWarning,
    decode_schema_text,
    encode_schema_document,
    generate_schema,
    parse_schema,
    read_schema_document,
)
from simple_schema_builder.workbook_export import write_schema_workbook

_DOMAIN_ERRORS = (ConfigurationError, FieldTreeError, FieldTreeFileError, SchemaError)
_HANDLED_ERRORS = (*_DOMAIN_ERRORS, OSError, ValueError)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="simple-schema-builder")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """Build JSON schemas and SQL tables from field trees."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )


def _config_option(command: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "--config",
        "config_path",
        required=False,
        type=click.Path(path_type=str),
        help="Path to YAML/JSON settings file",
    )(command)


def _output_option(command: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "--output",
        "output_path",
        required=False,
        type=click.Path(path_type=str),
        help="File to write instead of printing to stdout",
    )(command)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML settings template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a settings file with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="generate-schema")
@click.option(
    "--fields",
    "fields_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML/JSON field tree file",
)
@click.option("--title", required=False, help="Schema title; overrides file and settings")
@_config_option
@_output_option
def generate_schema_command(
    fields_path: str, title: str | None, config_path: str | None, output_path: str | None
) -> None:
    """Generate a JSON schema from a field tree file."""
    try:
        settings = load_configuration(config_path)
        field_tree = read_field_tree(fields_path)
        document = generate_schema(
            field_tree.fields,
            title=title or field_tree.title or settings.schema.title,
            max_depth=settings.limits.max_depth,
        )
    except _HANDLED_ERRORS as exc:
        raise CliError(str(exc)) from exc
    _emit(encode_schema_document(document, indent=settings.schema.indent), output_path)


@cli.command(name="import-schema")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON schema to import",
)
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the field tree file to write",
)
@_config_option
def import_schema(input_path: str, output_path: str, config_path: str | None) -> None:
    """Convert a JSON schema into an editable field tree file."""
    try:
        settings = load_configuration(config_path)
        document = _read_schema_file(input_path, settings)
        fields = parse_schema(document, max_depth=settings.limits.max_depth)
        resolved_output = write_field_tree(fields, output_path, title=document.title)
    except _HANDLED_ERRORS as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="generate-ddl")
@click.option(
    "--schema",
    "schema_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to a JSON schema file",
)
@click.option(
    "--fields",
    "fields_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to a YAML/JSON field tree file",
)
@click.option(
    "--dialect",
    "dialects",
    multiple=True,
    type=click.Choice([dialect.value for dialect in Dialect], case_sensitive=False),
    help="SQL dialect to generate; repeatable (defaults to the configured dialects)",
)
@click.option("--title", required=False, help="Root table name; overrides file and settings")
@_config_option
@_output_option
def generate_ddl_command(  # pylint: disable=too-many-arguments
    schema_path: str | None,
    fields_path: str | None,
    dialects: Sequence[str],
    title: str | None,
    config_path: str | None,
    output_path: str | None,
) -> None:
    """Generate CREATE TABLE statements from a JSON schema or field tree file."""
    if (schema_path is None) == (fields_path is None):
        raise click.UsageError("Provide exactly one of --schema or --fields.")
    try:
        settings = load_configuration(config_path)
        if schema_path is not None:
            document = _read_schema_file(schema_path, settings)
        else:
            assert fields_path is not None
            field_tree = read_field_tree(fields_path)
            document = generate_schema(
                field_tree.fields,
                title=field_tree.title,
                max_depth=settings.limits.max_depth,
            )
        document = dataclasses.replace(
            document, title=title or document.title or settings.schema.title
        )
        selected = tuple(Dialect(value.lower()) for value in dialects) or settings.ddl.dialects
        max_depth = settings.limits.max_depth
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", UnknownTypeWarning)
            statements = [
                (dialect, DDLGenerator(dialect, max_depth=max_depth).generate(document))
                for dialect in selected
            ]
    except _HANDLED_ERRORS as exc:
        raise CliError(str(exc)) from exc

    for warning in caught:
        click.echo(f"warning: {warning.message}", err=True)
    if len(statements) == 1:
        _emit(statements[0][1], output_path)
        return
    _emit("\n\n".join(f"-- {dialect.value}\n{ddl}" for dialect, ddl in statements), output_path)


@cli.command(name="export-workbook")
@click.option(
    "--fields",
    "fields_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML/JSON field tree file",
)
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the Excel workbook to write",
)
@_config_option
def export_workbook(fields_path: str, output_path: str, config_path: str | None) -> None:
    """Export fields, JSON schema and DDL into an Excel workbook."""
    try:
        settings = load_configuration(config_path)
        field_tree = read_field_tree(fields_path)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", UnknownTypeWarning)
            resolved_output = write_schema_workbook(
                field_tree.fields,
                output_path,
                title=field_tree.title or settings.schema.title,
                dialects=settings.ddl.dialects,
                max_depth=settings.limits.max_depth,
            )
    except _HANDLED_ERRORS as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


def _read_schema_file(path: str, settings: Settings) -> SchemaDocument:
    text = Path(path).read_text(encoding="utf-8")
    return read_schema_document(decode_schema_text(text), max_depth=settings.limits.max_depth)


def _emit(text: str, output_path: str | None) -> None:
    if output_path is None:
        click.echo(text)
        return
    destination = Path(output_path)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(text + "\n", encoding="utf-8")
    except OSError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(destination.resolve()))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
