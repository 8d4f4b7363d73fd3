"""Command-line interface for gql-apollo."""

import logging
from pathlib import Path

import click

from .core.ast_models import load_codegen_output
from .core.codegen_options import CodegenEngine, CodegenOptions, MultipleFiles, SingleFile
from .core.constants import (
    DEFAULT_CLI_URL,
    DEFAULT_DOWNLOAD_TIMEOUT,
    DEFAULT_INCLUDES,
    DEFAULT_SCHEMA_FILE_NAME,
)
from .core.errors import ApolloToolError
from .core.installer import ensure_cli
from .core.schema_options import SchemaFileType, SchemaOptions
from .core.tasks import download_schema, run_codegen


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


cli_folder_option = click.option(
    "--cli-folder",
    "-c",
    required=True,
    type=click.Path(file_okay=False),
    help="Folder the Apollo CLI is (or will be) unpacked into.",
)

verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)


@click.group()
@click.version_option()
def main():
    """Drive the Apollo GraphQL CLI.

    Download schemas and generate code by shelling out to the Apollo CLI.
    """
    pass


@main.command("download-schema")
@cli_folder_option
@click.option("--endpoint", "-e", required=True, help="URL of the GraphQL endpoint.")
@click.option(
    "--output-folder",
    "-o",
    required=True,
    type=click.Path(file_okay=False),
    help="Folder the schema is written to.",
)
@click.option(
    "--name",
    default=DEFAULT_SCHEMA_FILE_NAME,
    show_default=True,
    help="Schema file name, without extension.",
)
@click.option("--sdl", is_flag=True, help="Download SDL (.graphql) instead of JSON.")
@click.option("--api-key", envvar="APOLLO_KEY", help="Apollo API key.")
@click.option(
    "--header",
    "-H",
    "headers",
    multiple=True,
    help="Extra header as 'Name: Value'. Can be repeated.",
)
@click.option("--timeout", type=float, default=None, help="Seconds before giving up.")
@verbose_option
def download_schema_command(
    cli_folder: str,
    endpoint: str,
    output_folder: str,
    name: str,
    sdl: bool,
    api_key: str | None,
    headers: tuple[str, ...],
    timeout: float | None,
    verbose: bool,
):
    """Download a GraphQL schema from an endpoint.

    Examples:

        gql-apollo download-schema -c ./ApolloCLI -e http://localhost:8080/graphql -o ./Sources

        gql-apollo download-schema -c ./ApolloCLI -e https://api.example.com/graphql -o . --sdl -H 'Authorization: Bearer abc'
    """
    configure_logging(verbose)
    try:
        options = SchemaOptions(
            endpoint_url=endpoint,
            output_folder=Path(output_folder).resolve(),
            schema_file_name=name,
            schema_file_type=(
                SchemaFileType.SCHEMA_DEFINITION_LANGUAGE if sdl else SchemaFileType.JSON
            ),
            api_key=api_key,
            headers=headers,
        )
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    if verbose:
        click.echo(f"Endpoint: {endpoint}")
        click.echo(f"Output: {options.output_path}")

    click.echo("Downloading schema...")
    try:
        output = download_schema(Path(cli_folder).resolve(), options, timeout=timeout)
    except ApolloToolError as e:
        raise click.ClickException(str(e)) from e

    if verbose and output.strip():
        click.echo(output)
    click.echo(f"Done! Schema written to {options.output_path}")


@main.command()
@cli_folder_option
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to the downloaded schema file.",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(),
    help="Output file, or folder with --multiple-files.",
)
@click.option("--multiple-files", is_flag=True, help="Write one file per operation.")
@click.option("--includes", default=DEFAULT_INCLUDES, show_default=True, help="Glob of operation files.")
@click.option("--namespace", default=None, help="Namespace to emit generated code into.")
@click.option("--only", type=click.Path(), default=None, help="Only output code for this file.")
@click.option("--operation-ids", type=click.Path(), default=None, help="Operation id JSON map file.")
@click.option(
    "--engine",
    type=click.Choice([engine.value for engine in CodegenEngine]),
    default=CodegenEngine.default().value,
    show_default=True,
    help="Code generation engine.",
)
@click.option(
    "--merge-fragment-fields/--no-merge-fragment-fields",
    default=True,
    show_default=True,
    help="Merge fragment fields onto the enclosing type.",
)
@click.option("--omit-deprecated-enum-cases", is_flag=True, help="Leave deprecated enum cases out.")
@click.option("--passthrough-custom-scalars", is_flag=True, help="Use your own custom scalar types.")
@click.option("--suppress-multiline-strings", is_flag=True, help="Avoid multi-line string literals.")
@click.option(
    "--download-timeout",
    type=float,
    default=DEFAULT_DOWNLOAD_TIMEOUT,
    show_default=True,
    help="Seconds to wait when downloading the Apollo CLI.",
)
@verbose_option
def generate(
    cli_folder: str,
    schema: str,
    output: str,
    multiple_files: bool,
    includes: str,
    namespace: str | None,
    only: str | None,
    operation_ids: str | None,
    engine: str,
    merge_fragment_fields: bool,
    omit_deprecated_enum_cases: bool,
    passthrough_custom_scalars: bool,
    suppress_multiline_strings: bool,
    download_timeout: float,
    verbose: bool,
):
    """Generate code from the operations in the current folder.

    Examples:

        gql-apollo generate -c ./ApolloCLI -s ./schema.json -o ./API.swift

        gql-apollo generate -c ./ApolloCLI -s ./schema.json -o ./Generated --multiple-files
    """
    configure_logging(verbose)
    output_path = Path(output).resolve()
    output_format = MultipleFiles(output_path) if multiple_files else SingleFile(output_path)
    try:
        options = CodegenOptions(
            output_format=output_format,
            url_to_schema_file=Path(schema).resolve(),
            codegen_engine=CodegenEngine(engine),
            includes=includes,
            merge_in_fields_from_fragment_spreads=merge_fragment_fields,
            namespace=namespace,
            only=Path(only).resolve() if only else None,
            operation_ids_path=Path(operation_ids).resolve() if operation_ids else None,
            omit_deprecated_enum_cases=omit_deprecated_enum_cases,
            passthrough_custom_scalars=passthrough_custom_scalars,
            suppress_swift_multiline_string_literals=suppress_multiline_strings,
            download_timeout=download_timeout,
        )
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    if verbose:
        click.echo("Arguments:")
        click.echo(options.debug_description)

    click.echo("Generating code...")
    try:
        run_codegen(Path.cwd(), Path(cli_folder).resolve(), options)
    except ApolloToolError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Done! Generated code in {output_path}")


@main.command("install-cli")
@cli_folder_option
@click.option("--url", default=DEFAULT_CLI_URL, show_default=True, help="Apollo CLI tarball URL.")
@click.option("--sha256", default=None, help="Expected SHA-256 of the tarball.")
@click.option(
    "--timeout",
    type=float,
    default=DEFAULT_DOWNLOAD_TIMEOUT,
    show_default=True,
    help="Seconds to wait for the download.",
)
@verbose_option
def install_cli(cli_folder: str, url: str, sha256: str | None, timeout: float, verbose: bool):
    """Download and unpack the Apollo CLI if it is not already installed."""
    configure_logging(verbose)
    try:
        binary_folder = ensure_cli(
            Path(cli_folder).resolve(),
            timeout=timeout,
            url=url,
            expected_sha256=sha256,
        )
    except ApolloToolError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Apollo CLI ready in {binary_folder}")


@main.command()
@click.option(
    "--file",
    "-f",
    "path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file written by the swift-experimental engine.",
)
@verbose_option
def inspect(path: str, verbose: bool):
    """Summarize the operations and fragments in a codegen JSON file."""
    configure_logging(verbose)
    try:
        document = load_codegen_output(Path(path))
    except ApolloToolError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Operations: {len(document.operations)}")
    for operation in document.operations:
        field_count = sum(len(list(f.iter_fields())) for f in operation.sub_fields)
        click.echo(f"  {operation.operation_type} {operation.operation_name} ({field_count} fields)")
        if verbose and operation.fragments_referenced:
            click.echo(f"    fragments: {', '.join(operation.fragments_referenced)}")

    click.echo(f"Fragments: {len(document.fragments)}")
    for fragment in document.fragments:
        click.echo(f"  {fragment.fragment_name} on {fragment.type_condition}")


if __name__ == "__main__":
    main()
