"""High level entry points: download a schema, run code generation."""

import logging
import shutil
from pathlib import Path

import httpx

from .apollo_cli import ApolloCLI
from .codegen_options import CodegenOptions
from .errors import ApolloToolError
from .installer import ensure_cli
from .runner import CommandRunner
from .schema_options import SchemaOptions

logger = logging.getLogger(__name__)


def download_schema(
    cli_folder: Path,
    options: SchemaOptions,
    timeout: float | None = None,
    runner: CommandRunner | None = None,
) -> str:
    """Download a schema with the CLI in `cli_folder`.

    The CLI writes the schema to `options.output_path`; callers should check
    the file themselves. If the run fails, whatever it wrote is discarded:
    a schema that existed before the run is restored, otherwise the output
    path is left empty.

    Returns:
        The CLI output, which for SDL downloads may include the schema text
    """
    cli = ApolloCLI(cli_folder, runner=runner)
    output_path = options.output_path
    options.output_folder.mkdir(parents=True, exist_ok=True)
    backup_path = output_path.with_name(output_path.name + ".bak")
    backup_path.unlink(missing_ok=True)
    if output_path.exists():
        shutil.copy2(output_path, backup_path)

    try:
        output = cli.run_apollo(options.arguments, options.output_folder, timeout)
    except ApolloToolError:
        if backup_path.exists():
            logger.warning("Restoring previous schema at %s", output_path)
            backup_path.replace(output_path)
        elif output_path.exists():
            logger.warning("Removing partial schema at %s", output_path)
            output_path.unlink()
        raise

    backup_path.unlink(missing_ok=True)
    logger.info("Downloaded schema to %s", output_path)
    return output


def run_codegen(
    folder: Path,
    cli_folder: Path,
    options: CodegenOptions,
    runner: CommandRunner | None = None,
    client: httpx.Client | None = None,
) -> str:
    """Run code generation from `folder`, installing the CLI first if needed.

    The CLI bundle download is bounded by `options.download_timeout`.
    """
    ensure_cli(cli_folder, timeout=options.download_timeout, client=client)
    cli = ApolloCLI(cli_folder, runner=runner)
    output = cli.run_apollo(options.arguments, Path(folder))
    logger.info("Generated code with the %s engine", options.codegen_engine.value)
    return output
