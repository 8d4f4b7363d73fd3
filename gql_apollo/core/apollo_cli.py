"""Wrapper around the Apollo CLI binary unpacked into a CLI folder."""

import logging
import os
import re
import shlex
from pathlib import Path
from typing import Sequence

from .constants import CLI_BINARY_FOLDER_NAME, CLI_BINARY_RELATIVE_PATH
from .errors import ToolNotFound
from .runner import CommandRunner, ShellCommandRunner

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"--key=\S+")
_SENSITIVE_HEADER_PATTERN = re.compile(
    r"--header='(authorization|cookie):[^']*'", re.IGNORECASE
)


def redact(command: str) -> str:
    """Hide API keys and credential headers before a command is logged."""
    command = _KEY_PATTERN.sub("--key=<redacted>", command)
    return _SENSITIVE_HEADER_PATTERN.sub(r"--header='\1: <redacted>'", command)


class ApolloCLI:
    """Runs the Apollo CLI found under `cli_folder/apollo/bin/run`.

    Example:
        cli = ApolloCLI(Path("./ApolloCLI"))
        output = cli.run_apollo(options.arguments, Path("."))
    """

    def __init__(self, cli_folder: Path, runner: CommandRunner | None = None):
        self.cli_folder = Path(cli_folder)
        self.runner = runner if runner is not None else ShellCommandRunner()

    @property
    def binary_folder(self) -> Path:
        return self.cli_folder / CLI_BINARY_FOLDER_NAME

    @property
    def binary_path(self) -> Path:
        return self.cli_folder / CLI_BINARY_RELATIVE_PATH

    def is_installed(self) -> bool:
        path = self.binary_path
        return path.is_file() and os.access(path, os.X_OK)

    def build_command(self, arguments: Sequence[str]) -> str:
        """Join the binary and arguments into one shell command.

        Arguments are spliced in as-is; the option records already quote
        the tokens that need it.
        """
        return " ".join([shlex.quote(str(self.binary_path)), *arguments])

    def run_apollo(
        self,
        arguments: Sequence[str],
        working_directory: Path,
        timeout: float | None = None,
    ) -> str:
        """Run the CLI with `arguments` and return its combined output.

        Raises:
            ToolNotFound: If the binary is missing or not executable
            ToolExecutionFailed: If the CLI exits with a non-zero status
            ToolTimedOut: If the CLI runs longer than `timeout` seconds
        """
        if not self.is_installed():
            logger.warning("Apollo CLI not found at %s", self.binary_path)
            raise ToolNotFound(self.binary_path)

        command = self.build_command(arguments)
        logger.info("Running Apollo CLI: %s", redact(command))
        output = self.runner.run(command, Path(working_directory), timeout)
        logger.debug("Apollo CLI output:\n%s", output)
        return output


def execute(
    executable_directory: Path,
    arguments: Sequence[str],
    working_directory: Path,
    timeout: float | None = None,
    runner: CommandRunner | None = None,
) -> str:
    """Run the Apollo CLI installed in `executable_directory`."""
    cli = ApolloCLI(executable_directory, runner=runner)
    return cli.run_apollo(arguments, working_directory, timeout)
