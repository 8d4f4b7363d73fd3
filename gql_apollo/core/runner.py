"""Shell command runners used to launch the Apollo CLI.

A runner is anything with a `run(command, working_directory, timeout)`
method that returns the combined output of the command or raises one of
the tool errors. Tests swap in their own runner to avoid spawning
processes.
"""

import contextlib
import logging
import os
import signal
import subprocess
from pathlib import Path
from typing import Protocol, runtime_checkable

from .errors import ToolExecutionFailed, ToolTimedOut

logger = logging.getLogger(__name__)


@runtime_checkable
class CommandRunner(Protocol):
    """Protocol for running a shell command.

    Example:
        class RecordingRunner:
            def __init__(self):
                self.commands = []

            def run(self, command, working_directory, timeout=None):
                self.commands.append(command)
                return ""
    """

    def run(self, command: str, working_directory: Path, timeout: float | None = None) -> str:
        """Run `command` from `working_directory` and return its output.

        Raises:
            ToolExecutionFailed: If the command exits with a non-zero status
            ToolTimedOut: If the command is still running after `timeout` seconds
        """
        ...


class ShellCommandRunner:
    """Runs commands through the system shell, blocking until they finish.

    Standard output and standard error are captured as one stream. On
    timeout the whole process group is killed, so helpers the CLI spawned
    do not outlive it.
    """

    def run(self, command: str, working_directory: Path, timeout: float | None = None) -> str:
        logger.debug("Running %s in %s", command, working_directory)
        with subprocess.Popen(
            command,
            shell=True,
            cwd=str(working_directory),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            start_new_session=True,
        ) as process:
            try:
                output, _ = process.communicate(timeout=timeout)
            except subprocess.TimeoutExpired:
                with contextlib.suppress(ProcessLookupError):
                    os.killpg(process.pid, signal.SIGKILL)
                output, _ = process.communicate()
                logger.warning("Command timed out after %s seconds", timeout)
                raise ToolTimedOut(timeout, output or "")

        output = output or ""
        if process.returncode != 0:
            logger.warning("Command exited with status %d", process.returncode)
            raise ToolExecutionFailed(process.returncode, output)

        return output
