"""External command execution."""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

from cliforge.errors import ErrorContext, ProcessError

logger = logging.getLogger(__name__)

# Lines of stderr kept in error messages
STDERR_TAIL_LINES = 5


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of a finished command."""

    command: str
    returncode: int
    stdout: str
    stderr: str


class ProcessRunner:
    """Run a single external command and raise on failure."""

    def run(self, command: str, cwd: Path) -> ProcessResult:
        """Run command in cwd.

        Raises:
            ProcessError: If the command cannot be parsed, the executable is
                missing or it exits non-zero.
        """
        try:
            args = shlex.split(command)
        except ValueError as e:
            raise ProcessError(
                f"Could not parse '{command}': {e}",
                ErrorContext(operation="run", file_path=str(cwd)),
            ) from e
        if not args:
            raise ProcessError(
                "No command to run", ErrorContext(operation="run", file_path=str(cwd))
            )
        logger.debug("Running %s in %s", args, cwd)
        try:
            result = subprocess.run(args, cwd=cwd, capture_output=True, text=True)
        except OSError as e:
            raise ProcessError(
                f"Could not run '{command}': {e}",
                ErrorContext(operation="run", file_path=str(cwd)),
            ) from e

        if result.returncode != 0:
            tail = "\n".join(result.stderr.strip().splitlines()[-STDERR_TAIL_LINES:])
            message = f"'{command}' exited with code {result.returncode}"
            if tail:
                message += f": {tail}"
            raise ProcessError(
                message,
                ErrorContext(
                    operation="run",
                    file_path=str(cwd),
                    additional_info={"returncode": result.returncode},
                ),
            )

        return ProcessResult(
            command=command,
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )
