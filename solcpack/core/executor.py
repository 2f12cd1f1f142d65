"""Setup action runner — pluggable executors for external commands.

Defines the ``Executor`` Protocol that the layer rebuild depends on, and the
``SubprocessExecutor`` used in production. Tests substitute any object with
a matching ``execute()`` method.

Every executor merges standard output and standard error into one string
and returns it on success; on failure the same string travels on the raised
``ExecutionFailed`` so callers can surface it. Output is decoded as UTF-8
with undecodable bytes replaced by U+FFFD.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class Execution(BaseModel):
    """One invocation of an external command."""

    model_config = ConfigDict(frozen=True)

    command: str
    args: list[str] = []
    env: dict[str, str] | None = None
    working_directory: Path | None = None

    @property
    def display(self) -> str:
        """The command line as a user would type it."""
        return " ".join([self.command, *self.args])


class ExecutionFailed(RuntimeError):
    """Raised when a command exits non-zero or cannot be started.

    Attributes
    ----------
    execution:
        The failed invocation.
    output:
        Combined stdout/stderr captured before the failure.
    returncode:
        Exit status, or ``None`` when the process never started.
    """

    def __init__(
        self,
        execution: Execution,
        output: str,
        *,
        returncode: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.execution = execution
        self.output = output
        self.returncode = returncode
        self.cause = cause
        if returncode is not None:
            reason = f"exit status {returncode}"
        else:
            reason = f"{type(cause).__name__}: {cause}" if cause else "unknown failure"
        super().__init__(f"error executing '{execution.display}': {reason}")


@runtime_checkable
class Executor(Protocol):
    """Protocol for command execution backends.

    Any object with an ``execute(execution) -> str`` method satisfies this
    protocol.
    """

    def execute(self, execution: Execution) -> str:
        """Run *execution* to completion and return its combined output.

        Raises
        ------
        ExecutionFailed
            On non-zero exit or when the command cannot be started.
        """
        ...


class SubprocessExecutor:
    """Runs executions with :func:`subprocess.run`, blocking until exit.

    There is no timeout; callers needing a bound wrap the build externally.
    """

    def execute(self, execution: Execution) -> str:
        logger.debug("Executing %s", execution.display)
        try:
            completed = subprocess.run(
                [execution.command, *execution.args],
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                env=execution.env,
                cwd=execution.working_directory,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as exc:
            raise ExecutionFailed(execution, "", cause=exc) from exc

        if completed.returncode != 0:
            raise ExecutionFailed(execution, completed.stdout, returncode=completed.returncode)
        return completed.stdout
