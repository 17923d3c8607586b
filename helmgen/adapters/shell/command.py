"""
Generator command adapter — run a directive as a child process.

The command line is split on whitespace (no quoting, no shell) and the
child inherits stdin, stdout and stderr, so generator output reaches the
user as it is produced. Nothing is captured.
"""

from __future__ import annotations

import logging
import signal
import subprocess
import time

from helmgen.adapters.base import Adapter, ExecutionContext
from helmgen.core.models.action import Receipt

logger = logging.getLogger(__name__)

EMPTY_COMMAND = "empty command"


def _describe_exit(return_code: int) -> str:
    """Exit description in the style of `exit status 2` / `signal: SIGKILL`."""
    if return_code < 0:
        try:
            return f"signal: {signal.Signals(-return_code).name}"
        except ValueError:
            return f"signal: {-return_code}"
    return f"exit status {return_code}"


class GeneratorCommandAdapter(Adapter):
    """Run generator commands with inherited standard streams."""

    @property
    def name(self) -> str:
        return "shell"

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        if not context.argv:
            return False, EMPTY_COMMAND
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        command = context.command
        path = context.directive.path

        valid, error = self.validate(context)
        if not valid:
            return Receipt.failure(adapter=self.name, command=command, path=path, error=error)

        argv = context.argv
        logger.debug("Executing: %s", argv)
        start = time.monotonic()

        try:
            result = subprocess.run(argv, env=context.env, check=False)
        except (OSError, ValueError) as e:
            # program missing, not executable, NUL byte in argv or env, ...
            return Receipt.failure(
                adapter=self.name,
                command=command,
                path=path,
                error=str(e),
                metadata={"program": argv[0]},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)

        if result.returncode == 0:
            return Receipt.success(
                adapter=self.name,
                command=command,
                path=path,
                return_code=0,
                duration_ms=elapsed_ms,
            )

        return Receipt.failure(
            adapter=self.name,
            command=command,
            path=path,
            error=_describe_exit(result.returncode),
            return_code=result.returncode,
            duration_ms=elapsed_ms,
        )
