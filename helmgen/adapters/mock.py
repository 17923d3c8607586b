"""
Mock adapter — test double for generator execution.

Used by `helmgen generate --mock` and the test suite to walk a tree
without launching anything. Succeeds by default; individual commands
or files can be configured to fail.
"""

from __future__ import annotations

from helmgen.adapters.base import Adapter, ExecutionContext
from helmgen.adapters.shell.command import EMPTY_COMMAND
from helmgen.core.models.action import Receipt


class MockAdapter(Adapter):
    """Records every generator it is asked to run."""

    def __init__(
        self,
        adapter_name: str = "mock",
        default_output: str = "[mock] executed",
    ):
        self._name = adapter_name
        self._default_output = default_output
        self._failures: dict[str, str] = {}
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    @property
    def commands(self) -> list[str]:
        """Expanded command lines, in the order they were run."""
        return [ctx.command for ctx in self._call_log]

    def set_failure(self, key: str, error: str = "Mock failure") -> None:
        """Make generators fail whose expanded command or file path is key."""
        self._failures[key] = error

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        if not context.argv:
            return False, EMPTY_COMMAND
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)
        command = context.command
        path = context.directive.path

        for key in (command, path):
            if key in self._failures:
                return Receipt.failure(
                    adapter=self._name,
                    command=command,
                    path=path,
                    error=self._failures[key],
                )

        return Receipt.success(
            adapter=self._name,
            command=command,
            path=path,
            output=self._default_output,
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Clear call log and configured failures."""
        self._call_log.clear()
        self._failures.clear()
