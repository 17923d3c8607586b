"""
Adapter base — the contract between the walker and whatever runs a
generator.

The walker only talks to adapters through this protocol. The real
implementation launches a child process; tests swap in the mock.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field

from helmgen.core.models.action import Receipt
from helmgen.core.models.directive import Directive


class ExecutionContext(BaseModel):
    """Everything an adapter needs to run one generator.

    ``env`` is the complete environment for the child process: the
    caller's environment with the HELM_GENERATE_* variables layered on.
    """

    directive: Directive
    env: dict[str, str] = Field(default_factory=dict)

    @property
    def command(self) -> str:
        """The expanded command line to run."""
        return self.directive.expanded

    @property
    def argv(self) -> list[str]:
        """The command split on runs of whitespace. No quoting."""
        return self.command.split()


class Adapter(ABC):
    """Abstract base class for generator runners.

    Adapters run the command and return a receipt. They NEVER raise
    for a failed generator; the failure goes into the Receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'shell', 'mock')."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Check that the generator can be run at all.

        Returns:
            (is_valid, error_message). error_message is empty if valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Run the generator and return a receipt."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
