"""Adapters — ways of running a generator command.

Public re-exports for convenient access.
"""

from helmgen.adapters.base import Adapter, ExecutionContext
from helmgen.adapters.mock import MockAdapter
from helmgen.adapters.shell.command import GeneratorCommandAdapter

__all__ = [
    "Adapter",
    "ExecutionContext",
    "GeneratorCommandAdapter",
    "MockAdapter",
]
