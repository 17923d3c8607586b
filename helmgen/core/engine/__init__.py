"""Engine — directive parsing, expansion and the directory walk."""

from helmgen.core.engine.errors import DirectiveError, GenerateError, GeneratorError
from helmgen.core.engine.walker import Visit, WalkResult, walk

__all__ = [
    "DirectiveError",
    "GenerateError",
    "GeneratorError",
    "Visit",
    "WalkResult",
    "walk",
]
