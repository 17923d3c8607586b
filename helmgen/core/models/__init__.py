"""
Domain models — Pydantic types for helm-generate.

All models are re-exported here for convenient access:

    from helmgen.core.models import Directive, GenerateSettings, Receipt
"""

from helmgen.core.models.action import Receipt
from helmgen.core.models.directive import (
    ENV_COMMAND,
    ENV_COMMAND_EXPANDED,
    ENV_DIR,
    ENV_FILE,
    Directive,
)
from helmgen.core.models.settings import GENERATOR_KEYWORD, GenerateSettings

__all__ = [
    # directive.py
    "Directive",
    "ENV_COMMAND",
    "ENV_COMMAND_EXPANDED",
    "ENV_DIR",
    "ENV_FILE",
    # settings.py
    "GENERATOR_KEYWORD",
    "GenerateSettings",
    # action.py
    "Receipt",
]
