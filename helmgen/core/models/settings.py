"""
Settings model — the optional helmgen.yml configuration.

Every field has a default, so a missing config file means "behave like
plain `helm generate`".
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

GENERATOR_KEYWORD = "helm:generate "


class GenerateSettings(BaseModel):
    """Walk and parse settings."""

    version: int = 1

    # Text that must follow the comment opener, trailing space included.
    keyword: str = GENERATOR_KEYWORD

    # Directories whose names start with one of these are not descended into.
    skip_prefixes: list[str] = Field(default_factory=lambda: [".", "_"])

    @field_validator("keyword")
    @classmethod
    def _keyword_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("keyword must not be blank")
        if "\n" in value:
            raise ValueError("keyword must fit on one line")
        # the parser reads up to two bytes past a one-byte opener
        if len(value.encode("utf-8")) < 2:
            raise ValueError("keyword must be at least two bytes long")
        return value

    @field_validator("skip_prefixes")
    @classmethod
    def _prefixes_not_empty_strings(cls, value: list[str]) -> list[str]:
        # "" would match every directory and skip the whole tree
        if any(not p for p in value):
            raise ValueError("skip_prefixes entries must be non-empty")
        return value
