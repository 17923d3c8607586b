"""
Config check use case — validate helmgen.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from helmgen.core.config.loader import CONFIG_FILE, ConfigError, find_config_file, load_settings
from helmgen.core.models.settings import GENERATOR_KEYWORD, GenerateSettings


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    settings: GenerateSettings | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "keyword": self.settings.keyword if self.settings else None,
            "skip_prefixes": self.settings.skip_prefixes if self.settings else [],
        }


def check_config(
    config_path: Path | None = None,
    start_dir: Path | None = None,
) -> ConfigCheckResult:
    """Validate generator configuration and report issues.

    Args:
        config_path: Optional explicit path to helmgen.yml.
        start_dir: Where to start searching when config_path is None.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file(start_dir)
    result.config_path = config_path

    try:
        settings = load_settings(config_path)
        result.settings = settings
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    if config_path is None:
        result.warnings.append(f"No {CONFIG_FILE} found. Using defaults.")

    if not settings.keyword.endswith(" "):
        result.warnings.append(
            f"Keyword {settings.keyword!r} has no trailing space; "
            "the command will start immediately after it."
        )
    elif settings.keyword != GENERATOR_KEYWORD:
        result.warnings.append(
            f"Custom keyword {settings.keyword!r}; "
            f"files using {GENERATOR_KEYWORD.strip()!r} will be ignored."
        )

    dupes = {p for p in settings.skip_prefixes if settings.skip_prefixes.count(p) > 1}
    if dupes:
        result.warnings.append(f"Duplicate skip prefixes: {', '.join(sorted(dupes))}")

    result.valid = len(result.errors) == 0
    return result
