"""
Generate use case — resolve settings, walk a directory, run generators.

This is what the CLI calls. It turns configuration problems and walk
failures into a result object instead of exceptions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from helmgen.adapters.base import Adapter
from helmgen.core.config.loader import ConfigError, find_config_file, load_settings
from helmgen.core.engine.walker import WalkResult, walk
from helmgen.core.models.settings import GenerateSettings

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Result of a generate run."""

    directory: str = ""
    config_path: Path | None = None
    settings: GenerateSettings | None = None
    walk: WalkResult | None = None
    error: str | None = None

    @property
    def count(self) -> int:
        return self.walk.count if self.walk else 0

    def to_dict(self) -> dict:
        result: dict = {
            "directory": self.directory,
            "config_path": str(self.config_path) if self.config_path else None,
            "count": self.count,
        }
        if self.error:
            result["error"] = self.error
        if self.walk:
            result["walk"] = self.walk.to_dict()
        return result


def run_generate(
    directory: str | Path = ".",
    config_path: Path | None = None,
    dry_run: bool = False,
    mock_mode: bool = False,
    adapter: Adapter | None = None,
) -> GenerateResult:
    """Run every generator directive found under directory.

    Args:
        directory: Chart (or any) directory to walk.
        config_path: Explicit helmgen.yml. If None, searched upward
            from directory; defaults apply when nothing is found.
        dry_run: Find and expand directives without running them.
        mock_mode: Use the mock adapter (nothing is launched).
        adapter: Optional pre-configured adapter; wins over mock_mode.

    Returns:
        GenerateResult carrying the walk result or an error message.
    """
    result = GenerateResult(directory=str(directory))

    # ── Load settings ────────────────────────────────────────────
    try:
        if config_path is None:
            config_path = find_config_file(Path(directory))
        result.config_path = config_path
        settings = load_settings(config_path)
        result.settings = settings
    except ConfigError as e:
        result.error = str(e)
        return result

    # ── Pick the adapter ─────────────────────────────────────────
    if adapter is None and mock_mode:
        from helmgen.adapters.mock import MockAdapter

        adapter = MockAdapter()

    # ── Walk ─────────────────────────────────────────────────────
    walk_result = walk(directory, settings=settings, adapter=adapter, dry_run=dry_run)
    result.walk = walk_result

    if walk_result.error is not None:
        result.error = str(walk_result.error)
        logger.debug("Generate failed in %s: %s", directory, result.error)
    else:
        logger.info("Ran %d generators under %s", walk_result.count, directory)

    return result
