"""
Walker — find generator directives under a directory and run them.

Flow, one file at a time:
    list directory → skip rule → open → parse → expand → execute

The walk stops at the first error of any kind. Directories are visited
depth-first in lexical order, entries of a directory interleaved by name.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from helmgen.adapters.base import Adapter, ExecutionContext
from helmgen.core.engine.errors import GenerateError, GeneratorError
from helmgen.core.engine.expand import expand
from helmgen.core.engine.parser import read_generator
from helmgen.core.models.action import Receipt
from helmgen.core.models.directive import ENV_COMMAND_EXPANDED, Directive
from helmgen.core.models.settings import GenerateSettings

logger = logging.getLogger(__name__)


class Visit(Enum):
    """What to do with a directory met during the walk."""

    CONTINUE = "continue"
    SKIP_SUBTREE = "skip_subtree"


@dataclass
class WalkResult:
    """Outcome of a walk.

    ``count`` is the number of generators that ran successfully (in a
    dry run, the number of directives found). ``error`` is the exception
    that stopped the walk, or None.
    """

    root: str = ""
    count: int = 0
    dry_run: bool = False
    directives: list[Directive] = field(default_factory=list)
    receipts: list[Receipt] = field(default_factory=list)
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {
            "root": self.root,
            "count": self.count,
            "dry_run": self.dry_run,
            "ok": self.ok,
            "error": str(self.error) if self.error else None,
            "directives": [d.model_dump(mode="json") for d in self.directives],
            "receipts": [r.model_dump(mode="json") for r in self.receipts],
        }


def visit_directory(path: Path, skip_prefixes: Sequence[str]) -> Visit:
    """Decide whether a directory's contents are walked."""
    if path.name.startswith(tuple(skip_prefixes)):
        return Visit.SKIP_SUBTREE
    return Visit.CONTINUE


def iter_files(root: Path, skip_prefixes: Sequence[str] = (".", "_")) -> Iterator[Path]:
    """Yield every non-directory entry under root, honoring the skip rule.

    The root itself is never skipped. Symlinks are not followed into, the
    root included: a symlinked directory yields nothing, a symlinked file
    is yielded. ``OSError`` from listing or stat-ing propagates.
    """
    mode = root.lstat().st_mode
    if stat.S_ISDIR(mode):
        yield from _walk_dir(root, skip_prefixes)
    elif stat.S_ISLNK(mode) and root.is_dir():
        logger.debug("Not following symlinked directory %s", root)
    else:
        yield root


def _walk_dir(directory: Path, skip_prefixes: Sequence[str]) -> Iterator[Path]:
    for name in sorted(os.listdir(directory)):
        path = directory / name
        mode = path.lstat().st_mode
        if stat.S_ISDIR(mode):
            if visit_directory(path, skip_prefixes) is Visit.SKIP_SUBTREE:
                logger.debug("Skipping directory %s", path)
                continue
            yield from _walk_dir(path, skip_prefixes)
        elif stat.S_ISLNK(mode) and path.is_dir():
            # symlinked directory: neither followed nor readable as a file
            continue
        else:
            yield path


def substitution_context(
    directive: Directive,
    base_env: dict[str, str] | None = None,
) -> dict[str, str]:
    """Environment the directive is expanded against and run with.

    Starts from base_env (default: a copy of os.environ) and layers the
    HELM_GENERATE_* variables on top. os.environ is left untouched.
    """
    env = dict(os.environ if base_env is None else base_env)
    env.update(directive.variables())
    return env


def walk(
    root: str | Path,
    settings: GenerateSettings | None = None,
    adapter: Adapter | None = None,
    dry_run: bool = False,
    base_env: dict[str, str] | None = None,
) -> WalkResult:
    """Walk a chart directory and run generators as they are found.

    Args:
        root: Directory to walk. Also exported as HELM_GENERATE_DIR.
        settings: Keyword and skip rule (default: GenerateSettings()).
        adapter: Runs the commands (default: GeneratorCommandAdapter).
        dry_run: Parse and expand only; record skipped receipts.
        base_env: Environment to layer the variables onto
            (default: the current process environment).

    Returns:
        WalkResult with the count of generators run and, if the walk
        stopped early, the error that stopped it.
    """
    if settings is None:
        settings = GenerateSettings()
    if adapter is None:
        from helmgen.adapters.shell.command import GeneratorCommandAdapter

        adapter = GeneratorCommandAdapter()

    root_dir = str(root)
    result = WalkResult(root=root_dir, dry_run=dry_run)

    try:
        for path in iter_files(Path(root_dir), settings.skip_prefixes):
            with open(path, "rb") as f:
                line = read_generator(f, keyword=settings.keyword)
            if not line:
                continue

            directive = Directive(command=line, path=str(path), root=root_dir)
            env = substitution_context(directive, base_env)
            directive.expanded = expand(line, env)
            env[ENV_COMMAND_EXPANDED] = directive.expanded
            result.directives.append(directive)

            logger.debug("File: %s, Command: %s", directive.path, directive.expanded)
            receipt = _run(adapter, ExecutionContext(directive=directive, env=env), dry_run)
            result.receipts.append(receipt)

            if receipt.failed:
                raise GeneratorError(directive.expanded, directive.path, receipt.error or "")

            result.count += 1
            logger.info(
                "%s %s → %s",
                "⊘" if dry_run else "✓",
                directive.path,
                directive.expanded,
            )
    except (OSError, GenerateError) as e:
        logger.debug("Walk of %s stopped after %d generators: %s", root_dir, result.count, e)
        result.error = e

    return result


def _run(adapter: Adapter, context: ExecutionContext, dry_run: bool) -> Receipt:
    """Validate, then execute unless this is a dry run."""
    valid, error = adapter.validate(context)
    if not valid:
        return Receipt.failure(
            adapter=adapter.name,
            command=context.command,
            path=context.directive.path,
            error=error,
        )
    if dry_run:
        return Receipt.skip(
            adapter=adapter.name,
            command=context.command,
            path=context.directive.path,
            reason="[dry-run] not executed",
        )
    return adapter.execute(context)
