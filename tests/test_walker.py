"""
Tests for the walker — traversal, skip rule, expansion, execution, errors.
"""

import os
from pathlib import Path

from helmgen.adapters.mock import MockAdapter
from helmgen.adapters.shell.command import GeneratorCommandAdapter
from helmgen.core.engine.errors import DirectiveError, GeneratorError
from helmgen.core.engine.walker import (
    Visit,
    iter_files,
    substitution_context,
    visit_directory,
    walk,
)
from helmgen.core.models.directive import Directive
from helmgen.core.models.settings import GenerateSettings

# ── Traversal ────────────────────────────────────────────────────────


class TestIterFiles:
    def test_lexical_depth_first(self, chart_dir: Path, write_file):
        write_file(chart_dir / "b.txt", "")
        write_file(chart_dir / "a" / "z.txt", "")
        write_file(chart_dir / "a" / "y" / "x.txt", "")
        write_file(chart_dir / "c.txt", "")
        names = [p.relative_to(chart_dir).as_posix() for p in iter_files(chart_dir)]
        assert names == ["a/y/x.txt", "a/z.txt", "b.txt", "c.txt"]

    def test_skips_dot_and_underscore_dirs(self, chart_dir: Path, write_file):
        write_file(chart_dir / ".git" / "config", "")
        write_file(chart_dir / "_build" / "out.txt", "")
        write_file(chart_dir / "templates" / "_helpers.tpl", "")
        write_file(chart_dir / ".helmignore", "")
        names = [p.relative_to(chart_dir).as_posix() for p in iter_files(chart_dir)]
        # only directories are skipped, not files with those prefixes
        assert names == [".helmignore", "templates/_helpers.tpl"]

    def test_nested_skip(self, chart_dir: Path, write_file):
        write_file(chart_dir / "a" / "_gen" / "deep" / "file.txt", "")
        assert list(iter_files(chart_dir)) == []

    def test_root_never_skipped(self, tmp_path: Path, write_file):
        root = tmp_path / ".chart"
        write_file(root / "file.txt", "")
        assert list(iter_files(root)) == [root / "file.txt"]

    def test_root_file(self, tmp_path: Path, write_file):
        f = write_file(tmp_path / "single.txt", "")
        assert list(iter_files(f)) == [f]

    def test_symlinked_root_dir_not_followed(self, chart_dir: Path, tmp_path: Path, write_file):
        write_file(chart_dir / "gen.txt", "# helm:generate echo hi\n")
        link = tmp_path / "link"
        link.symlink_to(chart_dir, target_is_directory=True)
        assert list(iter_files(link)) == []
        mock = MockAdapter()
        result = walk(link, adapter=mock)
        assert result.ok
        assert result.count == 0
        assert mock.call_count == 0

    def test_symlinked_root_file(self, chart_dir: Path, tmp_path: Path, write_file):
        target = write_file(chart_dir / "gen.txt", "# helm:generate echo hi\n")
        link = tmp_path / "link.txt"
        link.symlink_to(target)
        assert list(iter_files(link)) == [link]

    def test_custom_prefixes(self, chart_dir: Path, write_file):
        write_file(chart_dir / "vendor" / "a.txt", "")
        write_file(chart_dir / ".keep" / "b.txt", "")
        names = [p.name for p in iter_files(chart_dir, skip_prefixes=["vendor"])]
        assert names == ["b.txt"]

    def test_symlinked_dir_not_followed(self, chart_dir: Path, tmp_path: Path, write_file):
        write_file(tmp_path / "elsewhere" / "gen.txt", "# helm:generate echo hi\n")
        (chart_dir / "link").symlink_to(tmp_path / "elsewhere", target_is_directory=True)
        assert list(iter_files(chart_dir)) == []


class TestVisitDirectory:
    def test_continue(self):
        assert visit_directory(Path("chart/templates"), [".", "_"]) is Visit.CONTINUE

    def test_skip(self):
        assert visit_directory(Path("chart/.git"), [".", "_"]) is Visit.SKIP_SUBTREE
        assert visit_directory(Path("chart/_out"), [".", "_"]) is Visit.SKIP_SUBTREE


# ── Walk with the mock adapter ───────────────────────────────────────


class TestWalk:
    def test_one_match_one_plain_file(self, chart_dir: Path, write_file):
        write_file(chart_dir / "gen.sh", "# helm:generate echo hi\n")
        write_file(chart_dir / "values.yaml", "replicas: 1\n")
        mock = MockAdapter()
        result = walk(chart_dir, adapter=mock)
        assert result.ok
        assert result.count == 1
        assert mock.commands == ["echo hi"]

    def test_hidden_dir_not_executed(self, chart_dir: Path, write_file):
        write_file(chart_dir / "a.go", "// helm:generate echo visible\n")
        write_file(chart_dir / ".hidden" / "b.go", "// helm:generate echo hidden\n")
        mock = MockAdapter()
        result = walk(chart_dir, adapter=mock)
        assert result.count == 1
        assert mock.commands == ["echo visible"]

    def test_expands_file_variable(self, chart_dir: Path, write_file):
        path = write_file(chart_dir / "main.go", "// helm:generate echo $HELM_GENERATE_FILE\n")
        mock = MockAdapter()
        walk(chart_dir, adapter=mock, base_env={})
        assert mock.commands == [f"echo {path}"]

    def test_context_variables(self, chart_dir: Path, write_file):
        path = write_file(chart_dir / "x.c", "/* helm:generate gen ${HELM_GENERATE_DIR} */\n")
        mock = MockAdapter()
        walk(str(chart_dir), adapter=mock, base_env={"PATH": "/bin"})
        env = mock.call_log[0].env
        assert env["PATH"] == "/bin"
        assert env["HELM_GENERATE_COMMAND"] == "gen ${HELM_GENERATE_DIR}"
        assert env["HELM_GENERATE_FILE"] == str(path)
        assert env["HELM_GENERATE_DIR"] == str(chart_dir)
        assert env["HELM_GENERATE_COMMAND_EXPANDED"] == f"gen {chart_dir}"

    def test_expanded_variable_not_visible_to_expansion(self, chart_dir: Path, write_file):
        write_file(chart_dir / "a", "# helm:generate echo first\n")
        write_file(chart_dir / "b", "# helm:generate echo [$HELM_GENERATE_COMMAND_EXPANDED]\n")
        mock = MockAdapter()
        walk(chart_dir, adapter=mock, base_env={})
        assert mock.commands == ["echo first", "echo []"]

    def test_records_directives(self, chart_dir: Path, write_file):
        write_file(chart_dir / "a.yaml", "# helm:generate echo $HELM_GENERATE_DIR\n")
        result = walk(chart_dir, adapter=MockAdapter(), base_env={})
        assert len(result.directives) == 1
        directive = result.directives[0]
        assert directive.command == "echo $HELM_GENERATE_DIR"
        assert directive.expanded == f"echo {chart_dir}"
        assert directive.root == str(chart_dir)

    def test_process_environment_untouched(self, chart_dir: Path, write_file, clean_helm_env):
        write_file(chart_dir / "a", "# helm:generate echo hi\n")
        walk(chart_dir, adapter=MockAdapter())
        assert not any(name.startswith("HELM_GENERATE_") for name in os.environ)

    def test_empty_tree(self, chart_dir: Path):
        result = walk(chart_dir, adapter=MockAdapter())
        assert result.ok
        assert result.count == 0

    def test_idempotent(self, chart_dir: Path, write_file):
        write_file(chart_dir / "a", "# helm:generate echo $HELM_GENERATE_FILE\n")
        write_file(chart_dir / "sub" / "b", "// helm:generate echo $HELM_GENERATE_COMMAND\n")
        first, second = MockAdapter(), MockAdapter()
        r1 = walk(chart_dir, adapter=first)
        r2 = walk(chart_dir, adapter=second)
        assert r1.count == r2.count == 2
        assert first.commands == second.commands

    def test_custom_settings(self, chart_dir: Path, write_file):
        write_file(chart_dir / "a", "# gen: make a\n")
        write_file(chart_dir / "b", "# helm:generate make b\n")
        mock = MockAdapter()
        result = walk(chart_dir, settings=GenerateSettings(keyword="gen: "), adapter=mock)
        assert result.count == 1
        assert mock.commands == ["make a"]

    def test_dry_run(self, chart_dir: Path, write_file):
        write_file(chart_dir / "a", "# helm:generate echo a\n")
        write_file(chart_dir / "b", "# helm:generate echo b\n")
        mock = MockAdapter()
        result = walk(chart_dir, adapter=mock, dry_run=True)
        assert result.ok
        assert result.count == 2
        assert mock.call_count == 0
        assert all(r.status == "skipped" for r in result.receipts)

    def test_to_dict(self, chart_dir: Path, write_file):
        write_file(chart_dir / "a", "# helm:generate echo a\n")
        data = walk(chart_dir, adapter=MockAdapter()).to_dict()
        assert data["count"] == 1
        assert data["ok"] is True
        assert data["error"] is None
        assert data["directives"][0]["command"] == "echo a"
        assert data["receipts"][0]["status"] == "ok"


# ── Errors ───────────────────────────────────────────────────────────


class TestWalkErrors:
    def test_empty_command_aborts(self, chart_dir: Path, write_file):
        write_file(chart_dir / "a", "# helm:generate echo a\n")
        b = write_file(chart_dir / "b", "# helm:generate $NOT_SET_ANYWHERE\n")
        write_file(chart_dir / "c", "# helm:generate echo c\n")
        mock = MockAdapter()
        result = walk(chart_dir, adapter=mock, base_env={})
        assert isinstance(result.error, GeneratorError)
        assert "empty command" in str(result.error)
        assert str(b) in str(result.error)
        assert result.count == 1
        assert mock.commands == ["echo a"]

    def test_whitespace_only_command_aborts(self, chart_dir: Path, write_file):
        write_file(chart_dir / "a", "# helm:generate $A $B\n")
        result = walk(chart_dir, adapter=MockAdapter(), base_env={"A": " ", "B": "\t"})
        assert isinstance(result.error, GeneratorError)
        assert result.error.cause == "empty command"
        assert result.count == 0

    def test_failure_stops_walk(self, chart_dir: Path, write_file):
        a = write_file(chart_dir / "a", "# helm:generate echo a\n")
        write_file(chart_dir / "b", "# helm:generate echo b\n")
        mock = MockAdapter()
        mock.set_failure(str(a), error="exit status 3")
        result = walk(chart_dir, adapter=mock)
        assert str(result.error) == f"failed to execute echo a ({a}): exit status 3"
        assert result.count == 0
        assert mock.commands == ["echo a"]

    def test_unterminated_directive(self, chart_dir: Path, write_file):
        write_file(chart_dir / "a", "# helm:generate echo a")
        result = walk(chart_dir, adapter=MockAdapter())
        assert isinstance(result.error, DirectiveError)

    def test_missing_root(self, tmp_path: Path):
        result = walk(tmp_path / "nope", adapter=MockAdapter())
        assert isinstance(result.error, FileNotFoundError)
        assert result.count == 0

    def test_broken_symlink_aborts(self, chart_dir: Path, write_file):
        write_file(chart_dir / "a", "# helm:generate echo a\n")
        (chart_dir / "b").symlink_to(chart_dir / "missing")
        result = walk(chart_dir, adapter=MockAdapter())
        assert isinstance(result.error, FileNotFoundError)
        assert result.count == 1


# ── Walk with real processes ─────────────────────────────────────────


class TestWalkExecution:
    def test_runs_generator(self, chart_dir: Path, write_file):
        write_file(chart_dir / "templates" / "gen.yaml", "# helm:generate touch $HELM_GENERATE_DIR/generated.txt\n")
        result = walk(chart_dir, adapter=GeneratorCommandAdapter())
        assert result.ok, result.error
        assert result.count == 1
        assert (chart_dir / "generated.txt").is_file()

    def test_child_sees_variables(self, chart_dir: Path, tmp_path: Path, write_file, env_dump_script: Path):
        path = write_file(chart_dir / "gen.go", f"// helm:generate {env_dump_script} --flag\n")
        result = walk(chart_dir)
        assert result.ok, result.error
        dumped = (tmp_path / "env.out").read_text().splitlines()
        assert f"HELM_GENERATE_FILE={path}" in dumped
        assert f"HELM_GENERATE_DIR={chart_dir}" in dumped
        assert f"HELM_GENERATE_COMMAND={env_dump_script} --flag" in dumped
        assert f"HELM_GENERATE_COMMAND_EXPANDED={env_dump_script} --flag" in dumped

    def test_missing_program(self, chart_dir: Path, write_file):
        path = write_file(chart_dir / "a.sh", "# helm:generate helmgen-no-such-program --x\n")
        result = walk(chart_dir)
        assert isinstance(result.error, GeneratorError)
        message = str(result.error)
        assert "helmgen-no-such-program --x" in message
        assert str(path) in message
        assert result.count == 0

    def test_null_byte_in_command(self, chart_dir: Path, write_file):
        path = write_file(chart_dir / "a", b"# helm:generate echo a\x00b\n")
        result = walk(chart_dir)
        assert isinstance(result.error, GeneratorError)
        assert "null byte" in result.error.cause
        assert str(path) in str(result.error)
        assert result.count == 0

    def test_nonzero_exit(self, chart_dir: Path, write_file):
        write_file(chart_dir / "a.sh", "# helm:generate false\n")
        result = walk(chart_dir)
        assert isinstance(result.error, GeneratorError)
        assert result.error.cause == "exit status 1"

    def test_substitution_context_copies(self):
        directive = Directive(command="x", path="p", root="r")
        base = {"KEEP": "1"}
        env = substitution_context(directive, base)
        assert env["HELM_GENERATE_FILE"] == "p"
        assert "HELM_GENERATE_FILE" not in base
