"""Tests for CLI commands."""

import sqlite3
from pathlib import Path

import pytest
from click.testing import CliRunner

from simple_db_cache.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def source_file(fixture_files):
    return str(Path(fixture_files["a/aa/foo.ts"]).resolve())


def _invoke(runner, cache_dir, *args, **kwargs):
    return runner.invoke(cli, ["--cache-dir", str(cache_dir), *args], **kwargs)


class TestCLIGroup:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "sdb-cache" in result.output
        assert "--cache-dir" in result.output


class TestStatsCommand:
    def test_shows_table(self, runner, cache_dir):
        result = _invoke(runner, cache_dir, "stats")
        assert result.exit_code == 0
        assert "Cache Statistics" in result.output
        assert "Entries" in result.output
        assert "Memory size" in result.output

    def test_creates_cache_dir(self, runner, cache_dir):
        _invoke(runner, cache_dir, "stats")
        assert (cache_dir / "simple-db-cache.sqlite").is_file()


class TestAddAndGet:
    def test_add_from_file_then_get(self, runner, cache_dir, source_file, tmp_path):
        content = tmp_path / "converted.txt"
        content.write_text("// A/AA/FOO.TS\n")
        result = _invoke(runner, cache_dir, "add", source_file, "--content-file", str(content))
        assert result.exit_code == 0

        result = _invoke(runner, cache_dir, "get", source_file)
        assert result.exit_code == 0
        assert "// A/AA/FOO.TS" in result.output

    def test_add_from_stdin(self, runner, cache_dir, source_file):
        result = _invoke(runner, cache_dir, "add", source_file, input="from stdin")
        assert result.exit_code == 0

        result = _invoke(runner, cache_dir, "get", source_file)
        assert result.exit_code == 0
        assert "from stdin" in result.output

    def test_get_miss_exits_nonzero(self, runner, cache_dir, source_file):
        result = _invoke(runner, cache_dir, "get", source_file)
        assert result.exit_code == 1

    def test_get_stale_exits_nonzero(self, runner, cache_dir, source_file, touch):
        _invoke(runner, cache_dir, "add", source_file, input="converted")
        touch(source_file)
        result = _invoke(runner, cache_dir, "get", source_file)
        assert result.exit_code == 1

    def test_get_nonexistent_file(self, runner, cache_dir):
        result = _invoke(runner, cache_dir, "get", "nonexistent_file.ts")
        assert result.exit_code != 0


class TestLsCommand:
    def test_lists_entries(self, runner, cache_dir, source_file):
        _invoke(runner, cache_dir, "add", source_file, input="converted")
        result = _invoke(runner, cache_dir, "ls")
        assert result.exit_code == 0
        assert "Cached Files" in result.output
        assert "fresh" in result.output

    def test_marks_missing_sources(self, runner, cache_dir, source_file):
        _invoke(runner, cache_dir, "add", source_file, input="converted")
        Path(source_file).unlink()
        result = _invoke(runner, cache_dir, "ls")
        assert result.exit_code == 0
        assert "missing" in result.output


class TestClearCommand:
    def test_clear_needs_confirmation(self, runner, cache_dir):
        result = _invoke(runner, cache_dir, "clear", input="n\n")
        assert result.exit_code != 0  # Aborted

    def test_clear_with_yes(self, runner, cache_dir, source_file):
        _invoke(runner, cache_dir, "add", source_file, input="converted")
        result = _invoke(runner, cache_dir, "clear", "--yes")
        assert result.exit_code == 0
        assert "cleared" in result.output.lower()

        result = _invoke(runner, cache_dir, "get", source_file)
        assert result.exit_code == 1


class TestConfigErrors:
    def test_invalid_env_combination(self, runner, cache_dir, monkeypatch):
        monkeypatch.setenv("SDB_CACHE_USE_MEMORY", "false")
        monkeypatch.setenv("SDB_CACHE_HYDRATE", "true")
        result = _invoke(runner, cache_dir, "stats")
        assert result.exit_code == 1
        assert not cache_dir.exists()


class TestStorageErrors:
    @pytest.fixture
    def damaged_row(self, runner, cache_dir, source_file):
        _invoke(runner, cache_dir, "stats")
        conn = sqlite3.connect(str(cache_dir / "simple-db-cache.sqlite"))
        try:
            conn.execute(
                "INSERT INTO file_cache (file, content, added) VALUES (?, 'x', 'garbage')",
                (source_file,),
            )
            conn.commit()
        finally:
            conn.close()

    def test_get_reports_error(self, runner, cache_dir, source_file, damaged_row):
        result = _invoke(runner, cache_dir, "get", source_file)
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)

    def test_ls_reports_error(self, runner, cache_dir, damaged_row):
        result = _invoke(runner, cache_dir, "ls")
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
