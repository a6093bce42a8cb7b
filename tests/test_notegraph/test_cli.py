"""Tests for the notegraph command line."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from notegraph.cli import cli


@pytest.fixture()
def vault_dir(tmp_path: Path) -> Path:
    (tmp_path / "A.md").write_text("---\ntags: [math]\n---\nSee [[B]].\n", encoding="utf-8")
    (tmp_path / "B.md").write_text("On to [[C]] and [[Ghost]].\n", encoding="utf-8")
    (tmp_path / "C.md").write_text("Leaf. #misc\n", encoding="utf-8")
    return tmp_path


def _run(vault_dir: Path, *args: str):
    return CliRunner().invoke(cli, ["--vault", str(vault_dir), *args])


class TestStats:
    def test_global_and_local_figures(self, vault_dir: Path):
        result = _run(vault_dir, "stats", "#math")
        assert result.exit_code == 0, result.output
        assert "Notes" in result.output
        assert "33.3%" in result.output
        assert "Internal links: 0" in result.output
        assert "Incoming links: 0" in result.output
        assert "Outgoing links: 1" in result.output

    def test_empty_query(self, vault_dir: Path):
        result = _run(vault_dir, "stats")
        assert result.exit_code == 0, result.output
        assert "100.0%" in result.output


class TestFilter:
    def test_json_output(self, vault_dir: Path):
        result = _run(vault_dir, "filter", "--json", ">C")
        assert result.exit_code == 0, result.output
        members = json.loads(result.output)
        assert [m["name"] for m in members] == ["B"]
        assert members[0]["broken_links"] == 1
        assert members[0]["outlinks_global"] == 1

    def test_table_output(self, vault_dir: Path):
        result = _run(vault_dir, "filter")
        assert result.exit_code == 0, result.output
        assert "3 notes" in result.output

    def test_any_flag(self, vault_dir: Path):
        result = _run(vault_dir, "filter", "--json", "--any", "#math", "#misc")
        assert [m["name"] for m in json.loads(result.output)] == ["A", "C"]


class TestLinks:
    def test_neighbourhood(self, vault_dir: Path):
        result = _run(vault_dir, "links", "B")
        assert result.exit_code == 0, result.output
        assert "Links (1): C" in result.output
        assert "Backlinks (1): A" in result.output

    def test_unknown_note(self, vault_dir: Path):
        result = _run(vault_dir, "links", "Nope")
        assert result.exit_code != 0
        assert "No note named 'Nope'" in result.output


class TestTags:
    def test_tag_table(self, vault_dir: Path):
        result = _run(vault_dir, "tags")
        assert result.exit_code == 0, result.output
        assert "math" in result.output
        assert "misc" in result.output


class TestConfig:
    def test_invalid_settings_file(self, vault_dir: Path):
        (vault_dir / ".notegraph.toml").write_text("history_limit = 'x'\n", encoding="utf-8")
        result = _run(vault_dir, "tags")
        assert result.exit_code != 0
        assert "history_limit" in result.output
