"""Tests for the mdlinks CLI (`check` command)."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cli.main import app
from cli.rendering import render_link, render_statistics
from mdlinks.errors import FileAccessError
from mdlinks.links.models import (
    FileFailure,
    LinkRecord,
    RunResult,
    Statistics,
    ValidatedLinkRecord,
)

runner = CliRunner()


@pytest.fixture
def readme(tmp_path):
    path = tmp_path / "README.md"
    path.write_text(
        "[home](https://example.com/home)\n[again](https://example.com/home)\n",
        encoding="utf-8",
    )
    return path


def _validated_result() -> RunResult:
    up = LinkRecord(text="up", href="https://up.example.com/", file="README.md")
    down = LinkRecord(text="down", href="https://down.example.com/", file="README.md")
    links = [
        ValidatedLinkRecord.from_link(up, 200, "ok"),
        ValidatedLinkRecord.from_link(down, ConnectionError("refused"), "fail"),
    ]
    return RunResult(links=links, statistics=Statistics(total=2, unique=2, broken=1))


def test_check_lists_links(readme):
    result = runner.invoke(app, ["check", str(readme)])
    assert result.exit_code == 0
    assert "README.md https://example.com/home home" in result.stdout
    assert "README.md https://example.com/home again" in result.stdout


def test_check_stats(readme):
    result = runner.invoke(app, ["check", str(readme), "--stats"])
    assert result.exit_code == 0
    assert "Total: 2" in result.stdout
    assert "Unique: 1" in result.stdout
    assert "Broken" not in result.stdout


def test_check_json(readme):
    result = runner.invoke(app, ["check", str(readme), "--json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["statistics"] == {"total": 2, "unique": 1, "broken": 0}
    assert payload["links"][0] == {
        "text": "home",
        "href": "https://example.com/home",
        "file": "README.md",
    }


def test_check_no_links(tmp_path):
    (tmp_path / "empty.md").write_text("plain text\n", encoding="utf-8")
    result = runner.invoke(app, ["check", str(tmp_path)])
    assert result.exit_code == 0
    assert "No links found." in result.stdout


def test_check_missing_path(tmp_path):
    result = runner.invoke(app, ["check", str(tmp_path / "missing")])
    assert result.exit_code == 1
    assert "Path not found" in result.output


def test_check_non_markdown(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello", encoding="utf-8")
    result = runner.invoke(app, ["check", str(path)])
    assert result.exit_code == 1
    assert "Not a Markdown file" in result.output


def test_check_validate_reports_broken(readme, monkeypatch):
    calls = {}

    def fake_md_links(path, **kwargs):
        calls.update(kwargs)
        return _validated_result()

    monkeypatch.setattr("cli.main.md_links", fake_md_links)

    result = runner.invoke(
        app, ["check", str(readme), "--validate", "--concurrency", "4", "--timeout", "2.5"]
    )

    assert result.exit_code == 1
    assert "https://up.example.com/ ok 200 up" in result.stdout
    assert "https://down.example.com/ fail ConnectionError down" in result.stdout
    assert calls["validate"] is True
    assert calls["max_concurrency"] == 4
    assert calls["request_timeout"] == 2.5


def test_check_validate_stats(readme, monkeypatch):
    monkeypatch.setattr("cli.main.md_links", lambda path, **kwargs: _validated_result())
    result = runner.invoke(app, ["check", str(readme), "--validate", "--stats"])
    assert "Broken: 1" in result.stdout


def test_check_continue_on_error_echoes_failures(readme, monkeypatch):
    failure = FileFailure(
        file="/docs/locked.md",
        error=FileAccessError(Path("/docs/locked.md"), PermissionError("denied")),
    )
    captured = {}

    def fake_md_links(path, **kwargs):
        captured.update(kwargs)
        return RunResult(failures=[failure])

    monkeypatch.setattr("cli.main.md_links", fake_md_links)

    result = runner.invoke(app, ["check", str(readme), "--continue-on-error"])

    assert result.exit_code == 0
    assert "Skipped /docs/locked.md: denied" in result.output
    assert captured["policy"].value == "continue"


class TestRendering:
    def test_unvalidated_link_without_text(self):
        link = LinkRecord(text="", href="https://example.com/", file="a.md")
        assert render_link(link) == "a.md https://example.com/"

    def test_statistics_with_broken(self):
        text = render_statistics(Statistics(3, 2, 1), include_broken=True)
        assert text.splitlines() == ["Total: 3", "Unique: 2", "Broken: 1"]


def test_check_rejects_zero_timeout(readme, monkeypatch):
    monkeypatch.setattr("cli.main.md_links", lambda path, **kwargs: _validated_result())
    result = runner.invoke(app, ["check", str(readme), "--validate", "--timeout", "0"])
    assert result.exit_code == 2
