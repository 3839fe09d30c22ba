"""Unit tests for hal_walk.cli.main.

Uses Click's test runner (CliRunner).  ``_make_client`` is patched to
return a client wired to the in-process FakeApi, and sessions live in a
temporary directory.
"""
from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner, Result

from hal_walk import __version__
from hal_walk.cli import main as cli_main
from hal_walk.cli.main import cli
from hal_walk.client.http import HalClient

from conftest import FakeApi


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def session_file(tmp_path: Path) -> Path:
    return tmp_path / "walk.json"


@pytest.fixture(autouse=True)
def fake_client(api: FakeApi, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        cli_main, "_make_client", lambda timeout: HalClient(transport=api.transport)
    )


def _invoke(runner: CliRunner, session_file: Path, *args: str) -> Result:
    return runner.invoke(cli, [args[0], "--session", str(session_file), *args[1:]])


def _load(session_file: Path) -> dict:
    return json.loads(session_file.read_text(encoding="utf-8"))


@pytest.fixture()
def started(runner: CliRunner, session_file: Path) -> Path:
    result = _invoke(runner, session_file, "start", "https://api.test/")
    assert result.exit_code == 0, result.output
    return session_file


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


class TestVersion:
    def test_version_command(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert f"hal-walk v{__version__}" in result.output

    def test_version_option(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


# ---------------------------------------------------------------------------
# start
# ---------------------------------------------------------------------------


class TestStart:
    def test_writes_session_file(self, runner: CliRunner, session_file: Path) -> None:
        result = _invoke(runner, session_file, "start", "https://api.test/")
        assert result.exit_code == 0, result.output
        document = _load(session_file)
        assert document["entryPoint"] == "https://api.test"
        assert document["currentPosition"] == "p1"
        assert document["transitions"] == []
        assert document["curies"][0]["name"] == "ex"

    def test_prints_root_document(self, runner: CliRunner, session_file: Path) -> None:
        result = _invoke(runner, session_file, "start", "https://api.test/")
        assert '"Root"' in result.output

    def test_upstream_failure(self, runner: CliRunner, session_file: Path, api: FakeApi) -> None:
        api.add("GET", "/", {"message": "down"}, status=503, content_type="application/json")
        result = _invoke(runner, session_file, "start", "https://api.test/")
        assert result.exit_code == 1
        assert "HTTP 503" in result.output
        assert not session_file.exists()

    def test_session_from_environment(self, runner: CliRunner, session_file: Path) -> None:
        result = runner.invoke(
            cli, ["start", "https://api.test/"], env={"HAL_WALK_SESSION": str(session_file)}
        )
        assert result.exit_code == 0, result.output
        assert session_file.exists()

    def test_session_is_required(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["start", "https://api.test/"], env={"HAL_WALK_SESSION": None})
        assert result.exit_code == 2

    def test_timeout_must_be_positive(self, runner: CliRunner, session_file: Path) -> None:
        result = _invoke(runner, session_file, "start", "--timeout", "0", "https://api.test/")
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# follow
# ---------------------------------------------------------------------------


class TestFollow:
    def test_follow_appends_to_session(self, runner: CliRunner, started: Path) -> None:
        result = _invoke(runner, started, "follow", "next", "--note", "onward")
        assert result.exit_code == 0, result.output
        document = _load(started)
        assert document["currentPosition"] == "p2"
        assert document["transitions"][0]["from"] == "p1"
        assert document["transitions"][0]["note"] == "onward"
        assert '"page"' in result.output

    def test_follow_with_body(self, runner: CliRunner, started: Path, api: FakeApi) -> None:
        api.add("POST", "/items", {"id": 1}, status=201)
        result = _invoke(runner, started, "follow", "ex:create", "--body", '{"title": "x"}')
        assert result.exit_code == 0, result.output
        transition = _load(started)["transitions"][0]
        assert transition["method"] == "POST"
        assert transition["bodySchema"]["required"] == ["title"]

    def test_follow_with_template_values(
        self, runner: CliRunner, started: Path, api: FakeApi
    ) -> None:
        api.add("GET", "/search?q=cats&limit=2", {"results": ["a", "b"]})
        result = _invoke(
            runner,
            started,
            "follow",
            "ex:search",
            "--uri-template-values",
            '{"q": "cats", "limit": "2"}',
        )
        assert result.exit_code == 0, result.output
        assert _load(started)["positions"]["p2"]["url"] == "https://api.test/search?q=cats&limit=2"

    def test_unknown_relation(self, runner: CliRunner, started: Path) -> None:
        result = _invoke(runner, started, "follow", "nope")
        assert result.exit_code == 1
        assert "availableRelations" in result.output
        assert _load(started)["currentPosition"] == "p1"

    def test_validation_failure(self, runner: CliRunner, started: Path) -> None:
        result = _invoke(
            runner,
            started,
            "follow",
            "ex:create",
            "--body",
            '{"title": 1}',
            "--body-schema",
            '{"type": "object", "properties": {"title": {"type": "string"}}}',
        )
        assert result.exit_code == 1
        assert "body validation failed" in result.output
        assert len(_load(started)["positions"]) == 1

    def test_numeric_template_value(self, runner: CliRunner, started: Path, api: FakeApi) -> None:
        result = _invoke(
            runner, started, "follow", "ex:search", "--uri-template-values", '{"limit": 2}'
        )
        assert result.exit_code == 1
        assert "uriTemplateValues validation failed" in result.output
        assert len(api.requests) == 1

    def test_numeric_header_value(self, runner: CliRunner, started: Path) -> None:
        result = _invoke(runner, started, "follow", "next", "--headers", '{"X-Count": 5}')
        assert result.exit_code == 1
        assert "headers validation failed" in result.output
        assert _load(started)["currentPosition"] == "p1"

    def test_invalid_json_option(self, runner: CliRunner, started: Path) -> None:
        result = _invoke(runner, started, "follow", "ex:create", "--body", "{oops")
        assert result.exit_code == 2
        assert "not valid JSON" in result.output

    def test_headers_must_be_an_object(self, runner: CliRunner, started: Path) -> None:
        result = _invoke(runner, started, "follow", "next", "--headers", "[1]")
        assert result.exit_code == 2
        assert "must be a JSON object" in result.output

    def test_missing_session(self, runner: CliRunner, session_file: Path) -> None:
        result = _invoke(runner, session_file, "follow", "next")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_corrupt_session(self, runner: CliRunner, session_file: Path) -> None:
        session_file.write_text("{not json", encoding="utf-8")
        result = _invoke(runner, session_file, "follow", "next")
        assert result.exit_code == 1
        assert "not valid JSON" in result.output


# ---------------------------------------------------------------------------
# position / goto
# ---------------------------------------------------------------------------


class TestPosition:
    def test_prints_current_document(self, runner: CliRunner, started: Path) -> None:
        result = _invoke(runner, started, "position")
        assert result.exit_code == 0, result.output
        assert '"Root"' in result.output

    def test_relations_table(self, runner: CliRunner, started: Path) -> None:
        result = _invoke(runner, started, "position", "--relations")
        assert result.exit_code == 0, result.output
        assert "next" in result.output
        assert "ex:search" in result.output
        assert "deprecated" in result.output


class TestGoto:
    def test_moves_pointer(self, runner: CliRunner, started: Path, api: FakeApi) -> None:
        _invoke(runner, started, "follow", "next")
        count = len(api.requests)
        result = _invoke(runner, started, "goto", "p1")
        assert result.exit_code == 0, result.output
        assert _load(started)["currentPosition"] == "p1"
        assert len(api.requests) == count

    def test_unknown_position(self, runner: CliRunner, started: Path) -> None:
        result = _invoke(runner, started, "goto", "p9")
        assert result.exit_code == 1
        assert "availablePositions" in result.output


# ---------------------------------------------------------------------------
# describe
# ---------------------------------------------------------------------------


class TestDescribe:
    def test_prints_documentation(self, runner: CliRunner, started: Path, api: FakeApi) -> None:
        api.add("GET", "/rels/search", "# Search\n", content_type="text/markdown")
        result = _invoke(runner, started, "describe", "ex:search")
        assert result.exit_code == 0, result.output
        assert "# Search" in result.output

    def test_missing_documentation(self, runner: CliRunner, started: Path) -> None:
        result = _invoke(runner, started, "describe", "ex:missing")
        assert result.exit_code == 1
        assert "404" in result.output


# ---------------------------------------------------------------------------
# render / export
# ---------------------------------------------------------------------------


class TestRender:
    def test_render_to_file(self, runner: CliRunner, started: Path, tmp_path: Path) -> None:
        _invoke(runner, started, "follow", "next")
        output = tmp_path / "walk.mmd"
        result = _invoke(runner, started, "render", "-o", str(output))
        assert result.exit_code == 0, result.output
        diagram = output.read_text(encoding="utf-8")
        assert diagram.startswith("graph LR")
        assert ":::current" in diagram

    def test_render_to_stdout(self, runner: CliRunner, started: Path) -> None:
        result = _invoke(runner, started, "render")
        assert result.exit_code == 0, result.output
        assert "graph LR" in result.output


class TestExport:
    def test_export_json_to_file(self, runner: CliRunner, started: Path, tmp_path: Path) -> None:
        _invoke(runner, started, "follow", "next")
        output = tmp_path / "path.json"
        result = _invoke(runner, started, "export", "-o", str(output))
        assert result.exit_code == 0, result.output
        spec = json.loads(output.read_text(encoding="utf-8"))
        assert spec["entryPoint"] == "https://api.test"
        assert [step["id"] for step in spec["steps"]] == ["step1", "step2"]
        assert spec["steps"][1]["from"] == "step1"

    def test_export_yaml(self, runner: CliRunner, started: Path, tmp_path: Path) -> None:
        _invoke(runner, started, "follow", "next")
        output = tmp_path / "path.yaml"
        result = _invoke(runner, started, "export", "--format", "yaml", "-o", str(output))
        assert result.exit_code == 0, result.output
        spec = yaml.safe_load(output.read_text(encoding="utf-8"))
        assert spec["steps"][1]["relation"] == "next"

    def test_export_between_positions(
        self, runner: CliRunner, started: Path, tmp_path: Path
    ) -> None:
        _invoke(runner, started, "follow", "next")
        _invoke(runner, started, "follow", "up")
        output = tmp_path / "path.json"
        result = _invoke(runner, started, "export", "--from", "p2", "--to", "p3", "-o", str(output))
        assert result.exit_code == 0, result.output
        spec = json.loads(output.read_text(encoding="utf-8"))
        assert spec["description"] == "Path from p2 to p3"
        assert spec["steps"][0]["url"] == "/b"

    def test_unreachable(self, runner: CliRunner, started: Path) -> None:
        _invoke(runner, started, "follow", "next")
        result = _invoke(runner, started, "export", "--from", "p2", "--to", "p1")
        assert result.exit_code == 1
        assert "No path found" in result.output
